"""
Urgency level value object.
"""

from enum import Enum


class UrgencyLevel(str, Enum):
    """How soon the customer needs the work started."""

    STANDARD = "standard"
    PRIORITY = "priority"
    EMERGENCY = "emergency"

    def is_expedited(self) -> bool:
        """Check if the urgency carries a surcharge."""
        return self != self.STANDARD
