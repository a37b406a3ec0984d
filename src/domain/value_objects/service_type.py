"""
Service type value object.
"""

from enum import Enum


class ServiceType(str, Enum):
    """Land-clearing service offering."""

    FORESTRY_MULCHING = "forestry-mulching"
    LAND_CLEARING = "land-clearing"
    STUMP_GRINDING = "stump-grinding"
    BRUSH_CLEARING = "brush-clearing"

    @property
    def display_name(self) -> str:
        """Get human-readable display name."""
        return self.value.replace("-", " ").title()

    @property
    def is_area_based(self) -> bool:
        """Check if the service is priced by the acre."""
        return self != self.STUMP_GRINDING
