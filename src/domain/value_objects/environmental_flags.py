"""
Environmental flags value object.
"""

from dataclasses import dataclass, field
from typing import Tuple


@dataclass(frozen=True)
class EnvironmentalFlags:
    """Site hazards that add independent surcharges."""

    building_proximity: bool = False
    utility_lines: bool = False
    wetlands: bool = False
    restrictions: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def has_hazards(self) -> bool:
        """Check if any surcharge-bearing flag is set."""
        return self.building_proximity or self.utility_lines or self.wetlands

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "building_proximity": self.building_proximity,
            "utility_lines": self.utility_lines,
            "wetlands": self.wetlands,
            "restrictions": list(self.restrictions),
        }
