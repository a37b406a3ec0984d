"""
Site condition value objects.
"""

from enum import Enum


class VegetationDensity(str, Enum):
    """Estimated vegetation density on the parcel."""

    LIGHT = "light"
    MODERATE = "moderate"
    HEAVY = "heavy"
    EXTREME = "extreme"


class TerrainType(str, Enum):
    """Terrain classification, listed from cheapest to most expensive to work."""

    FLAT = "flat"
    ROLLING = "rolling"
    MIXED = "mixed"
    STEEP = "steep"


class PropertyType(str, Enum):
    """Property usage classification."""

    RESIDENTIAL = "residential"
    COMMERCIAL = "commercial"
    AGRICULTURAL = "agricultural"
    INDUSTRIAL = "industrial"


class AccessRisk(str, Enum):
    """Equipment access risk reported by the location verifier."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"
