"""
Quote request value objects.
"""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from typing import Optional

from src.domain.exceptions.validation_error import FieldError, ValidationError
from src.domain.value_objects.environmental_flags import EnvironmentalFlags
from src.domain.value_objects.location import LocationReference
from src.domain.value_objects.money import to_decimal
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import (
    PropertyType,
    TerrainType,
    VegetationDensity,
)
from src.domain.value_objects.urgency_level import UrgencyLevel

MIN_ACREAGE = Decimal("0.1")
MAX_ACREAGE = Decimal("1000")
MIN_ACCESSIBILITY = 1
MAX_ACCESSIBILITY = 10


@dataclass(frozen=True)
class QuoteOptions:
    """Which optional sections of a quote are computed."""

    include_detailed_breakdown: bool = True
    include_alternatives: bool = True
    include_seasonal_pricing: bool = False
    include_financing: bool = False


@dataclass(frozen=True)
class QuoteDefaults:
    """Every optional quote input together with its default value."""

    terrain: TerrainType = TerrainType.ROLLING
    accessibility_rating: int = 7
    property_type: PropertyType = PropertyType.RESIDENTIAL
    environmental: EnvironmentalFlags = field(default_factory=EnvironmentalFlags)
    urgency: UrgencyLevel = UrgencyLevel.STANDARD
    seasonal_constraints: bool = False
    options: QuoteOptions = field(default_factory=QuoteOptions)


QUOTE_DEFAULTS = QuoteDefaults()


@dataclass(frozen=True)
class QuoteRequest:
    """Raw project inputs for pricing a land-clearing job."""

    location: LocationReference
    service_type: ServiceType
    acreage: Decimal
    density: VegetationDensity
    terrain: TerrainType = QUOTE_DEFAULTS.terrain
    accessibility_rating: int = QUOTE_DEFAULTS.accessibility_rating
    property_type: PropertyType = QUOTE_DEFAULTS.property_type
    environmental: EnvironmentalFlags = field(
        default_factory=lambda: QUOTE_DEFAULTS.environmental
    )
    urgency: UrgencyLevel = QUOTE_DEFAULTS.urgency
    seasonal_constraints: bool = QUOTE_DEFAULTS.seasonal_constraints
    options: QuoteOptions = field(default_factory=lambda: QUOTE_DEFAULTS.options)
    preferred_start_date: Optional[date] = None

    def __post_init__(self):
        """Range-check inputs before any pricing happens."""
        errors = []

        try:
            acreage = to_decimal(self.acreage)
        except (ArithmeticError, ValueError):
            acreage = None
            errors.append(FieldError("acreage", "Acreage must be a number"))
        if acreage is not None:
            if not MIN_ACREAGE <= acreage <= MAX_ACREAGE:
                errors.append(
                    FieldError(
                        "acreage",
                        f"Acreage must be between {MIN_ACREAGE} and {MAX_ACREAGE}",
                    )
                )
            object.__setattr__(self, "acreage", acreage)

        rating = self.accessibility_rating
        if isinstance(rating, bool) or not isinstance(rating, int):
            errors.append(
                FieldError("accessibility_rating", "Accessibility rating must be an integer")
            )
        elif not MIN_ACCESSIBILITY <= rating <= MAX_ACCESSIBILITY:
            errors.append(
                FieldError(
                    "accessibility_rating",
                    f"Accessibility rating must be between {MIN_ACCESSIBILITY} "
                    f"and {MAX_ACCESSIBILITY}",
                )
            )

        if errors:
            raise ValidationError("Invalid quote request", errors)
