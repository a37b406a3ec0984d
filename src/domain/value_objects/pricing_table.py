"""
Service pricing table value object.

The table is passed to the pricing calculators rather than read from module
state, so alternate or versioned tables can be swapped in per assembler.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, Mapping

from src.domain.exceptions.pricing_error import UnknownEnumError
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import (
    PropertyType,
    TerrainType,
    VegetationDensity,
)
from src.domain.value_objects.urgency_level import UrgencyLevel


@dataclass(frozen=True)
class ServiceRate:
    """Base rate and density multipliers for one service type."""

    base_rate: Decimal
    unit: str
    description: str
    density_multipliers: Mapping[VegetationDensity, Decimal]


def _lookup(table: str, mapping: Mapping[Any, Any], key: Any, enum_cls) -> Any:
    """Fetch ``mapping[key]`` or fail closed with ``UnknownEnumError``."""
    try:
        member = key if isinstance(key, enum_cls) else enum_cls(key)
    except ValueError:
        raise UnknownEnumError(table, key)
    if member not in mapping:
        raise UnknownEnumError(table, member.value)
    return mapping[member]


@dataclass(frozen=True)
class PricingTable:
    """Rates, multipliers and surcharge percentages used to price a quote."""

    services: Mapping[ServiceType, ServiceRate]
    property_multipliers: Mapping[PropertyType, Decimal]
    terrain_multipliers: Mapping[TerrainType, Decimal]
    urgency_multipliers: Mapping[UrgencyLevel, Decimal]
    transport_hourly_rate: Decimal = Decimal("350")
    poor_access_threshold: int = 5
    poor_access_surcharge: Decimal = Decimal("0.15")
    excellent_access_threshold: int = 8
    excellent_access_discount: Decimal = Decimal("0.05")
    environmental_surcharges: Mapping[str, Decimal] = field(
        default_factory=lambda: {
            "building_proximity": Decimal("0.10"),
            "utility_lines": Decimal("0.15"),
            "wetlands": Decimal("0.20"),
        }
    )
    high_access_risk_surcharge: Decimal = Decimal("0.10")
    weather_vulnerability_threshold: Decimal = Decimal("7")
    weather_vulnerability_surcharge: Decimal = Decimal("0.05")
    seasonal_constraint_discount: Decimal = Decimal("0.95")
    version: str = "reference"

    def service_rate(self, service_type: ServiceType) -> ServiceRate:
        """Get the rate entry for a service type."""
        return _lookup("service_type", self.services, service_type, ServiceType)

    def density_multiplier(
        self, service_type: ServiceType, density: VegetationDensity
    ) -> Decimal:
        """Get the density multiplier for a service type."""
        rate = self.service_rate(service_type)
        return _lookup("density", rate.density_multipliers, density, VegetationDensity)

    def property_multiplier(self, property_type: PropertyType) -> Decimal:
        """Get the property-type multiplier."""
        return _lookup(
            "property_type", self.property_multipliers, property_type, PropertyType
        )

    def terrain_multiplier(self, terrain: TerrainType) -> Decimal:
        """Get the terrain multiplier."""
        return _lookup("terrain", self.terrain_multipliers, terrain, TerrainType)

    def urgency_multiplier(self, urgency: UrgencyLevel) -> Decimal:
        """Get the urgency multiplier."""
        return _lookup("urgency", self.urgency_multipliers, urgency, UrgencyLevel)

    @classmethod
    def reference(cls, transport_hourly_rate: Decimal = Decimal("350")) -> "PricingTable":
        """Build the reference pricing table."""
        return cls(
            services=_reference_services(),
            property_multipliers={
                PropertyType.RESIDENTIAL: Decimal("1.1"),
                PropertyType.COMMERCIAL: Decimal("1.0"),
                PropertyType.AGRICULTURAL: Decimal("0.85"),
                PropertyType.INDUSTRIAL: Decimal("1.15"),
            },
            terrain_multipliers={
                TerrainType.FLAT: Decimal("0.9"),
                TerrainType.ROLLING: Decimal("1.0"),
                TerrainType.MIXED: Decimal("1.1"),
                TerrainType.STEEP: Decimal("1.3"),
            },
            urgency_multipliers={
                UrgencyLevel.STANDARD: Decimal("1.0"),
                UrgencyLevel.PRIORITY: Decimal("1.25"),
                UrgencyLevel.EMERGENCY: Decimal("1.5"),
            },
            transport_hourly_rate=transport_hourly_rate,
        )


def _density(light: str, moderate: str, heavy: str, extreme: str) -> Dict[VegetationDensity, Decimal]:
    return {
        VegetationDensity.LIGHT: Decimal(light),
        VegetationDensity.MODERATE: Decimal(moderate),
        VegetationDensity.HEAVY: Decimal(heavy),
        VegetationDensity.EXTREME: Decimal(extreme),
    }


def _reference_services() -> Dict[ServiceType, ServiceRate]:
    return {
        ServiceType.FORESTRY_MULCHING: ServiceRate(
            base_rate=Decimal("2800"),
            unit="per acre",
            description="Forestry mulching and brush clearing",
            density_multipliers=_density("0.8", "1.0", "1.4", "1.9"),
        ),
        ServiceType.LAND_CLEARING: ServiceRate(
            base_rate=Decimal("3200"),
            unit="per acre",
            description="Complete land clearing and site preparation",
            density_multipliers=_density("0.7", "1.0", "1.5", "2.2"),
        ),
        ServiceType.STUMP_GRINDING: ServiceRate(
            base_rate=Decimal("150"),
            unit="per stump",
            description="Stump grinding and removal",
            density_multipliers=_density("1.0", "1.2", "1.5", "2.0"),
        ),
        ServiceType.BRUSH_CLEARING: ServiceRate(
            base_rate=Decimal("1800"),
            unit="per acre",
            description="Brush and undergrowth clearing",
            density_multipliers=_density("0.6", "1.0", "1.3", "1.8"),
        ),
    }
