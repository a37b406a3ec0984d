"""
Base service pricing from the pricing table.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.value_objects.money import to_money
from src.domain.value_objects.pricing_table import PricingTable, ServiceRate
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import PropertyType, VegetationDensity


@dataclass(frozen=True)
class BasePricing:
    """Base and property-adjusted price of a service."""

    service_type: ServiceType
    service_rate: ServiceRate
    density_multiplier: Decimal
    property_type_multiplier: Decimal
    base_price: Decimal
    adjusted_price: Decimal


class ServicePricer:
    """Computes ``base_rate * acreage * density`` and the property-type adjustment."""

    def __init__(self, pricing_table: PricingTable):
        self.pricing_table = pricing_table

    def price(
        self,
        service_type: ServiceType,
        acreage: Decimal,
        density: VegetationDensity,
        property_type: PropertyType,
    ) -> BasePricing:
        """Price a service before adjustments."""
        service_rate = self.pricing_table.service_rate(service_type)
        density_multiplier = self.pricing_table.density_multiplier(service_type, density)
        property_multiplier = self.pricing_table.property_multiplier(property_type)

        base_price = to_money(service_rate.base_rate * acreage * density_multiplier)
        adjusted_price = to_money(base_price * property_multiplier)

        return BasePricing(
            service_type=ServiceType(service_type),
            service_rate=service_rate,
            density_multiplier=density_multiplier,
            property_type_multiplier=property_multiplier,
            base_price=base_price,
            adjusted_price=adjusted_price,
        )
