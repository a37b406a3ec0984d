"""
Adjustment calculator for terrain, accessibility, environmental and risk factors.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.application.interfaces.providers import RiskProfile
from src.domain.value_objects.environmental_flags import EnvironmentalFlags
from src.domain.value_objects.money import ZERO, to_decimal, to_money
from src.domain.value_objects.pricing_table import PricingTable
from src.domain.value_objects.site_conditions import AccessRisk, TerrainType


@dataclass(frozen=True)
class Adjustments:
    """Adjustment deltas added on top of the property-adjusted price."""

    complexity: Decimal
    accessibility: Decimal
    environmental: Decimal
    risk: Decimal

    @property
    def total(self) -> Decimal:
        """Sum of all adjustment categories."""
        return self.complexity + self.accessibility + self.environmental + self.risk


class AdjustmentCalculator:
    """Computes every adjustment as a delta on the property-adjusted price.

    Environmental and risk surcharges stack additively; nothing compounds.
    """

    def __init__(self, pricing_table: PricingTable):
        self.pricing_table = pricing_table

    def calculate(
        self,
        adjusted_price: Decimal,
        terrain: TerrainType,
        accessibility_rating: int,
        environmental: EnvironmentalFlags,
        risk_profile: Optional[RiskProfile] = None,
    ) -> Adjustments:
        """Compute all adjustment categories."""
        return Adjustments(
            complexity=self.terrain_adjustment(adjusted_price, terrain),
            accessibility=self.accessibility_adjustment(adjusted_price, accessibility_rating),
            environmental=self.environmental_adjustment(adjusted_price, environmental),
            risk=self.risk_adjustment(adjusted_price, risk_profile),
        )

    def terrain_adjustment(self, adjusted_price: Decimal, terrain: TerrainType) -> Decimal:
        multiplier = self.pricing_table.terrain_multiplier(terrain)
        return to_money(adjusted_price * (multiplier - 1))

    def accessibility_adjustment(self, adjusted_price: Decimal, rating: int) -> Decimal:
        """Step function: surcharge below 5, discount above 8, neutral 5-8."""
        table = self.pricing_table
        if rating < table.poor_access_threshold:
            return to_money(adjusted_price * table.poor_access_surcharge)
        if rating > table.excellent_access_threshold:
            return to_money(-adjusted_price * table.excellent_access_discount)
        return ZERO

    def environmental_adjustment(
        self, adjusted_price: Decimal, environmental: EnvironmentalFlags
    ) -> Decimal:
        surcharges = self.pricing_table.environmental_surcharges
        total = ZERO
        for flag in ("building_proximity", "utility_lines", "wetlands"):
            if getattr(environmental, flag):
                total += to_money(adjusted_price * surcharges[flag])
        return total

    def risk_adjustment(
        self, adjusted_price: Decimal, risk_profile: Optional[RiskProfile]
    ) -> Decimal:
        if risk_profile is None:
            return ZERO

        table = self.pricing_table
        total = ZERO
        if risk_profile.access_risk == AccessRisk.HIGH:
            total += to_money(adjusted_price * table.high_access_risk_surcharge)
        if to_decimal(risk_profile.weather_vulnerability) > table.weather_vulnerability_threshold:
            total += to_money(adjusted_price * table.weather_vulnerability_surcharge)
        return total
