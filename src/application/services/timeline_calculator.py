"""
Timeline and urgency calculator.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.domain.value_objects.money import to_money
from src.domain.value_objects.pricing_table import PricingTable
from src.domain.value_objects.urgency_level import UrgencyLevel


@dataclass(frozen=True)
class TimelineAdjustment:
    """Urgency multiplier and the informational seasonal discount."""

    urgency_multiplier: Decimal
    seasonal_discount: Decimal

    def urgency_delta(self, subtotal: Decimal) -> Decimal:
        """Urgency surcharge applied once to the adjusted subtotal."""
        return to_money(subtotal * (self.urgency_multiplier - 1))


class TimelineCalculator:
    """Looks up urgency and seasonal factors."""

    def __init__(self, pricing_table: PricingTable):
        self.pricing_table = pricing_table

    def calculate(
        self, urgency: UrgencyLevel, seasonal_constraints: bool = False
    ) -> TimelineAdjustment:
        """Compute the timeline adjustment for a request."""
        seasonal_discount = (
            self.pricing_table.seasonal_constraint_discount
            if seasonal_constraints
            else Decimal("1.0")
        )
        return TimelineAdjustment(
            urgency_multiplier=self.pricing_table.urgency_multiplier(urgency),
            seasonal_discount=seasonal_discount,
        )
