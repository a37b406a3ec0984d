"""
Distance/transport cost model.
"""

from decimal import ROUND_CEILING, Decimal

from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.money import Number, to_decimal, to_money
from src.domain.value_objects.priced_quote import TransportationDetails

MINUTES_PER_HOUR = Decimal("60")


def _ceil_hours(minutes: Decimal) -> int:
    return int((minutes / MINUTES_PER_HOUR).to_integral_value(rounding=ROUND_CEILING))


class TransportCostModel:
    """Bills crew travel as whole round-trip hours at a fixed hourly rate."""

    def __init__(self, hourly_rate: Number = Decimal("350")):
        self.hourly_rate = to_money(hourly_rate)

    def calculate(self, one_way_minutes: Number) -> TransportationDetails:
        """Price the round trip for a one-way travel time in minutes.

        A zero-minute trip is billed nothing; negative durations are rejected.
        """
        minutes = to_decimal(one_way_minutes)
        if minutes < 0:
            raise ValidationError.for_field(
                "travel_minutes", "Travel time cannot be negative"
            )

        round_trip_minutes = minutes * 2
        billable_hours = _ceil_hours(round_trip_minutes)
        charge = to_money(self.hourly_rate * billable_hours)

        return TransportationDetails(
            one_way_minutes=minutes,
            round_trip_minutes=round_trip_minutes,
            billable_hours=billable_hours,
            hourly_rate=self.hourly_rate,
            charge=charge,
            description=(
                f"{_ceil_hours(minutes)}h each way = {billable_hours}h total "
                f"@ ${self.hourly_rate:,.0f}/hr"
            ),
        )

    def from_seconds(self, one_way_seconds: Number) -> TransportationDetails:
        """Price the round trip for a one-way travel time in seconds."""
        return self.calculate(to_decimal(one_way_seconds) / MINUTES_PER_HOUR)
