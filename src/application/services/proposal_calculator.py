"""
Proposal totals and line-item derivation.
"""

from decimal import Decimal
from typing import List, Sequence

from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.money import ZERO, to_decimal, to_money
from src.domain.value_objects.priced_quote import PricedQuote
from src.domain.value_objects.proposal_details import CustomService, ProposalTotals


class ProposalCalculator:
    """Derives subtotal, tax, total, deposit and balance from line items.

    Every amount is rounded to cents before it is combined, so
    ``subtotal + tax == total`` and ``deposit + balance == total`` hold exactly.
    """

    def __init__(
        self,
        tax_rate: Decimal = Decimal("0.07"),
        deposit_rate: Decimal = Decimal("0.20"),
    ):
        self.tax_rate = to_decimal(tax_rate)
        self.deposit_rate = to_decimal(deposit_rate)
        for name, rate in (("tax_rate", self.tax_rate), ("deposit_rate", self.deposit_rate)):
            if not Decimal("0") <= rate <= Decimal("1"):
                raise ValueError(f"{name} must be between 0 and 1")

    def calculate(self, breakdown: Sequence[LineItem]) -> ProposalTotals:
        """Compute proposal totals from a breakdown.

        Raises:
            ValidationError: If the breakdown is empty
        """
        if not breakdown:
            raise ValidationError.for_field(
                "breakdown", "At least one line item is required"
            )

        subtotal = sum((item.total for item in breakdown), ZERO)
        tax = to_money(subtotal * self.tax_rate)
        total = subtotal + tax
        deposit_amount = to_money(total * self.deposit_rate)

        return ProposalTotals(
            subtotal=subtotal,
            tax=tax,
            total=total,
            deposit_amount=deposit_amount,
            balance=total - deposit_amount,
            tax_rate=self.tax_rate,
            deposit_rate=self.deposit_rate,
        )

    def custom_service_items(self, services: Sequence[CustomService]) -> List[LineItem]:
        """Turn operator-entered custom services into line items."""
        return [
            LineItem(
                service_id=f"custom-{index}",
                service_name=service.name,
                description=service.description,
                quantity=service.quantity,
                rate=service.rate,
            )
            for index, service in enumerate(services, start=1)
        ]

    def line_items_from_quote(self, quote: PricedQuote) -> List[LineItem]:
        """Break a priced quote into proposal line items summing to its final price."""
        service = quote.service
        totals = quote.totals

        items = [
            LineItem(
                service_id=service.service_type.value,
                service_name=service.service_type.display_name,
                description=f"{service.description} ({service.quantity} {service.unit})",
                quantity=service.quantity,
                rate=to_money(totals.subtotal / service.quantity),
                total=totals.subtotal,
            )
        ]

        if totals.urgency_adjustment > 0:
            items.append(
                LineItem(
                    service_id="urgency",
                    service_name="Expedited Scheduling",
                    description="Urgency surcharge",
                    quantity=Decimal("1"),
                    rate=totals.urgency_adjustment,
                )
            )

        transportation = quote.transportation
        if transportation.charge > 0:
            items.append(
                LineItem(
                    service_id="transportation",
                    service_name="Equipment Transportation",
                    description=transportation.description,
                    quantity=Decimal(transportation.billable_hours),
                    rate=transportation.hourly_rate,
                    total=transportation.charge,
                )
            )

        return items
