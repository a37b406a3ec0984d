"""
Proposal line item value object.
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional

from src.domain.exceptions.validation_error import FieldError, ValidationError
from src.domain.value_objects.money import to_decimal, to_money


HALF_CENT = Decimal("0.005")


def _rounding_slack(quantity: Decimal) -> Decimal:
    # Half a cent per unit from the rounded rate, half a cent from the total
    return quantity * HALF_CENT + HALF_CENT


@dataclass(frozen=True)
class LineItem:
    """One row of a proposal breakdown.

    ``total`` defaults to ``quantity * rate`` rounded to cents. An explicit
    total may only differ from that product by the rounding of ``rate``
    to cents.
    """

    service_id: str
    service_name: str
    quantity: Decimal
    rate: Decimal
    description: str = ""
    total: Optional[Decimal] = None

    def __post_init__(self):
        """Normalize amounts and validate."""
        quantity = to_decimal(self.quantity)
        rate = to_money(self.rate)
        total = None if self.total is None else to_money(self.total)
        errors = []
        if not self.service_name or not self.service_name.strip():
            errors.append(FieldError("service_name", "Service name is required"))
        if quantity <= 0:
            errors.append(FieldError("quantity", "Quantity must be positive"))
        if rate < 0:
            errors.append(FieldError("rate", "Rate cannot be negative"))
        if total is not None:
            if total < 0:
                errors.append(FieldError("total", "Total cannot be negative"))
            elif quantity > 0 and abs(total - quantity * rate) > _rounding_slack(quantity):
                errors.append(FieldError("total", "Total must equal quantity times rate"))
        if errors:
            raise ValidationError("Invalid line item", errors)

        if total is None:
            total = to_money(quantity * rate)
        object.__setattr__(self, "quantity", quantity)
        object.__setattr__(self, "rate", rate)
        object.__setattr__(self, "total", total)

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {
            "service_id": self.service_id,
            "service_name": self.service_name,
            "description": self.description,
            "quantity": str(self.quantity),
            "rate": str(self.rate),
            "total": str(self.total),
        }

    @classmethod
    def from_dict(cls, data: dict) -> "LineItem":
        """Build from a dictionary produced by ``to_dict``."""
        return cls(
            service_id=data["service_id"],
            service_name=data["service_name"],
            description=data.get("description", ""),
            quantity=Decimal(data["quantity"]),
            rate=Decimal(data["rate"]),
            total=Decimal(data["total"]),
        )
