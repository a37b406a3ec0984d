"""
Proposal detail value objects: frozen inputs, computed totals and assets.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from typing import Optional, Tuple

from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.money import to_decimal, to_money


@dataclass(frozen=True)
class CustomService:
    """An ad-hoc service typed in by the operator."""

    name: str
    description: str
    quantity: Decimal
    rate: Decimal

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {
            "name": self.name,
            "description": self.description,
            "quantity": str(self.quantity),
            "rate": str(self.rate),
        }


@dataclass(frozen=True)
class ProposalInputs:
    """The inputs that produced a proposal, frozen at creation."""

    acreage: Decimal
    package_id: str
    address: str
    selected_services: Tuple[str, ...] = field(default_factory=tuple)
    obstacles: Tuple[str, ...] = field(default_factory=tuple)
    custom_services: Tuple[CustomService, ...] = field(default_factory=tuple)
    notes: Optional[str] = None

    def __post_init__(self):
        """Validate inputs."""
        acreage = to_decimal(self.acreage)
        if acreage <= 0:
            raise ValidationError.for_field("inputs.acreage", "Acreage must be positive")
        if not self.address or not self.address.strip():
            raise ValidationError.for_field("inputs.address", "Address is required")
        object.__setattr__(self, "acreage", acreage)

    def to_dict(self) -> dict:
        """Convert to a JSON-safe dictionary."""
        return {
            "acreage": str(self.acreage),
            "package_id": self.package_id,
            "address": self.address,
            "selected_services": list(self.selected_services),
            "obstacles": list(self.obstacles),
            "custom_services": [service.to_dict() for service in self.custom_services],
            "notes": self.notes,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "ProposalInputs":
        """Build from a dictionary produced by ``to_dict``."""
        return cls(
            acreage=Decimal(data["acreage"]),
            package_id=data["package_id"],
            address=data["address"],
            selected_services=tuple(data.get("selected_services", [])),
            obstacles=tuple(data.get("obstacles", [])),
            custom_services=tuple(
                CustomService(
                    name=item["name"],
                    description=item.get("description", ""),
                    quantity=Decimal(item["quantity"]),
                    rate=Decimal(item["rate"]),
                )
                for item in data.get("custom_services", [])
            ),
            notes=data.get("notes"),
        )


@dataclass(frozen=True)
class ProposalTotals:
    """Computed money fields of a proposal.

    ``subtotal + tax == total`` and ``deposit_amount + balance == total``.
    """

    subtotal: Decimal
    tax: Decimal
    total: Decimal
    deposit_amount: Decimal
    balance: Decimal
    tax_rate: Decimal
    deposit_rate: Decimal

    def __post_init__(self):
        """Round to cents and check the totals add up."""
        for name in ("subtotal", "tax", "total", "deposit_amount", "balance"):
            object.__setattr__(self, name, to_money(getattr(self, name)))
        if self.subtotal + self.tax != self.total:
            raise ValueError("subtotal + tax must equal total")
        if self.deposit_amount + self.balance != self.total:
            raise ValueError("deposit_amount + balance must equal total")

    @property
    def deposit_required(self) -> bool:
        """Check if an upfront deposit is owed."""
        return self.deposit_amount > 0


@dataclass(frozen=True)
class ProposalAssets:
    """Rendered document and customer-facing link references."""

    pdf_path: Optional[str] = None
    pdf_version: int = 1
    web_url: Optional[str] = None
