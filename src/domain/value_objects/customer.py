"""
Customer value object.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.exceptions.validation_error import FieldError, ValidationError


@dataclass(frozen=True)
class Customer:
    """Customer contact details for proposal delivery."""

    name: str
    email: str
    phone: str
    address: Optional[str] = None

    def __post_init__(self):
        """Validate customer fields."""
        errors = []
        if not self.name or not self.name.strip():
            errors.append(FieldError("customer.name", "Customer name is required"))
        if not self.email or "@" not in self.email:
            errors.append(FieldError("customer.email", "A valid email is required"))
        if not self.phone or not self.phone.strip():
            errors.append(FieldError("customer.phone", "Customer phone is required"))
        if errors:
            raise ValidationError("Invalid customer", errors)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "name": self.name,
            "email": self.email,
            "phone": self.phone,
            "address": self.address,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "Customer":
        """Build from a dictionary produced by ``to_dict``."""
        return cls(
            name=data["name"],
            email=data["email"],
            phone=data["phone"],
            address=data.get("address"),
        )
