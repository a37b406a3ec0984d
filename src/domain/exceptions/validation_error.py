"""
Validation-related domain exceptions.
"""

from dataclasses import dataclass
from typing import List, Optional


@dataclass(frozen=True)
class FieldError:
    """A single field-level validation failure."""

    field: str
    message: str

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"field": self.field, "message": self.message}


class ValidationError(Exception):
    """Base exception for validation errors.

    Carries the list of offending fields so callers can correct their input.
    """

    def __init__(self, message: str, errors: Optional[List[FieldError]] = None):
        self.message = message
        self.errors = list(errors or [])
        super().__init__(message)

    @classmethod
    def for_field(cls, field_name: str, message: str) -> "ValidationError":
        """Build an error for a single field."""
        return cls(message, [FieldError(field_name, message)])
