"""
Location reference value objects.
"""

from dataclasses import dataclass
from typing import Optional

from src.domain.exceptions.validation_error import FieldError, ValidationError


@dataclass(frozen=True)
class Coordinates:
    """A latitude/longitude pair."""

    lat: float
    lng: float

    def __post_init__(self):
        """Validate coordinate bounds."""
        errors = []
        if not -90 <= self.lat <= 90:
            errors.append(FieldError("coordinates.lat", "Latitude must be between -90 and 90"))
        if not -180 <= self.lng <= 180:
            errors.append(
                FieldError("coordinates.lng", "Longitude must be between -180 and 180")
            )
        if errors:
            raise ValidationError("Invalid coordinates", errors)

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {"lat": self.lat, "lng": self.lng}


@dataclass(frozen=True)
class LocationReference:
    """How the customer identified the job site.

    Exactly one of address, coordinates or place id must be given.
    """

    address: Optional[str] = None
    coordinates: Optional[Coordinates] = None
    place_id: Optional[str] = None

    def __post_init__(self):
        """Require exactly one resolution path."""
        provided = [
            value
            for value in (self.address, self.coordinates, self.place_id)
            if value not in (None, "")
        ]
        if len(provided) != 1:
            raise ValidationError.for_field(
                "location",
                "Exactly one of address, coordinates or place_id must be provided",
            )
        if self.address and len(self.address.strip()) < 5:
            raise ValidationError.for_field(
                "address", "Address must be at least 5 characters"
            )

    @property
    def kind(self) -> str:
        """Which resolution path this reference uses."""
        if self.address:
            return "address"
        if self.coordinates:
            return "coordinates"
        return "place_id"

    def describe(self) -> str:
        """Get a short human-readable form for logs and errors."""
        if self.address:
            return self.address
        if self.coordinates:
            return f"{self.coordinates.lat},{self.coordinates.lng}"
        return f"place:{self.place_id}"
