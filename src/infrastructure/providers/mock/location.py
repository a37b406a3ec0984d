"""
Mock location verifier for testing and development.
"""

import hashlib
from typing import Iterable

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    MarketProfile,
    RiskProfile,
    VerifiedLocation,
)
from src.config.logging import get_logger
from src.domain.exceptions.location_error import LocationUnresolvedError
from src.domain.value_objects.location import Coordinates, LocationReference
from src.infrastructure.providers.geo import METERS_PER_MILE, haversine_miles

logger = get_logger(__name__)

# Max offset from the yard for addresses and place ids, in degrees
MAX_OFFSET_DEGREES = 0.4


class MockLocationVerifier(LocationVerifierInterface):
    """Resolves locations without network access.

    Coordinates are used as given; addresses and place ids map to a stable
    point near the yard derived from their text. Travel time assumes a
    constant average speed.
    """

    def __init__(
        self,
        base: Coordinates,
        service_radius_miles: float = 60.0,
        average_speed_mph: float = 45.0,
        unresolvable: Iterable[str] = (),
    ):
        self.base = base
        self.service_radius_miles = service_radius_miles
        self.average_speed_mph = average_speed_mph
        self.unresolvable = set(unresolvable)

    @property
    def name(self) -> str:
        return "Mock Location"

    async def verify(self, reference: LocationReference) -> VerifiedLocation:
        """Resolve a location deterministically."""
        description = reference.describe()
        if description in self.unresolvable:
            raise LocationUnresolvedError(description, "no match found")

        coordinates = reference.coordinates or self._pseudo_coordinates(description)
        miles = haversine_miles(self.base, coordinates)
        within_service_area = miles <= self.service_radius_miles

        logger.debug(
            "Mock location resolved",
            reference=description,
            miles=round(miles, 1),
            within_service_area=within_service_area,
        )

        return VerifiedLocation(
            address=reference.address or f"{coordinates.lat:.5f}, {coordinates.lng:.5f}",
            coordinates=coordinates,
            duration_seconds=round(miles / self.average_speed_mph * 3600),
            distance_meters=round(miles * METERS_PER_MILE),
            verified=True,
            within_service_area=within_service_area,
            risk_profile=RiskProfile(
                liability_factors=(
                    [] if within_service_area else ["Outside primary service area"]
                ),
            ),
            market_profile=MarketProfile(),
        )

    def _pseudo_coordinates(self, text: str) -> Coordinates:
        digest = hashlib.sha256(text.lower().encode("utf-8")).digest()
        lat_offset = (digest[0] / 255 - 0.5) * 2 * MAX_OFFSET_DEGREES
        lng_offset = (digest[1] / 255 - 0.5) * 2 * MAX_OFFSET_DEGREES
        return Coordinates(
            lat=round(self.base.lat + lat_offset, 6),
            lng=round(self.base.lng + lng_offset, 6),
        )
