"""
Google Maps location verifier implementation.
"""

from typing import Any, Dict, Optional, Tuple

import httpx
import structlog

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    MarketProfile,
    RiskProfile,
    VerifiedLocation,
)
from src.domain.exceptions.location_error import LocationUnresolvedError
from src.domain.exceptions.provider_error import (
    ProviderAPIError,
    ProviderConfigurationError,
)
from src.domain.value_objects.location import Coordinates, LocationReference
from src.domain.value_objects.site_conditions import AccessRisk
from src.infrastructure.external.http_client import HTTPClient
from src.infrastructure.providers.geo import METERS_PER_MILE

logger = structlog.get_logger()


class GoogleMapsLocationVerifier(LocationVerifierInterface):
    """Geocodes the job site and measures driving time from the yard."""

    def __init__(
        self,
        api_key: Optional[str],
        base: Coordinates,
        service_radius_miles: float = 60.0,
        base_url: str = "https://maps.googleapis.com/maps/api",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ProviderConfigurationError("GOOGLE_MAPS_API_KEY is required")

        self.api_key = api_key
        self.base = base
        self.service_radius_miles = service_radius_miles
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    @property
    def name(self) -> str:
        return "Google Maps"

    async def verify(self, reference: LocationReference) -> VerifiedLocation:
        """Resolve a location and its one-way driving time.

        Raises:
            LocationUnresolvedError: If geocoding or routing fails
        """
        description = reference.describe()
        try:
            async with HTTPClient("google_maps", transport=self.transport) as client:
                address, coordinates = await self._geocode(client, reference)
                duration_seconds, distance_meters = await self._distance_from_base(
                    client, coordinates
                )
        except ProviderAPIError as e:
            logger.error(
                "Location lookup failed",
                reference=description,
                status_code=e.status_code,
                error=e.message,
            )
            raise LocationUnresolvedError(description, e.message) from e

        miles = distance_meters / METERS_PER_MILE
        within_service_area = miles <= self.service_radius_miles

        return VerifiedLocation(
            address=address,
            coordinates=coordinates,
            duration_seconds=duration_seconds,
            distance_meters=distance_meters,
            verified=True,
            within_service_area=within_service_area,
            risk_profile=RiskProfile(
                access_risk=AccessRisk.LOW if within_service_area else AccessRisk.MEDIUM,
                liability_factors=(
                    [] if within_service_area else ["Outside primary service area"]
                ),
            ),
            market_profile=MarketProfile(),
        )

    async def _geocode(
        self, client: HTTPClient, reference: LocationReference
    ) -> Tuple[str, Coordinates]:
        params: Dict[str, Any] = {"key": self.api_key}
        if reference.address:
            params["address"] = reference.address
        elif reference.coordinates:
            params["latlng"] = f"{reference.coordinates.lat},{reference.coordinates.lng}"
        else:
            params["place_id"] = reference.place_id

        body = await self._get_json(client, "geocode/json", params)
        results = body.get("results") or []
        if body.get("status") != "OK" or not results:
            raise LocationUnresolvedError(
                reference.describe(), f"geocoding status {body.get('status')}"
            )

        best = results[0]
        location = best["geometry"]["location"]
        coordinates = reference.coordinates or Coordinates(
            lat=location["lat"], lng=location["lng"]
        )
        return best.get("formatted_address", reference.describe()), coordinates

    async def _distance_from_base(
        self, client: HTTPClient, coordinates: Coordinates
    ) -> Tuple[int, int]:
        params = {
            "origins": f"{self.base.lat},{self.base.lng}",
            "destinations": f"{coordinates.lat},{coordinates.lng}",
            "units": "imperial",
            "key": self.api_key,
        }
        body = await self._get_json(client, "distancematrix/json", params)

        try:
            element = body["rows"][0]["elements"][0]
        except (KeyError, IndexError):
            element = {}
        if body.get("status") != "OK" or element.get("status") != "OK":
            raise LocationUnresolvedError(
                f"{coordinates.lat},{coordinates.lng}",
                f"no driving route from base ({element.get('status') or body.get('status')})",
            )

        return int(element["duration"]["value"]), int(element["distance"]["value"])

    async def _get_json(
        self, client: HTTPClient, path: str, params: Dict[str, Any]
    ) -> Dict[str, Any]:
        response = await client.get(f"{self.base_url}/{path}", params=params)
        if response.status_code != 200:
            raise ProviderAPIError("google_maps", response.status_code, response.text)
        try:
            body = response.json()
        except ValueError as e:
            raise ProviderAPIError(
                "google_maps", response.status_code, f"Invalid JSON from {path}: {e}"
            ) from e
        if not isinstance(body, dict):
            raise ProviderAPIError(
                "google_maps", response.status_code, f"Unexpected body from {path}"
            )
        return body
