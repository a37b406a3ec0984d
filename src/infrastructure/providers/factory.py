"""
Provider factory for creating provider instances.
"""

from typing import Callable, Dict, Optional

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    PaymentProviderInterface,
    ProposalMailerInterface,
)
from src.config.settings import Settings, settings as default_settings
from src.domain.exceptions.provider_error import ProviderNotFoundError
from src.domain.value_objects.location import Coordinates
from src.domain.value_objects.provider_type import ProviderType
from src.infrastructure.providers.google_maps.verifier import GoogleMapsLocationVerifier
from src.infrastructure.providers.mock.location import MockLocationVerifier
from src.infrastructure.providers.mock.mailer import MockProposalMailer
from src.infrastructure.providers.mock.payment import MockPaymentProvider
from src.infrastructure.providers.resend.mailer import ResendProposalMailer
from src.infrastructure.providers.stripe.provider import StripePaymentProvider


class ProviderFactory:
    """Factory for creating provider instances from settings."""

    def __init__(self, config: Optional[Settings] = None):
        self.config = config or default_settings
        self._location_providers: Dict[ProviderType, Callable[[], LocationVerifierInterface]] = {
            ProviderType.MOCK: self._mock_location,
            ProviderType.GOOGLE_MAPS: self._google_maps_location,
        }
        self._payment_providers: Dict[ProviderType, Callable[[], PaymentProviderInterface]] = {
            ProviderType.MOCK: self._mock_payment,
            ProviderType.STRIPE: self._stripe_payment,
        }
        self._mail_providers: Dict[ProviderType, Callable[[], ProposalMailerInterface]] = {
            ProviderType.MOCK: MockProposalMailer,
            ProviderType.RESEND: self._resend_mailer,
        }

    def create_location_verifier(
        self, provider_type: Optional[str] = None
    ) -> LocationVerifierInterface:
        """Create the configured location verifier."""
        return self._create(
            self._location_providers, provider_type or self.config.LOCATION_PROVIDER
        )

    def create_payment_provider(
        self, provider_type: Optional[str] = None
    ) -> PaymentProviderInterface:
        """Create the configured payment provider."""
        return self._create(
            self._payment_providers, provider_type or self.config.PAYMENT_PROVIDER
        )

    def create_mailer(self, provider_type: Optional[str] = None) -> ProposalMailerInterface:
        """Create the configured proposal mailer."""
        return self._create(
            self._mail_providers, provider_type or self.config.MAIL_PROVIDER
        )

    def _create(self, registry: Dict[ProviderType, Callable], provider_type: str):
        try:
            builder = registry[ProviderType(provider_type)]
        except (ValueError, KeyError):
            raise ProviderNotFoundError(str(provider_type))
        return builder()

    def _base(self) -> Coordinates:
        return Coordinates(lat=self.config.BASE_LATITUDE, lng=self.config.BASE_LONGITUDE)

    def _mock_location(self) -> LocationVerifierInterface:
        return MockLocationVerifier(
            base=self._base(),
            service_radius_miles=self.config.SERVICE_AREA_RADIUS_MILES,
        )

    def _google_maps_location(self) -> LocationVerifierInterface:
        return GoogleMapsLocationVerifier(
            api_key=self.config.GOOGLE_MAPS_API_KEY,
            base=self._base(),
            service_radius_miles=self.config.SERVICE_AREA_RADIUS_MILES,
            base_url=self.config.GOOGLE_MAPS_BASE_URL,
        )

    def _mock_payment(self) -> PaymentProviderInterface:
        return MockPaymentProvider(
            public_base_url=self.config.PUBLIC_BASE_URL,
            webhook_secret=self.config.PAYMENT_WEBHOOK_SECRET,
            tolerance_seconds=self.config.PAYMENT_WEBHOOK_TOLERANCE_SECONDS,
        )

    def _stripe_payment(self) -> PaymentProviderInterface:
        return StripePaymentProvider(
            secret_key=self.config.STRIPE_SECRET_KEY,
            webhook_secret=self.config.PAYMENT_WEBHOOK_SECRET,
            base_url=self.config.STRIPE_BASE_URL,
            tolerance_seconds=self.config.PAYMENT_WEBHOOK_TOLERANCE_SECONDS,
        )

    def _resend_mailer(self) -> ProposalMailerInterface:
        return ResendProposalMailer(
            api_key=self.config.RESEND_API_KEY,
            from_email=self.config.PROPOSAL_FROM_EMAIL,
            base_url=self.config.RESEND_BASE_URL,
        )
