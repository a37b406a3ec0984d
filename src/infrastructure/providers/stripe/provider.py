"""
Stripe payment provider implementation.
"""

from typing import Optional

import httpx
import structlog

from src.application.interfaces.providers import (
    PaymentEvent,
    PaymentProviderInterface,
    PaymentSession,
    PaymentSessionRequest,
)
from src.domain.exceptions.payment_error import PaymentInitiationError
from src.domain.exceptions.provider_error import (
    ProviderAPIError,
    ProviderConfigurationError,
)
from src.domain.value_objects.money import to_minor_units
from src.infrastructure.external.http_client import HTTPClient
from src.infrastructure.providers.stripe.events import parse_event
from src.infrastructure.providers.stripe.signature import verify_signature

logger = structlog.get_logger()


class StripePaymentProvider(PaymentProviderInterface):
    """Deposit checkout sessions through the Stripe REST API."""

    def __init__(
        self,
        secret_key: Optional[str],
        webhook_secret: str,
        base_url: str = "https://api.stripe.com/v1",
        tolerance_seconds: int = 300,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not secret_key:
            raise ProviderConfigurationError("STRIPE_SECRET_KEY is required")

        self.secret_key = secret_key
        self.webhook_secret = webhook_secret
        self.base_url = base_url.rstrip("/")
        self.tolerance_seconds = tolerance_seconds
        self.transport = transport

    @property
    def name(self) -> str:
        return "stripe"

    async def create_deposit_session(
        self, request: PaymentSessionRequest
    ) -> PaymentSession:
        """Create a checkout session for the deposit amount."""
        proposal_id = str(request.proposal_id)
        form = {
            "mode": "payment",
            "success_url": request.success_url,
            "cancel_url": request.cancel_url,
            "customer_email": request.customer_email,
            "client_reference_id": proposal_id,
            "metadata[proposal_id]": proposal_id,
            "payment_intent_data[metadata][proposal_id]": proposal_id,
            "line_items[0][quantity]": "1",
            "line_items[0][price_data][currency]": request.currency,
            "line_items[0][price_data][unit_amount]": str(to_minor_units(request.amount)),
            "line_items[0][price_data][product_data][name]": request.description,
        }
        headers = {
            "Authorization": f"Bearer {self.secret_key}",
            "Idempotency-Key": request.idempotency_key,
        }

        try:
            async with HTTPClient("stripe", transport=self.transport) as client:
                response = await client.post(
                    f"{self.base_url}/checkout/sessions", data=form, headers=headers
                )
        except ProviderAPIError as e:
            raise PaymentInitiationError(self.name, e.message) from e

        if response.status_code != 200:
            logger.error(
                "Stripe checkout session rejected",
                proposal_id=proposal_id,
                status_code=response.status_code,
                body=response.text,
            )
            raise PaymentInitiationError(
                self.name, f"Checkout session failed ({response.status_code})"
            )

        body = response.json()
        return PaymentSession(session_id=body["id"], redirect_url=body["url"])

    def parse_webhook(self, payload: bytes, signature: Optional[str]) -> PaymentEvent:
        """Verify the ``Stripe-Signature`` header and decode the event."""
        verify_signature(
            payload, signature, self.webhook_secret, self.tolerance_seconds
        )
        return parse_event(payload)
