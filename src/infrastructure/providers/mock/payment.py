"""
Mock payment provider for testing and development.
"""

from typing import Optional
from uuid import uuid4

from src.application.interfaces.providers import (
    PaymentEvent,
    PaymentProviderInterface,
    PaymentSession,
    PaymentSessionRequest,
)
from src.config.logging import get_logger
from src.domain.exceptions.payment_error import PaymentInitiationError
from src.infrastructure.providers.stripe.events import parse_event
from src.infrastructure.providers.stripe.signature import verify_signature

logger = get_logger(__name__)


class MockPaymentProvider(PaymentProviderInterface):
    """Opens fake checkout sessions; webhooks use the Stripe event format."""

    def __init__(
        self,
        public_base_url: str,
        webhook_secret: str,
        tolerance_seconds: int = 300,
        fail_sessions: bool = False,
    ):
        self.public_base_url = public_base_url.rstrip("/")
        self.webhook_secret = webhook_secret
        self.tolerance_seconds = tolerance_seconds
        self.fail_sessions = fail_sessions

    @property
    def name(self) -> str:
        return "mock"

    async def create_deposit_session(
        self, request: PaymentSessionRequest
    ) -> PaymentSession:
        if self.fail_sessions:
            raise PaymentInitiationError(self.name, "Simulated payment outage")

        session_id = f"mock_cs_{uuid4().hex[:16]}"
        logger.info(
            "Mock deposit session created",
            proposal_id=str(request.proposal_id),
            session_id=session_id,
            amount=str(request.amount),
        )
        return PaymentSession(
            session_id=session_id,
            redirect_url=f"{self.public_base_url}/mock-checkout/{session_id}",
        )

    def parse_webhook(self, payload: bytes, signature: Optional[str]) -> PaymentEvent:
        verify_signature(
            payload, signature, self.webhook_secret, self.tolerance_seconds
        )
        return parse_event(payload)
