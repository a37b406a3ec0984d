"""
Provider interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from src.domain.entities.proposal import Proposal
from src.domain.value_objects.location import Coordinates, LocationReference
from src.domain.value_objects.site_conditions import AccessRisk


@dataclass
class RiskProfile:
    """Site risk assessment returned by the location verifier."""

    access_risk: AccessRisk = AccessRisk.LOW
    weather_vulnerability: Decimal = Decimal("0")
    liability_factors: List[str] = field(default_factory=list)


@dataclass
class MarketProfile:
    """Market analytics returned by the location verifier."""

    market_segment: str = "standard"
    customer_retention_probability: Optional[float] = None


@dataclass
class VerifiedLocation:
    """Response from location verification."""

    address: str
    coordinates: Coordinates
    duration_seconds: int
    distance_meters: int = 0
    verified: bool = True
    within_service_area: bool = True
    risk_profile: Optional[RiskProfile] = None
    market_profile: Optional[MarketProfile] = None
    confidence: Optional[Decimal] = None
    raw_analysis: Optional[Dict[str, Any]] = None


@dataclass
class PaymentSessionRequest:
    """Request to open a deposit payment session."""

    proposal_id: UUID
    amount: Decimal
    currency: str
    customer_name: str
    customer_email: str
    description: str
    success_url: str
    cancel_url: str
    idempotency_key: str


@dataclass
class PaymentSession:
    """Response from opening a payment session."""

    session_id: str
    redirect_url: str


@dataclass
class PaymentEvent:
    """Authenticated payment notification."""

    event_id: str
    event_type: str
    proposal_id: Optional[UUID]
    amount: Optional[Decimal] = None
    payment_reference: Optional[str] = None
    session_id: Optional[str] = None
    reason: Optional[str] = None

    @property
    def is_success(self) -> bool:
        """Check if the notification confirms captured funds."""
        return self.event_type in (
            "checkout.session.completed",
            "payment_intent.succeeded",
        )

    @property
    def is_failure(self) -> bool:
        """Check if the notification reports a failed payment."""
        return self.event_type in (
            "payment_intent.payment_failed",
            "checkout.session.async_payment_failed",
        )

    @property
    def is_abandoned(self) -> bool:
        """Check if the notification reports a session that will never be paid."""
        return self.event_type in (
            "checkout.session.expired",
            "payment_intent.canceled",
        )


class LocationVerifierInterface(ABC):
    """Resolves a job site and estimates travel time from the yard."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def verify(self, reference: LocationReference) -> VerifiedLocation:
        """Resolve a location; raise ``LocationUnresolvedError`` on failure."""
        pass


class PaymentProviderInterface(ABC):
    """Opens deposit sessions and authenticates payment notifications."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def create_deposit_session(
        self, request: PaymentSessionRequest
    ) -> PaymentSession:
        """Open a payment session; raise ``PaymentInitiationError`` on failure."""
        pass

    @abstractmethod
    def parse_webhook(self, payload: bytes, signature: Optional[str]) -> PaymentEvent:
        """Authenticate and decode a notification; raise ``PaymentWebhookError``."""
        pass


class ProposalMailerInterface(ABC):
    """Hands a finished proposal to the document/email delivery service."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Provider name."""
        pass

    @abstractmethod
    async def send_proposal(self, proposal: Proposal, approve_url: str) -> str:
        """Deliver the proposal and return the delivery id."""
        pass
