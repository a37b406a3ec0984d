"""
Proposal entity and its lifecycle state machine.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import List, Optional
from uuid import UUID, uuid4

from src.config.logging import get_logger
from src.domain.exceptions.proposal_error import ProposalStateError
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.money import to_money
from src.domain.value_objects.proposal_details import (
    ProposalAssets,
    ProposalInputs,
    ProposalTotals,
)
from src.domain.value_objects.proposal_status import ProposalStatus

logger = get_logger(__name__)


@dataclass
class Proposal:
    """Customer-facing, approvable unit of work.

    Totals are computed once at creation; a re-quote is a new proposal.
    Status only moves forward along ``ProposalStatus.allowed_targets`` and
    every transition stamps its audit timestamp.
    """

    customer: Customer
    inputs: ProposalInputs
    totals: ProposalTotals
    breakdown: List[LineItem]
    id: UUID = field(default_factory=uuid4)
    status: ProposalStatus = ProposalStatus.DRAFT
    assets: ProposalAssets = field(default_factory=ProposalAssets)
    valid_until: Optional[datetime] = None

    # Audit
    sent_at: Optional[datetime] = None
    sent_by: Optional[str] = None
    viewed_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    accepted_by_name: Optional[str] = None
    accepted_by_signature: Optional[str] = None
    accepted_ip: Optional[str] = None
    accepted_user_agent: Optional[str] = None
    payment_session_id: Optional[str] = None
    payment_url: Optional[str] = None
    paid_at: Optional[datetime] = None
    payment_amount: Optional[Decimal] = None
    payment_reference: Optional[str] = None
    expired_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    def __post_init__(self):
        """Initialize timestamps."""
        self.status = ProposalStatus(self.status)
        if not self.created_at:
            self.created_at = datetime.now(timezone.utc)
        if not self.updated_at:
            self.updated_at = self.created_at

    @classmethod
    def create(
        cls,
        customer: Customer,
        inputs: ProposalInputs,
        breakdown: List[LineItem],
        totals: ProposalTotals,
        validity_days: int = 30,
    ) -> "Proposal":
        """Create a draft proposal valid for ``validity_days``."""
        now = datetime.now(timezone.utc)
        return cls(
            customer=customer,
            inputs=inputs,
            totals=totals,
            breakdown=list(breakdown),
            valid_until=now + timedelta(days=validity_days),
            created_at=now,
            updated_at=now,
        )

    @property
    def deposit_required(self) -> bool:
        """Check if accepting this proposal requires a deposit."""
        return self.totals.deposit_required

    def is_past_validity(self, now: Optional[datetime] = None) -> bool:
        """Check if the validity window has elapsed."""
        if not self.valid_until:
            return False
        return (now or datetime.now(timezone.utc)) >= self.valid_until

    def can_accept(self) -> bool:
        """Check if the customer may accept right now."""
        return self.status.can_accept() and not self.is_past_validity()

    def ensure_can_accept(self) -> None:
        """Raise unless the proposal is awaiting customer approval."""
        if not self.status.can_accept():
            raise ProposalStateError(self.status.value, "sent or viewed")
        if self.is_past_validity():
            raise ProposalStateError("lapsed", "within validity window")

    def mark_sent(self, sent_by: Optional[str] = None, web_url: Optional[str] = None) -> None:
        """Move draft to sent."""
        if self.status != ProposalStatus.DRAFT:
            raise ProposalStateError(self.status.value, ProposalStatus.DRAFT.value)

        now = self._transition(ProposalStatus.SENT)
        self.sent_at = now
        self.sent_by = sent_by
        if web_url:
            self.assets = ProposalAssets(
                pdf_path=self.assets.pdf_path,
                pdf_version=self.assets.pdf_version,
                web_url=web_url,
            )

    def mark_viewed(self) -> bool:
        """Record the first customer view; returns whether status changed."""
        if self.status != ProposalStatus.SENT:
            return False
        self.viewed_at = self._transition(ProposalStatus.VIEWED)
        return True

    def mark_accepted(
        self,
        full_name: str,
        signature: Optional[str] = None,
        ip: Optional[str] = None,
        user_agent: Optional[str] = None,
    ) -> None:
        """Record customer acceptance."""
        self.ensure_can_accept()

        self.accepted_at = self._transition(ProposalStatus.ACCEPTED)
        self.accepted_by_name = full_name.strip()
        self.accepted_by_signature = signature
        self.accepted_ip = ip
        self.accepted_user_agent = user_agent

    def attach_payment_session(self, session_id: str, payment_url: str) -> None:
        """Attach the deposit payment session opened after acceptance."""
        if self.status != ProposalStatus.ACCEPTED:
            raise ProposalStateError(self.status.value, ProposalStatus.ACCEPTED.value)

        self.payment_session_id = session_id
        self.payment_url = payment_url
        self.updated_at = datetime.now(timezone.utc)

    def is_paid_with(self, payment_reference: str) -> bool:
        """Check if this proposal was already paid by the given payment."""
        return (
            self.status == ProposalStatus.PAID
            and self.payment_reference == payment_reference
        )

    def mark_paid(
        self,
        amount: Decimal,
        payment_reference: str,
        session_id: Optional[str] = None,
    ) -> None:
        """Record a confirmed payment."""
        if not payment_reference:
            raise ValueError("Payment reference is required to mark paid")
        if self.status != ProposalStatus.ACCEPTED:
            raise ProposalStateError(self.status.value, ProposalStatus.ACCEPTED.value)

        self.paid_at = self._transition(ProposalStatus.PAID)
        self.payment_amount = to_money(amount)
        self.payment_reference = payment_reference
        if session_id:
            self.payment_session_id = session_id

    def mark_expired(self) -> None:
        """Lapse an unaccepted proposal."""
        if not self.status.can_expire():
            raise ProposalStateError(self.status.value, "draft, sent or viewed")
        self.expired_at = self._transition(ProposalStatus.EXPIRED)

    def mark_cancelled(self, reason: Optional[str] = None) -> None:
        """Cancel a proposal before payment."""
        if not self.status.can_cancel():
            raise ProposalStateError(self.status.value, "draft, sent, viewed or accepted")
        self.cancelled_at = self._transition(ProposalStatus.CANCELLED)
        self.cancellation_reason = reason

    def _transition(self, target: ProposalStatus) -> datetime:
        """Move to ``target`` if allowed and return the transition time."""
        if target not in self.status.allowed_targets():
            raise ProposalStateError(self.status.value, f"a status that can become {target.value}")

        previous = self.status
        now = datetime.now(timezone.utc)
        self.status = target
        self.updated_at = now

        logger.info(
            "Proposal status changed",
            proposal_id=str(self.id),
            from_status=previous.value,
            to_status=target.value,
        )
        return now
