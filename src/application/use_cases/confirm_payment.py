"""Confirm payment use case implementation."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.application.interfaces.providers import PaymentEvent, PaymentProviderInterface
from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.payment_error import PaymentWebhookError
from src.domain.exceptions.proposal_error import ProposalNotFoundError
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import (
    record_payment_webhook,
    record_proposal_transition,
)

logger = get_logger(__name__)


@dataclass
class ConfirmPaymentResult:
    """Outcome of processing a payment notification."""

    event_type: str
    handled: bool
    proposal_id: Optional[UUID] = None
    status: Optional[ProposalStatus] = None


class ConfirmPaymentUseCase:
    """Use case for applying authenticated payment notifications."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        payment_provider: PaymentProviderInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.payment_provider = payment_provider
        self.transaction_service = transaction_service

    async def execute(
        self, payload: bytes, signature: Optional[str]
    ) -> ConfirmPaymentResult:
        """Authenticate a notification and apply it to its proposal."""
        # 1. Authenticate and decode
        event = self.payment_provider.parse_webhook(payload, signature)

        if not (event.is_success or event.is_failure or event.is_abandoned):
            logger.debug("Ignoring payment event", event_type=event.event_type)
            record_payment_webhook(event.event_type, "ignored")
            return ConfirmPaymentResult(event_type=event.event_type, handled=False)

        if event.proposal_id is None:
            raise PaymentWebhookError("Payment event is missing proposal_id metadata")

        # 2. Load proposal
        proposal = await self.proposal_repo.get_by_id(event.proposal_id)
        if not proposal:
            raise ProposalNotFoundError(event.proposal_id)

        # 3. Apply
        if event.is_success:
            await self._record_success(proposal, event)
        else:
            await self._record_unpaid(proposal, event)

        return ConfirmPaymentResult(
            event_type=event.event_type,
            handled=True,
            proposal_id=proposal.id,
            status=proposal.status,
        )

    async def _record_unpaid(self, proposal: Proposal, event: PaymentEvent) -> None:
        if event.is_failure:
            event_type, outcome = ProposalEventType.PAYMENT_FAILED, "failed"
        elif event.event_type == "checkout.session.expired":
            event_type, outcome = ProposalEventType.PAYMENT_SESSION_EXPIRED, "abandoned"
        else:
            event_type, outcome = ProposalEventType.PAYMENT_CANCELLED, "abandoned"

        async def _persist() -> None:
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=event_type,
                    metadata={
                        "event_id": event.event_id,
                        "session_id": event.session_id,
                        "payment_reference": event.payment_reference,
                        "reason": event.reason,
                    },
                )
            )

        await self.transaction_service.execute_in_transaction(_persist)
        record_payment_webhook(event.event_type, outcome)
        logger.warning(
            "Deposit payment not completed",
            proposal_id=str(proposal.id),
            event_type=event.event_type,
            event_id=event.event_id,
        )

    async def _record_success(self, proposal: Proposal, event: PaymentEvent) -> None:
        reference = event.payment_reference or event.session_id or event.event_id

        # Providers redeliver notifications
        if proposal.is_paid_with(reference):
            record_payment_webhook(event.event_type, "duplicate")
            logger.info(
                "Duplicate payment confirmation ignored",
                proposal_id=str(proposal.id),
                payment_reference=reference,
            )
            return

        amount = (
            event.amount if event.amount is not None else proposal.totals.deposit_amount
        )
        if amount < proposal.totals.deposit_amount:
            logger.warning(
                "Payment below required deposit",
                proposal_id=str(proposal.id),
                amount=str(amount),
                deposit_amount=str(proposal.totals.deposit_amount),
            )

        proposal.mark_paid(amount, reference, session_id=event.session_id)

        async def _persist() -> None:
            await self.proposal_repo.update(proposal, [ProposalStatus.ACCEPTED])
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.PAID,
                    metadata={
                        "event_id": event.event_id,
                        "amount": str(proposal.payment_amount),
                        "payment_reference": reference,
                    },
                )
            )

        await self.transaction_service.execute_in_transaction(_persist)
        record_payment_webhook(event.event_type, "paid")
        record_proposal_transition(ProposalStatus.ACCEPTED.value, ProposalStatus.PAID.value)

        logger.info(
            "Proposal paid",
            proposal_id=str(proposal.id),
            amount=str(proposal.payment_amount),
            payment_reference=reference,
        )
