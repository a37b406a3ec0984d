"""Deposit checkout use case implementation."""

from dataclasses import dataclass
from decimal import Decimal
from uuid import UUID, uuid4

from src.application.interfaces.providers import (
    PaymentProviderInterface,
    PaymentSession,
    PaymentSessionRequest,
)
from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.payment_error import PaymentInitiationError
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.exceptions.token_error import TokenError
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import (
    record_payment_session,
    record_token_rejection,
)

logger = get_logger(__name__)


async def open_deposit_session(
    payment_provider: PaymentProviderInterface,
    proposal: Proposal,
    public_base_url: str,
    currency: str,
    idempotency_key: str,
) -> PaymentSession:
    """Open a checkout session for the proposal's deposit."""
    proposal_url = f"{public_base_url.rstrip('/')}/p/{proposal.id}"
    try:
        session = await payment_provider.create_deposit_session(
            PaymentSessionRequest(
                proposal_id=proposal.id,
                amount=proposal.totals.deposit_amount,
                currency=currency,
                customer_name=proposal.customer.name,
                customer_email=proposal.customer.email,
                description=f"Deposit for proposal {proposal.id}",
                success_url=f"{proposal_url}?payment=success",
                cancel_url=f"{proposal_url}?payment=cancelled",
                idempotency_key=idempotency_key,
            )
        )
    except PaymentInitiationError as e:
        record_payment_session(payment_provider.name, "failed")
        logger.error(
            "Deposit session creation failed",
            proposal_id=str(proposal.id),
            provider=e.provider,
            error=e.message,
        )
        raise

    record_payment_session(payment_provider.name, "created")
    logger.info(
        "Deposit payment session created",
        proposal_id=str(proposal.id),
        session_id=session.session_id,
        amount=str(proposal.totals.deposit_amount),
    )
    return session


@dataclass
class DepositCheckoutResult:
    """A fresh deposit session for an accepted proposal."""

    proposal: Proposal
    session_id: str
    payment_url: str
    deposit_amount: Decimal


class DepositCheckoutUseCase:
    """Use case for reopening the deposit payment of an accepted proposal.

    Checkout sessions expire or get abandoned; the customer comes back
    through the same approval link to start a new one. The link was
    consumed on acceptance, so only its signature, expiry and proposal
    binding are checked here.
    """

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        token_manager: ApprovalTokenManager,
        payment_provider: PaymentProviderInterface,
        transaction_service: TransactionServiceInterface,
        public_base_url: str,
        currency: str = "usd",
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.token_manager = token_manager
        self.payment_provider = payment_provider
        self.transaction_service = transaction_service
        self.public_base_url = public_base_url
        self.currency = currency

    async def execute(self, proposal_id: UUID, token: str) -> DepositCheckoutResult:
        """Open a new deposit session for an accepted, unpaid proposal."""
        # 1. Verify token and its binding to this proposal
        try:
            self.token_manager.verify_for_proposal(token, proposal_id)
        except TokenError as e:
            record_token_rejection(type(e).__name__)
            raise

        # 2. Load proposal
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        # 3. Only accepted proposals that owe a deposit
        if proposal.status != ProposalStatus.ACCEPTED:
            raise ProposalStateError(proposal.status.value, ProposalStatus.ACCEPTED.value)
        if not proposal.deposit_required:
            raise ProposalStateError("no deposit owed", "a deposit owed")

        previous_session_id = proposal.payment_session_id

        # 4. Open the session and record it
        session = await open_deposit_session(
            self.payment_provider,
            proposal,
            self.public_base_url,
            self.currency,
            idempotency_key=f"deposit-{proposal.id}-{uuid4().hex[:16]}",
        )
        proposal.attach_payment_session(session.session_id, session.redirect_url)

        async def _persist() -> None:
            await self.proposal_repo.update(proposal, [ProposalStatus.ACCEPTED])
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.PAYMENT_INITIATED,
                    metadata={
                        "session_id": session.session_id,
                        "provider": self.payment_provider.name,
                        "amount": str(proposal.totals.deposit_amount),
                        "replaces_session_id": previous_session_id,
                    },
                )
            )

        await self.transaction_service.execute_in_transaction(_persist)

        logger.info(
            "Deposit checkout reopened",
            proposal_id=str(proposal.id),
            session_id=session.session_id,
            previous_session_id=previous_session_id,
        )

        return DepositCheckoutResult(
            proposal=proposal,
            session_id=session.session_id,
            payment_url=session.redirect_url,
            deposit_amount=proposal.totals.deposit_amount,
        )
