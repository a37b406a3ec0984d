"""Accept proposal use case implementation."""

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional
from uuid import UUID

from src.application.interfaces.providers import (
    PaymentProviderInterface,
    PaymentSession,
)
from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.application.use_cases.deposit_checkout import open_deposit_session
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import ProposalNotFoundError
from src.domain.exceptions.token_error import TokenAlreadyUsedError, TokenError
from src.domain.exceptions.validation_error import FieldError, ValidationError
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import (
    record_proposal_transition,
    record_token_rejection,
)

logger = get_logger(__name__)


@dataclass
class AcceptProposalRequest:
    """Customer acceptance of a proposal through its approval link."""

    proposal_id: UUID
    token: str
    full_name: str
    consent: bool
    signature: Optional[str] = None
    ip: Optional[str] = None
    user_agent: Optional[str] = None


@dataclass
class AcceptProposalResult:
    """Result of accepting a proposal."""

    proposal: Proposal
    deposit_required: bool
    deposit_amount: Decimal
    payment_url: Optional[str] = None

    @property
    def status(self) -> ProposalStatus:
        return self.proposal.status


class AcceptProposalUseCase:
    """Use case for accepting a proposal exactly once.

    Token consumption, the status change and deposit initiation commit
    together or not at all.
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
        self.public_base_url = public_base_url.rstrip("/")
        self.currency = currency

    async def execute(self, request: AcceptProposalRequest) -> AcceptProposalResult:
        """Accept a proposal and open the deposit payment when one is owed."""
        # 1. Field-level validation of the acceptance form
        self._validate(request)

        # 2. Verify token and its binding to this proposal
        try:
            claims = self.token_manager.verify_for_proposal(
                request.token, request.proposal_id
            )
        except TokenError as e:
            record_token_rejection(type(e).__name__)
            raise

        # 3. Load proposal
        proposal = await self.proposal_repo.get_by_id(request.proposal_id)
        if not proposal:
            raise ProposalNotFoundError(request.proposal_id)

        # 4. Reject replays early; the unique insert below is authoritative
        if await self.token_manager.is_used(claims):
            record_token_rejection(TokenAlreadyUsedError.__name__)
            raise TokenAlreadyUsedError(proposal.id)

        # 5. Only sent or viewed proposals within validity can be accepted
        proposal.ensure_can_accept()

        previous_status = proposal.status

        # 6. Consume token, transition and initiate deposit atomically
        async def _accept() -> Optional[PaymentSession]:
            await self.token_manager.mark_used(claims)

            proposal.mark_accepted(
                full_name=request.full_name,
                signature=request.signature,
                ip=request.ip,
                user_agent=request.user_agent,
            )
            await self.proposal_repo.update(
                proposal, [ProposalStatus.SENT, ProposalStatus.VIEWED]
            )
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.ACCEPTED,
                    actor=proposal.accepted_by_name,
                    metadata={
                        "ip": request.ip,
                        "user_agent": request.user_agent,
                        "document_version": claims.version,
                        "signed": bool(request.signature),
                    },
                )
            )

            if not proposal.deposit_required:
                return None

            # Failures abort the acceptance
            session = await open_deposit_session(
                self.payment_provider,
                proposal,
                self.public_base_url,
                self.currency,
                idempotency_key=f"deposit-{proposal.id}-{claims.token_hash[:16]}",
            )
            proposal.attach_payment_session(session.session_id, session.redirect_url)
            await self.proposal_repo.update(proposal, [ProposalStatus.ACCEPTED])
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.PAYMENT_INITIATED,
                    metadata={
                        "session_id": session.session_id,
                        "provider": self.payment_provider.name,
                        "amount": str(proposal.totals.deposit_amount),
                    },
                )
            )
            return session

        try:
            session = await self.transaction_service.execute_in_transaction(_accept)
        except TokenAlreadyUsedError:
            record_token_rejection(TokenAlreadyUsedError.__name__)
            raise

        record_proposal_transition(previous_status.value, ProposalStatus.ACCEPTED.value)

        logger.info(
            "Proposal accepted",
            proposal_id=str(proposal.id),
            accepted_by=proposal.accepted_by_name,
            deposit_required=proposal.deposit_required,
            payment_session_id=session.session_id if session else None,
        )

        return AcceptProposalResult(
            proposal=proposal,
            deposit_required=proposal.deposit_required,
            deposit_amount=proposal.totals.deposit_amount,
            payment_url=session.redirect_url if session else None,
        )

    def _validate(self, request: AcceptProposalRequest) -> None:
        errors = []
        if not request.full_name or not request.full_name.strip():
            errors.append(FieldError("full_name", "Full name is required"))
        if request.consent is not True:
            errors.append(FieldError("consent", "Consent is required to accept"))
        if errors:
            raise ValidationError("Invalid acceptance", errors)
