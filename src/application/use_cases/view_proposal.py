"""View proposal use case implementation."""

from dataclasses import dataclass
from uuid import UUID

from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.exceptions.token_error import TokenError
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import (
    record_proposal_transition,
    record_token_rejection,
)

logger = get_logger(__name__)


@dataclass
class ViewProposalResult:
    """Result of opening an approval link."""

    proposal: Proposal
    token_used: bool


class ViewProposalUseCase:
    """Use case for a customer opening their approval link."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        token_manager: ApprovalTokenManager,
        transaction_service: TransactionServiceInterface,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.token_manager = token_manager
        self.transaction_service = transaction_service

    async def execute(self, proposal_id: UUID, token: str) -> ViewProposalResult:
        """Verify the link and record the first view."""
        # 1. Verify token and its binding
        try:
            claims = self.token_manager.verify_for_proposal(token, proposal_id)
        except TokenError as e:
            record_token_rejection(type(e).__name__)
            raise

        # 2. Load proposal
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        # 3. Used links show the current status without side effects
        token_used = await self.token_manager.is_used(claims)
        if token_used or not proposal.mark_viewed():
            return ViewProposalResult(proposal=proposal, token_used=token_used)

        # 4. Persist the sent -> viewed transition
        async def _persist() -> None:
            await self.proposal_repo.update(proposal, [ProposalStatus.SENT])
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.VIEWED,
                )
            )

        try:
            await self.transaction_service.execute_in_transaction(_persist)
        except ProposalStateError:
            # Another request moved the proposal on first
            proposal = await self.proposal_repo.get_by_id(proposal_id)
            if not proposal:
                raise ProposalNotFoundError(proposal_id)
            return ViewProposalResult(proposal=proposal, token_used=token_used)

        record_proposal_transition(ProposalStatus.SENT.value, ProposalStatus.VIEWED.value)
        logger.info("Proposal viewed", proposal_id=str(proposal.id))

        return ViewProposalResult(proposal=proposal, token_used=token_used)
