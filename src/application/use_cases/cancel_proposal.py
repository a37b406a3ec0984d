"""Cancel proposal use case implementation."""

from typing import Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import ProposalNotFoundError
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import record_proposal_transition

logger = get_logger(__name__)


class CancelProposalUseCase:
    """Use case for an operator cancelling a proposal before payment."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.transaction_service = transaction_service

    async def execute(
        self,
        proposal_id: UUID,
        reason: Optional[str] = None,
        actor: Optional[str] = None,
    ) -> Proposal:
        """Cancel a proposal in any non-terminal status."""
        # 1. Load proposal
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        # 2. Transition
        previous_status = proposal.status
        proposal.mark_cancelled(reason)

        # 3. Persist
        async def _persist() -> None:
            await self.proposal_repo.update(proposal, [previous_status])
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.CANCELLED,
                    actor=actor,
                    metadata={"reason": reason, "from_status": previous_status.value},
                )
            )

        await self.transaction_service.execute_in_transaction(_persist)
        record_proposal_transition(previous_status.value, ProposalStatus.CANCELLED.value)

        logger.info(
            "Proposal cancelled",
            proposal_id=str(proposal.id),
            from_status=previous_status.value,
            reason=reason,
        )
        return proposal
