"""Expire proposal use cases."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from functools import partial
from typing import List, Optional
from uuid import UUID

from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import record_proposal_transition

logger = get_logger(__name__)


@dataclass
class ExpirySweepResult:
    """Result of an expiry sweep."""

    expired: List[UUID] = field(default_factory=list)
    skipped: int = 0


class _ExpiryMixin:
    proposal_repo: ProposalRepositoryInterface
    event_repo: ProposalEventRepositoryInterface
    transaction_service: TransactionServiceInterface

    async def _expire(self, proposal: Proposal, actor: Optional[str]) -> None:
        previous_status = proposal.status
        proposal.mark_expired()

        await self.transaction_service.execute_in_transaction(
            partial(self._persist_expiry, proposal, previous_status, actor)
        )
        record_proposal_transition(previous_status.value, ProposalStatus.EXPIRED.value)

    async def _persist_expiry(
        self,
        proposal: Proposal,
        previous_status: ProposalStatus,
        actor: Optional[str],
    ) -> None:
        await self.proposal_repo.update(proposal, [previous_status])
        await self.event_repo.record(
            ProposalEvent(
                proposal_id=proposal.id,
                event_type=ProposalEventType.EXPIRED,
                actor=actor,
                metadata={
                    "from_status": previous_status.value,
                    "valid_until": (
                        proposal.valid_until.isoformat() if proposal.valid_until else None
                    ),
                },
            )
        )


class ExpireProposalUseCase(_ExpiryMixin):
    """Use case for an operator expiring a single proposal."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        transaction_service: TransactionServiceInterface,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.transaction_service = transaction_service

    async def execute(self, proposal_id: UUID, actor: Optional[str] = None) -> Proposal:
        """Expire an unaccepted proposal whose validity window has elapsed.

        Proposals still within their window are withdrawn by cancelling.
        """
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        if proposal.status.can_expire() and not proposal.is_past_validity():
            raise ProposalStateError("within validity window", "past validity window")

        await self._expire(proposal, actor)
        logger.info("Proposal expired", proposal_id=str(proposal.id), actor=actor)
        return proposal


class ExpireDueProposalsUseCase(_ExpiryMixin):
    """Use case for sweeping proposals past their validity window."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        transaction_service: TransactionServiceInterface,
        batch_size: int = 200,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.transaction_service = transaction_service
        self.batch_size = batch_size

    async def execute(self, now: Optional[datetime] = None) -> ExpirySweepResult:
        """Expire every due draft, sent or viewed proposal in one batch."""
        now = now or datetime.now(timezone.utc)
        result = ExpirySweepResult()

        candidates = await self.proposal_repo.find_expirable(now, limit=self.batch_size)
        for proposal in candidates:
            try:
                await self._expire(proposal, actor="system")
            except ProposalStateError as e:
                # Accepted or cancelled since it was selected
                result.skipped += 1
                logger.info(
                    "Skipped expiring proposal",
                    proposal_id=str(proposal.id),
                    reason=str(e),
                )
                continue
            result.expired.append(proposal.id)

        logger.info(
            "Expiry sweep completed",
            candidates=len(candidates),
            expired=len(result.expired),
            skipped=result.skipped,
        )
        return result
