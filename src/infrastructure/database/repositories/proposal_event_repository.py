"""
Proposal event repository implementation.
"""

from typing import List
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import ProposalEventRepositoryInterface
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.infrastructure.database.models.proposal_event import ProposalEventModel
from src.infrastructure.database.repositories.proposal_repository import _as_utc


class ProposalEventRepository(ProposalEventRepositoryInterface):
    """Proposal event repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def record(self, event: ProposalEvent) -> ProposalEvent:
        """Append an event."""
        model = ProposalEventModel(
            id=event.id,
            proposal_id=event.proposal_id,
            event_type=event.event_type.value,
            actor=event.actor,
            event_metadata=event.metadata,
            occurred_at=event.occurred_at,
        )
        self.db.add(model)
        await self.db.flush()
        return event

    async def list_for_proposal(self, proposal_id: UUID) -> List[ProposalEvent]:
        """Get a proposal's events, oldest first."""
        stmt = (
            select(ProposalEventModel)
            .where(ProposalEventModel.proposal_id == proposal_id)
            .order_by(ProposalEventModel.occurred_at, ProposalEventModel.created_at)
        )
        result = await self.db.execute(stmt)

        return [self._model_to_entity(model) for model in result.scalars().all()]

    def _model_to_entity(self, model: ProposalEventModel) -> ProposalEvent:
        """Convert SQLAlchemy model to domain event."""
        return ProposalEvent(
            id=model.id,
            proposal_id=model.proposal_id,
            event_type=ProposalEventType(model.event_type),
            actor=model.actor,
            metadata=model.event_metadata,
            occurred_at=_as_utc(model.occurred_at),
        )
