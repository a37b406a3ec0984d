"""
Repository interfaces for dependency inversion.
"""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import List, Optional, Sequence
from uuid import UUID

from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent
from src.domain.value_objects.proposal_status import ProposalStatus


class ProposalRepositoryInterface(ABC):
    """Proposal repository interface."""

    @abstractmethod
    async def create(self, proposal: Proposal) -> Proposal:
        """Persist a new proposal."""
        pass

    @abstractmethod
    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID."""
        pass

    @abstractmethod
    async def update(
        self, proposal: Proposal, expected_statuses: Sequence[ProposalStatus]
    ) -> Proposal:
        """Persist ``proposal`` only if its stored status is one of ``expected_statuses``.

        Raises ``ProposalStateError`` when the stored status has moved on.
        """
        pass

    @abstractmethod
    async def find_expirable(self, now: datetime, limit: int = 100) -> List[Proposal]:
        """Find unaccepted proposals whose validity window has passed."""
        pass


class UsedTokenRepositoryInterface(ABC):
    """Consumed approval token store."""

    @abstractmethod
    async def exists(self, proposal_id: UUID, token_hash: str) -> bool:
        """Check if the token was already consumed."""
        pass

    @abstractmethod
    async def add(self, proposal_id: UUID, token_hash: str) -> None:
        """Record consumption; raise ``TokenAlreadyUsedError`` if already present."""
        pass


class ProposalEventRepositoryInterface(ABC):
    """Proposal audit log repository interface."""

    @abstractmethod
    async def record(self, event: ProposalEvent) -> ProposalEvent:
        """Append an event."""
        pass

    @abstractmethod
    async def list_for_proposal(self, proposal_id: UUID) -> List[ProposalEvent]:
        """Get a proposal's events, oldest first."""
        pass
