"""Get proposal use case implementation."""

from dataclasses import dataclass
from typing import List
from uuid import UUID

from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent
from src.domain.exceptions.proposal_error import ProposalNotFoundError


@dataclass
class ProposalWithHistory:
    """A proposal and its audit log."""

    proposal: Proposal
    events: List[ProposalEvent]


class GetProposalUseCase:
    """Use case for reading a proposal with its event history."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo

    async def execute(self, proposal_id: UUID) -> ProposalWithHistory:
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        events = await self.event_repo.list_for_proposal(proposal_id)
        return ProposalWithHistory(proposal=proposal, events=events)
