"""
Unit tests for CancelProposalUseCase and GetProposalUseCase.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.use_cases.cancel_proposal import CancelProposalUseCase
from src.application.use_cases.get_proposal import GetProposalUseCase
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.value_objects.proposal_status import ProposalStatus


class TestCancelProposalUseCase:
    """Test cases for CancelProposalUseCase."""

    @pytest.fixture
    def use_case(self, mock_proposal_repository, mock_event_repository, mock_transaction_service):
        """Create the use case with mocked collaborators."""
        return CancelProposalUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            transaction_service=mock_transaction_service,
        )

    @pytest.mark.asyncio
    async def test_cancel_accepted(
        self, use_case, make_proposal, mock_proposal_repository, mock_event_repository
    ):
        """Test an accepted but unpaid proposal can be cancelled."""
        # Arrange
        proposal = make_proposal(ProposalStatus.ACCEPTED)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)

        # Act
        result = await use_case.execute(proposal.id, reason="customer withdrew", actor="ops")

        # Assert
        assert result.status == ProposalStatus.CANCELLED
        assert result.cancellation_reason == "customer withdrew"
        mock_proposal_repository.update.assert_called_once_with(
            proposal, [ProposalStatus.ACCEPTED]
        )
        event = mock_event_repository.record.call_args[0][0]
        assert event.event_type == ProposalEventType.CANCELLED
        assert event.metadata == {"reason": "customer withdrew", "from_status": "accepted"}

    @pytest.mark.asyncio
    async def test_paid_cannot_be_cancelled(
        self, use_case, make_proposal, mock_proposal_repository
    ):
        """Test terminal proposals stay put."""
        # Arrange
        proposal = make_proposal(ProposalStatus.PAID)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)

        # Act & Assert
        with pytest.raises(ProposalStateError):
            await use_case.execute(proposal.id)

    @pytest.mark.asyncio
    async def test_not_found(self, use_case):
        """Test cancelling an unknown proposal."""
        # Act & Assert
        with pytest.raises(ProposalNotFoundError):
            await use_case.execute(uuid4())


class TestGetProposalUseCase:
    """Test cases for GetProposalUseCase."""

    @pytest.mark.asyncio
    async def test_returns_history(
        self, draft_proposal, mock_proposal_repository, mock_event_repository
    ):
        """Test the proposal is returned with its events."""
        # Arrange
        events = [ProposalEvent(proposal_id=draft_proposal.id, event_type=ProposalEventType.CREATED)]
        mock_proposal_repository.get_by_id = AsyncMock(return_value=draft_proposal)
        mock_event_repository.list_for_proposal = AsyncMock(return_value=events)
        use_case = GetProposalUseCase(mock_proposal_repository, mock_event_repository)

        # Act
        result = await use_case.execute(draft_proposal.id)

        # Assert
        assert result.proposal is draft_proposal
        assert result.events == events

    @pytest.mark.asyncio
    async def test_not_found(self, mock_proposal_repository, mock_event_repository):
        """Test reading an unknown proposal."""
        # Arrange
        use_case = GetProposalUseCase(mock_proposal_repository, mock_event_repository)

        # Act & Assert
        with pytest.raises(ProposalNotFoundError):
            await use_case.execute(uuid4())

        mock_event_repository.list_for_proposal.assert_not_called()
