"""
Unit tests for ViewProposalUseCase.
"""

from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.services.approval_token_manager import ApprovalTokenManager
from src.application.use_cases.view_proposal import ViewProposalUseCase
from src.domain.events.proposal_event import ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.exceptions.token_error import (
    TokenInvalidError,
    TokenProposalMismatchError,
)
from src.domain.value_objects.proposal_status import ProposalStatus


class TestViewProposalUseCase:
    """Test cases for ViewProposalUseCase."""

    @pytest.fixture
    def token_manager(self, token_signer, mock_used_token_repository):
        """Real token manager over the test signer."""
        return ApprovalTokenManager(token_signer, mock_used_token_repository)

    @pytest.fixture
    def use_case(
        self,
        mock_proposal_repository,
        mock_event_repository,
        token_manager,
        mock_transaction_service,
    ):
        """Create the use case with mocked collaborators."""
        return ViewProposalUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            token_manager=token_manager,
            transaction_service=mock_transaction_service,
        )

    @pytest.mark.asyncio
    async def test_first_view_records_viewed(
        self,
        use_case,
        sent_proposal,
        token_manager,
        mock_proposal_repository,
        mock_event_repository,
    ):
        """Test the first view moves sent to viewed."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=sent_proposal)
        token = token_manager.issue(sent_proposal.id).token

        # Act
        result = await use_case.execute(sent_proposal.id, token)

        # Assert
        assert result.proposal.status == ProposalStatus.VIEWED
        assert result.token_used is False
        mock_proposal_repository.update.assert_called_once_with(
            sent_proposal, [ProposalStatus.SENT]
        )
        event = mock_event_repository.record.call_args[0][0]
        assert event.event_type == ProposalEventType.VIEWED

    @pytest.mark.asyncio
    async def test_repeat_view_is_read_only(
        self, use_case, make_proposal, token_manager, mock_proposal_repository
    ):
        """Test viewing an already viewed proposal writes nothing."""
        # Arrange
        proposal = make_proposal(ProposalStatus.VIEWED)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)
        token = token_manager.issue(proposal.id).token

        # Act
        result = await use_case.execute(proposal.id, token)

        # Assert
        assert result.proposal.status == ProposalStatus.VIEWED
        mock_proposal_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_used_token_shows_status(
        self,
        use_case,
        make_proposal,
        token_manager,
        mock_proposal_repository,
        mock_used_token_repository,
    ):
        """Test a consumed link still shows the current status."""
        # Arrange
        proposal = make_proposal(ProposalStatus.ACCEPTED)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)
        mock_used_token_repository.exists = AsyncMock(return_value=True)
        token = token_manager.issue(proposal.id).token

        # Act
        result = await use_case.execute(proposal.id, token)

        # Assert
        assert result.token_used is True
        assert result.proposal.status == ProposalStatus.ACCEPTED
        mock_proposal_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_token(self, use_case, mock_proposal_repository):
        """Test a bad token never reaches the repository."""
        # Act & Assert
        with pytest.raises(TokenInvalidError):
            await use_case.execute(uuid4(), "garbage")

        mock_proposal_repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_token_for_other_proposal(self, use_case, token_manager):
        """Test a token cannot open another proposal."""
        # Arrange
        token = token_manager.issue(uuid4()).token

        # Act & Assert
        with pytest.raises(TokenProposalMismatchError):
            await use_case.execute(uuid4(), token)

    @pytest.mark.asyncio
    async def test_not_found(self, use_case, token_manager, mock_proposal_repository):
        """Test a valid token for a deleted proposal."""
        # Arrange
        proposal_id = uuid4()
        token = token_manager.issue(proposal_id).token
        mock_proposal_repository.get_by_id = AsyncMock(return_value=None)

        # Act & Assert
        with pytest.raises(ProposalNotFoundError):
            await use_case.execute(proposal_id, token)

    @pytest.mark.asyncio
    async def test_concurrent_status_change_reloads(
        self, use_case, sent_proposal, make_proposal, token_manager, mock_proposal_repository
    ):
        """Test a lost race returns the freshly stored proposal."""
        # Arrange
        accepted = make_proposal(ProposalStatus.ACCEPTED)
        mock_proposal_repository.get_by_id = AsyncMock(side_effect=[sent_proposal, accepted])
        mock_proposal_repository.update = AsyncMock(
            side_effect=ProposalStateError("accepted", "sent")
        )
        token = token_manager.issue(sent_proposal.id).token

        # Act
        result = await use_case.execute(sent_proposal.id, token)

        # Assert
        assert result.proposal is accepted
        assert mock_proposal_repository.get_by_id.call_count == 2
