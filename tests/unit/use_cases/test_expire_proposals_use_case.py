"""
Unit tests for the expiry use cases.
"""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.use_cases.expire_proposals import (
    ExpireDueProposalsUseCase,
    ExpireProposalUseCase,
)
from src.domain.events.proposal_event import ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.value_objects.proposal_status import ProposalStatus


class TestExpireProposalUseCase:
    """Test cases for ExpireProposalUseCase."""

    @pytest.fixture
    def use_case(self, mock_proposal_repository, mock_event_repository, mock_transaction_service):
        """Create the use case with mocked collaborators."""
        return ExpireProposalUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            transaction_service=mock_transaction_service,
        )

    @pytest.mark.asyncio
    async def test_expire_lapsed(
        self, use_case, lapsed_proposal, mock_proposal_repository, mock_event_repository
    ):
        """Test an operator can expire a sent proposal past its validity."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=lapsed_proposal)

        # Act
        result = await use_case.execute(lapsed_proposal.id, actor="ops@example.com")

        # Assert
        assert result.status == ProposalStatus.EXPIRED
        assert result.expired_at is not None
        mock_proposal_repository.update.assert_called_once_with(
            lapsed_proposal, [ProposalStatus.SENT]
        )
        event = mock_event_repository.record.call_args[0][0]
        assert event.event_type == ProposalEventType.EXPIRED
        assert event.metadata["from_status"] == "sent"

    @pytest.mark.asyncio
    async def test_within_validity_cannot_expire(
        self, use_case, sent_proposal, mock_proposal_repository
    ):
        """Test a proposal inside its validity window is left open."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=sent_proposal)

        # Act & Assert
        with pytest.raises(ProposalStateError) as exc_info:
            await use_case.execute(sent_proposal.id, actor="ops@example.com")

        assert exc_info.value.current_status == "within validity window"
        assert sent_proposal.status == ProposalStatus.SENT
        mock_proposal_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_accepted_cannot_expire(
        self, use_case, make_proposal, mock_proposal_repository
    ):
        """Test accepted proposals are past the point of lapsing."""
        # Arrange
        proposal = make_proposal(ProposalStatus.ACCEPTED)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)

        # Act & Assert
        with pytest.raises(ProposalStateError):
            await use_case.execute(proposal.id)

        mock_proposal_repository.update.assert_not_called()

    @pytest.mark.asyncio
    async def test_not_found(self, use_case):
        """Test expiring an unknown proposal."""
        # Act & Assert
        with pytest.raises(ProposalNotFoundError):
            await use_case.execute(uuid4())


class TestExpireDueProposalsUseCase:
    """Test cases for ExpireDueProposalsUseCase."""

    @pytest.fixture
    def use_case(self, mock_proposal_repository, mock_event_repository, mock_transaction_service):
        """Create the sweep with a small batch."""
        return ExpireDueProposalsUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            transaction_service=mock_transaction_service,
            batch_size=50,
        )

    @pytest.mark.asyncio
    async def test_sweep_expires_due_proposals(
        self, use_case, make_proposal, mock_proposal_repository, mock_event_repository
    ):
        """Test every due candidate is expired by the system actor."""
        # Arrange
        yesterday = datetime.now(timezone.utc) - timedelta(days=1)
        due = [
            make_proposal(ProposalStatus.DRAFT, valid_until=yesterday),
            make_proposal(ProposalStatus.VIEWED, valid_until=yesterday),
        ]
        mock_proposal_repository.find_expirable = AsyncMock(return_value=due)
        now = datetime.now(timezone.utc)

        # Act
        result = await use_case.execute(now)

        # Assert
        assert result.expired == [p.id for p in due]
        assert result.skipped == 0
        assert all(p.status == ProposalStatus.EXPIRED for p in due)
        mock_proposal_repository.find_expirable.assert_called_once_with(now, limit=50)
        actors = {call[0][0].actor for call in mock_event_repository.record.call_args_list}
        assert actors == {"system"}

    @pytest.mark.asyncio
    async def test_sweep_skips_lost_races(
        self, use_case, make_proposal, mock_proposal_repository
    ):
        """Test a proposal accepted after selection is counted as skipped."""
        # Arrange
        yesterday = datetime.now(timezone.utc) - timedelta(days=1)
        raced = make_proposal(ProposalStatus.SENT, valid_until=yesterday)
        due = make_proposal(ProposalStatus.SENT, valid_until=yesterday)
        mock_proposal_repository.find_expirable = AsyncMock(return_value=[raced, due])

        async def _update(proposal, expected):
            if proposal.id == raced.id:
                raise ProposalStateError("accepted", "sent")
            return proposal

        mock_proposal_repository.update = AsyncMock(side_effect=_update)

        # Act
        result = await use_case.execute()

        # Assert
        assert result.expired == [due.id]
        assert result.skipped == 1

    @pytest.mark.asyncio
    async def test_sweep_with_nothing_due(self, use_case, mock_event_repository):
        """Test an empty sweep records nothing."""
        # Act
        result = await use_case.execute()

        # Assert
        assert result.expired == []
        assert result.skipped == 0
        mock_event_repository.record.assert_not_called()
