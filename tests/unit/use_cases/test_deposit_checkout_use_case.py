"""
Unit tests for DepositCheckoutUseCase.
"""

from decimal import Decimal
from unittest.mock import AsyncMock
from uuid import uuid4

import pytest

from src.application.interfaces.providers import PaymentSession
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.application.services.proposal_calculator import ProposalCalculator
from src.application.use_cases.deposit_checkout import DepositCheckoutUseCase
from src.domain.events.proposal_event import ProposalEventType
from src.domain.exceptions.payment_error import PaymentInitiationError
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.exceptions.token_error import (
    TokenInvalidError,
    TokenProposalMismatchError,
)
from src.domain.value_objects.proposal_status import ProposalStatus


class TestDepositCheckoutUseCase:
    """Test cases for DepositCheckoutUseCase."""

    @pytest.fixture
    def token_manager(self, token_signer, mock_used_token_repository):
        """Token manager over the mocked used-token repository."""
        return ApprovalTokenManager(token_signer, mock_used_token_repository)

    @pytest.fixture
    def use_case(
        self,
        mock_proposal_repository,
        mock_event_repository,
        token_manager,
        mock_payment_provider,
        mock_transaction_service,
    ):
        """Create the use case with mocked collaborators."""
        mock_payment_provider.create_deposit_session = AsyncMock(
            return_value=PaymentSession(
                session_id="cs_retry_1", redirect_url="https://pay.test/cs_retry_1"
            )
        )
        return DepositCheckoutUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            token_manager=token_manager,
            payment_provider=mock_payment_provider,
            transaction_service=mock_transaction_service,
            public_base_url="https://proposals.test/",
        )

    @pytest.fixture
    def accepted_proposal(self, make_proposal):
        """Accepted proposal whose first checkout session was abandoned."""
        proposal = make_proposal(ProposalStatus.ACCEPTED)
        proposal.payment_session_id = "cs_abandoned"
        proposal.payment_url = "https://pay.test/cs_abandoned"
        return proposal

    @pytest.mark.asyncio
    async def test_reopen_checkout(
        self,
        use_case,
        accepted_proposal,
        token_manager,
        mock_proposal_repository,
        mock_event_repository,
        mock_used_token_repository,
        mock_payment_provider,
    ):
        """Test a new session replaces the abandoned one."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=accepted_proposal)
        mock_used_token_repository.exists = AsyncMock(return_value=True)
        token = token_manager.issue(accepted_proposal.id).token

        # Act
        result = await use_case.execute(accepted_proposal.id, token)

        # Assert
        assert result.session_id == "cs_retry_1"
        assert result.payment_url == "https://pay.test/cs_retry_1"
        assert result.deposit_amount == Decimal("1070.00")
        assert accepted_proposal.payment_session_id == "cs_retry_1"
        assert accepted_proposal.status == ProposalStatus.ACCEPTED

        session_request = mock_payment_provider.create_deposit_session.call_args[0][0]
        assert session_request.amount == Decimal("1070.00")
        assert session_request.success_url == (
            f"https://proposals.test/p/{accepted_proposal.id}?payment=success"
        )

        mock_proposal_repository.update.assert_called_once_with(
            accepted_proposal, [ProposalStatus.ACCEPTED]
        )
        event = mock_event_repository.record.call_args[0][0]
        assert event.event_type == ProposalEventType.PAYMENT_INITIATED
        assert event.metadata["replaces_session_id"] == "cs_abandoned"

    @pytest.mark.asyncio
    async def test_each_attempt_uses_new_idempotency_key(
        self, use_case, accepted_proposal, token_manager, mock_proposal_repository, mock_payment_provider
    ):
        """Test repeated retries are not collapsed by the provider."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=accepted_proposal)
        token = token_manager.issue(accepted_proposal.id).token

        # Act
        await use_case.execute(accepted_proposal.id, token)
        await use_case.execute(accepted_proposal.id, token)

        # Assert
        keys = [
            call[0][0].idempotency_key
            for call in mock_payment_provider.create_deposit_session.call_args_list
        ]
        assert len(set(keys)) == 2

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "status",
        [
            ProposalStatus.SENT,
            ProposalStatus.VIEWED,
            ProposalStatus.PAID,
            ProposalStatus.CANCELLED,
        ],
    )
    async def test_requires_accepted(
        self,
        use_case,
        make_proposal,
        token_manager,
        mock_proposal_repository,
        mock_payment_provider,
        status,
    ):
        """Test only accepted proposals can start a deposit payment."""
        # Arrange
        proposal = make_proposal(status)
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)
        token = token_manager.issue(proposal.id).token

        # Act & Assert
        with pytest.raises(ProposalStateError):
            await use_case.execute(proposal.id, token)

        mock_payment_provider.create_deposit_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_no_deposit_owed(
        self,
        use_case,
        make_proposal,
        token_manager,
        mock_proposal_repository,
        mock_payment_provider,
    ):
        """Test proposals without a deposit have nothing to pay up front."""
        # Arrange
        proposal = make_proposal(
            ProposalStatus.ACCEPTED,
            calculator=ProposalCalculator(deposit_rate=Decimal("0")),
        )
        mock_proposal_repository.get_by_id = AsyncMock(return_value=proposal)
        token = token_manager.issue(proposal.id).token

        # Act & Assert
        with pytest.raises(ProposalStateError):
            await use_case.execute(proposal.id, token)

        mock_payment_provider.create_deposit_session.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_token(self, use_case, accepted_proposal, mock_proposal_repository):
        """Test a forged token is rejected before any lookup."""
        with pytest.raises(TokenInvalidError):
            await use_case.execute(accepted_proposal.id, "not-a-token")

        mock_proposal_repository.get_by_id.assert_not_called()

    @pytest.mark.asyncio
    async def test_token_for_other_proposal(self, use_case, accepted_proposal, token_manager):
        """Test a token only opens checkout for its own proposal."""
        token = token_manager.issue(uuid4()).token

        with pytest.raises(TokenProposalMismatchError):
            await use_case.execute(accepted_proposal.id, token)

    @pytest.mark.asyncio
    async def test_not_found(self, use_case, token_manager):
        """Test an unknown proposal."""
        proposal_id = uuid4()
        token = token_manager.issue(proposal_id).token

        with pytest.raises(ProposalNotFoundError):
            await use_case.execute(proposal_id, token)

    @pytest.mark.asyncio
    async def test_provider_failure_keeps_previous_session(
        self,
        use_case,
        accepted_proposal,
        token_manager,
        mock_proposal_repository,
        mock_payment_provider,
    ):
        """Test a provider outage changes nothing."""
        # Arrange
        mock_proposal_repository.get_by_id = AsyncMock(return_value=accepted_proposal)
        mock_payment_provider.create_deposit_session = AsyncMock(
            side_effect=PaymentInitiationError("MockPayments", "card network down")
        )
        token = token_manager.issue(accepted_proposal.id).token

        # Act & Assert
        with pytest.raises(PaymentInitiationError):
            await use_case.execute(accepted_proposal.id, token)

        assert accepted_proposal.payment_session_id == "cs_abandoned"
        mock_proposal_repository.update.assert_not_called()
