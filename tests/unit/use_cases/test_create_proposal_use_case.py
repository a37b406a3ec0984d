"""
Unit tests for the create proposal use cases.
"""

from decimal import Decimal
from unittest.mock import AsyncMock

import pytest

from src.application.interfaces.providers import VerifiedLocation
from src.application.services.quote_assembler import QuoteAssembler
from src.application.use_cases.create_proposal import (
    CreateProposalFromQuoteRequest,
    CreateProposalFromQuoteUseCase,
    CreateProposalRequest,
    CreateProposalUseCase,
)
from src.domain.events.proposal_event import ProposalEventType
from src.domain.exceptions.validation_error import ValidationError
from src.domain.value_objects.location import Coordinates, LocationReference
from src.domain.value_objects.proposal_details import CustomService, ProposalInputs
from src.domain.value_objects.proposal_status import ProposalStatus
from src.domain.value_objects.quote_request import QuoteRequest
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import VegetationDensity


class TestCreateProposalUseCase:
    """Test cases for CreateProposalUseCase."""

    @pytest.fixture
    def use_case(
        self,
        mock_proposal_repository,
        mock_event_repository,
        proposal_calculator,
        mock_transaction_service,
    ):
        """Create the use case with mocked collaborators."""
        return CreateProposalUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            calculator=proposal_calculator,
            transaction_service=mock_transaction_service,
        )

    @pytest.mark.asyncio
    async def test_execute_success(
        self,
        use_case,
        sample_customer,
        sample_inputs,
        sample_breakdown,
        mock_proposal_repository,
        mock_event_repository,
        mock_transaction_service,
    ):
        """Test a draft proposal is persisted with its totals and event."""
        # Arrange
        request = CreateProposalRequest(
            customer=sample_customer,
            inputs=sample_inputs,
            breakdown=sample_breakdown,
            created_by="ops@example.com",
            quote_id="TQ_1_abc",
        )

        # Act
        proposal = await use_case.execute(request)

        # Assert
        assert proposal.status == ProposalStatus.DRAFT
        assert proposal.totals.total == Decimal("5350.00")
        assert proposal.totals.deposit_amount == Decimal("1070.00")
        mock_transaction_service.execute_in_transaction.assert_called_once()
        mock_proposal_repository.create.assert_called_once_with(proposal)

        event = mock_event_repository.record.call_args[0][0]
        assert event.event_type == ProposalEventType.CREATED
        assert event.actor == "ops@example.com"
        assert event.metadata["quote_id"] == "TQ_1_abc"
        assert event.metadata["total"] == "5350.00"

    @pytest.mark.asyncio
    async def test_custom_services_are_added(
        self, use_case, sample_customer, sample_breakdown
    ):
        """Test custom services become extra line items."""
        # Arrange
        inputs = ProposalInputs(
            acreage=Decimal("2.5"),
            package_id="standard",
            address="1200 Cypress Hollow Rd",
            custom_services=(
                CustomService(
                    name="Haul-off",
                    description="Debris removal",
                    quantity=Decimal("1"),
                    rate=Decimal("1000"),
                ),
            ),
        )
        request = CreateProposalRequest(
            customer=sample_customer, inputs=inputs, breakdown=sample_breakdown
        )

        # Act
        proposal = await use_case.execute(request)

        # Assert
        assert [item.service_id for item in proposal.breakdown] == [
            "forestry-mulching",
            "custom-1",
        ]
        assert proposal.totals.subtotal == Decimal("6000.00")

    @pytest.mark.asyncio
    async def test_empty_breakdown_rejected(
        self, use_case, sample_customer, sample_inputs, mock_proposal_repository
    ):
        """Test nothing is persisted without line items."""
        # Arrange
        request = CreateProposalRequest(
            customer=sample_customer, inputs=sample_inputs, breakdown=[]
        )

        # Act & Assert
        with pytest.raises(ValidationError):
            await use_case.execute(request)

        mock_proposal_repository.create.assert_not_called()

    @pytest.mark.asyncio
    async def test_persistence_failure_propagates(
        self, use_case, sample_customer, sample_inputs, sample_breakdown,
        mock_proposal_repository, mock_event_repository,
    ):
        """Test repository errors abort creation."""
        # Arrange
        mock_proposal_repository.create = AsyncMock(side_effect=RuntimeError("db down"))
        request = CreateProposalRequest(
            customer=sample_customer, inputs=sample_inputs, breakdown=sample_breakdown
        )

        # Act & Assert
        with pytest.raises(RuntimeError):
            await use_case.execute(request)

        mock_event_repository.record.assert_not_called()


class TestCreateProposalFromQuoteUseCase:
    """Test cases for CreateProposalFromQuoteUseCase."""

    @pytest.fixture
    def assembler(self, pricing_table, mock_location_verifier):
        """Real assembler over a mocked verifier 40 minutes away."""
        mock_location_verifier.verify = AsyncMock(
            return_value=VerifiedLocation(
                address="1200 Cypress Hollow Rd, Sanford, FL 32771",
                coordinates=Coordinates(lat=28.8, lng=-81.27),
                duration_seconds=2400,
                distance_meters=40234,
            )
        )
        return QuoteAssembler(pricing_table, mock_location_verifier)

    @pytest.fixture
    def use_case(
        self,
        assembler,
        mock_proposal_repository,
        mock_event_repository,
        proposal_calculator,
        mock_transaction_service,
    ):
        """Create the use case."""
        create_proposal = CreateProposalUseCase(
            proposal_repo=mock_proposal_repository,
            event_repo=mock_event_repository,
            calculator=proposal_calculator,
            transaction_service=mock_transaction_service,
        )
        return CreateProposalFromQuoteUseCase(assembler, create_proposal)

    @pytest.mark.asyncio
    async def test_execute_prices_server_side(self, use_case, sample_customer):
        """Test the proposal subtotal equals the quote's final price."""
        # Arrange
        request = CreateProposalFromQuoteRequest(
            customer=sample_customer,
            quote_request=QuoteRequest(
                location=LocationReference(address="1200 Cypress Hollow Rd"),
                service_type=ServiceType.FORESTRY_MULCHING,
                acreage=Decimal("2.5"),
                density=VegetationDensity.MODERATE,
            ),
            package_id="premium",
            obstacles=("fence line",),
        )

        # Act
        result = await use_case.execute(request)

        # Assert
        proposal = result.proposal
        assert result.quote.final_price == Decimal("8400.00")
        assert proposal.totals.subtotal == Decimal("8400.00")
        assert proposal.totals.tax == Decimal("588.00")
        assert proposal.totals.total == Decimal("8988.00")
        assert proposal.inputs.address == "1200 Cypress Hollow Rd, Sanford, FL 32771"
        assert proposal.inputs.package_id == "premium"
        assert proposal.inputs.selected_services == ("forestry-mulching",)
        assert proposal.inputs.obstacles == ("fence line",)
