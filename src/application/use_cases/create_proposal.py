"""Create proposal use cases."""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.proposal_calculator import ProposalCalculator
from src.application.services.quote_assembler import QuoteAssembler
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.priced_quote import PricedQuote
from src.domain.value_objects.proposal_details import ProposalInputs
from src.domain.value_objects.quote_request import QuoteRequest

logger = get_logger(__name__)


@dataclass
class CreateProposalRequest:
    """Request for creating a proposal from operator-entered line items."""

    customer: Customer
    inputs: ProposalInputs
    breakdown: List[LineItem]
    created_by: Optional[str] = None
    quote_id: Optional[str] = None


@dataclass
class CreateProposalFromQuoteRequest:
    """Request for creating a proposal from a freshly priced quote."""

    customer: Customer
    quote_request: QuoteRequest
    package_id: str = "standard"
    obstacles: Tuple[str, ...] = field(default_factory=tuple)
    notes: Optional[str] = None
    created_by: Optional[str] = None


@dataclass
class CreateProposalFromQuoteResult:
    """Result of creating a proposal from a quote."""

    proposal: Proposal
    quote: PricedQuote


class CreateProposalUseCase:
    """Use case for creating a draft proposal with computed totals."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        calculator: ProposalCalculator,
        transaction_service: TransactionServiceInterface,
        validity_days: int = 30,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.calculator = calculator
        self.transaction_service = transaction_service
        self.validity_days = validity_days

    async def execute(self, request: CreateProposalRequest) -> Proposal:
        """Create a draft proposal."""
        # 1. Operator custom services become line items too
        breakdown = list(request.breakdown) + self.calculator.custom_service_items(
            request.inputs.custom_services
        )

        # 2. Compute totals once; they never change afterwards
        totals = self.calculator.calculate(breakdown)
        proposal = Proposal.create(
            customer=request.customer,
            inputs=request.inputs,
            breakdown=breakdown,
            totals=totals,
            validity_days=self.validity_days,
        )

        # 3. Persist with its creation event
        async def _persist() -> Proposal:
            created = await self.proposal_repo.create(proposal)
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=created.id,
                    event_type=ProposalEventType.CREATED,
                    actor=request.created_by,
                    metadata={
                        "total": str(totals.total),
                        "deposit_amount": str(totals.deposit_amount),
                        "quote_id": request.quote_id,
                    },
                )
            )
            return created

        created = await self.transaction_service.execute_in_transaction(_persist)

        logger.info(
            "Proposal created",
            proposal_id=str(created.id),
            customer_email=created.customer.email,
            line_items=len(breakdown),
            total=str(totals.total),
            valid_until=created.valid_until.isoformat(),
        )

        return created


class CreateProposalFromQuoteUseCase:
    """Use case for turning a quote request into a draft proposal.

    The quote is re-priced server-side so client-supplied prices are never
    trusted.
    """

    def __init__(
        self,
        assembler: QuoteAssembler,
        create_proposal: CreateProposalUseCase,
    ):
        self.assembler = assembler
        self.create_proposal = create_proposal

    async def execute(
        self, request: CreateProposalFromQuoteRequest
    ) -> CreateProposalFromQuoteResult:
        """Price the quote and create a proposal from it."""
        # 1. Price the quote
        quote = await self.assembler.assemble(request.quote_request)

        # 2. Derive line items and frozen inputs
        breakdown = self.create_proposal.calculator.line_items_from_quote(quote)
        inputs = ProposalInputs(
            acreage=request.quote_request.acreage,
            package_id=request.package_id,
            address=quote.location.address,
            selected_services=(request.quote_request.service_type.value,),
            obstacles=request.obstacles,
            notes=request.notes,
        )

        # 3. Create the proposal
        proposal = await self.create_proposal.execute(
            CreateProposalRequest(
                customer=request.customer,
                inputs=inputs,
                breakdown=breakdown,
                created_by=request.created_by,
                quote_id=quote.quote_id,
            )
        )

        return CreateProposalFromQuoteResult(proposal=proposal, quote=quote)
