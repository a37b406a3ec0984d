"""Operator proposal endpoints."""

from typing import Optional
from uuid import UUID

import structlog
from fastapi import APIRouter, status

from src.api.dependencies import (
    CancelProposalUseCaseDep,
    CreateProposalFromQuoteUseCaseDep,
    CreateProposalUseCaseDep,
    ExpireDueProposalsUseCaseDep,
    ExpireProposalUseCaseDep,
    GetProposalUseCaseDep,
    OperatorDep,
    SendProposalUseCaseDep,
)
from src.api.schemas.proposal import (
    CancelProposalRequest,
    ExpirySweepResponse,
    ProposalCreateRequest,
    ProposalDetailResponse,
    ProposalEventSchema,
    ProposalFromQuoteRequest,
    ProposalFromQuoteResponse,
    ProposalResponse,
    SendProposalResponse,
)
from src.api.schemas.quote import QuoteResponse
from src.application.use_cases.create_proposal import (
    CreateProposalFromQuoteRequest,
    CreateProposalRequest,
)

logger = structlog.get_logger()
router = APIRouter(prefix="/proposals", tags=["proposals"])


@router.post("", response_model=ProposalResponse, status_code=status.HTTP_201_CREATED)
async def create_proposal(
    proposal_data: ProposalCreateRequest,
    use_case: CreateProposalUseCaseDep,
    operator: OperatorDep,
):
    """Create a draft proposal from operator-entered line items."""
    request = CreateProposalRequest(
        customer=proposal_data.customer.to_domain(),
        inputs=proposal_data.inputs.to_domain(),
        breakdown=[item.to_domain() for item in proposal_data.breakdown],
        created_by=operator,
        quote_id=proposal_data.quote_id,
    )

    proposal = await use_case.execute(request)
    return ProposalResponse.from_domain(proposal)


@router.post(
    "/from-quote",
    response_model=ProposalFromQuoteResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_proposal_from_quote(
    proposal_data: ProposalFromQuoteRequest,
    use_case: CreateProposalFromQuoteUseCaseDep,
    operator: OperatorDep,
):
    """Price a quote request and create a draft proposal from it."""
    request = CreateProposalFromQuoteRequest(
        customer=proposal_data.customer.to_domain(),
        quote_request=proposal_data.quote.to_domain(),
        package_id=proposal_data.package_id,
        obstacles=tuple(proposal_data.obstacles),
        notes=proposal_data.notes,
        created_by=operator,
    )

    result = await use_case.execute(request)

    logger.info(
        "Proposal created from quote",
        proposal_id=str(result.proposal.id),
        quote_id=result.quote.quote_id,
    )

    return ProposalFromQuoteResponse(
        proposal=ProposalResponse.from_domain(result.proposal),
        quote=QuoteResponse.model_validate(result.quote),
    )


@router.post("/expire-due", response_model=ExpirySweepResponse)
async def expire_due_proposals(
    use_case: ExpireDueProposalsUseCaseDep,
    operator: OperatorDep,
):
    """Expire every open proposal whose validity window has passed."""
    result = await use_case.execute()
    return ExpirySweepResponse(expired=result.expired, skipped=result.skipped)


@router.get("/{proposal_id}", response_model=ProposalDetailResponse)
async def get_proposal(
    proposal_id: UUID,
    use_case: GetProposalUseCaseDep,
    operator: OperatorDep,
):
    """Get a proposal with its event history."""
    result = await use_case.execute(proposal_id)
    return ProposalDetailResponse(
        proposal=ProposalResponse.from_domain(result.proposal),
        events=[ProposalEventSchema.from_domain(event) for event in result.events],
    )


@router.post("/{proposal_id}/send", response_model=SendProposalResponse)
async def send_proposal(
    proposal_id: UUID,
    use_case: SendProposalUseCaseDep,
    operator: OperatorDep,
):
    """Email the approval link for a draft proposal."""
    result = await use_case.execute(proposal_id, sent_by=operator)
    return SendProposalResponse(
        proposal_id=result.proposal.id,
        status=result.proposal.status,
        email_id=result.email_id,
        approve_url=result.approve_url,
    )


@router.post("/{proposal_id}/cancel", response_model=ProposalResponse)
async def cancel_proposal(
    proposal_id: UUID,
    use_case: CancelProposalUseCaseDep,
    operator: OperatorDep,
    cancel_data: Optional[CancelProposalRequest] = None,
):
    """Cancel a proposal that has not been paid."""
    reason = cancel_data.reason if cancel_data else None
    proposal = await use_case.execute(proposal_id, reason=reason, actor=operator)
    return ProposalResponse.from_domain(proposal)


@router.post("/{proposal_id}/expire", response_model=ProposalResponse)
async def expire_proposal(
    proposal_id: UUID,
    use_case: ExpireProposalUseCaseDep,
    operator: OperatorDep,
):
    """Expire an open proposal immediately."""
    proposal = await use_case.execute(proposal_id, actor=operator)
    return ProposalResponse.from_domain(proposal)
