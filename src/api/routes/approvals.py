"""Customer approval endpoints reached through the emailed link."""

from uuid import UUID

import structlog
from fastapi import APIRouter, Query, Request

from src.api.dependencies import (
    AcceptProposalUseCaseDep,
    DepositCheckoutUseCaseDep,
    ViewProposalUseCaseDep,
)
from src.api.schemas.approval import (
    AcceptProposalRequestSchema,
    AcceptProposalResponse,
    ApprovalViewResponse,
    DepositCheckoutRequestSchema,
    DepositCheckoutResponse,
    PublicProposalSchema,
)
from src.application.use_cases.accept_proposal import AcceptProposalRequest

logger = structlog.get_logger()
router = APIRouter(prefix="/approvals", tags=["approvals"])


def _client_ip(request: Request):
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else None


@router.get("/{proposal_id}", response_model=ApprovalViewResponse)
async def view_proposal(
    proposal_id: UUID,
    use_case: ViewProposalUseCaseDep,
    t: str = Query("", description="Approval token from the emailed link"),
):
    """Show a sent proposal to its customer."""
    result = await use_case.execute(proposal_id, t)
    return ApprovalViewResponse(
        proposal=PublicProposalSchema.from_domain(result.proposal),
        token_used=result.token_used,
    )


@router.post("/{proposal_id}/accept", response_model=AcceptProposalResponse)
async def accept_proposal(
    proposal_id: UUID,
    accept_data: AcceptProposalRequestSchema,
    request: Request,
    use_case: AcceptProposalUseCaseDep,
):
    """Accept a proposal and start the deposit payment when one is owed."""
    result = await use_case.execute(
        AcceptProposalRequest(
            proposal_id=proposal_id,
            token=accept_data.token,
            full_name=accept_data.full_name,
            consent=accept_data.consent,
            signature=accept_data.signature,
            ip=_client_ip(request),
            user_agent=request.headers.get("user-agent"),
        )
    )

    return AcceptProposalResponse(
        proposal_id=result.proposal.id,
        status=result.status,
        deposit_required=result.deposit_required,
        deposit_amount=result.deposit_amount,
        payment_url=result.payment_url,
    )


@router.post("/{proposal_id}/checkout", response_model=DepositCheckoutResponse)
async def reopen_deposit_checkout(
    proposal_id: UUID,
    checkout_data: DepositCheckoutRequestSchema,
    use_case: DepositCheckoutUseCaseDep,
):
    """Start a new deposit payment for an accepted proposal."""
    result = await use_case.execute(proposal_id, checkout_data.token)

    return DepositCheckoutResponse(
        proposal_id=result.proposal.id,
        session_id=result.session_id,
        payment_url=result.payment_url,
        deposit_amount=result.deposit_amount,
    )
