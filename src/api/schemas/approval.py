"""
Customer approval API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities.proposal import Proposal
from src.domain.value_objects.proposal_status import ProposalStatus

from .proposal import LineItemSchema, ProposalTotalsSchema


class PublicProposalSchema(BaseModel):
    """What the customer sees behind an approval link."""

    id: UUID
    status: ProposalStatus
    customer_name: str
    address: str
    acreage: Decimal
    package_id: str
    obstacles: List[str]
    breakdown: List[LineItemSchema]
    totals: ProposalTotalsSchema
    valid_until: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    payment_url: Optional[str] = None

    @classmethod
    def from_domain(cls, proposal: Proposal) -> "PublicProposalSchema":
        return cls(
            id=proposal.id,
            status=proposal.status,
            customer_name=proposal.customer.name,
            address=proposal.inputs.address,
            acreage=proposal.inputs.acreage,
            package_id=proposal.inputs.package_id,
            obstacles=list(proposal.inputs.obstacles),
            breakdown=[LineItemSchema.model_validate(item) for item in proposal.breakdown],
            totals=ProposalTotalsSchema.model_validate(proposal.totals),
            valid_until=proposal.valid_until,
            accepted_at=proposal.accepted_at,
            payment_url=proposal.payment_url,
        )


class ApprovalViewResponse(BaseModel):
    """Approval page payload."""

    proposal: PublicProposalSchema
    token_used: bool = Field(..., description="True when this link was already used")


class AcceptProposalRequestSchema(BaseModel):
    """Customer acceptance request schema.

    Name and consent are checked by the accept use case so that both are
    reported as field errors together.
    """

    token: str = Field("", max_length=4096)
    full_name: str = Field("", max_length=255)
    consent: bool = False
    signature: Optional[str] = Field(None, max_length=20000)


class AcceptProposalResponse(BaseModel):
    """Acceptance result schema."""

    proposal_id: UUID
    status: ProposalStatus
    deposit_required: bool
    deposit_amount: Decimal
    payment_url: Optional[str] = None


class DepositCheckoutRequestSchema(BaseModel):
    """Request for a new deposit checkout session."""

    token: str = Field("", max_length=4096)


class DepositCheckoutResponse(BaseModel):
    """Fresh deposit checkout session."""

    proposal_id: UUID
    session_id: str
    payment_url: str
    deposit_amount: Decimal
