"""
Proposal-related API schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.proposal_details import CustomService, ProposalInputs
from src.domain.value_objects.proposal_status import ProposalStatus

from .common import TimestampMixin
from .quote import QuoteRequestSchema, QuoteResponse


class CustomerSchema(BaseModel):
    """Customer contact schema."""

    name: str = Field(..., min_length=1, max_length=255)
    email: str = Field(..., min_length=3, max_length=255)
    phone: str = Field(..., min_length=1, max_length=50)
    address: Optional[str] = Field(None, max_length=500)

    def to_domain(self) -> Customer:
        return Customer(
            name=self.name, email=self.email, phone=self.phone, address=self.address
        )


class CustomServiceSchema(BaseModel):
    """Operator-entered service schema."""

    name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    quantity: Decimal = Field(..., gt=0)
    rate: Decimal = Field(..., ge=0)


class ProposalInputsSchema(BaseModel):
    """Inputs that produced the proposal."""

    acreage: Decimal
    package_id: str = Field(..., min_length=1, max_length=100)
    address: str = Field(..., min_length=1, max_length=500)
    selected_services: List[str] = Field(default_factory=list)
    obstacles: List[str] = Field(default_factory=list)
    custom_services: List[CustomServiceSchema] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=5000)

    def to_domain(self) -> ProposalInputs:
        return ProposalInputs(
            acreage=self.acreage,
            package_id=self.package_id,
            address=self.address,
            selected_services=tuple(self.selected_services),
            obstacles=tuple(self.obstacles),
            custom_services=tuple(
                CustomService(
                    name=service.name,
                    description=service.description,
                    quantity=service.quantity,
                    rate=service.rate,
                )
                for service in self.custom_services
            ),
            notes=self.notes,
        )

    @classmethod
    def from_domain(cls, inputs: ProposalInputs) -> "ProposalInputsSchema":
        return cls(
            acreage=inputs.acreage,
            package_id=inputs.package_id,
            address=inputs.address,
            selected_services=list(inputs.selected_services),
            obstacles=list(inputs.obstacles),
            custom_services=[
                CustomServiceSchema(
                    name=service.name,
                    description=service.description,
                    quantity=service.quantity,
                    rate=service.rate,
                )
                for service in inputs.custom_services
            ],
            notes=inputs.notes,
        )


class LineItemSchema(BaseModel):
    """Breakdown row schema."""

    service_id: str = Field(..., min_length=1, max_length=100)
    service_name: str = Field(..., min_length=1, max_length=255)
    description: str = ""
    quantity: Decimal
    rate: Decimal
    total: Optional[Decimal] = Field(
        None, description="Defaults to quantity x rate rounded to cents"
    )

    model_config = {"from_attributes": True}

    def to_domain(self) -> LineItem:
        return LineItem(
            service_id=self.service_id,
            service_name=self.service_name,
            description=self.description,
            quantity=self.quantity,
            rate=self.rate,
            total=self.total,
        )


class ProposalCreateRequest(BaseModel):
    """Proposal creation request schema."""

    customer: CustomerSchema
    inputs: ProposalInputsSchema
    breakdown: List[LineItemSchema] = Field(default_factory=list)
    quote_id: Optional[str] = Field(None, max_length=64)


class ProposalFromQuoteRequest(BaseModel):
    """Create a proposal by pricing a quote request server-side."""

    customer: CustomerSchema
    quote: QuoteRequestSchema
    package_id: str = Field("standard", min_length=1, max_length=100)
    obstacles: List[str] = Field(default_factory=list)
    notes: Optional[str] = Field(None, max_length=5000)


class ProposalTotalsSchema(BaseModel):
    """Computed money fields."""

    subtotal: Decimal
    tax: Decimal
    tax_rate: Decimal
    total: Decimal
    deposit_amount: Decimal
    deposit_rate: Decimal
    balance: Decimal

    model_config = {"from_attributes": True}


class ProposalAssetsSchema(BaseModel):
    """Document and link references."""

    pdf_path: Optional[str] = None
    pdf_version: int = 1
    web_url: Optional[str] = None

    model_config = {"from_attributes": True}


class ProposalResponse(TimestampMixin):
    """Proposal response schema."""

    id: UUID
    status: ProposalStatus
    customer: CustomerSchema
    inputs: ProposalInputsSchema
    breakdown: List[LineItemSchema]
    totals: ProposalTotalsSchema
    assets: ProposalAssetsSchema
    valid_until: Optional[datetime] = None

    sent_at: Optional[datetime] = None
    sent_by: Optional[str] = None
    viewed_at: Optional[datetime] = None
    accepted_at: Optional[datetime] = None
    accepted_by_name: Optional[str] = None
    accepted_by_signature: Optional[str] = None
    accepted_ip: Optional[str] = None
    accepted_user_agent: Optional[str] = None
    payment_session_id: Optional[str] = None
    payment_url: Optional[str] = None
    paid_at: Optional[datetime] = None
    payment_amount: Optional[Decimal] = None
    payment_reference: Optional[str] = None
    expired_at: Optional[datetime] = None
    cancelled_at: Optional[datetime] = None
    cancellation_reason: Optional[str] = None

    @classmethod
    def from_domain(cls, proposal: Proposal) -> "ProposalResponse":
        """Build the response from a proposal entity."""
        return cls(
            id=proposal.id,
            status=proposal.status,
            customer=CustomerSchema(**proposal.customer.to_dict()),
            inputs=ProposalInputsSchema.from_domain(proposal.inputs),
            breakdown=[LineItemSchema.model_validate(item) for item in proposal.breakdown],
            totals=ProposalTotalsSchema.model_validate(proposal.totals),
            assets=ProposalAssetsSchema.model_validate(proposal.assets),
            valid_until=proposal.valid_until,
            sent_at=proposal.sent_at,
            sent_by=proposal.sent_by,
            viewed_at=proposal.viewed_at,
            accepted_at=proposal.accepted_at,
            accepted_by_name=proposal.accepted_by_name,
            accepted_by_signature=proposal.accepted_by_signature,
            accepted_ip=proposal.accepted_ip,
            accepted_user_agent=proposal.accepted_user_agent,
            payment_session_id=proposal.payment_session_id,
            payment_url=proposal.payment_url,
            paid_at=proposal.paid_at,
            payment_amount=proposal.payment_amount,
            payment_reference=proposal.payment_reference,
            expired_at=proposal.expired_at,
            cancelled_at=proposal.cancelled_at,
            cancellation_reason=proposal.cancellation_reason,
            created_at=proposal.created_at,
            updated_at=proposal.updated_at,
        )


class ProposalEventSchema(BaseModel):
    """Audit log entry schema."""

    id: UUID
    event_type: ProposalEventType
    occurred_at: datetime
    actor: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None

    @classmethod
    def from_domain(cls, event: ProposalEvent) -> "ProposalEventSchema":
        return cls(
            id=event.id,
            event_type=event.event_type,
            occurred_at=event.occurred_at,
            actor=event.actor,
            metadata=event.metadata,
        )


class ProposalDetailResponse(BaseModel):
    """Proposal with its event history."""

    proposal: ProposalResponse
    events: List[ProposalEventSchema]


class ProposalFromQuoteResponse(BaseModel):
    """Proposal created from a priced quote."""

    proposal: ProposalResponse
    quote: QuoteResponse


class SendProposalResponse(BaseModel):
    """Result of sending a proposal."""

    proposal_id: UUID
    status: ProposalStatus
    email_id: str
    approve_url: str


class CancelProposalRequest(BaseModel):
    """Cancellation request schema."""

    reason: Optional[str] = Field(None, max_length=1000)


class ExpirySweepResponse(BaseModel):
    """Result of an expiry sweep."""

    expired: List[UUID]
    skipped: int
