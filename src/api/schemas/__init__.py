"""
API schemas package.
"""

from .approval import (
    AcceptProposalRequestSchema,
    AcceptProposalResponse,
    ApprovalViewResponse,
    DepositCheckoutRequestSchema,
    DepositCheckoutResponse,
    PublicProposalSchema,
)
from .common import BaseResponse, ErrorResponse, FieldErrorSchema, TimestampMixin
from .payment import PaymentWebhookResponse
from .proposal import (
    CancelProposalRequest,
    CustomerSchema,
    ExpirySweepResponse,
    LineItemSchema,
    ProposalCreateRequest,
    ProposalDetailResponse,
    ProposalEventSchema,
    ProposalFromQuoteRequest,
    ProposalFromQuoteResponse,
    ProposalInputsSchema,
    ProposalResponse,
    SendProposalResponse,
)
from .quote import QuoteRequestSchema, QuoteResponse

__all__ = [
    "AcceptProposalRequestSchema",
    "AcceptProposalResponse",
    "ApprovalViewResponse",
    "BaseResponse",
    "CancelProposalRequest",
    "CustomerSchema",
    "DepositCheckoutRequestSchema",
    "DepositCheckoutResponse",
    "ErrorResponse",
    "ExpirySweepResponse",
    "FieldErrorSchema",
    "LineItemSchema",
    "PaymentWebhookResponse",
    "ProposalCreateRequest",
    "ProposalDetailResponse",
    "ProposalEventSchema",
    "ProposalFromQuoteRequest",
    "ProposalFromQuoteResponse",
    "ProposalInputsSchema",
    "ProposalResponse",
    "PublicProposalSchema",
    "QuoteRequestSchema",
    "QuoteResponse",
    "SendProposalResponse",
    "TimestampMixin",
]
