"""
Application interfaces package.
"""

from .providers import (
    LocationVerifierInterface,
    MarketProfile,
    PaymentEvent,
    PaymentProviderInterface,
    PaymentSession,
    PaymentSessionRequest,
    ProposalMailerInterface,
    RiskProfile,
    VerifiedLocation,
)
from .repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
    UsedTokenRepositoryInterface,
)
from .services import TokenSignerInterface, TransactionServiceInterface

__all__ = [
    "LocationVerifierInterface",
    "MarketProfile",
    "PaymentEvent",
    "PaymentProviderInterface",
    "PaymentSession",
    "PaymentSessionRequest",
    "ProposalEventRepositoryInterface",
    "ProposalMailerInterface",
    "ProposalRepositoryInterface",
    "RiskProfile",
    "TokenSignerInterface",
    "TransactionServiceInterface",
    "UsedTokenRepositoryInterface",
    "VerifiedLocation",
]
