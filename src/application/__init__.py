"""
Application layer package.

This package contains use cases, services, and interfaces that implement
the business logic of the application.
"""

from .interfaces import (
    LocationVerifierInterface,
    PaymentProviderInterface,
    ProposalEventRepositoryInterface,
    ProposalMailerInterface,
    ProposalRepositoryInterface,
    TokenSignerInterface,
    TransactionServiceInterface,
    UsedTokenRepositoryInterface,
)
from .services import (
    ApprovalTokenManager,
    ProposalCalculator,
    QuoteAssembler,
    TransportCostModel,
)

__all__ = [
    # Interfaces
    "LocationVerifierInterface",
    "PaymentProviderInterface",
    "ProposalEventRepositoryInterface",
    "ProposalMailerInterface",
    "ProposalRepositoryInterface",
    "TokenSignerInterface",
    "TransactionServiceInterface",
    "UsedTokenRepositoryInterface",
    # Services
    "ApprovalTokenManager",
    "ProposalCalculator",
    "QuoteAssembler",
    "TransportCostModel",
]
