"""
Database package.
"""

from .models import (
    Base,
    BaseModel,
    ProposalEventModel,
    ProposalModel,
    UsedApprovalTokenModel,
)
from .repositories import (
    ProposalEventRepository,
    ProposalRepository,
    TransactionService,
    UsedTokenRepository,
)

__all__ = [
    "Base",
    "BaseModel",
    "ProposalEventModel",
    "ProposalModel",
    "UsedApprovalTokenModel",
    "ProposalEventRepository",
    "ProposalRepository",
    "TransactionService",
    "UsedTokenRepository",
]
