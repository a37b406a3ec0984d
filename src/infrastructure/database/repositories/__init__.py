"""
Database repositories package.
"""

from .proposal_event_repository import ProposalEventRepository
from .proposal_repository import ProposalRepository
from .transaction_repository import TransactionService
from .used_token_repository import UsedTokenRepository

__all__ = [
    "ProposalEventRepository",
    "ProposalRepository",
    "TransactionService",
    "UsedTokenRepository",
]
