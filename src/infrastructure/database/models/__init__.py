"""
Database models package.
"""

from .base import Base, BaseModel
from .proposal import ProposalModel
from .proposal_event import ProposalEventModel
from .used_token import UsedApprovalTokenModel

__all__ = [
    "Base",
    "BaseModel",
    "ProposalModel",
    "ProposalEventModel",
    "UsedApprovalTokenModel",
]
