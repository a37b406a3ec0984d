"""
Domain events package.
"""

from .proposal_event import ProposalEvent, ProposalEventType

__all__ = [
    "ProposalEvent",
    "ProposalEventType",
]
