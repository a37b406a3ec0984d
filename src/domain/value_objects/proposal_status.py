"""
Proposal status value object.
"""

from enum import Enum
from typing import FrozenSet


class ProposalStatus(str, Enum):
    """Proposal lifecycle status enumeration."""

    DRAFT = "draft"
    SENT = "sent"
    VIEWED = "viewed"
    ACCEPTED = "accepted"
    PAID = "paid"
    EXPIRED = "expired"
    CANCELLED = "cancelled"

    def is_terminal(self) -> bool:
        """Check if no transition leaves this status."""
        return self in [self.PAID, self.EXPIRED, self.CANCELLED]

    def can_accept(self) -> bool:
        """Check if the customer may accept from this status."""
        return self in [self.SENT, self.VIEWED]

    def can_expire(self) -> bool:
        """Check if the validity window may still lapse."""
        return self in [self.DRAFT, self.SENT, self.VIEWED]

    def can_cancel(self) -> bool:
        """Check if an operator may cancel from this status."""
        return not self.is_terminal()

    def allowed_targets(self) -> FrozenSet["ProposalStatus"]:
        """Statuses reachable in one step from this one."""
        return _TRANSITIONS[self]


_TRANSITIONS = {
    ProposalStatus.DRAFT: frozenset(
        {ProposalStatus.SENT, ProposalStatus.EXPIRED, ProposalStatus.CANCELLED}
    ),
    ProposalStatus.SENT: frozenset(
        {
            ProposalStatus.VIEWED,
            ProposalStatus.ACCEPTED,
            ProposalStatus.EXPIRED,
            ProposalStatus.CANCELLED,
        }
    ),
    ProposalStatus.VIEWED: frozenset(
        {ProposalStatus.ACCEPTED, ProposalStatus.EXPIRED, ProposalStatus.CANCELLED}
    ),
    ProposalStatus.ACCEPTED: frozenset({ProposalStatus.PAID, ProposalStatus.CANCELLED}),
    ProposalStatus.PAID: frozenset(),
    ProposalStatus.EXPIRED: frozenset(),
    ProposalStatus.CANCELLED: frozenset(),
}
