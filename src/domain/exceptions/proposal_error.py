"""
Proposal lifecycle domain exceptions.
"""

from uuid import UUID


class ProposalError(Exception):
    """Base exception for proposal errors."""

    pass


class ProposalNotFoundError(ProposalError):
    """Raised when a proposal does not exist."""

    def __init__(self, proposal_id: UUID):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} not found")


class ProposalStateError(ProposalError):
    """Raised when a transition is not legal from the current status."""

    def __init__(self, current_status: str, required_status: str):
        self.current_status = current_status
        self.required_status = required_status
        super().__init__(
            f"Invalid proposal status '{current_status}', expected '{required_status}'"
        )
