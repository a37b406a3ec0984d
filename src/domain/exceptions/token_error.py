"""
Approval token domain exceptions.
"""

from uuid import UUID


class TokenError(Exception):
    """Base exception for approval token errors."""

    pass


class TokenInvalidError(TokenError):
    """Raised when a token is malformed or its signature does not verify."""

    def __init__(self, reason: str = "invalid approval token"):
        self.reason = reason
        super().__init__(f"Approval token rejected: {reason}")


class TokenExpiredError(TokenError):
    """Raised when a correctly signed token is past its expiry."""

    def __init__(self):
        super().__init__("Approval link has expired, request a new one")


class TokenProposalMismatchError(TokenInvalidError):
    """Raised when a token bound to one proposal is presented for another."""

    def __init__(self, token_proposal_id: str, requested_proposal_id: UUID):
        self.token_proposal_id = token_proposal_id
        self.requested_proposal_id = requested_proposal_id
        super().__init__(
            f"token issued for proposal {token_proposal_id}, "
            f"presented for {requested_proposal_id}"
        )


class TokenAlreadyUsedError(TokenError):
    """Raised when a token has already been consumed."""

    def __init__(self, proposal_id: UUID):
        self.proposal_id = proposal_id
        super().__init__(f"Proposal {proposal_id} has already been approved")
