"""
Approval token manager.

Approval links carry a signed, expiring token bound to one proposal. A token
is single-use: consumption is recorded by the hash of its ``jti``.
"""

import hashlib
import uuid
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Any, Callable, Dict, Optional
from uuid import UUID

from src.application.interfaces.repositories import UsedTokenRepositoryInterface
from src.application.interfaces.services import TokenSignerInterface
from src.config.logging import get_logger
from src.domain.exceptions.token_error import (
    TokenInvalidError,
    TokenProposalMismatchError,
)

logger = get_logger(__name__)


def hash_token_id(token_id: str) -> str:
    """Digest stored in place of the raw token id."""
    return hashlib.sha256(token_id.encode("utf-8")).hexdigest()


@dataclass(frozen=True)
class ApprovalTokenClaims:
    """Verified claims of an approval token."""

    proposal_id: UUID
    version: int
    token_id: str
    issued_at: datetime
    expires_at: datetime

    @property
    def token_hash(self) -> str:
        return hash_token_id(self.token_id)


@dataclass(frozen=True)
class IssuedToken:
    """A freshly signed token and its claims."""

    token: str
    claims: ApprovalTokenClaims


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ApprovalTokenManager:
    """Issues, verifies and consumes approval tokens."""

    def __init__(
        self,
        signer: TokenSignerInterface,
        used_tokens: UsedTokenRepositoryInterface,
        ttl_days: int = 30,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.signer = signer
        self.used_tokens = used_tokens
        self.ttl = timedelta(days=ttl_days)
        self.clock = clock or _utc_now

    def issue(self, proposal_id: UUID, version: int = 1) -> IssuedToken:
        """Sign a new token for a proposal document version."""
        issued_at = self.clock().replace(microsecond=0)
        claims = ApprovalTokenClaims(
            proposal_id=proposal_id,
            version=version,
            token_id=uuid.uuid4().hex,
            issued_at=issued_at,
            expires_at=issued_at + self.ttl,
        )
        token = self.signer.sign(
            {
                "pid": str(proposal_id),
                "v": version,
                "jti": claims.token_id,
                "iat": int(claims.issued_at.timestamp()),
                "exp": int(claims.expires_at.timestamp()),
            }
        )

        logger.info(
            "Approval token issued",
            proposal_id=str(proposal_id),
            version=version,
            expires_at=claims.expires_at.isoformat(),
        )

        return IssuedToken(token=token, claims=claims)

    def verify(self, token: str) -> ApprovalTokenClaims:
        """Verify signature and expiry and decode the claims.

        Raises:
            TokenExpiredError: If the token is past its expiry
            TokenInvalidError: If the token is malformed or badly signed
        """
        if not token:
            raise TokenInvalidError("missing approval token")

        payload = self.signer.verify(token)
        return self._claims_from_payload(payload)

    def verify_for_proposal(self, token: str, proposal_id: UUID) -> ApprovalTokenClaims:
        """Verify a token and check it was issued for ``proposal_id``.

        Raises:
            TokenProposalMismatchError: If the token is bound to another proposal
        """
        claims = self.verify(token)
        if claims.proposal_id != proposal_id:
            logger.warning(
                "Approval token presented for wrong proposal",
                token_proposal_id=str(claims.proposal_id),
                requested_proposal_id=str(proposal_id),
            )
            raise TokenProposalMismatchError(str(claims.proposal_id), proposal_id)
        return claims

    async def is_used(self, claims: ApprovalTokenClaims) -> bool:
        return await self.used_tokens.exists(claims.proposal_id, claims.token_hash)

    async def mark_used(self, claims: ApprovalTokenClaims) -> None:
        """Consume a token; raises ``TokenAlreadyUsedError`` on a replay."""
        await self.used_tokens.add(claims.proposal_id, claims.token_hash)

    def _claims_from_payload(self, payload: Dict[str, Any]) -> ApprovalTokenClaims:
        try:
            return ApprovalTokenClaims(
                proposal_id=UUID(str(payload["pid"])),
                version=int(payload.get("v", 1)),
                token_id=str(payload["jti"]),
                issued_at=datetime.fromtimestamp(int(payload["iat"]), tz=timezone.utc),
                expires_at=datetime.fromtimestamp(int(payload["exp"]), tz=timezone.utc),
            )
        except (KeyError, TypeError, ValueError) as e:
            raise TokenInvalidError("malformed token claims") from e
