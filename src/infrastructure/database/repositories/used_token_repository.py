"""
Consumed approval token repository implementation.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import UsedTokenRepositoryInterface
from src.config.logging import get_logger
from src.domain.exceptions.token_error import TokenAlreadyUsedError
from src.infrastructure.database.models.used_token import UsedApprovalTokenModel

logger = get_logger(__name__)


class UsedTokenRepository(UsedTokenRepositoryInterface):
    """Used token repository backed by a unique index."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def exists(self, proposal_id: UUID, token_hash: str) -> bool:
        """Check if the token was already consumed."""
        stmt = select(UsedApprovalTokenModel.id).where(
            UsedApprovalTokenModel.proposal_id == proposal_id,
            UsedApprovalTokenModel.token_hash == token_hash,
        )
        return (await self.db.scalar(stmt)) is not None

    async def add(self, proposal_id: UUID, token_hash: str) -> None:
        """Insert the consumption row; a unique violation means a replay."""
        self.db.add(
            UsedApprovalTokenModel(proposal_id=proposal_id, token_hash=token_hash)
        )
        try:
            await self.db.flush()
        except IntegrityError as e:
            logger.warning(
                "Approval token replay rejected",
                proposal_id=str(proposal_id),
                error=str(e.orig),
            )
            raise TokenAlreadyUsedError(proposal_id) from e
