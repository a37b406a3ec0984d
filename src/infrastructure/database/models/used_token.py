"""
Consumed approval token SQLAlchemy model.
"""

from sqlalchemy import Column, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel


class UsedApprovalTokenModel(BaseModel):
    """One row per consumed approval token; only the SHA-256 of its jti is kept."""

    __tablename__ = "used_approval_tokens"

    proposal_id = Column(
        Uuid(as_uuid=True), ForeignKey("proposals.id"), nullable=False, index=True
    )
    token_hash = Column(String(64), nullable=False)

    proposal = relationship("ProposalModel", back_populates="used_tokens")

    __table_args__ = (
        # The unique index is what makes acceptance single-use under concurrency
        Index(
            "idx_used_approval_token_unique", "proposal_id", "token_hash", unique=True
        ),
    )
