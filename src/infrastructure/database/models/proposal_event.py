"""
Proposal event SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, DateTime, ForeignKey, Index, String, Uuid
from sqlalchemy.orm import relationship

from .base import BaseModel, utc_now


class ProposalEventModel(BaseModel):
    """Append-only proposal audit log."""

    __tablename__ = "proposal_events"

    proposal_id = Column(
        Uuid(as_uuid=True), ForeignKey("proposals.id"), nullable=False, index=True
    )
    event_type = Column(String(50), nullable=False, index=True)
    actor = Column(String(255))
    event_metadata = Column("metadata", JSON)
    occurred_at = Column(DateTime(timezone=True), default=utc_now, nullable=False)

    proposal = relationship("ProposalModel", back_populates="events")

    __table_args__ = (
        Index("idx_proposal_event_proposal_occurred", "proposal_id", "occurred_at"),
    )
