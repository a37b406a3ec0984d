"""
Proposal SQLAlchemy model.
"""

from sqlalchemy import JSON, Column, DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import relationship

from src.domain.value_objects.proposal_status import ProposalStatus

from .base import BaseModel

MONEY = Numeric(precision=12, scale=2)
RATE = Numeric(precision=5, scale=4)


class ProposalModel(BaseModel):
    """Proposal database model."""

    __tablename__ = "proposals"

    # Customer
    customer_name = Column(String(255), nullable=False)
    customer_email = Column(String(255), nullable=False, index=True)
    customer_phone = Column(String(50), nullable=False)
    customer_address = Column(Text)

    # Frozen inputs and computed money fields
    inputs = Column(JSON, nullable=False)
    breakdown = Column(JSON, nullable=False)
    subtotal = Column(MONEY, nullable=False)
    tax = Column(MONEY, nullable=False)
    total = Column(MONEY, nullable=False)
    deposit_amount = Column(MONEY, nullable=False)
    balance = Column(MONEY, nullable=False)
    tax_rate = Column(RATE, nullable=False)
    deposit_rate = Column(RATE, nullable=False)

    # Assets
    pdf_path = Column(String(500))
    pdf_version = Column(Integer, default=1, nullable=False)
    web_url = Column(String(500))

    status = Column(
        String(20), default=ProposalStatus.DRAFT.value, nullable=False, index=True
    )
    valid_until = Column(DateTime(timezone=True))

    # Audit
    sent_at = Column(DateTime(timezone=True))
    sent_by = Column(String(255))
    viewed_at = Column(DateTime(timezone=True))
    accepted_at = Column(DateTime(timezone=True))
    accepted_by_name = Column(String(255))
    accepted_by_signature = Column(Text)
    accepted_ip = Column(String(64))
    accepted_user_agent = Column(String(500))
    payment_session_id = Column(String(255), index=True)
    payment_url = Column(String(1000))
    paid_at = Column(DateTime(timezone=True))
    payment_amount = Column(MONEY)
    payment_reference = Column(String(255))
    expired_at = Column(DateTime(timezone=True))
    cancelled_at = Column(DateTime(timezone=True))
    cancellation_reason = Column(Text)

    used_tokens = relationship(
        "UsedApprovalTokenModel", back_populates="proposal", cascade="all, delete-orphan"
    )
    events = relationship(
        "ProposalEventModel", back_populates="proposal", cascade="all, delete-orphan"
    )

    __table_args__ = (
        Index("idx_proposal_status_valid_until", "status", "valid_until"),
    )

    def __repr__(self) -> str:
        return f"<Proposal(id={self.id}, status={self.status}, total={self.total})>"
