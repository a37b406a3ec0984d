"""
Proposal lifecycle domain events.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, Optional
from uuid import UUID, uuid4


class ProposalEventType(str, Enum):
    """Audit log event types."""

    CREATED = "CREATED"
    SENT = "SENT"
    VIEWED = "VIEWED"
    ACCEPTED = "ACCEPTED"
    PAYMENT_INITIATED = "PAYMENT_INITIATED"
    PAID = "PAID"
    PAYMENT_FAILED = "PAYMENT_FAILED"
    PAYMENT_SESSION_EXPIRED = "PAYMENT_SESSION_EXPIRED"
    PAYMENT_CANCELLED = "PAYMENT_CANCELLED"
    EXPIRED = "EXPIRED"
    CANCELLED = "CANCELLED"


@dataclass
class ProposalEvent:
    """Event raised whenever something happens to a proposal."""

    proposal_id: UUID
    event_type: ProposalEventType
    id: UUID = field(default_factory=uuid4)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    actor: Optional[str] = None
    metadata: Optional[Dict[str, Any]] = None
