"""
Payment notification API schemas.
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from src.domain.value_objects.proposal_status import ProposalStatus


class PaymentWebhookResponse(BaseModel):
    """Acknowledgement returned to the payment provider."""

    received: bool = True
    event_type: str
    handled: bool
    proposal_id: Optional[UUID] = None
    status: Optional[ProposalStatus] = None
