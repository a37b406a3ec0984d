"""Payment provider notification endpoint."""

from typing import Optional

import structlog
from fastapi import APIRouter, Header, Request

from src.api.dependencies import ConfirmPaymentUseCaseDep
from src.api.schemas.payment import PaymentWebhookResponse

logger = structlog.get_logger()
router = APIRouter(prefix="/payments", tags=["payments"])


@router.post("/webhook", response_model=PaymentWebhookResponse)
async def payment_webhook(
    request: Request,
    use_case: ConfirmPaymentUseCaseDep,
    stripe_signature: Optional[str] = Header(None),
):
    """Apply a signed payment notification.

    The raw body is verified before it is parsed, so it must not be re-encoded.
    """
    payload = await request.body()
    result = await use_case.execute(payload, stripe_signature)

    return PaymentWebhookResponse(
        event_type=result.event_type,
        handled=result.handled,
        proposal_id=result.proposal_id,
        status=result.status,
    )
