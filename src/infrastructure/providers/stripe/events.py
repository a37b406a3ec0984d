"""
Stripe event decoding.
"""

import json
from decimal import Decimal
from typing import Any, Dict, Optional
from uuid import UUID

from src.application.interfaces.providers import PaymentEvent
from src.domain.exceptions.payment_error import PaymentWebhookError


def _minor_to_major(amount: Any) -> Optional[Decimal]:
    if amount is None:
        return None
    return (Decimal(int(amount)) / 100).quantize(Decimal("0.01"))


def _proposal_id(obj: Dict[str, Any]) -> Optional[UUID]:
    raw = (obj.get("metadata") or {}).get("proposal_id") or obj.get(
        "client_reference_id"
    )
    if not raw:
        return None
    try:
        return UUID(str(raw))
    except ValueError:
        raise PaymentWebhookError(f"Invalid proposal_id metadata: {raw}")


def parse_event(payload: bytes) -> PaymentEvent:
    """Decode an authenticated event payload."""
    try:
        data = json.loads(payload)
        event_id = data["id"]
        event_type = data["type"]
        obj = data["data"]["object"]
    except (ValueError, KeyError, TypeError) as e:
        raise PaymentWebhookError(f"Malformed event payload: {e}")

    if obj.get("object") == "checkout.session":
        return PaymentEvent(
            event_id=event_id,
            event_type=event_type,
            proposal_id=_proposal_id(obj),
            amount=_minor_to_major(obj.get("amount_total")),
            payment_reference=obj.get("payment_intent") or obj.get("id"),
            session_id=obj.get("id"),
        )

    return PaymentEvent(
        event_id=event_id,
        event_type=event_type,
        proposal_id=_proposal_id(obj),
        amount=_minor_to_major(obj.get("amount_received", obj.get("amount"))),
        payment_reference=obj.get("id"),
        reason=obj.get("cancellation_reason"),
    )
