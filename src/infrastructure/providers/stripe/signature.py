"""
Stripe-style webhook signatures.

The ``Stripe-Signature`` header has the form ``t=<unix ts>,v1=<hex hmac>`` where
the HMAC-SHA256 is computed over ``"<t>." + payload`` with the endpoint secret.
"""

import hashlib
import hmac
import time
from typing import List, Optional, Tuple

from src.domain.exceptions.payment_error import PaymentWebhookError

SIGNATURE_SCHEME = "v1"


def compute_signature(payload: bytes, timestamp: int, secret: str) -> str:
    signed_payload = f"{timestamp}.".encode("utf-8") + payload
    return hmac.new(secret.encode("utf-8"), signed_payload, hashlib.sha256).hexdigest()


def build_signature_header(
    payload: bytes, secret: str, timestamp: Optional[int] = None
) -> str:
    """Build a signature header, as the payment provider would send it."""
    timestamp = int(time.time()) if timestamp is None else timestamp
    return f"t={timestamp},{SIGNATURE_SCHEME}={compute_signature(payload, timestamp, secret)}"


def _parse_header(header: str) -> Tuple[int, List[str]]:
    timestamp = None
    signatures = []
    for item in header.split(","):
        key, _, value = item.strip().partition("=")
        if key == "t":
            try:
                timestamp = int(value)
            except ValueError:
                raise PaymentWebhookError("Malformed signature timestamp")
        elif key == SIGNATURE_SCHEME:
            signatures.append(value)

    if timestamp is None or not signatures:
        raise PaymentWebhookError("Malformed signature header")
    return timestamp, signatures


def verify_signature(
    payload: bytes,
    header: Optional[str],
    secret: str,
    tolerance_seconds: int = 300,
    now: Optional[int] = None,
) -> None:
    """Authenticate a webhook payload.

    Raises:
        PaymentWebhookError: If the header is missing, malformed, stale or
            does not match
    """
    if not header:
        raise PaymentWebhookError("Missing signature header")

    timestamp, signatures = _parse_header(header)
    expected = compute_signature(payload, timestamp, secret)

    if not any(hmac.compare_digest(expected, candidate) for candidate in signatures):
        raise PaymentWebhookError("Signature does not match payload")

    now = int(time.time()) if now is None else now
    if tolerance_seconds > 0 and abs(now - timestamp) > tolerance_seconds:
        raise PaymentWebhookError("Signature timestamp outside tolerance")
