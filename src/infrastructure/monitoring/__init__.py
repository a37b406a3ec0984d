"""
Monitoring package.
"""

from .health_checks import HealthChecker, HealthStatus
from .metrics import (
    get_metrics,
    get_metrics_content_type,
    record_payment_session,
    record_payment_webhook,
    record_proposal_transition,
    record_quote_generated,
    record_token_rejection,
)

__all__ = [
    "HealthChecker",
    "HealthStatus",
    "get_metrics",
    "get_metrics_content_type",
    "record_payment_session",
    "record_payment_webhook",
    "record_proposal_transition",
    "record_quote_generated",
    "record_token_rejection",
]
