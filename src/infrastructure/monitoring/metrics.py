"""
Prometheus metrics for system monitoring.
"""

import os

from prometheus_client import (
    CONTENT_TYPE_LATEST,
    CollectorRegistry,
    Counter,
    Histogram,
    generate_latest,
    multiprocess,
)

from src.config.logging import get_logger

logger = get_logger(__name__)

registry = CollectorRegistry()
prometheus_multiproc_dir = os.getenv("PROMETHEUS_MULTIPROC_DIR")

if prometheus_multiproc_dir:
    # Aggregate samples written by every API and worker process
    try:
        os.makedirs(prometheus_multiproc_dir, exist_ok=True)
        multiprocess.MultiProcessCollector(registry)
    except (OSError, ValueError) as e:
        logger.warning(
            "Falling back to single process metrics registry",
            directory=prometheus_multiproc_dir,
            error=str(e),
        )
        registry = CollectorRegistry()


def get_registry() -> CollectorRegistry:
    """Get the current registry."""
    return registry


QUOTES_GENERATED = Counter(
    "quotes_generated_total",
    "Total number of quotes priced",
    ["service_type"],
    registry=registry,
)

QUOTE_GENERATION_DURATION = Histogram(
    "quote_generation_duration_seconds",
    "Time spent pricing a quote, location lookup included",
    ["service_type"],
    buckets=[0.05, 0.1, 0.25, 0.5, 1.0, 2.0, 5.0, 10.0],
    registry=registry,
)

PROPOSAL_TRANSITIONS = Counter(
    "proposal_transitions_total",
    "Total number of proposal status transitions",
    ["from_status", "to_status"],
    registry=registry,
)

TOKEN_REJECTIONS = Counter(
    "approval_token_rejections_total",
    "Total number of rejected approval tokens",
    ["reason"],
    registry=registry,
)

PAYMENT_SESSIONS = Counter(
    "payment_sessions_total",
    "Total number of deposit payment session attempts",
    ["provider", "outcome"],
    registry=registry,
)

PAYMENT_WEBHOOKS = Counter(
    "payment_webhooks_total",
    "Total number of processed payment notifications",
    ["event_type", "outcome"],
    registry=registry,
)


def record_quote_generated(service_type: str, duration_seconds: float):
    """Record a priced quote and how long it took."""
    QUOTES_GENERATED.labels(service_type=service_type).inc()
    QUOTE_GENERATION_DURATION.labels(service_type=service_type).observe(duration_seconds)


def record_proposal_transition(from_status: str, to_status: str):
    """Record proposal status transition metric."""
    PROPOSAL_TRANSITIONS.labels(from_status=from_status, to_status=to_status).inc()


def record_token_rejection(reason: str):
    """Record approval token rejection metric."""
    TOKEN_REJECTIONS.labels(reason=reason).inc()


def record_payment_session(provider: str, outcome: str):
    """Record deposit session attempt metric."""
    PAYMENT_SESSIONS.labels(provider=provider, outcome=outcome).inc()


def record_payment_webhook(event_type: str, outcome: str):
    """Record payment notification metric."""
    PAYMENT_WEBHOOKS.labels(event_type=event_type, outcome=outcome).inc()


def get_metrics():
    """Get all metrics in Prometheus format."""
    return generate_latest(registry)


def get_metrics_content_type():
    """Get the content type for metrics."""
    return CONTENT_TYPE_LATEST
