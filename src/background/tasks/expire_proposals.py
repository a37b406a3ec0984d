"""
Celery tasks for proposal expiry.

Celery beat runs the sweep periodically; each run opens its own database
session and event loop.
"""

import asyncio
import random
from datetime import datetime
from typing import Optional

import structlog

from src.application.use_cases.expire_proposals import (
    ExpireDueProposalsUseCase,
    ExpirySweepResult,
)
from src.background.celery_app import celery_app
from src.config.settings import settings
from src.infrastructure.database.repositories.proposal_event_repository import (
    ProposalEventRepository,
)
from src.infrastructure.database.repositories.proposal_repository import (
    ProposalRepository,
)
from src.infrastructure.database.repositories.transaction_repository import (
    TransactionService,
)

logger = structlog.get_logger()


def run_async_in_new_loop(coro):
    """Run a coroutine in a fresh event loop owned by this task."""
    loop = asyncio.new_event_loop()
    try:
        asyncio.set_event_loop(loop)
        return loop.run_until_complete(coro)
    finally:
        asyncio.set_event_loop(None)
        loop.close()


async def run_expiry_sweep(
    session_factory=None,
    batch_size: Optional[int] = None,
    now: Optional[datetime] = None,
) -> ExpirySweepResult:
    """Expire every open proposal whose validity window has passed."""
    if session_factory is None:
        from src.config.database import get_async_session_factory

        session_factory = get_async_session_factory()

    async with session_factory() as session:
        use_case = ExpireDueProposalsUseCase(
            proposal_repo=ProposalRepository(session),
            event_repo=ProposalEventRepository(session),
            transaction_service=TransactionService(session),
            batch_size=batch_size or settings.EXPIRY_SWEEP_BATCH_SIZE,
        )
        return await use_case.execute(now)


@celery_app.task(bind=True, max_retries=3, name="expire_due_proposals_task")
def expire_due_proposals_task(self):
    """Periodic sweep that lapses stale draft, sent and viewed proposals."""
    logger.info("Starting proposal expiry sweep", attempt=self.request.retries + 1)

    try:
        result = run_async_in_new_loop(run_expiry_sweep())
    except Exception as e:
        logger.error(
            "Proposal expiry sweep failed",
            error=str(e),
            error_type=type(e).__name__,
            attempt=self.request.retries + 1,
        )
        if self.request.retries < self.max_retries:
            delay = (2**self.request.retries) + random.random()
            raise self.retry(exc=e, countdown=delay)
        raise

    logger.info(
        "Proposal expiry sweep completed",
        expired=len(result.expired),
        skipped=result.skipped,
    )

    return {
        "status": "success",
        "expired": [str(proposal_id) for proposal_id in result.expired],
        "skipped": result.skipped,
    }
