"""
Proposal repository implementation.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional, Sequence
from uuid import UUID

from sqlalchemy import select, update
from sqlalchemy.ext.asyncio import AsyncSession

from src.application.interfaces.repositories import ProposalRepositoryInterface
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.value_objects.customer import Customer
from src.domain.value_objects.line_item import LineItem
from src.domain.value_objects.proposal_details import (
    ProposalAssets,
    ProposalInputs,
    ProposalTotals,
)
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.database.models.proposal import ProposalModel

logger = get_logger(__name__)

EXPIRABLE_STATUSES = (
    ProposalStatus.DRAFT.value,
    ProposalStatus.SENT.value,
    ProposalStatus.VIEWED.value,
)


def _as_utc(value: Optional[datetime]) -> Optional[datetime]:
    """Attach UTC to naive timestamps read back from backends without tz support."""
    if value is None or value.tzinfo is not None:
        return value
    return value.replace(tzinfo=timezone.utc)


class ProposalRepository(ProposalRepositoryInterface):
    """Proposal repository implementation."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def create(self, proposal: Proposal) -> Proposal:
        """Persist a new proposal."""
        model = ProposalModel(
            id=proposal.id,
            created_at=proposal.created_at,
            **self._entity_values(proposal),
        )

        self.db.add(model)
        # Use flush instead of commit to maintain transaction atomicity
        await self.db.flush()
        await self.db.refresh(model)

        logger.debug("Proposal persisted", proposal_id=str(model.id))
        return self._model_to_entity(model)

    async def get_by_id(self, proposal_id: UUID) -> Optional[Proposal]:
        """Get proposal by ID."""
        stmt = (
            select(ProposalModel)
            .where(ProposalModel.id == proposal_id)
            .execution_options(populate_existing=True)
        )
        result = await self.db.execute(stmt)
        model = result.scalar_one_or_none()

        return self._model_to_entity(model) if model else None

    async def update(
        self, proposal: Proposal, expected_statuses: Sequence[ProposalStatus]
    ) -> Proposal:
        """Compare-and-swap update guarded by the stored status."""
        expected = [ProposalStatus(status).value for status in expected_statuses]

        stmt = (
            update(ProposalModel)
            .where(ProposalModel.id == proposal.id)
            .where(ProposalModel.status.in_(expected))
            .values(**self._entity_values(proposal))
            .returning(ProposalModel.id)
            .execution_options(synchronize_session=False)
        )
        result = await self.db.execute(stmt)

        if result.scalar_one_or_none() is None:
            current = await self.db.scalar(
                select(ProposalModel.status).where(ProposalModel.id == proposal.id)
            )
            if current is None:
                raise ProposalNotFoundError(proposal.id)

            logger.warning(
                "Proposal status changed concurrently",
                proposal_id=str(proposal.id),
                stored_status=current,
                expected_statuses=expected,
                target_status=proposal.status.value,
            )
            raise ProposalStateError(current, " or ".join(expected))

        await self.db.flush()
        return proposal

    async def find_expirable(self, now: datetime, limit: int = 100) -> List[Proposal]:
        """Find draft, sent or viewed proposals whose validity has passed."""
        stmt = (
            select(ProposalModel)
            .where(ProposalModel.status.in_(EXPIRABLE_STATUSES))
            .where(ProposalModel.valid_until.is_not(None))
            .where(ProposalModel.valid_until <= now)
            .order_by(ProposalModel.valid_until)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        models = result.scalars().all()

        return [self._model_to_entity(model) for model in models]

    def _entity_values(self, proposal: Proposal) -> Dict[str, Any]:
        """Column values for every mutable proposal field."""
        totals = proposal.totals
        return {
            "customer_name": proposal.customer.name,
            "customer_email": proposal.customer.email,
            "customer_phone": proposal.customer.phone,
            "customer_address": proposal.customer.address,
            "inputs": proposal.inputs.to_dict(),
            "breakdown": [item.to_dict() for item in proposal.breakdown],
            "subtotal": totals.subtotal,
            "tax": totals.tax,
            "total": totals.total,
            "deposit_amount": totals.deposit_amount,
            "balance": totals.balance,
            "tax_rate": totals.tax_rate,
            "deposit_rate": totals.deposit_rate,
            "pdf_path": proposal.assets.pdf_path,
            "pdf_version": proposal.assets.pdf_version,
            "web_url": proposal.assets.web_url,
            "status": proposal.status.value,
            "valid_until": proposal.valid_until,
            "sent_at": proposal.sent_at,
            "sent_by": proposal.sent_by,
            "viewed_at": proposal.viewed_at,
            "accepted_at": proposal.accepted_at,
            "accepted_by_name": proposal.accepted_by_name,
            "accepted_by_signature": proposal.accepted_by_signature,
            "accepted_ip": proposal.accepted_ip,
            "accepted_user_agent": proposal.accepted_user_agent,
            "payment_session_id": proposal.payment_session_id,
            "payment_url": proposal.payment_url,
            "paid_at": proposal.paid_at,
            "payment_amount": proposal.payment_amount,
            "payment_reference": proposal.payment_reference,
            "expired_at": proposal.expired_at,
            "cancelled_at": proposal.cancelled_at,
            "cancellation_reason": proposal.cancellation_reason,
            "updated_at": proposal.updated_at,
        }

    def _model_to_entity(self, model: ProposalModel) -> Proposal:
        """Convert SQLAlchemy model to domain entity."""
        return Proposal(
            id=model.id,
            customer=Customer(
                name=model.customer_name,
                email=model.customer_email,
                phone=model.customer_phone,
                address=model.customer_address,
            ),
            inputs=ProposalInputs.from_dict(model.inputs),
            breakdown=[LineItem.from_dict(item) for item in model.breakdown],
            totals=ProposalTotals(
                subtotal=model.subtotal,
                tax=model.tax,
                total=model.total,
                deposit_amount=model.deposit_amount,
                balance=model.balance,
                tax_rate=model.tax_rate,
                deposit_rate=model.deposit_rate,
            ),
            assets=ProposalAssets(
                pdf_path=model.pdf_path,
                pdf_version=model.pdf_version,
                web_url=model.web_url,
            ),
            status=ProposalStatus(model.status),
            valid_until=_as_utc(model.valid_until),
            sent_at=_as_utc(model.sent_at),
            sent_by=model.sent_by,
            viewed_at=_as_utc(model.viewed_at),
            accepted_at=_as_utc(model.accepted_at),
            accepted_by_name=model.accepted_by_name,
            accepted_by_signature=model.accepted_by_signature,
            accepted_ip=model.accepted_ip,
            accepted_user_agent=model.accepted_user_agent,
            payment_session_id=model.payment_session_id,
            payment_url=model.payment_url,
            paid_at=_as_utc(model.paid_at),
            payment_amount=model.payment_amount,
            payment_reference=model.payment_reference,
            expired_at=_as_utc(model.expired_at),
            cancelled_at=_as_utc(model.cancelled_at),
            cancellation_reason=model.cancellation_reason,
            created_at=_as_utc(model.created_at),
            updated_at=_as_utc(model.updated_at),
        )
