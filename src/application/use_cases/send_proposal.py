"""Send proposal use case implementation."""

from dataclasses import dataclass
from typing import Optional
from uuid import UUID

from src.application.interfaces.providers import ProposalMailerInterface
from src.application.interfaces.repositories import (
    ProposalEventRepositoryInterface,
    ProposalRepositoryInterface,
)
from src.application.interfaces.services import TransactionServiceInterface
from src.application.services.approval_token_manager import ApprovalTokenManager
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.domain.events.proposal_event import ProposalEvent, ProposalEventType
from src.domain.exceptions.proposal_error import (
    ProposalNotFoundError,
    ProposalStateError,
)
from src.domain.value_objects.proposal_status import ProposalStatus
from src.infrastructure.monitoring.metrics import record_proposal_transition

logger = get_logger(__name__)


@dataclass
class SendProposalResult:
    """Result of sending a proposal."""

    proposal: Proposal
    email_id: str
    approve_url: str


class SendProposalUseCase:
    """Use case for issuing an approval link and delivering a draft proposal."""

    def __init__(
        self,
        proposal_repo: ProposalRepositoryInterface,
        event_repo: ProposalEventRepositoryInterface,
        token_manager: ApprovalTokenManager,
        mailer: ProposalMailerInterface,
        transaction_service: TransactionServiceInterface,
        public_base_url: str,
    ):
        self.proposal_repo = proposal_repo
        self.event_repo = event_repo
        self.token_manager = token_manager
        self.mailer = mailer
        self.transaction_service = transaction_service
        self.public_base_url = public_base_url.rstrip("/")

    async def execute(
        self, proposal_id: UUID, sent_by: Optional[str] = None
    ) -> SendProposalResult:
        """Send a draft proposal to its customer."""
        # 1. Load proposal
        proposal = await self.proposal_repo.get_by_id(proposal_id)
        if not proposal:
            raise ProposalNotFoundError(proposal_id)

        # 2. Only drafts can be sent
        if proposal.status != ProposalStatus.DRAFT:
            raise ProposalStateError(proposal.status.value, ProposalStatus.DRAFT.value)

        # 3. Mint the approval link
        issued = self.token_manager.issue(proposal.id, proposal.assets.pdf_version)
        web_url = f"{self.public_base_url}/p/{proposal.id}"
        approve_url = f"{web_url}?t={issued.token}"

        # 4. Transition, persist and deliver; a delivery failure rolls back
        async def _send() -> str:
            proposal.mark_sent(sent_by=sent_by, web_url=web_url)
            await self.proposal_repo.update(proposal, [ProposalStatus.DRAFT])
            email_id = await self.mailer.send_proposal(proposal, approve_url)
            await self.event_repo.record(
                ProposalEvent(
                    proposal_id=proposal.id,
                    event_type=ProposalEventType.SENT,
                    actor=sent_by,
                    metadata={
                        "email_id": email_id,
                        "mailer": self.mailer.name,
                        "document_version": proposal.assets.pdf_version,
                        "token_expires_at": issued.claims.expires_at.isoformat(),
                    },
                )
            )
            return email_id

        email_id = await self.transaction_service.execute_in_transaction(_send)
        record_proposal_transition(ProposalStatus.DRAFT.value, ProposalStatus.SENT.value)

        logger.info(
            "Proposal sent",
            proposal_id=str(proposal.id),
            email_id=email_id,
            sent_by=sent_by,
        )

        return SendProposalResult(
            proposal=proposal, email_id=email_id, approve_url=approve_url
        )
