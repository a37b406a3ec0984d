"""
Mock proposal mailer for testing and development.
"""

from typing import List
from uuid import uuid4

from src.application.interfaces.providers import ProposalMailerInterface
from src.config.logging import get_logger
from src.domain.entities.proposal import Proposal
from src.infrastructure.providers.mail_content import (
    ProposalEmail,
    render_proposal_email,
)

logger = get_logger(__name__)


class MockProposalMailer(ProposalMailerInterface):
    """Keeps rendered messages in memory instead of sending them."""

    def __init__(self):
        self.outbox: List[ProposalEmail] = []

    @property
    def name(self) -> str:
        return "Mock Mailer"

    async def send_proposal(self, proposal: Proposal, approve_url: str) -> str:
        email = render_proposal_email(proposal, approve_url)
        self.outbox.append(email)

        email_id = f"mock_email_{uuid4().hex[:12]}"
        logger.info(
            "Mock proposal email captured",
            proposal_id=str(proposal.id),
            email_id=email_id,
            to=proposal.customer.email,
        )
        return email_id
