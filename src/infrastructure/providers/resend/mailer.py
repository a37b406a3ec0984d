"""
Resend transactional mail implementation.
"""

from typing import Optional

import httpx
import structlog

from src.application.interfaces.providers import ProposalMailerInterface
from src.domain.entities.proposal import Proposal
from src.domain.exceptions.provider_error import (
    ProviderAPIError,
    ProviderConfigurationError,
)
from src.infrastructure.external.http_client import HTTPClient
from src.infrastructure.providers.mail_content import render_proposal_email

logger = structlog.get_logger()


class ResendProposalMailer(ProposalMailerInterface):
    """Delivers proposal emails through the Resend API."""

    def __init__(
        self,
        api_key: Optional[str],
        from_email: str,
        base_url: str = "https://api.resend.com",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if not api_key:
            raise ProviderConfigurationError("RESEND_API_KEY is required")

        self.api_key = api_key
        self.from_email = from_email
        self.base_url = base_url.rstrip("/")
        self.transport = transport

    @property
    def name(self) -> str:
        return "resend"

    async def send_proposal(self, proposal: Proposal, approve_url: str) -> str:
        """Send the proposal email and return the delivery id."""
        email = render_proposal_email(proposal, approve_url)

        async with HTTPClient("resend", transport=self.transport) as client:
            response = await client.post(
                f"{self.base_url}/emails",
                json={
                    "from": self.from_email,
                    "to": [proposal.customer.email],
                    "subject": email.subject,
                    "html": email.html,
                    "text": email.text,
                },
                headers={
                    "Authorization": f"Bearer {self.api_key}",
                    "Idempotency-Key": f"proposal-{proposal.id}-v{proposal.assets.pdf_version}",
                },
            )

        if response.status_code not in (200, 201):
            raise ProviderAPIError(
                self.name,
                response.status_code,
                f"Failed to send proposal email: {response.text}",
            )

        email_id = response.json()["id"]
        logger.info(
            "Proposal email sent",
            proposal_id=str(proposal.id),
            email_id=email_id,
        )
        return email_id
