"""
Proposal email content.
"""

from dataclasses import dataclass
from html import escape

from src.domain.entities.proposal import Proposal


@dataclass(frozen=True)
class ProposalEmail:
    subject: str
    html: str
    text: str


def render_proposal_email(proposal: Proposal, approve_url: str) -> ProposalEmail:
    """Render the message that carries a proposal's approval link."""
    totals = proposal.totals
    name = proposal.customer.name
    deposit_line = (
        f"A deposit of ${totals.deposit_amount:,.2f} is due on approval."
        if totals.deposit_required
        else "No deposit is required."
    )

    text = (
        f"Hi {name},\n\n"
        f"Your land clearing proposal for {proposal.inputs.address} is ready.\n"
        f"Total: ${totals.total:,.2f}\n"
        f"{deposit_line}\n\n"
        f"Review and approve: {approve_url}\n"
    )
    html = (
        f"<p>Hi {escape(name)},</p>"
        f"<p>Your land clearing proposal for {escape(proposal.inputs.address)} is ready.</p>"
        f"<p><strong>Total: ${totals.total:,.2f}</strong><br>{escape(deposit_line)}</p>"
        f'<p><a href="{escape(approve_url, quote=True)}">Review and approve your proposal</a></p>'
    )

    return ProposalEmail(
        subject=f"Your land clearing proposal ({proposal.inputs.acreage} acres)",
        html=html,
        text=text,
    )
