"""
Resend proposal mailer.
"""

from .mailer import ResendProposalMailer

__all__ = [
    "ResendProposalMailer",
]
