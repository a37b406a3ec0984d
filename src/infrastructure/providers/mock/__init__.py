"""
Mock providers for development and tests.
"""

from .location import MockLocationVerifier
from .mailer import MockProposalMailer
from .payment import MockPaymentProvider

__all__ = [
    "MockLocationVerifier",
    "MockPaymentProvider",
    "MockProposalMailer",
]
