"""
Providers package.
"""

from .factory import ProviderFactory
from .google_maps.verifier import GoogleMapsLocationVerifier
from .mock.location import MockLocationVerifier
from .mock.mailer import MockProposalMailer
from .mock.payment import MockPaymentProvider
from .resend.mailer import ResendProposalMailer
from .stripe.provider import StripePaymentProvider

__all__ = [
    "ProviderFactory",
    "GoogleMapsLocationVerifier",
    "MockLocationVerifier",
    "MockProposalMailer",
    "MockPaymentProvider",
    "ResendProposalMailer",
    "StripePaymentProvider",
]
