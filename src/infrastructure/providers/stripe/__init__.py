"""
Stripe payment provider.
"""

from .provider import StripePaymentProvider

__all__ = [
    "StripePaymentProvider",
]
