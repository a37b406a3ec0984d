"""
Domain exceptions package.
"""

from .location_error import LocationError, LocationUnresolvedError
from .payment_error import PaymentError, PaymentInitiationError, PaymentWebhookError
from .pricing_error import PricingError, UnknownEnumError
from .proposal_error import ProposalError, ProposalNotFoundError, ProposalStateError
from .provider_error import (
    ProviderAPIError,
    ProviderConfigurationError,
    ProviderError,
    ProviderNotFoundError,
)
from .token_error import (
    TokenAlreadyUsedError,
    TokenError,
    TokenExpiredError,
    TokenInvalidError,
    TokenProposalMismatchError,
)
from .validation_error import FieldError, ValidationError

__all__ = [
    "FieldError",
    "LocationError",
    "LocationUnresolvedError",
    "PaymentError",
    "PaymentInitiationError",
    "PaymentWebhookError",
    "PricingError",
    "ProposalError",
    "ProposalNotFoundError",
    "ProposalStateError",
    "ProviderAPIError",
    "ProviderConfigurationError",
    "ProviderError",
    "ProviderNotFoundError",
    "TokenAlreadyUsedError",
    "TokenError",
    "TokenExpiredError",
    "TokenInvalidError",
    "TokenProposalMismatchError",
    "UnknownEnumError",
    "ValidationError",
]
