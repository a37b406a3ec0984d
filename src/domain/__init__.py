"""
Domain package.
"""

from .entities import *
from .events import *
from .exceptions import *
from .value_objects import *

__all__ = [
    # Entities
    "Proposal",

    # Events
    "ProposalEvent",
    "ProposalEventType",

    # Exceptions
    "LocationUnresolvedError",
    "PaymentInitiationError",
    "ProposalStateError",
    "TokenAlreadyUsedError",
    "TokenExpiredError",
    "TokenInvalidError",
    "UnknownEnumError",
    "ValidationError",

    # Value Objects
    "Customer",
    "LineItem",
    "PricedQuote",
    "PricingTable",
    "ProposalStatus",
    "QuoteRequest",
]
