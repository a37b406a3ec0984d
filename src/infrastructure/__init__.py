"""
Infrastructure package.
"""

from .database import *
from .external import *
from .monitoring import *
from .providers import *
from .security import *

__all__ = [
    # Database
    "Base",
    "BaseModel",
    "ProposalEventModel",
    "ProposalModel",
    "UsedApprovalTokenModel",
    "ProposalEventRepository",
    "ProposalRepository",
    "TransactionService",
    "UsedTokenRepository",
    # External
    "HTTPClient",
    # Monitoring
    "HealthChecker",
    "HealthStatus",
    "get_metrics",
    "get_metrics_content_type",
    # Providers
    "ProviderFactory",
    "GoogleMapsLocationVerifier",
    "MockLocationVerifier",
    "MockProposalMailer",
    "MockPaymentProvider",
    "ResendProposalMailer",
    "StripePaymentProvider",
    # Security
    "JoseTokenSigner",
]
