"""
Application services package.
"""

from .adjustment_calculator import AdjustmentCalculator, Adjustments
from .approval_token_manager import (
    ApprovalTokenClaims,
    ApprovalTokenManager,
    IssuedToken,
    hash_token_id,
)
from .proposal_calculator import ProposalCalculator
from .quote_assembler import QuoteAssembler, generate_quote_id
from .quote_insights import QuoteInsights, season_for_month
from .service_pricing import BasePricing, ServicePricer
from .timeline_calculator import TimelineAdjustment, TimelineCalculator
from .transport_cost import TransportCostModel

__all__ = [
    "AdjustmentCalculator",
    "Adjustments",
    "ApprovalTokenClaims",
    "ApprovalTokenManager",
    "IssuedToken",
    "hash_token_id",
    "ProposalCalculator",
    "QuoteAssembler",
    "generate_quote_id",
    "QuoteInsights",
    "season_for_month",
    "BasePricing",
    "ServicePricer",
    "TimelineAdjustment",
    "TimelineCalculator",
    "TransportCostModel",
]
