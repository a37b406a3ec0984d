"""
Priced quote value objects.

A priced quote is derived from a quote request and a location lookup and is
never mutated afterwards.
"""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional, Tuple

from src.domain.value_objects.service_type import ServiceType


@dataclass(frozen=True)
class ServiceSummary:
    """What is being priced."""

    service_type: ServiceType
    description: str
    base_rate: Decimal
    unit: str
    quantity: Decimal


@dataclass(frozen=True)
class QuoteBreakdown:
    """Every priced component of a quote."""

    base_service: Decimal
    property_adjusted: Decimal
    complexity_adjustments: Decimal
    accessibility_adjustments: Decimal
    environmental_adjustments: Decimal
    risk_adjustments: Decimal
    total_adjustments: Decimal
    urgency_adjustment: Decimal
    transportation: Decimal


@dataclass(frozen=True)
class QuoteTotals:
    """Quote totals; ``final_price == subtotal + urgency + transportation``."""

    subtotal: Decimal
    urgency_adjustment: Decimal
    transportation: Decimal
    final_price: Decimal
    price_per_acre: Decimal


@dataclass(frozen=True)
class TransportationDetails:
    """Round-trip transport billing detail."""

    one_way_minutes: Decimal
    round_trip_minutes: Decimal
    billable_hours: int
    hourly_rate: Decimal
    charge: Decimal
    description: str


@dataclass(frozen=True)
class LocationSummary:
    """Resolved job-site location."""

    address: str
    lat: float
    lng: float
    verified: bool
    service_area: str
    distance_miles: Decimal
    driving_minutes: int


@dataclass(frozen=True)
class AlternativeOption:
    """An alternative service package and its price."""

    name: str
    description: str
    price: Decimal
    features: Tuple[str, ...]


@dataclass(frozen=True)
class SeasonalPricing:
    """Informational seasonal price comparison."""

    current_season: str
    seasonal_multiplier: Decimal
    adjusted_price: Decimal
    best_season: str
    best_season_price: Decimal
    best_season_savings: Decimal


@dataclass(frozen=True)
class FinancingOption:
    """A fixed-term financing plan."""

    term_months: int
    monthly_payment: Decimal
    total_cost: Decimal
    apr: str


@dataclass(frozen=True)
class ProjectAnalysis:
    """Operational estimate for the job."""

    estimated_duration_days: int
    equipment_required: Tuple[str, ...]
    seasonal_factors: Tuple[str, ...]
    risk_factors: Tuple[str, ...]


@dataclass(frozen=True)
class BusinessInsights:
    """Sales-facing commentary on the quote."""

    market_position: str
    competitive_advantage: Tuple[str, ...]
    value_proposition: str
    recommended_follow_up: str


@dataclass(frozen=True)
class PricedQuote:
    """A fully priced, unpersisted quote."""

    quote_id: str
    service: ServiceSummary
    breakdown: QuoteBreakdown
    totals: QuoteTotals
    confidence: Decimal
    issued_at: datetime
    valid_until: datetime
    urgency_multiplier: Decimal
    seasonal_discount: Decimal
    location: LocationSummary
    transportation: TransportationDetails
    project_analysis: ProjectAnalysis
    business_insights: BusinessInsights
    next_steps: Tuple[str, ...] = field(default_factory=tuple)
    recommendations: Tuple[str, ...] = field(default_factory=tuple)
    alternatives: Optional[Tuple[AlternativeOption, ...]] = None
    seasonal_pricing: Optional[SeasonalPricing] = None
    financing_options: Optional[Tuple[FinancingOption, ...]] = None
    detailed_analysis: Optional[Dict[str, Any]] = None

    @property
    def final_price(self) -> Decimal:
        """Customer-facing total."""
        return self.totals.final_price

    def is_expired(self, now: datetime) -> bool:
        """Check if the quote validity window has passed."""
        return now >= self.valid_until
