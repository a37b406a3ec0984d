"""
Quote-related API schemas.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field

from src.domain.value_objects.environmental_flags import EnvironmentalFlags
from src.domain.value_objects.location import Coordinates, LocationReference
from src.domain.value_objects.quote_request import QUOTE_DEFAULTS, QuoteOptions, QuoteRequest
from src.domain.value_objects.service_type import ServiceType
from src.domain.value_objects.site_conditions import (
    PropertyType,
    TerrainType,
    VegetationDensity,
)
from src.domain.value_objects.urgency_level import UrgencyLevel


class CoordinatesSchema(BaseModel):
    """Latitude/longitude schema."""

    lat: float
    lng: float


class LocationSchema(BaseModel):
    """Job site reference; exactly one field must be set."""

    address: Optional[str] = Field(None, max_length=500)
    coordinates: Optional[CoordinatesSchema] = None
    place_id: Optional[str] = Field(None, max_length=255)

    def to_domain(self) -> LocationReference:
        return LocationReference(
            address=self.address,
            coordinates=(
                Coordinates(lat=self.coordinates.lat, lng=self.coordinates.lng)
                if self.coordinates
                else None
            ),
            place_id=self.place_id,
        )


class EnvironmentalSchema(BaseModel):
    """Site hazard flags schema."""

    building_proximity: bool = False
    utility_lines: bool = False
    wetlands: bool = False
    restrictions: List[str] = Field(default_factory=list)

    def to_domain(self) -> EnvironmentalFlags:
        return EnvironmentalFlags(
            building_proximity=self.building_proximity,
            utility_lines=self.utility_lines,
            wetlands=self.wetlands,
            restrictions=tuple(self.restrictions),
        )


class QuoteOptionsSchema(BaseModel):
    """Toggles for the optional quote sections."""

    include_detailed_breakdown: bool = QUOTE_DEFAULTS.options.include_detailed_breakdown
    include_alternatives: bool = QUOTE_DEFAULTS.options.include_alternatives
    include_seasonal_pricing: bool = QUOTE_DEFAULTS.options.include_seasonal_pricing
    include_financing: bool = QUOTE_DEFAULTS.options.include_financing

    def to_domain(self) -> QuoteOptions:
        return QuoteOptions(**self.model_dump())


class QuoteRequestSchema(BaseModel):
    """Quote request schema.

    Acreage and accessibility bounds are checked by the domain so that every
    out-of-range field is reported together.
    """

    location: LocationSchema
    service_type: ServiceType
    acreage: Decimal
    density: VegetationDensity
    terrain: TerrainType = QUOTE_DEFAULTS.terrain
    accessibility_rating: int = QUOTE_DEFAULTS.accessibility_rating
    property_type: PropertyType = QUOTE_DEFAULTS.property_type
    environmental: EnvironmentalSchema = Field(default_factory=EnvironmentalSchema)
    urgency: UrgencyLevel = QUOTE_DEFAULTS.urgency
    seasonal_constraints: bool = QUOTE_DEFAULTS.seasonal_constraints
    options: QuoteOptionsSchema = Field(default_factory=QuoteOptionsSchema)
    preferred_start_date: Optional[date] = None

    def to_domain(self) -> QuoteRequest:
        """Build the validated domain request."""
        return QuoteRequest(
            location=self.location.to_domain(),
            service_type=self.service_type,
            acreage=self.acreage,
            density=self.density,
            terrain=self.terrain,
            accessibility_rating=self.accessibility_rating,
            property_type=self.property_type,
            environmental=self.environmental.to_domain(),
            urgency=self.urgency,
            seasonal_constraints=self.seasonal_constraints,
            options=self.options.to_domain(),
            preferred_start_date=self.preferred_start_date,
        )


class _FromDomain(BaseModel):
    model_config = {"from_attributes": True}


class ServiceSummarySchema(_FromDomain):
    service_type: ServiceType
    description: str
    base_rate: Decimal
    unit: str
    quantity: Decimal


class QuoteBreakdownSchema(_FromDomain):
    base_service: Decimal
    property_adjusted: Decimal
    complexity_adjustments: Decimal
    accessibility_adjustments: Decimal
    environmental_adjustments: Decimal
    risk_adjustments: Decimal
    total_adjustments: Decimal
    urgency_adjustment: Decimal
    transportation: Decimal


class QuoteTotalsSchema(_FromDomain):
    subtotal: Decimal
    urgency_adjustment: Decimal
    transportation: Decimal
    final_price: Decimal
    price_per_acre: Decimal


class TransportationSchema(_FromDomain):
    one_way_minutes: Decimal
    round_trip_minutes: Decimal
    billable_hours: int
    hourly_rate: Decimal
    charge: Decimal
    description: str


class LocationSummarySchema(_FromDomain):
    address: str
    lat: float
    lng: float
    verified: bool
    service_area: str
    distance_miles: Decimal
    driving_minutes: int


class AlternativeSchema(_FromDomain):
    name: str
    description: str
    price: Decimal
    features: List[str]


class SeasonalPricingSchema(_FromDomain):
    current_season: str
    seasonal_multiplier: Decimal
    adjusted_price: Decimal
    best_season: str
    best_season_price: Decimal
    best_season_savings: Decimal


class FinancingOptionSchema(_FromDomain):
    term_months: int
    monthly_payment: Decimal
    total_cost: Decimal
    apr: str


class ProjectAnalysisSchema(_FromDomain):
    estimated_duration_days: int
    equipment_required: List[str]
    seasonal_factors: List[str]
    risk_factors: List[str]


class BusinessInsightsSchema(_FromDomain):
    market_position: str
    competitive_advantage: List[str]
    value_proposition: str
    recommended_follow_up: str


class QuoteResponse(_FromDomain):
    """Priced quote response schema."""

    quote_id: str
    service: ServiceSummarySchema
    breakdown: QuoteBreakdownSchema
    totals: QuoteTotalsSchema
    confidence: Decimal
    issued_at: datetime
    valid_until: datetime
    urgency_multiplier: Decimal
    seasonal_discount: Decimal
    location: LocationSummarySchema
    transportation: TransportationSchema
    project_analysis: ProjectAnalysisSchema
    business_insights: BusinessInsightsSchema
    next_steps: List[str]
    recommendations: List[str]
    alternatives: Optional[List[AlternativeSchema]] = None
    seasonal_pricing: Optional[SeasonalPricingSchema] = None
    financing_options: Optional[List[FinancingOptionSchema]] = None
    detailed_analysis: Optional[Dict[str, Any]] = None
