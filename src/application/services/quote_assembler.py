"""
Quote assembler.

Combines location verification, base pricing, adjustments, urgency and
transport into a single priced quote.
"""

import secrets
import string
from dataclasses import asdict
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from typing import Callable, Optional

from src.application.interfaces.providers import (
    LocationVerifierInterface,
    VerifiedLocation,
)
from src.application.services.adjustment_calculator import AdjustmentCalculator
from src.application.services.quote_insights import QuoteInsights
from src.application.services.service_pricing import ServicePricer
from src.application.services.timeline_calculator import TimelineCalculator
from src.application.services.transport_cost import TransportCostModel
from src.config.logging import get_logger
from src.domain.value_objects.money import to_decimal, to_money
from src.domain.value_objects.priced_quote import (
    LocationSummary,
    PricedQuote,
    QuoteBreakdown,
    QuoteTotals,
    ServiceSummary,
)
from src.domain.value_objects.pricing_table import PricingTable
from src.domain.value_objects.quote_request import QuoteRequest

logger = get_logger(__name__)

METERS_TO_MILES = Decimal("0.000621371")
QUOTE_ID_ALPHABET = string.digits + string.ascii_lowercase
QUOTE_ID_SUFFIX_LENGTH = 9


def generate_quote_id(issued_at: datetime) -> str:
    """Build a ``TQ_<epoch ms>_<base36>`` quote identifier."""
    suffix = "".join(
        secrets.choice(QUOTE_ID_ALPHABET) for _ in range(QUOTE_ID_SUFFIX_LENGTH)
    )
    return f"TQ_{int(issued_at.timestamp() * 1000)}_{suffix}"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class QuoteAssembler:
    """Prices a quote request end to end."""

    def __init__(
        self,
        pricing_table: PricingTable,
        location_verifier: LocationVerifierInterface,
        default_confidence: Decimal = Decimal("0.85"),
        validity_days: int = 30,
        insights: Optional[QuoteInsights] = None,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self.pricing_table = pricing_table
        self.location_verifier = location_verifier
        self.default_confidence = to_decimal(default_confidence)
        self.validity_days = validity_days
        self.insights = insights or QuoteInsights()
        self.clock = clock or _utc_now

        self.pricer = ServicePricer(pricing_table)
        self.adjustments = AdjustmentCalculator(pricing_table)
        self.timeline = TimelineCalculator(pricing_table)
        self.transport = TransportCostModel(pricing_table.transport_hourly_rate)

    async def assemble(self, request: QuoteRequest) -> PricedQuote:
        """Price a validated quote request.

        Args:
            request: Validated project inputs

        Returns:
            PricedQuote whose final price equals subtotal + urgency + transport

        Raises:
            LocationUnresolvedError: If the site cannot be resolved
            UnknownEnumError: If a pricing table lookup has no entry
        """
        # 1. Resolve the job site and travel time
        location = await self.location_verifier.verify(request.location)

        # 2. Base and property-adjusted price
        base = self.pricer.price(
            request.service_type,
            request.acreage,
            request.density,
            request.property_type,
        )

        # 3. Transportation from the verified one-way duration
        transportation = self.transport.from_seconds(location.duration_seconds)

        # 4. Terrain, access, environmental and risk adjustments
        adjustments = self.adjustments.calculate(
            base.adjusted_price,
            request.terrain,
            request.accessibility_rating,
            request.environmental,
            location.risk_profile,
        )

        # 5. Urgency applied once to the adjusted subtotal
        timeline = self.timeline.calculate(request.urgency, request.seasonal_constraints)
        subtotal = base.adjusted_price + adjustments.total
        urgency_adjustment = timeline.urgency_delta(subtotal)
        final_price = subtotal + urgency_adjustment + transportation.charge

        issued_at = self.clock()
        today = issued_at.date()
        options = request.options

        quote = PricedQuote(
            quote_id=generate_quote_id(issued_at),
            service=ServiceSummary(
                service_type=request.service_type,
                description=base.service_rate.description,
                base_rate=base.service_rate.base_rate,
                unit=base.service_rate.unit,
                quantity=request.acreage,
            ),
            breakdown=QuoteBreakdown(
                base_service=base.base_price,
                property_adjusted=base.adjusted_price,
                complexity_adjustments=adjustments.complexity,
                accessibility_adjustments=adjustments.accessibility,
                environmental_adjustments=adjustments.environmental,
                risk_adjustments=adjustments.risk,
                total_adjustments=adjustments.total,
                urgency_adjustment=urgency_adjustment,
                transportation=transportation.charge,
            ),
            totals=QuoteTotals(
                subtotal=subtotal,
                urgency_adjustment=urgency_adjustment,
                transportation=transportation.charge,
                final_price=final_price,
                price_per_acre=to_money(final_price / request.acreage),
            ),
            confidence=(
                to_decimal(location.confidence)
                if location.confidence is not None
                else self.default_confidence
            ),
            issued_at=issued_at,
            valid_until=issued_at + timedelta(days=self.validity_days),
            urgency_multiplier=timeline.urgency_multiplier,
            seasonal_discount=timeline.seasonal_discount,
            location=self._location_summary(location),
            transportation=transportation,
            project_analysis=self.insights.project_analysis(request, location, today),
            business_insights=self.insights.business_insights(location, final_price),
            next_steps=self.insights.next_steps(final_price),
            recommendations=self.insights.recommendations(request, location, final_price),
            alternatives=(
                self.insights.alternatives(base.adjusted_price, transportation.charge)
                if options.include_alternatives
                else None
            ),
            seasonal_pricing=(
                self.insights.seasonal_pricing(final_price, today)
                if options.include_seasonal_pricing
                else None
            ),
            financing_options=(
                self.insights.financing_options(final_price)
                if options.include_financing
                else None
            ),
            detailed_analysis=(
                self._detailed_analysis(location)
                if options.include_detailed_breakdown
                else None
            ),
        )

        logger.info(
            "Quote assembled",
            quote_id=quote.quote_id,
            service_type=request.service_type.value,
            acreage=str(request.acreage),
            final_price=str(final_price),
            pricing_table=self.pricing_table.version,
        )

        return quote

    def _location_summary(self, location: VerifiedLocation) -> LocationSummary:
        miles = (to_decimal(location.distance_meters) * METERS_TO_MILES).quantize(
            Decimal("0.1")
        )
        return LocationSummary(
            address=location.address,
            lat=location.coordinates.lat,
            lng=location.coordinates.lng,
            verified=location.verified,
            service_area="Primary" if location.within_service_area else "Extended",
            distance_miles=miles,
            driving_minutes=round(location.duration_seconds / 60),
        )

    def _detailed_analysis(self, location: VerifiedLocation) -> dict:
        return {
            "site_analysis": location.raw_analysis or {},
            "risk_assessment": asdict(location.risk_profile) if location.risk_profile else None,
            "market_analysis": asdict(location.market_profile) if location.market_profile else None,
        }
