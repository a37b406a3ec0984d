"""
Quote extras: alternatives, seasonal pricing, financing and sales insights.

None of these values feed back into the quoted price.
"""

import math
from datetime import date
from decimal import Decimal
from typing import List, Optional, Tuple

from src.application.interfaces.providers import VerifiedLocation
from src.domain.value_objects.environmental_flags import EnvironmentalFlags
from src.domain.value_objects.money import to_money, to_whole_units
from src.domain.value_objects.priced_quote import (
    AlternativeOption,
    BusinessInsights,
    FinancingOption,
    ProjectAnalysis,
    SeasonalPricing,
)
from src.domain.value_objects.quote_request import QuoteRequest
from src.domain.value_objects.site_conditions import AccessRisk, VegetationDensity

SEASON_MULTIPLIERS = {
    "winter": Decimal("0.90"),
    "spring": Decimal("1.10"),
    "summer": Decimal("1.00"),
    "fall": Decimal("1.05"),
}
BEST_SEASON = "winter"

DURATION_DAYS_PER_ACRE = Decimal("0.5")
DURATION_DENSITY_MULTIPLIERS = {
    VegetationDensity.LIGHT: Decimal("0.8"),
    VegetationDensity.MODERATE: Decimal("1.0"),
    VegetationDensity.HEAVY: Decimal("1.5"),
    VegetationDensity.EXTREME: Decimal("2.0"),
}

FINANCING_THRESHOLD = Decimal("3000")
MAJOR_PROJECT_THRESHOLD = Decimal("5000")
LARGE_PROJECT_THRESHOLD = Decimal("10000")
HIGH_RETENTION_PROBABILITY = 0.8

# (term months, total cost factor, advertised APR)
FINANCING_PLANS = (
    (12, Decimal("1.05"), "5.9%"),
    (24, Decimal("1.12"), "6.9%"),
)

WET_SEASON_MONTHS = range(6, 11)
BIRD_NESTING_MONTHS = range(3, 9)


def season_for_month(month: int) -> str:
    """Map a calendar month (1-12) to its pricing season."""
    if month == 12 or month <= 3:
        return "winter"
    if month <= 6:
        return "spring"
    if month <= 9:
        return "summer"
    return "fall"


class QuoteInsights:
    """Builds the informational sections of a priced quote."""

    def alternatives(
        self, adjusted_price: Decimal, transportation: Decimal
    ) -> Tuple[AlternativeOption, ...]:
        """Standard, premium and budget packages around the adjusted price."""
        return (
            AlternativeOption(
                name="Standard Package",
                description="Our recommended approach",
                price=to_money(adjusted_price + transportation),
                features=("Professional equipment", "Debris cleanup", "1-year warranty"),
            ),
            AlternativeOption(
                name="Premium Package",
                description="Enhanced service with extras",
                price=to_money(adjusted_price * Decimal("1.25") + transportation),
                features=(
                    "Premium equipment",
                    "Complete cleanup",
                    "Soil amendment",
                    "2-year warranty",
                ),
            ),
            AlternativeOption(
                name="Budget Package",
                description="Cost-effective option",
                price=to_money(adjusted_price * Decimal("0.85") + transportation),
                features=("Standard equipment", "Basic cleanup", "90-day warranty"),
            ),
        )

    def seasonal_pricing(self, final_price: Decimal, today: date) -> SeasonalPricing:
        season = season_for_month(today.month)
        multiplier = SEASON_MULTIPLIERS[season]
        best_multiplier = SEASON_MULTIPLIERS[BEST_SEASON]

        return SeasonalPricing(
            current_season=season,
            seasonal_multiplier=multiplier,
            adjusted_price=to_money(final_price * multiplier),
            best_season=BEST_SEASON,
            best_season_price=to_money(final_price * best_multiplier),
            best_season_savings=to_money(final_price * (multiplier - best_multiplier)),
        )

    def financing_options(
        self, final_price: Decimal
    ) -> Optional[Tuple[FinancingOption, ...]]:
        """Financing plans; only offered above the financing threshold."""
        if final_price <= FINANCING_THRESHOLD:
            return None

        return tuple(
            FinancingOption(
                term_months=term,
                monthly_payment=to_whole_units(final_price * factor / term),
                total_cost=to_whole_units(final_price * factor),
                apr=apr,
            )
            for term, factor, apr in FINANCING_PLANS
        )

    def estimated_duration_days(
        self, acreage: Decimal, density: VegetationDensity
    ) -> int:
        days = acreage * DURATION_DAYS_PER_ACRE * DURATION_DENSITY_MULTIPLIERS[density]
        return max(1, math.ceil(days))

    def equipment_required(
        self, density: VegetationDensity, environmental: EnvironmentalFlags
    ) -> Tuple[str, ...]:
        equipment = ["Forestry Mulcher", "Support Crew"]
        if density == VegetationDensity.EXTREME:
            equipment.extend(["Heavy-duty Mulcher", "Additional Crew"])
        if environmental.building_proximity:
            equipment.append("Precision Equipment")
        return tuple(equipment)

    def seasonal_factors(
        self, environmental: EnvironmentalFlags, today: date
    ) -> Tuple[str, ...]:
        factors = []
        if today.month in WET_SEASON_MONTHS:
            factors.append("Wet season considerations")
        if today.month in BIRD_NESTING_MONTHS:
            factors.append("Bird nesting season restrictions may apply")
        if environmental.wetlands:
            factors.append("Wetlands restrictions during wet season")
        return tuple(factors)

    def project_analysis(
        self, request: QuoteRequest, location: VerifiedLocation, today: date
    ) -> ProjectAnalysis:
        risk_factors = (
            tuple(location.risk_profile.liability_factors)
            if location.risk_profile
            else ()
        )
        return ProjectAnalysis(
            estimated_duration_days=self.estimated_duration_days(
                request.acreage, request.density
            ),
            equipment_required=self.equipment_required(
                request.density, request.environmental
            ),
            seasonal_factors=self.seasonal_factors(request.environmental, today),
            risk_factors=risk_factors,
        )

    def business_insights(
        self, location: VerifiedLocation, final_price: Decimal
    ) -> BusinessInsights:
        market = location.market_profile
        is_premium = market is not None and market.market_segment == "premium"
        retention = market.customer_retention_probability if market else None

        return BusinessInsights(
            market_position=(
                "Premium market - price competitively positioned"
                if is_premium
                else "Standard market - excellent value proposition"
            ),
            competitive_advantage=(
                "Site-verified accurate pricing",
                "Comprehensive risk assessment",
                "Transparent cost breakdown",
            ),
            value_proposition=(
                "Major land improvement project - significant property value increase"
                if final_price > MAJOR_PROJECT_THRESHOLD
                else "Cost-effective land management solution"
            ),
            recommended_follow_up=(
                "High retention probability - excellent customer fit"
                if retention is not None and retention > HIGH_RETENTION_PROBABILITY
                else "Standard follow-up recommended"
            ),
        )

    def next_steps(self, final_price: Decimal) -> Tuple[str, ...]:
        steps = [
            "Schedule a free on-site consultation to confirm details",
            "Review and accept quote to begin project scheduling",
            "Obtain any required permits (we can assist)",
        ]
        if final_price > LARGE_PROJECT_THRESHOLD:
            steps.append("Consider financing options available")
        return tuple(steps)

    def recommendations(
        self,
        request: QuoteRequest,
        location: VerifiedLocation,
        final_price: Decimal,
    ) -> Tuple[str, ...]:
        recommendations: List[str] = []

        if location.risk_profile and location.risk_profile.access_risk == AccessRisk.HIGH:
            recommendations.append("Schedule site visit to confirm equipment access")
        if final_price > LARGE_PROJECT_THRESHOLD:
            recommendations.append("Consider phasing project to spread costs over time")
        if request.environmental.utility_lines:
            recommendations.append("Utility marking required before work begins")
        if location.market_profile and location.market_profile.market_segment == "premium":
            recommendations.append(
                "Premium service tier recommended for this market segment"
            )

        return tuple(recommendations)
