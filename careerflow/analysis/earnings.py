"""Earnings analysis: compensation timeline, market percentile, insights."""

import logging
from typing import Optional

from careerflow.analysis.constants import (
    DEFAULT_INDUSTRY_MEDIAN,
    INDUSTRY_MEDIAN_SALARY,
    MARKET_INSIGHT_CONFIDENCE,
    OVERTIME_HEAVY_THRESHOLD,
    OVERTIME_INSIGHT_CONFIDENCE,
    PERCENTILE_BANDS,
    SUPER_MULTIPLIER,
    TOP_PERCENTILE,
    match_industry,
)
from careerflow.analysis.estimator import base_salary_estimate, overtime_multiplier, position_earnings
from careerflow.analysis.models import EarningsAnalysis, EarningsInsight, EarningsSnapshot, InsightCategory
from careerflow.career.models import Position, UserProfile
from careerflow.utils.dates import effective_end, years_between

logger = logging.getLogger("careerflow.analysis.earnings")


def industry_median(industry: str) -> float:
    return match_industry(industry, INDUSTRY_MEDIAN_SALARY, DEFAULT_INDUSTRY_MEDIAN)


def income_percentile(income: float, industry: str) -> float:
    """Coarse four-bucket percentile of income against the industry median."""
    median = industry_median(industry)
    for ratio, percentile in PERCENTILE_BANDS:
        if income <= median * ratio:
            return percentile
    return TOP_PERCENTILE


def has_overtime_heavy_earnings(positions: list[Position]) -> bool:
    # Judged on the seniority factor alone, independent of the profile
    return any(overtime_multiplier(p) > OVERTIME_HEAVY_THRESHOLD for p in positions)


def _market_insight(current_total: float, industry: str) -> Optional[EarningsInsight]:
    percentile = income_percentile(current_total, industry)

    if percentile < 25.0:
        return EarningsInsight(
            category=InsightCategory.UNDERPAID,
            title="Earnings Below Market Median",
            description=(
                f"You're in the {percentile:.0f}th percentile for your industry and location. "
                "Consider negotiating or exploring market opportunities."
            ),
            confidence_level=MARKET_INSIGHT_CONFIDENCE,
            data_points=[
                f"Current total: ${current_total:.0f}",
                f"Industry median: ${industry_median(industry):.0f}",
            ],
        )

    if percentile > 75.0:
        return EarningsInsight(
            category=InsightCategory.OVERPAID,
            title="Earnings Above Market",
            description=f"You're in the {percentile:.0f}th percentile for your industry and location.",
            confidence_level=MARKET_INSIGHT_CONFIDENCE,
            data_points=[
                f"Current total: ${current_total:.0f}",
                "You're well compensated compared to peers",
            ],
        )

    return None


def calculate_earnings_analysis(
    positions: list[Position],
    profile: Optional[UserProfile] = None,
) -> EarningsAnalysis:
    """Build the earnings report.

    positions[0] is taken as the current position; callers pass the list most
    recent first. The loyalty tax fields stay at zero, see calculate_loyalty_tax.
    """
    if positions:
        current_total, current_hourly = position_earnings(positions[0], profile)
    else:
        current_total, current_hourly = 0.0, 0.0

    earnings_over_time = []
    career_earnings = 0.0
    years_experience = 0.0

    for position in positions:
        annual, hourly = position_earnings(position, profile)
        career_earnings += annual
        years_experience += years_between(position.start_date, effective_end(position.end_date))

        earnings_over_time.append(EarningsSnapshot(
            date=position.start_date,
            base_annual=base_salary_estimate(position),
            actual_annual=annual,
            total_with_super=annual * SUPER_MULTIPLIER,
            effective_hourly_rate=hourly,
        ))

    logger.debug(
        "Earnings over %d positions: %.0f estimated annual total across %.1f years",
        len(positions), career_earnings, years_experience,
    )

    industry = profile.industry if profile is not None else "Unknown"
    insights = []

    if profile is not None:
        if has_overtime_heavy_earnings(positions):
            insights.append(EarningsInsight(
                category=InsightCategory.OVERTIME_HEAVY,
                title="Overtime-Heavy Compensation Detected",
                description=(
                    "Your earnings are significantly boosted by overtime. Your base rate may appear "
                    "below market, but actual earnings place you higher."
                ),
                confidence_level=OVERTIME_INSIGHT_CONFIDENCE,
                data_points=[
                    f"Effective hourly rate: ${current_hourly:.2f}/hr",
                    "Consider roles with better base rates if overtime burnout is a concern",
                ],
            ))

        market_insight = _market_insight(current_total, industry)
        if market_insight is not None:
            insights.append(market_insight)

    return EarningsAnalysis(
        current_total_compensation=current_total,
        current_effective_hourly_rate=current_hourly,
        income_percentile=income_percentile(current_total, industry),
        loyalty_tax_annual=0.0,
        loyalty_tax_cumulative=0.0,
        earnings_over_time=earnings_over_time,
        hours_vs_earnings=[],
        super_trajectory=[],
        insights=insights,
    )
