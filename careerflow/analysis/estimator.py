"""Analytical compensation estimates for a single position.

Nothing here reads recorded pay: base salary comes from the seniority anchor
table and actual earnings from a three-factor overtime multiplier.
"""

from typing import Optional

from careerflow.analysis.constants import (
    BASE_SALARY_BY_SENIORITY,
    EMPLOYMENT_HOURS_FACTOR,
    EMPLOYMENT_TYPE_LOADING,
    INDUSTRY_OVERTIME_MULTIPLIER,
    OVERTIME_APPETITE_MULTIPLIER,
    SENIORITY_OVERTIME_MULTIPLIER,
    STANDARD_WEEKLY_HOURS,
    WEEKS_PER_YEAR,
    match_industry,
)
from careerflow.career.models import Position, UserProfile


def base_salary_estimate(position: Position) -> float:
    """Seniority anchor salary with the contract/casual loading applied."""
    return BASE_SALARY_BY_SENIORITY[position.seniority_level] * EMPLOYMENT_TYPE_LOADING[position.employment_type]


def industry_overtime_factor(profile: Optional[UserProfile]) -> float:
    if profile is None:
        return 1.0
    return match_industry(profile.industry, INDUSTRY_OVERTIME_MULTIPLIER, 1.0)


def personal_overtime_factor(profile: Optional[UserProfile]) -> float:
    if profile is None:
        return 1.0
    return OVERTIME_APPETITE_MULTIPLIER[profile.career_preferences.overtime_appetite]


def overtime_multiplier(position: Position, profile: Optional[UserProfile] = None) -> float:
    """Seniority factor x industry factor x personal appetite factor.

    Without a profile the last two factors are neutral.
    """
    return (
        SENIORITY_OVERTIME_MULTIPLIER[position.seniority_level]
        * industry_overtime_factor(profile)
        * personal_overtime_factor(profile)
    )


def annual_hours_estimate(position: Position) -> float:
    return STANDARD_WEEKLY_HOURS * WEEKS_PER_YEAR * EMPLOYMENT_HOURS_FACTOR[position.employment_type]


def position_earnings(position: Position, profile: Optional[UserProfile] = None) -> tuple[float, float]:
    """Estimate a position's earnings.

    Returns (actual_annual, effective_hourly_rate).
    """
    actual_annual = base_salary_estimate(position) * overtime_multiplier(position, profile)
    annual_hours = annual_hours_estimate(position)
    effective_hourly = actual_annual / annual_hours if annual_hours > 0 else 0.0
    return actual_annual, effective_hourly
