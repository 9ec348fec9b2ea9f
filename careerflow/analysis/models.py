"""Report value objects produced by the analysis engine."""

from dataclasses import dataclass, field, fields, is_dataclass
from datetime import date
from enum import Enum
from typing import Optional

from careerflow.career.models import CareerPreferences, SeniorityLevel


def _to_json_value(value):
    if is_dataclass(value):
        return {f.name: _to_json_value(getattr(value, f.name)) for f in fields(value)}
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, list):
        return [_to_json_value(v) for v in value]
    return value


class _Report:
    def to_dict(self) -> dict:
        """Convert to JSON-safe primitives (ISO dates, enum values)."""
        return _to_json_value(self)


class InsightCategory(str, Enum):
    UNDERPAID = "Underpaid"
    FAIRLY_PAID = "FairlyPaid"
    OVERPAID = "Overpaid"
    OVERTIME_HEAVY = "OvertimeHeavy"
    LOYALTY_TAX = "LoyaltyTax"
    MARKET_OPPORTUNITY = "MarketOpportunity"
    SKILLS_GAP = "SkillsGap"


@dataclass
class EarningsSnapshot(_Report):
    date: date
    base_annual: float
    actual_annual: float
    total_with_super: float
    effective_hourly_rate: float


@dataclass
class HoursEarningsPoint(_Report):
    year: int
    total_hours_worked: float
    total_earnings: float
    overtime_percentage: float


@dataclass
class SuperSnapshot(_Report):
    financial_year: str
    employer_contributions: float
    personal_contributions: float
    total_super_balance: float


@dataclass
class EarningsInsight(_Report):
    category: InsightCategory
    title: str
    description: str
    confidence_level: float
    data_points: list[str] = field(default_factory=list)


@dataclass
class EarningsAnalysis(_Report):
    current_total_compensation: float = 0.0
    current_effective_hourly_rate: float = 0.0
    income_percentile: float = 0.0
    loyalty_tax_annual: float = 0.0
    loyalty_tax_cumulative: float = 0.0
    earnings_over_time: list[EarningsSnapshot] = field(default_factory=list)
    hours_vs_earnings: list[HoursEarningsPoint] = field(default_factory=list)
    super_trajectory: list[SuperSnapshot] = field(default_factory=list)
    insights: list[EarningsInsight] = field(default_factory=list)


@dataclass
class TenureBlock(_Report):
    employer_name: str
    start_date: date
    end_date: Optional[date]
    years_of_service: float
    actual_progression: float  # percent per year
    market_expected_progression: float  # percent per year
    loyalty_tax_impact: float


@dataclass
class MarketComparison(_Report):
    industry_average_growth: float
    role_level_growth: float
    cpi_adjusted_growth: float


@dataclass
class YearlyLoyaltyTax(_Report):
    year: int
    loyalty_tax_amount: float
    missed_opportunities: list[str] = field(default_factory=list)


@dataclass
class LoyaltyTaxAnalysis(_Report):
    tenure_blocks: list[TenureBlock]
    market_comparison: MarketComparison
    annual_loyalty_tax: list[YearlyLoyaltyTax] = field(default_factory=list)
    cumulative_loyalty_tax: float = 0.0
    confidence_level: float = 0.0


@dataclass
class ProfileSummary(_Report):
    name: str
    age: int
    location: str
    industry: str
    experience_years: float
    seniority_level: SeniorityLevel


@dataclass
class ResumePosition(_Report):
    employer: str
    title: str
    duration: str
    responsibilities: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    skills_used: list[str] = field(default_factory=list)


@dataclass
class CompensationSummary(_Report):
    current_base: float = 0.0
    current_total: float = 0.0
    career_earnings_total: float = 0.0
    average_annual_increase: float = 0.0


@dataclass
class ResumeExport(_Report):
    profile_summary: ProfileSummary
    career_timeline: list[ResumePosition]
    achievements: list[str]
    skills_and_tools: list[str]
    compensation_summary: CompensationSummary
    target_preferences: CareerPreferences
