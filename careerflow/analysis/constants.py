"""Static market and payroll tables used by the estimation engine.

All figures are approximate Australian values for 2024 and are not refreshed
from any live source.
"""

from careerflow.career.models import EmploymentType, OvertimeAppetite, SeniorityLevel

# Anchor base salary per seniority level (Permanent, full time)
BASE_SALARY_BY_SENIORITY = {
    SeniorityLevel.ENTRY: 60000.0,
    SeniorityLevel.JUNIOR: 75000.0,
    SeniorityLevel.MID: 95000.0,
    SeniorityLevel.SENIOR: 120000.0,
    SeniorityLevel.LEAD: 140000.0,
    SeniorityLevel.MANAGER: 130000.0,
    SeniorityLevel.DIRECTOR: 180000.0,
    SeniorityLevel.EXECUTIVE: 250000.0,
}

# Contract premium and casual loading
EMPLOYMENT_TYPE_LOADING = {
    EmploymentType.PERMANENT: 1.0,
    EmploymentType.CONTRACT: 1.2,
    EmploymentType.CASUAL: 1.25,
}

# Typical overtime uplift by seniority; peaks at Lead, tapers for management
SENIORITY_OVERTIME_MULTIPLIER = {
    SeniorityLevel.ENTRY: 1.05,
    SeniorityLevel.JUNIOR: 1.10,
    SeniorityLevel.MID: 1.15,
    SeniorityLevel.SENIOR: 1.20,
    SeniorityLevel.LEAD: 1.25,
    SeniorityLevel.MANAGER: 1.10,
    SeniorityLevel.DIRECTOR: 1.05,
    SeniorityLevel.EXECUTIVE: 1.05,
}

# Checked in order; first keyword found in the lowercased industry wins
INDUSTRY_OVERTIME_MULTIPLIER = [
    (("mining",), 1.30),
    (("construction",), 1.25),
    (("engineering",), 1.20),
    (("it", "technology"), 1.15),
]

OVERTIME_APPETITE_MULTIPLIER = {
    OvertimeAppetite.NONE: 0.95,
    OvertimeAppetite.MINIMAL: 1.0,
    OvertimeAppetite.MODERATE: 1.1,
    OvertimeAppetite.HIGH: 1.25,
    OvertimeAppetite.EXTREME: 1.40,
}

STANDARD_WEEKLY_HOURS = 38.0
WEEKS_PER_YEAR = 52.0

# Contractors tend to work longer weeks, casuals shorter ones
EMPLOYMENT_HOURS_FACTOR = {
    EmploymentType.PERMANENT: 1.0,
    EmploymentType.CONTRACT: 1.1,
    EmploymentType.CASUAL: 0.8,
}

# Median total compensation by industry, same matching rules as above
INDUSTRY_MEDIAN_SALARY = [
    (("mining",), 125000.0),
    (("it", "technology"), 110000.0),
    (("engineering",), 105000.0),
    (("construction",), 95000.0),
    (("healthcare",), 85000.0),
    (("education",), 80000.0),
    (("finance",), 100000.0),
]
DEFAULT_INDUSTRY_MEDIAN = 90000.0

# (upper bound as a fraction of the industry median, percentile bucket)
PERCENTILE_BANDS = [
    (0.75, 25.0),
    (1.00, 50.0),
    (1.25, 75.0),
]
TOP_PERCENTILE = 90.0

# Flat superannuation approximation applied to earnings snapshots
SUPER_MULTIPLIER = 1.11

# Superannuation guarantee rate (%) keyed by the year a financial year starts
SUPER_GUARANTEE_RATES = {
    2020: 9.5,
    2021: 10.0,
    2022: 10.5,
    2023: 11.0,
    2024: 11.5,
    2025: 12.0,
}

# Expected annual pay growth when changing jobs at market pace
MARKET_GROWTH_RATES = {
    SeniorityLevel.ENTRY: 0.04,
    SeniorityLevel.JUNIOR: 0.05,
    SeniorityLevel.MID: 0.06,
    SeniorityLevel.SENIOR: 0.07,
    SeniorityLevel.LEAD: 0.08,
    SeniorityLevel.MANAGER: 0.08,
    SeniorityLevel.DIRECTOR: 0.09,
    SeniorityLevel.EXECUTIVE: 0.10,
}
DEFAULT_MARKET_GROWTH_RATE = 0.05

LOYALTY_TAX_MIN_TENURE_YEARS = 2.0

INDUSTRY_AVERAGE_GROWTH = 0.06
ROLE_LEVEL_GROWTH = 0.07
CPI_ADJUSTED_GROWTH = 0.03

OVERTIME_HEAVY_THRESHOLD = 1.2
OVERTIME_INSIGHT_CONFIDENCE = 0.85
MARKET_INSIGHT_CONFIDENCE = 0.75
LOYALTY_TAX_CONFIDENCE = 0.75


def super_guarantee_rate(year: int) -> float:
    """Guarantee rate for the financial year starting in 'year', clamped to the table."""
    if year in SUPER_GUARANTEE_RATES:
        return SUPER_GUARANTEE_RATES[year]
    years = sorted(SUPER_GUARANTEE_RATES)
    if year < years[0]:
        return SUPER_GUARANTEE_RATES[years[0]]
    return SUPER_GUARANTEE_RATES[years[-1]]


def match_industry(industry: str, table: list, default: float) -> float:
    """Case-insensitive substring lookup against an ordered keyword table."""
    industry_lower = (industry or "").lower()
    for keywords, value in table:
        if any(keyword in industry_lower for keyword in keywords):
            return value
    return default
