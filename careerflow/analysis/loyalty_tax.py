"""Loyalty tax: the modeled cost of pay growth lagging the market while
staying with one employer.

Positions are grouped by exact employer name. Each group spanning more than
two years is compared against the market growth rate for the seniority level
reached at the end of the stint; any shortfall is charged on the final base
salary for every year of tenure.
"""

import logging

from careerflow.analysis.constants import (
    CPI_ADJUSTED_GROWTH,
    DEFAULT_MARKET_GROWTH_RATE,
    INDUSTRY_AVERAGE_GROWTH,
    LOYALTY_TAX_CONFIDENCE,
    LOYALTY_TAX_MIN_TENURE_YEARS,
    MARKET_GROWTH_RATES,
    ROLE_LEVEL_GROWTH,
)
from careerflow.analysis.estimator import base_salary_estimate
from careerflow.analysis.models import LoyaltyTaxAnalysis, MarketComparison, TenureBlock
from careerflow.career.models import Position
from careerflow.utils.dates import effective_end, years_between

logger = logging.getLogger("careerflow.analysis.loyalty_tax")


def group_by_employer(positions: list[Position]) -> dict[str, list[Position]]:
    """Group positions by employer name, in order of first appearance."""
    groups: dict[str, list[Position]] = {}
    for position in positions:
        groups.setdefault(position.employer_name, []).append(position)
    return groups


def _tenure_block(employer: str, group: list[Position]) -> TenureBlock | None:
    ordered = sorted(group, key=lambda p: p.start_date)
    first, last = ordered[0], ordered[-1]

    start_date = first.start_date
    end_date = effective_end(last.end_date)
    tenure_years = years_between(start_date, end_date)

    if tenure_years <= LOYALTY_TAX_MIN_TENURE_YEARS:
        logger.debug("Skipping %s: %.2f years is too short for a loyalty tax", employer, tenure_years)
        return None

    first_salary = base_salary_estimate(first)
    last_salary = base_salary_estimate(last)
    if first_salary > 0:
        actual_progression = ((last_salary - first_salary) / first_salary) / tenure_years
    else:
        actual_progression = 0.0

    market_expected = MARKET_GROWTH_RATES.get(last.seniority_level, DEFAULT_MARKET_GROWTH_RATE)

    # A shortfall is charged; beating the market earns no credit
    loyalty_tax_rate = max(market_expected - actual_progression, 0.0)
    impact = last_salary * loyalty_tax_rate * tenure_years

    return TenureBlock(
        employer_name=employer,
        start_date=start_date,
        end_date=end_date,
        years_of_service=tenure_years,
        actual_progression=actual_progression * 100.0,
        market_expected_progression=market_expected * 100.0,
        loyalty_tax_impact=impact,
    )


def calculate_loyalty_tax(positions: list[Position]) -> LoyaltyTaxAnalysis:
    tenure_blocks = []
    cumulative_tax = 0.0

    groups = group_by_employer(positions)
    for employer, group in groups.items():
        block = _tenure_block(employer, group)
        if block is None:
            continue
        tenure_blocks.append(block)
        cumulative_tax += block.loyalty_tax_impact

    logger.debug(
        "Loyalty tax: %d of %d employers qualified, cumulative %.0f",
        len(tenure_blocks), len(groups), cumulative_tax,
    )

    return LoyaltyTaxAnalysis(
        tenure_blocks=tenure_blocks,
        market_comparison=MarketComparison(
            industry_average_growth=INDUSTRY_AVERAGE_GROWTH,
            role_level_growth=ROLE_LEVEL_GROWTH,
            cpi_adjusted_growth=CPI_ADJUSTED_GROWTH,
        ),
        annual_loyalty_tax=[],
        cumulative_loyalty_tax=cumulative_tax,
        confidence_level=LOYALTY_TAX_CONFIDENCE if tenure_blocks else 0.0,
    )
