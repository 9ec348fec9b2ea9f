"""Date helpers shared by the models and the analysis engine."""

from datetime import date, datetime
from typing import Optional

# Substituted for the end date of any open-ended position.
ANALYSIS_CUTOFF = date(2024, 12, 31)

DAYS_PER_YEAR = 365.25


def effective_end(end_date: Optional[date]) -> date:
    """Return the end date, or the analysis cutoff for an ongoing position."""
    return end_date if end_date is not None else ANALYSIS_CUTOFF


def years_between(start: date, end: date) -> float:
    """Elapsed days between two dates expressed in 365.25-day years."""
    return (end - start).days / DAYS_PER_YEAR


def months_between(start: date, end: date) -> int:
    """Calendar month difference; the day of month is ignored."""
    return (end.year - start.year) * 12 + (end.month - start.month)


def parse_date(value) -> Optional[date]:
    """Accept a date, an ISO 'YYYY-MM-DD' string (datetime suffixes allowed) or None."""
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(str(value)[:10])


def financial_year_start(day: date) -> int:
    """Calendar year in which the Australian financial year (1 July - 30 June) containing day began."""
    return day.year if day.month >= 7 else day.year - 1


def financial_year_label(day: date) -> str:
    """Financial year label, e.g. 'FY2024-25'."""
    start_year = financial_year_start(day)
    return f"FY{start_year}-{(start_year + 1) % 100:02d}"
