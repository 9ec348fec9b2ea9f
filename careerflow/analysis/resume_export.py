"""Resume export: career history projected into a display-ready summary."""

from datetime import date
from typing import Optional

from careerflow.analysis.estimator import base_salary_estimate, overtime_multiplier
from careerflow.analysis.models import CompensationSummary, ProfileSummary, ResumeExport, ResumePosition
from careerflow.career.models import CareerPreferences, Position, SeniorityLevel, UserProfile
from careerflow.utils.dates import ANALYSIS_CUTOFF, effective_end, months_between, years_between


def format_duration(start: date, end: date) -> str:
    """Whole years and leftover months from the calendar month difference."""
    months = months_between(start, end)
    years, remaining_months = divmod(months, 12)

    if years > 0:
        if remaining_months > 0:
            return f"{years}y {remaining_months}m"
        return f"{years}y"
    return f"{remaining_months}m"


def total_experience_years(positions: list[Position]) -> float:
    # Concurrent positions are counted twice
    return sum(years_between(p.start_date, effective_end(p.end_date)) for p in positions)


def _profile_summary(positions: list[Position], profile: Optional[UserProfile]) -> ProfileSummary:
    if profile is None:
        return ProfileSummary(
            name="Unknown",
            age=0,
            location="Unknown",
            industry="Unknown",
            experience_years=0.0,
            seniority_level=SeniorityLevel.ENTRY,
        )

    return ProfileSummary(
        name=profile.full_name,
        age=ANALYSIS_CUTOFF.year - profile.date_of_birth.year,
        location=profile.state.value,
        industry=profile.industry,
        experience_years=total_experience_years(positions),
        seniority_level=positions[0].seniority_level if positions else SeniorityLevel.ENTRY,
    )


def _resume_position(position: Position) -> ResumePosition:
    if position.end_date is not None:
        duration = format_duration(position.start_date, position.end_date)
    else:
        duration = f"{position.start_date.strftime('%b %Y')} - Present"

    # Lines end at \n or \r\n only; form feeds and unicode separators stay in the text
    lines = (line.rstrip("\r") for line in position.core_responsibilities.split("\n"))
    responsibilities = [line.strip() for line in lines if line.strip()]

    return ResumePosition(
        employer=position.employer_name,
        title=position.job_title,
        duration=duration,
        responsibilities=responsibilities,
        achievements=list(position.achievements),
        skills_used=list(position.tools_systems_skills),
    )


def compensation_summary(positions: list[Position]) -> CompensationSummary:
    """Summarise estimated pay across the list, positions[0] being current.

    Overtime is estimated without the profile's industry or appetite factors.
    The average increase compares the two ends of the list as given.
    """
    if not positions:
        return CompensationSummary()

    current = positions[0]
    current_base = base_salary_estimate(current)
    current_total = current_base * overtime_multiplier(current)
    career_total = sum(base_salary_estimate(p) * overtime_multiplier(p) for p in positions)

    average_increase = 0.0
    if len(positions) > 1:
        earliest_salary = base_salary_estimate(positions[-1])
        years = total_experience_years(positions)
        if years > 0 and earliest_salary > 0:
            average_increase = ((current_base - earliest_salary) / earliest_salary) / years * 100.0

    return CompensationSummary(
        current_base=current_base,
        current_total=current_total,
        career_earnings_total=career_total,
        average_annual_increase=average_increase,
    )


def generate_resume_export(
    positions: list[Position],
    profile: Optional[UserProfile] = None,
) -> ResumeExport:
    return ResumeExport(
        profile_summary=_profile_summary(positions, profile),
        career_timeline=[_resume_position(p) for p in positions],
        achievements=[a for p in positions for a in p.achievements],
        skills_and_tools=[s for p in positions for s in p.tools_systems_skills],
        compensation_summary=compensation_summary(positions),
        target_preferences=profile.career_preferences if profile is not None else CareerPreferences(),
    )
