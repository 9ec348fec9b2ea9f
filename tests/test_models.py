"""Tests for career and compensation data models."""

from datetime import date

import pytest

from careerflow.career.models import (
    AustralianState,
    CareerPreferences,
    EmploymentType,
    OvertimeAppetite,
    Position,
    Qualification,
    SeniorityLevel,
    UserProfile,
    coerce_enum,
)
from careerflow.compensation.models import (
    Allowance,
    AllowanceFrequency,
    CompensationRecord,
    IncomeSource,
    PayType,
    SuperDetails,
    WeeklyCompensationEntry,
    YearlyIncomeEntry,
)


class TestCoerceEnum:
    def test_by_value_and_name(self):
        assert coerce_enum(SeniorityLevel, "Senior") == SeniorityLevel.SENIOR
        assert coerce_enum(SeniorityLevel, "senior") == SeniorityLevel.SENIOR
        assert coerce_enum(Qualification, "high_school") == Qualification.HIGH_SCHOOL
        assert coerce_enum(Qualification, "HighSchool") == Qualification.HIGH_SCHOOL

    def test_member_passes_through(self):
        assert coerce_enum(EmploymentType, EmploymentType.CASUAL) is EmploymentType.CASUAL

    def test_default_for_missing(self):
        assert coerce_enum(EmploymentType, None, EmploymentType.PERMANENT) == EmploymentType.PERMANENT
        with pytest.raises(ValueError):
            coerce_enum(EmploymentType, None)

    def test_unknown_raises(self):
        with pytest.raises(ValueError, match="Unknown SeniorityLevel"):
            coerce_enum(SeniorityLevel, "Intern")


class TestPosition:
    def test_from_dict_defaults(self):
        position = Position.from_dict({
            "employer_name": "Acme",
            "job_title": "Engineer",
            "start_date": "2020-01-15",
        })
        assert position.start_date == date(2020, 1, 15)
        assert position.end_date is None
        assert position.is_current
        assert position.employment_type == EmploymentType.PERMANENT
        assert position.seniority_level == SeniorityLevel.MID
        assert position.tools_systems_skills == []

    def test_to_dict_round_values(self):
        position = Position(
            employer_name="Acme",
            job_title="Engineer",
            start_date=date(2020, 1, 15),
            end_date=date(2021, 2, 1),
            employment_type=EmploymentType.CONTRACT,
            seniority_level=SeniorityLevel.LEAD,
        )
        data = position.to_dict()
        assert data["start_date"] == "2020-01-15"
        assert data["end_date"] == "2021-02-01"
        assert data["employment_type"] == "Contract"
        assert data["seniority_level"] == "Lead"
        assert Position.from_dict(data) == position

    def test_missing_field_raises(self):
        with pytest.raises(ValueError, match="job_title"):
            Position.from_dict({"employer_name": "Acme", "start_date": "2020-01-01"})

    def test_wrong_types_raise_value_error(self):
        base = {"employer_name": "Acme", "job_title": "Engineer", "start_date": "2020-01-01"}
        with pytest.raises(ValueError, match="employer_name"):
            Position.from_dict({**base, "employer_name": None})
        with pytest.raises(ValueError, match="job_title"):
            Position.from_dict({**base, "job_title": ["Engineer"]})
        with pytest.raises(ValueError, match="tools_systems_skills"):
            Position.from_dict({**base, "tools_systems_skills": "Python"})
        with pytest.raises(ValueError, match="must be a mapping"):
            Position.from_dict(["Acme"])

    def test_validate_tolerates_non_string_names(self):
        position = Position(employer_name=None, job_title="Engineer", start_date=date(2020, 1, 1))
        assert position.validate() == ["employer_name is required"]

    def test_validate(self):
        position = Position(
            employer_name=" ",
            job_title="Engineer",
            start_date=date(2021, 1, 1),
            end_date=date(2020, 1, 1),
        )
        errors = position.validate()
        assert len(errors) == 2
        assert any("employer_name" in e for e in errors)
        assert any("before start_date" in e for e in errors)

    def test_valid_position(self):
        position = Position(employer_name="Acme", job_title="Engineer", start_date=date(2021, 1, 1))
        assert position.validate() == []


class TestUserProfile:
    def test_from_dict(self):
        profile = UserProfile.from_dict({
            "first_name": "Sam",
            "last_name": "Taylor",
            "date_of_birth": "1985-11-02",
            "state": "qld",
            "industry": "Mining",
            "career_preferences": {"overtime_appetite": "High"},
        })
        assert profile.full_name == "Sam Taylor"
        assert profile.state == AustralianState.QLD
        assert profile.highest_qualification == Qualification.BACHELOR
        assert profile.career_preferences.overtime_appetite == OvertimeAppetite.HIGH

    def test_missing_date_of_birth(self):
        with pytest.raises(ValueError):
            UserProfile.from_dict({"first_name": "Sam", "last_name": "Taylor"})

    def test_neutral_preferences(self):
        prefs = CareerPreferences()
        assert prefs.employment_type_preference == EmploymentType.PERMANENT
        assert prefs.overtime_appetite == OvertimeAppetite.MODERATE
        assert not prefs.privacy_acknowledged
        assert not prefs.disclaimer_acknowledged


class TestCompensationRecord:
    def test_salary_annual_base(self):
        record = CompensationRecord(position_id=1, base_rate=100000.0, effective_date=date(2024, 7, 1))
        assert record.annual_base() == 100000.0

    def test_hourly_annual_base(self):
        record = CompensationRecord(
            position_id=1,
            base_rate=50.0,
            effective_date=date(2024, 7, 1),
            pay_type=PayType.HOURLY,
        )
        assert record.annual_base() == pytest.approx(50.0 * 38.0 * 52.0)

    def test_allowances(self):
        record = CompensationRecord(
            position_id=1,
            base_rate=100000.0,
            effective_date=date(2024, 7, 1),
            allowances=[
                Allowance("Tools", 20.0, AllowanceFrequency.WEEKLY),
                Allowance("Phone", 50.0, AllowanceFrequency.MONTHLY),
            ],
        )
        assert record.annual_allowances() == pytest.approx(20.0 * 52 + 50.0 * 12)

    def test_employer_super_uses_financial_year_guarantee_rate(self):
        # March 2022 falls in FY2021-22, July 2024 in FY2024-25
        march = CompensationRecord(position_id=1, base_rate=100000.0, effective_date=date(2022, 3, 1))
        july = CompensationRecord(position_id=1, base_rate=100000.0, effective_date=date(2024, 7, 1))
        assert march.employer_super() == pytest.approx(10000.0)
        assert july.employer_super() == pytest.approx(11500.0)

    def test_employer_super_rate_clamped(self):
        early = CompensationRecord(position_id=1, base_rate=100000.0, effective_date=date(2010, 1, 1))
        late = CompensationRecord(position_id=1, base_rate=100000.0, effective_date=date(2030, 1, 1))
        assert early.employer_super() == pytest.approx(9500.0)
        assert late.employer_super() == pytest.approx(12000.0)

    def test_employer_super_explicit_rate(self):
        record = CompensationRecord(
            position_id=1,
            base_rate=100000.0,
            effective_date=date(2022, 3, 1),
            super_contributions=SuperDetails(contribution_rate=15.0),
        )
        assert record.employer_super(80000.0) == pytest.approx(12000.0)

    def test_from_dict_requires_position(self):
        with pytest.raises(ValueError):
            CompensationRecord.from_dict({"base_rate": 1.0, "effective_date": "2024-01-01"})

    def test_from_dict_rejects_null_amounts(self):
        with pytest.raises(ValueError, match="base_rate"):
            CompensationRecord.from_dict({"position_id": 1, "base_rate": None, "effective_date": "2024-01-01"})
        with pytest.raises(ValueError, match="position_id"):
            CompensationRecord.from_dict({"position_id": "one", "base_rate": 1.0, "effective_date": "2024-01-01"})
        with pytest.raises(ValueError, match="amount"):
            Allowance.from_dict({"name": "Site", "amount": {"value": 50}})


class TestPayEntries:
    def test_weekly_entry_derives_fields(self):
        entry = WeeklyCompensationEntry(
            week_ending=date(2024, 7, 5),
            gross_pay=2000.0,
            tax_withheld=450.0,
            hours_ordinary=38.0,
            hours_overtime=6.0,
        )
        assert entry.financial_year == "FY2024-25"
        assert entry.net_pay == pytest.approx(1550.0)
        assert entry.total_hours == 44.0

    def test_weekly_entry_keeps_explicit_values(self):
        entry = WeeklyCompensationEntry.from_dict({
            "week_ending": "2024-06-28",
            "gross_pay": 1500,
            "net_pay": 1200,
            "financial_year": "FY2023-24",
        })
        assert entry.net_pay == 1200.0
        assert entry.financial_year == "FY2023-24"

    def test_weekly_entry_rejects_bad_gross_pay(self):
        with pytest.raises(ValueError, match="gross_pay"):
            WeeklyCompensationEntry.from_dict({"week_ending": "2024-06-28", "gross_pay": None})
        with pytest.raises(ValueError, match="gross_pay"):
            WeeklyCompensationEntry.from_dict({"week_ending": "2024-06-28", "gross_pay": True})

    def test_yearly_entry(self):
        entry = YearlyIncomeEntry.from_dict({
            "financial_year": "FY2023-24",
            "gross_income": 120000,
            "tax_withheld": 30000,
            "source": "ato",
        })
        assert entry.source == IncomeSource.ATO
        assert entry.net_income == 90000.0
        assert entry.to_dict()["source"] == "ATO"
