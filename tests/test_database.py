"""Tests for the SQLAlchemy career database."""

import os
import tempfile
from datetime import date

import pytest

from careerflow.career.models import OvertimeAppetite, Position, SeniorityLevel, UserProfile
from careerflow.compensation.models import (
    Allowance,
    CompensationRecord,
    OvertimeDetails,
    OvertimeFrequency,
    WeeklyCompensationEntry,
    YearlyIncomeEntry,
)
from careerflow.storage.database import CareerDatabase, RecordNotFoundError, StorageError


@pytest.fixture
def db():
    """Create a temporary database for testing."""
    with tempfile.TemporaryDirectory() as tmpdir:
        database = CareerDatabase(f"sqlite:///{os.path.join(tmpdir, 'test.db')}")
        yield database
        database.close()


@pytest.fixture
def sample_profile():
    return UserProfile(
        first_name="Riley",
        last_name="Morgan",
        date_of_birth=date(1987, 9, 9),
        industry="Construction",
    )


def make_position(employer="Acme", start=date(2020, 1, 1), end=None, seniority=SeniorityLevel.MID):
    return Position(
        employer_name=employer,
        job_title="Site Engineer",
        start_date=start,
        end_date=end,
        seniority_level=seniority,
        tools_systems_skills=["AutoCAD"],
        achievements=["Delivered on time"],
    )


class TestUserProfile:
    def test_no_profile_initially(self, db):
        assert db.get_user_profile() is None

    def test_save_and_load(self, db, sample_profile):
        profile_id = db.save_user_profile(sample_profile)
        loaded = db.get_user_profile()
        assert loaded.id == profile_id
        assert loaded.full_name == "Riley Morgan"
        assert loaded.date_of_birth == date(1987, 9, 9)
        assert loaded.career_preferences == sample_profile.career_preferences

    def test_second_save_updates_single_row(self, db, sample_profile):
        first_id = db.save_user_profile(sample_profile)
        replacement = UserProfile(
            first_name="Riley",
            last_name="Morgan-Smith",
            date_of_birth=date(1987, 9, 9),
        )
        replacement.career_preferences.overtime_appetite = OvertimeAppetite.EXTREME

        assert db.save_user_profile(replacement) == first_id
        loaded = db.get_user_profile()
        assert loaded.last_name == "Morgan-Smith"
        assert loaded.career_preferences.overtime_appetite == OvertimeAppetite.EXTREME


class TestPositions:
    def test_add_and_get(self, db):
        position = make_position()
        position_id = db.save_position(position)
        assert position.id == position_id

        loaded = db.get_position(position_id)
        assert loaded == position

    def test_most_recent_first(self, db):
        db.save_position(make_position("Old Co", date(2012, 1, 1), date(2015, 1, 1)))
        db.save_position(make_position("New Co", date(2020, 1, 1)))
        db.save_position(make_position("Mid Co", date(2015, 1, 1), date(2020, 1, 1)))

        assert [p.employer_name for p in db.get_positions()] == ["New Co", "Mid Co", "Old Co"]

    def test_update(self, db):
        position = make_position()
        db.save_position(position)
        position.job_title = "Project Manager"
        position.end_date = date(2023, 6, 30)
        db.save_position(position)

        loaded = db.get_position(position.id)
        assert loaded.job_title == "Project Manager"
        assert loaded.end_date == date(2023, 6, 30)
        assert len(db.get_positions()) == 1

    def test_invalid_position_rejected(self, db):
        with pytest.raises(ValueError, match="before start_date"):
            db.save_position(make_position(start=date(2022, 1, 1), end=date(2021, 1, 1)))
        assert db.get_positions() == []

    def test_save_positions_in_one_transaction(self, db):
        ids = db.save_positions([make_position(), make_position(employer="Globex", start=date(2021, 1, 1))])
        assert len(ids) == 2
        assert [p.employer_name for p in db.get_positions()] == ["Globex", "Acme"]

    def test_save_positions_rejects_whole_batch(self, db):
        good = make_position(employer="Good")
        bad = make_position(employer="Bad", start=date(2022, 1, 1), end=date(2020, 1, 1))
        with pytest.raises(ValueError, match="position #2"):
            db.save_positions([good, bad])
        assert db.get_positions() == []
        assert good.id is None

    def test_save_positions_rolls_back_on_missing_id(self, db):
        ghost = make_position(employer="Ghost")
        ghost.id = 999
        with pytest.raises(RecordNotFoundError):
            db.save_positions([make_position(employer="Fresh"), ghost])
        assert db.get_positions() == []

    def test_missing_ids_raise(self, db):
        with pytest.raises(RecordNotFoundError):
            db.get_position(999)
        with pytest.raises(RecordNotFoundError):
            db.delete_position(999)

        ghost = make_position()
        ghost.id = 999
        with pytest.raises(RecordNotFoundError):
            db.save_position(ghost)

    def test_not_found_is_a_storage_error(self):
        assert issubclass(RecordNotFoundError, StorageError)


class TestCompensationAndEntries:
    def test_records_per_position(self, db):
        position_id = db.save_position(make_position())
        db.save_compensation_record(CompensationRecord(
            position_id=position_id,
            base_rate=90000.0,
            effective_date=date(2020, 1, 1),
        ))
        db.save_compensation_record(CompensationRecord(
            position_id=position_id,
            base_rate=98000.0,
            effective_date=date(2021, 7, 1),
            overtime=OvertimeDetails(frequency=OvertimeFrequency.FREQUENT, average_hours_per_week=5.0),
            allowances=[Allowance("Site", 40.0)],
        ))

        records = db.get_compensation_records(position_id)
        assert [r.base_rate for r in records] == [98000.0, 90000.0]
        assert records[0].overtime.frequency == OvertimeFrequency.FREQUENT
        assert records[0].allowances[0].annual_amount == pytest.approx(40.0 * 52)

    def test_record_for_missing_position(self, db):
        with pytest.raises(RecordNotFoundError):
            db.save_compensation_record(CompensationRecord(
                position_id=42, base_rate=1.0, effective_date=date(2020, 1, 1),
            ))

    def test_delete_position_cascades_records_and_detaches_entries(self, db):
        position_id = db.save_position(make_position())
        db.save_compensation_record(CompensationRecord(
            position_id=position_id, base_rate=90000.0, effective_date=date(2020, 1, 1),
        ))
        db.save_weekly_entry(WeeklyCompensationEntry(
            week_ending=date(2024, 7, 5), gross_pay=1800.0, position_id=position_id,
        ))
        db.save_yearly_entry(YearlyIncomeEntry(
            financial_year="FY2023-24", gross_income=95000.0, position_id=position_id,
        ))

        db.delete_position(position_id)

        assert db.get_positions() == []
        assert db.get_all_compensation_records() == []
        weekly = db.get_weekly_entries()
        yearly = db.get_yearly_entries()
        assert len(weekly) == 1 and weekly[0].position_id is None
        assert len(yearly) == 1 and yearly[0].position_id is None

    def test_weekly_entries_newest_first(self, db):
        db.save_weekly_entry(WeeklyCompensationEntry(week_ending=date(2024, 6, 28), gross_pay=1700.0))
        db.save_weekly_entry(WeeklyCompensationEntry(week_ending=date(2024, 7, 5), gross_pay=1800.0))

        entries = db.get_weekly_entries()
        assert [e.week_ending for e in entries] == [date(2024, 7, 5), date(2024, 6, 28)]
        assert [e.financial_year for e in entries] == ["FY2024-25", "FY2023-24"]

    def test_yearly_entries_and_delete(self, db):
        old_id = db.save_yearly_entry(YearlyIncomeEntry(financial_year="FY2022-23", gross_income=80000.0))
        db.save_yearly_entry(YearlyIncomeEntry(financial_year="FY2023-24", gross_income=90000.0))
        assert [e.financial_year for e in db.get_yearly_entries()] == ["FY2023-24", "FY2022-23"]

        db.delete_yearly_entry(old_id)
        assert [e.financial_year for e in db.get_yearly_entries()] == ["FY2023-24"]
        with pytest.raises(RecordNotFoundError):
            db.delete_yearly_entry(old_id)


class TestBackup:
    def _populate(self, db, profile):
        db.save_user_profile(profile)
        old_id = db.save_position(make_position("Old Co", date(2015, 1, 1), date(2019, 12, 31)))
        new_id = db.save_position(make_position("New Co", date(2020, 1, 1), seniority=SeniorityLevel.SENIOR))
        db.save_compensation_record(CompensationRecord(
            position_id=new_id, base_rate=125000.0, effective_date=date(2020, 1, 1),
        ))
        db.save_weekly_entry(WeeklyCompensationEntry(
            week_ending=date(2024, 7, 5), gross_pay=2400.0, position_id=new_id,
        ))
        db.save_yearly_entry(YearlyIncomeEntry(
            financial_year="FY2018-19", gross_income=70000.0, position_id=old_id,
        ))

    def test_export_contents(self, db, sample_profile):
        self._populate(db, sample_profile)
        data = db.export_all_data()

        assert data["version"] == "1.0.0"
        assert data["export_date"]
        assert data["user_profile"]["first_name"] == "Riley"
        assert [p["employer_name"] for p in data["positions"]] == ["New Co", "Old Co"]
        assert len(data["compensation_records"]) == 1
        assert len(data["weekly_entries"]) == 1
        assert len(data["yearly_income_entries"]) == 1

    def test_import_replaces_ledger(self, db, sample_profile):
        self._populate(db, sample_profile)
        data = db.export_all_data()

        db.clear_all_data()
        db.save_position(make_position("Stray Co"))

        counts = db.import_all_data(data)
        assert counts == {
            "profile": True,
            "positions": 2,
            "compensation": 1,
            "weekly_entries": 1,
            "yearly_entries": 1,
        }

        positions = db.get_positions()
        assert [p.employer_name for p in positions] == ["New Co", "Old Co"]
        new_co = positions[0]
        assert [r.base_rate for r in db.get_compensation_records(new_co.id)] == [125000.0]
        assert db.get_weekly_entries()[0].position_id == new_co.id
        assert db.get_yearly_entries()[0].position_id == positions[1].id
        assert db.get_user_profile().full_name == "Riley Morgan"

    def test_import_remaps_position_ids(self, db):
        data = {
            "positions": [make_position("Remote Co").to_dict() | {"id": 77}],
            "compensation_records": [
                {"position_id": 77, "base_rate": 110000.0, "effective_date": "2021-01-01"},
            ],
        }
        db.import_all_data(data)

        position = db.get_positions()[0]
        assert position.id != 77
        assert len(db.get_compensation_records(position.id)) == 1

    def test_bad_import_leaves_data_untouched(self, db, sample_profile):
        self._populate(db, sample_profile)
        bad = {
            "positions": [],
            "compensation_records": [
                {"position_id": 5, "base_rate": 1.0, "effective_date": "2021-01-01"},
            ],
        }
        with pytest.raises(ValueError):
            db.import_all_data(bad)
        assert len(db.get_positions()) == 2

    def test_clear_all_data(self, db, sample_profile):
        self._populate(db, sample_profile)
        db.clear_all_data()

        stats = db.get_stats()
        assert stats["has_profile"] is False
        assert stats["total_positions"] == 0
        assert stats["compensation_records"] == 0
        assert stats["weekly_entries"] == 0
        assert stats["yearly_entries"] == 0


class TestStats:
    def test_stats_empty_db(self, db):
        stats = db.get_stats()
        assert stats["total_positions"] == 0
        assert stats["latest_employer"] is None
        assert stats["by_employer"] == {}

    def test_stats(self, db, sample_profile):
        db.save_user_profile(sample_profile)
        db.save_position(make_position("Acme", date(2015, 1, 1), date(2018, 1, 1)))
        db.save_position(make_position("Acme", date(2018, 1, 1), date(2021, 1, 1)))
        db.save_position(make_position("Globex", date(2021, 1, 1)))

        stats = db.get_stats()
        assert stats["has_profile"] is True
        assert stats["total_positions"] == 3
        assert stats["current_positions"] == 1
        assert stats["latest_employer"] == "Globex"
        assert stats["by_employer"] == {"Acme": 2, "Globex": 1}

    def test_context_manager_closes(self):
        with tempfile.TemporaryDirectory() as tmpdir:
            with CareerDatabase(f"sqlite:///{os.path.join(tmpdir, 'ctx.db')}") as database:
                database.save_position(make_position())
            assert database.engine is None
