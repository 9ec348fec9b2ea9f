"""SQLAlchemy-backed storage for the profile, positions and pay records."""

import logging
import threading
from contextlib import contextmanager
from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from careerflow.career.models import Position, UserProfile
from careerflow.compensation.models import CompensationRecord, WeeklyCompensationEntry, YearlyIncomeEntry
from careerflow.models import (
    Base,
    CompensationRecordRow,
    PositionRow,
    UserProfileRow,
    WeeklyEntryRow,
    YearlyIncomeRow,
    create_session_factory,
)

logger = logging.getLogger("careerflow.storage")

EXPORT_FORMAT_VERSION = "1.0.0"


class StorageError(Exception):
    """Raised when the underlying store fails."""


class RecordNotFoundError(StorageError):
    """Raised when an update or delete names an id that does not exist."""


class CareerDatabase:
    """The career ledger store.

    Every public operation runs in its own session under a single lock, so one
    instance can be shared between threads.
    """

    def __init__(self, database_url: str = "sqlite:///data/careerflow.db"):
        self.database_url = database_url
        self._lock = threading.Lock()
        self.engine, self._session_factory = create_session_factory(database_url)
        self._create_tables()

    def _create_tables(self):
        try:
            Base.metadata.create_all(self.engine)
        except SQLAlchemyError as e:
            raise StorageError(f"Could not initialise database: {e}") from e

    @contextmanager
    def _session(self):
        with self._lock:
            session: Session = self._session_factory()
            try:
                yield session
                session.commit()
            except SQLAlchemyError as e:
                session.rollback()
                logger.error("Database operation failed: %s", e)
                raise StorageError(f"{type(e).__name__}: {e}") from e
            except Exception:
                session.rollback()
                raise
            finally:
                session.close()

    @staticmethod
    def _get_row(session: Session, row_cls, record_id: int):
        row = session.get(row_cls, record_id)
        if row is None:
            raise RecordNotFoundError(f"{row_cls.__tablename__} id {record_id} not found")
        return row

    # -- User profile -----------------------------------------------------

    def get_user_profile(self) -> Optional[UserProfile]:
        """Return the single profile, or None if the user has not created one."""
        with self._session() as session:
            row = session.scalars(select(UserProfileRow).order_by(UserProfileRow.id).limit(1)).first()
            return row.to_user_profile() if row else None

    def save_user_profile(self, profile: UserProfile) -> int:
        """Insert the profile, or update the existing one. Returns its id."""
        with self._session() as session:
            if profile.id is not None:
                row = self._get_row(session, UserProfileRow, profile.id)
            else:
                row = session.scalars(select(UserProfileRow).order_by(UserProfileRow.id).limit(1)).first()
                if row is None:
                    row = UserProfileRow()
                    session.add(row)

            row.update_from(profile)
            session.flush()
            profile.id = row.id
            logger.info("Saved profile for %s", profile.full_name)
            return row.id

    # -- Positions --------------------------------------------------------

    def get_positions(self) -> list[Position]:
        """All positions, most recent start date first."""
        with self._session() as session:
            rows = session.scalars(
                select(PositionRow).order_by(PositionRow.start_date.desc(), PositionRow.id.desc())
            ).all()
            return [row.to_position() for row in rows]

    def get_position(self, position_id: int) -> Position:
        with self._session() as session:
            return self._get_row(session, PositionRow, position_id).to_position()

    @staticmethod
    def _check_position(position: Position, label: str = "position"):
        errors = position.validate()
        if errors:
            raise ValueError(f"Invalid {label}: " + "; ".join(errors))

    def _write_position(self, session: Session, position: Position) -> int:
        if position.id is None:
            row = PositionRow()
            session.add(row)
        else:
            row = self._get_row(session, PositionRow, position.id)

        row.update_from(position)
        session.flush()
        position.id = row.id
        logger.info("Saved position %d: %s @ %s", row.id, position.job_title, position.employer_name)
        return row.id

    def save_position(self, position: Position) -> int:
        """Insert a new position (id is None) or update an existing one. Returns its id."""
        self._check_position(position)
        with self._session() as session:
            return self._write_position(session, position)

    def save_positions(self, positions: list[Position]) -> list[int]:
        """Save several positions in one transaction; nothing is written if any is invalid."""
        for i, position in enumerate(positions, start=1):
            self._check_position(position, f"position #{i}")
        with self._session() as session:
            return [self._write_position(session, position) for position in positions]

    def delete_position(self, position_id: int):
        """Delete a position and its compensation records; payslip entries are kept unlinked."""
        with self._session() as session:
            row = self._get_row(session, PositionRow, position_id)
            session.delete(row)
            logger.info("Deleted position %d", position_id)

    # -- Compensation records ---------------------------------------------

    def get_compensation_records(self, position_id: int) -> list[CompensationRecord]:
        with self._session() as session:
            rows = session.scalars(
                select(CompensationRecordRow)
                .where(CompensationRecordRow.position_id == position_id)
                .order_by(CompensationRecordRow.effective_date.desc())
            ).all()
            return [row.to_compensation_record() for row in rows]

    def get_all_compensation_records(self) -> list[CompensationRecord]:
        with self._session() as session:
            rows = session.scalars(
                select(CompensationRecordRow).order_by(CompensationRecordRow.effective_date.desc())
            ).all()
            return [row.to_compensation_record() for row in rows]

    def save_compensation_record(self, record: CompensationRecord) -> int:
        with self._session() as session:
            self._get_row(session, PositionRow, record.position_id)
            if record.id is None:
                row = CompensationRecordRow()
                session.add(row)
            else:
                row = self._get_row(session, CompensationRecordRow, record.id)

            row.update_from(record)
            session.flush()
            record.id = row.id
            return row.id

    def delete_compensation_record(self, record_id: int):
        with self._session() as session:
            session.delete(self._get_row(session, CompensationRecordRow, record_id))

    # -- Weekly entries ---------------------------------------------------

    def get_weekly_entries(self) -> list[WeeklyCompensationEntry]:
        with self._session() as session:
            rows = session.scalars(select(WeeklyEntryRow).order_by(WeeklyEntryRow.week_ending.desc())).all()
            return [row.to_weekly_entry() for row in rows]

    def save_weekly_entry(self, entry: WeeklyCompensationEntry) -> int:
        with self._session() as session:
            if entry.position_id is not None:
                self._get_row(session, PositionRow, entry.position_id)
            if entry.id is None:
                row = WeeklyEntryRow()
                session.add(row)
            else:
                row = self._get_row(session, WeeklyEntryRow, entry.id)

            row.update_from(entry)
            session.flush()
            entry.id = row.id
            return row.id

    def delete_weekly_entry(self, entry_id: int):
        with self._session() as session:
            session.delete(self._get_row(session, WeeklyEntryRow, entry_id))

    # -- Yearly income entries --------------------------------------------

    def get_yearly_entries(self) -> list[YearlyIncomeEntry]:
        with self._session() as session:
            rows = session.scalars(
                select(YearlyIncomeRow).order_by(YearlyIncomeRow.financial_year.desc(), YearlyIncomeRow.id.desc())
            ).all()
            return [row.to_yearly_entry() for row in rows]

    def save_yearly_entry(self, entry: YearlyIncomeEntry) -> int:
        with self._session() as session:
            if entry.position_id is not None:
                self._get_row(session, PositionRow, entry.position_id)
            if entry.id is None:
                row = YearlyIncomeRow()
                session.add(row)
            else:
                row = self._get_row(session, YearlyIncomeRow, entry.id)

            row.update_from(entry)
            session.flush()
            entry.id = row.id
            return row.id

    def delete_yearly_entry(self, entry_id: int):
        with self._session() as session:
            session.delete(self._get_row(session, YearlyIncomeRow, entry_id))

    # -- Backup / reset ---------------------------------------------------

    @staticmethod
    def _clear(session: Session):
        for row_cls in (YearlyIncomeRow, WeeklyEntryRow, CompensationRecordRow, PositionRow, UserProfileRow):
            session.query(row_cls).delete()

    def clear_all_data(self):
        """Remove every record from the ledger."""
        with self._session() as session:
            self._clear(session)
        logger.warning("All ledger data cleared")

    def export_all_data(self) -> dict:
        """Snapshot the whole ledger as JSON-safe data."""
        profile = self.get_user_profile()
        return {
            "user_profile": profile.to_dict() if profile else None,
            "positions": [p.to_dict() for p in self.get_positions()],
            "compensation_records": [r.to_dict() for r in self.get_all_compensation_records()],
            "weekly_entries": [e.to_dict() for e in self.get_weekly_entries()],
            "yearly_income_entries": [e.to_dict() for e in self.get_yearly_entries()],
            "export_date": datetime.now(timezone.utc).isoformat(),
            "version": EXPORT_FORMAT_VERSION,
        }

    def import_all_data(self, data: dict) -> dict:
        """Replace the ledger with the contents of an export.

        Ids in the backup are remapped; records pointing at a position that is
        not part of the backup are rejected. Raises ValueError on malformed
        data, before anything is written.
        """
        if not isinstance(data, dict):
            raise ValueError("Backup data must be a JSON object")

        profile_data = data.get("user_profile")
        profile = UserProfile.from_dict(profile_data) if profile_data else None
        positions = [Position.from_dict(p) for p in data.get("positions") or []]
        records = [CompensationRecord.from_dict(r) for r in data.get("compensation_records") or []]
        weekly = [WeeklyCompensationEntry.from_dict(e) for e in data.get("weekly_entries") or []]
        yearly = [YearlyIncomeEntry.from_dict(e) for e in data.get("yearly_income_entries") or []]

        for position in positions:
            self._check_position(position, "position in backup")

        known_ids = {p.id for p in positions if p.id is not None}
        for record in records:
            if record.position_id not in known_ids:
                raise ValueError(f"Compensation record refers to unknown position {record.position_id}")

        with self._session() as session:
            self._clear(session)

            if profile is not None:
                row = UserProfileRow()
                row.update_from(profile)
                session.add(row)

            id_map = {}
            for position in positions:
                row = PositionRow()
                row.update_from(position)
                session.add(row)
                session.flush()
                if position.id is not None:
                    id_map[position.id] = row.id

            for record in records:
                row = CompensationRecordRow()
                row.update_from(record)
                row.position_id = id_map[record.position_id]
                session.add(row)

            for entry in weekly:
                row = WeeklyEntryRow()
                row.update_from(entry)
                row.position_id = id_map.get(entry.position_id)
                session.add(row)

            for entry in yearly:
                row = YearlyIncomeRow()
                row.update_from(entry)
                row.position_id = id_map.get(entry.position_id)
                session.add(row)

        imported = {
            "profile": profile is not None,
            "positions": len(positions),
            "compensation": len(records),
            "weekly_entries": len(weekly),
            "yearly_entries": len(yearly),
        }
        logger.info("Imported backup: %s", imported)
        return imported

    def get_stats(self) -> dict:
        """Get ledger statistics."""
        with self._session() as session:
            stats = {
                "has_profile": session.scalar(select(func.count(UserProfileRow.id))) > 0,
                "total_positions": session.scalar(select(func.count(PositionRow.id))),
                "current_positions": session.scalar(
                    select(func.count(PositionRow.id)).where(PositionRow.end_date.is_(None))
                ),
                "compensation_records": session.scalar(select(func.count(CompensationRecordRow.id))),
                "weekly_entries": session.scalar(select(func.count(WeeklyEntryRow.id))),
                "yearly_entries": session.scalar(select(func.count(YearlyIncomeRow.id))),
            }

            latest = session.scalars(
                select(PositionRow).order_by(PositionRow.start_date.desc(), PositionRow.id.desc()).limit(1)
            ).first()
            stats["latest_employer"] = latest.employer_name if latest else None

            rows = session.execute(
                select(PositionRow.employer_name, func.count(PositionRow.id)).group_by(PositionRow.employer_name)
            ).all()
            stats["by_employer"] = {name: count for name, count in rows}

        return stats

    def close(self):
        if self.engine is not None:
            self.engine.dispose()
            self.engine = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
