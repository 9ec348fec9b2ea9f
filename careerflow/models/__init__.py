"""ORM models for the career ledger."""

from .base import Base, create_session_factory, normalize_database_url
from .compensation_record import CompensationRecordRow
from .position import PositionRow
from .user_profile import UserProfileRow
from .weekly_entry import WeeklyEntryRow
from .yearly_entry import YearlyIncomeRow

__all__ = [
    "Base",
    "create_session_factory",
    "normalize_database_url",
    "UserProfileRow",
    "PositionRow",
    "CompensationRecordRow",
    "WeeklyEntryRow",
    "YearlyIncomeRow",
]
