"""Position model: one employment stint."""

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from careerflow.career.models import EmploymentType, Position, SeniorityLevel, coerce_enum

from .base import Base


class PositionRow(Base):
    __tablename__ = "positions"
    __table_args__ = (
        Index("idx_positions_dates", "start_date", "end_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    employer_name: Mapped[str] = mapped_column(String(255), nullable=False)
    job_title: Mapped[str] = mapped_column(String(255), nullable=False)
    employment_type: Mapped[str] = mapped_column(String(20), nullable=False)
    location: Mapped[str] = mapped_column(String(255), default="")
    start_date: Mapped[date] = mapped_column(Date, nullable=False)
    end_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    seniority_level: Mapped[str] = mapped_column(String(20), nullable=False)
    core_responsibilities: Mapped[str] = mapped_column(Text, default="")
    tools_systems_skills: Mapped[list] = mapped_column(JSON, default=list)
    achievements: Mapped[list] = mapped_column(JSON, default=list)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    compensation_records: Mapped[list["CompensationRecordRow"]] = relationship(
        back_populates="position", cascade="all, delete-orphan"
    )
    # No delete cascade: entries outlive the position with position_id set to NULL
    weekly_entries: Mapped[list["WeeklyEntryRow"]] = relationship(back_populates="position")
    yearly_entries: Mapped[list["YearlyIncomeRow"]] = relationship(back_populates="position")

    def update_from(self, position: Position) -> None:
        self.employer_name = position.employer_name
        self.job_title = position.job_title
        self.employment_type = position.employment_type.value
        self.location = position.location
        self.start_date = position.start_date
        self.end_date = position.end_date
        self.seniority_level = position.seniority_level.value
        self.core_responsibilities = position.core_responsibilities
        self.tools_systems_skills = list(position.tools_systems_skills)
        self.achievements = list(position.achievements)

    def to_position(self) -> Position:
        return Position(
            id=self.id,
            employer_name=self.employer_name,
            job_title=self.job_title,
            employment_type=coerce_enum(EmploymentType, self.employment_type),
            location=self.location or "",
            start_date=self.start_date,
            end_date=self.end_date,
            seniority_level=coerce_enum(SeniorityLevel, self.seniority_level),
            core_responsibilities=self.core_responsibilities or "",
            tools_systems_skills=list(self.tools_systems_skills or []),
            achievements=list(self.achievements or []),
        )
