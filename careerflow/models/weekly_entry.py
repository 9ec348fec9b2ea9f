"""Weekly entry model: one payslip week."""

from datetime import date, datetime, timezone
from typing import Optional

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from careerflow.compensation.models import Allowance, WeeklyCompensationEntry

from .base import Base


class WeeklyEntryRow(Base):
    __tablename__ = "weekly_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("positions.id", ondelete="SET NULL"), nullable=True
    )
    financial_year: Mapped[str] = mapped_column(String(10), nullable=False)
    week_ending: Mapped[date] = mapped_column(Date, nullable=False, index=True)
    gross_pay: Mapped[float] = mapped_column(Float, nullable=False)
    tax_withheld: Mapped[float] = mapped_column(Float, default=0.0)
    net_pay: Mapped[float] = mapped_column(Float, default=0.0)
    hours_ordinary: Mapped[float] = mapped_column(Float, default=0.0)
    hours_overtime: Mapped[float] = mapped_column(Float, default=0.0)
    overtime_rate_multiplier: Mapped[float] = mapped_column(Float, default=1.5)
    allowances: Mapped[list] = mapped_column(JSON, default=list)
    super_contributed: Mapped[float] = mapped_column(Float, default=0.0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    position: Mapped[Optional["PositionRow"]] = relationship(back_populates="weekly_entries")

    def update_from(self, entry: WeeklyCompensationEntry) -> None:
        self.position_id = entry.position_id
        self.financial_year = entry.financial_year
        self.week_ending = entry.week_ending
        self.gross_pay = entry.gross_pay
        self.tax_withheld = entry.tax_withheld
        self.net_pay = entry.net_pay
        self.hours_ordinary = entry.hours_ordinary
        self.hours_overtime = entry.hours_overtime
        self.overtime_rate_multiplier = entry.overtime_rate_multiplier
        self.allowances = [a.to_dict() for a in entry.allowances]
        self.super_contributed = entry.super_contributed
        self.notes = entry.notes

    def to_weekly_entry(self) -> WeeklyCompensationEntry:
        return WeeklyCompensationEntry(
            id=self.id,
            position_id=self.position_id,
            financial_year=self.financial_year,
            week_ending=self.week_ending,
            gross_pay=self.gross_pay,
            tax_withheld=self.tax_withheld,
            net_pay=self.net_pay,
            hours_ordinary=self.hours_ordinary,
            hours_overtime=self.hours_overtime,
            overtime_rate_multiplier=self.overtime_rate_multiplier,
            allowances=[Allowance.from_dict(a) for a in self.allowances or []],
            super_contributed=self.super_contributed,
            notes=self.notes,
        )
