"""Yearly income model: financial-year summaries (ATO or manual)."""

from datetime import datetime, timezone
from typing import Optional

from sqlalchemy import DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from careerflow.career.models import coerce_enum
from careerflow.compensation.models import IncomeSource, YearlyIncomeEntry

from .base import Base


class YearlyIncomeRow(Base):
    __tablename__ = "yearly_income_entries"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("positions.id", ondelete="SET NULL"), nullable=True
    )
    financial_year: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    gross_income: Mapped[float] = mapped_column(Float, nullable=False)
    tax_withheld: Mapped[float] = mapped_column(Float, default=0.0)
    reportable_super: Mapped[float] = mapped_column(Float, default=0.0)
    reportable_fringe_benefits: Mapped[float | None] = mapped_column(Float, nullable=True)
    source: Mapped[str] = mapped_column(String(10), nullable=False)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    position: Mapped[Optional["PositionRow"]] = relationship(back_populates="yearly_entries")

    def update_from(self, entry: YearlyIncomeEntry) -> None:
        self.position_id = entry.position_id
        self.financial_year = entry.financial_year
        self.gross_income = entry.gross_income
        self.tax_withheld = entry.tax_withheld
        self.reportable_super = entry.reportable_super
        self.reportable_fringe_benefits = entry.reportable_fringe_benefits
        self.source = entry.source.value
        self.notes = entry.notes

    def to_yearly_entry(self) -> YearlyIncomeEntry:
        return YearlyIncomeEntry(
            id=self.id,
            position_id=self.position_id,
            financial_year=self.financial_year,
            gross_income=self.gross_income,
            tax_withheld=self.tax_withheld,
            reportable_super=self.reportable_super,
            reportable_fringe_benefits=self.reportable_fringe_benefits,
            source=coerce_enum(IncomeSource, self.source),
            notes=self.notes,
        )
