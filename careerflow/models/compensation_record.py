"""Compensation record model: a pay package attached to a position."""

from datetime import date, datetime, timezone

from sqlalchemy import JSON, Date, DateTime, Float, ForeignKey, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from careerflow.career.models import coerce_enum
from careerflow.compensation.models import (
    Allowance,
    Bonus,
    CompensationEntryType,
    CompensationRecord,
    OvertimeDetails,
    OvertimeFrequency,
    PayslipFrequency,
    PayType,
    SuperDetails,
)

from .base import Base


class CompensationRecordRow(Base):
    __tablename__ = "compensation_records"
    __table_args__ = (
        Index("idx_compensation_position_date", "position_id", "effective_date"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    position_id: Mapped[int] = mapped_column(Integer, ForeignKey("positions.id", ondelete="CASCADE"), nullable=False)
    entry_type: Mapped[str] = mapped_column(String(20), nullable=False)
    pay_type: Mapped[str] = mapped_column(String(20), nullable=False)
    base_rate: Mapped[float] = mapped_column(Float, nullable=False)
    standard_weekly_hours: Mapped[float] = mapped_column(Float, default=38.0)

    overtime_frequency: Mapped[str] = mapped_column(String(20), nullable=False)
    overtime_rate_multiplier: Mapped[float] = mapped_column(Float, default=1.5)
    overtime_average_hours_per_week: Mapped[float] = mapped_column(Float, default=0.0)
    overtime_annual_hours: Mapped[float | None] = mapped_column(Float, nullable=True)

    allowances: Mapped[list] = mapped_column(JSON, default=list)
    bonuses: Mapped[list] = mapped_column(JSON, default=list)

    super_contribution_rate: Mapped[float] = mapped_column(Float, default=0.0)
    super_additional_contributions: Mapped[float] = mapped_column(Float, default=0.0)
    super_salary_sacrifice: Mapped[float] = mapped_column(Float, default=0.0)

    payslip_frequency: Mapped[str | None] = mapped_column(String(20), nullable=True)
    tax_withheld: Mapped[float | None] = mapped_column(Float, nullable=True)
    effective_date: Mapped[date] = mapped_column(Date, nullable=False)
    confidence_score: Mapped[float] = mapped_column(Float, default=100.0)
    notes: Mapped[str | None] = mapped_column(Text, nullable=True)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )

    position: Mapped["PositionRow"] = relationship(back_populates="compensation_records")

    def update_from(self, record: CompensationRecord) -> None:
        self.position_id = record.position_id
        self.entry_type = record.entry_type.value
        self.pay_type = record.pay_type.value
        self.base_rate = record.base_rate
        self.standard_weekly_hours = record.standard_weekly_hours
        self.overtime_frequency = record.overtime.frequency.value
        self.overtime_rate_multiplier = record.overtime.rate_multiplier
        self.overtime_average_hours_per_week = record.overtime.average_hours_per_week
        self.overtime_annual_hours = record.overtime.annual_hours
        self.allowances = [a.to_dict() for a in record.allowances]
        self.bonuses = [b.to_dict() for b in record.bonuses]
        self.super_contribution_rate = record.super_contributions.contribution_rate
        self.super_additional_contributions = record.super_contributions.additional_contributions
        self.super_salary_sacrifice = record.super_contributions.salary_sacrifice
        self.payslip_frequency = record.payslip_frequency.value if record.payslip_frequency else None
        self.tax_withheld = record.tax_withheld
        self.effective_date = record.effective_date
        self.confidence_score = record.confidence_score
        self.notes = record.notes

    def to_compensation_record(self) -> CompensationRecord:
        return CompensationRecord(
            id=self.id,
            position_id=self.position_id,
            entry_type=coerce_enum(CompensationEntryType, self.entry_type),
            pay_type=coerce_enum(PayType, self.pay_type),
            base_rate=self.base_rate,
            standard_weekly_hours=self.standard_weekly_hours,
            overtime=OvertimeDetails(
                frequency=coerce_enum(OvertimeFrequency, self.overtime_frequency),
                rate_multiplier=self.overtime_rate_multiplier,
                average_hours_per_week=self.overtime_average_hours_per_week,
                annual_hours=self.overtime_annual_hours,
            ),
            allowances=[Allowance.from_dict(a) for a in self.allowances or []],
            bonuses=[Bonus.from_dict(b) for b in self.bonuses or []],
            super_contributions=SuperDetails(
                contribution_rate=self.super_contribution_rate,
                additional_contributions=self.super_additional_contributions,
                salary_sacrifice=self.super_salary_sacrifice,
            ),
            payslip_frequency=coerce_enum(PayslipFrequency, self.payslip_frequency) if self.payslip_frequency else None,
            tax_withheld=self.tax_withheld,
            effective_date=self.effective_date,
            confidence_score=self.confidence_score,
            notes=self.notes,
        )
