"""Granular pay records: compensation packages, payslips and yearly summaries.

These are stored alongside positions but the analysis engine does not read
them; it estimates compensation from the position itself.
"""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from careerflow.analysis.constants import WEEKS_PER_YEAR, super_guarantee_rate
from careerflow.career.models import coerce_enum
from careerflow.utils.dates import financial_year_label, financial_year_start
from careerflow.utils.fields import (
    date_field,
    int_field,
    list_field,
    number_field,
    require_mapping,
    text_field,
)


class CompensationEntryType(str, Enum):
    FUZZY = "Fuzzy"
    EXACT = "Exact"


class PayType(str, Enum):
    SALARY = "Salary"
    HOURLY = "Hourly"


class OvertimeFrequency(str, Enum):
    NONE = "None"
    OCCASIONAL = "Occasional"
    FREQUENT = "Frequent"
    EXTREME = "Extreme"


class AllowanceFrequency(str, Enum):
    WEEKLY = "Weekly"
    FORTNIGHTLY = "Fortnightly"
    MONTHLY = "Monthly"
    ANNUALLY = "Annually"


class PayslipFrequency(str, Enum):
    WEEKLY = "Weekly"
    FORTNIGHTLY = "Fortnightly"
    MONTHLY = "Monthly"


class IncomeSource(str, Enum):
    ATO = "ATO"
    MANUAL = "Manual"


PERIODS_PER_YEAR = {
    AllowanceFrequency.WEEKLY: 52,
    AllowanceFrequency.FORTNIGHTLY: 26,
    AllowanceFrequency.MONTHLY: 12,
    AllowanceFrequency.ANNUALLY: 1,
}


@dataclass
class Allowance:
    name: str
    amount: float
    frequency: AllowanceFrequency = AllowanceFrequency.WEEKLY
    taxable: bool = True

    @property
    def annual_amount(self) -> float:
        return self.amount * PERIODS_PER_YEAR[self.frequency]

    @classmethod
    def from_dict(cls, data: dict) -> "Allowance":
        require_mapping(data, "Allowance")
        return cls(
            name=text_field(data, "name", ""),
            amount=number_field(data, "amount", 0.0),
            frequency=coerce_enum(AllowanceFrequency, data.get("frequency"), AllowanceFrequency.WEEKLY),
            taxable=bool(data.get("taxable", True)),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "frequency": self.frequency.value,
            "taxable": self.taxable,
        }


@dataclass
class Bonus:
    name: str
    amount: float
    date_awarded: date
    taxable: bool = True

    @classmethod
    def from_dict(cls, data: dict) -> "Bonus":
        require_mapping(data, "Bonus")
        return cls(
            name=text_field(data, "name", ""),
            amount=number_field(data, "amount", 0.0),
            date_awarded=date_field(data, "date_awarded"),
            taxable=bool(data.get("taxable", True)),
        )

    def to_dict(self) -> dict:
        return {
            "name": self.name,
            "amount": self.amount,
            "date_awarded": self.date_awarded.isoformat(),
            "taxable": self.taxable,
        }


@dataclass
class OvertimeDetails:
    frequency: OvertimeFrequency = OvertimeFrequency.NONE
    rate_multiplier: float = 1.5
    average_hours_per_week: float = 0.0
    annual_hours: Optional[float] = None

    @classmethod
    def from_dict(cls, data: dict) -> "OvertimeDetails":
        require_mapping(data, "overtime")
        return cls(
            frequency=coerce_enum(OvertimeFrequency, data.get("frequency"), OvertimeFrequency.NONE),
            rate_multiplier=number_field(data, "rate_multiplier", 1.5),
            average_hours_per_week=number_field(data, "average_hours_per_week", 0.0),
            annual_hours=number_field(data, "annual_hours", None),
        )

    def to_dict(self) -> dict:
        return {
            "frequency": self.frequency.value,
            "rate_multiplier": self.rate_multiplier,
            "average_hours_per_week": self.average_hours_per_week,
            "annual_hours": self.annual_hours,
        }


@dataclass
class SuperDetails:
    contribution_rate: float = 0.0  # percent; 0 means "use the guarantee rate"
    additional_contributions: float = 0.0
    salary_sacrifice: float = 0.0

    @classmethod
    def from_dict(cls, data: dict) -> "SuperDetails":
        require_mapping(data, "super_contributions")
        return cls(
            contribution_rate=number_field(data, "contribution_rate", 0.0),
            additional_contributions=number_field(data, "additional_contributions", 0.0),
            salary_sacrifice=number_field(data, "salary_sacrifice", 0.0),
        )

    def to_dict(self) -> dict:
        return {
            "contribution_rate": self.contribution_rate,
            "additional_contributions": self.additional_contributions,
            "salary_sacrifice": self.salary_sacrifice,
        }


@dataclass
class CompensationRecord:
    """A pay package attached to a position, effective from a given date."""

    position_id: int
    base_rate: float  # annual salary or hourly rate, depending on pay_type
    effective_date: date
    entry_type: CompensationEntryType = CompensationEntryType.EXACT
    pay_type: PayType = PayType.SALARY
    standard_weekly_hours: float = 38.0
    overtime: OvertimeDetails = field(default_factory=OvertimeDetails)
    allowances: list[Allowance] = field(default_factory=list)
    bonuses: list[Bonus] = field(default_factory=list)
    super_contributions: SuperDetails = field(default_factory=SuperDetails)
    payslip_frequency: Optional[PayslipFrequency] = None
    tax_withheld: Optional[float] = None
    confidence_score: float = 100.0  # 0-100, lower for fuzzy entries
    notes: Optional[str] = None
    id: Optional[int] = None

    def annual_base(self) -> float:
        if self.pay_type == PayType.HOURLY:
            return self.base_rate * self.standard_weekly_hours * WEEKS_PER_YEAR
        return self.base_rate

    def annual_allowances(self) -> float:
        return sum(a.annual_amount for a in self.allowances)

    def employer_super(self, annual_earnings: Optional[float] = None) -> float:
        """Employer contributions on the given earnings (defaults to annual base)."""
        earnings = self.annual_base() if annual_earnings is None else annual_earnings
        rate = self.super_contributions.contribution_rate or super_guarantee_rate(financial_year_start(self.effective_date))
        return earnings * rate / 100.0

    @classmethod
    def from_dict(cls, data: dict) -> "CompensationRecord":
        require_mapping(data, "Compensation record")
        payslip = data.get("payslip_frequency")
        return cls(
            id=int_field(data, "id", None),
            position_id=int_field(data, "position_id"),
            base_rate=number_field(data, "base_rate"),
            effective_date=date_field(data, "effective_date"),
            entry_type=coerce_enum(CompensationEntryType, data.get("entry_type"), CompensationEntryType.EXACT),
            pay_type=coerce_enum(PayType, data.get("pay_type"), PayType.SALARY),
            standard_weekly_hours=number_field(data, "standard_weekly_hours", 38.0),
            overtime=OvertimeDetails.from_dict(data.get("overtime") or {}),
            allowances=[Allowance.from_dict(a) for a in list_field(data, "allowances")],
            bonuses=[Bonus.from_dict(b) for b in list_field(data, "bonuses")],
            super_contributions=SuperDetails.from_dict(data.get("super_contributions") or {}),
            payslip_frequency=coerce_enum(PayslipFrequency, payslip) if payslip else None,
            tax_withheld=number_field(data, "tax_withheld", None),
            confidence_score=number_field(data, "confidence_score", 100.0),
            notes=text_field(data, "notes", None),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position_id": self.position_id,
            "entry_type": self.entry_type.value,
            "pay_type": self.pay_type.value,
            "base_rate": self.base_rate,
            "standard_weekly_hours": self.standard_weekly_hours,
            "overtime": self.overtime.to_dict(),
            "allowances": [a.to_dict() for a in self.allowances],
            "bonuses": [b.to_dict() for b in self.bonuses],
            "super_contributions": self.super_contributions.to_dict(),
            "payslip_frequency": self.payslip_frequency.value if self.payslip_frequency else None,
            "tax_withheld": self.tax_withheld,
            "effective_date": self.effective_date.isoformat(),
            "confidence_score": self.confidence_score,
            "notes": self.notes,
        }


@dataclass
class WeeklyCompensationEntry:
    """One payslip week."""

    week_ending: date
    gross_pay: float
    tax_withheld: float = 0.0
    net_pay: Optional[float] = None
    hours_ordinary: float = 0.0
    hours_overtime: float = 0.0
    overtime_rate_multiplier: float = 1.5
    allowances: list[Allowance] = field(default_factory=list)
    super_contributed: float = 0.0
    financial_year: str = ""
    position_id: Optional[int] = None
    notes: Optional[str] = None
    id: Optional[int] = None

    def __post_init__(self):
        if not self.financial_year:
            self.financial_year = financial_year_label(self.week_ending)
        if self.net_pay is None:
            self.net_pay = self.gross_pay - self.tax_withheld

    @property
    def total_hours(self) -> float:
        return self.hours_ordinary + self.hours_overtime

    @classmethod
    def from_dict(cls, data: dict) -> "WeeklyCompensationEntry":
        require_mapping(data, "Weekly entry")
        return cls(
            id=int_field(data, "id", None),
            position_id=int_field(data, "position_id", None),
            financial_year=text_field(data, "financial_year", ""),
            week_ending=date_field(data, "week_ending"),
            gross_pay=number_field(data, "gross_pay"),
            tax_withheld=number_field(data, "tax_withheld", 0.0),
            net_pay=number_field(data, "net_pay", None),
            hours_ordinary=number_field(data, "hours_ordinary", 0.0),
            hours_overtime=number_field(data, "hours_overtime", 0.0),
            overtime_rate_multiplier=number_field(data, "overtime_rate_multiplier", 1.5),
            allowances=[Allowance.from_dict(a) for a in list_field(data, "allowances")],
            super_contributed=number_field(data, "super_contributed", 0.0),
            notes=text_field(data, "notes", None),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position_id": self.position_id,
            "financial_year": self.financial_year,
            "week_ending": self.week_ending.isoformat(),
            "gross_pay": self.gross_pay,
            "tax_withheld": self.tax_withheld,
            "net_pay": self.net_pay,
            "hours_ordinary": self.hours_ordinary,
            "hours_overtime": self.hours_overtime,
            "overtime_rate_multiplier": self.overtime_rate_multiplier,
            "allowances": [a.to_dict() for a in self.allowances],
            "super_contributed": self.super_contributed,
            "notes": self.notes,
        }


@dataclass
class YearlyIncomeEntry:
    """A financial-year income summary, typically copied from the ATO."""

    financial_year: str
    gross_income: float
    tax_withheld: float = 0.0
    reportable_super: float = 0.0
    reportable_fringe_benefits: Optional[float] = None
    source: IncomeSource = IncomeSource.MANUAL
    position_id: Optional[int] = None
    notes: Optional[str] = None
    id: Optional[int] = None

    @property
    def net_income(self) -> float:
        return self.gross_income - self.tax_withheld

    @classmethod
    def from_dict(cls, data: dict) -> "YearlyIncomeEntry":
        require_mapping(data, "Yearly entry")
        return cls(
            id=int_field(data, "id", None),
            position_id=int_field(data, "position_id", None),
            financial_year=text_field(data, "financial_year"),
            gross_income=number_field(data, "gross_income"),
            tax_withheld=number_field(data, "tax_withheld", 0.0),
            reportable_super=number_field(data, "reportable_super", 0.0),
            reportable_fringe_benefits=number_field(data, "reportable_fringe_benefits", None),
            source=coerce_enum(IncomeSource, data.get("source"), IncomeSource.MANUAL),
            notes=text_field(data, "notes", None),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "position_id": self.position_id,
            "financial_year": self.financial_year,
            "gross_income": self.gross_income,
            "tax_withheld": self.tax_withheld,
            "reportable_super": self.reportable_super,
            "reportable_fringe_benefits": self.reportable_fringe_benefits,
            "source": self.source.value,
            "notes": self.notes,
        }
