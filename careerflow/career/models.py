"""Employment history and profile data models."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Optional

from careerflow.utils.fields import date_field, int_field, require_mapping, text_field, text_list_field


def coerce_enum(enum_cls, value, default=None):
    """Resolve a member from a member, its value, or its name (case-insensitive)."""
    if isinstance(value, enum_cls):
        return value
    if value is None or value == "":
        if default is not None:
            return default
        raise ValueError(f"Missing value for {enum_cls.__name__}")
    text = str(value).strip()
    for member in enum_cls:
        if text.lower() in (member.value.lower(), member.name.lower()):
            return member
    raise ValueError(f"Unknown {enum_cls.__name__}: {value!r}")


class EmploymentType(str, Enum):
    PERMANENT = "Permanent"
    CONTRACT = "Contract"
    CASUAL = "Casual"


class SeniorityLevel(str, Enum):
    ENTRY = "Entry"
    JUNIOR = "Junior"
    MID = "Mid"
    SENIOR = "Senior"
    LEAD = "Lead"
    MANAGER = "Manager"
    DIRECTOR = "Director"
    EXECUTIVE = "Executive"


class AustralianState(str, Enum):
    NSW = "NSW"
    VIC = "VIC"
    QLD = "QLD"
    WA = "WA"
    SA = "SA"
    TAS = "TAS"
    ACT = "ACT"
    NT = "NT"


class Qualification(str, Enum):
    HIGH_SCHOOL = "HighSchool"
    CERTIFICATE = "Certificate"
    DIPLOMA = "Diploma"
    BACHELOR = "Bachelor"
    GRADUATE_CERTIFICATE = "GraduateCertificate"
    GRADUATE_DIPLOMA = "GraduateDiploma"
    MASTERS = "Masters"
    PHD = "PhD"
    OTHER = "Other"


class FIFOTolerance(str, Enum):
    NONE = "None"
    LIMITED = "Limited"
    REGULAR = "Regular"
    EXTENSIVE = "Extensive"


class TravelTolerance(str, Enum):
    NONE = "None"
    LOCAL = "Local"
    REGIONAL = "Regional"
    NATIONAL = "National"
    INTERNATIONAL = "International"


class OvertimeAppetite(str, Enum):
    NONE = "None"
    MINIMAL = "Minimal"
    MODERATE = "Moderate"
    HIGH = "High"
    EXTREME = "Extreme"


@dataclass
class CareerPreferences:
    """What kind of work the user is willing to take on next."""

    employment_type_preference: EmploymentType = EmploymentType.PERMANENT
    fifo_tolerance: FIFOTolerance = FIFOTolerance.NONE
    travel_tolerance: TravelTolerance = TravelTolerance.NONE
    overtime_appetite: OvertimeAppetite = OvertimeAppetite.MODERATE
    privacy_acknowledged: bool = False
    disclaimer_acknowledged: bool = False

    @classmethod
    def from_dict(cls, data: dict) -> "CareerPreferences":
        require_mapping(data, "career_preferences")
        return cls(
            employment_type_preference=coerce_enum(
                EmploymentType, data.get("employment_type_preference"), EmploymentType.PERMANENT
            ),
            fifo_tolerance=coerce_enum(FIFOTolerance, data.get("fifo_tolerance"), FIFOTolerance.NONE),
            travel_tolerance=coerce_enum(TravelTolerance, data.get("travel_tolerance"), TravelTolerance.NONE),
            overtime_appetite=coerce_enum(
                OvertimeAppetite, data.get("overtime_appetite"), OvertimeAppetite.MODERATE
            ),
            privacy_acknowledged=bool(data.get("privacy_acknowledged", False)),
            disclaimer_acknowledged=bool(data.get("disclaimer_acknowledged", False)),
        )

    def to_dict(self) -> dict:
        return {
            "employment_type_preference": self.employment_type_preference.value,
            "fifo_tolerance": self.fifo_tolerance.value,
            "travel_tolerance": self.travel_tolerance.value,
            "overtime_appetite": self.overtime_appetite.value,
            "privacy_acknowledged": self.privacy_acknowledged,
            "disclaimer_acknowledged": self.disclaimer_acknowledged,
        }


@dataclass
class UserProfile:
    """The single user of this installation."""

    first_name: str
    last_name: str
    date_of_birth: date
    state: AustralianState = AustralianState.NSW
    industry: str = ""
    highest_qualification: Qualification = Qualification.BACHELOR
    qualification_detail: str = ""  # free text when highest_qualification is Other
    career_preferences: CareerPreferences = field(default_factory=CareerPreferences)
    id: Optional[int] = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @classmethod
    def from_dict(cls, data: dict) -> "UserProfile":
        """Build a profile from JSON/YAML data. Raises ValueError on bad input."""
        require_mapping(data, "Profile")
        return cls(
            id=int_field(data, "id", None),
            first_name=text_field(data, "first_name"),
            last_name=text_field(data, "last_name"),
            date_of_birth=date_field(data, "date_of_birth"),
            state=coerce_enum(AustralianState, data.get("state"), AustralianState.NSW),
            industry=text_field(data, "industry", ""),
            highest_qualification=coerce_enum(
                Qualification, data.get("highest_qualification"), Qualification.BACHELOR
            ),
            qualification_detail=text_field(data, "qualification_detail", ""),
            career_preferences=CareerPreferences.from_dict(data.get("career_preferences") or {}),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "date_of_birth": self.date_of_birth.isoformat(),
            "state": self.state.value,
            "industry": self.industry,
            "highest_qualification": self.highest_qualification.value,
            "qualification_detail": self.qualification_detail,
            "career_preferences": self.career_preferences.to_dict(),
        }


@dataclass
class Position:
    """One employment stint. An end_date of None means the position is current."""

    employer_name: str
    job_title: str
    start_date: date
    end_date: Optional[date] = None
    employment_type: EmploymentType = EmploymentType.PERMANENT
    seniority_level: SeniorityLevel = SeniorityLevel.MID
    location: str = ""
    core_responsibilities: str = ""
    tools_systems_skills: list[str] = field(default_factory=list)
    achievements: list[str] = field(default_factory=list)
    id: Optional[int] = None

    @property
    def is_current(self) -> bool:
        return self.end_date is None

    def validate(self) -> list[str]:
        """Return a list of validation errors (empty = OK)."""
        errors = []
        if not isinstance(self.employer_name, str) or not self.employer_name.strip():
            errors.append("employer_name is required")
        if not isinstance(self.job_title, str) or not self.job_title.strip():
            errors.append("job_title is required")
        if self.end_date is not None and self.end_date < self.start_date:
            errors.append(
                f"end_date {self.end_date.isoformat()} is before start_date {self.start_date.isoformat()}"
            )
        return errors

    @classmethod
    def from_dict(cls, data: dict) -> "Position":
        """Build a position from JSON/YAML data. Raises ValueError on bad input."""
        require_mapping(data, "Position")
        return cls(
            id=int_field(data, "id", None),
            employer_name=text_field(data, "employer_name"),
            job_title=text_field(data, "job_title"),
            start_date=date_field(data, "start_date"),
            end_date=date_field(data, "end_date", required=False),
            employment_type=coerce_enum(EmploymentType, data.get("employment_type"), EmploymentType.PERMANENT),
            seniority_level=coerce_enum(SeniorityLevel, data.get("seniority_level"), SeniorityLevel.MID),
            location=text_field(data, "location", ""),
            core_responsibilities=text_field(data, "core_responsibilities", ""),
            tools_systems_skills=text_list_field(data, "tools_systems_skills"),
            achievements=text_list_field(data, "achievements"),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employer_name": self.employer_name,
            "job_title": self.job_title,
            "employment_type": self.employment_type.value,
            "location": self.location,
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat() if self.end_date else None,
            "seniority_level": self.seniority_level.value,
            "core_responsibilities": self.core_responsibilities,
            "tools_systems_skills": list(self.tools_systems_skills),
            "achievements": list(self.achievements),
        }
