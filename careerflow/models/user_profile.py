"""User profile model: the single owner of the ledger."""

from datetime import date, datetime, timezone

from sqlalchemy import Boolean, Date, DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from careerflow.career.models import (
    AustralianState,
    CareerPreferences,
    EmploymentType,
    FIFOTolerance,
    OvertimeAppetite,
    Qualification,
    TravelTolerance,
    UserProfile,
    coerce_enum,
)

from .base import Base


class UserProfileRow(Base):
    __tablename__ = "user_profile"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    first_name: Mapped[str] = mapped_column(String(255), nullable=False)
    last_name: Mapped[str] = mapped_column(String(255), nullable=False)
    date_of_birth: Mapped[date] = mapped_column(Date, nullable=False)
    state: Mapped[str] = mapped_column(String(10), nullable=False)
    industry: Mapped[str] = mapped_column(String(255), default="")
    highest_qualification: Mapped[str] = mapped_column(String(50), nullable=False)
    qualification_detail: Mapped[str] = mapped_column(String(255), default="")

    # Career preferences
    employment_type_preference: Mapped[str] = mapped_column(String(20), nullable=False)
    fifo_tolerance: Mapped[str] = mapped_column(String(20), nullable=False)
    travel_tolerance: Mapped[str] = mapped_column(String(20), nullable=False)
    overtime_appetite: Mapped[str] = mapped_column(String(20), nullable=False)
    privacy_acknowledged: Mapped[bool] = mapped_column(Boolean, default=False)
    disclaimer_acknowledged: Mapped[bool] = mapped_column(Boolean, default=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), default=lambda: datetime.now(timezone.utc)
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=lambda: datetime.now(timezone.utc),
        onupdate=lambda: datetime.now(timezone.utc),
    )

    def update_from(self, profile: UserProfile) -> None:
        prefs = profile.career_preferences
        self.first_name = profile.first_name
        self.last_name = profile.last_name
        self.date_of_birth = profile.date_of_birth
        self.state = profile.state.value
        self.industry = profile.industry
        self.highest_qualification = profile.highest_qualification.value
        self.qualification_detail = profile.qualification_detail
        self.employment_type_preference = prefs.employment_type_preference.value
        self.fifo_tolerance = prefs.fifo_tolerance.value
        self.travel_tolerance = prefs.travel_tolerance.value
        self.overtime_appetite = prefs.overtime_appetite.value
        self.privacy_acknowledged = prefs.privacy_acknowledged
        self.disclaimer_acknowledged = prefs.disclaimer_acknowledged

    def to_user_profile(self) -> UserProfile:
        """Convert DB row to the UserProfile dataclass."""
        return UserProfile(
            id=self.id,
            first_name=self.first_name,
            last_name=self.last_name,
            date_of_birth=self.date_of_birth,
            state=coerce_enum(AustralianState, self.state),
            industry=self.industry or "",
            highest_qualification=coerce_enum(Qualification, self.highest_qualification),
            qualification_detail=self.qualification_detail or "",
            career_preferences=CareerPreferences(
                employment_type_preference=coerce_enum(EmploymentType, self.employment_type_preference),
                fifo_tolerance=coerce_enum(FIFOTolerance, self.fifo_tolerance),
                travel_tolerance=coerce_enum(TravelTolerance, self.travel_tolerance),
                overtime_appetite=coerce_enum(OvertimeAppetite, self.overtime_appetite),
                privacy_acknowledged=bool(self.privacy_acknowledged),
                disclaimer_acknowledged=bool(self.disclaimer_acknowledged),
            ),
        )
