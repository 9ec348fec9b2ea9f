"""Profile routes."""

from fastapi import APIRouter, Body, Depends

from careerflow.career.models import UserProfile
from careerflow.storage.database import CareerDatabase

from .dependencies import get_db

router = APIRouter(prefix="/api/profile", tags=["profile"])


@router.get("")
def get_profile(db: CareerDatabase = Depends(get_db)):
    profile = db.get_user_profile()
    return profile.to_dict() if profile else None


@router.put("")
def save_profile(payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    profile = UserProfile.from_dict(payload)
    db.save_user_profile(profile)
    return profile.to_dict()
