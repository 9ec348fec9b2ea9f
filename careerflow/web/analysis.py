"""Analysis routes: earnings, loyalty tax and resume export."""

from fastapi import APIRouter, Depends

from careerflow.analysis.earnings import calculate_earnings_analysis
from careerflow.analysis.loyalty_tax import calculate_loyalty_tax
from careerflow.analysis.resume_export import generate_resume_export
from careerflow.storage.database import CareerDatabase

from .dependencies import get_db

router = APIRouter(prefix="/api/analysis", tags=["analysis"])


@router.get("/earnings")
def earnings(db: CareerDatabase = Depends(get_db)):
    return calculate_earnings_analysis(db.get_positions(), db.get_user_profile()).to_dict()


@router.get("/loyalty-tax")
def loyalty_tax(db: CareerDatabase = Depends(get_db)):
    return calculate_loyalty_tax(db.get_positions()).to_dict()


@router.get("/resume")
def resume(db: CareerDatabase = Depends(get_db)):
    return generate_resume_export(db.get_positions(), db.get_user_profile()).to_dict()
