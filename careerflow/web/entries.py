"""Payslip (weekly) and financial-year income routes."""

from fastapi import APIRouter, Body, Depends

from careerflow.compensation.models import WeeklyCompensationEntry, YearlyIncomeEntry
from careerflow.storage.database import CareerDatabase

from .dependencies import get_db

router = APIRouter(prefix="/api", tags=["entries"])


@router.get("/weekly-entries")
def list_weekly_entries(db: CareerDatabase = Depends(get_db)):
    return [e.to_dict() for e in db.get_weekly_entries()]


@router.post("/weekly-entries", status_code=201)
def create_weekly_entry(payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    entry = WeeklyCompensationEntry.from_dict({**payload, "id": None})
    db.save_weekly_entry(entry)
    return entry.to_dict()


@router.put("/weekly-entries/{entry_id}")
def update_weekly_entry(entry_id: int, payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    entry = WeeklyCompensationEntry.from_dict(payload)
    entry.id = entry_id
    db.save_weekly_entry(entry)
    return entry.to_dict()


@router.delete("/weekly-entries/{entry_id}")
def delete_weekly_entry(entry_id: int, db: CareerDatabase = Depends(get_db)):
    db.delete_weekly_entry(entry_id)
    return {"deleted": entry_id}


@router.get("/yearly-entries")
def list_yearly_entries(db: CareerDatabase = Depends(get_db)):
    return [e.to_dict() for e in db.get_yearly_entries()]


@router.post("/yearly-entries", status_code=201)
def create_yearly_entry(payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    entry = YearlyIncomeEntry.from_dict({**payload, "id": None})
    db.save_yearly_entry(entry)
    return entry.to_dict()


@router.put("/yearly-entries/{entry_id}")
def update_yearly_entry(entry_id: int, payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    entry = YearlyIncomeEntry.from_dict(payload)
    entry.id = entry_id
    db.save_yearly_entry(entry)
    return entry.to_dict()


@router.delete("/yearly-entries/{entry_id}")
def delete_yearly_entry(entry_id: int, db: CareerDatabase = Depends(get_db)):
    db.delete_yearly_entry(entry_id)
    return {"deleted": entry_id}
