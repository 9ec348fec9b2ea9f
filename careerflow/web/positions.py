"""Position and compensation record routes."""

from fastapi import APIRouter, Body, Depends

from careerflow.career.models import Position
from careerflow.compensation.models import CompensationRecord
from careerflow.storage.database import CareerDatabase

from .dependencies import get_db

router = APIRouter(prefix="/api", tags=["positions"])


@router.get("/positions")
def list_positions(db: CareerDatabase = Depends(get_db)):
    return [p.to_dict() for p in db.get_positions()]


@router.post("/positions", status_code=201)
def create_position(payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    position = Position.from_dict(payload)
    position.id = None
    db.save_position(position)
    return position.to_dict()


@router.get("/positions/{position_id}")
def get_position(position_id: int, db: CareerDatabase = Depends(get_db)):
    return db.get_position(position_id).to_dict()


@router.put("/positions/{position_id}")
def update_position(position_id: int, payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    position = Position.from_dict(payload)
    position.id = position_id
    db.save_position(position)
    return position.to_dict()


@router.delete("/positions/{position_id}")
def delete_position(position_id: int, db: CareerDatabase = Depends(get_db)):
    db.delete_position(position_id)
    return {"deleted": position_id}


@router.get("/positions/{position_id}/compensation")
def list_compensation(position_id: int, db: CareerDatabase = Depends(get_db)):
    db.get_position(position_id)  # 404 for unknown positions
    return [r.to_dict() for r in db.get_compensation_records(position_id)]


@router.post("/positions/{position_id}/compensation", status_code=201)
def create_compensation(position_id: int, payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    record = CompensationRecord.from_dict({**payload, "position_id": position_id, "id": None})
    db.save_compensation_record(record)
    return record.to_dict()


@router.put("/compensation/{record_id}")
def update_compensation(record_id: int, payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    record = CompensationRecord.from_dict(payload)
    record.id = record_id
    db.save_compensation_record(record)
    return record.to_dict()


@router.delete("/compensation/{record_id}")
def delete_compensation(record_id: int, db: CareerDatabase = Depends(get_db)):
    db.delete_compensation_record(record_id)
    return {"deleted": record_id}
