"""Backup, restore and reset routes."""

import logging

from fastapi import APIRouter, Body, Depends

from careerflow.storage.database import CareerDatabase

from .dependencies import get_db

logger = logging.getLogger("careerflow.web")

router = APIRouter(prefix="/api", tags=["backup"])


@router.get("/backup/export")
def export_data(db: CareerDatabase = Depends(get_db)):
    return db.export_all_data()


@router.post("/backup/import")
def import_data(payload: dict = Body(...), db: CareerDatabase = Depends(get_db)):
    return {"imported": db.import_all_data(payload)}


@router.post("/backup/reset")
def reset_data(db: CareerDatabase = Depends(get_db)):
    db.clear_all_data()
    logger.warning("Ledger reset via API")
    return {"reset": True}


@router.get("/stats")
def stats(db: CareerDatabase = Depends(get_db)):
    return db.get_stats()
