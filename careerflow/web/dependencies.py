"""Shared FastAPI dependencies."""

from fastapi import Request

from careerflow.storage.database import CareerDatabase


def get_db(request: Request) -> CareerDatabase:
    """Return the store created by the app factory.

    CareerDatabase serializes its own access, so one instance serves every request.
    """
    return request.app.state.db
