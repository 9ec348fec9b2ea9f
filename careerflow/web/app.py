"""FastAPI application factory."""

import logging
import os
from contextlib import asynccontextmanager
from pathlib import Path
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from careerflow.config import AppConfig, load_config
from careerflow.storage.database import CareerDatabase, RecordNotFoundError, StorageError

from .analysis import router as analysis_router
from .backup import router as backup_router
from .entries import router as entries_router
from .positions import router as positions_router
from .profile import router as profile_router

logger = logging.getLogger("careerflow.web")

CONFIG_PATH_ENV = "CAREERFLOW_CONFIG"


def _default_config() -> AppConfig:
    path = os.environ.get(CONFIG_PATH_ENV, "config.yaml")
    if Path(path).exists():
        return load_config(path)
    return AppConfig()


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse({"error": message}, status_code=status_code)


def _register_error_handlers(app: FastAPI):
    @app.exception_handler(RequestValidationError)
    async def invalid_request(request: Request, exc: RequestValidationError):
        return _error(400, "Invalid request payload")

    @app.exception_handler(ValueError)
    async def invalid_payload(request: Request, exc: ValueError):
        return _error(400, str(exc))

    @app.exception_handler(RecordNotFoundError)
    async def not_found(request: Request, exc: RecordNotFoundError):
        return _error(404, str(exc))

    @app.exception_handler(StorageError)
    async def storage_failure(request: Request, exc: StorageError):
        logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
        return _error(500, str(exc))


@asynccontextmanager
async def lifespan(app: FastAPI):
    yield
    # Shutdown
    app.state.db.close()


def create_app(config: Optional[AppConfig] = None) -> FastAPI:
    """Build the API around one CareerDatabase.

    Without an explicit config, reads $CAREERFLOW_CONFIG (or config.yaml) when
    present and falls back to defaults. Serve with
    ``uvicorn --factory careerflow.web.app:create_app``.
    """
    config = config or _default_config()

    app = FastAPI(title="CareerFlow", lifespan=lifespan)
    app.state.config = config
    app.state.db = CareerDatabase(config.storage.database_url)

    _register_error_handlers(app)

    app.include_router(profile_router)
    app.include_router(positions_router)
    app.include_router(entries_router)
    app.include_router(analysis_router)
    app.include_router(backup_router)

    return app
