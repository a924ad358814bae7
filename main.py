# main.py
import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.status import HTTP_400_BAD_REQUEST, HTTP_500_INTERNAL_SERVER_ERROR

from config import Settings, get_settings
from exceptions import CorruptStoreError, StorageIOError
from logging_setup import setup_logging
from routers import tasks
from storage import TaskFileStorage

APP_NAME = "Todo Tasks"
APP_VERSION = "1.0.0"

logger = logging.getLogger(__name__)

# --- App Lifecycle (Lifespan) ---
@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown events.
    """
    storage: TaskFileStorage = app.state.storage
    logger.info("Application starting up, tasks file: %s", storage.path)
    # Initialize the tasks file if it doesn't exist
    storage.initialize()
    yield
    logger.info("Application shutting down...")

# --- Exception Handlers ---
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # Malformed request bodies are client errors, reported as 400 rather than 422
    return JSONResponse(
        status_code=HTTP_400_BAD_REQUEST,
        content={"detail": jsonable_encoder(exc.errors())},
    )

async def storage_exception_handler(request: Request, exc: Exception):
    logger.error("Storage failure on %s %s: %s", request.method, request.url.path, exc)
    return JSONResponse(
        status_code=HTTP_500_INTERNAL_SERVER_ERROR,
        content={"detail": str(exc)},
    )

# --- FastAPI App Initialization ---
def create_app(settings: Optional[Settings] = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title=APP_NAME,
        description="A small to-do list service backed by a JSON file.",
        version=APP_VERSION,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.storage = TaskFileStorage(settings.tasks_file)

    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(CorruptStoreError, storage_exception_handler)
    app.add_exception_handler(StorageIOError, storage_exception_handler)

    # --- Include API Routers ---
    app.include_router(tasks.router)

    # --- Root Endpoint ---
    @app.get("/")
    async def read_root():
        return {"name": APP_NAME, "version": APP_VERSION}

    return app


app = create_app()

# --- Main Entry Point ---
def main():
    settings = app.state.settings
    setup_logging(settings.log_level, settings.log_file)
    uvicorn.run(app, host=settings.host, port=settings.port)

if __name__ == "__main__":
    main()
