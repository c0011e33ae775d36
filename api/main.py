"""FastAPI service for todo-flow."""
from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Optional

from dotenv import load_dotenv
from fastapi import Depends, FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from api.dependencies import ALLOWED_ORIGINS, get_settings, get_store
from api.routers import categories_router, tasks_router
from todo_flow.config import Settings, load_settings
from todo_flow.dataset import build_store
from todo_flow.task_store import TaskStore

logger = logging.getLogger(__name__)

VALIDATION_MESSAGES = {
    "POST": "Invalid task data",
    "PATCH": "Invalid update data",
}


async def _validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    return JSONResponse(
        status_code=400,
        content={
            "message": VALIDATION_MESSAGES.get(request.method, "Invalid request"),
            "errors": jsonable_encoder(exc.errors()),
        },
    )


async def _unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(status_code=500, content={"message": "Internal server error"})


def create_app(
    settings: Optional[Settings] = None,
    store: Optional[TaskStore] = None,
) -> FastAPI:
    """Build the application around one TaskStore.

    Args:
        settings: Configuration; loaded from the environment (and .env) if omitted.
        store: Store to serve; built from ``settings.seed_file`` (or empty) if omitted.
    """
    if settings is None:
        load_dotenv()
        settings = load_settings()

    if store is None:
        store = build_store(
            source="file" if settings.seed_file else "empty",
            seed_file=settings.seed_file,
            enforce_unique_usernames=settings.enforce_unique_usernames,
        )

    app = FastAPI(
        title="todo-flow API",
        version="0.1.0",
        description="REST interface over the in-memory task store.",
    )
    app.state.settings = settings
    app.state.store = store

    origins = [*ALLOWED_ORIGINS, settings.allowed_frontend or ""]
    origins = [origin for origin in origins if origin]
    if origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    app.add_exception_handler(RequestValidationError, _validation_error_handler)
    app.add_exception_handler(Exception, _unexpected_error_handler)

    app.include_router(tasks_router, prefix="/api/tasks", tags=["tasks"])
    app.include_router(categories_router, prefix="/api/categories", tags=["tasks"])

    @app.get("/health")
    def health_check(
        settings: Settings = Depends(get_settings),
        store: TaskStore = Depends(get_store),
    ) -> dict:
        """Health check endpoint."""
        return {
            "status": "ok",
            "time": datetime.now(timezone.utc).isoformat(),
            "environment": settings.environment,
            "taskCount": store.count_tasks(),
        }

    logger.info(
        "todo-flow API ready environment=%s tasks=%s",
        settings.environment,
        store.count_tasks(),
    )
    return app
