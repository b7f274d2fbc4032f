"""
Name: FastAPI Application Factory

Responsibilities:
  - Build the FastAPI application for a given Settings instance
  - Configure middleware (request context) and exception handlers
  - Mount auth routes (/register, /login) and task routes (/tasks)
  - Expose the /healthz check and the `taskboard` console entry point

Collaborators:
  - FastAPI: ASGI web framework
  - RequestContextMiddleware: Request ID and logging context
  - container.build_container: repositories + use cases per app
  - infrastructure.db.pool: psycopg pool lifecycle (only with DATABASE_URL)

Notes:
  - create_app(settings) keeps settings and container on app.state, so
    tests can build isolated apps without touching global state
  - The pool is opened in the lifespan, never at import time
  - /healthz follows the Kubernetes health check convention
"""

from __future__ import annotations

from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request

from ..container import build_container
from ..crosscutting.config import Settings, get_settings
from ..crosscutting.logger import logger
from ..crosscutting.middleware import RequestContextMiddleware
from ..infrastructure.db.pool import close_pool, init_pool
from .auth_routes import router as auth_router
from .exception_handlers import register_exception_handlers
from .task_routes import router as task_router


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle. Opens the DB pool when storage is Postgres."""
    settings: Settings = app.state.settings

    if settings.uses_database():
        init_pool(
            database_url=settings.database_url,
            min_size=settings.db_pool_min_size,
            max_size=settings.db_pool_max_size,
            statement_timeout_ms=settings.db_statement_timeout_ms,
        )

    try:
        logger.info(
            "Taskboard API starting up",
            extra={
                "app_env": settings.app_env,
                "storage": "postgres" if settings.uses_database() else "memory",
                "jwt_ttl_hours": settings.jwt_ttl_hours,
                "db_pool_min": settings.db_pool_min_size,
                "db_pool_max": settings.db_pool_max_size,
            },
        )
        yield
    finally:
        if settings.uses_database():
            close_pool()
        logger.info("Taskboard API shutting down")


def create_app(settings: Settings | None = None) -> FastAPI:
    settings = settings or get_settings()

    app = FastAPI(
        title="Taskboard API",
        version="0.1.0",
        lifespan=lifespan,
        openapi_tags=[
            {"name": "auth", "description": "User registration and login (JWT)"},
            {"name": "tasks", "description": "Owner-scoped task CRUD"},
        ],
    )
    app.state.settings = settings
    app.state.container = build_container(settings)

    app.add_middleware(RequestContextMiddleware)

    app.include_router(auth_router)
    app.include_router(task_router)

    register_exception_handlers(app)

    @app.get("/healthz")
    def healthz(request: Request):
        """
        Health check for monitoring/orchestration.

        Returns:
            ok: True if storage answers
            db: "connected" or "disconnected"
            request_id: Correlation ID for this request
        """
        db_status = "disconnected"
        try:
            if request.app.state.container.task_repository.ping():
                db_status = "connected"
        except Exception as e:
            logger.warning("Health check: DB unavailable", extra={"error": str(e)})

        return {
            "ok": db_status == "connected",
            "db": db_status,
            "request_id": getattr(request.state, "request_id", None),
        }

    return app


def run() -> None:
    """Console entry point: serve the app with uvicorn on HOST/PORT."""
    settings = get_settings()
    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
        log_level=settings.log_level.lower(),
    )
