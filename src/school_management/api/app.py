"""
school_management.api.app

FastAPI app factory for the School Management API.

Responsibilities:
- Build the FastAPI application and register routers/middleware.
- Translate application errors into HTTP responses.
- Initialize and dispose shared infrastructure (DB engine/session factory).
"""

from __future__ import annotations

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from sqlalchemy.exc import IntegrityError
from starlette.status import HTTP_409_CONFLICT

from school_management import __version__
from school_management.api.routers.dev_auth import router as dev_auth_router
from school_management.api.routers.health import router as health_router
from school_management.api.routers.school import router as school_router
from school_management.db.init_db import init_db
from school_management.db.session import create_engine, create_sessionmaker
from school_management.errors import ApplicationError
from school_management.observability.logging import configure_logging, get_logger
from school_management.observability.middleware import RequestContextMiddleware
from school_management.settings import Settings

log = get_logger(__name__)


async def start_resources(app: FastAPI) -> None:
    settings: Settings = app.state.settings
    log.info("startup", env=settings.env)
    engine = create_engine(settings)
    app.state.engine = engine
    app.state.sessionmaker = create_sessionmaker(engine)
    if settings.env in ("dev", "test"):
        # Prod schema changes go through Alembic.
        await init_db(engine)


async def stop_resources(app: FastAPI) -> None:
    engine = getattr(app.state, "engine", None)
    if engine is not None:
        await engine.dispose()
    log.info("shutdown")


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncIterator[None]:
    await start_resources(app)
    try:
        yield
    finally:
        await stop_resources(app)


async def _application_error_handler(request: Request, exc: ApplicationError) -> JSONResponse:
    log.warning("application_error", status_code=exc.status_code, detail=exc.message)
    return JSONResponse(status_code=exc.status_code, content={"detail": exc.message})


async def _integrity_error_handler(request: Request, exc: IntegrityError) -> JSONResponse:
    log.warning("integrity_error", error=str(exc.orig))
    return JSONResponse(
        status_code=HTTP_409_CONFLICT,
        content={"detail": "The request conflicts with existing data"},
    )


def create_app(*, settings: Settings) -> FastAPI:
    configure_logging(
        service_name=settings.service_name,
        level=settings.log_level,
        json_logs=settings.log_json,
    )

    app = FastAPI(
        title="School Management API",
        version=__version__,
        docs_url="/docs",
        openapi_url="/openapi.json",
        lifespan=_lifespan,
    )
    app.state.settings = settings

    app.add_middleware(RequestContextMiddleware)
    app.add_exception_handler(ApplicationError, _application_error_handler)
    app.add_exception_handler(IntegrityError, _integrity_error_handler)

    app.include_router(health_router, tags=["health"])
    app.include_router(dev_auth_router)
    app.include_router(school_router)

    return app


# --- Module Notes -----------------------------------------------------------
# `start_resources`/`stop_resources` are public so tests driving the app through
# `httpx.ASGITransport` (which skips lifespan) can manage the engine explicitly.
