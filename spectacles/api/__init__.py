"""Spectacles REST API — FastAPI application factory."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from spectacles.api.deps import create_engine, create_session_factory
from spectacles.api.errors import register_error_handlers
from spectacles.api.middleware.request_id import RequestIDMiddleware
from spectacles.api.routers import builds
from spectacles.core.logging import setup_logging
from spectacles.services.timeline_service import default_history_days

log = structlog.get_logger()


@asynccontextmanager
async def _lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Startup: create engine + session factory on app.state. Shutdown: dispose."""
    engine = create_engine(app.state.database_url)
    app.state.engine = engine
    app.state.session_factory = create_session_factory(engine)
    log.info("database engine ready", url=engine.url.render_as_string(hide_password=True))
    try:
        yield
    finally:
        await engine.dispose()
        app.state.session_factory = None


def create_app(database_url: str | None = None) -> FastAPI:
    """Build and return the FastAPI application.

    Raises ``InvalidHistoryDaysError`` if $SPECTACLES_HISTORY_DAYS is invalid.
    """
    setup_logging()
    default_history_days()

    app = FastAPI(
        title="Spectacles",
        docs_url="/api/v1/docs",
        openapi_url="/api/v1/openapi.json",
        lifespan=_lifespan,
    )
    app.state.database_url = database_url

    register_error_handlers(app)

    cors_origins = os.environ.get("SPECTACLES_CORS_ORIGINS", "http://localhost:3000")
    app.add_middleware(
        CORSMiddleware,
        allow_origins=[o.strip() for o in cors_origins.split(",")],
        allow_methods=["GET"],
        allow_headers=["*"],
    )
    app.add_middleware(RequestIDMiddleware)

    @app.get("/health", tags=["ops"])
    async def health() -> JSONResponse:
        return JSONResponse({"status": "ok"})

    app.include_router(builds.router, prefix="/api/v1/builds", tags=["builds"])

    return app
