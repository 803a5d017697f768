"""Dependency injection — per-request session and service singletons."""

from __future__ import annotations

import os
from collections.abc import AsyncGenerator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from spectacles.dao.asset_dao import AssetDAO
from spectacles.dao.build_dao import BuildDAO
from spectacles.dao.detection_dao import DetectionDAO
from spectacles.services.build_service import BuildService
from spectacles.services.timeline_service import TimelineService

# ---------------------------------------------------------------------------
# DAO singletons (stateless)
# ---------------------------------------------------------------------------
_build_dao = BuildDAO()
_detection_dao = DetectionDAO()
_asset_dao = AssetDAO()

# ---------------------------------------------------------------------------
# Service singletons (stateless)
# ---------------------------------------------------------------------------
_timeline_service = TimelineService(_detection_dao)
_build_service = BuildService(_build_dao, _detection_dao, _asset_dao)


# ---------------------------------------------------------------------------
# Engine / session factory — owned by the app, see spectacles.api._lifespan
# ---------------------------------------------------------------------------


def create_engine(database_url: str | None = None) -> AsyncEngine:
    """Create the async engine for *database_url* or $SPECTACLES_DATABASE_URL."""
    url = database_url or os.environ.get(
        "SPECTACLES_DATABASE_URL", "postgresql+asyncpg://localhost/spectacles"
    )
    return create_async_engine(
        url,
        pool_pre_ping=True,
        pool_size=10,
        max_overflow=20,
        pool_recycle=1800,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def get_session(request: Request) -> AsyncGenerator[AsyncSession, None]:
    """Yield a per-request session from the app's session factory."""
    factory: async_sessionmaker[AsyncSession] | None = getattr(
        request.app.state, "session_factory", None
    )
    if factory is None:
        raise RuntimeError("app has no session factory; was the lifespan run?")
    async with factory() as session:
        async with session.begin():
            yield session


# ---------------------------------------------------------------------------
# Service getters (for Depends())
# ---------------------------------------------------------------------------


def get_timeline_service() -> TimelineService:
    return _timeline_service


def get_build_service() -> BuildService:
    return _build_service
