"""Row builders shared by DAO tests."""

from __future__ import annotations

from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.models.build import Build
from spectacles.models.detection import Detection


async def add_build(session: AsyncSession, number: int, build_id: str | None = None) -> Build:
    build = Build(build_id=build_id or f"{number:x}cafe", build_number=number)
    session.add(build)
    await session.flush()
    return build


async def add_detection(
    session: AsyncSession, build: Build, branch: str, detected_at: datetime
) -> Detection:
    detection = Detection(build_id=build.build_id, branch=branch, detected_at=detected_at)
    session.add(detection)
    await session.flush()
    return detection
