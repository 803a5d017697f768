"""Builds router — latest builds, history, build details."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.api.deps import get_build_service, get_session, get_timeline_service
from spectacles.api.schemas.build import (
    BuildDetailsResponse,
    DetectedBuildResponse,
    HistoryDayResponse,
    LatestBuildsResponse,
)
from spectacles.services.build_service import BuildService
from spectacles.services.timeline_service import TimelineService
from spectacles.timeline import branch_tag, human_friendly_branch_name

router = APIRouter()


@router.get("/latest", response_model=LatestBuildsResponse)
async def get_latest(
    session: AsyncSession = Depends(get_session),
    svc: TimelineService = Depends(get_timeline_service),
) -> LatestBuildsResponse:
    result = await svc.get_latest(session)
    builds = {
        branch_tag(branch): DetectedBuildResponse(
            id=detected.id,
            number=detected.number,
            branch=branch_tag(detected.branch),
            branch_label=human_friendly_branch_name(detected.branch),
            detected_at=detected.detected_at,
        )
        for branch, detected in result["builds"].items()
    }
    return LatestBuildsResponse(dual=result["dual"], builds=builds)


@router.get("/history", response_model=list[HistoryDayResponse])
async def get_history(
    days: int | None = Query(None),
    session: AsyncSession = Depends(get_session),
    svc: TimelineService = Depends(get_timeline_service),
) -> list[HistoryDayResponse]:
    history = await svc.get_history(session, days=days)
    return [HistoryDayResponse(**day) for day in history]


@router.get("/{key}", response_model=BuildDetailsResponse)
async def get_build(
    key: str,
    session: AsyncSession = Depends(get_session),
    svc: BuildService = Depends(get_build_service),
) -> BuildDetailsResponse:
    result = await svc.get_details(session, key)
    return BuildDetailsResponse.model_validate(result, from_attributes=True)
