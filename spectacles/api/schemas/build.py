"""Build and timeline response schemas."""

from __future__ import annotations

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, computed_field

ASSET_BASE_URL = "https://discord.com/assets/"


class BuildRef(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    number: int


class DetectedBuildResponse(BaseModel):
    id: str
    number: int
    branch: str
    branch_label: str
    detected_at: datetime


class LatestBuildsResponse(BaseModel):
    dual: bool
    builds: dict[str, DetectedBuildResponse]


class HistoryEntryResponse(BaseModel):
    """One row of the history list; ``branch`` is ``"collapsed"`` for merged twins."""

    branch: str
    branch_label: str
    id: str
    number: int
    detected_at: datetime
    is_current: bool


class HistoryDayResponse(BaseModel):
    day: date
    build_count: int
    entries: list[HistoryEntryResponse]


class DetectionResponse(BaseModel):
    branch: str
    branch_label: str
    detected_at: datetime
    previous_build: BuildRef | None


class AssetResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    surface_script_type: str | None
    script_chunk_id: int | None

    @computed_field  # type: ignore[prop-decorator]
    @property
    def url(self) -> str:
        return f"{ASSET_BASE_URL}{self.name}"


class BuildDetailsResponse(BaseModel):
    id: str
    number: int
    appearing_as: str | None
    first_detected_at: datetime | None
    detections: list[DetectionResponse]
    assets: list[AssetResponse]
