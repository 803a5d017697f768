"""SQLAlchemy ORM models — one file per table."""

from spectacles.models.asset import Asset, BuildAsset
from spectacles.models.build import Build
from spectacles.models.detection import Detection

__all__ = [
    "Asset",
    "Build",
    "BuildAsset",
    "Detection",
]
