"""BuildService — details for a single build."""

from __future__ import annotations

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.dao.asset_dao import AssetDAO
from spectacles.dao.build_dao import BuildDAO
from spectacles.dao.detection_dao import DetectionDAO
from spectacles.services import NotFoundError
from spectacles.timeline import (
    Branch,
    appearing_as,
    branch_tag,
    human_friendly_branch_name,
    parse_build_key,
)

log = structlog.get_logger()


class BuildService:
    """Stateless service behind the build page."""

    def __init__(
        self,
        build_dao: BuildDAO,
        detection_dao: DetectionDAO,
        asset_dao: AssetDAO,
    ) -> None:
        self._build_dao = build_dao
        self._detection_dao = detection_dao
        self._asset_dao = asset_dao

    async def get_details(self, session: AsyncSession, key: str) -> dict:
        """Return a build with its detections, predecessors and surface assets.

        *key* is either a build number (all digits) or a build id.

        Raises :class:`NotFoundError` if no such build exists.
        """
        build = await self._build_dao.get_by_key(session, parse_build_key(key))
        if build is None:
            log.info("build.not_found", key=key)
            raise NotFoundError("build not found")

        latest = await self._detection_dao.latest_per_branch(session, tuple(Branch))
        latest_ids = {branch: detected.id for branch, detected in latest.items()}

        detections = await self._detection_dao.list_for_build(session, build.id)
        steps = []
        for detection in detections:
            previous = await self._detection_dao.find_previous_build(
                session, detection.branch, detection.detected_at
            )
            steps.append(
                {
                    "branch": branch_tag(detection.branch),
                    "branch_label": human_friendly_branch_name(detection.branch),
                    "detected_at": detection.detected_at,
                    "previous_build": previous,
                }
            )

        assets = await self._asset_dao.list_for_build(session, build.id, surface_only=True)
        appearing = appearing_as(build.id, latest_ids)

        return {
            "id": build.id,
            "number": build.number,
            "appearing_as": branch_tag(appearing) if appearing is not None else None,
            "first_detected_at": detections[0].detected_at if detections else None,
            "detections": steps,
            "assets": assets,
        }
