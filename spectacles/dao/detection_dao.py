"""DetectionDAO — detections table operations.

Rows are decoded into :mod:`spectacles.timeline` value types here, so
nothing above this layer handles ORM objects for detections.
"""

from collections.abc import Iterable
from datetime import datetime
from typing import Any

from sqlalchemy import Select, func, select
from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.dao.base import BaseDAO
from spectacles.models.build import Build
from spectacles.models.detection import Detection
from spectacles.timeline import models as timeline
from spectacles.timeline.models import APP_BRANCHES, Branch


def _decode(row: Any) -> timeline.DetectedBuild:
    return timeline.DetectedBuild(
        id=row.build_id,
        number=row.build_number,
        branch=Branch.parse(row.branch),
        detected_at=row.detected_at,
    )


def _detected_builds() -> Select:
    return select(
        Detection.build_id,
        Build.build_number,
        Detection.branch,
        Detection.detected_at,
    ).join(Build, Build.build_id == Detection.build_id)


class DetectionDAO(BaseDAO[Detection]):
    model = Detection

    # ── latest ────────────────────────────────────────────────────────────

    async def latest_per_branch(
        self,
        session: AsyncSession,
        branches: Iterable[Branch] = APP_BRANCHES,
    ) -> dict[Branch, timeline.DetectedBuild]:
        """Most recent detection on each of *branches* (front page header).

        Detections sharing a timestamp are ranked by insertion order, so the
        most recently recorded one wins. Branches without any detection are
        absent from the result; the rest keep the order of *branches*.
        """
        wanted = list(branches)
        ranked = (
            select(
                Detection.build_id,
                Detection.branch,
                Detection.detected_at,
                func.row_number()
                .over(
                    partition_by=Detection.branch,
                    order_by=(Detection.detected_at.desc(), Detection.id.desc()),
                )
                .label("rn"),
            )
            .where(Detection.branch.in_([branch.value for branch in wanted]))
            .subquery()
        )
        stmt = (
            select(
                ranked.c.build_id,
                Build.build_number,
                ranked.c.branch,
                ranked.c.detected_at,
            )
            .join(Build, Build.build_id == ranked.c.build_id)
            .where(ranked.c.rn == 1)
        )
        result = await session.execute(stmt)
        found = {build.branch: build for build in map(_decode, result.all())}
        return {branch: found[branch] for branch in wanted if branch in found}

    # ── history ───────────────────────────────────────────────────────────

    async def list_since(
        self, session: AsyncSession, since: datetime
    ) -> list[timeline.DetectedBuild]:
        """Detections newer than *since*, newest first (front page history)."""
        stmt = (
            _detected_builds()
            .where(Detection.detected_at > since)
            .order_by(Detection.detected_at.desc(), Detection.id.desc())
        )
        result = await session.execute(stmt)
        return [_decode(row) for row in result.all()]

    async def list_for_build(
        self, session: AsyncSession, build_id: str
    ) -> list[timeline.DetectedBuild]:
        """Every sighting of a build, oldest first (build page)."""
        stmt = (
            _detected_builds()
            .where(Detection.build_id == build_id)
            .order_by(Detection.detected_at.asc(), Detection.id.asc())
        )
        result = await session.execute(stmt)
        return [_decode(row) for row in result.all()]

    async def find_previous_build(
        self, session: AsyncSession, branch: Branch | str, before: datetime
    ) -> timeline.Build | None:
        """The last build seen on *branch* strictly before *before*."""
        raw_branch = branch.value if isinstance(branch, Branch) else branch
        stmt = (
            select(Build.build_id, Build.build_number)
            .join(Detection, Detection.build_id == Build.build_id)
            .where(Detection.branch == raw_branch, Detection.detected_at < before)
            .order_by(Detection.detected_at.desc(), Detection.id.desc())
            .limit(1)
        )
        result = await session.execute(stmt)
        row = result.first()
        if row is None:
            return None
        return timeline.Build(id=row.build_id, number=row.build_number)
