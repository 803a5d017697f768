"""TimelineService — latest builds and day-grouped build history."""

from __future__ import annotations

import os
from datetime import datetime, timedelta, timezone

import structlog
from sqlalchemy.ext.asyncio import AsyncSession

from spectacles.dao.detection_dao import DetectionDAO
from spectacles.services import ValidationError
from spectacles.timeline import (
    APP_BRANCHES,
    COLLAPSIBLE_BRANCHES,
    CollapsedBuild,
    branch_tag,
    calendarize,
    collapse_branches,
    human_friendly_branch_name,
    is_current,
    is_dual_lockstep,
)

log = structlog.get_logger()

HISTORY_DAYS_MIN = 1
HISTORY_DAYS_MAX = 90
HISTORY_DAYS_DEFAULT = 7


class InvalidHistoryDaysError(ValueError):
    """Raised when $SPECTACLES_HISTORY_DAYS is not an integer within range."""


def default_history_days() -> int:
    """Return the history window used when a request gives no ``days``.

    Reads $SPECTACLES_HISTORY_DAYS on every call (default: 7).
    Raises ``InvalidHistoryDaysError`` for a non-integer or out-of-range value.
    """
    raw = os.environ.get("SPECTACLES_HISTORY_DAYS")
    if raw is None or not raw.strip():
        return HISTORY_DAYS_DEFAULT
    try:
        days = int(raw)
    except ValueError as exc:
        raise InvalidHistoryDaysError(
            f"SPECTACLES_HISTORY_DAYS must be an integer, got {raw!r}"
        ) from exc
    if not HISTORY_DAYS_MIN <= days <= HISTORY_DAYS_MAX:
        raise InvalidHistoryDaysError(
            f"SPECTACLES_HISTORY_DAYS must be between {HISTORY_DAYS_MIN} and "
            f"{HISTORY_DAYS_MAX}, got {days}"
        )
    return days


class TimelineService:
    """Stateless service behind the front page."""

    def __init__(self, detection_dao: DetectionDAO) -> None:
        self._detection_dao = detection_dao

    async def get_latest(self, session: AsyncSession) -> dict:
        """Return the latest build per app branch and whether Canary/PTB match."""
        latest = await self._detection_dao.latest_per_branch(session, APP_BRANCHES)
        return {"dual": is_dual_lockstep(latest), "builds": latest}

    async def get_history(
        self,
        session: AsyncSession,
        *,
        days: int | None = None,
        now: datetime | None = None,
    ) -> list[dict]:
        """Return the last *days* days of detections grouped by calendar day.

        Within a day, adjacent Canary/PTB detections of one build are merged
        and every entry is flagged if it is still live on its branch.

        Raises :class:`ValidationError` if *days* is out of range, and
        ``InvalidHistoryDaysError`` if *days* is omitted and the configured
        default is invalid.
        """
        if days is None:
            days = default_history_days()
        if not HISTORY_DAYS_MIN <= days <= HISTORY_DAYS_MAX:
            raise ValidationError(
                f"days must be between {HISTORY_DAYS_MIN} and {HISTORY_DAYS_MAX}"
            )
        now = now or datetime.now(timezone.utc)

        latest = await self._detection_dao.latest_per_branch(session, APP_BRANCHES)
        historical = await self._detection_dao.list_since(session, now - timedelta(days=days))
        log.debug("timeline.history_loaded", days=days, detections=len(historical))

        if not historical:
            return []

        history = []
        for calendar_day in calendarize(historical):
            entries = [
                {
                    "branch": branch_tag(entry.branch),
                    "branch_label": (
                        "Canary & PTB"
                        if isinstance(entry, CollapsedBuild)
                        else human_friendly_branch_name(entry.branch)
                    ),
                    "id": entry.id,
                    "number": entry.number,
                    "detected_at": entry.detected_at,
                    "is_current": is_current(entry, latest),
                }
                for entry in collapse_branches(COLLAPSIBLE_BRANCHES, calendar_day.builds)
            ]
            history.append(
                {
                    "day": calendar_day.day,
                    "build_count": len(calendar_day.builds),
                    "entries": entries,
                }
            )
        return history
