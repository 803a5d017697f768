"""Group a newest-first detection stream into calendar days."""

from __future__ import annotations

from collections.abc import Sequence

from spectacles.timeline.models import CalendarDay, DetectedBuild


def calendarize(builds: Sequence[DetectedBuild]) -> list[CalendarDay]:
    """Split *builds* into contiguous runs sharing a calendar date.

    Dates are compared on (year, month, day) in the timezone each
    ``detected_at`` carries. Input order is kept; nothing is sorted.

    Raises ``ValueError`` on empty input, since there is no day to seed from.
    """
    if not builds:
        raise ValueError("calendarize() requires at least one build")

    today = builds[0].detected_at.date()
    current: list[DetectedBuild] = []
    days: list[CalendarDay] = []

    for build in builds:
        day = build.detected_at.date()
        if day != today:
            days.append(CalendarDay(day=today, builds=current))
            today = day
            current = []
        current.append(build)

    days.append(CalendarDay(day=today, builds=current))
    return days
