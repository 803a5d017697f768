"""Merge adjacent twin-branch detections of the same build."""

from __future__ import annotations

from collections.abc import Iterable, Sequence

from spectacles.timeline.models import CollapsedBuild, DetectedBuild, TimelineEntry


def _collapsible(
    branches: frozenset, first: DetectedBuild, second: DetectedBuild | None
) -> bool:
    return (
        second is not None
        and first.branch in branches
        and second.branch in branches
        and first.number == second.number
    )


def collapse_branches(
    branches: Iterable, builds: Sequence[DetectedBuild]
) -> list[TimelineEntry]:
    """Collapse pairs of neighbouring detections that share a build number.

    Only the entry immediately following the cursor is considered, so a run of
    three equal builds collapses just the first two, and a pair separated by a
    detection on another branch is left alone. The input order is kept and no
    sorting happens here.

    A merged pair becomes a :class:`CollapsedBuild` carrying the first entry's
    ``id``, ``number`` and ``detected_at``.
    """
    collapsible = frozenset(branches)
    collapsed: list[TimelineEntry] = []

    index = 0
    while index < len(builds):
        build = builds[index]
        following = builds[index + 1] if index + 1 < len(builds) else None

        if _collapsible(collapsible, build, following):
            collapsed.append(
                CollapsedBuild(id=build.id, number=build.number, detected_at=build.detected_at)
            )
            index += 2
        else:
            collapsed.append(build)
            index += 1

    return collapsed
