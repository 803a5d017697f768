"""Predicates over the latest build on each branch."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Literal

from spectacles.timeline.models import Branch, Build, CollapsedBuild, TimelineEntry

LatestBuilds = Mapping[Branch, Build]


def _latest_number(latest: LatestBuilds, branch: Branch | str) -> int | None:
    build = latest.get(branch)  # type: ignore[call-overload]
    return build.number if build is not None else None


def is_dual_lockstep(latest: LatestBuilds) -> bool:
    """True when Canary and PTB currently carry the same build number."""
    canary = _latest_number(latest, Branch.CANARY)
    return canary is not None and canary == _latest_number(latest, Branch.PTB)


def is_current(entry: TimelineEntry, latest: LatestBuilds) -> bool:
    """Whether *entry* is the build presently live on its branch.

    A collapsed entry is current only if it is live on both Canary and PTB.
    """
    if isinstance(entry, CollapsedBuild):
        return (
            _latest_number(latest, Branch.CANARY) == entry.number
            and _latest_number(latest, Branch.PTB) == entry.number
        )
    return _latest_number(latest, entry.branch) == entry.number


def appearing_as(
    build_id: str, latest_ids: Mapping[Branch, str]
) -> Branch | Literal["dual"] | None:
    """Which branch header a build page should show for *build_id*.

    Returns ``"dual"`` if the build is live on both Canary and PTB, the first
    branch it is live on otherwise, or ``None`` if it is not live anywhere.
    """
    if latest_ids.get(Branch.CANARY) == build_id and latest_ids.get(Branch.PTB) == build_id:
        return "dual"
    for branch, latest_id in latest_ids.items():
        if latest_id == build_id:
            return branch
    return None
