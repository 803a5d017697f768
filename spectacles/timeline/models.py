"""Value types for build timelines.

These are pure data structures — no DB dependencies. The DAO layer decodes
rows into them and the API layer serialises them.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Literal, Union


class Branch(str, enum.Enum):
    """A Discord release branch."""

    DEVELOPMENT = "development"
    CANARY = "canary"
    PTB = "ptb"
    STABLE = "stable"

    @property
    def has_frontend(self) -> bool:
        return self is not Branch.DEVELOPMENT

    @classmethod
    def parse(cls, raw: str) -> Branch | str:
        """Return the matching branch, or *raw* untouched if it is unknown."""
        try:
            return cls(raw)
        except ValueError:
            return raw


# Branches with a publicly reachable frontend.
APP_BRANCHES: tuple[Branch, ...] = tuple(branch for branch in Branch if branch.has_frontend)

# Twin branches that usually receive the same build at the same time.
COLLAPSIBLE_BRANCHES: frozenset[Branch] = frozenset({Branch.PTB, Branch.CANARY})

_HUMAN_NAMES: dict[Branch, str] = {
    Branch.CANARY: "Canary",
    Branch.PTB: "PTB",
    Branch.STABLE: "Stable",
    Branch.DEVELOPMENT: "Development",
}


def human_friendly_branch_name(branch: Branch | str) -> str:
    """Display label for *branch*; unknown tags are shown as-is."""
    if isinstance(branch, Branch):
        return _HUMAN_NAMES[branch]
    return str(branch)


@dataclass(frozen=True)
class Build:
    """A frontend build. Either field identifies it."""

    id: str
    number: int


@dataclass(frozen=True)
class DetectedBuild(Build):
    """A build observed live on a branch at a point in time."""

    branch: Branch | str
    detected_at: datetime


@dataclass(frozen=True)
class CollapsedBuild(Build):
    """Two adjacent twin-branch detections of the same build, shown as one."""

    detected_at: datetime
    branch: Literal["collapsed"] = field(default="collapsed", init=False)


TimelineEntry = Union[DetectedBuild, CollapsedBuild]


@dataclass
class CalendarDay:
    """A contiguous run of detections sharing one calendar date."""

    day: date
    builds: list[DetectedBuild] = field(default_factory=list)


@dataclass(frozen=True)
class BuildKey:
    """How a build should be looked up: by number or by id (exactly one set)."""

    number: int | None = None
    id: str | None = None


def branch_tag(branch: Branch | str) -> str:
    """Raw string tag for *branch* as stored and serialised."""
    return branch.value if isinstance(branch, Branch) else branch
