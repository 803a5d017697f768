"""Build timeline logic — collapsing, latest-build predicates, day grouping."""

from spectacles.timeline.calendar import calendarize
from spectacles.timeline.collapsing import collapse_branches
from spectacles.timeline.keys import parse_build_key
from spectacles.timeline.latest import appearing_as, is_current, is_dual_lockstep
from spectacles.timeline.models import (
    APP_BRANCHES,
    COLLAPSIBLE_BRANCHES,
    Branch,
    Build,
    BuildKey,
    CalendarDay,
    CollapsedBuild,
    DetectedBuild,
    TimelineEntry,
    branch_tag,
    human_friendly_branch_name,
)

__all__ = [
    "APP_BRANCHES",
    "COLLAPSIBLE_BRANCHES",
    "Branch",
    "Build",
    "BuildKey",
    "CalendarDay",
    "CollapsedBuild",
    "DetectedBuild",
    "TimelineEntry",
    "appearing_as",
    "branch_tag",
    "calendarize",
    "collapse_branches",
    "human_friendly_branch_name",
    "is_current",
    "is_dual_lockstep",
    "parse_build_key",
]
