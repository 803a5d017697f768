"""Tests for the timeline logic (no DB required)."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from spectacles.timeline import (
    APP_BRANCHES,
    COLLAPSIBLE_BRANCHES,
    Branch,
    Build,
    BuildKey,
    CollapsedBuild,
    DetectedBuild,
    appearing_as,
    branch_tag,
    calendarize,
    collapse_branches,
    human_friendly_branch_name,
    is_current,
    is_dual_lockstep,
    parse_build_key,
)

T0 = datetime(2026, 6, 1, 18, 0, 0, tzinfo=timezone.utc)


def _detected(branch, number: int, at: datetime = T0, build_id: str | None = None) -> DetectedBuild:
    return DetectedBuild(
        id=build_id or f"hash{number}",
        number=number,
        branch=branch,
        detected_at=at,
    )


def _latest(**numbers: int) -> dict[Branch, Build]:
    return {Branch(name): Build(id=f"hash{n}", number=n) for name, n in numbers.items()}


# ── Branch ────────────────────────────────────────────────────────────────


class TestBranch:
    def test_app_branches_exclude_development(self):
        assert APP_BRANCHES == (Branch.CANARY, Branch.PTB, Branch.STABLE)
        assert Branch.DEVELOPMENT not in APP_BRANCHES
        assert all(branch.has_frontend for branch in APP_BRANCHES)
        assert Branch.DEVELOPMENT.has_frontend is False

    def test_app_branches_are_every_frontend_branch(self):
        assert set(APP_BRANCHES) == {branch for branch in Branch if branch.has_frontend}

    def test_collapsible_branches(self):
        assert COLLAPSIBLE_BRANCHES == {Branch.CANARY, Branch.PTB}

    @pytest.mark.parametrize(
        "branch, label",
        [
            (Branch.CANARY, "Canary"),
            (Branch.PTB, "PTB"),
            (Branch.STABLE, "Stable"),
            (Branch.DEVELOPMENT, "Development"),
        ],
    )
    def test_human_friendly_names(self, branch, label):
        assert human_friendly_branch_name(branch) == label

    def test_every_branch_has_a_label(self):
        for branch in Branch:
            assert human_friendly_branch_name(branch) != branch.value

    def test_unknown_tag_is_shown_raw(self):
        assert human_friendly_branch_name("staging") == "staging"

    def test_parse_known_and_unknown(self):
        assert Branch.parse("ptb") is Branch.PTB
        assert Branch.parse("staging") == "staging"

    def test_branch_tag(self):
        assert branch_tag(Branch.STABLE) == "stable"
        assert branch_tag("collapsed") == "collapsed"


# ── collapse_branches ─────────────────────────────────────────────────────


class TestCollapseBranches:
    def test_empty(self):
        assert collapse_branches(COLLAPSIBLE_BRANCHES, []) == []

    def test_single_entry_passes_through(self):
        only = _detected(Branch.CANARY, 1)
        assert collapse_branches(COLLAPSIBLE_BRANCHES, [only]) == [only]

    def test_adjacent_twins_collapse(self):
        ptb = _detected(Branch.PTB, 42, T0)
        canary = _detected(Branch.CANARY, 42, T0 - timedelta(minutes=1))
        stable = _detected(Branch.STABLE, 42, T0 - timedelta(minutes=2))

        result = collapse_branches(COLLAPSIBLE_BRANCHES, [ptb, canary, stable])

        assert len(result) == 2
        assert isinstance(result[0], CollapsedBuild)
        assert result[0].branch == "collapsed"
        assert result[0].number == 42
        assert result[1] is stable

    def test_collapsed_entry_keeps_first_identity(self):
        ptb = _detected(Branch.PTB, 42, T0, build_id="first")
        canary = _detected(Branch.CANARY, 42, T0 - timedelta(hours=1), build_id="second")

        (merged,) = collapse_branches(COLLAPSIBLE_BRANCHES, [ptb, canary])

        assert merged == CollapsedBuild(id="first", number=42, detected_at=T0)

    def test_non_adjacent_pair_does_not_collapse(self):
        builds = [
            _detected(Branch.PTB, 42),
            _detected(Branch.STABLE, 1),
            _detected(Branch.CANARY, 42),
        ]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert result == builds

    def test_three_in_a_row_only_collapses_first_two(self):
        builds = [
            _detected(Branch.CANARY, 7),
            _detected(Branch.PTB, 7),
            _detected(Branch.CANARY, 7),
        ]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert [entry.branch for entry in result] == ["collapsed", Branch.CANARY]
        assert result[1] is builds[2]

    def test_different_numbers_do_not_collapse(self):
        builds = [_detected(Branch.CANARY, 2), _detected(Branch.PTB, 1)]
        assert collapse_branches(COLLAPSIBLE_BRANCHES, builds) == builds

    def test_branch_outside_set_does_not_collapse(self):
        builds = [_detected(Branch.STABLE, 5), _detected(Branch.PTB, 5)]
        assert collapse_branches(COLLAPSIBLE_BRANCHES, builds) == builds

    def test_same_branch_twice_collapses(self):
        # Membership is all that is checked, not that the branches differ.
        builds = [_detected(Branch.CANARY, 5), _detected(Branch.CANARY, 5)]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert len(result) == 1

    def test_no_collapsible_branches_is_identity(self):
        builds = [
            _detected(Branch.STABLE, 3),
            _detected(Branch.STABLE, 3),
            _detected(Branch.DEVELOPMENT, 3),
            _detected(Branch.STABLE, 2),
        ]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert result == builds
        assert not any(isinstance(entry, CollapsedBuild) for entry in result)
        assert collapse_branches(set(), builds) == builds

    def test_unknown_branch_passes_through(self):
        builds = [_detected("staging", 9), _detected(Branch.CANARY, 9)]
        assert collapse_branches(COLLAPSIBLE_BRANCHES, builds) == builds

    def test_trailing_entry_is_kept(self):
        builds = [
            _detected(Branch.PTB, 10),
            _detected(Branch.CANARY, 10),
            _detected(Branch.PTB, 9),
        ]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert len(result) == 2
        assert result[-1] is builds[-1]

    def test_accepts_list_of_branches(self):
        builds = [_detected(Branch.PTB, 10), _detected(Branch.CANARY, 10)]
        result = collapse_branches([Branch.PTB, Branch.CANARY], builds)
        assert len(result) == 1

    def test_length_bounds(self):
        builds = [
            _detected(Branch.PTB if i % 2 else Branch.CANARY, i // 2) for i in range(9)
        ]
        result = collapse_branches(COLLAPSIBLE_BRANCHES, builds)
        assert (len(builds) + 1) // 2 <= len(result) <= len(builds)
        assert len(result) == 5


# ── latest-build predicates ───────────────────────────────────────────────


class TestIsDualLockstep:
    def test_matching_numbers(self):
        assert is_dual_lockstep(_latest(canary=100, ptb=100)) is True

    def test_different_numbers(self):
        assert is_dual_lockstep(_latest(canary=101, ptb=100)) is False

    def test_stable_is_ignored(self):
        assert is_dual_lockstep(_latest(canary=100, ptb=100, stable=90)) is True

    def test_missing_branch(self):
        assert is_dual_lockstep(_latest(canary=100)) is False
        assert is_dual_lockstep({}) is False


class TestIsCurrent:
    def test_plain_entry_current(self):
        latest = _latest(canary=50, ptb=49, stable=40)
        assert is_current(_detected(Branch.STABLE, 40), latest) is True
        assert is_current(_detected(Branch.PTB, 49), latest) is True

    def test_plain_entry_stale(self):
        latest = _latest(canary=50, ptb=49, stable=40)
        assert is_current(_detected(Branch.STABLE, 39), latest) is False

    def test_plain_entry_checks_own_branch(self):
        latest = _latest(canary=50, stable=40)
        assert is_current(_detected(Branch.STABLE, 50), latest) is False

    def test_collapsed_entry_current(self):
        latest = _latest(canary=50, ptb=50)
        entry = CollapsedBuild(id="hash50", number=50, detected_at=T0)
        assert is_current(entry, latest) is True

    def test_collapsed_entry_needs_both_branches(self):
        latest = _latest(canary=50, ptb=49)
        assert is_current(CollapsedBuild(id="h", number=49, detected_at=T0), latest) is False
        assert is_current(CollapsedBuild(id="h", number=50, detected_at=T0), latest) is False

    def test_collapsed_entry_stale(self):
        latest = _latest(canary=50, ptb=50)
        assert is_current(CollapsedBuild(id="h", number=49, detected_at=T0), latest) is False

    def test_branch_without_latest(self):
        assert is_current(_detected(Branch.DEVELOPMENT, 1), _latest(canary=1)) is False
        assert is_current(_detected("staging", 1), _latest(canary=1)) is False


class TestAppearingAs:
    def test_dual(self):
        latest_ids = {Branch.CANARY: "abc", Branch.PTB: "abc", Branch.STABLE: "old"}
        assert appearing_as("abc", latest_ids) == "dual"

    def test_single_branch(self):
        latest_ids = {Branch.CANARY: "new", Branch.PTB: "abc", Branch.STABLE: "old"}
        assert appearing_as("abc", latest_ids) is Branch.PTB
        assert appearing_as("old", latest_ids) is Branch.STABLE

    def test_not_live(self):
        assert appearing_as("gone", {Branch.CANARY: "new"}) is None


# ── calendarize ───────────────────────────────────────────────────────────


class TestCalendarize:
    def test_empty_raises(self):
        with pytest.raises(ValueError):
            calendarize([])

    def test_single_day(self):
        builds = [
            _detected(Branch.CANARY, 3, T0),
            _detected(Branch.PTB, 2, T0 - timedelta(hours=3)),
        ]
        (day,) = calendarize(builds)
        assert day.day == T0.date()
        assert day.builds == builds

    def test_splits_on_date_change(self):
        builds = [
            _detected(Branch.CANARY, 5, T0),
            _detected(Branch.CANARY, 4, T0 - timedelta(hours=1)),
            _detected(Branch.PTB, 3, T0 - timedelta(days=1)),
            _detected(Branch.STABLE, 2, T0 - timedelta(days=3)),
            _detected(Branch.STABLE, 1, T0 - timedelta(days=3, hours=1)),
        ]
        days = calendarize(builds)

        assert [d.day for d in days] == [
            T0.date(),
            (T0 - timedelta(days=1)).date(),
            (T0 - timedelta(days=3)).date(),
        ]
        assert [len(d.builds) for d in days] == [2, 1, 2]
        assert sum(len(d.builds) for d in days) == len(builds)
        assert [b for d in days for b in d.builds] == builds

    def test_same_weekday_weeks_apart_is_split(self):
        builds = [
            _detected(Branch.CANARY, 2, T0),
            _detected(Branch.CANARY, 1, T0 - timedelta(weeks=1)),
        ]
        assert len(calendarize(builds)) == 2

    def test_same_day_of_month_different_month_is_split(self):
        june = datetime(2026, 6, 1, 12, tzinfo=timezone.utc)
        may = datetime(2026, 5, 1, 12, tzinfo=timezone.utc)
        builds = [_detected(Branch.CANARY, 2, june), _detected(Branch.CANARY, 1, may)]
        assert len(calendarize(builds)) == 2

    def test_midnight_boundary(self):
        late = datetime(2026, 6, 1, 0, 0, 1, tzinfo=timezone.utc)
        earlier = datetime(2026, 5, 31, 23, 59, 59, tzinfo=timezone.utc)
        days = calendarize([_detected(Branch.PTB, 2, late), _detected(Branch.PTB, 1, earlier)])
        assert [d.day.isoformat() for d in days] == ["2026-06-01", "2026-05-31"]

    def test_no_sorting(self):
        # Returning to an earlier date opens a new bucket rather than merging.
        builds = [
            _detected(Branch.CANARY, 3, T0),
            _detected(Branch.CANARY, 2, T0 - timedelta(days=1)),
            _detected(Branch.CANARY, 1, T0),
        ]
        days = calendarize(builds)
        assert [d.day for d in days] == [T0.date(), (T0 - timedelta(days=1)).date(), T0.date()]


# ── parse_build_key ───────────────────────────────────────────────────────


class TestParseBuildKey:
    def test_number(self):
        assert parse_build_key("20240601") == BuildKey(number=20240601)

    def test_hex_id(self):
        assert parse_build_key("f00dcafe") == BuildKey(id="f00dcafe")

    def test_mixed_is_id(self):
        assert parse_build_key("a1b2c3") == BuildKey(id="a1b2c3")
        assert parse_build_key("12345a") == BuildKey(id="12345a")

    def test_leading_zeros_are_a_number(self):
        assert parse_build_key("0042") == BuildKey(number=42)

    @pytest.mark.parametrize("key", ["", "12 34", "-12", "+12", "12345\n", "١٢٣"])
    def test_non_ascii_digit_strings_are_ids(self, key):
        assert parse_build_key(key) == BuildKey(id=key)
