"""Tests for StreakEngine.

Tests cover:
- compute(): empty input, runs, lapse rule, last activity date
- build_runs(): unsorted and duplicate input
- advance(): incremental streak updates from a persisted state
- is_lapsed() / effective_current()
- StreakState document round-trip
"""

from __future__ import annotations

from datetime import date

import pytest
import voluptuous as vol

from habitcamp import const
from habitcamp.engines.activity_engine import ActivityLog
from habitcamp.engines.streak_engine import StreakEngine, StreakRun, StreakState

D = date  # brevity in date tables


class TestCompute:
    """Tests for StreakEngine.compute."""

    def test_empty_dates(self) -> None:
        """No activity gives zeros and no last date."""
        assert StreakEngine.compute([], today=D(2024, 1, 6)) == StreakState(0, 0, None)

    def test_streak_reset_after_gap(self) -> None:
        """A streak whose last day is two days old has lapsed."""
        dates = [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 5)]

        state = StreakEngine.compute(dates, today=D(2024, 1, 7))

        assert state.current == 0
        assert state.longest == 2
        assert state.last_activity_date == D(2024, 1, 5)

    def test_last_day_yesterday_keeps_streak(self) -> None:
        """Activity yesterday still counts as a live streak."""
        dates = [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 5)]

        state = StreakEngine.compute(dates, today=D(2024, 1, 6))

        assert state.current == 1
        assert state.longest == 2
        assert state.last_activity_date == D(2024, 1, 5)

    def test_streak_continuation(self) -> None:
        """Adding today extends the run that ended yesterday."""
        dates = [D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 5), D(2024, 1, 6)]

        state = StreakEngine.compute(dates, today=D(2024, 1, 6))

        assert state.current == 2
        assert state.longest == 2
        assert state.last_activity_date == D(2024, 1, 6)

    def test_single_day_today(self) -> None:
        """A lone activity today is a streak of 1."""
        state = StreakEngine.compute([D(2024, 1, 6)], today=D(2024, 1, 6))

        assert state == StreakState(1, 1, D(2024, 1, 6))

    def test_lapsed_streak_keeps_history(self) -> None:
        """An old long run stays as longest after it lapses."""
        dates = [D(2024, 1, d) for d in range(1, 11)]

        state = StreakEngine.compute(dates, today=D(2024, 3, 1))

        assert state.current == 0
        assert state.longest == 10
        assert state.last_activity_date == D(2024, 1, 10)

    def test_same_day_entries_count_once(self) -> None:
        """Duplicate dates do not lengthen a run."""
        dates = [D(2024, 1, 1), D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 2)]

        state = StreakEngine.compute(dates, today=D(2024, 1, 2))

        assert state.current == 2
        assert state.longest == 2

    def test_current_run_longer_than_history(self) -> None:
        """The live run can also be the longest run."""
        dates = [D(2024, 1, 1), D(2024, 1, 3), D(2024, 1, 4), D(2024, 1, 5)]

        state = StreakEngine.compute(dates, today=D(2024, 1, 5))

        assert state.current == 3
        assert state.longest == 3

    def test_month_boundary_is_consecutive(self) -> None:
        """Jan 31 → Feb 1 is a one-day step."""
        dates = [D(2024, 1, 30), D(2024, 1, 31), D(2024, 2, 1)]

        assert StreakEngine.compute(dates, today=D(2024, 2, 1)).current == 3

    def test_leap_day_is_consecutive(self) -> None:
        """Feb 28 → Feb 29 → Mar 1 on a leap year."""
        dates = [D(2024, 2, 28), D(2024, 2, 29), D(2024, 3, 1)]

        assert StreakEngine.compute(dates, today=D(2024, 3, 2)).current == 3

    @pytest.mark.parametrize(
        "dates,today",
        [
            ([D(2024, 1, 1)], D(2024, 1, 1)),
            ([D(2024, 1, 1), D(2024, 1, 2)], D(2024, 1, 10)),
            ([D(2024, 1, 1), D(2024, 1, 3), D(2024, 1, 4)], D(2024, 1, 4)),
            ([D(2024, 1, d) for d in (1, 2, 3, 7, 8)], D(2024, 1, 9)),
        ],
    )
    def test_longest_never_below_current(self, dates: list[date], today: date) -> None:
        """longest >= current holds for every input."""
        state = StreakEngine.compute(dates, today=today)

        assert state.longest >= state.current >= 0

    def test_from_activity_log(self, reading_log: ActivityLog) -> None:
        """compute() accepts ActivityLog.all_dates() directly."""
        state = StreakEngine.compute(reading_log.all_dates(const.METRIC_PAGES), D(2024, 1, 6))

        assert state == StreakState(1, 2, D(2024, 1, 5))


class TestBuildRuns:
    """Tests for StreakEngine.build_runs."""

    def test_unsorted_with_duplicates(self) -> None:
        """Runs are built from the sorted set of dates."""
        runs = StreakEngine.build_runs(
            [D(2024, 1, 5), D(2024, 1, 1), D(2024, 1, 2), D(2024, 1, 1)]
        )

        assert runs == [
            StreakRun(D(2024, 1, 1), D(2024, 1, 2)),
            StreakRun(D(2024, 1, 5), D(2024, 1, 5)),
        ]
        assert [run.length for run in runs] == [2, 1]

    def test_empty(self) -> None:
        """No dates, no runs."""
        assert StreakEngine.build_runs([]) == []


class TestAdvance:
    """Tests for StreakEngine.advance."""

    def test_first_activity(self) -> None:
        """First ever activity starts a streak of 1."""
        state = StreakEngine.advance(StreakState(), D(2024, 1, 1))

        assert state == StreakState(1, 1, D(2024, 1, 1))

    def test_consecutive_day_increments(self) -> None:
        """Activity the day after the last one extends the streak."""
        state = StreakEngine.advance(StreakState(4, 6, D(2024, 1, 1)), D(2024, 1, 2))

        assert state == StreakState(5, 6, D(2024, 1, 2))

    def test_same_day_no_change(self) -> None:
        """A second activity on the same day changes nothing."""
        before = StreakState(4, 6, D(2024, 1, 1))

        assert StreakEngine.advance(before, D(2024, 1, 1)) == before

    def test_gap_restarts(self) -> None:
        """A gap resets the current streak to 1 and keeps longest."""
        state = StreakEngine.advance(StreakState(4, 6, D(2024, 1, 1)), D(2024, 1, 5))

        assert state == StreakState(1, 6, D(2024, 1, 5))

    def test_longest_is_high_water_mark(self) -> None:
        """Passing the old record raises longest."""
        state = StreakEngine.advance(StreakState(6, 6, D(2024, 1, 1)), "2024-01-02")

        assert state.longest == 7

    def test_backdated_activity_ignored(self) -> None:
        """Activity before the last recorded day does not rewrite the state."""
        before = StreakState(3, 3, D(2024, 1, 10))

        assert StreakEngine.advance(before, D(2024, 1, 2)) == before

    def test_matches_compute_for_forward_sequence(self) -> None:
        """Folding days in order agrees with a full recompute."""
        days = [D(2024, 1, d) for d in (1, 2, 3, 6, 7)]
        state = StreakState()
        for day in days:
            state = StreakEngine.advance(state, day)

        assert state == StreakEngine.compute(days, today=D(2024, 1, 7))


class TestLapse:
    """Tests for is_lapsed / effective_current."""

    def test_lapsed(self) -> None:
        """Last activity two days ago has lapsed."""
        state = StreakState(5, 5, D(2024, 1, 1))

        assert StreakEngine.is_lapsed(state, D(2024, 1, 3)) is True
        assert StreakEngine.effective_current(state, D(2024, 1, 3)) == 0

    def test_not_lapsed_yesterday(self) -> None:
        """Last activity yesterday is still live."""
        state = StreakState(5, 5, D(2024, 1, 2))

        assert StreakEngine.is_lapsed(state, D(2024, 1, 3)) is False
        assert StreakEngine.effective_current(state, D(2024, 1, 3)) == 5

    def test_empty_state_is_lapsed(self) -> None:
        """No history means no live streak."""
        assert StreakEngine.is_lapsed(StreakState(), D(2024, 1, 3)) is True


class TestStreakStateSerialization:
    """Tests for StreakState.to_dict / from_dict."""

    def test_round_trip(self) -> None:
        """A saved state loads back identically."""
        state = StreakState(3, 8, D(2024, 5, 1))

        assert state.to_dict() == {
            "current": 3,
            "longest": 8,
            "last_activity_date": "2024-05-01",
        }
        assert StreakState.from_dict(state.to_dict()) == state

    def test_null_last_date(self) -> None:
        """An empty state stores None for the last date."""
        assert StreakState.from_dict(StreakState().to_dict()) == StreakState()

    def test_missing_fields_default(self) -> None:
        """Partial documents fill in zeros."""
        assert StreakState.from_dict({}) == StreakState()

    def test_rejects_longest_below_current(self) -> None:
        """A document violating longest >= current is refused."""
        with pytest.raises(vol.Invalid):
            StreakState.from_dict({"current": 5, "longest": 2, "last_activity_date": None})

    def test_rejects_negative(self) -> None:
        """Negative counters are refused."""
        with pytest.raises(vol.Invalid):
            StreakState.from_dict({"current": -1, "longest": 0})
