"""Streak Engine - Consecutive-day streaks from a set of activity dates.

Design Principles:
    - Stateless: operates on the date sequence passed in
    - Set semantics: several entries on one day count once
    - Lapse-aware: a streak whose last day is older than yesterday reports
      current = 0 while keeping its longest run and last activity date
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, timedelta
from typing import TYPE_CHECKING

from .. import const
from ..schemas import STREAK_STATE_SCHEMA
from ..utils.dt_utils import dt_parse_date, dt_to_date

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import StreakStateData


@dataclass(frozen=True)
class StreakState:
    """Derived streak summary.

    Invariant: longest >= current >= 0.
    """

    current: int = 0
    longest: int = 0
    last_activity_date: date | None = None

    def to_dict(self) -> StreakStateData:
        """Return the persisted form of this state."""
        return {
            const.DATA_STREAK_CURRENT: self.current,
            const.DATA_STREAK_LONGEST: self.longest,
            const.DATA_STREAK_LAST_ACTIVITY_DATE: (
                self.last_activity_date.isoformat() if self.last_activity_date else None
            ),
        }

    @classmethod
    def from_dict(cls, data: StreakStateData) -> StreakState:
        """Build a state from a persisted document.

        Raises:
            voluptuous.Invalid: Malformed document or longest < current
        """
        validated = STREAK_STATE_SCHEMA(dict(data))
        return cls(
            current=validated[const.DATA_STREAK_CURRENT],
            longest=validated[const.DATA_STREAK_LONGEST],
            last_activity_date=dt_parse_date(
                validated[const.DATA_STREAK_LAST_ACTIVITY_DATE]
            ),
        )


@dataclass(frozen=True)
class StreakRun:
    """A maximal run of consecutive calendar days."""

    start: date
    end: date

    @property
    def length(self) -> int:
        """Number of days in the run (always >= 1)."""
        return (self.end - self.start).days + 1


class StreakEngine:
    """Pure logic engine for consecutive-day streaks.

    All methods are static - no instance state.

    Example:
        dates = log.all_dates()
        state = StreakEngine.compute(dates, today=date(2024, 1, 6))
    """

    @staticmethod
    def build_runs(dates: Iterable[date]) -> list[StreakRun]:
        """Group dates into maximal runs of consecutive days.

        Input need not be sorted or distinct. A gap of more than one day
        starts a new run.
        """
        runs: list[StreakRun] = []
        for day in sorted(set(dates)):
            if runs and day - runs[-1].end == timedelta(days=1):
                runs[-1] = replace(runs[-1], end=day)
            else:
                runs.append(StreakRun(start=day, end=day))
        return runs

    @staticmethod
    def compute(dates: Iterable[date], today: date) -> StreakState:
        """Derive the streak state for a set of activity dates.

        Args:
            dates: Activity dates (duplicates collapse)
            today: Reference "today" from the time source

        Returns:
            StreakState. current is the length of the run ending at the
            latest date, but only if that date is today or yesterday.
            last_activity_date is the latest date even when lapsed.
        """
        runs = StreakEngine.build_runs(dates)
        if not runs:
            return StreakState()

        latest = runs[-1]
        longest = max(run.length for run in runs)

        if latest.end in (today, today - timedelta(days=1)):
            current = latest.length
        else:
            current = 0

        const.LOGGER.debug(
            "Streak computed: current=%s longest=%s last=%s (today=%s, runs=%s)",
            current,
            longest,
            latest.end,
            today,
            len(runs),
        )
        return StreakState(
            current=current,
            longest=longest,
            last_activity_date=latest.end,
        )

    @staticmethod
    def advance(state: StreakState, activity_date: date | str) -> StreakState:
        """Fold one new activity day into a persisted streak state.

        Streak logic:
        - Same day as last activity: No change (already counted)
        - Day after last activity: Increment streak
        - Later day after a gap, or first activity: Restart at 1
        - Day before last activity: No change (history is not rewritten)

        longest is a high-water mark and never decreases.
        """
        day = dt_to_date(activity_date)
        last = state.last_activity_date

        if last is not None and day <= last:
            return state

        if last is not None and day - last == timedelta(days=1):
            current = state.current + 1
        else:
            current = 1

        return StreakState(
            current=current,
            longest=max(state.longest, current),
            last_activity_date=day,
        )

    @staticmethod
    def is_lapsed(state: StreakState, today: date) -> bool:
        """Return True if the state's streak no longer reaches today or yesterday."""
        if state.last_activity_date is None:
            return True
        return state.last_activity_date < today - timedelta(days=1)

    @staticmethod
    def effective_current(state: StreakState, today: date) -> int:
        """Return the current streak as of today for a persisted state."""
        return 0 if StreakEngine.is_lapsed(state, today) else state.current
