"""Progress Engine - Window sums measured against resolved goal targets.

This engine provides stateless functions for:
- Progress snapshots (current vs. target, uncapped percentage)
- Window aggregation over one log or across many tracked items
- Per-day goal progress using the campaign's escalated target
- Named activity windows and per-month breakdowns for reading stats
- recompute(): the single call a collaborator makes after every record()

Percentages are NOT capped at 100: exceeding a goal by half reports 150.0.
Callers clamp for display (ProgressSnapshot.display_percentage).
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING

from .. import const
from ..utils.dt_utils import (
    dt_month_bounds,
    dt_to_date,
    dt_window_bounds,
    dt_year_bounds,
)
from ..utils.math_utils import (
    calculate_percentage,
    clamp,
    round_amount,
    round_half_up,
)
from .goal_engine import PreCampaignError
from .streak_engine import StreakEngine, StreakState

if TYPE_CHECKING:
    from collections.abc import Iterable

    from ..type_defs import ProgressSnapshotData
    from .activity_engine import ActivityLog
    from .goal_engine import GoalDefinition


@dataclass(frozen=True)
class ProgressSnapshot:
    """Progress against a resolved target."""

    current: float
    target: float
    percentage: float

    @property
    def display_percentage(self) -> float:
        """Percentage clamped to 0-100 and rounded for progress bars."""
        return round_amount(clamp(self.percentage, 0.0, 100.0))

    @property
    def is_complete(self) -> bool:
        """Whether a positive target has been reached."""
        return self.target > 0 and self.current >= self.target

    def to_dict(self) -> ProgressSnapshotData:
        """Return the persisted form of this snapshot."""
        return {
            const.DATA_PROGRESS_CURRENT: self.current,
            const.DATA_PROGRESS_TARGET: self.target,
            const.DATA_PROGRESS_PERCENTAGE: self.percentage,
        }


class ProgressEngine:
    """Pure logic engine for goal progress.

    All methods are static - no instance state.

    Example:
        snap = ProgressEngine.goal_progress(
            log, steps_goal, on_date=today, campaign_start=start
        )
        snap.percentage  # 85.5
    """

    # ────────────────────────────────────────────────────────────────
    # Snapshots
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def snapshot(current: float, target: float) -> ProgressSnapshot:
        """Compare current to target.

        A target of 0 (or below) is valid and yields percentage 0.0.
        The percentage is not rounded; see display_percentage.
        """
        return ProgressSnapshot(
            current=round_amount(current),
            target=target,
            percentage=calculate_percentage(current, target, precision=None),
        )

    @staticmethod
    def aggregate(
        log: ActivityLog,
        metric: str,
        start: date,
        end: date,
        target: float,
    ) -> ProgressSnapshot:
        """Sum metric over [start, end] and compare to target."""
        return ProgressEngine.snapshot(log.sum(metric, start, end), target)

    @staticmethod
    def goal_progress(
        log: ActivityLog,
        goal: GoalDefinition,
        on_date: date | str,
        campaign_start: date | str | None = None,
    ) -> ProgressSnapshot:
        """Return the goal's progress for one day.

        The day's total for goal.metric is compared with the target resolved
        for that campaign day. Fixed goals need no campaign start.

        Raises:
            PreCampaignError: escalating goal with no start, or on_date
                before campaign_start
        """
        day = dt_to_date(on_date)
        if campaign_start is None:
            if goal.is_escalating:
                raise PreCampaignError(0)
            target = goal.resolve_target(1)
        else:
            target = goal.target_on(day, campaign_start)

        return ProgressEngine.aggregate(log, goal.metric, day, day, target)

    # ────────────────────────────────────────────────────────────────
    # Multi-item aggregation
    # ────────────────────────────────────────────────────────────────

    @staticmethod
    def window_totals(
        logs: Iterable[ActivityLog],
        window: str,
        today: date,
    ) -> dict[str, float]:
        """Return per-metric totals across logs for a named window.

        Windows: today, yesterday, last7, last30, this_year, all.

        Raises:
            ValueError: Unknown window name
        """
        if window not in const.ACTIVITY_WINDOWS:
            raise ValueError(f"Unknown activity window: {window}")

        logs = list(logs)
        earliest = min(
            (first for log in logs if (first := log.first_date()) is not None),
            default=None,
        )
        start, end = dt_window_bounds(window, today, earliest)

        totals: dict[str, float] = {}
        for log in logs:
            for metric in log.metrics():
                totals[metric] = round_amount(
                    totals.get(metric, 0.0) + log.sum(metric, start, end)
                )
        return totals

    @staticmethod
    def monthly_totals(
        logs: Iterable[ActivityLog],
        metric: str,
        year: int,
    ) -> list[float]:
        """Return twelve per-month totals of metric for a calendar year."""
        logs = list(logs)
        totals: list[float] = []
        for month in range(1, 13):
            start, end = dt_month_bounds(year, month)
            totals.append(round_amount(sum(log.sum(metric, start, end) for log in logs)))
        return totals

    @staticmethod
    def collection_progress(
        logs: Iterable[ActivityLog],
        metric: str,
        year: int,
        target: float,
    ) -> ProgressSnapshot:
        """Return yearly progress of metric across every tracked item."""
        start, end = dt_year_bounds(year)
        current = sum(log.sum(metric, start, end) for log in logs)
        return ProgressEngine.snapshot(current, target)

    @staticmethod
    def item_completion(current: float, total: float) -> int:
        """Return a single item's completion as a whole percentage.

        Example: page 150 of a 300-page book → 50. A total of 0 gives 0.
        """
        if total <= 0:
            return 0
        return round_half_up(current / total * 100)


def recompute(
    log: ActivityLog,
    goal: GoalDefinition,
    today: date | str,
    campaign_start: date | str | None = None,
) -> tuple[StreakState, ProgressSnapshot]:
    """Re-derive streak and today's goal progress after a record().

    The streak is computed over the dates that carry goal.metric.

    Raises:
        PreCampaignError: see ProgressEngine.goal_progress
    """
    day = dt_to_date(today)
    streak = StreakEngine.compute(log.all_dates(goal.metric), day)
    progress = ProgressEngine.goal_progress(log, goal, day, campaign_start)
    return streak, progress
