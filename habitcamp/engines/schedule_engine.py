"""Escalation Scheduler - Resolves camp targets that grow with elapsed time.

A camp goal starts at its base target and gets harder in bands. The band is
chosen by a period index derived from the 1-based elapsed day counter:

    week  = ceil(elapsed_days / 7)    steps, training
    month = ceil(elapsed_days / 30)   standard

Band tables live in const.TIER_TABLES as (last period in band, multiplier)
pairs; the final band is open-ended.

    steps     weeks 1-4 x1.0 | 5-8 x1.2  | 9+ x1.5
    training  weeks 1-4 x1.0 | 5-12 x1.5 | 13+ x2.0
    standard  month 1 x1.0   | 2 x1.3    | 3-4 x1.6 | 5+ x2.0

Resolved targets are rounded to the nearest integer, half up.
"""

from __future__ import annotations

from enum import StrEnum
import math

from .. import const
from ..utils.math_utils import apply_multiplier


class TierFamily(StrEnum):
    """Escalation rule sets."""

    STEPS = const.TIER_FAMILY_STEPS
    TRAINING = const.TIER_FAMILY_TRAINING
    STANDARD = const.TIER_FAMILY_STANDARD


class EscalationScheduler:
    """Pure logic engine for escalating targets.

    All methods are static - no instance state. Callers must pass
    elapsed_days >= 1; GoalDefinition.resolve_target() enforces that before
    delegating here.
    """

    @staticmethod
    def _table(tier_family: TierFamily | str) -> tuple[str, list[tuple[int | None, float]]]:
        """Return (basis, bands) for a family, raising ValueError if unknown."""
        family = TierFamily(tier_family)
        return const.TIER_TABLES[family.value]

    @staticmethod
    def period_index(tier_family: TierFamily | str, elapsed_days: int) -> int:
        """Return the 1-based week or month index for elapsed_days.

        Examples:
            period_index("steps", 29) → 5
            period_index("standard", 31) → 2
        """
        basis, _ = EscalationScheduler._table(tier_family)
        days_per_period = (
            const.DAYS_PER_WEEK if basis == const.TIER_BASIS_WEEK else const.DAYS_PER_CAMP_MONTH
        )
        return math.ceil(elapsed_days / days_per_period)

    @staticmethod
    def tier_number(tier_family: TierFamily | str, elapsed_days: int) -> int:
        """Return the 1-based band number in effect on elapsed_days."""
        _, bands = EscalationScheduler._table(tier_family)
        index = EscalationScheduler.period_index(tier_family, elapsed_days)
        for number, (last_period, _) in enumerate(bands, start=1):
            if last_period is None or index <= last_period:
                return number
        return len(bands)

    @staticmethod
    def multiplier(tier_family: TierFamily | str, elapsed_days: int) -> float:
        """Return the multiplier in effect on elapsed_days."""
        _, bands = EscalationScheduler._table(tier_family)
        number = EscalationScheduler.tier_number(tier_family, elapsed_days)
        return bands[number - 1][1]

    @staticmethod
    def resolve(tier_family: TierFamily | str, base: float, elapsed_days: int) -> int:
        """Resolve the escalated target for a campaign day.

        Args:
            tier_family: "steps", "training" or "standard"
            base: Target for the first band
            elapsed_days: 1-based campaign day counter

        Returns:
            base x band multiplier, rounded half up

        Examples:
            resolve("steps", 10000, 1) → 10000
            resolve("steps", 10000, 29) → 12000
            resolve("steps", 10000, 60) → 15000
        """
        factor = EscalationScheduler.multiplier(tier_family, elapsed_days)
        target = apply_multiplier(base, factor)
        const.LOGGER.debug(
            "Escalation %s day %s: base=%s x%s -> %s",
            tier_family,
            elapsed_days,
            base,
            factor,
            target,
        )
        return target

    @staticmethod
    def days_until_next_tier(tier_family: TierFamily | str, elapsed_days: int) -> int | None:
        """Return days until the next band starts, or None on the final band.

        Examples:
            days_until_next_tier("steps", 28) → 1   # day 29 is week 5
            days_until_next_tier("steps", 63) → None
        """
        basis, bands = EscalationScheduler._table(tier_family)
        number = EscalationScheduler.tier_number(tier_family, elapsed_days)
        last_period = bands[number - 1][0]
        if last_period is None:
            return None

        days_per_period = (
            const.DAYS_PER_WEEK if basis == const.TIER_BASIS_WEEK else const.DAYS_PER_CAMP_MONTH
        )
        first_day_of_next_band = last_period * days_per_period + 1
        return first_day_of_next_band - elapsed_days
