"""Goal Engine - Goal definitions with fixed or escalating target rules.

A goal names a metric and a target rule. The rule is a tagged variant:

- FixedTarget(target): the same target every campaign day
- EscalatingTarget(base, tier_family): base scaled by EscalationScheduler

Targets are only defined from campaign day 1 (the declared start date)
onward; asking earlier raises PreCampaignError.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any, cast

from .. import const
from ..schemas import GOAL_DEFINITION_SCHEMA
from ..utils.dt_utils import dt_elapsed_days, dt_to_date
from .schedule_engine import EscalationScheduler, TierFamily

if TYPE_CHECKING:
    from ..type_defs import GoalDefinitionData, TargetRuleData


class PreCampaignError(ValueError):
    """Raised when a target is requested before campaign day 1.

    Attributes:
        elapsed_days: The rejected day counter (< 1)
    """

    def __init__(self, elapsed_days: int) -> None:
        """Initialize PreCampaignError.

        Args:
            elapsed_days: The rejected day counter
        """
        self.elapsed_days = elapsed_days
        super().__init__(
            f"Campaign has not started: elapsed_days={elapsed_days}, must be >= 1"
        )


@dataclass(frozen=True)
class FixedTarget:
    """Constant target."""

    target: float

    def resolve(self, elapsed_days: int) -> float:
        """Return the constant target."""
        return self.target

    def to_dict(self) -> TargetRuleData:
        """Return the persisted form of this rule."""
        return cast(
            "TargetRuleData",
            {
                const.DATA_GOAL_RULE_TYPE: const.GOAL_RULE_FIXED,
                const.DATA_GOAL_RULE_TARGET: self.target,
            },
        )


@dataclass(frozen=True)
class EscalatingTarget:
    """Target that grows by tier as the campaign runs."""

    base: float
    tier_family: TierFamily

    def resolve(self, elapsed_days: int) -> int:
        """Return the escalated target for elapsed_days."""
        return EscalationScheduler.resolve(self.tier_family, self.base, elapsed_days)

    def to_dict(self) -> TargetRuleData:
        """Return the persisted form of this rule."""
        return cast(
            "TargetRuleData",
            {
                const.DATA_GOAL_RULE_TYPE: const.GOAL_RULE_ESCALATING,
                const.DATA_GOAL_RULE_BASE: self.base,
                const.DATA_GOAL_RULE_TIER_FAMILY: self.tier_family.value,
            },
        )


TargetRule = FixedTarget | EscalatingTarget


def target_rule_from_dict(data: dict[str, Any]) -> TargetRule:
    """Build a target rule from an already-validated rule document."""
    if data[const.DATA_GOAL_RULE_TYPE] == const.GOAL_RULE_ESCALATING:
        return EscalatingTarget(
            base=float(data[const.DATA_GOAL_RULE_BASE]),
            tier_family=TierFamily(data[const.DATA_GOAL_RULE_TIER_FAMILY]),
        )
    return FixedTarget(target=float(data[const.DATA_GOAL_RULE_TARGET]))


@dataclass(frozen=True)
class GoalDefinition:
    """A goal: which metric counts, and how its target is set."""

    id: str
    metric: str
    target_rule: TargetRule
    name: str = ""
    unit: str = ""
    weekly_only: bool = False

    def resolve_target(self, elapsed_days: int) -> float:
        """Return the target for a 1-based campaign day.

        Raises:
            PreCampaignError: elapsed_days < 1
        """
        if elapsed_days < 1:
            raise PreCampaignError(elapsed_days)
        return self.target_rule.resolve(elapsed_days)

    def target_on(self, on_date: date | str, campaign_start: date | str) -> float:
        """Return the target for a calendar date of a campaign.

        Raises:
            PreCampaignError: on_date is before campaign_start
        """
        elapsed = dt_elapsed_days(dt_to_date(campaign_start), dt_to_date(on_date))
        return self.resolve_target(elapsed)

    def is_due(
        self,
        on_date: date | str,
        weekday: int = const.DEFAULT_WEEKLY_GOAL_WEEKDAY,
    ) -> bool:
        """Return whether the goal expects activity on on_date.

        Daily goals are always due; weekly_only goals are due only on
        weekday (date.weekday() numbering, Monday = 0).
        """
        if not self.weekly_only:
            return True
        return dt_to_date(on_date).weekday() == weekday

    @property
    def is_escalating(self) -> bool:
        """Whether the target grows over the campaign."""
        return isinstance(self.target_rule, EscalatingTarget)

    def to_dict(self) -> GoalDefinitionData:
        """Return the persisted form of this goal."""
        return {
            const.DATA_GOAL_ID: self.id,
            const.DATA_GOAL_METRIC: self.metric,
            const.DATA_GOAL_TARGET_RULE: self.target_rule.to_dict(),
            const.DATA_GOAL_NAME: self.name,
            const.DATA_GOAL_UNIT: self.unit,
            const.DATA_GOAL_WEEKLY_ONLY: self.weekly_only,
        }

    @classmethod
    def from_dict(cls, data: GoalDefinitionData) -> GoalDefinition:
        """Build a goal from a persisted document.

        Raises:
            voluptuous.Invalid: Malformed document
        """
        validated = GOAL_DEFINITION_SCHEMA(dict(data))
        return cls(
            id=validated[const.DATA_GOAL_ID],
            metric=validated[const.DATA_GOAL_METRIC],
            target_rule=target_rule_from_dict(validated[const.DATA_GOAL_TARGET_RULE]),
            name=validated[const.DATA_GOAL_NAME],
            unit=validated[const.DATA_GOAL_UNIT],
            weekly_only=validated[const.DATA_GOAL_WEEKLY_ONLY],
        )


def default_camp_goals() -> dict[str, GoalDefinition]:
    """Return the starter camp goal set keyed by goal id."""
    return {
        goal_id: GoalDefinition.from_dict(
            cast("GoalDefinitionData", {const.DATA_GOAL_ID: goal_id, **definition})
        )
        for goal_id, definition in const.DEFAULT_CAMP_GOALS.items()
    }
