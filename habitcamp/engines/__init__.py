"""Engine modules for HabitCamp.

Contains the stateless computation engines:
- activity_engine: Dated activity log with same-day accumulation
- streak_engine: Consecutive-day streaks
- schedule_engine: Escalating camp target tiers
- goal_engine: Goal definitions and target rules
- progress_engine: Window aggregation, goal progress, recompute()
- ledger_engine: Allowance ledger cascade and adjustments
"""

# Use relative imports within package to avoid mypy module resolution issues
from .activity_engine import (
    ActivityEntry,
    ActivityLog,
    InvalidAmountError,
    validate_amount,
)
from .goal_engine import (
    EscalatingTarget,
    FixedTarget,
    GoalDefinition,
    PreCampaignError,
    default_camp_goals,
)
from .ledger_engine import (
    LedgerEngine,
    LedgerInputs,
    LedgerOutputs,
    LineItem,
    SubAccount,
)
from .progress_engine import ProgressEngine, ProgressSnapshot, recompute
from .schedule_engine import EscalationScheduler, TierFamily
from .streak_engine import StreakEngine, StreakRun, StreakState

__all__ = [
    "ActivityEntry",
    "ActivityLog",
    "EscalatingTarget",
    "EscalationScheduler",
    "FixedTarget",
    "GoalDefinition",
    "InvalidAmountError",
    "LedgerEngine",
    "LedgerInputs",
    "LedgerOutputs",
    "LineItem",
    "PreCampaignError",
    "ProgressEngine",
    "ProgressSnapshot",
    "StreakEngine",
    "StreakRun",
    "StreakState",
    "SubAccount",
    "TierFamily",
    "default_camp_goals",
    "recompute",
    "validate_amount",
]
