"""HabitCamp: temporal progress and goal engine.

Turns sparse, date-stamped activity logs (pages read, minutes listened,
steps walked, money moved) into consecutive-day streaks, progress against
fixed or time-escalating goals, and cascading ledger summaries.

The engine holds no global state and never reads the clock; the caller
supplies "today" and the campaign start date, owns each ActivityLog, and
persists the to_dict() documents.
"""

from .engines import (
    ActivityEntry,
    ActivityLog,
    EscalatingTarget,
    EscalationScheduler,
    FixedTarget,
    GoalDefinition,
    InvalidAmountError,
    LedgerEngine,
    LedgerInputs,
    LedgerOutputs,
    LineItem,
    PreCampaignError,
    ProgressEngine,
    ProgressSnapshot,
    StreakEngine,
    StreakState,
    SubAccount,
    TierFamily,
    recompute,
)
from .schemas import build_settings

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
    "StreakState",
    "SubAccount",
    "TierFamily",
    "build_settings",
    "recompute",
]
