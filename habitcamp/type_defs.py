"""Type definitions for HabitCamp persisted documents.

These TypedDicts describe the shapes handed to (and received from) the
persistence collaborator. The engines work on frozen dataclasses and
convert through ``to_dict()`` / ``from_dict()``; these types only describe
the document side of that boundary.

NOTE: TypedDict is STATIC ANALYSIS ONLY. Runtime validation of incoming
documents happens in schemas.py.

IMPORTANT: This file must NOT import from engines or utils.
Only import from typing (type machinery).
"""

from typing import Literal, NotRequired, TypedDict

# =============================================================================
# Type Aliases (for readability)
# =============================================================================

ItemId = str  # Tracked item identifier (book, habit goal, ledger)
GoalId = str
MetricKind = str  # "pages" | "minutes" | "steps" | "currency" | "count" | ...
ISODate = str  # ISO 8601 date string (no time) "2026-01-18"
ISODatetime = str  # ISO 8601 datetime string "2026-01-18T12:30:00+00:00"


# =============================================================================
# Activity Log
# =============================================================================


class ActivityEntryData(TypedDict):
    """One (date, metric) row of an activity log."""

    date: ISODate
    metric: MetricKind
    amount: float


class ActivityLogData(TypedDict):
    """Persisted activity log for one tracked item."""

    schema_version: int
    item_id: NotRequired[ItemId | None]
    entries: list[ActivityEntryData]


# =============================================================================
# Streaks and Progress
# =============================================================================


class StreakStateData(TypedDict):
    """Persisted streak summary."""

    current: int
    longest: int
    last_activity_date: ISODate | None


class ProgressSnapshotData(TypedDict):
    """Progress against a resolved target.

    percentage is uncapped: 150.0 means the target was exceeded by half.
    """

    current: float
    target: float
    percentage: float


# =============================================================================
# Goals
# =============================================================================


class FixedTargetData(TypedDict):
    """Constant target rule."""

    type: Literal["fixed"]
    target: float


class EscalatingTargetData(TypedDict):
    """Time-escalating target rule."""

    type: Literal["escalating"]
    base: float
    tier_family: Literal["steps", "training", "standard"]


TargetRuleData = FixedTargetData | EscalatingTargetData


class GoalDefinitionData(TypedDict):
    """Persisted goal definition."""

    id: GoalId
    metric: MetricKind
    target_rule: TargetRuleData
    name: NotRequired[str]
    unit: NotRequired[str]
    weekly_only: NotRequired[bool]


# =============================================================================
# Ledger
# =============================================================================


class SubAccountData(TypedDict):
    """A tracked sub-account (one child's allowance and debt)."""

    name: str
    allowance: float
    debt: float


class LineItemData(TypedDict):
    """A general receivable/payable row."""

    description: str
    amount: float


class LedgerInputsData(TypedDict):
    """Raw ledger figures."""

    accounts: list[SubAccountData]
    line_items: list[LineItemData]
    cash: float
    bank: float


class LedgerOutputsData(TypedDict):
    """Derived ledger figures, in evaluation order."""

    total_allowance: float
    total_debt: float
    total_receivables: float
    net_allowance: float
    bank_balance: float
    expected_cash: float
    cash_on_hand: float
    cash_discrepancy: float
    official_cash_figure: float


class LedgerHistoryEntry(TypedDict):
    """One audit-trail row describing a ledger adjustment."""

    timestamp: ISODatetime
    description: str


# =============================================================================
# Settings
# =============================================================================


class ReadingGoalsData(TypedDict):
    """Yearly reading goals."""

    books: int
    pages: int
    minutes: int


class SettingsData(TypedDict):
    """Validated user settings (see schemas.SETTINGS_SCHEMA)."""

    reading_goals: ReadingGoalsData
    campaign_start: ISODate | None
    weekly_goal_weekday: int
    ledger_tolerance: float
    ledger_history_max: int
