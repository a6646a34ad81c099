# File: const.py
"""Constants for the HabitCamp progress engine.

This file centralizes document keys, metric kinds, escalation tier tables,
activity window names, and default settings for consistency across the
engines, schemas, and tests.
"""

import logging

# ------------------------------------------------------------------------------------------------
# General / Package Information
# ------------------------------------------------------------------------------------------------
# Logger
LOGGER = logging.getLogger(__package__)

# Document schema version (bumped when persisted document shapes change)
SCHEMA_VERSION = 1

# Float precision for amount rounding
DATA_FLOAT_PRECISION = 2

# ------------------------------------------------------------------------------------------------
# Metric Kinds
# ------------------------------------------------------------------------------------------------
METRIC_PAGES = "pages"
METRIC_MINUTES = "minutes"
METRIC_STEPS = "steps"
METRIC_CURRENCY = "currency"
METRIC_COUNT = "count"
METRIC_MILLILITERS = "ml"
METRIC_KILOGRAMS = "kg"

# ------------------------------------------------------------------------------------------------
# Activity Log Document Keys
# ------------------------------------------------------------------------------------------------
DATA_ACTIVITY_ITEM_ID = "item_id"
DATA_ACTIVITY_ENTRIES = "entries"
DATA_ACTIVITY_DATE = "date"
DATA_ACTIVITY_METRIC = "metric"
DATA_ACTIVITY_AMOUNT = "amount"
DATA_SCHEMA_VERSION = "schema_version"

# ------------------------------------------------------------------------------------------------
# Streak Document Keys
# ------------------------------------------------------------------------------------------------
DATA_STREAK_CURRENT = "current"
DATA_STREAK_LONGEST = "longest"
DATA_STREAK_LAST_ACTIVITY_DATE = "last_activity_date"

# ------------------------------------------------------------------------------------------------
# Goal Document Keys
# ------------------------------------------------------------------------------------------------
DATA_GOAL_ID = "id"
DATA_GOAL_NAME = "name"
DATA_GOAL_METRIC = "metric"
DATA_GOAL_UNIT = "unit"
DATA_GOAL_WEEKLY_ONLY = "weekly_only"
DATA_GOAL_TARGET_RULE = "target_rule"
DATA_GOAL_RULE_TYPE = "type"
DATA_GOAL_RULE_TARGET = "target"
DATA_GOAL_RULE_BASE = "base"
DATA_GOAL_RULE_TIER_FAMILY = "tier_family"

GOAL_RULE_FIXED = "fixed"
GOAL_RULE_ESCALATING = "escalating"

# ------------------------------------------------------------------------------------------------
# Progress Snapshot Keys
# ------------------------------------------------------------------------------------------------
DATA_PROGRESS_CURRENT = "current"
DATA_PROGRESS_TARGET = "target"
DATA_PROGRESS_PERCENTAGE = "percentage"

# ------------------------------------------------------------------------------------------------
# Escalation Tier Families
# ------------------------------------------------------------------------------------------------
TIER_FAMILY_STEPS = "steps"
TIER_FAMILY_TRAINING = "training"
TIER_FAMILY_STANDARD = "standard"

TIER_BASIS_WEEK = "week"
TIER_BASIS_MONTH = "month"

DAYS_PER_WEEK = 7
DAYS_PER_CAMP_MONTH = 30

# Each band is (last period index in band, multiplier); None closes the table.
TIER_TABLES: dict[str, tuple[str, list[tuple[int | None, float]]]] = {
    TIER_FAMILY_STEPS: (
        TIER_BASIS_WEEK,
        [(4, 1.0), (8, 1.2), (None, 1.5)],
    ),
    TIER_FAMILY_TRAINING: (
        TIER_BASIS_WEEK,
        [(4, 1.0), (12, 1.5), (None, 2.0)],
    ),
    TIER_FAMILY_STANDARD: (
        TIER_BASIS_MONTH,
        [(1, 1.0), (2, 1.3), (4, 1.6), (None, 2.0)],
    ),
}

# ------------------------------------------------------------------------------------------------
# Activity Windows
# ------------------------------------------------------------------------------------------------
WINDOW_TODAY = "today"
WINDOW_YESTERDAY = "yesterday"
WINDOW_LAST_7 = "last7"
WINDOW_LAST_30 = "last30"
WINDOW_THIS_YEAR = "this_year"
WINDOW_ALL = "all"

ACTIVITY_WINDOWS = [
    WINDOW_TODAY,
    WINDOW_YESTERDAY,
    WINDOW_LAST_7,
    WINDOW_LAST_30,
    WINDOW_THIS_YEAR,
    WINDOW_ALL,
]

# ------------------------------------------------------------------------------------------------
# Ledger Document Keys
# ------------------------------------------------------------------------------------------------
DATA_LEDGER_ACCOUNTS = "accounts"
DATA_LEDGER_ACCOUNT_NAME = "name"
DATA_LEDGER_ACCOUNT_ALLOWANCE = "allowance"
DATA_LEDGER_ACCOUNT_DEBT = "debt"
DATA_LEDGER_LINE_ITEMS = "line_items"
DATA_LEDGER_LINE_ITEM_DESCRIPTION = "description"
DATA_LEDGER_LINE_ITEM_AMOUNT = "amount"
DATA_LEDGER_CASH = "cash"
DATA_LEDGER_BANK = "bank"
DATA_LEDGER_HISTORY = "history"
DATA_LEDGER_HISTORY_TIMESTAMP = "timestamp"
DATA_LEDGER_HISTORY_DESCRIPTION = "description"

DATA_LEDGER_TOTAL_ALLOWANCE = "total_allowance"
DATA_LEDGER_TOTAL_DEBT = "total_debt"
DATA_LEDGER_TOTAL_RECEIVABLES = "total_receivables"
DATA_LEDGER_NET_ALLOWANCE = "net_allowance"
DATA_LEDGER_BANK_BALANCE = "bank_balance"
DATA_LEDGER_EXPECTED_CASH = "expected_cash"
DATA_LEDGER_CASH_ON_HAND = "cash_on_hand"
DATA_LEDGER_CASH_DISCREPANCY = "cash_discrepancy"
DATA_LEDGER_OFFICIAL_CASH_FIGURE = "official_cash_figure"

# Adjustment targets
LEDGER_TARGET_ACCOUNT = "account"
LEDGER_TARGET_LINE_ITEM = "line_item"
LEDGER_TARGET_OTHER = "other"

LEDGER_TARGETS = [LEDGER_TARGET_ACCOUNT, LEDGER_TARGET_LINE_ITEM, LEDGER_TARGET_OTHER]

# Discrepancy status (callers branch display color on these)
DISCREPANCY_SHORTFALL = "shortfall"
DISCREPANCY_SURPLUS = "surplus"
DISCREPANCY_BALANCED = "balanced"

# ------------------------------------------------------------------------------------------------
# Settings Keys
# ------------------------------------------------------------------------------------------------
CONF_READING_GOALS = "reading_goals"
CONF_GOAL_BOOKS = "books"
CONF_GOAL_PAGES = "pages"
CONF_GOAL_MINUTES = "minutes"
CONF_CAMPAIGN_START = "campaign_start"
CONF_WEEKLY_GOAL_WEEKDAY = "weekly_goal_weekday"
CONF_LEDGER_TOLERANCE = "ledger_tolerance"
CONF_LEDGER_HISTORY_MAX = "ledger_history_max"

# ------------------------------------------------------------------------------------------------
# Defaults
# ------------------------------------------------------------------------------------------------
DEFAULT_GOAL_BOOKS = 24
DEFAULT_GOAL_PAGES = 12000
DEFAULT_GOAL_MINUTES = 7200

DEFAULT_READING_GOALS = {
    CONF_GOAL_BOOKS: DEFAULT_GOAL_BOOKS,
    CONF_GOAL_PAGES: DEFAULT_GOAL_PAGES,
    CONF_GOAL_MINUTES: DEFAULT_GOAL_MINUTES,
}

# Monday (date.weekday() convention)
DEFAULT_WEEKLY_GOAL_WEEKDAY = 0

# Discrepancies within this band display as balanced
DEFAULT_LEDGER_TOLERANCE = 0.009

# Newest-first history, oldest dropped past this size
DEFAULT_LEDGER_HISTORY_MAX = 100

# Camp goal defaults (id -> document), mirrors the dashboard's starter goal set
DEFAULT_CAMP_GOALS = {
    "steps": {
        DATA_GOAL_NAME: "Steps",
        DATA_GOAL_METRIC: METRIC_STEPS,
        DATA_GOAL_UNIT: "steps",
        DATA_GOAL_TARGET_RULE: {
            DATA_GOAL_RULE_TYPE: GOAL_RULE_ESCALATING,
            DATA_GOAL_RULE_BASE: 10000,
            DATA_GOAL_RULE_TIER_FAMILY: TIER_FAMILY_STEPS,
        },
    },
    "books": {
        DATA_GOAL_NAME: "Reading",
        DATA_GOAL_METRIC: METRIC_PAGES,
        DATA_GOAL_UNIT: "pages",
        DATA_GOAL_TARGET_RULE: {
            DATA_GOAL_RULE_TYPE: GOAL_RULE_FIXED,
            DATA_GOAL_RULE_TARGET: 0,
        },
    },
    "videos": {
        DATA_GOAL_NAME: "Training Videos",
        DATA_GOAL_METRIC: METRIC_MINUTES,
        DATA_GOAL_UNIT: "minutes",
        DATA_GOAL_TARGET_RULE: {
            DATA_GOAL_RULE_TYPE: GOAL_RULE_ESCALATING,
            DATA_GOAL_RULE_BASE: 30,
            DATA_GOAL_RULE_TIER_FAMILY: TIER_FAMILY_TRAINING,
        },
    },
    "water": {
        DATA_GOAL_NAME: "Water",
        DATA_GOAL_METRIC: METRIC_MILLILITERS,
        DATA_GOAL_UNIT: "ml",
        DATA_GOAL_TARGET_RULE: {
            DATA_GOAL_RULE_TYPE: GOAL_RULE_FIXED,
            DATA_GOAL_RULE_TARGET: 2000,
        },
    },
    "weight": {
        DATA_GOAL_NAME: "Weekly Weigh-In",
        DATA_GOAL_METRIC: METRIC_KILOGRAMS,
        DATA_GOAL_UNIT: "kg",
        DATA_GOAL_WEEKLY_ONLY: True,
        DATA_GOAL_TARGET_RULE: {
            DATA_GOAL_RULE_TYPE: GOAL_RULE_FIXED,
            DATA_GOAL_RULE_TARGET: 0,
        },
    },
}
