"""Voluptuous schemas for HabitCamp documents and settings.

Every document that crosses the persistence boundary is validated here
before an engine builds value objects from it. Validation failures raise
``vol.Invalid`` / ``vol.MultipleInvalid`` and nothing is constructed.
"""

from __future__ import annotations

from typing import Any, cast

import voluptuous as vol

from . import const
from .type_defs import SettingsData
from .utils.dt_utils import dt_parse_date

# ------------------------------------------------------------------------------------------------
# Field validators
# ------------------------------------------------------------------------------------------------


def calendar_date(value: Any) -> str:
    """Validate a calendar date and normalize it to an ISO date string."""
    parsed = dt_parse_date(value)
    if parsed is None:
        raise vol.Invalid(f"invalid calendar date: {value!r}")
    return parsed.isoformat()


def optional_calendar_date(value: Any) -> str | None:
    """Like calendar_date, but None passes through."""
    if value is None:
        return None
    return calendar_date(value)


def _streak_order(value: dict[str, Any]) -> dict[str, Any]:
    """Reject streak documents where longest < current."""
    if value[const.DATA_STREAK_LONGEST] < value[const.DATA_STREAK_CURRENT]:
        raise vol.Invalid("longest streak cannot be shorter than the current streak")
    return value


NON_EMPTY_STRING = vol.All(str, vol.Length(min=1))
NON_NEGATIVE_NUMBER = vol.All(vol.Coerce(float), vol.Range(min=0))
POSITIVE_NUMBER = vol.All(vol.Coerce(float), vol.Range(min=0, min_included=False))
NON_NEGATIVE_INT = vol.All(vol.Coerce(int), vol.Range(min=0))
SIGNED_NUMBER = vol.Coerce(float)

# ------------------------------------------------------------------------------------------------
# Activity log
# ------------------------------------------------------------------------------------------------

ACTIVITY_ENTRY_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_ACTIVITY_DATE): calendar_date,
        vol.Required(const.DATA_ACTIVITY_METRIC): NON_EMPTY_STRING,
        vol.Required(const.DATA_ACTIVITY_AMOUNT): POSITIVE_NUMBER,
    },
    extra=vol.REMOVE_EXTRA,
)

ACTIVITY_LOG_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_SCHEMA_VERSION, default=const.SCHEMA_VERSION): int,
        vol.Optional(const.DATA_ACTIVITY_ITEM_ID, default=None): vol.Any(None, str),
        vol.Optional(const.DATA_ACTIVITY_ENTRIES, default=list): [ACTIVITY_ENTRY_SCHEMA],
    },
    extra=vol.REMOVE_EXTRA,
)

# ------------------------------------------------------------------------------------------------
# Streak state
# ------------------------------------------------------------------------------------------------

STREAK_STATE_SCHEMA = vol.All(
    vol.Schema(
        {
            vol.Optional(const.DATA_STREAK_CURRENT, default=0): NON_NEGATIVE_INT,
            vol.Optional(const.DATA_STREAK_LONGEST, default=0): NON_NEGATIVE_INT,
            vol.Optional(
                const.DATA_STREAK_LAST_ACTIVITY_DATE, default=None
            ): optional_calendar_date,
        },
        extra=vol.REMOVE_EXTRA,
    ),
    _streak_order,
)

# ------------------------------------------------------------------------------------------------
# Goals
# ------------------------------------------------------------------------------------------------

FIXED_TARGET_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_GOAL_RULE_TYPE): const.GOAL_RULE_FIXED,
        vol.Required(const.DATA_GOAL_RULE_TARGET): NON_NEGATIVE_NUMBER,
    }
)

ESCALATING_TARGET_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_GOAL_RULE_TYPE): const.GOAL_RULE_ESCALATING,
        vol.Required(const.DATA_GOAL_RULE_BASE): NON_NEGATIVE_NUMBER,
        vol.Required(const.DATA_GOAL_RULE_TIER_FAMILY): vol.In(list(const.TIER_TABLES)),
    }
)

TARGET_RULE_SCHEMA = vol.Any(FIXED_TARGET_SCHEMA, ESCALATING_TARGET_SCHEMA)

GOAL_DEFINITION_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_GOAL_ID): NON_EMPTY_STRING,
        vol.Required(const.DATA_GOAL_METRIC): NON_EMPTY_STRING,
        vol.Required(const.DATA_GOAL_TARGET_RULE): TARGET_RULE_SCHEMA,
        vol.Optional(const.DATA_GOAL_NAME, default=""): str,
        vol.Optional(const.DATA_GOAL_UNIT, default=""): str,
        vol.Optional(const.DATA_GOAL_WEEKLY_ONLY, default=False): bool,
    },
    extra=vol.REMOVE_EXTRA,
)

# ------------------------------------------------------------------------------------------------
# Ledger
# ------------------------------------------------------------------------------------------------

SUB_ACCOUNT_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_LEDGER_ACCOUNT_NAME): NON_EMPTY_STRING,
        vol.Optional(const.DATA_LEDGER_ACCOUNT_ALLOWANCE, default=0.0): SIGNED_NUMBER,
        vol.Optional(const.DATA_LEDGER_ACCOUNT_DEBT, default=0.0): SIGNED_NUMBER,
    },
    extra=vol.REMOVE_EXTRA,
)

LINE_ITEM_SCHEMA = vol.Schema(
    {
        vol.Required(const.DATA_LEDGER_LINE_ITEM_DESCRIPTION): str,
        vol.Optional(const.DATA_LEDGER_LINE_ITEM_AMOUNT, default=0.0): SIGNED_NUMBER,
    },
    extra=vol.REMOVE_EXTRA,
)

LEDGER_INPUTS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.DATA_LEDGER_ACCOUNTS, default=list): [SUB_ACCOUNT_SCHEMA],
        vol.Optional(const.DATA_LEDGER_LINE_ITEMS, default=list): [LINE_ITEM_SCHEMA],
        vol.Optional(const.DATA_LEDGER_CASH, default=0.0): SIGNED_NUMBER,
        vol.Optional(const.DATA_LEDGER_BANK, default=0.0): SIGNED_NUMBER,
    },
    extra=vol.REMOVE_EXTRA,
)

# ------------------------------------------------------------------------------------------------
# Settings
# ------------------------------------------------------------------------------------------------

READING_GOALS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_GOAL_BOOKS, default=const.DEFAULT_GOAL_BOOKS): NON_NEGATIVE_INT,
        vol.Optional(const.CONF_GOAL_PAGES, default=const.DEFAULT_GOAL_PAGES): NON_NEGATIVE_INT,
        vol.Optional(
            const.CONF_GOAL_MINUTES, default=const.DEFAULT_GOAL_MINUTES
        ): NON_NEGATIVE_INT,
    },
    extra=vol.REMOVE_EXTRA,
)

SETTINGS_SCHEMA = vol.Schema(
    {
        vol.Optional(const.CONF_READING_GOALS, default=dict): READING_GOALS_SCHEMA,
        vol.Optional(const.CONF_CAMPAIGN_START, default=None): optional_calendar_date,
        vol.Optional(
            const.CONF_WEEKLY_GOAL_WEEKDAY, default=const.DEFAULT_WEEKLY_GOAL_WEEKDAY
        ): vol.All(vol.Coerce(int), vol.Range(min=0, max=6)),
        vol.Optional(
            const.CONF_LEDGER_TOLERANCE, default=const.DEFAULT_LEDGER_TOLERANCE
        ): NON_NEGATIVE_NUMBER,
        vol.Optional(
            const.CONF_LEDGER_HISTORY_MAX, default=const.DEFAULT_LEDGER_HISTORY_MAX
        ): vol.All(vol.Coerce(int), vol.Range(min=1)),
    },
    extra=vol.REMOVE_EXTRA,
)


def build_settings(raw: dict[str, Any] | None = None) -> SettingsData:
    """Validate a settings document, filling in defaults.

    Raises:
        vol.Invalid: A present value is out of range or of the wrong type
    """
    return cast("SettingsData", SETTINGS_SCHEMA(dict(raw or {})))
