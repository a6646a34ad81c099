# File: utils/dt_utils.py
"""Date utilities for HabitCamp.

Pure Python date functions with no imports from the rest of the package.
Nothing here reads the system clock: "today" is always passed in by the
time source collaborator.

⚠️ UTILS PURITY: NO imports from `..const` or `..engines` allowed.
   Uses standard library datetime and dateutil.

Functions:
    - dt_parse_date: Parse date/datetime/string inputs to a calendar date
    - dt_to_date: Like dt_parse_date, but raises on bad input
    - dt_days_between: Signed whole days between two dates
    - dt_elapsed_days: 1-based campaign day counter
    - dt_iter_days: Iterate an inclusive date range
    - dt_month_bounds: First and last day of a month
    - dt_year_bounds: First and last day of a year
    - dt_window_bounds: Resolve a named activity window to a date range
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
import logging
from typing import TYPE_CHECKING

# Third-party date utilities
from dateutil.parser import isoparse
from dateutil.relativedelta import relativedelta

if TYPE_CHECKING:
    from collections.abc import Iterator

# Module-level logger (no const import)
_LOGGER = logging.getLogger(__name__)

# ==============================================================================
# Constants (local copies to avoid circular imports)
# These mirror const.py values but are defined locally for purity.
# ==============================================================================

WINDOW_TODAY = "today"
WINDOW_YESTERDAY = "yesterday"
WINDOW_LAST_7 = "last7"
WINDOW_LAST_30 = "last30"
WINDOW_THIS_YEAR = "this_year"
WINDOW_ALL = "all"


# ==============================================================================
# Parsing
# ==============================================================================


def dt_parse_date(value: str | date | datetime | None) -> date | None:
    """Safely parse an input into a calendar date.

    Accepts:
    - datetime.date / datetime.datetime (time of day is dropped)
    - "2025-04-07" (ISO date)
    - "2025-04-07T21:15:00Z" (ISO datetime, as stored by older clients)
    - "07/04/2025" / "2025/04/07" fallbacks

    Returns:
        datetime.date or None if parsing fails.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        return None

    text = value.strip()

    # Try ISO date first (most common)
    try:
        return date.fromisoformat(text)
    except ValueError:
        pass

    # ISO datetime strings, including "Z" and offsets
    try:
        return isoparse(text).date()
    except ValueError:
        pass

    for fmt in ("%d/%m/%Y", "%Y/%m/%d", "%d.%m.%Y"):
        try:
            return datetime.strptime(text, fmt).date()
        except ValueError:
            continue

    _LOGGER.debug("Could not parse date '%s'", value)
    return None


def dt_to_date(value: str | date | datetime | None) -> date:
    """Parse an input into a calendar date, raising ValueError on failure."""
    parsed = dt_parse_date(value)
    if parsed is None:
        raise ValueError(f"Invalid calendar date: {value!r}")
    return parsed


# ==============================================================================
# Day Arithmetic
# ==============================================================================


def dt_days_between(start: date, end: date) -> int:
    """Return whole days from start to end (negative if end is earlier)."""
    return (end - start).days


def dt_elapsed_days(start: date, today: date) -> int:
    """Return the 1-based day counter of a campaign.

    The start date itself is day 1, the next day is day 2. Dates before the
    start give values < 1.

    Examples:
        dt_elapsed_days(date(2026, 1, 1), date(2026, 1, 1)) → 1
        dt_elapsed_days(date(2026, 1, 1), date(2026, 1, 29)) → 29
        dt_elapsed_days(date(2026, 1, 2), date(2026, 1, 1)) → 0
    """
    return dt_days_between(start, today) + 1


def dt_iter_days(start: date, end: date) -> Iterator[date]:
    """Yield every date from start to end inclusive."""
    current = start
    while current <= end:
        yield current
        current += timedelta(days=1)


def dt_month_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last day of a calendar month."""
    first = date(year, month, 1)
    last = first + relativedelta(months=1) - timedelta(days=1)
    return first, last


def dt_year_bounds(year: int) -> tuple[date, date]:
    """Return January 1st and December 31st of a year."""
    return date(year, 1, 1), date(year, 12, 31)


# ==============================================================================
# Named Windows
# ==============================================================================


def dt_window_bounds(
    window: str,
    today: date,
    earliest: date | None = None,
) -> tuple[date, date]:
    """Resolve a named activity window to an inclusive (start, end) range.

    Windows:
        today      - today only
        yesterday  - the day before today
        last7      - today and the 6 days before it
        last30     - today and the 29 days before it
        this_year  - January 1st to December 31st of today's year
        all        - earliest known activity (or today) through today

    Raises:
        ValueError: Unknown window name
    """
    if window == WINDOW_TODAY:
        return today, today
    if window == WINDOW_YESTERDAY:
        yesterday = today - timedelta(days=1)
        return yesterday, yesterday
    if window == WINDOW_LAST_7:
        return today - timedelta(days=6), today
    if window == WINDOW_LAST_30:
        return today - timedelta(days=29), today
    if window == WINDOW_THIS_YEAR:
        return dt_year_bounds(today.year)
    if window == WINDOW_ALL:
        start = earliest if earliest is not None and earliest < today else today
        return start, today

    raise ValueError(f"Unknown activity window: {window}")
