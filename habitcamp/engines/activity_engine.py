"""Activity Engine - Append/merge-safe log of dated activity entries.

This engine provides the leaf data structure every other calculation reads:
- One entry per (date, metric) pair, same-day contributions accumulate
- Date-ordered iteration and distinct-date extraction for streaks
- Inclusive window sums for progress aggregation
- Document round-trip (to_dict / from_dict)

ARCHITECTURE: Pure logic, no I/O and no clock reads. The caller owns the log,
serializes calls to record(), and persists to_dict() output.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Any

from .. import const
from ..schemas import ACTIVITY_LOG_SCHEMA
from ..utils.dt_utils import dt_to_date
from ..utils.math_utils import parse_amount, round_amount

if TYPE_CHECKING:
    from collections.abc import Iterator

    from ..type_defs import ActivityEntryData, ActivityLogData


class InvalidAmountError(ValueError):
    """Raised when an activity amount is not a positive number.

    Attributes:
        amount: The rejected raw value
    """

    def __init__(self, amount: Any) -> None:
        """Initialize InvalidAmountError.

        Args:
            amount: The rejected raw value
        """
        self.amount = amount
        super().__init__(f"Activity amount must be a positive number, got {amount!r}")


def validate_amount(value: Any) -> float:
    """Parse and check an amount at the input boundary.

    Use this before record() to reject bad form input with a message;
    record() itself treats the same input as a silent no-op.

    Raises:
        InvalidAmountError: value is not a number, or rounds to <= 0
    """
    amount = parse_amount(value)
    if amount is None or round_amount(amount) <= 0:
        raise InvalidAmountError(value)
    return round_amount(amount)


@dataclass(frozen=True)
class ActivityEntry:
    """A single (date, metric) total."""

    date: date
    metric: str
    amount: float

    def to_dict(self) -> ActivityEntryData:
        """Return the persisted form of this entry."""
        return {
            const.DATA_ACTIVITY_DATE: self.date.isoformat(),
            const.DATA_ACTIVITY_METRIC: self.metric,
            const.DATA_ACTIVITY_AMOUNT: self.amount,
        }

    @classmethod
    def from_dict(cls, data: ActivityEntryData) -> ActivityEntry:
        """Build an entry from its persisted form."""
        return cls(
            date=dt_to_date(data[const.DATA_ACTIVITY_DATE]),
            metric=data[const.DATA_ACTIVITY_METRIC],
            amount=float(data[const.DATA_ACTIVITY_AMOUNT]),
        )


class ActivityLog:
    """Date-ordered activity entries for one tracked item.

    Invariant: at most one entry per (date, metric). A second contribution on
    the same day adds to the existing entry (see record()); replacing a day's
    value must be asked for explicitly with set_amount().

    Example:
        log = ActivityLog(item_id="book-1")
        log.record(date(2026, 1, 5), "pages", 12)
        log.record(date(2026, 1, 5), "pages", 8)
        log.amount_on(date(2026, 1, 5), "pages")  # 20.0
    """

    def __init__(
        self,
        item_id: str | None = None,
        entries: list[ActivityEntry] | None = None,
    ) -> None:
        """Initialize the log, merging any duplicate (date, metric) entries.

        Entries whose amount rounds to 0 are skipped so they never count
        as an activity day.
        """
        self.item_id = item_id
        self._entries: dict[tuple[date, str], float] = {}
        for entry in entries or []:
            amount = round_amount(entry.amount)
            if amount <= 0:
                const.LOGGER.debug(
                    "Skipping empty %s entry on %s", entry.metric, entry.date
                )
                continue
            key = (entry.date, entry.metric)
            self._entries[key] = round_amount(self._entries.get(key, 0.0) + amount)

    # ────────────────────────────────────────────────────────────────
    # Mutation
    # ────────────────────────────────────────────────────────────────

    def record(self, day: date | str, metric: str, amount: Any) -> bool:
        """Add amount to the (day, metric) entry, creating it if needed.

        Args:
            day: Calendar date of the activity
            metric: Metric kind (pages, minutes, steps, ...)
            amount: Positive amount to add

        Returns:
            True if the log changed, False if amount was rejected.
            A rejected amount leaves the log exactly as it was.
        """
        value = parse_amount(amount)
        if value is None or round_amount(value) <= 0:
            const.LOGGER.warning(
                "Ignoring invalid activity amount %r for %s on %s", amount, metric, day
            )
            return False

        value = round_amount(value)
        key = (dt_to_date(day), metric)
        self._entries[key] = round_amount(self._entries.get(key, 0.0) + value)
        const.LOGGER.debug(
            "Recorded %s %s on %s (day total %s)",
            value,
            metric,
            key[0],
            self._entries[key],
        )
        return True

    def set_amount(self, day: date | str, metric: str, amount: Any) -> bool:
        """Replace the (day, metric) total outright.

        An amount that rounds to 0 removes the day's entry. Negative or
        non-numeric amounts are rejected and leave the log unchanged.

        Returns:
            True if the log changed, False if amount was rejected.
        """
        value = parse_amount(amount)
        if value is None or value < 0:
            const.LOGGER.warning(
                "Ignoring invalid activity amount %r for %s on %s", amount, metric, day
            )
            return False

        value = round_amount(value)
        key = (dt_to_date(day), metric)
        if value == 0:
            self._entries.pop(key, None)
        else:
            self._entries[key] = value
        return True

    # ────────────────────────────────────────────────────────────────
    # Queries
    # ────────────────────────────────────────────────────────────────

    def entries(self, metric: str | None = None) -> list[ActivityEntry]:
        """Return entries sorted by date (then metric), optionally filtered."""
        return [
            ActivityEntry(day, entry_metric, amount)
            for (day, entry_metric), amount in sorted(self._entries.items())
            if metric is None or entry_metric == metric
        ]

    def all_dates(self, metric: str | None = None) -> list[date]:
        """Return the sorted distinct dates that carry an entry."""
        return sorted(
            {
                day
                for day, entry_metric in self._entries
                if metric is None or entry_metric == metric
            }
        )

    def sum(self, metric: str, start: date, end: date) -> float:
        """Return the total amount for metric with start <= date <= end."""
        total = 0.0
        for (day, entry_metric), amount in self._entries.items():
            if entry_metric == metric and start <= day <= end:
                total += amount
        return round_amount(total)

    def amount_on(self, day: date | str, metric: str) -> float:
        """Return the day's total for metric, or 0.0."""
        return self._entries.get((dt_to_date(day), metric), 0.0)

    def metrics(self) -> list[str]:
        """Return the sorted metric kinds present in the log."""
        return sorted({metric for _, metric in self._entries})

    def first_date(self) -> date | None:
        """Return the earliest date in the log, or None when empty."""
        return min((day for day, _ in self._entries), default=None)

    def __len__(self) -> int:
        """Return the number of (date, metric) entries."""
        return len(self._entries)

    def __iter__(self) -> Iterator[ActivityEntry]:
        """Iterate entries in date order."""
        return iter(self.entries())

    def __eq__(self, other: object) -> bool:
        """Logs are equal when item and entries match."""
        if not isinstance(other, ActivityLog):
            return NotImplemented
        return self.item_id == other.item_id and self._entries == other._entries

    def __repr__(self) -> str:
        """Return a short debug representation."""
        return f"ActivityLog(item_id={self.item_id!r}, entries={len(self._entries)})"

    # ────────────────────────────────────────────────────────────────
    # Serialization
    # ────────────────────────────────────────────────────────────────

    def to_dict(self) -> ActivityLogData:
        """Return the persisted document for this log."""
        return {
            const.DATA_SCHEMA_VERSION: const.SCHEMA_VERSION,
            const.DATA_ACTIVITY_ITEM_ID: self.item_id,
            const.DATA_ACTIVITY_ENTRIES: [entry.to_dict() for entry in self.entries()],
        }

    @classmethod
    def from_dict(cls, data: ActivityLogData) -> ActivityLog:
        """Build a log from a persisted document.

        The document is validated first; duplicate (date, metric) rows are
        merged by accumulation.

        Raises:
            voluptuous.Invalid: Malformed document
        """
        validated = ACTIVITY_LOG_SCHEMA(dict(data))
        return cls(
            item_id=validated.get(const.DATA_ACTIVITY_ITEM_ID),
            entries=[
                ActivityEntry.from_dict(row)
                for row in validated[const.DATA_ACTIVITY_ENTRIES]
            ],
        )
