"""Unit tests for ActivityLog - pure Python logic tests.

Test Categories:
- Same-day accumulation and the one-entry-per-(date, metric) invariant
- Rejected amounts (zero, negative, non-numeric) leave the log unchanged
- Explicit overwrite via set_amount
- Date extraction and inclusive window sums
- Document round-trip and duplicate merging on load
"""

from __future__ import annotations

from datetime import date

import pytest
import voluptuous as vol

from habitcamp import const
from habitcamp.engines.activity_engine import (
    ActivityEntry,
    ActivityLog,
    InvalidAmountError,
    validate_amount,
)
from habitcamp.engines.streak_engine import StreakEngine, StreakState

PAGES = const.METRIC_PAGES
MINUTES = const.METRIC_MINUTES


# =============================================================================
# Test: record
# =============================================================================


class TestRecord:
    """Tests for ActivityLog.record."""

    def test_same_day_merge(self, empty_log: ActivityLog) -> None:
        """Two contributions on one day produce one accumulated entry."""
        empty_log.record(date(2024, 3, 1), PAGES, 3)
        empty_log.record(date(2024, 3, 1), PAGES, 4)

        assert len(empty_log) == 1
        assert empty_log.entries() == [ActivityEntry(date(2024, 3, 1), PAGES, 7.0)]

    def test_different_metrics_same_day_are_separate(self, empty_log: ActivityLog) -> None:
        """The uniqueness key is (date, metric), not date alone."""
        empty_log.record(date(2024, 3, 1), PAGES, 10)
        empty_log.record(date(2024, 3, 1), MINUTES, 25)

        assert len(empty_log) == 2
        assert empty_log.amount_on(date(2024, 3, 1), PAGES) == 10
        assert empty_log.amount_on(date(2024, 3, 1), MINUTES) == 25

    def test_returns_true_on_change(self, empty_log: ActivityLog) -> None:
        """A valid amount reports that the log changed."""
        assert empty_log.record(date(2024, 3, 1), PAGES, 5) is True

    def test_accepts_iso_string_dates(self, empty_log: ActivityLog) -> None:
        """ISO date strings are accepted as the date argument."""
        empty_log.record("2024-03-01", PAGES, 5)

        assert empty_log.all_dates() == [date(2024, 3, 1)]

    def test_accepts_comma_decimal_strings(self, empty_log: ActivityLog) -> None:
        """Form input like "2,5" is parsed as 2.5."""
        empty_log.record(date(2024, 3, 1), MINUTES, "2,5")

        assert empty_log.amount_on(date(2024, 3, 1), MINUTES) == 2.5

    @pytest.mark.parametrize(
        "amount", [0, -1, -0.5, "abc", None, float("nan"), "sNaN", 0.001, "0,004"]
    )
    def test_invalid_amount_is_noop(self, reading_log: ActivityLog, amount: object) -> None:
        """Zero, negative and non-numeric amounts leave the log unchanged."""
        before = reading_log.to_dict()

        assert reading_log.record(date(2024, 1, 2), PAGES, amount) is False
        assert reading_log.to_dict() == before

    def test_invalid_amount_on_new_day_creates_no_entry(self, empty_log: ActivityLog) -> None:
        """A rejected amount never inserts an empty entry."""
        empty_log.record(date(2024, 3, 1), PAGES, 0)

        assert len(empty_log) == 0
        assert empty_log.all_dates() == []

    def test_sub_cent_amount_adds_no_streak_day(self, empty_log: ActivityLog) -> None:
        """An amount that rounds to 0 never becomes an activity day."""
        assert empty_log.record(date(2024, 1, 5), PAGES, 0.001) is False

        assert empty_log.entries() == []
        assert StreakEngine.compute(empty_log.all_dates(PAGES), date(2024, 1, 5)) == (
            StreakState()
        )

    def test_stored_amount_is_rounded(self, empty_log: ActivityLog) -> None:
        """Amounts are stored at two decimals."""
        empty_log.record(date(2024, 1, 5), MINUTES, 1.006)

        assert empty_log.amount_on(date(2024, 1, 5), MINUTES) == 1.01


# =============================================================================
# Test: set_amount
# =============================================================================


class TestSetAmount:
    """Tests for the explicit overwrite operation."""

    def test_overwrites_existing_total(self, reading_log: ActivityLog) -> None:
        """set_amount replaces rather than adds."""
        reading_log.set_amount(date(2024, 1, 1), PAGES, 5)

        assert reading_log.amount_on(date(2024, 1, 1), PAGES) == 5

    def test_zero_removes_entry(self, reading_log: ActivityLog) -> None:
        """Setting a day to 0 removes it from the date set."""
        reading_log.set_amount(date(2024, 1, 5), PAGES, 0)

        assert date(2024, 1, 5) not in reading_log.all_dates()

    def test_sub_cent_removes_entry(self, reading_log: ActivityLog) -> None:
        """A value that rounds to 0 removes the day like 0 does."""
        reading_log.set_amount(date(2024, 1, 5), PAGES, 0.004)

        assert date(2024, 1, 5) not in reading_log.all_dates()
        assert len(reading_log) == 2

    def test_negative_rejected(self, reading_log: ActivityLog) -> None:
        """Negative values are rejected without touching the log."""
        before = reading_log.to_dict()

        assert reading_log.set_amount(date(2024, 1, 1), PAGES, -3) is False
        assert reading_log.to_dict() == before


# =============================================================================
# Test: queries
# =============================================================================


class TestQueries:
    """Tests for all_dates, sum, and friends."""

    def test_all_dates_sorted_and_distinct(self, empty_log: ActivityLog) -> None:
        """Dates come back ascending with no duplicates."""
        empty_log.record(date(2024, 1, 5), PAGES, 1)
        empty_log.record(date(2024, 1, 1), PAGES, 1)
        empty_log.record(date(2024, 1, 1), MINUTES, 1)

        assert empty_log.all_dates() == [date(2024, 1, 1), date(2024, 1, 5)]

    def test_all_dates_metric_filter(self, empty_log: ActivityLog) -> None:
        """Filtering by metric drops days that only carry other metrics."""
        empty_log.record(date(2024, 1, 1), PAGES, 1)
        empty_log.record(date(2024, 1, 2), MINUTES, 1)

        assert empty_log.all_dates(PAGES) == [date(2024, 1, 1)]
        assert empty_log.all_dates(MINUTES) == [date(2024, 1, 2)]

    def test_sum_is_inclusive(self, reading_log: ActivityLog) -> None:
        """Both window ends are included."""
        assert reading_log.sum(PAGES, date(2024, 1, 1), date(2024, 1, 2)) == 35
        assert reading_log.sum(PAGES, date(2024, 1, 2), date(2024, 1, 5)) == 45

    def test_sum_outside_window_is_zero(self, reading_log: ActivityLog) -> None:
        """A window with no entries sums to 0."""
        assert reading_log.sum(PAGES, date(2024, 2, 1), date(2024, 2, 28)) == 0

    def test_sum_ignores_other_metrics(self, reading_log: ActivityLog) -> None:
        """Only the requested metric is summed."""
        reading_log.record(date(2024, 1, 1), MINUTES, 90)

        assert reading_log.sum(PAGES, date(2024, 1, 1), date(2024, 1, 1)) == 20

    def test_float_accumulation_is_rounded(self, empty_log: ActivityLog) -> None:
        """Float drift does not leak into totals."""
        empty_log.record(date(2024, 1, 1), MINUTES, 0.1)
        empty_log.record(date(2024, 1, 1), MINUTES, 0.2)

        assert empty_log.amount_on(date(2024, 1, 1), MINUTES) == 0.3

    def test_first_date_and_metrics(self, reading_log: ActivityLog) -> None:
        """first_date and metrics summarize the log."""
        assert reading_log.first_date() == date(2024, 1, 1)
        assert reading_log.metrics() == [PAGES]
        assert ActivityLog().first_date() is None


# =============================================================================
# Test: serialization
# =============================================================================


class TestSerialization:
    """Tests for to_dict / from_dict."""

    def test_document_shape(self, reading_log: ActivityLog) -> None:
        """Dates are ISO strings and entries are date ordered."""
        data = reading_log.to_dict()

        assert data[const.DATA_SCHEMA_VERSION] == const.SCHEMA_VERSION
        assert data[const.DATA_ACTIVITY_ITEM_ID] == "book-1"
        assert [row[const.DATA_ACTIVITY_DATE] for row in data[const.DATA_ACTIVITY_ENTRIES]] == [
            "2024-01-01",
            "2024-01-02",
            "2024-01-05",
        ]

    def test_round_trip(self, reading_log: ActivityLog) -> None:
        """Loading a saved document reproduces the same log."""
        assert ActivityLog.from_dict(reading_log.to_dict()) == reading_log

    def test_duplicate_rows_merge_on_load(self) -> None:
        """Hand-edited duplicates are folded together by accumulation."""
        log = ActivityLog.from_dict(
            {
                "schema_version": 1,
                "entries": [
                    {"date": "2024-01-01", "metric": PAGES, "amount": 3},
                    {"date": "2024-01-01", "metric": PAGES, "amount": 4},
                ],
            }
        )

        assert len(log) == 1
        assert log.amount_on(date(2024, 1, 1), PAGES) == 7

    def test_datetime_strings_load_as_days(self) -> None:
        """Older documents stored full timestamps; only the day is kept."""
        log = ActivityLog.from_dict(
            {"entries": [{"date": "2024-01-01T21:15:00Z", "metric": PAGES, "amount": 3}]}
        )

        assert log.all_dates() == [date(2024, 1, 1)]

    def test_sub_cent_rows_skipped_on_load(self) -> None:
        """Rows that round to 0 do not create activity days."""
        log = ActivityLog.from_dict(
            {
                "entries": [
                    {"date": "2024-01-04", "metric": PAGES, "amount": 0.001},
                    {"date": "2024-01-05", "metric": PAGES, "amount": 3},
                ]
            }
        )

        assert log.all_dates(PAGES) == [date(2024, 1, 5)]

    def test_constructor_skips_empty_entries(self) -> None:
        """Zero-amount entries passed directly are ignored."""
        log = ActivityLog(entries=[ActivityEntry(date(2024, 1, 5), PAGES, 0.0)])

        assert len(log) == 0

    @pytest.mark.parametrize(
        "entry",
        [
            {"date": "not-a-date", "metric": PAGES, "amount": 1},
            {"date": "2024-01-01", "metric": "", "amount": 1},
            {"date": "2024-01-01", "metric": PAGES, "amount": -1},
            {"date": "2024-01-01", "metric": PAGES, "amount": 0},
            {"metric": PAGES, "amount": 1},
        ],
    )
    def test_malformed_documents_rejected(self, entry: dict) -> None:
        """Invalid rows raise before any log is built."""
        with pytest.raises(vol.Invalid):
            ActivityLog.from_dict({"entries": [entry]})


# =============================================================================
# Test: validate_amount
# =============================================================================


class TestValidateAmount:
    """Tests for the boundary validation helper."""

    def test_valid_amount(self) -> None:
        """Positive numbers and numeric strings pass through as floats."""
        assert validate_amount(12) == 12.0
        assert validate_amount("7,5") == 7.5

    @pytest.mark.parametrize("value", [0, -3, "x", None, "sNaN", 0.001])
    def test_invalid_amount_raises(self, value: object) -> None:
        """Non-positive or non-numeric input raises InvalidAmountError."""
        with pytest.raises(InvalidAmountError) as exc_info:
            validate_amount(value)
        assert exc_info.value.amount == value

    def test_error_is_value_error(self) -> None:
        """InvalidAmountError can be caught as ValueError."""
        assert issubclass(InvalidAmountError, ValueError)
