"""Shared fixtures for HabitCamp tests."""

from datetime import date

import pytest

from habitcamp import const
from habitcamp.engines.activity_engine import ActivityLog
from habitcamp.engines.goal_engine import EscalatingTarget, FixedTarget, GoalDefinition
from habitcamp.engines.ledger_engine import LedgerInputs, LineItem, SubAccount
from habitcamp.engines.schedule_engine import TierFamily


@pytest.fixture
def empty_log() -> ActivityLog:
    """Return an empty activity log."""
    return ActivityLog(item_id="book-1")


@pytest.fixture
def reading_log() -> ActivityLog:
    """Return a log with a two-day run and a lone later day."""
    log = ActivityLog(item_id="book-1")
    log.record(date(2024, 1, 1), const.METRIC_PAGES, 20)
    log.record(date(2024, 1, 2), const.METRIC_PAGES, 15)
    log.record(date(2024, 1, 5), const.METRIC_PAGES, 30)
    return log


@pytest.fixture
def steps_goal() -> GoalDefinition:
    """Return the escalating steps camp goal."""
    return GoalDefinition(
        id="steps",
        metric=const.METRIC_STEPS,
        target_rule=EscalatingTarget(base=10000, tier_family=TierFamily.STEPS),
        name="Steps",
        unit="steps",
    )


@pytest.fixture
def water_goal() -> GoalDefinition:
    """Return a fixed daily water goal."""
    return GoalDefinition(
        id="water",
        metric=const.METRIC_MILLILITERS,
        target_rule=FixedTarget(target=2000),
        name="Water",
        unit="ml",
    )


@pytest.fixture
def sample_ledger() -> LedgerInputs:
    """Return the two-account ledger used across ledger tests."""
    return LedgerInputs(
        accounts=(
            SubAccount(name="Ada", allowance=50, debt=10),
            SubAccount(name="Ben", allowance=30, debt=0),
        ),
        line_items=(LineItem(description="School trip", amount=20),),
        cash=15,
        bank=40,
    )
