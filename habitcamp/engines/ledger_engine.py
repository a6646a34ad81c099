"""Ledger Engine - Cascading allowance/cash figures and adjustment history.

This engine provides stateless functions for:
- The fixed nine-step summary cascade over raw ledger inputs
- Per-account net figures
- Discrepancy status (shortfall / surplus / balanced)
- Applying +/- adjustments to raw figures with an audit-trail entry
- Newest-first history capping

ARCHITECTURE: Pure logic with no clock reads. Adjustment timestamps are
passed in by the caller. Inputs are immutable; adjustments return new
inputs.

Sign convention (callers branch display color on it):
    cash_discrepancy > 0  → shortfall (less cash on hand than expected)
    cash_discrepancy < 0  → surplus
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import TYPE_CHECKING, TypeVar

from .. import const
from ..schemas import LEDGER_INPUTS_SCHEMA
from ..utils.math_utils import round_amount

if TYPE_CHECKING:
    from datetime import datetime

    from ..type_defs import (
        LedgerHistoryEntry,
        LedgerInputsData,
        LedgerOutputsData,
        LineItemData,
        SubAccountData,
    )

_RowT = TypeVar("_RowT")


@dataclass(frozen=True)
class SubAccount:
    """A tracked sub-account (one child's allowance and debt)."""

    name: str
    allowance: float = 0.0
    debt: float = 0.0

    def to_dict(self) -> SubAccountData:
        """Return the persisted form of this account."""
        return {
            const.DATA_LEDGER_ACCOUNT_NAME: self.name,
            const.DATA_LEDGER_ACCOUNT_ALLOWANCE: self.allowance,
            const.DATA_LEDGER_ACCOUNT_DEBT: self.debt,
        }


@dataclass(frozen=True)
class LineItem:
    """A general receivable/payable row."""

    description: str
    amount: float = 0.0

    def to_dict(self) -> LineItemData:
        """Return the persisted form of this line item."""
        return {
            const.DATA_LEDGER_LINE_ITEM_DESCRIPTION: self.description,
            const.DATA_LEDGER_LINE_ITEM_AMOUNT: self.amount,
        }


@dataclass(frozen=True)
class LedgerInputs:
    """Raw ledger figures."""

    accounts: tuple[SubAccount, ...] = ()
    line_items: tuple[LineItem, ...] = ()
    cash: float = 0.0
    bank: float = 0.0

    def to_dict(self) -> LedgerInputsData:
        """Return the persisted form of these inputs."""
        return {
            const.DATA_LEDGER_ACCOUNTS: [account.to_dict() for account in self.accounts],
            const.DATA_LEDGER_LINE_ITEMS: [item.to_dict() for item in self.line_items],
            const.DATA_LEDGER_CASH: self.cash,
            const.DATA_LEDGER_BANK: self.bank,
        }

    @classmethod
    def from_dict(cls, data: LedgerInputsData) -> LedgerInputs:
        """Build inputs from a persisted document.

        Raises:
            voluptuous.Invalid: Malformed document
        """
        validated = LEDGER_INPUTS_SCHEMA(dict(data))
        return cls(
            accounts=tuple(
                SubAccount(
                    name=row[const.DATA_LEDGER_ACCOUNT_NAME],
                    allowance=row[const.DATA_LEDGER_ACCOUNT_ALLOWANCE],
                    debt=row[const.DATA_LEDGER_ACCOUNT_DEBT],
                )
                for row in validated[const.DATA_LEDGER_ACCOUNTS]
            ),
            line_items=tuple(
                LineItem(
                    description=row[const.DATA_LEDGER_LINE_ITEM_DESCRIPTION],
                    amount=row[const.DATA_LEDGER_LINE_ITEM_AMOUNT],
                )
                for row in validated[const.DATA_LEDGER_LINE_ITEMS]
            ),
            cash=validated[const.DATA_LEDGER_CASH],
            bank=validated[const.DATA_LEDGER_BANK],
        )


@dataclass(frozen=True)
class LedgerOutputs:
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

    def to_dict(self) -> LedgerOutputsData:
        """Return the persisted form of these outputs."""
        return {
            const.DATA_LEDGER_TOTAL_ALLOWANCE: self.total_allowance,
            const.DATA_LEDGER_TOTAL_DEBT: self.total_debt,
            const.DATA_LEDGER_TOTAL_RECEIVABLES: self.total_receivables,
            const.DATA_LEDGER_NET_ALLOWANCE: self.net_allowance,
            const.DATA_LEDGER_BANK_BALANCE: self.bank_balance,
            const.DATA_LEDGER_EXPECTED_CASH: self.expected_cash,
            const.DATA_LEDGER_CASH_ON_HAND: self.cash_on_hand,
            const.DATA_LEDGER_CASH_DISCREPANCY: self.cash_discrepancy,
            const.DATA_LEDGER_OFFICIAL_CASH_FIGURE: self.official_cash_figure,
        }


class LedgerEngine:
    """Pure logic engine for the allowance ledger.

    All methods are static - no instance state.
    """

    # Adjustable fields per target
    _ACCOUNT_FIELDS = (const.DATA_LEDGER_ACCOUNT_ALLOWANCE, const.DATA_LEDGER_ACCOUNT_DEBT)
    _LINE_ITEM_FIELDS = (const.DATA_LEDGER_LINE_ITEM_AMOUNT,)
    _OTHER_FIELDS = (const.DATA_LEDGER_CASH, const.DATA_LEDGER_BANK)

    @staticmethod
    def compute(inputs: LedgerInputs) -> LedgerOutputs:
        """Evaluate the summary cascade.

        Each step reads only raw inputs or earlier steps:

            1. total_allowance      = Σ account allowance
            2. total_debt           = Σ account debt
            3. total_receivables    = Σ line item amount
            4. net_allowance        = total_allowance - total_debt
            5. bank_balance         = bank
            6. expected_cash        = (net_allowance - total_receivables) - bank_balance
            7. cash_on_hand         = cash
            8. cash_discrepancy     = expected_cash - cash_on_hand
            9. official_cash_figure = total_allowance - bank_balance
        """
        total_allowance = round_amount(sum(a.allowance for a in inputs.accounts))
        total_debt = round_amount(sum(a.debt for a in inputs.accounts))
        total_receivables = round_amount(sum(i.amount for i in inputs.line_items))
        net_allowance = round_amount(total_allowance - total_debt)
        bank_balance = inputs.bank
        expected_cash = round_amount((net_allowance - total_receivables) - bank_balance)
        cash_on_hand = inputs.cash
        cash_discrepancy = round_amount(expected_cash - cash_on_hand)
        official_cash_figure = round_amount(total_allowance - bank_balance)

        return LedgerOutputs(
            total_allowance=total_allowance,
            total_debt=total_debt,
            total_receivables=total_receivables,
            net_allowance=net_allowance,
            bank_balance=bank_balance,
            expected_cash=expected_cash,
            cash_on_hand=cash_on_hand,
            cash_discrepancy=cash_discrepancy,
            official_cash_figure=official_cash_figure,
        )

    @staticmethod
    def account_net(account: SubAccount) -> float:
        """Return allowance minus debt for one account."""
        return round_amount(account.allowance - account.debt)

    @staticmethod
    def discrepancy_status(
        cash_discrepancy: float,
        tolerance: float = const.DEFAULT_LEDGER_TOLERANCE,
    ) -> str:
        """Classify a cash discrepancy.

        Returns:
            "shortfall" above +tolerance, "surplus" below -tolerance,
            otherwise "balanced"
        """
        if cash_discrepancy > tolerance:
            return const.DISCREPANCY_SHORTFALL
        if cash_discrepancy < -tolerance:
            return const.DISCREPANCY_SURPLUS
        return const.DISCREPANCY_BALANCED

    @staticmethod
    def apply_adjustment(
        inputs: LedgerInputs,
        target: str,
        field: str,
        delta: float,
        timestamp: datetime,
        index: int = 0,
    ) -> tuple[LedgerInputs, LedgerHistoryEntry]:
        """Add delta to one raw figure and describe the change.

        Args:
            inputs: Current raw figures
            target: "account", "line_item" or "other"
            field: allowance/debt (account), amount (line_item),
                   cash/bank (other)
            delta: Signed change; subtract by passing a negative delta
            timestamp: When the change was made (from the time source)
            index: Row index for account and line_item targets

        Returns:
            (new inputs, history entry)

        Raises:
            ValueError: Unknown target/field or row index out of range
        """
        if target not in const.LEDGER_TARGETS:
            raise ValueError(f"Unknown ledger adjustment target: {target}")

        if target == const.LEDGER_TARGET_ACCOUNT:
            LedgerEngine._check_field(target, field, LedgerEngine._ACCOUNT_FIELDS)
            account = LedgerEngine._row(inputs.accounts, index, target)
            new_value = round_amount(getattr(account, field) + delta)
            accounts = list(inputs.accounts)
            accounts[index] = replace(account, **{field: new_value})
            new_inputs = replace(inputs, accounts=tuple(accounts))
            label = f"{account.name} - {field}"
        elif target == const.LEDGER_TARGET_LINE_ITEM:
            LedgerEngine._check_field(target, field, LedgerEngine._LINE_ITEM_FIELDS)
            item = LedgerEngine._row(inputs.line_items, index, target)
            items = list(inputs.line_items)
            items[index] = replace(item, amount=round_amount(item.amount + delta))
            new_inputs = replace(inputs, line_items=tuple(items))
            label = f"'{item.description}' {field}"
        else:
            LedgerEngine._check_field(target, field, LedgerEngine._OTHER_FIELDS)
            new_value = round_amount(getattr(inputs, field) + delta)
            new_inputs = replace(inputs, **{field: new_value})
            label = field

        sign = "+" if delta >= 0 else ""
        entry: LedgerHistoryEntry = {
            const.DATA_LEDGER_HISTORY_TIMESTAMP: timestamp.isoformat(),
            const.DATA_LEDGER_HISTORY_DESCRIPTION: (
                f"{label} changed: {sign}{round_amount(delta):.2f}"
            ),
        }
        const.LOGGER.debug("Ledger adjustment: %s", entry[const.DATA_LEDGER_HISTORY_DESCRIPTION])
        return new_inputs, entry

    @staticmethod
    def append_history(
        history: list[LedgerHistoryEntry],
        entry: LedgerHistoryEntry,
        max_entries: int = const.DEFAULT_LEDGER_HISTORY_MAX,
    ) -> list[LedgerHistoryEntry]:
        """Insert entry at the front of history and drop the oldest overflow.

        Modifies the list in place and returns it for convenience.
        Newest entries are at the START of the list.
        """
        history.insert(0, entry)
        if len(history) > max_entries:
            del history[max_entries:]
        return history

    @staticmethod
    def _check_field(target: str, field: str, allowed: tuple[str, ...]) -> None:
        """Raise ValueError if field is not adjustable for target."""
        if field not in allowed:
            raise ValueError(f"Field '{field}' cannot be adjusted on {target}")

    @staticmethod
    def _row(rows: tuple[_RowT, ...], index: int, target: str) -> _RowT:
        """Return rows[index], raising ValueError when out of range."""
        if not 0 <= index < len(rows):
            raise ValueError(f"No {target} at index {index}")
        return rows[index]
