"""Pure functions for the income/expense ledger.

This module contains the functional core for ledger operations:
- No I/O operations (no database, no console, no files)
- No side effects; collections are returned as new lists
- Pure data transformations
- Easy to test

All monetary amounts are Decimal (Money type).
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from datetime import date
from decimal import Decimal, InvalidOperation
from enum import Enum

from daybook.domain.models import Description, EntityId, Money, new_entity_id

ZERO = Money(Decimal(0))

# Fractional amounts must survive a JSON float exactly
MAX_DECIMAL_PLACES = 2
MAX_SIGNIFICANT_DIGITS = 15


class TransactionKind(str, Enum):
    """Direction of a transaction. Values match the stored record format."""

    INCOME = "pemasukan"
    EXPENSE = "pengeluaran"


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger transaction."""

    id: EntityId
    kind: TransactionKind
    amount: Money
    description: Description
    occurred_on: date

    @property
    def signed_amount(self) -> Money:
        """Amount with expenses negated."""
        if self.kind is TransactionKind.EXPENSE:
            return Money(-self.amount)
        return self.amount


@dataclass(frozen=True)
class LedgerSummary:
    """Immutable totals over a set of transactions."""

    total_income: Money
    total_expense: Money
    balance: Money


@dataclass(frozen=True)
class BalancePoint:
    """Cumulative balance after the transaction at a 1-based position."""

    position: int
    balance: Money

    @property
    def label(self) -> str:
        return f"Day {self.position}"


def parse_amount(raw: str | int | float | Decimal) -> Money | None:
    """Parse a user-entered amount.

    Args:
        raw: Amount as typed or as a number.

    Returns:
        Positive Money, or None if raw is empty, not a number, not positive,
        or a fraction with more than two decimal places or more than fifteen
        significant digits.
    """
    try:
        value = Decimal(str(raw).strip())
    except InvalidOperation:
        return None

    if not value.is_finite() or value <= 0:
        return None

    if value != value.to_integral_value():
        digits = value.as_tuple().digits
        exponent = value.as_tuple().exponent
        # trailing zeros such as "12.50" do not count
        while exponent < 0 and digits and digits[-1] == 0:
            digits = digits[:-1]
            exponent += 1
        if -exponent > MAX_DECIMAL_PLACES or len(digits) > MAX_SIGNIFICANT_DIGITS:
            return None
    return Money(value)


def create_transaction(
    kind: TransactionKind,
    amount: str | int | float | Decimal,
    description: str,
    occurred_on: date,
) -> Transaction | None:
    """Build a new transaction from user input.

    Args:
        kind: Income or expense.
        amount: Entered amount.
        description: Entered description; surrounding whitespace is dropped.
        occurred_on: Day the transaction happened.

    Returns:
        New Transaction, or None if the amount or description is rejected.
    """
    parsed = parse_amount(amount)
    text = description.strip()
    if parsed is None or not text:
        return None

    return Transaction(
        id=new_entity_id(),
        kind=kind,
        amount=parsed,
        description=Description(text),
        occurred_on=occurred_on,
    )


def add_transaction(transactions: Sequence[Transaction], txn: Transaction) -> list[Transaction]:
    """Return transactions with txn appended."""
    return [*transactions, txn]


def delete_transaction(transactions: Sequence[Transaction], txn_id: str) -> list[Transaction]:
    """Return the transactions without the one matching txn_id, order kept."""
    return [txn for txn in transactions if txn.id != txn_id]


def transaction_date(txn: Transaction) -> date:
    """Reference date of a transaction for windowing."""
    return txn.occurred_on


def summarize(transactions: Iterable[Transaction]) -> LedgerSummary:
    """Calculate income, expense and balance totals.

    Args:
        transactions: Transactions to total, usually already windowed.

    Returns:
        LedgerSummary where balance == total_income - total_expense.
    """
    income = ZERO
    expense = ZERO
    for txn in transactions:
        if txn.kind is TransactionKind.INCOME:
            income = Money(income + txn.amount)
        else:
            expense = Money(expense + txn.amount)

    return LedgerSummary(
        total_income=income,
        total_expense=expense,
        balance=Money(income - expense),
    )


def running_balance_series(transactions: Iterable[Transaction]) -> list[BalancePoint]:
    """Calculate the cumulative balance in date order.

    Transactions are sorted by occurred_on with a stable sort, so
    transactions on the same day accumulate in the order they were entered.
    Points are labeled by position, not by date.

    Args:
        transactions: Transactions to accumulate, usually already windowed.

    Returns:
        One BalancePoint per transaction; empty for no transactions.
    """
    series: list[BalancePoint] = []
    balance = ZERO
    for position, txn in enumerate(sorted(transactions, key=transaction_date), start=1):
        balance = Money(balance + txn.signed_amount)
        series.append(BalancePoint(position=position, balance=balance))
    return series
