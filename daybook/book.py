"""Ledger and task managers.

Each manager owns one in-memory collection, writes the whole collection
through to the blob store on every mutation and recomputes windowing and
aggregation from scratch on every query.

If a write fails the collection stays at its last saved state and the
PersistenceFailure propagates. If stored data cannot be decoded on load the
collection stays at its last good state and the CorruptStateError propagates.
"""

from abc import ABC, abstractmethod
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Generic, TypeVar

import structlog

from daybook.dates import Window, WeekStart, filter_by_window
from daybook.domain.ledger import (
    BalancePoint,
    LedgerSummary,
    Transaction,
    TransactionKind,
    add_transaction,
    create_transaction,
    delete_transaction,
    running_balance_series,
    summarize,
    transaction_date,
)
from daybook.domain.tasks import (
    Task,
    TaskStatus,
    add_task,
    classify,
    create_task,
    delete_task,
    edit_task,
    find_task,
    is_due_today,
    is_overdue,
    task_counts,
    task_date,
    toggle_task,
)
from daybook.errors import CorruptStateError
from daybook.store.blobs import BlobStore
from daybook.store.codec import (
    TASKS_KEY,
    TRANSACTIONS_KEY,
    decode_tasks,
    decode_transactions,
    encode_tasks,
    encode_transactions,
)

logger = structlog.get_logger(__name__)

T = TypeVar("T")

Clock = Callable[[], datetime]


@dataclass(frozen=True)
class LedgerReport:
    """Everything the presentation needs for one window of the ledger."""

    window: Window
    transactions: list[Transaction]
    summary: LedgerSummary
    series: list[BalancePoint]


@dataclass(frozen=True)
class TaskView:
    """A task with its display flags for a reference day."""

    task: Task
    status: TaskStatus
    overdue: bool
    due_today: bool


class _Collection(ABC, Generic[T]):
    """Write-through collection of entities stored under one key."""

    key: str

    def __init__(
        self,
        store: BlobStore,
        clock: Clock = datetime.now,
        week_start: WeekStart = WeekStart.SUNDAY,
        key: str | None = None,
    ) -> None:
        self.store = store
        self.clock = clock
        self.week_start = week_start
        if key is not None:
            self.key = key
        self.window = Window.ALL
        self._items: list[T] = []

    @abstractmethod
    def _encode(self, items: Sequence[T]) -> str:
        """Serialize the collection for the store."""

    @abstractmethod
    def _decode(self, text: str) -> list[T]:
        """Parse stored text back into entities."""

    @abstractmethod
    def _date_of(self, item: T) -> date:
        """Reference date used for windowing."""

    @property
    def items(self) -> tuple[T, ...]:
        """All entities in stored order."""
        return tuple(self._items)

    def load(self) -> list[T]:
        """Replace the in-memory collection with the stored one.

        Returns:
            The loaded entities; empty if nothing is stored.

        Raises:
            CorruptStateError: If the stored text cannot be decoded.
            PersistenceFailure: If the store cannot be read.
        """
        text = self.store.get_item(self.key)
        if text is None:
            self._items = []
            return []

        try:
            items = self._decode(text)
        except CorruptStateError as e:
            logger.warning("collection_corrupt", key=self.key, reason=e.reason)
            raise

        self._items = items
        logger.debug("collection_loaded", key=self.key, count=len(items))
        return list(items)

    def _commit(self, items: list[T]) -> None:
        self.store.set_item(self.key, self._encode(items))
        self._items = items
        logger.debug("collection_saved", key=self.key, count=len(items))

    def select_window(self, window: Window) -> None:
        """Choose the window used by queries that are not given one."""
        self.window = window

    def filtered(self, window: Window | None = None, now: datetime | None = None) -> list[T]:
        """Entities inside the window, in stored order.

        Args:
            window: Window to apply. If None, uses the selected window.
            now: Reference time. If None, reads the clock.
        """
        return filter_by_window(
            self._items,
            self._date_of,
            window if window is not None else self.window,
            now if now is not None else self.clock(),
            self.week_start,
        )


class LedgerManager(_Collection[Transaction]):
    """Income and expense transactions."""

    key = TRANSACTIONS_KEY

    def _encode(self, items: Sequence[Transaction]) -> str:
        return encode_transactions(items)

    def _decode(self, text: str) -> list[Transaction]:
        return decode_transactions(text, self.key)

    def _date_of(self, item: Transaction) -> date:
        return transaction_date(item)

    def add(
        self,
        kind: TransactionKind,
        amount: str | int | float | Decimal,
        description: str,
        occurred_on: date,
    ) -> Transaction | None:
        """Record a transaction.

        Returns:
            The stored Transaction, or None if the input was rejected.

        Raises:
            PersistenceFailure: If the collection could not be saved.
        """
        txn = create_transaction(kind, amount, description, occurred_on)
        if txn is None:
            logger.info("transaction_rejected", kind=kind.value, amount=str(amount))
            return None

        self._commit(add_transaction(self._items, txn))
        logger.info("transaction_added", id=txn.id, kind=kind.value)
        return txn

    def delete(self, txn_id: str) -> bool:
        """Delete a transaction by id.

        Returns:
            True if a transaction was removed, False if the id is unknown.
        """
        remaining = delete_transaction(self._items, txn_id)
        if len(remaining) == len(self._items):
            return False

        self._commit(remaining)
        logger.info("transaction_deleted", id=txn_id)
        return True

    def summary(self, window: Window | None = None, now: datetime | None = None) -> LedgerSummary:
        """Income, expense and balance totals for a window."""
        return summarize(self.filtered(window, now))

    def balance_series(self, window: Window | None = None, now: datetime | None = None) -> list[BalancePoint]:
        """Running balance over a window in date order."""
        return running_balance_series(self.filtered(window, now))

    def report(self, window: Window | None = None, now: datetime | None = None) -> LedgerReport:
        """Filter once and compute all ledger views for a window."""
        window = window if window is not None else self.window
        transactions = self.filtered(window, now)
        return LedgerReport(
            window=window,
            transactions=transactions,
            summary=summarize(transactions),
            series=running_balance_series(transactions),
        )


class TaskManager(_Collection[Task]):
    """Tasks, newest first."""

    key = TASKS_KEY

    def _encode(self, items: Sequence[Task]) -> str:
        return encode_tasks(items)

    def _decode(self, text: str) -> list[Task]:
        return decode_tasks(text, self.key)

    def _date_of(self, item: Task) -> date:
        return task_date(item)

    def add(self, text: str, due_date: date) -> Task | None:
        """Create a task at the top of the list.

        Returns:
            The stored Task, or None if text was blank.

        Raises:
            PersistenceFailure: If the collection could not be saved.
        """
        task = create_task(text, due_date, self.clock())
        if task is None:
            logger.info("task_rejected")
            return None

        self._commit(add_task(self._items, task))
        logger.info("task_added", id=task.id, due=due_date.isoformat())
        return task

    def toggle(self, task_id: str) -> Task | None:
        """Flip a task's completion.

        Returns:
            The updated Task, or None if the id is unknown.
        """
        if find_task(self._items, task_id) is None:
            return None

        updated = toggle_task(self._items, task_id)
        self._commit(updated)
        task = find_task(updated, task_id)
        logger.info("task_toggled", id=task_id, completed=task.completed if task else None)
        return task

    def edit(self, task_id: str, text: str) -> Task | None:
        """Replace a task's text. Blank text is ignored.

        Returns:
            The task after the edit, or None if the id is unknown.
        """
        current = find_task(self._items, task_id)
        if current is None:
            return None
        if not text.strip():
            logger.info("task_edit_ignored", id=task_id)
            return current

        updated = edit_task(self._items, task_id, text)
        self._commit(updated)
        logger.info("task_edited", id=task_id)
        return find_task(updated, task_id)

    def delete(self, task_id: str) -> bool:
        """Delete a task by id.

        Returns:
            True if a task was removed, False if the id is unknown.
        """
        remaining = delete_task(self._items, task_id)
        if len(remaining) == len(self._items):
            return False

        self._commit(remaining)
        logger.info("task_deleted", id=task_id)
        return True

    def listing(self, window: Window | None = None, now: datetime | None = None) -> list[TaskView]:
        """Windowed tasks with overdue and due-today flags.

        The flags are computed against the same reference time as the window.
        """
        now = now if now is not None else self.clock()
        return [
            TaskView(
                task=task,
                status=classify(task, now),
                overdue=is_overdue(task, now),
                due_today=is_due_today(task, now),
            )
            for task in self.filtered(window, now)
        ]

    def progress(self) -> tuple[int, int]:
        """Completed and total task counts over the whole list."""
        return task_counts(self._items)
