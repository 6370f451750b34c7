"""Conversion between entity collections and stored JSON text.

This is the only place where the stored format and the in-memory model
differ: dates are ISO-8601 text on disk and date/datetime values in memory.

Transaction record: {"id", "type", "amount", "description", "date"}
Task record: {"id", "text", "completed", "createdAt", "dueDate"}
"""

import json
from collections.abc import Callable, Iterable
from datetime import date, datetime
from decimal import Decimal
from typing import Any, TypeVar

from daybook.domain.ledger import Transaction, TransactionKind
from daybook.domain.models import Description, EntityId, Money
from daybook.domain.tasks import Task
from daybook.errors import CorruptStateError

TRANSACTIONS_KEY = "transactions"
TASKS_KEY = "todos"

T = TypeVar("T")


def _amount_to_json(amount: Decimal) -> int | float:
    if amount == amount.to_integral_value():
        return int(amount)
    return float(amount)


def _parse_day(value: Any) -> date:
    """Parse a stored calendar date.

    Accepts plain dates ("2024-01-01") and full timestamps
    ("2024-01-01T00:00:00.000Z"); the time part is dropped.
    """
    if not isinstance(value, str):
        raise ValueError(f"expected ISO-8601 text, got {value!r}")
    try:
        return date.fromisoformat(value)
    except ValueError:
        return datetime.fromisoformat(value).date()


def _parse_timestamp(value: Any) -> datetime:
    if not isinstance(value, str):
        raise ValueError(f"expected ISO-8601 text, got {value!r}")
    return datetime.fromisoformat(value)


def _require(record: dict[str, Any], field: str, kind: type) -> Any:
    value = record[field]
    # bool is an int subclass; never accept it where a number is expected
    if not isinstance(value, kind) or (kind is not bool and isinstance(value, bool)):
        raise ValueError(f"field '{field}' has unexpected value {value!r}")
    return value


def _decode_records(text: str, key: str, decode: Callable[[dict[str, Any]], T]) -> list[T]:
    try:
        records = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as e:
        raise CorruptStateError(key, f"invalid JSON ({e})") from e

    if not isinstance(records, list):
        raise CorruptStateError(key, "expected a list of records")

    entities: list[T] = []
    for index, record in enumerate(records):
        if not isinstance(record, dict):
            raise CorruptStateError(key, f"record {index} is not an object")
        try:
            entities.append(decode(record))
        except KeyError as e:
            raise CorruptStateError(key, f"record {index} is missing field {e}") from e
        except ValueError as e:
            raise CorruptStateError(key, f"record {index}: {e}") from e
    return entities


def transaction_to_record(txn: Transaction) -> dict[str, Any]:
    return {
        "id": txn.id,
        "type": txn.kind.value,
        "amount": _amount_to_json(txn.amount),
        "description": txn.description,
        "date": txn.occurred_on.isoformat(),
    }


def transaction_from_record(record: dict[str, Any]) -> Transaction:
    """Build a Transaction from a stored record.

    Raises:
        KeyError: If a field is missing.
        ValueError: If a field has the wrong type or an unparseable value.
    """
    amount = record["amount"]
    if isinstance(amount, bool) or not isinstance(amount, int | Decimal):
        raise ValueError(f"field 'amount' has unexpected value {amount!r}")
    if not Decimal(amount).is_finite():
        raise ValueError(f"field 'amount' is not finite: {amount!r}")

    return Transaction(
        id=EntityId(_require(record, "id", str)),
        kind=TransactionKind(record["type"]),
        amount=Money(Decimal(amount)),
        description=Description(_require(record, "description", str)),
        occurred_on=_parse_day(record["date"]),
    )


def task_to_record(task: Task) -> dict[str, Any]:
    return {
        "id": task.id,
        "text": task.text,
        "completed": task.completed,
        "createdAt": task.created_at.isoformat(),
        "dueDate": task.due_date.isoformat(),
    }


def task_from_record(record: dict[str, Any]) -> Task:
    """Build a Task from a stored record.

    Raises:
        KeyError: If a field is missing.
        ValueError: If a field has the wrong type or an unparseable value.
    """
    return Task(
        id=EntityId(_require(record, "id", str)),
        text=_require(record, "text", str),
        completed=_require(record, "completed", bool),
        created_at=_parse_timestamp(record["createdAt"]),
        due_date=_parse_day(record["dueDate"]),
    )


def encode_transactions(transactions: Iterable[Transaction]) -> str:
    """Serialize transactions to JSON text, order kept."""
    return json.dumps([transaction_to_record(txn) for txn in transactions], ensure_ascii=False)


def decode_transactions(text: str, key: str = TRANSACTIONS_KEY) -> list[Transaction]:
    """Deserialize transactions from JSON text.

    Args:
        text: Stored JSON text.
        key: Storage key, used in error messages.

    Returns:
        Transactions in stored order.

    Raises:
        CorruptStateError: If the text is not a valid transaction list.
    """
    return _decode_records(text, key, transaction_from_record)


def encode_tasks(tasks: Iterable[Task]) -> str:
    """Serialize tasks to JSON text, order kept."""
    return json.dumps([task_to_record(task) for task in tasks], ensure_ascii=False)


def decode_tasks(text: str, key: str = TASKS_KEY) -> list[Task]:
    """Deserialize tasks from JSON text.

    Raises:
        CorruptStateError: If the text is not a valid task list.
    """
    return _decode_records(text, key, task_from_record)
