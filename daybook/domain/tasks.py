"""Pure functions for the task list.

Tasks are immutable; toggling and editing return updated copies and the
collection helpers return new lists. The overdue and due-today flags are
derived from a reference day on every call and never stored.
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum

from daybook.dates import normalize
from daybook.domain.models import EntityId, new_entity_id


@dataclass(frozen=True)
class Task:
    """Immutable task data."""

    id: EntityId
    text: str
    created_at: datetime
    due_date: date
    completed: bool = False


class TaskStatus(str, Enum):
    """Display status of a task relative to a reference day."""

    COMPLETED = "completed"
    OVERDUE = "overdue"
    DUE_TODAY = "due-today"
    PENDING = "pending"


def create_task(text: str, due_date: date, created_at: datetime) -> Task | None:
    """Build a new task from user input.

    Args:
        text: Entered text; surrounding whitespace is dropped.
        due_date: Day the task is due.
        created_at: Creation timestamp.

    Returns:
        New Task, or None if text is blank.
    """
    text = text.strip()
    if not text:
        return None
    return Task(id=new_entity_id(), text=text, created_at=created_at, due_date=due_date)


def add_task(tasks: Sequence[Task], task: Task) -> list[Task]:
    """Return tasks with the new one first (newest first)."""
    return [task, *tasks]


def toggle_task(tasks: Sequence[Task], task_id: str) -> list[Task]:
    """Flip the completed flag of the matching task, leaving the rest untouched."""
    return [replace(task, completed=not task.completed) if task.id == task_id else task for task in tasks]


def edit_task(tasks: Sequence[Task], task_id: str, text: str) -> list[Task]:
    """Replace the text of the matching task.

    Blank text leaves the collection unchanged.
    """
    text = text.strip()
    if not text:
        return list(tasks)
    return [replace(task, text=text) if task.id == task_id else task for task in tasks]


def delete_task(tasks: Sequence[Task], task_id: str) -> list[Task]:
    """Return the tasks without the one matching task_id, order kept."""
    return [task for task in tasks if task.id != task_id]


def find_task(tasks: Iterable[Task], task_id: str) -> Task | None:
    return next((task for task in tasks if task.id == task_id), None)


def task_date(task: Task) -> date:
    """Reference date of a task for windowing."""
    return task.due_date


def is_overdue(task: Task, today: date | datetime) -> bool:
    """True if the task is not completed and its due day has passed."""
    return not task.completed and normalize(task.due_date) < normalize(today)


def is_due_today(task: Task, today: date | datetime) -> bool:
    """True if the task is due on the reference day, completed or not."""
    return normalize(task.due_date) == normalize(today)


def classify(task: Task, today: date | datetime) -> TaskStatus:
    """Combine the completion and due flags into one display status.

    Args:
        task: Task to classify.
        today: Reference day.

    Returns:
        COMPLETED for finished tasks, otherwise OVERDUE, DUE_TODAY or PENDING.
    """
    if task.completed:
        return TaskStatus.COMPLETED
    if is_overdue(task, today):
        return TaskStatus.OVERDUE
    if is_due_today(task, today):
        return TaskStatus.DUE_TODAY
    return TaskStatus.PENDING


def task_counts(tasks: Iterable[Task]) -> tuple[int, int]:
    """Count tasks.

    Returns:
        Tuple of (completed, total).
    """
    done = 0
    total = 0
    for task in tasks:
        total += 1
        if task.completed:
            done += 1
    return done, total
