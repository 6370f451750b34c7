"""Task list commands (add, toggle, edit, delete, list)."""

from datetime import datetime

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook.book import TaskManager, TaskView
from daybook.commands.common import (
    fail,
    open_tasks,
    parse_date_input,
    parse_window,
    resolve_id,
    short_id,
    window_title,
)
from daybook.domain.tasks import TaskStatus
from daybook.errors import DaybookError

console = Console()

STATUS_MARKERS = {
    TaskStatus.COMPLETED: "[green]✓[/green]",
    TaskStatus.OVERDUE: "[red]![/red]",
    TaskStatus.DUE_TODAY: "[yellow]●[/yellow]",
    TaskStatus.PENDING: "○",
}


def _resolve_or_exit(tasks: TaskManager, task_id: str) -> str:
    resolved = resolve_id((task.id for task in tasks.items), task_id)
    if resolved is None:
        fail(f"Task {task_id} not found")
    return resolved


def add_command(text: str, due: str | None = None) -> None:
    """Add a task.

    Args:
        text: Task text.
        due: Due date. If None, today.
    """
    due_date = parse_date_input(due)
    tasks = open_tasks()

    try:
        task = tasks.add(text, due_date)
    except DaybookError as e:
        fail(str(e))

    if task is None:
        console.print("[yellow]Nothing added: task text is empty[/yellow]")
        return

    console.print(f"[green]✓[/green] Task added ({short_id(task.id)}), due {task.due_date.isoformat()}")


def toggle_command(task_id: str) -> None:
    """Flip a task between done and not done."""
    tasks = open_tasks()
    resolved = _resolve_or_exit(tasks, task_id)

    try:
        task = tasks.toggle(resolved)
    except DaybookError as e:
        fail(str(e))

    if task is None:
        fail(f"Task {task_id} not found")
    state = "done" if task.completed else "not done"
    console.print(f"[green]✓[/green] {escape(task.text)} marked {state}")


def edit_command(task_id: str, text: str) -> None:
    """Replace a task's text."""
    tasks = open_tasks()
    resolved = _resolve_or_exit(tasks, task_id)

    if not text.strip():
        console.print("[yellow]Text is empty; task unchanged[/yellow]")
        return

    try:
        task = tasks.edit(resolved, text)
    except DaybookError as e:
        fail(str(e))

    if task is None:
        fail(f"Task {task_id} not found")
    console.print(f"[green]✓[/green] Task {short_id(task.id)} now reads: {escape(task.text)}")


def delete_command(task_id: str) -> None:
    """Delete a task."""
    tasks = open_tasks()
    resolved = _resolve_or_exit(tasks, task_id)

    try:
        tasks.delete(resolved)
    except DaybookError as e:
        fail(str(e))

    console.print(f"[green]✓[/green] Deleted task {short_id(resolved)}")


def render_task_row(table: Table, view: TaskView) -> None:
    task = view.task
    text = f"[dim strike]{escape(task.text)}[/dim strike]" if task.completed else escape(task.text)
    due = task.due_date.isoformat()
    if view.status is TaskStatus.OVERDUE:
        due = f"[red]{due} (overdue)[/red]"
    elif view.status is TaskStatus.DUE_TODAY:
        due = f"[yellow]{due} (today)[/yellow]"
    table.add_row(short_id(task.id), STATUS_MARKERS[view.status], text, due)


def list_command(period: str = "all") -> None:
    """List tasks due in a period."""
    window = parse_window(period)
    tasks = open_tasks()
    now = datetime.now()

    views = tasks.listing(window, now)
    done, total = tasks.progress()

    if not views:
        console.print("[yellow]No tasks found[/yellow]")
    else:
        table = Table(title=f"Tasks - {window_title(window, now.date())}")
        table.add_column("ID", style="dim")
        table.add_column("", justify="center")
        table.add_column("Task", style="white")
        table.add_column("Due", style="cyan")
        for view in views:
            render_task_row(table, view)
        console.print(table)

    console.print(f"[dim]{done}/{total} tasks done[/dim]")
