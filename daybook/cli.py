"""CLI entry point for daybook."""

import typer

from daybook.commands import money, todo
from daybook.commands.admin import init_command, lock_command, unlock_command
from daybook.log import configure_logging

PERIOD_HELP = "Period: all, today, week or month"

app = typer.Typer(
    name="daybook",
    help="daybook - tasks and money, behind a PIN",
    add_completion=False,
)
money_app = typer.Typer(help="Track income and expenses.", add_completion=False)
todo_app = typer.Typer(help="Track tasks and due dates.", add_completion=False)
app.add_typer(money_app, name="money")
app.add_typer(todo_app, name="todo")


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """daybook - tasks and money, behind a PIN."""
    configure_logging(verbose)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing database and config"),
) -> None:
    """Initialize daybook database and configuration."""
    init_command(force)


@app.command()
def unlock(pin: str) -> None:
    """Unlock daybook with your PIN."""
    unlock_command(pin)


@app.command()
def lock() -> None:
    """Lock daybook again."""
    lock_command()


@money_app.command(name="add")
def money_add(
    amount: str,
    description: str,
    expense: bool = typer.Option(False, "--expense", "-e", help="Record an expense (default: income)"),
    date: str = typer.Option(None, "--date", "-d", help="Transaction date (default: today)"),
) -> None:
    """Record an income or expense."""
    money.add_command(amount, description, expense, date)


@money_app.command(name="delete")
def money_delete(transaction_id: str) -> None:
    """Delete a transaction by ID."""
    money.delete_command(transaction_id)


@money_app.command(name="list")
def money_list(
    period: str = typer.Option("all", "--period", "-p", help=PERIOD_HELP),
) -> None:
    """List your transactions."""
    money.list_command(period)


@money_app.command(name="report")
def money_report(
    period: str = typer.Option("all", "--period", "-p", help=PERIOD_HELP),
) -> None:
    """Show totals and your running balance."""
    money.report_command(period)


@todo_app.command(name="add")
def todo_add(
    text: str,
    due: str = typer.Option(None, "--due", "-d", help="Due date (default: today)"),
) -> None:
    """Add a task."""
    todo.add_command(text, due)


@todo_app.command(name="toggle")
def todo_toggle(task_id: str) -> None:
    """Mark a task done, or not done again."""
    todo.toggle_command(task_id)


@todo_app.command(name="edit")
def todo_edit(task_id: str, text: str) -> None:
    """Change a task's text."""
    todo.edit_command(task_id, text)


@todo_app.command(name="delete")
def todo_delete(task_id: str) -> None:
    """Delete a task."""
    todo.delete_command(task_id)


@todo_app.command(name="list")
def todo_list(
    period: str = typer.Option("all", "--period", "-p", help=PERIOD_HELP),
) -> None:
    """List your tasks."""
    todo.list_command(period)


if __name__ == "__main__":
    app()
