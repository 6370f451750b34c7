"""Ledger commands (add, delete, list, report)."""

from datetime import datetime
from decimal import Decimal

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from daybook.book import LedgerReport
from daybook.commands.common import (
    fail,
    format_money,
    open_ledger,
    parse_date_input,
    parse_window,
    resolve_id,
    settings_or_exit,
    short_id,
    window_title,
)
from daybook.domain.ledger import BalancePoint, Transaction, TransactionKind
from daybook.errors import DaybookError

console = Console()

BAR_WIDTH = 30


def calculate_bar_length(value: Decimal, max_value: Decimal, bar_width: int) -> int:
    """Calculate histogram bar length.

    Args:
        value: Value to display.
        max_value: Largest absolute value in the dataset.
        bar_width: Maximum bar width in characters.

    Returns:
        Bar length in characters.
    """
    if max_value <= 0:
        return 0
    return int((abs(value) / max_value) * bar_width)


def format_signed(txn: Transaction, currency: str) -> str:
    """Colored amount, + for income and - for expenses."""
    amount = format_money(txn.amount, currency)
    if txn.kind is TransactionKind.EXPENSE:
        return f"[red]-{amount}[/red]"
    return f"[green]+{amount}[/green]"


def add_command(
    amount: str,
    description: str,
    expense: bool = False,
    date: str | None = None,
) -> None:
    """Record a transaction.

    Args:
        amount: Amount as typed.
        description: Transaction description.
        expense: Record an expense instead of income.
        date: Day of the transaction. If None, today.
    """
    occurred_on = parse_date_input(date)
    kind = TransactionKind.EXPENSE if expense else TransactionKind.INCOME
    ledger = open_ledger()
    currency = settings_or_exit().currency

    try:
        txn = ledger.add(kind, amount, description, occurred_on)
    except DaybookError as e:
        fail(str(e))

    if txn is None:
        console.print(
            "[yellow]Nothing recorded: amount must be a positive number with at most two decimals"
            " and description non-empty[/yellow]"
        )
        return

    console.print("[green]✓[/green] Transaction added:")
    console.print(f"  ID: {short_id(txn.id)}")
    console.print(f"  Date: {txn.occurred_on.isoformat()}")
    console.print(f"  Description: {escape(txn.description)}")
    console.print(f"  Amount: {format_signed(txn, currency)}")


def delete_command(transaction_id: str) -> None:
    """Delete a transaction by id or unique id prefix."""
    ledger = open_ledger()

    txn_id = resolve_id((txn.id for txn in ledger.items), transaction_id)
    if txn_id is None:
        fail(f"Transaction {transaction_id} not found")

    try:
        ledger.delete(txn_id)
    except DaybookError as e:
        fail(str(e))

    console.print(f"[green]✓[/green] Deleted transaction {short_id(txn_id)}")


def render_transactions(report: LedgerReport, title: str, currency: str) -> None:
    """Render the windowed transactions as a table."""
    table = Table(title=title)
    table.add_column("ID", style="dim")
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")

    for txn in report.transactions:
        table.add_row(
            short_id(txn.id),
            txn.occurred_on.isoformat(),
            escape(txn.description),
            format_signed(txn, currency),
        )

    console.print(table)


def render_summary(report: LedgerReport, currency: str) -> None:
    summary = report.summary
    balance_style = "blue" if summary.balance >= 0 else "red"
    console.print(f"  [green]Income:[/green]  {format_money(summary.total_income, currency)}")
    console.print(f"  [red]Expense:[/red] {format_money(summary.total_expense, currency)}")
    console.print(f"  [{balance_style}]Balance: {format_money(summary.balance, currency)}[/{balance_style}]")


def render_series(series: list[BalancePoint], currency: str) -> None:
    """Render the running balance as a histogram, one line per position."""
    max_value = max(abs(point.balance) for point in series)
    for point in series:
        bar = "█" * calculate_bar_length(point.balance, max_value, BAR_WIDTH)
        style = "green" if point.balance >= 0 else "red"
        console.print(f"  {point.label:>8} {format_money(point.balance, currency):>16} [{style}]{bar}[/{style}]")


def list_command(period: str = "all") -> None:
    """List transactions in a period."""
    window = parse_window(period)
    ledger = open_ledger()
    currency = settings_or_exit().currency
    now = datetime.now()

    report = ledger.report(window, now)
    if not report.transactions:
        console.print("[yellow]No transactions found[/yellow]")
        return

    title = f"Transactions - {window_title(window, now.date())} ({len(report.transactions)})"
    render_transactions(report, title, currency)


def report_command(period: str = "all") -> None:
    """Show totals and the running balance for a period."""
    window = parse_window(period)
    ledger = open_ledger()
    currency = settings_or_exit().currency
    now = datetime.now()

    report = ledger.report(window, now)

    console.print(f"\n[bold cyan]Ledger: {window_title(window, now.date())}[/bold cyan]\n")
    render_summary(report, currency)

    if report.series:
        console.print("\n[bold]Running balance[/bold]")
        render_series(report.series, currency)
    else:
        console.print("\n[dim]No transactions in this period[/dim]")
