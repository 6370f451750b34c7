"""Helpers shared by the CLI commands."""

import sys
from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import NoReturn

import pandas as pd
from rich.console import Console
from rich.markup import escape

from daybook.auth import is_unlocked
from daybook.book import LedgerManager, TaskManager
from daybook.config import Settings, load_settings
from daybook.dates import Window, month_label
from daybook.errors import DaybookError
from daybook.store.blobs import SqliteBlobStore

console = Console()

SHORT_ID_LENGTH = 8


def open_store() -> SqliteBlobStore:
    """Open the blob store at the default location."""
    return SqliteBlobStore()


def require_unlocked(store: SqliteBlobStore) -> None:
    """Exit unless the PIN gate has been passed."""
    try:
        unlocked = is_unlocked(store)
    except DaybookError as e:
        fail(str(e))

    if not unlocked:
        console.print("[red]Locked. Run 'daybook unlock PIN' first.[/red]", style="bold")
        sys.exit(1)


def fail(message: str) -> NoReturn:
    """Print an error and exit with status 1."""
    console.print(f"[red]Error: {escape(message)}[/red]", style="bold")
    sys.exit(1)


def settings_or_exit() -> Settings:
    try:
        return load_settings()
    except ValueError as e:
        fail(f"Invalid config: {e}")


def open_ledger() -> LedgerManager:
    """Open the unlocked, loaded ledger or exit."""
    store = open_store()
    require_unlocked(store)
    ledger = LedgerManager(store, week_start=settings_or_exit().week_start)
    try:
        ledger.load()
    except DaybookError as e:
        fail(str(e))
    return ledger


def open_tasks() -> TaskManager:
    """Open the unlocked, loaded task list or exit."""
    store = open_store()
    require_unlocked(store)
    tasks = TaskManager(store, week_start=settings_or_exit().week_start)
    try:
        tasks.load()
    except DaybookError as e:
        fail(str(e))
    return tasks


def parse_date_input(value: str | None) -> date:
    """Normalize a date typed on the command line.

    Args:
        value: Date text (YYYY-MM-DD, DD/MM/YYYY, ...). If None, today.

    Returns:
        Calendar date. Exits on unparseable input.
    """
    if value is None:
        return date.today()
    try:
        parsed = pd.to_datetime(value, dayfirst=True)
    except (ValueError, pd.errors.ParserError) as e:
        invalid_date(escape(str(e)))

    # blank input parses to NaT rather than raising
    if pd.isna(parsed):
        invalid_date(f"no date in '{escape(value)}'")
    return parsed.date()


def invalid_date(reason: str) -> NoReturn:
    console.print(f"[red]Invalid date format: {reason}[/red]")
    console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
    sys.exit(1)


def parse_window(value: str) -> Window:
    """Parse a --period option or exit."""
    try:
        return Window.parse(value)
    except ValueError:
        console.print(f"[red]Unknown period '{escape(value)}'[/red]")
        console.print("[dim]Use one of: all, today, week, month[/dim]")
        sys.exit(1)


def resolve_id(ids: Iterable[str], prefix: str) -> str | None:
    """Match a full id or a unique id prefix.

    Returns:
        The matching id, or None if nothing or more than one id matches.
    """
    ids = list(ids)
    if prefix in ids:
        return prefix
    matches = [entity_id for entity_id in ids if entity_id.startswith(prefix)]
    return matches[0] if len(matches) == 1 else None


def short_id(entity_id: str) -> str:
    return entity_id[:SHORT_ID_LENGTH]


def format_money(amount: Decimal, currency: str) -> str:
    """Format an amount with the currency prefix and thousands separators."""
    sign = "-" if amount < 0 else ""
    magnitude = abs(amount)
    if magnitude == magnitude.to_integral_value():
        return f"{sign}{currency}{int(magnitude):,}"
    return f"{sign}{currency}{magnitude:,.2f}"


def window_title(window: Window, today: date) -> str:
    """Heading for a window, e.g. "Today" or "January 2025"."""
    if window is Window.THIS_MONTH:
        return month_label(today)
    titles = {
        Window.ALL: "All Time",
        Window.TODAY: "Today",
        Window.THIS_WEEK: "This Week",
    }
    return titles[window]
