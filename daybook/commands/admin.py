"""Admin commands for init, unlock and lock."""

import sqlite3
import sys
from pathlib import Path

from rich.console import Console

from daybook.auth import WRONG_PIN_MESSAGE, lock, unlock
from daybook.commands.common import fail, open_store, settings_or_exit
from daybook.config import create_default_config, get_config_path
from daybook.errors import DaybookError
from daybook.store.schema import database_exists, get_db_path, init_database

console = Console()


def run_full_init(db_path: Path, config_path: Path) -> None:
    """Initialize new database and config."""
    console.print(f"[cyan]Initializing database at {db_path}...[/cyan]")
    init_database(db_path)
    console.print("[green]✓[/green] Database initialized")

    console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
    create_default_config(config_path)
    console.print("[green]✓[/green] Config file created (permissions: 600)")

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]Database: {db_path}[/dim]")
    console.print(f"[dim]Config: {config_path}[/dim]")


def init_command(force: bool = False) -> None:
    """Initialize daybook database and configuration."""
    db_path = get_db_path()
    config_path = get_config_path()

    db_exists = database_exists(db_path)
    config_exists = config_path.exists()

    try:
        # Guard: refuse to overwrite without force flag
        if not force and (db_exists or config_exists):
            console.print("[red]Initialization failed:[/red]", style="bold")
            if db_exists:
                console.print(f"  Database already exists: {db_path}")
            if config_exists:
                console.print(f"  Config already exists: {config_path}")
            console.print("\n[yellow]Use 'daybook init --force' to overwrite[/yellow]")
            sys.exit(1)

        if force and db_exists:
            db_path.unlink()

        run_full_init(db_path, config_path)

    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    except OSError as e:
        console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
        sys.exit(1)


def unlock_command(pin: str) -> None:
    """Pass the PIN gate."""
    settings = settings_or_exit()
    store = open_store()

    try:
        unlocked = unlock(store, pin, settings.pin)
    except DaybookError as e:
        fail(str(e))

    if not unlocked:
        console.print(f"[red]{WRONG_PIN_MESSAGE}[/red]", style="bold")
        sys.exit(1)

    console.print("[green]✓[/green] Unlocked")


def lock_command() -> None:
    """Close the PIN gate again."""
    store = open_store()

    try:
        lock(store)
    except DaybookError as e:
        fail(str(e))

    console.print("[green]✓[/green] Locked")
