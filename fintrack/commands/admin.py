"""Admin commands for init, import and export."""

import sqlite3
import sys
from datetime import date
from pathlib import Path

from rich.markup import escape

from fintrack.commands.common import console, load_config_or_exit, open_session
from fintrack.config import create_default_config, get_config_path, resolve_db_path
from fintrack.domain.validation import ImportCheck
from fintrack.store.schema import get_db_path, init_database


def init_command(force: bool = False) -> None:
    """Initialize the fintrack database and configuration."""
    config_path = get_config_path()
    config_exists = config_path.exists()

    if config_exists and not force:
        console.print(f"[yellow]Config already exists: {config_path}[/yellow]")
        console.print("[dim]Use 'fintrack init --force' to overwrite it[/dim]")
    else:
        try:
            create_default_config(config_path)
        except OSError as e:
            console.print(f"[red]Filesystem error: {e}[/red]", style="bold")
            sys.exit(1)
        console.print(f"[green]✓[/green] Config file created at {config_path} (permissions: 600)")

    config = load_config_or_exit()
    db_path = resolve_db_path(config) or get_db_path()

    try:
        init_database(db_path)
    except sqlite3.Error as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)
    console.print(f"[green]✓[/green] Database ready at {db_path}")

    with open_session(config) as store:
        count = len(store.records)

    console.print("\n[green]Initialization complete![/green]", style="bold")
    console.print(f"[dim]{count} records stored[/dim]")


def import_command(path: str, strict: bool = False) -> None:
    """Replace all records with the contents of a JSON file.

    Args:
        path: JSON file containing an array of records.
        strict: Also run full field validation on every record.
    """
    file_path = Path(path).expanduser()
    try:
        document = file_path.read_text(encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Could not read {file_path}: {e}[/red]", style="bold")
        sys.exit(1)

    check = ImportCheck.STRICT if strict else ImportCheck.STRUCTURAL

    with open_session() as store:
        outcome = store.import_json(document, check)

    if not outcome.ok:
        console.print(f"[red]Error importing JSON ({outcome.error.value}):[/red]", style="bold")
        for detail in (outcome.detail or "").split("; "):
            if detail:
                console.print(f"  • {escape(detail)}")
        sys.exit(1)

    console.print(f"[green]✓[/green] Imported {len(outcome.value)} records from {file_path}")


def default_export_name(today: date) -> str:
    return f"finance_records_{today.isoformat()}.json"


def export_command(output: str | None = None) -> None:
    """Export all records as pretty-printed JSON.

    Args:
        output: File or directory to write to. Prints to stdout if None.
    """
    with open_session() as store:
        document = store.export_json()

    if output is None:
        print(document)
        return

    target = Path(output).expanduser()
    if target.is_dir():
        target = target / default_export_name(date.today())

    try:
        target.write_text(document + "\n", encoding="utf-8")
    except OSError as e:
        console.print(f"[red]Export failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Records exported to: {target}")
