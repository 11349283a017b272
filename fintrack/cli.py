"""CLI entry point for fintrack."""

import datetime
import locale

import typer

from fintrack.commands.admin import export_command, import_command, init_command
from fintrack.commands.common import load_config_or_exit
from fintrack.commands.records import add_command, delete_command, edit_command, list_command
from fintrack.commands.settings import settings_command, stats_command
from fintrack.domain.models import ALL_CATEGORIES
from fintrack.logging_setup import configure_logging, get_logger

logger = get_logger(__name__)

app = typer.Typer(
    name="fintrack",
    help="fintrack - track your personal finance records locally",
    add_completion=False,
)


@app.callback()
def main(
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show debug logging"),
) -> None:
    """fintrack - track your personal finance records locally."""
    level = "DEBUG" if verbose else load_config_or_exit().get("log_level")
    configure_logging(level)
    try:
        locale.setlocale(locale.LC_COLLATE, "")
    except locale.Error as e:
        logger.debug("Could not set collation locale: %s", e)


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Initialize fintrack database and configuration."""
    init_command(force)


@app.command()
def add(
    description: str,
    amount: float,
    category: str,
    date: str = typer.Option(None, "--date", "-d", help="Record date (default: today)"),
) -> None:
    """Add a record."""
    add_command(description, amount, category, date or datetime.date.today().isoformat())


@app.command()
def edit(
    record_id: str,
    description: str = typer.Option(None, "--description", help="New description"),
    amount: float = typer.Option(None, "--amount", help="New amount"),
    category: str = typer.Option(None, "--category", help="New category"),
    date: str = typer.Option(None, "--date", "-d", help="New date"),
) -> None:
    """Edit fields of an existing record."""
    edit_command(record_id, description, amount, category, date)


@app.command()
def delete(
    record_id: str,
    yes: bool = typer.Option(False, "--yes", "-y", help="Skip confirmation"),
) -> None:
    """Delete a record."""
    delete_command(record_id, yes)


@app.command(name="list")
def list_records(
    search: str = typer.Option("", "--search", "-s", help="Case-insensitive regex to search for"),
    sort: str = typer.Option(None, "--sort", help="date-desc, date-asc, amount-desc, amount-asc, description-asc, ..."),
    category: str = typer.Option(ALL_CATEGORIES, "--category", "-c", help="Only show this category"),
    limit: int = typer.Option(50, help="Maximum records to show"),
    all: bool = typer.Option(False, "--all", "-a", help="Show all matching records"),
) -> None:
    """List your records."""
    list_command(search, sort, category, limit, all)


@app.command()
def stats() -> None:
    """Show totals, top category, recent spending and cap status."""
    stats_command()


@app.command()
def settings(
    base_currency: str = typer.Option(None, "--currency", help="Base currency code"),
    rate1: float = typer.Option(None, "--rate1", help="Currency conversion rate 1"),
    rate2: float = typer.Option(None, "--rate2", help="Currency conversion rate 2"),
    cap: float = typer.Option(None, "--cap", help="Spending cap (0 for none)"),
) -> None:
    """Show or update your settings."""
    settings_command(base_currency, rate1, rate2, cap)


@app.command(name="import")
def import_records(
    path: str,
    strict: bool = typer.Option(False, "--strict", help="Also validate every field of every record"),
) -> None:
    """Replace all records with a JSON file."""
    import_command(path, strict)


@app.command(name="export")
def export_records(
    output: str = typer.Option(None, "--output", "-o", help="File or directory (default: stdout)"),
) -> None:
    """Export all records as JSON."""
    export_command(output)


if __name__ == "__main__":
    app()
