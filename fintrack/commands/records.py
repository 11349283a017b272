"""Record management commands (add, edit, delete, list)."""

import sys
from typing import Any

import pandas as pd
import typer
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from fintrack.commands.common import console, format_amount, load_config_or_exit, open_session
from fintrack.domain.models import ALL_CATEGORIES
from fintrack.domain.query import SORT_KEYS, Query, QueryResult, run_query
from fintrack.domain.records import make_record
from fintrack.domain.validation import ValidationResult, validate_date, validate_record

HIGHLIGHT_STYLE = "bold black on yellow"


def normalize_date(raw_date: str) -> str:
    """Normalize a typed date to YYYY-MM-DD.

    Dates already in YYYY-MM-DD form are kept as typed. Anything else is
    parsed with pandas.to_datetime (day first), which handles DD/MM/YYYY,
    "15 Jan 2025" and similar.

    Raises:
        ValueError: If the date cannot be parsed.
    """
    raw_date = raw_date.strip()
    if validate_date(raw_date):
        return raw_date
    try:
        return pd.to_datetime(raw_date, dayfirst=True).strftime("%Y-%m-%d")
    except (ValueError, pd.errors.ParserError) as e:
        raise ValueError(f"Could not parse date '{raw_date}': {e}") from e


def _normalize_date_or_exit(raw_date: str) -> str:
    try:
        return normalize_date(raw_date)
    except ValueError as e:
        console.print(f"[red]Invalid date format: {e}[/red]")
        console.print("[dim]Accepted formats: YYYY-MM-DD, DD/MM/YYYY, DD-MM-YYYY, etc.[/dim]")
        sys.exit(1)


def print_validation_errors(result: ValidationResult) -> None:
    console.print("[red]Validation errors:[/red]", style="bold")
    for error in result.errors:
        console.print(f"  • {error}")


def add_command(description: str, amount: float, category: str, date: str) -> None:
    """Validate and add a new record.

    Args:
        description: Record description.
        amount: Amount (non-negative, at most 2 decimals).
        category: Category name.
        date: Date in YYYY-MM-DD or another common format.
    """
    normalized_date = _normalize_date_or_exit(date)
    record = make_record(description, amount, category, normalized_date)

    result = validate_record(record)
    if not result.is_valid:
        print_validation_errors(result)
        sys.exit(1)

    with open_session() as store:
        store.add_record(record)
        currency = store.settings["baseCurrency"]

    console.print("[green]✓[/green] Record added:")
    console.print(f"  ID: {record['id']}")
    console.print(f"  Date: {record['date']}")
    console.print(f"  Description: {escape(record['description'])}")
    console.print(f"  Amount: {format_amount(record['amount'], currency)}")
    console.print(f"  Category: {escape(record['category'])}")


def edit_command(
    record_id: str,
    description: str | None = None,
    amount: float | None = None,
    category: str | None = None,
    date: str | None = None,
) -> None:
    """Validate and apply changes to an existing record."""
    fields: dict[str, Any] = {}
    if description is not None:
        fields["description"] = description.strip()
    if amount is not None:
        fields["amount"] = amount
    if category is not None:
        fields["category"] = category
    if date is not None:
        fields["date"] = _normalize_date_or_exit(date)

    if not fields:
        console.print("[yellow]Nothing to change[/yellow]")
        return

    with open_session() as store:
        existing = store.get_record(record_id)
        if existing is None:
            console.print(f"[red]Record {escape(record_id)} not found[/red]")
            sys.exit(1)

        result = validate_record({**existing, **fields})
        if not result.is_valid:
            print_validation_errors(result)
            sys.exit(1)

        store.update_record(record_id, fields)

    console.print(f"[green]✓[/green] Record {record_id} updated")
    for name, value in fields.items():
        console.print(f"  {name}: {escape(str(value))}")


def delete_command(record_id: str, yes: bool = False) -> None:
    """Delete a record after confirmation."""
    with open_session() as store:
        existing = store.get_record(record_id)
        if existing is None:
            console.print(f"[yellow]Record {record_id} not found[/yellow]")
            return

        if not yes and not typer.confirm(f"Delete '{existing['description']}'?", default=False):
            console.print("[dim]Cancelled[/dim]")
            return

        store.delete_record(record_id)

    console.print(f"[green]✓[/green] Record {record_id} deleted")


def _highlighted_cell(result: QueryResult, name: str) -> Text:
    text = Text(str(result.record.get(name, "")))
    for start, end in result.spans.get(name, []):
        text.stylize(HIGHLIGHT_STYLE, start, end)
    return text


def list_command(
    search: str = "",
    sort_by: str | None = None,
    category: str = ALL_CATEGORIES,
    limit: int = 50,
    all: bool = False,
) -> None:
    """List records, filtered, sorted and with search matches highlighted."""
    config = load_config_or_exit()
    sort_by = sort_by or config["default_sort"]
    if sort_by not in SORT_KEYS:
        console.print(f"[red]Unknown sort '{sort_by}'. Choose from: {', '.join(SORT_KEYS)}[/red]")
        sys.exit(1)

    query = Query(
        search_pattern=search,
        sort_by=sort_by,
        filter_category=category,
        fields=tuple(config["search_fields"]),
    )

    with open_session(config) as store:
        results = run_query(store.records, query)
        total = len(store.records)
        currency = store.settings["baseCurrency"]

    if not results:
        if total == 0:
            console.print("[yellow]No records found. Add your first transaction![/yellow]")
        else:
            console.print("[yellow]No records match your filters. Try adjusting your search or filters.[/yellow]")
        return

    shown = results if all else results[:limit]
    title = f"Records (showing {len(shown)} of {len(results)})"
    table = Table(title=title)
    table.add_column("Date", style="cyan")
    table.add_column("Description", style="white")
    table.add_column("Amount", justify="right")
    table.add_column("Category", style="magenta")
    table.add_column("ID", style="dim")

    for result in shown:
        record = result.record
        table.add_row(
            record["date"],
            _highlighted_cell(result, "description"),
            format_amount(record["amount"], currency),
            _highlighted_cell(result, "category"),
            record["id"],
        )

    console.print(table)
