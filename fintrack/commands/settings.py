"""Settings and dashboard statistics commands."""

import sys
from datetime import date
from typing import Any

from rich.table import Table

from fintrack.commands.common import console, format_amount, open_session
from fintrack.domain.stats import compute_stats, format_cap_status


def settings_command(
    base_currency: str | None = None,
    rate1: float | None = None,
    rate2: float | None = None,
    cap: float | None = None,
) -> None:
    """Show settings, or update the ones given."""
    changes: dict[str, Any] = {}
    if base_currency is not None:
        changes["baseCurrency"] = base_currency.strip() or "USD"
    if rate1 is not None:
        changes["currencyRate1"] = rate1
    if rate2 is not None:
        changes["currencyRate2"] = rate2
    if cap is not None:
        changes["spendingCap"] = cap

    if any(changes.get(name, 1) <= 0 for name in ("currencyRate1", "currencyRate2")):
        console.print("[red]Currency rates must be positive[/red]")
        sys.exit(1)
    if changes.get("spendingCap", 0) < 0:
        console.print("[red]Spending cap cannot be negative (use 0 for no cap)[/red]")
        sys.exit(1)

    with open_session() as store:
        if changes:
            store.update_settings(changes)
            console.print("[green]✓[/green] Settings saved")
        settings = dict(store.settings)

    table = Table(title="Settings")
    table.add_column("Setting", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Base currency", str(settings["baseCurrency"]))
    table.add_row("Currency rate 1", str(settings["currencyRate1"]))
    table.add_row("Currency rate 2", str(settings["currencyRate2"]))
    spending_cap = float(settings["spendingCap"] or 0)
    table.add_row("Spending cap", f"{spending_cap:,.2f}" if spending_cap > 0 else "[dim]none[/dim]")
    console.print(table)


def stats_command() -> None:
    """Show dashboard statistics for all records."""
    with open_session() as store:
        stats = compute_stats(store.records, store.settings, date.today())
        currency = store.settings["baseCurrency"]

    cap_text = format_cap_status(stats.cap, currency)
    cap_style = {"remaining": "green", "over": "red"}.get(stats.cap.kind, "dim")

    console.print(f"Total records: [bold]{stats.total_records}[/bold]")
    console.print(f"Total amount: [bold]{format_amount(stats.total_amount, currency)}[/bold]")
    console.print(f"Top category: [magenta]{stats.top_category or 'N/A'}[/magenta]")
    console.print(f"Last 7 days: [bold]{format_amount(stats.recent_amount, currency)}[/bold]")
    console.print(f"Cap status: [{cap_style}]{cap_text}[/{cap_style}]")
