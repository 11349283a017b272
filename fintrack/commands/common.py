"""Shared setup for commands: config, store lifecycle and console."""

import sqlite3
import sys
import tomllib
from collections.abc import Iterator
from contextlib import contextmanager
from typing import Any

from rich.console import Console

from fintrack.config import load_config, resolve_db_path
from fintrack.store import RecordStore, build_store

console = Console()


def load_config_or_exit() -> dict[str, Any]:
    """Load config, exiting with a message if the file is invalid."""
    try:
        return load_config()
    except tomllib.TOMLDecodeError as e:
        console.print(f"[red]Invalid config file: {e}[/red]", style="bold")
        sys.exit(1)


@contextmanager
def open_session(config: dict[str, Any] | None = None) -> Iterator[RecordStore]:
    """Open the configured store, run the first-run bootstrap, and close it.

    Args:
        config: Loaded configuration. If None, it is loaded here.

    Yields:
        An open, initialized RecordStore.
    """
    if config is None:
        config = load_config_or_exit()

    try:
        store = build_store(resolve_db_path(config))
    except (sqlite3.Error, OSError) as e:
        console.print(f"[red]Database error: {e}[/red]", style="bold")
        sys.exit(1)

    with store:
        seeded = store.initialize_records(config.get("seed_source"), float(config["seed_timeout"]))
        if seeded and store.records:
            console.print(f"[dim]Loaded {len(store.records)} sample records on first run[/dim]")
        yield store


def format_amount(amount: Any, currency: str) -> str:
    return f"{currency} {float(amount):,.2f}"
