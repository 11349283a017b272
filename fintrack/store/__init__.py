"""Store layer - durable storage, persistence gateway and the record store.

This module re-exports the public store API for easy importing.
"""

from pathlib import Path

from fintrack.store.gateway import PersistenceGateway
from fintrack.store.kv import FIRST_LOAD_KEY, RECORDS_KEY, SETTINGS_KEY, KeyValueStore
from fintrack.store.record_store import RecordStore, StoreClosedError
from fintrack.store.schema import database_exists, get_db_path, init_database
from fintrack.store.seed import fetch_seed


def build_store(db_path: Path | None = None) -> RecordStore:
    """Wire a RecordStore to the SQLite store at db_path (not yet opened)."""
    return RecordStore(PersistenceGateway(KeyValueStore(db_path)))


__all__ = [
    # Schema
    "database_exists",
    "get_db_path",
    "init_database",
    # Key-value store
    "FIRST_LOAD_KEY",
    "RECORDS_KEY",
    "SETTINGS_KEY",
    "KeyValueStore",
    # Gateway and store
    "PersistenceGateway",
    "RecordStore",
    "StoreClosedError",
    "build_store",
    "fetch_seed",
]
