"""Shared fixtures for fintrack tests."""

from collections.abc import Iterator
from datetime import datetime, timezone
from pathlib import Path

import pytest

from fintrack.store.gateway import PersistenceGateway
from fintrack.store.kv import KeyValueStore
from fintrack.store.record_store import RecordStore

FIXED_NOW = datetime(2025, 2, 1, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def kv(tmp_path: Path) -> KeyValueStore:
    return KeyValueStore(tmp_path / "fintrack.db")


@pytest.fixture
def gateway(kv: KeyValueStore) -> PersistenceGateway:
    return PersistenceGateway(kv)


@pytest.fixture
def store(gateway: PersistenceGateway) -> Iterator[RecordStore]:
    with RecordStore(gateway, clock=lambda: FIXED_NOW) as opened:
        yield opened
