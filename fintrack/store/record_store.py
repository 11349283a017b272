"""Record store: the single owner of the record collection and settings.

Every mutation persists through the gateway immediately. The store is
single-threaded and is mutated in place; callers re-query after each
mutation.
"""

from collections.abc import Callable
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

from fintrack.domain.models import DEFAULT_SETTINGS, Outcome, Record, RecordId, Settings
from fintrack.domain.records import timestamp
from fintrack.domain.validation import ImportCheck
from fintrack.logging_setup import get_logger
from fintrack.store.gateway import PersistenceGateway
from fintrack.store.seed import DEFAULT_TIMEOUT, fetch_seed

logger = get_logger(__name__)

# Fields update_record never overwrites
_IMMUTABLE_FIELDS = ("id", "createdAt")


class StoreClosedError(RuntimeError):
    """Raised when a store is used outside its open/close lifecycle."""


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class RecordStore:
    """Owns the authoritative records and settings for one process.

    Usage:
        with RecordStore(gateway) as store:
            store.initialize_records()
            store.add_record(record)
    """

    def __init__(self, gateway: PersistenceGateway, clock: Callable[[], datetime] = _utc_now) -> None:
        self.gateway = gateway
        self.clock = clock
        self.records: list[Record] = []
        self.settings: Settings = dict(DEFAULT_SETTINGS)  # type: ignore[assignment]
        self._open = False

    @property
    def is_open(self) -> bool:
        return self._open

    def open(self) -> "RecordStore":
        """Load settings (or defaults) and the stored records."""
        stored = self.gateway.load_settings()
        self.settings = {**DEFAULT_SETTINGS, **stored} if stored else dict(DEFAULT_SETTINGS)  # type: ignore[assignment]
        self.records = self.gateway.load_records()
        self._open = True
        return self

    def close(self) -> None:
        """Release the store.

        Every mutation has already been persisted, so nothing is written.
        """
        self._open = False

    def __enter__(self) -> "RecordStore":
        return self.open()

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _require_open(self) -> None:
        if not self._open:
            raise StoreClosedError("RecordStore is not open")

    def get_record(self, record_id: str) -> Record | None:
        """First record with the given id, or None."""
        return next((r for r in self.records if r.get("id") == record_id), None)

    def add_record(self, record: Record) -> None:
        """Append a fully formed record and persist the collection."""
        self._require_open()
        self.records.append(dict(record))  # type: ignore[arg-type]
        self.gateway.save_records(self.records)

    def update_record(self, record_id: RecordId | str, fields: dict[str, Any]) -> bool:
        """Merge fields into the first record with this id and persist.

        id and createdAt are never changed; updatedAt is refreshed. An
        unknown id is a silent no-op: nothing changes and nothing is written.

        Returns:
            True if a record was updated.
        """
        self._require_open()
        index = next((i for i, r in enumerate(self.records) if r.get("id") == record_id), None)
        if index is None:
            logger.debug("update_record: no record with id %s", record_id)
            return False

        changes = {k: v for k, v in fields.items() if k not in _IMMUTABLE_FIELDS}
        updated = {**self.records[index], **changes, "updatedAt": timestamp(self.clock())}
        self.records[index] = updated  # type: ignore[assignment]
        self.gateway.save_records(self.records)
        return True

    def delete_record(self, record_id: RecordId | str) -> None:
        """Remove every record with this id and persist (no error if absent)."""
        self._require_open()
        self.records = [r for r in self.records if r.get("id") != record_id]
        self.gateway.save_records(self.records)

    def update_settings(self, partial: dict[str, Any]) -> None:
        """Shallow-merge partial into the settings and persist."""
        self._require_open()
        self.settings = {**self.settings, **partial}  # type: ignore[assignment]
        self.gateway.save_settings(self.settings)

    def replace_records(self, records: list[Record]) -> None:
        """Clear the collection, then add each record in order."""
        self._require_open()
        self.records = []
        for record in records:
            self.add_record(record)

    def import_json(self, document: str | bytes, check: ImportCheck = ImportCheck.STRUCTURAL) -> Outcome:
        """Import a document through the gateway and reload the collection.

        Returns:
            The gateway's import Outcome. The collection is unchanged on
            failure.
        """
        self._require_open()
        outcome = self.gateway.import_json_outcome(document, check)
        if outcome.ok:
            self.records = self.gateway.load_records()
        return outcome

    def export_json(self) -> str:
        return self.gateway.export_json()

    def initialize_records(self, seed_source: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT) -> bool:
        """Load records, seeding them on the first-ever run.

        On first run the seed document replaces the collection and a marker
        is stored so seeding never repeats. If the seed cannot be fetched or
        parsed, whatever is already stored is loaded instead. Later runs
        only read from storage.

        Args:
            seed_source: Seed URL or path. Defaults to the bundled seed.
            timeout: Timeout in seconds for fetching a seed URL.

        Returns:
            True if the seed was applied by this call.
        """
        self._require_open()

        if self.gateway.is_seeded():
            self.records = self.gateway.load_records()
            return False

        outcome = fetch_seed(seed_source, timeout)
        if not outcome.ok:
            logger.error("Error loading seed (%s): %s", outcome.error.value, outcome.detail)
            self.records = self.gateway.load_records()
            return False

        self.replace_records(outcome.value)
        self.gateway.mark_seeded()
        logger.info("Seed data loaded: %d records", len(self.records))
        return True
