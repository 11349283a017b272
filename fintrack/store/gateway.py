"""Persistence gateway: records and settings in the durable store.

Storage and parse faults never escape this module. They are logged and
degraded to a safe default (empty collection, no settings, False).
"""

import json
import sqlite3
from typing import Any

from fintrack.domain.models import ErrorKind, Outcome, Record, Settings, failure, success
from fintrack.domain.validation import ImportCheck, check_record_fields, check_record_structure
from fintrack.logging_setup import get_logger
from fintrack.store.kv import FIRST_LOAD_KEY, RECORDS_KEY, SETTINGS_KEY, KeyValueStore

logger = get_logger(__name__)

# Errors a durable write can raise (locked database, disk full, bad values)
_WRITE_ERRORS = (sqlite3.Error, OSError, TypeError, ValueError)


class PersistenceGateway:
    """Load/save records and settings, and import/export whole collections."""

    def __init__(self, kv: KeyValueStore) -> None:
        self.kv = kv

    def _read_json(self, key: str) -> Outcome:
        try:
            raw = self.kv.get(key)
        except (sqlite3.Error, OSError) as e:
            logger.error("Error reading %s: %s", key, e)
            return failure(ErrorKind.STORAGE, str(e))

        if raw is None:
            return failure(ErrorKind.MISSING)

        try:
            return success(json.loads(raw))
        except json.JSONDecodeError as e:
            logger.error("Malformed data under %s: %s", key, e)
            return failure(ErrorKind.MALFORMED, str(e))

    def _write_json(self, key: str, value: Any) -> bool:
        try:
            self.kv.set(key, json.dumps(value))
        except _WRITE_ERRORS as e:
            logger.error("Error saving %s: %s", key, e)
            return False
        return True

    def read_records(self) -> Outcome:
        """Read the stored collection.

        Returns:
            Outcome with the list of records, or MISSING, MALFORMED or
            STORAGE.
        """
        outcome = self._read_json(RECORDS_KEY)
        if outcome.ok and not isinstance(outcome.value, list):
            logger.error("Stored records are not a list")
            return failure(ErrorKind.MALFORMED, "stored records are not a list")
        return outcome

    def load_records(self) -> list[Record]:
        """Stored collection, or an empty list if absent or unreadable."""
        outcome = self.read_records()
        return outcome.value if outcome.ok else []

    def save_records(self, records: list[Record]) -> bool:
        """Overwrite the stored collection.

        Returns:
            True if written. Failures are logged, never raised.
        """
        return self._write_json(RECORDS_KEY, records)

    def read_settings(self) -> Outcome:
        outcome = self._read_json(SETTINGS_KEY)
        if outcome.ok and not isinstance(outcome.value, dict):
            logger.error("Stored settings are not an object")
            return failure(ErrorKind.MALFORMED, "stored settings are not an object")
        return outcome

    def load_settings(self) -> Settings | None:
        """Stored settings, or None if absent or unreadable."""
        outcome = self.read_settings()
        return outcome.value if outcome.ok else None

    def save_settings(self, settings: Settings) -> bool:
        return self._write_json(SETTINGS_KEY, settings)

    def import_json_outcome(self, document: str | bytes, check: ImportCheck = ImportCheck.STRUCTURAL) -> Outcome:
        """Parse, check and store an imported document.

        Args:
            document: JSON text of an array of records.
            check: Validation tier applied before storing.

        Returns:
            Outcome with the imported records, or MALFORMED, STRUCTURE,
            INVALID_RECORD or STORAGE. Nothing is stored on failure.
        """
        try:
            data = json.loads(document)
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            logger.error("Error importing JSON: %s", e)
            return failure(ErrorKind.MALFORMED, str(e))

        result = check_record_structure(data)
        kind = ErrorKind.STRUCTURE
        if result.is_valid and check is ImportCheck.STRICT:
            result = check_record_fields(data)
            kind = ErrorKind.INVALID_RECORD

        if not result.is_valid:
            detail = "; ".join(result.errors)
            logger.error("Error importing JSON: %s", detail)
            return failure(kind, detail)

        if not self.save_records(data):
            return failure(ErrorKind.STORAGE, "could not save imported records")

        logger.info("Imported %d records", len(data))
        return success(data)

    def import_json(self, document: str | bytes, check: ImportCheck = ImportCheck.STRUCTURAL) -> bool:
        """Import a document, returning True on success."""
        return self.import_json_outcome(document, check).ok

    def export_json(self) -> str:
        """Stored collection as JSON, pretty-printed with 2-space indentation."""
        return json.dumps(self.load_records(), indent=2, ensure_ascii=False)

    def is_seeded(self) -> bool:
        """Whether the first-run seed has already been applied.

        An unreadable marker counts as seeded so that stored records are
        never replaced by the seed.
        """
        try:
            return self.kv.get(FIRST_LOAD_KEY) is not None
        except (sqlite3.Error, OSError) as e:
            logger.error("Error reading %s: %s", FIRST_LOAD_KEY, e)
            return True

    def mark_seeded(self) -> bool:
        return self._write_json(FIRST_LOAD_KEY, True)
