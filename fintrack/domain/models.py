"""Domain types for fintrack.

Records and settings are plain JSON-like dicts so that they round-trip
through storage and import/export unchanged. Field names keep their wire
spelling (camelCase).

- Record: one financial transaction entry
- Settings: process-wide configuration, one instance
- Outcome: explicit result of a parse boundary (value or error kind)
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, NewType, TypedDict

RecordId = NewType("RecordId", str)

# Sentinel for "no category filter"
ALL_CATEGORIES = "all"


class Record(TypedDict):
    """A financial transaction entry."""

    id: RecordId
    description: str
    amount: float
    category: str
    date: str  # YYYY-MM-DD
    createdAt: str
    updatedAt: str


class Settings(TypedDict):
    """Process-wide settings."""

    baseCurrency: str
    currencyRate1: float
    currencyRate2: float
    spendingCap: float  # 0 means no cap


DEFAULT_SETTINGS: Settings = {
    "baseCurrency": "USD",
    "currencyRate1": 1,
    "currencyRate2": 1,
    "spendingCap": 0,
}

RECORD_FIELDS = ("id", "description", "amount", "category", "date", "createdAt", "updatedAt")


class ErrorKind(str, Enum):
    """Why a parse boundary produced no value."""

    MISSING = "missing"
    MALFORMED = "malformed"
    STORAGE = "storage"
    STRUCTURE = "structure"
    INVALID_RECORD = "invalid_record"
    PATTERN = "pattern"
    FETCH = "fetch"


@dataclass(frozen=True)
class Outcome:
    """Immutable result of a parse boundary."""

    value: Any = None
    error: ErrorKind | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.error is None


def success(value: Any) -> Outcome:
    return Outcome(value=value)


def failure(error: ErrorKind, detail: str | None = None) -> Outcome:
    return Outcome(error=error, detail=detail)
