"""Domain models and pure functions for fintrack.

This package contains the functional core:
- Pure functions with no side effects
- No I/O operations
- Easy to test
- Business logic separated from storage and presentation
"""

from fintrack.domain.models import (
    ALL_CATEGORIES,
    DEFAULT_SETTINGS,
    ErrorKind,
    Outcome,
    Record,
    RecordId,
    Settings,
)
from fintrack.domain.query import Query, QueryResult, run_query
from fintrack.domain.validation import ValidationResult, validate_record

__all__ = [
    "ALL_CATEGORIES",
    "DEFAULT_SETTINGS",
    "ErrorKind",
    "Outcome",
    "Query",
    "QueryResult",
    "Record",
    "RecordId",
    "Settings",
    "ValidationResult",
    "run_query",
    "validate_record",
]
