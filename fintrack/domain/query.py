"""Pure query engine: filter, sort, search and highlight records.

A query is re-run from scratch on every call; nothing is cached between
calls and the input records are never modified.
"""

import locale
import re
from dataclasses import dataclass, field
from typing import Any

from fintrack.domain.models import ALL_CATEGORIES, ErrorKind, Outcome, Record, failure, success
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_SEARCH_FIELDS = ("description", "category")
DEFAULT_MARKER = ("<mark>", "</mark>")

SORT_KEYS = (
    "date-desc",
    "date-asc",
    "amount-desc",
    "amount-asc",
    "description-asc",
    "description-desc",
    "category-asc",
)


@dataclass(frozen=True)
class Query:
    """Immutable query parameters."""

    search_pattern: str = ""
    sort_by: str = "date-desc"
    filter_category: str = ALL_CATEGORIES
    fields: tuple[str, ...] = DEFAULT_SEARCH_FIELDS
    marker: tuple[str, str] = DEFAULT_MARKER


@dataclass(frozen=True)
class QueryResult:
    """One displayed record with its highlight map.

    highlighted maps field name to marked-up text and spans maps field name
    to the (start, end) offsets of each match. Both are empty when no search
    pattern was given.
    """

    record: Record
    highlighted: dict[str, str] = field(default_factory=dict)
    spans: dict[str, list[tuple[int, int]]] = field(default_factory=dict)


def filter_by_category(records: list[Record], category: str) -> list[Record]:
    """Keep records whose category equals the filter exactly."""
    if category == ALL_CATEGORIES:
        return list(records)
    return [r for r in records if r.get("category") == category]


def _text_key(value: Any) -> tuple[str, str]:
    """Collation key: case-folded locale order, original text as tiebreak."""
    text = str(value)
    return locale.strxfrm(text.casefold()), text


def _amount_key(record: Record) -> float:
    try:
        return float(record.get("amount", 0))
    except (TypeError, ValueError):
        return 0.0


def sort_records(records: list[Record], sort_by: str) -> list[Record]:
    """Stable sort by a named key.

    Dates are YYYY-MM-DD strings, so string order is calendar order.
    Unknown keys return the records in their original order.

    Args:
        records: Records to sort.
        sort_by: One of SORT_KEYS.

    Returns:
        A new sorted list.
    """
    if sort_by == "date-desc":
        return sorted(records, key=lambda r: str(r.get("date", "")), reverse=True)
    if sort_by == "date-asc":
        return sorted(records, key=lambda r: str(r.get("date", "")))
    if sort_by == "amount-desc":
        return sorted(records, key=_amount_key, reverse=True)
    if sort_by == "amount-asc":
        return sorted(records, key=_amount_key)
    if sort_by == "description-asc":
        return sorted(records, key=lambda r: _text_key(r.get("description", "")))
    if sort_by == "description-desc":
        return sorted(records, key=lambda r: _text_key(r.get("description", "")), reverse=True)
    if sort_by == "category-asc":
        return sorted(records, key=lambda r: _text_key(r.get("category", "")))
    return list(records)


def compile_pattern(pattern: str) -> Outcome:
    """Compile a case-insensitive search pattern.

    Returns:
        Outcome holding the compiled regex, None for an empty pattern, or
        ErrorKind.PATTERN when the pattern is not a valid regex.
    """
    if not pattern:
        return success(None)
    try:
        return success(re.compile(pattern, re.IGNORECASE))
    except re.error as e:
        logger.debug("Invalid search pattern %r: %s", pattern, e)
        return failure(ErrorKind.PATTERN, str(e))


def find_match_spans(text: str, regex: re.Pattern[str]) -> list[tuple[int, int]]:
    """Offsets of every non-empty match of regex in text."""
    return [m.span() for m in regex.finditer(text) if m.end() > m.start()]


def highlight_matches(
    text: str,
    regex: re.Pattern[str] | None,
    marker: tuple[str, str] = DEFAULT_MARKER,
) -> str:
    """Wrap every match in the marker, leaving other text untouched.

    Removing the markers from the result gives back the original text.
    """
    if regex is None:
        return text

    opening, closing = marker
    parts = []
    position = 0
    for start, end in find_match_spans(text, regex):
        parts.append(text[position:start])
        parts.append(f"{opening}{text[start:end]}{closing}")
        position = end
    parts.append(text[position:])
    return "".join(parts)


def _field_text(record: Record, name: str) -> str:
    value = record.get(name)
    return "" if value is None else str(value)


def search_records(
    records: list[Record],
    pattern: str,
    fields: tuple[str, ...] = DEFAULT_SEARCH_FIELDS,
    marker: tuple[str, str] = DEFAULT_MARKER,
) -> list[QueryResult]:
    """Keep records where any searchable field matches the pattern.

    An empty pattern keeps everything without highlighting. An invalid
    pattern keeps nothing.
    """
    compiled = compile_pattern(pattern)
    if not compiled.ok:
        return []

    regex = compiled.value
    if regex is None:
        return [QueryResult(record=r) for r in records]

    results = []
    for record in records:
        texts = {name: _field_text(record, name) for name in fields}
        if not any(regex.search(text) for text in texts.values()):
            continue
        results.append(
            QueryResult(
                record=record,
                highlighted={name: highlight_matches(text, regex, marker) for name, text in texts.items()},
                spans={name: find_match_spans(text, regex) for name, text in texts.items()},
            )
        )
    return results


def run_query(records: list[Record], query: Query) -> list[QueryResult]:
    """Produce the displayed projection of records for a query.

    Steps: category filter, then stable sort, then search and highlight.

    Args:
        records: The store's records (not modified).
        query: Query parameters.

    Returns:
        Ordered list of QueryResult.
    """
    filtered = filter_by_category(records, query.filter_category)
    ordered = sort_records(filtered, query.sort_by)
    return search_records(ordered, query.search_pattern, query.fields, query.marker)


def list_categories(records: list[Record]) -> list[str]:
    """Distinct categories in first-seen order, for building filters."""
    seen: dict[str, None] = {}
    for record in records:
        category = record.get("category")
        if isinstance(category, str) and category:
            seen.setdefault(category, None)
    return list(seen)
