"""Pure validation rules for records.

Two tiers:
- Field validation (validate_record): syntactic correctness of each field.
- Structural validation (check_record_structure): presence and type of the
  fields of an imported document, without checking their format.

Validators never raise for bad input; they return booleans or a
ValidationResult.
"""

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

_DESCRIPTION_RE = re.compile(r"\S(?:.*\S)?", re.ASCII)
_AMOUNT_RE = re.compile(r"(0|[1-9]\d*)(\.\d{1,2})?", re.ASCII)
_DATE_RE = re.compile(r"\d{4}-(0[1-9]|1[0-2])-(0[1-9]|[12]\d|3[01])", re.ASCII)
_CATEGORY_RE = re.compile(r"[A-Za-z]+(?:[ -][A-Za-z]+)*")
_DUPLICATE_WORD_RE = re.compile(r"\b(\w+)\s+\1\b", re.IGNORECASE | re.ASCII)

# Fields that must be present and truthy in an imported record
_REQUIRED_TRUTHY = ("id", "description", "category", "date", "createdAt", "updatedAt")


@dataclass(frozen=True)
class ValidationResult:
    """Immutable validation result with itemized error messages."""

    is_valid: bool
    errors: list[str] = field(default_factory=list)


class ImportCheck(str, Enum):
    """How strictly an imported document is checked."""

    STRUCTURAL = "structural"
    STRICT = "strict"


def validate_description(text: Any) -> bool:
    """Check that the trimmed description is non-empty.

    Inner whitespace is allowed.
    """
    if not isinstance(text, str):
        return False
    return _DESCRIPTION_RE.fullmatch(text.strip()) is not None


def validate_amount(value: Any) -> bool:
    """Check that an amount is non-negative with at most 2 decimals.

    The check runs against the string form of the value, so 12.5 and "12.50"
    are valid while -1, 1.234 and "abc" are not.
    """
    if isinstance(value, bool):
        return False
    return _AMOUNT_RE.fullmatch(str(value)) is not None


def validate_date(value: Any) -> bool:
    """Check YYYY-MM-DD with month 01-12 and day 01-31.

    Day counts per month are not checked ("2024-02-30" passes).
    """
    if not isinstance(value, str):
        return False
    return _DATE_RE.fullmatch(value) is not None


def validate_category(value: Any) -> bool:
    """Check alphabetic words joined by single spaces or hyphens."""
    if not isinstance(value, str):
        return False
    return _CATEGORY_RE.fullmatch(value) is not None


def validate_no_duplicate_words(text: Any) -> bool:
    """Check that no word is immediately repeated (case-insensitive)."""
    if not isinstance(text, str):
        return True
    return _DUPLICATE_WORD_RE.search(text) is None


def validate_record(record: dict[str, Any]) -> ValidationResult:
    """Run every field rule against a record.

    The record is not modified and id/timestamps are not checked.

    Args:
        record: Record-like mapping.

    Returns:
        ValidationResult with one message per failed rule, in the order
        description, amount, date, category, duplicate words.
    """
    errors = []
    description = record.get("description")

    if not validate_description(description):
        errors.append("Invalid description")
    if not validate_amount(record.get("amount")):
        errors.append("Invalid amount")
    if not validate_date(record.get("date")):
        errors.append("Invalid date")
    if not validate_category(record.get("category")):
        errors.append("Invalid category")
    if not validate_no_duplicate_words(description):
        errors.append("Description has duplicate words")

    return ValidationResult(is_valid=not errors, errors=errors)


def is_number(value: Any) -> bool:
    """Check for a JSON number (booleans excluded)."""
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def check_record_structure(data: Any) -> ValidationResult:
    """Check the shape of an imported document.

    The document must be a list whose elements all carry truthy id,
    description, category, date, createdAt and updatedAt, and a numeric
    amount. Field formats are not checked here; check_record_fields does
    that for the STRICT tier.

    Args:
        data: Parsed JSON document.

    Returns:
        ValidationResult listing every structural defect found.
    """
    if not isinstance(data, list):
        return ValidationResult(is_valid=False, errors=["Document must be an array"])

    errors = []
    for index, item in enumerate(data):
        if not isinstance(item, dict):
            errors.append(f"Record {index}: not an object")
            continue
        for name in _REQUIRED_TRUTHY:
            if not item.get(name):
                errors.append(f"Record {index}: missing {name}")
        if not is_number(item.get("amount")):
            errors.append(f"Record {index}: amount must be a number")

    return ValidationResult(is_valid=not errors, errors=errors)


def check_record_fields(data: list[dict[str, Any]]) -> ValidationResult:
    """Run validate_record on every element of a structurally valid document.

    This is the STRICT import tier, applied after check_record_structure.
    Messages are prefixed with the record index.
    """
    errors = []
    for index, item in enumerate(data):
        result = validate_record(item)
        errors.extend(f"Record {index}: {message}" for message in result.errors)

    return ValidationResult(is_valid=not errors, errors=errors)
