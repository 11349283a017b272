"""Pure functions for dashboard statistics.

This module contains the functional core for summary figures:
- No I/O operations
- No side effects
- Pure data transformations

Amounts are summed as-is; no currency conversion is applied.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import date, datetime

from fintrack.domain.models import Record, Settings

RECENT_DAYS = 7


@dataclass(frozen=True)
class CapStatus:
    """Immutable spending cap status.

    kind is "none" (no cap set), "remaining" or "over". amount is the
    remaining headroom or the overspend, always non-negative.
    """

    kind: str
    amount: float = 0.0


@dataclass(frozen=True)
class DashboardStats:
    """Immutable summary of a record collection."""

    total_records: int
    total_amount: float
    top_category: str | None
    recent_amount: float
    cap: CapStatus


def parse_record_date(value: object) -> date | None:
    """Parse a YYYY-MM-DD string, returning None when it is not a real date."""
    if not isinstance(value, str):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def total_amount(records: list[Record]) -> float:
    return sum(float(r.get("amount", 0)) for r in records)


def top_category(records: list[Record]) -> str | None:
    """Most frequent category by record count; ties go to the first seen."""
    counts = Counter(r.get("category") for r in records if r.get("category"))
    if not counts:
        return None
    return max(counts, key=lambda name: counts[name])


def recent_amount(records: list[Record], today: date, days: int = RECENT_DAYS) -> float:
    """Sum of amounts dated between `days` days ago and today, inclusive.

    Records with unparseable dates are ignored.
    """
    total = 0.0
    for record in records:
        record_date = parse_record_date(record.get("date"))
        if record_date is None:
            continue
        age = (today - record_date).days
        if 0 <= age <= days:
            total += float(record.get("amount", 0))
    return total


def compute_cap_status(total: float, spending_cap: float) -> CapStatus:
    """Compare spending against the cap (0 or less means no cap)."""
    if spending_cap <= 0:
        return CapStatus(kind="none")
    remaining = spending_cap - total
    if remaining >= 0:
        return CapStatus(kind="remaining", amount=remaining)
    return CapStatus(kind="over", amount=abs(remaining))


def compute_stats(records: list[Record], settings: Settings, today: date) -> DashboardStats:
    """Compute all dashboard figures.

    Args:
        records: Records to summarize.
        settings: Current settings (spendingCap is used).
        today: Reference date for the recent-spending window.

    Returns:
        DashboardStats.
    """
    total = total_amount(records)
    cap = float(settings.get("spendingCap") or 0)

    return DashboardStats(
        total_records=len(records),
        total_amount=total,
        top_category=top_category(records),
        recent_amount=recent_amount(records, today),
        cap=compute_cap_status(total, cap),
    )


def format_cap_status(status: CapStatus, currency: str) -> str:
    """Format cap status for display.

    Returns:
        e.g. "No cap set", "Remaining: USD 12.00", "Over cap by USD 3.50!".
    """
    if status.kind == "remaining":
        return f"Remaining: {currency} {status.amount:.2f}"
    if status.kind == "over":
        return f"Over cap by {currency} {status.amount:.2f}!"
    return "No cap set"
