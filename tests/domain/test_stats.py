"""Tests for fintrack.domain.stats pure functions."""

from datetime import date

from fintrack.domain.models import DEFAULT_SETTINGS
from fintrack.domain.stats import (
    CapStatus,
    compute_cap_status,
    compute_stats,
    format_cap_status,
    recent_amount,
    top_category,
)


def rec(amount: float, category: str, day: str) -> dict:
    return {"id": day, "description": "x", "amount": amount, "category": category, "date": day}


class TestTopCategory:
    """Tests for top_category."""

    def test_most_frequent(self) -> None:
        records = [rec(1, "Rent", "2025-01-01"), rec(1, "Food", "2025-01-02"), rec(1, "Food", "2025-01-03")]

        assert top_category(records) == "Food"

    def test_tie_goes_to_first_seen(self) -> None:
        records = [rec(1, "Rent", "2025-01-01"), rec(1, "Food", "2025-01-02")]

        assert top_category(records) == "Rent"

    def test_empty(self) -> None:
        assert top_category([]) is None


class TestRecentAmount:
    """Tests for recent_amount."""

    def test_includes_last_seven_days_inclusive(self) -> None:
        today = date(2025, 1, 10)
        records = [
            rec(10, "Food", "2025-01-10"),  # today
            rec(20, "Food", "2025-01-03"),  # 7 days ago
            rec(40, "Food", "2025-01-02"),  # 8 days ago
            rec(80, "Food", "2025-01-11"),  # future
        ]

        assert recent_amount(records, today) == 30

    def test_ignores_impossible_dates(self) -> None:
        records = [rec(10, "Food", "2025-02-30")]

        assert recent_amount(records, date(2025, 3, 1)) == 0


class TestCapStatus:
    """Tests for compute_cap_status and format_cap_status."""

    def test_no_cap(self) -> None:
        status = compute_cap_status(100, 0)

        assert status == CapStatus(kind="none")
        assert format_cap_status(status, "USD") == "No cap set"

    def test_remaining(self) -> None:
        status = compute_cap_status(88, 100)

        assert status == CapStatus(kind="remaining", amount=12)
        assert format_cap_status(status, "USD") == "Remaining: USD 12.00"

    def test_exactly_at_cap_is_remaining(self) -> None:
        assert compute_cap_status(100, 100).kind == "remaining"

    def test_over(self) -> None:
        status = compute_cap_status(103.5, 100)

        assert status == CapStatus(kind="over", amount=3.5)
        assert format_cap_status(status, "EUR") == "Over cap by EUR 3.50!"


class TestComputeStats:
    """Tests for compute_stats."""

    def test_summary(self) -> None:
        records = [rec(10, "Food", "2025-01-09"), rec(500, "Rent", "2025-01-01"), rec(5.5, "Food", "2024-12-01")]
        settings = {**DEFAULT_SETTINGS, "spendingCap": 500}

        stats = compute_stats(records, settings, date(2025, 1, 10))

        assert stats.total_records == 3
        assert stats.total_amount == 515.5
        assert stats.top_category == "Food"
        assert stats.recent_amount == 10
        assert stats.cap == CapStatus(kind="over", amount=15.5)

    def test_empty_collection(self) -> None:
        stats = compute_stats([], DEFAULT_SETTINGS, date(2025, 1, 10))

        assert stats.total_records == 0
        assert stats.total_amount == 0
        assert stats.top_category is None
        assert stats.cap.kind == "none"
