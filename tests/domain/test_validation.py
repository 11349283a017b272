"""Tests for fintrack.domain.validation pure functions."""

import pytest

from fintrack.domain.validation import (
    check_record_fields,
    check_record_structure,
    validate_amount,
    validate_category,
    validate_date,
    validate_description,
    validate_no_duplicate_words,
    validate_record,
)


def make_valid_record(**overrides: object) -> dict:
    record = {
        "id": "rec_1",
        "description": "Grocery shopping",
        "amount": 54.2,
        "category": "Food",
        "date": "2025-01-03",
        "createdAt": "2025-01-03T18:12:00.000Z",
        "updatedAt": "2025-01-03T18:12:00.000Z",
    }
    record.update(overrides)
    return record


class TestValidateDescription:
    """Tests for validate_description."""

    def test_accepts_plain_text(self) -> None:
        assert validate_description("Coffee")

    def test_accepts_inner_whitespace(self) -> None:
        assert validate_description("Coffee  with   friends")

    def test_checks_trimmed_value(self) -> None:
        """Surrounding whitespace is trimmed before the check."""
        assert validate_description("  Coffee  ")

    def test_rejects_empty_and_blank(self) -> None:
        assert not validate_description("")
        assert not validate_description("   ")

    def test_rejects_non_string(self) -> None:
        assert not validate_description(None)


class TestValidateAmount:
    """Tests for validate_amount."""

    @pytest.mark.parametrize("value", ["0", "1", "42", "10.5", "10.50", "0.99", 12, 12.5, 0])
    def test_accepts_valid_amounts(self, value: object) -> None:
        assert validate_amount(value)

    @pytest.mark.parametrize("value", ["-1", "1.234", "abc", "01", "1.", ".5", "", -3, True])
    def test_rejects_invalid_amounts(self, value: object) -> None:
        assert not validate_amount(value)


class TestValidateDate:
    """Tests for validate_date."""

    def test_accepts_iso_date(self) -> None:
        assert validate_date("2024-01-31")

    def test_does_not_check_days_per_month(self) -> None:
        assert validate_date("2024-02-30")

    def test_rejects_month_out_of_range(self) -> None:
        assert not validate_date("2024-13-01")
        assert not validate_date("2024-00-10")

    def test_rejects_day_out_of_range(self) -> None:
        assert not validate_date("2024-01-32")
        assert not validate_date("2024-01-00")

    def test_rejects_unpadded_parts(self) -> None:
        assert not validate_date("2024-1-1")

    def test_rejects_trailing_text(self) -> None:
        assert not validate_date("2024-01-01\n")
        assert not validate_date("2024-01-01T00:00")


class TestValidateCategory:
    """Tests for validate_category."""

    @pytest.mark.parametrize("value", ["Food", "Eating Out", "Self-care", "a b-c"])
    def test_accepts_words(self, value: str) -> None:
        assert validate_category(value)

    @pytest.mark.parametrize("value", ["", "Food1", "Eating  Out", "Self--care", " Food", "Food-", "Café"])
    def test_rejects_bad_categories(self, value: str) -> None:
        assert not validate_category(value)


class TestValidateNoDuplicateWords:
    """Tests for validate_no_duplicate_words."""

    def test_rejects_adjacent_repeat(self) -> None:
        assert not validate_no_duplicate_words("pay pay rent")

    def test_is_case_insensitive(self) -> None:
        assert not validate_no_duplicate_words("Pay PAY rent")

    def test_allows_non_adjacent_repeat(self) -> None:
        assert validate_no_duplicate_words("pay rent pay")

    def test_requires_whole_words(self) -> None:
        """'the theory' shares a prefix but is not a repeated word."""
        assert validate_no_duplicate_words("the theory")


class TestValidateRecord:
    """Tests for validate_record."""

    def test_valid_record(self) -> None:
        result = validate_record(make_valid_record())

        assert result.is_valid
        assert result.errors == []

    def test_reports_errors_in_order(self) -> None:
        record = make_valid_record(description=" ", amount=-1, date="2024-13-01", category="F00d")

        result = validate_record(record)

        assert not result.is_valid
        assert result.errors == ["Invalid description", "Invalid amount", "Invalid date", "Invalid category"]

    def test_reports_duplicate_words_last(self) -> None:
        result = validate_record(make_valid_record(description="rent rent", amount="abc"))

        assert result.errors == ["Invalid amount", "Description has duplicate words"]

    def test_does_not_check_id_or_timestamps(self) -> None:
        result = validate_record(make_valid_record(id="", createdAt=None, updatedAt=None))

        assert result.is_valid

    def test_does_not_mutate_record(self) -> None:
        record = make_valid_record(description="  padded  ")
        snapshot = dict(record)

        validate_record(record)

        assert record == snapshot


class TestCheckRecordStructure:
    """Tests for check_record_structure."""

    def test_accepts_well_formed_array(self) -> None:
        assert check_record_structure([make_valid_record(), make_valid_record(id="rec_2")]).is_valid

    def test_accepts_empty_array(self) -> None:
        assert check_record_structure([]).is_valid

    def test_rejects_non_array(self) -> None:
        result = check_record_structure({"id": "rec_1"})

        assert not result.is_valid
        assert result.errors == ["Document must be an array"]

    def test_rejects_missing_fields(self) -> None:
        record = make_valid_record()
        del record["createdAt"]

        result = check_record_structure([record])

        assert result.errors == ["Record 0: missing createdAt"]

    def test_rejects_non_numeric_amount(self) -> None:
        result = check_record_structure([make_valid_record(amount="10")])

        assert result.errors == ["Record 0: amount must be a number"]

    def test_ignores_field_formats(self) -> None:
        """Formats are the strict tier's job, not the structural one's."""
        record = make_valid_record(date="yesterday", category="F00d", amount=1.2345)

        assert check_record_structure([record]).is_valid

    def test_rejects_non_object_elements(self) -> None:
        result = check_record_structure([make_valid_record(), "oops"])

        assert result.errors == ["Record 1: not an object"]


class TestCheckRecordFields:
    """Tests for check_record_fields."""

    def test_prefixes_errors_with_index(self) -> None:
        data = [make_valid_record(), make_valid_record(date="yesterday")]

        result = check_record_fields(data)

        assert not result.is_valid
        assert result.errors == ["Record 1: Invalid date"]
