"""Tests for seed document loading."""

import json
from pathlib import Path
from typing import Any

import pytest
import requests

from fintrack.domain.models import ErrorKind
from fintrack.domain.validation import check_record_structure
from fintrack.store import seed
from fintrack.store.seed import DEFAULT_SEED_PATH, fetch_seed


SEED_RECORD = {
    "id": "s1",
    "description": "Monthly rent",
    "amount": 850,
    "category": "Rent",
    "date": "2025-01-01",
    "createdAt": "2025-01-01T09:00:00.000Z",
    "updatedAt": "2025-01-01T09:00:00.000Z",
}


class FakeResponse:
    def __init__(self, text: str, status_code: int = 200) -> None:
        self.text = text
        self.status_code = status_code

    def raise_for_status(self) -> None:
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} error")


class TestFetchSeed:
    """Tests for fetch_seed."""

    def test_reads_local_file(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([SEED_RECORD]))

        outcome = fetch_seed(path)

        assert outcome.ok
        assert outcome.value == [SEED_RECORD]

    def test_fetches_url(self, monkeypatch: pytest.MonkeyPatch) -> None:
        calls: list[dict[str, Any]] = []

        def fake_get(url: str, **kwargs: Any) -> FakeResponse:
            calls.append({"url": url, **kwargs})
            return FakeResponse("[]")

        monkeypatch.setattr(seed.requests, "get", fake_get)

        outcome = fetch_seed("https://example.com/seed.json", timeout=3)

        assert outcome.ok
        assert outcome.value == []
        assert calls[0]["url"] == "https://example.com/seed.json"
        assert calls[0]["timeout"] == 3

    def test_http_error_is_fetch_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setattr(seed.requests, "get", lambda url, **kwargs: FakeResponse("", status_code=404))

        assert fetch_seed("https://example.com/seed.json").error is ErrorKind.FETCH

    def test_timeout_is_fetch_failure(self, monkeypatch: pytest.MonkeyPatch) -> None:
        def fake_get(url: str, **kwargs: Any) -> FakeResponse:
            raise requests.Timeout("timed out")

        monkeypatch.setattr(seed.requests, "get", fake_get)

        assert fetch_seed("http://example.com/seed.json").error is ErrorKind.FETCH

    def test_missing_file(self, tmp_path: Path) -> None:
        assert fetch_seed(tmp_path / "absent.json").error is ErrorKind.FETCH

    def test_malformed_json(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.json"
        path.write_text("[{")

        assert fetch_seed(path).error is ErrorKind.MALFORMED

    def test_non_array(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.json"
        path.write_text("{}")

        assert fetch_seed(path).error is ErrorKind.STRUCTURE

    def test_non_object_element(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.json"
        path.write_text(json.dumps([SEED_RECORD, 5]))

        outcome = fetch_seed(path)

        assert outcome.error is ErrorKind.STRUCTURE
        assert outcome.detail == "Record 1: not an object"

    def test_element_missing_fields(self, tmp_path: Path) -> None:
        path = tmp_path / "seed.json"
        path.write_text('[{"id": "s1"}]')

        assert fetch_seed(path).error is ErrorKind.STRUCTURE

    def test_bundled_seed_is_well_formed(self) -> None:
        data = json.loads(DEFAULT_SEED_PATH.read_text())

        assert check_record_structure(data).is_valid
