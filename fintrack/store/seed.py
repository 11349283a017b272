"""Seed document loading for the first-run bootstrap."""

import json
from pathlib import Path

import requests

from fintrack.domain.models import ErrorKind, Outcome, failure, success
from fintrack.domain.validation import check_record_structure
from fintrack.logging_setup import get_logger

logger = get_logger(__name__)

DEFAULT_SEED_PATH = Path(__file__).resolve().parent.parent / "seed.json"
DEFAULT_TIMEOUT = 10.0


def is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def fetch_seed(source: str | Path | None = None, timeout: float = DEFAULT_TIMEOUT) -> Outcome:
    """Fetch and parse a seed document.

    Args:
        source: http(s) URL or local file path. Defaults to the bundled seed.
        timeout: Request timeout in seconds for URLs.

    Returns:
        Outcome with the parsed list of records, FETCH if the document could
        not be retrieved, MALFORMED if it is not JSON, or STRUCTURE if it is
        not an array of record-shaped objects.
    """
    if source is None:
        source = DEFAULT_SEED_PATH

    try:
        if isinstance(source, str) and is_url(source):
            response = requests.get(source, headers={"Accept": "application/json"}, timeout=timeout)
            response.raise_for_status()
            text = response.text
        else:
            text = Path(source).expanduser().read_text(encoding="utf-8")
    except (requests.RequestException, OSError) as e:
        return failure(ErrorKind.FETCH, str(e))

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        return failure(ErrorKind.MALFORMED, str(e))

    structure = check_record_structure(data)
    if not structure.is_valid:
        return failure(ErrorKind.STRUCTURE, "; ".join(structure.errors))

    return success(data)
