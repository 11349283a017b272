"""Pure helpers for building new records."""

import random
import string
from datetime import datetime, timezone

from fintrack.domain.models import Record, RecordId

_ID_ALPHABET = string.digits + string.ascii_lowercase


def timestamp(now: datetime | None = None) -> str:
    """Format a UTC timestamp as ISO-8601 with milliseconds and a Z suffix.

    Args:
        now: Moment to format. Naive datetimes are taken as UTC. Defaults to
            the current time.

    Returns:
        Timestamp string, e.g. "2025-01-15T10:30:00.000Z".
    """
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return now.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.") + f"{now.microsecond // 1000:03d}Z"


def new_record_id(now: datetime | None = None, rng: random.Random | None = None) -> RecordId:
    """Generate an id of the form rec_<epoch millis>_<9 base-36 chars>."""
    if now is None:
        now = datetime.now(timezone.utc)
    rng = rng or random.Random()
    millis = int(now.timestamp() * 1000)
    suffix = "".join(rng.choice(_ID_ALPHABET) for _ in range(9))
    return RecordId(f"rec_{millis}_{suffix}")


def make_record(
    description: str,
    amount: float,
    category: str,
    date: str,
    now: datetime | None = None,
    record_id: RecordId | None = None,
) -> Record:
    """Build a fully formed record with id and timestamps.

    Args:
        description: Description text (trimmed here).
        amount: Amount.
        category: Category name.
        date: Date in YYYY-MM-DD format.
        now: Creation time. Defaults to the current time.
        record_id: Explicit id. Generated when None.

    Returns:
        New Record with createdAt == updatedAt.
    """
    if now is None:
        now = datetime.now(timezone.utc)
    created = timestamp(now)
    return Record(
        id=record_id or new_record_id(now),
        description=description.strip(),
        amount=amount,
        category=category,
        date=date,
        createdAt=created,
        updatedAt=created,
    )
