"""
Core Utilities.

Timestamps are stored and compared as timezone-naive UTC values. These
helpers produce and normalize such values.
"""

from datetime import datetime, timezone


def utc_now() -> datetime:
    """Return the current UTC time without tzinfo."""
    return datetime.now(timezone.utc).replace(tzinfo=None)


def to_naive_utc(value: datetime | str) -> datetime:
    """
    Normalize a datetime or ISO-8601 string to naive UTC.

    Aware values are converted to UTC first; naive values are taken to
    already be UTC.

    Raises:
        ValueError: If a string is not valid ISO-8601
    """
    if isinstance(value, str):
        value = datetime.fromisoformat(value)
    if value.tzinfo is not None:
        value = value.astimezone(timezone.utc).replace(tzinfo=None)
    return value
