"""
Date Formatting.

Human-readable timestamps for notes, rendered the way an en-US reader
expects them:

    format_date(...)           -> "Jan 15, 2024, 3:30 PM"
    format_relative_time(...)  -> "just now", "2 hours ago", "yesterday",
                                  "10 days ago", or format_date(...) for
                                  anything older than 30 days

Both functions accept a datetime or an ISO-8601 string. Aware datetimes
are converted to UTC; naive datetimes are assumed to already be UTC, like
every timestamp stored by the application.
"""

from datetime import datetime

from notekeeper.backend.core.utils import to_naive_utc, utc_now

_MONTHS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

# Phrases used by en-US for a zero or one-unit offset
_SPECIAL_PHRASES: dict[tuple[str, int], str] = {
    ("minute", 0): "this minute",
    ("hour", 0): "this hour",
    ("day", 0): "today",
    ("day", -1): "yesterday",
    ("day", 1): "tomorrow",
}

JUST_NOW_SECONDS = 60
RELATIVE_DAYS_LIMIT = 30


def _truncate(numerator: int, denominator: int) -> int:
    """Integer division rounding toward zero for both signs."""
    quotient = abs(numerator) // denominator
    return quotient if numerator >= 0 else -quotient


def format_relative_unit(value: int, unit: str) -> str:
    """
    Phrase a signed offset in a single unit.

    Negative values lie in the past ("3 days ago"), positive values in the
    future ("in 3 days"). Zero and one-day offsets use words instead of
    numbers ("this hour", "yesterday").
    """
    special = _SPECIAL_PHRASES.get((unit, value))
    if special is not None:
        return special

    count = abs(value)
    label = unit if count == 1 else f"{unit}s"
    if value < 0:
        return f"{count:,} {label} ago"
    return f"in {count:,} {label}"


def format_date(value: datetime | str) -> str:
    """Format a timestamp as a medium date with a short time."""
    moment = to_naive_utc(value)
    hour = moment.hour % 12 or 12
    meridiem = "AM" if moment.hour < 12 else "PM"
    return (
        f"{_MONTHS[moment.month - 1]} {moment.day}, {moment.year}, "
        f"{hour}:{moment.minute:02d} {meridiem}"
    )


def format_relative_time(
    value: datetime | str,
    now: datetime | str | None = None,
) -> str:
    """
    Format a timestamp relative to ``now``.

    Args:
        value: The timestamp to describe
        now: Reference time, defaults to the current UTC time

    Returns:
        "just now" under a minute, hours or minutes within the same day,
        "yesterday" for a one-day offset in either direction, days up to
        30 days, and the absolute date beyond that
    """
    moment = to_naive_utc(value)
    reference = to_naive_utc(now) if now is not None else utc_now()

    diff_seconds = int((moment - reference).total_seconds())
    diff_minutes = _truncate(diff_seconds, 60)
    diff_hours = _truncate(diff_minutes, 60)
    diff_days = _truncate(diff_hours, 24)

    if abs(diff_seconds) < JUST_NOW_SECONDS:
        return "just now"

    if diff_days == 0:
        if diff_hours != 0:
            return format_relative_unit(diff_hours, "hour")
        return format_relative_unit(diff_minutes, "minute")

    # A one-day offset reads "yesterday" even when it lies in the future
    if abs(diff_days) == 1:
        return "yesterday"

    if abs(diff_days) <= RELATIVE_DAYS_LIMIT:
        return format_relative_unit(diff_days, "day")

    return format_date(moment)
