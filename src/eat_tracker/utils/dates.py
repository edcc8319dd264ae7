"""Date helpers for eat_tracker.

All datetimes inside the core are timezone-aware (UTC when the
caller supplied naive values).
"""

import math
from datetime import UTC, date, datetime, time

__all__ = [
    "SECONDS_PER_DAY",
    "days_between",
    "ensure_aware",
    "parse_datetime",
    "resolve_now",
    "start_of_day",
    "utc_now",
]

SECONDS_PER_DAY = 86400


def utc_now() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(UTC)


def ensure_aware(value: datetime) -> datetime:
    """Attach UTC to naive datetimes, leave aware ones untouched."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def start_of_day(value: datetime) -> datetime:
    """Midnight of the given datetime's calendar day (same tz)."""
    return value.replace(hour=0, minute=0, second=0, microsecond=0)


def days_between(later: datetime, earlier: datetime) -> int:
    """Whole days from earlier to later, floored (negative if later < earlier)."""
    return math.floor((later - earlier).total_seconds() / SECONDS_PER_DAY)


def parse_datetime(value: datetime | date | str | None) -> datetime | None:
    """Coerce free-form user input into an aware datetime.

    Accepts datetimes, dates, and ISO-8601 strings. Returns None for
    None, blank strings, or anything unparseable.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return ensure_aware(value)
    if isinstance(value, date):
        return datetime.combine(value, time.min, tzinfo=UTC)
    if isinstance(value, str):
        text = value.strip()
        if not text:
            return None
        try:
            return ensure_aware(datetime.fromisoformat(text.replace("Z", "+00:00")))
        except ValueError:
            return None
    return None


def resolve_now(now: datetime | None) -> datetime:
    """Caller-supplied reference time as an aware datetime, or the current time."""
    return ensure_aware(now) if now is not None else utc_now()
