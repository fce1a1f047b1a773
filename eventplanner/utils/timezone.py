"""Timezone helpers. All stored instants are UTC."""

from datetime import date, datetime, time, timezone
from typing import Optional


def now_utc() -> datetime:
    """Current time as an aware UTC datetime."""
    return datetime.now(timezone.utc)


def ensure_utc(value: Optional[datetime]) -> Optional[datetime]:
    """
    Return the datetime as aware UTC.

    Naive values are assumed to already be UTC; SQLite hands them back
    without tzinfo.
    """
    if value is None:
        return None
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def date_to_utc_midnight(value: date) -> datetime:
    """Instant at UTC midnight of the given calendar date."""
    return datetime.combine(value, time.min, tzinfo=timezone.utc)
