"""Date normalization for event dates.

Event dates arrive as free text from forms and imported data in several
notations. Everything is reduced to a plain calendar date; the numeric
notations are tried in a fixed order before falling back to dateutil.
"""

import logging
import re
from datetime import date, datetime
from typing import Any, Callable, Optional, Tuple

from dateutil import parser as dtparse

logger = logging.getLogger(__name__)

MIN_YEAR_EXCLUSIVE = 1900

# (pattern, function turning the match groups into (year, month, day))
DATE_PATTERNS: Tuple[Tuple[re.Pattern, Callable[[Tuple[str, ...]], Tuple[int, int, int]]], ...] = (
    # D.M.YYYY
    (re.compile(r'^(\d{1,2})\.(\d{1,2})\.(\d{4})$'), lambda g: (int(g[2]), int(g[1]), int(g[0]))),
    # YYYY-M-D, prefix match so ISO timestamps are accepted too
    (re.compile(r'^(\d{4})-(\d{1,2})-(\d{1,2})'), lambda g: (int(g[0]), int(g[1]), int(g[2]))),
    # M/D/YYYY
    (re.compile(r'^(\d{1,2})/(\d{1,2})/(\d{4})$'), lambda g: (int(g[2]), int(g[0]), int(g[1]))),
)


def _build_date(year: int, month: int, day: int) -> Optional[date]:
    if year <= MIN_YEAR_EXCLUSIVE or not 1 <= month <= 12 or not 1 <= day <= 31:
        return None
    try:
        return date(year, month, day)
    except ValueError:
        # In range but not on the calendar, e.g. 31.2.
        return None


# dateutil fills missing parts from its default; a date part that differs
# between these two parses was not in the text
FALLBACK_DEFAULTS = (datetime(2000, 1, 1), datetime(2001, 2, 2))


def _parse_fallback(text: str) -> Optional[date]:
    try:
        first, second = (dtparse.parse(text, default=default).date() for default in FALLBACK_DEFAULTS)
    except (ValueError, OverflowError):
        return None
    return first if first == second else None


def parse_event_date(value: Any) -> Optional[date]:
    """
    Parse an event date from heterogeneous input.

    Accepted notations, first match wins:
        1. D.M.YYYY (day.month.year)
        2. YYYY-M-D (year-month-day prefix)
        3. M/D/YYYY (month/day/year)
        4. anything dateutil can read as a calendar date

    Args:
        value: Raw date text, or an already parsed date/datetime

    Returns:
        Optional[date]: The calendar date, or None if the input is empty or
        no strategy yields a valid date. Unparseable input is logged, never raised.
    """
    if value is None:
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value

    text = str(value).strip()
    if not text:
        return None

    for pattern, to_parts in DATE_PATTERNS:
        match = pattern.match(text)
        if not match:
            continue
        parsed = _build_date(*to_parts(match.groups()))
        if parsed is not None:
            return parsed

    parsed = _parse_fallback(text)
    if parsed is not None:
        return parsed

    logger.warning(f"Could not parse date: \"{text}\"")
    return None


def normalize_date(value: Any) -> Optional[str]:
    """Return the date as 'YYYY-MM-DD', or None if it cannot be parsed."""
    parsed = parse_event_date(value)
    return parsed.isoformat() if parsed else None
