"""Canonical date keys and small month arithmetic helpers."""

from __future__ import annotations

import calendar
import re
from datetime import date, datetime

# Matches: 2025-06-15
DATE_KEY_PATTERN = re.compile(r"^(\d{4})-(\d{2})-(\d{2})$")


def to_key(d: date) -> str:
    """Format a date as YYYY-MM-DD using its own calendar fields.

    A datetime is reduced to its wall-clock date; no timezone conversion.
    """
    if isinstance(d, datetime):
        d = d.date()
    return f"{d.year:04d}-{d.month:02d}-{d.day:02d}"


def parse_key(key: str) -> date:
    """Parse a YYYY-MM-DD key back into a date.

    Raises:
        ValueError: if the key is malformed or not a real calendar day
    """
    match = DATE_KEY_PATTERN.fullmatch(key) if isinstance(key, str) else None
    if not match:
        raise ValueError(f"Invalid date key: {key!r}. Use YYYY-MM-DD")
    year, month, day = (int(part) for part in match.groups())
    return date(year, month, day)


def is_date_key(key: object) -> bool:
    """Return True if key is a well-formed, real YYYY-MM-DD key."""
    try:
        parse_key(key)  # type: ignore[arg-type]
    except ValueError:
        return False
    return True


def same_month(a: date, b: date) -> bool:
    return a.year == b.year and a.month == b.month


def shift_month(d: date, delta: int) -> date:
    """Move d by delta months, clamping the day to the target month length."""
    index = d.year * 12 + (d.month - 1) + delta
    year, month0 = divmod(index, 12)
    last_day = calendar.monthrange(year, month0 + 1)[1]
    return date(year, month0 + 1, min(d.day, last_day))
