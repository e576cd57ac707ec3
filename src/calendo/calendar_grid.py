"""Month grid computation.

The grid always has 6 weeks of 7 days starting on Sunday, so months that
span 4, 5 or 6 calendar rows render uniformly.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta

from calendo.models import CalendarCell

GRID_SIZE = 42
DAYS_PER_WEEK = 7

WEEKDAY_NAMES = ("Sunday", "Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday")
MONTH_NAMES = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def normalize_month(year: int, month: int) -> tuple[int, int]:
    """Carry an out-of-range zero-based month into the year.

    normalize_month(2024, 12) -> (2025, 0); normalize_month(2024, -1) -> (2023, 11)
    """
    carry, month = divmod(month, 12)
    return year + carry, month


def sunday_offset(d: date) -> int:
    """Weekday index with Sunday = 0."""
    return (d.weekday() + 1) % DAYS_PER_WEEK


def build_grid(year: int, month: int) -> list[CalendarCell]:
    """Compute the 42 cells shown for a month.

    Args:
        year: Calendar year
        month: Zero-based month (0 = January); values outside 0-11 carry
            into the year

    Returns:
        Trailing days of the previous month, every day of the month, then
        leading days of the next month, all flagged with is_other_month.
    """
    year, month = normalize_month(year, month)
    first = date(year, month + 1, 1)
    days_in_month = calendar.monthrange(year, month + 1)[1]
    offset = sunday_offset(first)

    cells: list[CalendarCell] = []

    # Previous month: prev_last - offset + 1 .. prev_last
    prev_last = first - timedelta(days=1)
    for back in range(offset - 1, -1, -1):
        cells.append(CalendarCell(prev_last - timedelta(days=back), True))

    for day in range(1, days_in_month + 1):
        cells.append(CalendarCell(date(year, month + 1, day), False))

    next_first = first + timedelta(days=days_in_month)
    for ahead in range(GRID_SIZE - len(cells)):
        cells.append(CalendarCell(next_first + timedelta(days=ahead), True))

    return cells


def grid_rows(cells: list) -> list[list]:
    """Split a flat grid into weeks."""
    return [cells[i : i + DAYS_PER_WEEK] for i in range(0, len(cells), DAYS_PER_WEEK)]


def month_title(year: int, month: int) -> str:
    """Fixed-locale month heading, e.g. "June 2025" (month is 1-12)."""
    return f"{MONTH_NAMES[month - 1]} {year}"


def day_label(d: date) -> str:
    """Fixed-locale long date, e.g. "Sunday, June 15, 2025"."""
    return f"{WEEKDAY_NAMES[sunday_offset(d)]}, {MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"
