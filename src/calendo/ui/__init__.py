"""UI module."""

from .calendar_panel import RichCalendarRenderer, build_day_list, build_month_table, format_todo

__all__ = [
    "RichCalendarRenderer",
    "build_day_list",
    "build_month_table",
    "format_todo",
]
