"""Rich rendering of a CalendarView."""

from __future__ import annotations

from rich.console import Console, Group
from rich.markup import escape
from rich.table import Table
from rich.text import Text

from calendo.calendar_grid import DAYS_PER_WEEK, WEEKDAY_NAMES, grid_rows
from calendo.models import CalendarView, DayCell, TodoItem

# Colorblind-safe: blue checkmark for done
DONE_MARK = "[blue]✓[/blue]"
PENDING_MARK = "[dim]•[/dim]"
HAS_TODOS_MARK = "•"


def day_style(cell: DayCell) -> str:
    """Rich style for a grid cell."""
    styles = []
    if cell.is_other_month:
        styles.append("dim")
    if cell.is_today:
        styles.append("bold")
    if cell.is_selected:
        styles.append("reverse")
    return " ".join(styles)


def format_day(cell: DayCell) -> Text:
    label = f"{cell.day:>2}{HAS_TODOS_MARK if cell.has_todos else ' '}"
    return Text(label, style=day_style(cell))


def format_todo(item: TodoItem, show_id: bool = True) -> str:
    mark = DONE_MARK if item.completed else PENDING_MARK
    text = escape(item.text)
    if item.completed:
        text = f"[dim strike]{text}[/dim strike]"
    if show_id:
        return f"{mark} {text} [dim]({item.id})[/dim]"
    return f"{mark} {text}"


def build_month_table(view: CalendarView) -> Table:
    table = Table(title=view.title, show_header=True, header_style="bold", show_lines=False)
    for name in WEEKDAY_NAMES:
        table.add_column(name[:2], justify="right", width=4)
    for week in grid_rows(list(view.cells)):
        table.add_row(*(format_day(cell) for cell in week[:DAYS_PER_WEEK]))
    return table


def build_day_list(view: CalendarView, show_id: bool = True) -> Group:
    lines: list[str] = [f"[bold]{view.selected_label}[/bold]"]
    if not view.todos:
        lines.append("[dim]No todos[/dim]")
    else:
        lines.extend(format_todo(item, show_id) for item in view.todos)
    if not view.can_add:
        lines.append("[yellow]Day is full[/yellow]")
    return Group(*lines)


class RichCalendarRenderer:
    """Renderer that prints the month grid and the day's todos to a Console."""

    def __init__(self, console: Console | None = None, show_id: bool = True):
        self.console = console or Console()
        self.show_id = show_id

    def render(self, view: CalendarView) -> None:
        self.console.print(build_month_table(view))
        self.console.print(build_day_list(view, self.show_id))
