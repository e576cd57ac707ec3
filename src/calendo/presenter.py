"""Projects TodoStore state into a render call."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import TYPE_CHECKING, Any, Protocol

from calendo.calendar_grid import build_grid, day_label, month_title
from calendo.datekey import to_key
from calendo.models import CalendarView, DayCell

if TYPE_CHECKING:
    from calendo.store import StoreEvent, TodoStore


class Renderer(Protocol):
    """Protocol for anything that can draw a CalendarView."""

    def render(self, view: CalendarView) -> None:
        """Draw the month grid and the selected day's todos."""
        ...


class TodoPresenter:
    """Re-renders on every store event. Makes no business decisions."""

    def __init__(
        self,
        store: TodoStore,
        renderer: Renderer,
        today: Callable[[], date] | None = None,
    ):
        self._store = store
        self._renderer = renderer
        self._today = today or date.today
        self._unsubscribe: Callable[[], None] | None = None

    def start(self) -> None:
        """Subscribe to the store and draw the initial state."""
        if self._unsubscribe is None:
            self._unsubscribe = self._store.subscribe(self._on_event)
        self._store.notify_init()

    def stop(self) -> None:
        if self._unsubscribe is not None:
            self._unsubscribe()
            self._unsubscribe = None

    def build_view(self) -> CalendarView:
        store = self._store
        current = store.current_date
        selected = store.selected_date
        today = self._today()

        cells = tuple(
            DayCell(
                date=cell.date,
                key=to_key(cell.date),
                is_other_month=cell.is_other_month,
                is_today=cell.date == today,
                is_selected=cell.date == selected,
                has_todos=store.has_todos(to_key(cell.date)),
            )
            for cell in build_grid(current.year, current.month - 1)
        )
        selected_key = to_key(selected)

        return CalendarView(
            year=current.year,
            month=current.month,
            title=month_title(current.year, current.month),
            cells=cells,
            selected_date=selected,
            selected_key=selected_key,
            selected_label=day_label(selected),
            todos=tuple(store.get_todos_by_date(selected_key)),
            can_add=not store.is_full(selected_key),
        )

    def _on_event(self, event: StoreEvent, payload: dict[str, Any]) -> None:
        self._renderer.render(self.build_view())
