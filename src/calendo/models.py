"""Data models for calendo."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Any


@dataclass(frozen=True)
class TodoItem:
    """Immutable todo item."""

    id: int
    text: str
    completed: bool = False

    def toggled(self) -> TodoItem:
        """Return a copy with the completed flag flipped."""
        return replace(self, completed=not self.completed)

    def to_dict(self) -> dict[str, Any]:
        """Serialize to the persisted {id, text, completed} object."""
        return {"id": self.id, "text": self.text, "completed": self.completed}

    @classmethod
    def from_dict(cls, data: Any) -> TodoItem:
        """Build an item from a persisted object.

        Raises ValueError when a field is missing or has the wrong type.
        """
        if not isinstance(data, dict):
            raise ValueError(f"Todo entry is not an object: {data!r}")
        todo_id = data.get("id")
        text = data.get("text")
        completed = data.get("completed", False)
        # bool is an int subclass; reject it as an id
        if not isinstance(todo_id, int) or isinstance(todo_id, bool):
            raise ValueError(f"Invalid todo id: {todo_id!r}")
        if not isinstance(text, str) or not text.strip():
            raise ValueError(f"Invalid todo text: {text!r}")
        if not isinstance(completed, bool):
            raise ValueError(f"Invalid completed flag: {completed!r}")
        return cls(id=todo_id, text=text.strip(), completed=completed)


@dataclass(frozen=True)
class CalendarCell:
    """One slot of the month grid."""

    date: date
    is_other_month: bool


@dataclass(frozen=True)
class DayCell:
    """Grid cell decorated for rendering."""

    date: date
    key: str
    is_other_month: bool
    is_today: bool
    is_selected: bool
    has_todos: bool

    @property
    def day(self) -> int:
        return self.date.day


@dataclass(frozen=True)
class CalendarView:
    """Everything a renderer needs to draw the month and the selected day."""

    year: int
    month: int  # 1-12
    title: str
    cells: tuple[DayCell, ...]
    selected_date: date
    selected_key: str
    selected_label: str
    todos: tuple[TodoItem, ...]
    can_add: bool
