"""Date-indexed todo state with synchronous change notifications."""

from __future__ import annotations

import json
import logging
import sqlite3
import time
from collections.abc import Callable
from datetime import date
from enum import Enum
from typing import TYPE_CHECKING, Any

from calendo.datekey import is_date_key, same_month, shift_month
from calendo.errors import CapacityError, ValidationError
from calendo.models import TodoItem

if TYPE_CHECKING:
    from calendo.backends.base import KeyValueBackend

logger = logging.getLogger("calendo.store")

MAX_TODOS_PER_DAY = 5
DEFAULT_STORAGE_KEY = "todos"


class StoreEvent(Enum):
    """Notification names emitted by TodoStore."""

    INIT = "init"
    CURRENT_DATE_CHANGED = "current_date_changed"
    SELECTED_DATE_CHANGED = "selected_date_changed"
    TODO_ADDED = "todo_added"
    TODO_DELETED = "todo_deleted"
    TODO_TOGGLED = "todo_toggled"


Subscriber = Callable[[StoreEvent, dict[str, Any]], None]


def _millis() -> int:
    return time.time_ns() // 1_000_000


def deserialize_todos(raw: str | None) -> dict[str, list[TodoItem]]:
    """Parse persisted content into a todo mapping, skipping anything malformed.

    Never raises: unparsable content or a non-object top level yields {}.
    """
    if raw is None:
        return {}
    try:
        data = json.loads(raw)
    except (TypeError, ValueError):
        logger.warning("Stored todos are not valid JSON; starting empty")
        return {}
    if not isinstance(data, dict):
        logger.warning("Stored todos are not an object; starting empty")
        return {}

    todos: dict[str, list[TodoItem]] = {}
    for key, entries in data.items():
        if not is_date_key(key) or not isinstance(entries, list):
            logger.warning("Skipping stored entry %r", key)
            continue
        items: list[TodoItem] = []
        seen: set[int] = set()
        for entry in entries:
            try:
                item = TodoItem.from_dict(entry)
            except ValueError as e:
                logger.warning("Skipping stored todo under %s: %s", key, e)
                continue
            if item.id in seen:
                logger.warning("Skipping duplicate todo id %s under %s", item.id, key)
                continue
            seen.add(item.id)
            items.append(item)
        if len(items) > MAX_TODOS_PER_DAY:
            logger.warning("Truncating %s to %d todos", key, MAX_TODOS_PER_DAY)
            items = items[:MAX_TODOS_PER_DAY]
        if items:
            todos[key] = items
    return todos


def serialize_todos(todos: dict[str, list[TodoItem]]) -> str:
    return json.dumps(
        {key: [item.to_dict() for item in items] for key, items in todos.items()},
        ensure_ascii=False,
    )


class TodoStore:
    """Owns the date key -> todo list mapping.

    All mutation goes through the public methods. Every successful mutation
    is written to the backend, then every subscriber is called in
    subscription order before the method returns.
    """

    def __init__(
        self,
        backend: KeyValueBackend,
        storage_key: str = DEFAULT_STORAGE_KEY,
        today: Callable[[], date] | None = None,
        clock: Callable[[], int] | None = None,
    ):
        self._backend = backend
        self._storage_key = storage_key
        self._clock = clock or _millis
        today_value = (today or date.today)()
        self._current_date = today_value
        self._selected_date = today_value
        self._subscribers: list[Subscriber] = []
        self._todos = self._load()
        self._last_id = max(
            (item.id for items in self._todos.values() for item in items), default=0
        )

    # --- Read access ---

    @property
    def current_date(self) -> date:
        return self._current_date

    @property
    def selected_date(self) -> date:
        return self._selected_date

    @property
    def storage_key(self) -> str:
        return self._storage_key

    def get_todos(self) -> dict[str, list[TodoItem]]:
        """Snapshot of the whole mapping; safe to mutate."""
        return {key: list(items) for key, items in self._todos.items()}

    def get_todos_by_date(self, date_key: str) -> list[TodoItem]:
        return list(self._todos.get(date_key, ()))

    def has_todos(self, date_key: str) -> bool:
        return bool(self._todos.get(date_key))

    def is_full(self, date_key: str) -> bool:
        return len(self._todos.get(date_key, ())) >= MAX_TODOS_PER_DAY

    # --- Observers ---

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Register callback; returns a function that unregisters it."""
        self._subscribers.append(callback)

        def unsubscribe() -> None:
            if callback in self._subscribers:
                self._subscribers.remove(callback)

        return unsubscribe

    def notify_init(self) -> None:
        """Announce the initial state to current subscribers."""
        self._notify(StoreEvent.INIT)

    # --- Date navigation ---

    def set_current_date(self, d: date) -> None:
        self._current_date = d
        self._notify(StoreEvent.CURRENT_DATE_CHANGED)

    def set_selected_date(self, d: date) -> None:
        """Select a day; moves the displayed month along when it differs.

        Emits CURRENT_DATE_CHANGED (month moved) or SELECTED_DATE_CHANGED,
        never both.
        """
        self._selected_date = d
        if not same_month(self._current_date, d):
            self.set_current_date(d)
        else:
            self._notify(StoreEvent.SELECTED_DATE_CHANGED)

    def shift_month(self, delta: int) -> None:
        """Move the displayed month by delta months."""
        self.set_current_date(shift_month(self._current_date, delta))

    # --- Mutations ---

    def add_todo(self, date_key: str, text: str) -> TodoItem:
        """Append a new todo to a day.

        Raises:
            ValueError: date_key is not a YYYY-MM-DD key
            ValidationError: text is empty after trimming
            CapacityError: the day already holds MAX_TODOS_PER_DAY todos
        """
        if not is_date_key(date_key):
            raise ValueError(f"Invalid date key: {date_key!r}. Use YYYY-MM-DD")
        text = (text or "").strip()
        if not text:
            raise ValidationError()
        if self.is_full(date_key):
            raise CapacityError(date_key, MAX_TODOS_PER_DAY)

        todo = TodoItem(id=self._next_id(), text=text, completed=False)
        self._todos.setdefault(date_key, []).append(todo)
        logger.debug("Added todo %s on %s", todo.id, date_key)
        self._save()
        self._notify(StoreEvent.TODO_ADDED, {"date_key": date_key, "todo": todo})
        return todo

    def delete_todo(self, date_key: str, todo_id: int) -> None:
        """Remove a todo; silently ignored if the day has no todos."""
        items = self._todos.get(date_key)
        if items is None:
            return

        remaining = [item for item in items if item.id != todo_id]
        if remaining:
            self._todos[date_key] = remaining
        else:
            del self._todos[date_key]
        logger.debug("Deleted todo %s on %s", todo_id, date_key)
        self._save()
        self._notify(StoreEvent.TODO_DELETED, {"date_key": date_key, "id": todo_id})

    def toggle_todo(self, date_key: str, todo_id: int) -> None:
        """Flip a todo's completed flag; silently ignored if not found."""
        items = self._todos.get(date_key)
        if items is None:
            return

        for index, item in enumerate(items):
            if item.id == todo_id:
                toggled = item.toggled()
                items[index] = toggled
                break
        else:
            return

        logger.debug("Toggled todo %s on %s -> %s", todo_id, date_key, toggled.completed)
        self._save()
        self._notify(
            StoreEvent.TODO_TOGGLED,
            {"date_key": date_key, "id": todo_id, "completed": toggled.completed},
        )

    # --- Internals ---

    def _next_id(self) -> int:
        candidate = self._clock()
        if candidate <= self._last_id:
            candidate = self._last_id + 1
        self._last_id = candidate
        return candidate

    def _snapshot(self, data: dict[str, Any] | None) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "current_date": self._current_date,
            "selected_date": self._selected_date,
            "todos": self.get_todos(),
        }
        if data:
            payload.update(data)
        return payload

    def _notify(self, event: StoreEvent, data: dict[str, Any] | None = None) -> None:
        # Copy so a callback may unsubscribe while we iterate
        for callback in list(self._subscribers):
            callback(event, self._snapshot(data))

    def _load(self) -> dict[str, list[TodoItem]]:
        try:
            raw = self._backend.get(self._storage_key)
        except (OSError, ValueError, sqlite3.Error) as e:
            logger.warning("Could not read stored todos: %s", e)
            return {}
        return deserialize_todos(raw)

    def _save(self) -> None:
        try:
            self._backend.set(self._storage_key, serialize_todos(self._todos))
        except (OSError, ValueError, sqlite3.Error) as e:
            logger.warning("Could not persist todos: %s", e)
