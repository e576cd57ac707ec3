"""Wiring: config -> backend -> store."""

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from calendo.config import Config
from calendo.storage import create_backend
from calendo.store import TodoStore


def open_store(
    config: Config,
    backend: str | None = None,
    today: Callable[[], date] | None = None,
) -> TodoStore:
    """Create the configured backend and load a TodoStore from it."""
    return TodoStore(
        create_backend(config, backend),
        storage_key=config.storage_key,
        today=today,
    )
