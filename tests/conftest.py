"""Pytest fixtures for calendo tests."""

from datetime import date

import pytest

from calendo.backends.memory import MemoryBackend
from calendo.store import TodoStore

FIXED_TODAY = date(2025, 6, 15)


@pytest.fixture(autouse=True)
def clear_caches():
    """Clear module-level caches before each test."""
    from calendo.config import clear_config_cache

    clear_config_cache()

    yield

    clear_config_cache()


@pytest.fixture
def backend() -> MemoryBackend:
    return MemoryBackend()


@pytest.fixture
def store(backend: MemoryBackend) -> TodoStore:
    """Store pinned to 2025-06-15 with an in-memory backend."""
    return TodoStore(backend, today=lambda: FIXED_TODAY)


class EventRecorder:
    """Subscriber that records (event, payload) pairs."""

    def __init__(self):
        self.calls = []

    def __call__(self, event, payload):
        self.calls.append((event, payload))

    @property
    def events(self):
        return [event for event, _ in self.calls]


@pytest.fixture
def recorder(store: TodoStore) -> EventRecorder:
    rec = EventRecorder()
    store.subscribe(rec)
    return rec


@pytest.fixture
def recorder_factory():
    """Subscribe a fresh EventRecorder to any store."""

    def subscribe(target: TodoStore) -> EventRecorder:
        rec = EventRecorder()
        target.subscribe(rec)
        return rec

    return subscribe
