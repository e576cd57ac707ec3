"""Tests for in-memory backend."""

from calendo.backends.base import KeyValueBackend
from calendo.backends.memory import MemoryBackend


class TestMemoryBackend:
    def test_satisfies_protocol(self):
        assert isinstance(MemoryBackend(), KeyValueBackend)

    def test_initial_data_is_copied(self):
        initial = {"todos": "{}"}
        backend = MemoryBackend(initial)
        backend.set("todos", "changed")

        assert initial == {"todos": "{}"}
        assert backend.get("todos") == "changed"
