"""Tests for backend selection and store wiring."""

from datetime import date
from pathlib import Path

import pytest

from calendo.backends.json_file import JsonFileBackend
from calendo.backends.memory import MemoryBackend
from calendo.backends.sqlite import SqliteBackend
from calendo.config import Config
from calendo.core import open_store
from calendo.storage import (
    _backend_registry,
    available_backends,
    create_backend,
    get_storage_path,
    register_backend,
)


class TestStoragePath:
    def test_json_path(self, tmp_path: Path):
        config = Config.load(tmp_path)
        assert get_storage_path(config, "json") == tmp_path / "todos.json"

    def test_sqlite_path(self, tmp_path: Path):
        config = Config.load(tmp_path)
        assert get_storage_path(config, "sqlite") == tmp_path / "todos.db"

    def test_memory_has_no_path(self, tmp_path: Path):
        assert get_storage_path(Config.load(tmp_path), "memory") is None


class TestCreateBackend:
    def test_default_is_json(self, tmp_path: Path):
        backend = create_backend(Config.load(tmp_path))
        assert isinstance(backend, JsonFileBackend)

    @pytest.mark.parametrize(
        "name, cls", [("memory", MemoryBackend), ("sqlite", SqliteBackend), ("json", JsonFileBackend)]
    )
    def test_named(self, tmp_path: Path, name, cls):
        assert isinstance(create_backend(Config.load(tmp_path), name), cls)

    def test_unknown_raises(self, tmp_path: Path):
        with pytest.raises(ValueError, match="Unknown backend"):
            create_backend(Config.load(tmp_path), "notion")

    def test_register_backend(self, tmp_path: Path):
        register_backend("custom", MemoryBackend)
        try:
            assert "custom" in available_backends()
            assert isinstance(create_backend(Config.load(tmp_path), "custom"), MemoryBackend)
        finally:
            del _backend_registry["custom"]


class TestOpenStore:
    @pytest.mark.parametrize("backend", ["json", "sqlite"])
    def test_round_trip_through_disk(self, tmp_path: Path, backend):
        config = Config.load(tmp_path)
        store = open_store(config, backend)
        item = store.add_todo("2025-06-15", "Buy milk")

        reopened = open_store(config, backend)

        assert reopened.get_todos_by_date("2025-06-15") == [item]

    def test_uses_configured_storage_key(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch):
        monkeypatch.setenv("CALENDO_STORAGE_KEY", "calendar")
        config = Config.load(tmp_path)

        open_store(config).add_todo("2025-06-15", "x")

        assert JsonFileBackend(tmp_path / "todos.json").get("calendar") is not None

    def test_today_injection(self, tmp_path: Path):
        store = open_store(Config.load(tmp_path), "memory", today=lambda: date(2020, 2, 29))
        assert store.selected_date == date(2020, 2, 29)
