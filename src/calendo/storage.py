"""Backend registry and storage path calculation."""

from __future__ import annotations

import importlib
from pathlib import Path
from typing import TYPE_CHECKING

from calendo.config import Config

if TYPE_CHECKING:
    from calendo.backends.base import KeyValueBackend

# Maps backend name -> backend class (or "module:Class" string for lazy loading)
_backend_registry: dict[str, type | str] = {
    "memory": "calendo.backends.memory:MemoryBackend",
    "json": "calendo.backends.json_file:JsonFileBackend",
    "sqlite": "calendo.backends.sqlite:SqliteBackend",
}

_FILENAMES = {
    "json": "todos.json",
    "sqlite": "todos.db",
}


def available_backends() -> list[str]:
    return sorted(_backend_registry)


def register_backend(name: str, backend: type | str) -> None:
    """Register an extra backend class under name."""
    _backend_registry[name] = backend


def _resolve_backend_class(backend_ref: str | type) -> type:
    """Resolve backend reference to actual class (lazy import)."""
    if isinstance(backend_ref, type):
        return backend_ref
    module_path, class_name = backend_ref.rsplit(":", 1)
    module = importlib.import_module(module_path)
    return getattr(module, class_name)


def get_storage_path(config: Config, backend: str) -> Path | None:
    """Calculate the storage file for a backend, None if it keeps no file."""
    if backend == "memory":
        return None
    filename = _FILENAMES.get(backend, f"todos.{backend}")
    return config.config_dir / filename


def create_backend(config: Config, name: str | None = None) -> KeyValueBackend:
    """Instantiate the named (or configured) backend.

    Raises:
        ValueError: unknown backend name
    """
    backend_name = name or config.default_backend
    if backend_name not in _backend_registry:
        available = ", ".join(available_backends())
        raise ValueError(f"Unknown backend: {backend_name}. Available: {available}")

    backend_cls = _resolve_backend_class(_backend_registry[backend_name])
    path = get_storage_path(config, backend_name)
    if path is None:
        return backend_cls()
    return backend_cls(path)
