"""Base backend protocol."""

from __future__ import annotations

from typing import Protocol, runtime_checkable


@runtime_checkable
class KeyValueBackend(Protocol):
    """Protocol for string key-value persistence.

    Implement this to add new backends. Values are opaque strings; the
    store decides how to serialize into them.
    """

    def get(self, key: str) -> str | None:
        """Return the stored value, or None if the key is absent."""
        ...

    def set(self, key: str, value: str) -> None:
        """Store value under key, replacing any previous value."""
        ...
