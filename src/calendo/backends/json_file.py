"""JSON file backend."""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any

logger = logging.getLogger("calendo.backends")


class JsonFileBackend:
    """Single JSON document holding every key - the local-storage analogue.

    File layout: {"todos": "<serialized value>", ...}
    """

    def __init__(self, path: Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def get(self, key: str) -> str | None:
        value = self._read().get(key)
        if value is None:
            return None
        if not isinstance(value, str):
            # Hand-edited file with an inline object; re-serialize it
            return json.dumps(value)
        return value

    def set(self, key: str, value: str) -> None:
        data = self._read()
        data[key] = value
        self._path.parent.mkdir(parents=True, exist_ok=True)
        self._path.write_text(json.dumps(data, indent=2, ensure_ascii=False))

    def _read(self) -> dict[str, Any]:
        if not self._path.exists():
            return {}
        try:
            content = self._path.read_text(encoding="utf-8")
            data = json.loads(content) if content.strip() else {}
        except (json.JSONDecodeError, UnicodeDecodeError):
            # Corrupted file - start empty, fixed on next write
            logger.warning("Ignoring unreadable storage file %s", self._path)
            return {}
        if not isinstance(data, dict):
            logger.warning("Ignoring storage file %s: top level is not an object", self._path)
            return {}
        return data
