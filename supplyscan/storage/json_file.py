"""Store each collection as ``<key>.json`` in a data directory."""

from __future__ import annotations

import json
import logging
import os
import tempfile
from pathlib import Path
from typing import Any

from ..errors import StorageError
from . import StorageBackend

logger = logging.getLogger(__name__)


class JSONFileStorage(StorageBackend):
    """Directory of JSON files, one per key.

    Writes go to a temporary file that replaces the target, so a crash
    never leaves a half-written collection behind.
    """

    def __init__(self, directory: str | Path = "~/.local/share/supplyscan") -> None:
        self._dir = Path(directory).expanduser()

    @property
    def directory(self) -> Path:
        return self._dir

    def _path(self, key: str) -> Path:
        return self._dir / f"{key}.json"

    def get(self, key: str) -> list[Any] | None:
        path = self._path(key)
        if not path.exists():
            return None
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, UnicodeDecodeError, json.JSONDecodeError) as e:
            raise StorageError(f"Corrupt or unreadable data in {path}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Expected a list in {path}, got {type(data).__name__}")
        return data

    def set(self, key: str, value: list[Any]) -> None:
        self._dir.mkdir(parents=True, exist_ok=True)
        path = self._path(key)
        fd, tmp = tempfile.mkstemp(dir=self._dir, prefix=f".{key}.", suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(value, f, ensure_ascii=False, indent=2)
            os.replace(tmp, path)
        except BaseException:
            Path(tmp).unlink(missing_ok=True)
            raise
        logger.debug("Wrote %d records to %s", len(value), path)
