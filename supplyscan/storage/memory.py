"""In-process storage, used for tests and throwaway sessions."""

from __future__ import annotations

import copy
from typing import Any

from . import StorageBackend


class MemoryStorage(StorageBackend):
    def __init__(self, initial: dict[str, list[Any]] | None = None) -> None:
        self._data: dict[str, list[Any]] = copy.deepcopy(initial or {})

    def get(self, key: str) -> list[Any] | None:
        value = self._data.get(key)
        return copy.deepcopy(value) if value is not None else None

    def set(self, key: str, value: list[Any]) -> None:
        self._data[key] = copy.deepcopy(value)
