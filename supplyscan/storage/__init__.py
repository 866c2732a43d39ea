"""Key-value storage backends for whole persisted collections."""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path
from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from ..config import AppConfig


class StorageBackend(ABC):
    """Abstract get/set store of JSON-serializable collections.

    Collections are always read and written whole.
    """

    @abstractmethod
    def get(self, key: str) -> list[Any] | None:
        """Return the collection stored under ``key``, or None if unset."""
        ...

    @abstractmethod
    def set(self, key: str, value: list[Any]) -> None:
        """Replace the collection stored under ``key``."""
        ...

    def close(self) -> None:
        pass


def create_storage(config: AppConfig) -> StorageBackend:
    """Create a storage backend based on configuration."""
    backend_name = config.storage.backend

    match backend_name:
        case "json":
            from .json_file import JSONFileStorage

            return JSONFileStorage(config.storage.path)
        case "sqlite":
            from .sqlite import SQLiteStorage

            # A directory path gets the default database file name
            db_path = Path(config.storage.path)
            if db_path.suffix != ".db":
                db_path = db_path / "supplyscan.db"
            return SQLiteStorage(db_path)
        case "memory":
            from .memory import MemoryStorage

            return MemoryStorage()
        case _:
            raise ValueError(
                f"Unknown storage backend: {backend_name!r} "
                f"(choose from json / sqlite / memory)"
            )


__all__ = ["StorageBackend", "create_storage"]
