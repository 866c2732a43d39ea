"""SQLite-backed key-value store."""

from __future__ import annotations

import json
import sqlite3
from pathlib import Path
from typing import Any

from ..errors import StorageError
from . import StorageBackend
from .schema import ensure_schema


class SQLiteStorage(StorageBackend):
    """Keeps each collection as a JSON document in the ``kv_store`` table."""

    def __init__(self, db_path: str | Path = "~/.local/share/supplyscan/supplyscan.db") -> None:
        self._db_path = db_path
        self._conn: sqlite3.Connection | None = None

    def _get_conn(self) -> sqlite3.Connection:
        if self._conn is None:
            self._conn = ensure_schema(self._db_path)
        return self._conn

    def close(self) -> None:
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def get(self, key: str) -> list[Any] | None:
        conn = self._get_conn()
        row = conn.execute(
            "SELECT value FROM kv_store WHERE key = ?", (key,)
        ).fetchone()
        if row is None:
            return None
        try:
            data = json.loads(row["value"])
        except json.JSONDecodeError as e:
            raise StorageError(f"Corrupt data for key {key!r}: {e}") from e
        if not isinstance(data, list):
            raise StorageError(f"Expected a list for key {key!r}")
        return data

    def set(self, key: str, value: list[Any]) -> None:
        conn = self._get_conn()
        conn.execute(
            """INSERT INTO kv_store (key, value) VALUES (?, ?)
               ON CONFLICT(key) DO UPDATE
               SET value = excluded.value,
                   updated_at = datetime('now', 'localtime')""",
            (key, json.dumps(value, ensure_ascii=False)),
        )
        conn.commit()
