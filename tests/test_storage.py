"""Tests for storage backends and the backend factory."""

import sqlite3

import pytest

from supplyscan.config import AppConfig, StorageConfig
from supplyscan.errors import StorageError
from supplyscan.storage import create_storage, schema
from supplyscan.storage.json_file import JSONFileStorage
from supplyscan.storage.memory import MemoryStorage
from supplyscan.storage.schema import _SCHEMA_VERSION, ensure_schema
from supplyscan.storage.sqlite import SQLiteStorage


@pytest.fixture(params=["memory", "json", "sqlite"])
def backend(request, tmp_path):
    match request.param:
        case "memory":
            store = MemoryStorage()
        case "json":
            store = JSONFileStorage(tmp_path / "data")
        case "sqlite":
            store = SQLiteStorage(tmp_path / "data" / "test.db")
    yield store
    store.close()


def test_get_unset_key_returns_none(backend):
    assert backend.get("catalogue") is None


def test_set_then_get(backend):
    records = [{"code": "A1", "description": "Tube"}]
    backend.set("catalogue", records)
    assert backend.get("catalogue") == records


def test_set_replaces_whole_collection(backend):
    backend.set("orders", [{"id": "1"}, {"id": "2"}])
    backend.set("orders", [{"id": "3"}])
    assert backend.get("orders") == [{"id": "3"}]


def test_keys_are_independent(backend):
    backend.set("catalogue", [1])
    backend.set("orders", [2])
    assert backend.get("catalogue") == [1]
    assert backend.get("orders") == [2]


def test_unicode_round_trip(backend):
    backend.set("catalogue", [{"description": "Gants nitrile – taille M"}])
    assert backend.get("catalogue")[0]["description"] == "Gants nitrile – taille M"


def test_memory_storage_copies_values():
    store = MemoryStorage()
    records = [{"code": "A1"}]
    store.set("catalogue", records)
    records[0]["code"] = "CHANGED"
    store.get("catalogue")[0]["code"] = "ALSO CHANGED"
    assert store.get("catalogue") == [{"code": "A1"}]


class TestJSONFileStorage:
    def test_writes_one_file_per_key(self, tmp_path):
        store = JSONFileStorage(tmp_path)
        store.set("catalogue", [])
        store.set("orders", [])
        names = sorted(p.name for p in tmp_path.iterdir())
        assert names == ["catalogue.json", "orders.json"]

    def test_corrupt_file_raises(self, tmp_path):
        (tmp_path / "orders.json").write_text("{not json", encoding="utf-8")
        with pytest.raises(StorageError):
            JSONFileStorage(tmp_path).get("orders")

    def test_undecodable_file_raises(self, tmp_path):
        (tmp_path / "catalogue.json").write_bytes(b"\xff\xfe[")
        with pytest.raises(StorageError):
            JSONFileStorage(tmp_path).get("catalogue")

    def test_unreadable_path_raises(self, tmp_path):
        (tmp_path / "catalogue.json").mkdir()
        with pytest.raises(StorageError):
            JSONFileStorage(tmp_path).get("catalogue")

    def test_non_list_raises(self, tmp_path):
        (tmp_path / "orders.json").write_text('{"a": 1}', encoding="utf-8")
        with pytest.raises(StorageError):
            JSONFileStorage(tmp_path).get("orders")


class TestSQLiteSchema:
    def test_ensure_schema_creates_tables(self, tmp_path):
        conn = ensure_schema(tmp_path / "test.db")
        tables = conn.execute(
            "SELECT name FROM sqlite_master WHERE type='table' ORDER BY name"
        ).fetchall()
        table_names = {row["name"] for row in tables}
        assert {"kv_store", "schema_version"} <= table_names
        conn.close()

    def test_ensure_schema_creates_parent_dirs(self, tmp_path):
        db_path = tmp_path / "sub" / "dir" / "test.db"
        conn = ensure_schema(db_path)
        assert db_path.exists()
        conn.close()

    def test_ensure_schema_sets_version(self, tmp_path):
        conn = ensure_schema(tmp_path / "test.db")
        row = conn.execute("SELECT version FROM schema_version").fetchone()
        assert row["version"] == _SCHEMA_VERSION
        conn.close()

    def test_ensure_schema_idempotent(self, tmp_path):
        db_path = tmp_path / "test.db"
        ensure_schema(db_path).close()
        conn = ensure_schema(db_path)
        count = conn.execute("SELECT COUNT(*) AS n FROM schema_version").fetchone()["n"]
        assert count == 1
        conn.close()

    def test_ensure_schema_applies_pending_migrations(self, tmp_path, monkeypatch):
        db_path = tmp_path / "test.db"
        ensure_schema(db_path).close()

        monkeypatch.setitem(
            schema._MIGRATIONS, 2, "CREATE TABLE IF NOT EXISTS extra (id INTEGER);"
        )
        conn = ensure_schema(db_path)
        rows = conn.execute("SELECT version FROM schema_version ORDER BY version")
        versions = [r["version"] for r in rows]
        assert versions == [1, 2]
        assert conn.execute("SELECT COUNT(*) AS n FROM extra").fetchone()["n"] == 0
        conn.close()

    def test_sqlite_persists_across_connections(self, tmp_path):
        db_path = tmp_path / "test.db"
        first = SQLiteStorage(db_path)
        first.set("orders", [{"id": "1"}])
        first.close()

        second = SQLiteStorage(db_path)
        assert second.get("orders") == [{"id": "1"}]
        second.close()

    def test_sqlite_corrupt_value_raises(self, tmp_path):
        db_path = tmp_path / "test.db"
        store = SQLiteStorage(db_path)
        store.set("orders", [])
        conn = sqlite3.connect(str(db_path))
        conn.execute("UPDATE kv_store SET value = '{oops' WHERE key = 'orders'")
        conn.commit()
        conn.close()
        with pytest.raises(StorageError):
            store.get("orders")
        store.close()


class TestCreateStorage:
    def test_json_backend(self, tmp_path):
        config = AppConfig(storage=StorageConfig(backend="json", path=str(tmp_path)))
        store = create_storage(config)
        assert isinstance(store, JSONFileStorage)
        assert store.directory == tmp_path

    def test_sqlite_backend_with_directory(self, tmp_path):
        config = AppConfig(storage=StorageConfig(backend="sqlite", path=str(tmp_path)))
        store = create_storage(config)
        assert isinstance(store, SQLiteStorage)
        store.set("orders", [])
        store.close()
        assert (tmp_path / "supplyscan.db").exists()

    def test_sqlite_backend_with_file(self, tmp_path):
        config = AppConfig(
            storage=StorageConfig(backend="sqlite", path=str(tmp_path / "mine.db"))
        )
        store = create_storage(config)
        store.set("orders", [])
        store.close()
        assert (tmp_path / "mine.db").exists()

    def test_memory_backend(self):
        config = AppConfig(storage=StorageConfig(backend="memory"))
        assert isinstance(create_storage(config), MemoryStorage)

    def test_unknown_backend(self):
        config = AppConfig(storage=StorageConfig(backend="redis"))
        with pytest.raises(ValueError, match="redis"):
            create_storage(config)
