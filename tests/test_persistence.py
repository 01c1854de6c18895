from __future__ import annotations

import sqlite3

from restobar.persistence import (
    MemoryCollectionStore,
    NullCollectionStore,
    SqliteCollectionStore,
    open_store,
)
from restobar.repository import RestobarRepository


def test_sqlite_store_returns_none_for_missing_collection(tmp_path):
    store = SqliteCollectionStore(tmp_path / "db" / "restobar.db")

    assert store.get("restobar_orders") is None


def test_sqlite_store_persists_across_instances(tmp_path):
    path = tmp_path / "restobar.db"
    SqliteCollectionStore(path).set("restobar_tables", [{"number": 1}, {"number": 2}])

    assert SqliteCollectionStore(path).get("restobar_tables") == [{"number": 1}, {"number": 2}]


def test_sqlite_store_overwrites_whole_collection(tmp_path):
    store = SqliteCollectionStore(tmp_path / "restobar.db")
    store.set("restobar_tables", [{"number": 1}])
    store.set("restobar_tables", [{"number": 9}])

    assert store.get("restobar_tables") == [{"number": 9}]


def test_sqlite_store_ignores_unreadable_payload(tmp_path):
    path = tmp_path / "restobar.db"
    store = SqliteCollectionStore(path)
    conn = sqlite3.connect(path)
    with conn:
        conn.execute(
            "INSERT INTO collections (name, payload, updated_at) VALUES (?, ?, ?)",
            ("restobar_orders", "{not json", "2026-10-19T00:00:00+00:00"),
        )
    conn.close()

    assert store.get("restobar_orders") is None


def test_memory_store_does_not_share_rows():
    store = MemoryCollectionStore()
    rows = [{"number": 1}]
    store.set("restobar_tables", rows)
    rows.append({"number": 2})

    assert store.get("restobar_tables") == [{"number": 1}]


def test_null_store_degrades_to_defaults():
    repo = RestobarRepository(NullCollectionStore())
    repo.save_orders([])

    assert repo.get_orders() == []
    assert len(repo.get_tables()) == 20
    assert len(repo.get_products()) == 11


def test_open_store_falls_back_when_path_is_unusable(tmp_path):
    # A directory cannot be opened as a database file.
    store = open_store(tmp_path)

    assert isinstance(store, NullCollectionStore)


def test_open_store_uses_sqlite(tmp_path):
    assert isinstance(open_store(tmp_path / "restobar.db"), SqliteCollectionStore)
