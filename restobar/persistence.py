"""SQLite-backed key-value store of JSON collections."""

from __future__ import annotations

import json
import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Protocol

from restobar.config import DB_PATH

logger = logging.getLogger(__name__)

Rows = list[dict[str, Any]]


def _utc_now_iso() -> str:
    return datetime.now(timezone.utc).isoformat()


class CollectionStore(Protocol):
    """Named JSON arrays with synchronous get/set and no transactions."""

    def get(self, name: str) -> Rows | None: ...

    def set(self, name: str, rows: Rows) -> None: ...


class SqliteCollectionStore:
    """One row per collection holding the whole array as JSON text."""

    def __init__(self, path: str | Path = DB_PATH) -> None:
        self.path = Path(path)
        self.bootstrap_schema()

    def _connect(self) -> sqlite3.Connection:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        return sqlite3.connect(self.path)

    def bootstrap_schema(self) -> None:
        """Create the collections table if it does not already exist."""
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    CREATE TABLE IF NOT EXISTS collections (
                        name TEXT PRIMARY KEY,
                        payload TEXT NOT NULL,
                        updated_at TEXT NOT NULL
                    )
                    """
                )
        finally:
            conn.close()

    def get(self, name: str) -> Rows | None:
        conn = self._connect()
        try:
            row = conn.execute("SELECT payload FROM collections WHERE name = ?", (name,)).fetchone()
        finally:
            conn.close()
        if row is None:
            return None
        try:
            rows = json.loads(row[0])
        except json.JSONDecodeError:
            logger.warning("collection %s holds unreadable JSON, ignoring it", name)
            return None
        if not isinstance(rows, list):
            logger.warning("collection %s is not a JSON array, ignoring it", name)
            return None
        return rows

    def set(self, name: str, rows: Rows) -> None:
        payload = json.dumps(rows, ensure_ascii=False)
        conn = self._connect()
        try:
            with conn:
                conn.execute(
                    """
                    INSERT INTO collections (name, payload, updated_at) VALUES (?, ?, ?)
                    ON CONFLICT(name) DO UPDATE SET payload = excluded.payload, updated_at = excluded.updated_at
                    """,
                    (name, payload, _utc_now_iso()),
                )
        finally:
            conn.close()
        logger.debug("saved collection %s rows=%d", name, len(rows))


class NullCollectionStore:
    """Stand-in used when no backing store is available.

    Reads return nothing so callers fall back to their defaults; writes are
    dropped.
    """

    def get(self, name: str) -> Rows | None:
        return None

    def set(self, name: str, rows: Rows) -> None:
        logger.debug("store unavailable, dropped write to %s rows=%d", name, len(rows))


class MemoryCollectionStore:
    """Process-local store, handy for tests and throwaway sessions."""

    def __init__(self) -> None:
        self._data: dict[str, str] = {}

    def get(self, name: str) -> Rows | None:
        payload = self._data.get(name)
        if payload is None:
            return None
        return json.loads(payload)

    def set(self, name: str, rows: Rows) -> None:
        # Serialize so callers never share row objects with the store.
        self._data[name] = json.dumps(rows, ensure_ascii=False)


def open_store(path: str | Path | None = None) -> CollectionStore:
    """Open the SQLite store, degrading to a null store when it cannot be opened."""
    target = Path(path or DB_PATH)
    try:
        return SqliteCollectionStore(target)
    except (OSError, sqlite3.Error) as exc:
        logger.warning("store at %s unavailable (%s), running without persistence", target, exc)
        return NullCollectionStore()
