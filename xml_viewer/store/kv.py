# ------------------------------------------------------------
# Module: xml_viewer/store/kv.py
# Purpose: Key-value port for the persisted visible-columns snapshot.
# ------------------------------------------------------------

"""Key-value storage for viewer preferences.

The persisted state is the visible-columns snapshot, a JSON array stored
under `VISIBLE_COLUMNS_KEY`, plus the names the user hid under
`HIDDEN_COLUMNS_KEY`. Storage sits behind the small
`KeyValueStore` protocol so tests can inject `MemoryStore`.

Responsibilities
----------------
- Define the `KeyValueStore` protocol (`get` / `set`).
- Provide an in-memory store and a SQLite-backed store.
- Encode/decode the visible-columns snapshot; absence is not an error.
"""

from __future__ import annotations

import json
import logging
import sqlite3
import threading
import time
from pathlib import Path
from typing import Protocol

log = logging.getLogger("xmlviewer.store")

VISIBLE_COLUMNS_KEY = "visibleColumns"
HIDDEN_COLUMNS_KEY = "hiddenColumns"


class KeyValueStore(Protocol):
    def get(self, key: str) -> str | None: ...

    def set(self, key: str, value: str) -> None: ...


class MemoryStore:
    """Process-local store (tests, CLI)."""

    def __init__(self, initial: dict[str, str] | None = None) -> None:
        self._data: dict[str, str] = dict(initial or {})
        self._lock = threading.Lock()

    def get(self, key: str) -> str | None:
        with self._lock:
            return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        with self._lock:
            self._data[key] = value


class SqliteStore:
    """Single-table SQLite store; one short-lived connection per call."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)

    def _connect(self) -> sqlite3.Connection:
        """Open a connection with sane PRAGMAs (no DDL)."""
        self.path.parent.mkdir(parents=True, exist_ok=True)
        con = sqlite3.connect(self.path.as_posix(), timeout=30)
        con.execute("PRAGMA journal_mode=WAL;")
        con.execute("PRAGMA synchronous=NORMAL;")
        return con

    def ensure_initialized(self) -> None:
        """Idempotent DDL for the kv table. Call once at app startup."""
        con = self._connect()
        try:
            con.execute(
                """
                CREATE TABLE IF NOT EXISTS kv (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL,
                    updated_at INTEGER NOT NULL
                );
                """
            )
            con.commit()
        finally:
            con.close()

    def get(self, key: str) -> str | None:
        con = self._connect()
        try:
            row = con.execute("SELECT value FROM kv WHERE key=?", (key,)).fetchone()
        finally:
            con.close()
        return row[0] if row else None

    def set(self, key: str, value: str) -> None:
        con = self._connect()
        try:
            con.execute(
                "INSERT INTO kv(key, value, updated_at) VALUES (?, ?, ?) "
                "ON CONFLICT(key) DO UPDATE SET value=excluded.value, "
                "updated_at=excluded.updated_at",
                (key, value, int(time.time())),
            )
            con.commit()
        finally:
            con.close()


def _load_names(store: KeyValueStore, key: str) -> list[str] | None:
    raw = store.get(key)
    if raw is None:
        return None
    try:
        data = json.loads(raw)
    except json.JSONDecodeError:
        log.warning("ignoring corrupt %s value", key)
        return None
    if not isinstance(data, list) or not all(isinstance(c, str) for c in data):
        log.warning("ignoring non-list %s value", key)
        return None
    return data


def load_visible_columns(store: KeyValueStore) -> list[str] | None:
    """Read the stored snapshot; missing or unreadable → None (all visible)."""
    return _load_names(store, VISIBLE_COLUMNS_KEY)


def load_hidden_columns(store: KeyValueStore) -> list[str] | None:
    """Read the names the user hid, in hide order; missing or unreadable → None."""
    return _load_names(store, HIDDEN_COLUMNS_KEY)


def save_visible_columns(
    store: KeyValueStore, columns: list[str], hidden: list[str] | None = None
) -> None:
    """Overwrite the stored snapshot with `columns` (JSON array).

    `hidden`, when given, is written under `HIDDEN_COLUMNS_KEY` as well.
    """
    store.set(VISIBLE_COLUMNS_KEY, json.dumps(columns))
    if hidden is not None:
        store.set(HIDDEN_COLUMNS_KEY, json.dumps(hidden))
    log.debug("saved %s count=%d", VISIBLE_COLUMNS_KEY, len(columns))


__all__ = [
    "KeyValueStore",
    "MemoryStore",
    "SqliteStore",
    "HIDDEN_COLUMNS_KEY",
    "VISIBLE_COLUMNS_KEY",
    "load_hidden_columns",
    "load_visible_columns",
    "save_visible_columns",
]
