"""Flat key-value storage for the credential blob and cached resources."""

from __future__ import annotations

import sqlite3
from contextlib import closing, contextmanager
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Protocol


class KeyValueStore(Protocol):
    """String-to-string store; callers serialize their own values."""

    def get(self, key: str) -> Optional[str]:
        """Return the stored value or ``None`` when the key is absent."""

    def set(self, key: str, value: str) -> None:
        """Insert or overwrite ``key``."""

    def delete(self, key: str) -> None:
        """Remove ``key``; absent keys are ignored."""

    def contains(self, key: str) -> bool:
        """Return whether ``key`` is present."""

    def keys(self, prefix: str = "") -> List[str]:
        """Return every key starting with ``prefix``."""

    def clear(self) -> None:
        """Remove every entry."""


class SQLiteKeyValueStore:
    """Key-value store persisted in a single SQLite table."""

    def __init__(self, db_path: str) -> None:
        self._db_path = Path(db_path)
        if self._db_path.parent and not self._db_path.parent.exists():
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
        self._ensure_schema()

    @contextmanager
    def _connect(self) -> Iterator[sqlite3.Connection]:
        conn = sqlite3.connect(self._db_path, check_same_thread=False)
        conn.row_factory = sqlite3.Row
        # Commit or roll back, then release the file handle.
        with closing(conn), conn:
            yield conn

    def _ensure_schema(self) -> None:
        with self._connect() as conn:
            conn.execute(
                """
                CREATE TABLE IF NOT EXISTS kv_entries (
                    key TEXT PRIMARY KEY,
                    value TEXT NOT NULL
                )
                """
            )

    def get(self, key: str) -> Optional[str]:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT value FROM kv_entries WHERE key = ?", (key,)
            ).fetchone()
        if not row:
            return None
        return row["value"]

    def set(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("Key must be a non-empty string")
        with self._connect() as conn:
            conn.execute(
                """
                INSERT INTO kv_entries (key, value)
                VALUES (?, ?)
                ON CONFLICT(key) DO UPDATE SET value = excluded.value
                """,
                (key, value),
            )

    def delete(self, key: str) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_entries WHERE key = ?", (key,))

    def contains(self, key: str) -> bool:
        with self._connect() as conn:
            row = conn.execute(
                "SELECT 1 FROM kv_entries WHERE key = ?", (key,)
            ).fetchone()
        return row is not None

    def keys(self, prefix: str = "") -> List[str]:
        # LIKE treats % and _ as wildcards, so match the prefix with substr.
        with self._connect() as conn:
            rows = conn.execute(
                "SELECT key FROM kv_entries WHERE substr(key, 1, ?) = ? ORDER BY key",
                (len(prefix), prefix),
            ).fetchall()
        return [row["key"] for row in rows]

    def clear(self) -> None:
        with self._connect() as conn:
            conn.execute("DELETE FROM kv_entries")


class InMemoryKeyValueStore:
    """Process-local store for tests and ephemeral sessions."""

    def __init__(self, initial: Optional[Dict[str, str]] = None) -> None:
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        if not key:
            raise ValueError("Key must be a non-empty string")
        self._data[key] = value

    def delete(self, key: str) -> None:
        self._data.pop(key, None)

    def contains(self, key: str) -> bool:
        return key in self._data

    def keys(self, prefix: str = "") -> List[str]:
        return sorted(key for key in self._data if key.startswith(prefix))

    def clear(self) -> None:
        self._data.clear()


__all__ = ["InMemoryKeyValueStore", "KeyValueStore", "SQLiteKeyValueStore"]
