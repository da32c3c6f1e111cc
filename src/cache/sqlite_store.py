# src/cache/sqlite_store.py - v2
"""SQLite-based cache store (CACHE_BACKEND=sqlite, the default).

Uses stdlib sqlite3 with a single connection owned by the event-loop
thread. ``content_hash`` is the primary key, so the table holds at most one
live entry per fingerprint.
"""

from __future__ import annotations

import logging
import sqlite3
from datetime import datetime, timezone
from pathlib import Path

from mermaid_processor.cache.base_cache_store import BaseCacheStore
from mermaid_processor.cache.models import CacheEntry
from mermaid_processor.core.errors import CacheInitError

logger = logging.getLogger(__name__)

_SCHEMA = """
CREATE TABLE IF NOT EXISTS diagram_cache (
    content_hash TEXT PRIMARY KEY,
    svg_path TEXT NOT NULL,
    created_at TEXT NOT NULL,
    updated_at TEXT NOT NULL
);
"""

_UPSERT = """
INSERT INTO diagram_cache (content_hash, svg_path, created_at, updated_at)
VALUES (?, ?, ?, ?)
ON CONFLICT(content_hash) DO UPDATE SET
    svg_path = excluded.svg_path,
    updated_at = excluded.updated_at
"""


class SqliteCacheStore(BaseCacheStore):
    """SQLite-backed cache store.

    Raises:
        CacheInitError: If the database cannot be opened or initialized.
    """

    def __init__(self, db_path: Path | str) -> None:
        self._db_path = Path(db_path).expanduser()
        self._conn: sqlite3.Connection | None = None
        try:
            self._db_path.parent.mkdir(parents=True, exist_ok=True)
            self._conn = sqlite3.connect(str(self._db_path))
            self._conn.execute("PRAGMA journal_mode=WAL")
            self._conn.executescript(_SCHEMA)
        except (sqlite3.Error, OSError) as e:
            self.close()
            raise CacheInitError(self._db_path, str(e)) from e
        logger.debug("Opened sqlite cache at %s", self._db_path)

    @property
    def db_path(self) -> Path:
        return self._db_path

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        cursor = self._connection().execute(
            "SELECT content_hash, svg_path, created_at, updated_at "
            "FROM diagram_cache WHERE content_hash = ?",
            (key,),
        )
        row = cursor.fetchone()
        if row is None:
            return None
        return _row_to_entry(row)

    async def put(self, key: str, svg_path: str) -> CacheEntry:
        """Store a cache entry (upsert, keeping created_at)."""
        now = datetime.now(timezone.utc).isoformat()
        conn = self._connection()
        conn.execute(_UPSERT, (key, svg_path, now, now))
        conn.commit()
        entry = await self.get(key)
        if entry is None:
            raise sqlite3.OperationalError(f"entry {key} missing after upsert")
        return entry

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        conn = self._connection()
        conn.execute("DELETE FROM diagram_cache WHERE content_hash = ?", (key,))
        conn.commit()

    async def list_entries(self) -> list[CacheEntry]:
        """List all cached entries, oldest first."""
        cursor = self._connection().execute(
            "SELECT content_hash, svg_path, created_at, updated_at "
            "FROM diagram_cache ORDER BY created_at, content_hash"
        )
        return [_row_to_entry(row) for row in cursor.fetchall()]

    def close(self) -> None:
        """Close the database connection."""
        if self._conn is not None:
            self._conn.close()
            self._conn = None

    def _connection(self) -> sqlite3.Connection:
        if self._conn is None:
            raise sqlite3.ProgrammingError("cache store is closed")
        return self._conn


def _row_to_entry(row: tuple[str, str, str, str]) -> CacheEntry:
    return CacheEntry(
        content_hash=row[0],
        svg_path=row[1],
        created_at=datetime.fromisoformat(row[2]),
        updated_at=datetime.fromisoformat(row[3]),
    )
