# src/cache/json_store.py - v2
"""JSON file-based cache store (CACHE_BACKEND=json).

One JSON file per fingerprint under the cache directory. Writes go
through a temporary file and an atomic rename.
"""

from __future__ import annotations

import json
import logging
import os
from datetime import datetime, timezone
from pathlib import Path

from mermaid_processor.cache.base_cache_store import BaseCacheStore
from mermaid_processor.cache.models import CacheEntry
from mermaid_processor.core.errors import CacheInitError

logger = logging.getLogger(__name__)


class JsonCacheStore(BaseCacheStore):
    """File-based cache store using JSON files."""

    def __init__(self, cache_root: Path | str) -> None:
        self._root = Path(cache_root).expanduser()
        try:
            self._root.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise CacheInitError(self._root, str(e)) from e
        if not os.access(self._root, os.W_OK):
            raise CacheInitError(self._root, "directory is not writable")

    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by key."""
        path = self._entry_path(key)
        if not path.exists():
            return None
        data = json.loads(path.read_text(encoding="utf-8"))
        return CacheEntry(**data)

    async def put(self, key: str, svg_path: str) -> CacheEntry:
        """Store a cache entry, keeping created_at of an existing one."""
        now = datetime.now(timezone.utc)
        created_at = now
        existing = self._entry_path(key)
        if existing.exists():
            try:
                previous = CacheEntry(**json.loads(existing.read_text(encoding="utf-8")))
                created_at = previous.created_at
            except (ValueError, OSError) as e:
                logger.warning("Overwriting unreadable cache entry %s: %s", key[:12], e)

        entry = CacheEntry(
            content_hash=key,
            svg_path=svg_path,
            created_at=created_at,
            updated_at=now,
        )
        tmp = existing.with_suffix(".json.tmp")
        tmp.write_text(entry.model_dump_json(indent=2), encoding="utf-8")
        tmp.replace(existing)
        return entry

    async def delete(self, key: str) -> None:
        """Remove a cache entry."""
        path = self._entry_path(key)
        if path.exists():
            path.unlink()

    async def list_entries(self) -> list[CacheEntry]:
        """List all readable cached entries."""
        entries: list[CacheEntry] = []
        for path in sorted(self._root.glob("*.json")):
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
                entries.append(CacheEntry(**data))
            except (ValueError, OSError) as e:
                logger.warning("Skipping unreadable cache file %s: %s", path.name, e)
        return entries

    def _entry_path(self, key: str) -> Path:
        """Return file path for a cache key."""
        safe_key = key.replace("/", "_").replace("\\", "_")
        return self._root / f"{safe_key}.json"
