# src/cache/content_cache.py - v2
"""Content-addressed cache in front of the persisted store.

Lookups and stores never raise: backend failures are logged and come back
as ``Err(CacheOperationError)``, which callers treat as a miss. Without a
store every lookup misses.

``get_or_create`` holds a per-key ``asyncio.Lock`` across
"lookup, and on miss produce-then-store", so concurrent documents sharing a
fingerprint render it once.
"""

from __future__ import annotations

import asyncio
import logging
from pathlib import Path
from typing import Awaitable, Callable

from mermaid_processor.cache.base_cache_store import BaseCacheStore
from mermaid_processor.cache.models import CacheResolution
from mermaid_processor.core.errors import CacheOperationError, RenderError
from mermaid_processor.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

Producer = Callable[[], Awaitable[Result[Path, RenderError]]]


class ContentCache:
    """Fingerprint -> artifact path mapping with per-key serialization."""

    def __init__(self, store: BaseCacheStore | None = None) -> None:
        self._store = store
        self._locks: dict[str, asyncio.Lock] = {}
        self._lock_users: dict[str, int] = {}

    @property
    def persistent(self) -> bool:
        return self._store is not None

    async def lookup(self, key: str) -> Result[Path | None, CacheOperationError]:
        """Return the cached artifact path, ``Ok(None)`` on a miss.

        Entries whose artifact file has disappeared count as misses.
        """
        if self._store is None:
            return Ok(None)
        try:
            entry = await self._store.get(key)
        except Exception as e:
            logger.warning("Cache lookup failed for %s: %s", key[:12], e)
            return Err(CacheOperationError("lookup", key, str(e)))

        if entry is None:
            return Ok(None)
        path = Path(entry.svg_path)
        if not path.is_file():
            logger.debug("Stale cache entry %s -> %s", key[:12], path)
            return Ok(None)
        return Ok(path)

    async def store(self, key: str, path: Path) -> Result[None, CacheOperationError]:
        """Record an artifact path for a key."""
        if self._store is None:
            return Ok(None)
        try:
            await self._store.put(key, str(path))
        except Exception as e:
            logger.warning("Cache store failed for %s: %s", key[:12], e)
            return Err(CacheOperationError("store", key, str(e)))
        return Ok(None)

    async def get_or_create(
        self, key: str, produce: Producer,
    ) -> Result[CacheResolution, RenderError]:
        """Serve ``key`` from cache or produce, store and return it."""
        lock = self._lock_for(key)
        try:
            async with lock:
                found = await self.lookup(key)
                if isinstance(found, Ok) and found.value is not None:
                    return Ok(CacheResolution(path=found.value, from_cache=True))

                produced = await produce()
                if isinstance(produced, Err):
                    return produced

                await self.store(key, produced.value)
                return Ok(CacheResolution(path=produced.value, from_cache=False))
        finally:
            self._release_lock(key)

    async def prune_stale(self) -> int:
        """Delete entries whose artifact file no longer exists.

        Returns:
            Number of entries removed.
        """
        if self._store is None:
            return 0
        removed = 0
        for entry in await self._store.list_entries():
            if Path(entry.svg_path).is_file():
                continue
            await self._store.delete(entry.content_hash)
            removed += 1
        logger.info("Pruned %d stale cache entries", removed)
        return removed

    def _lock_for(self, key: str) -> asyncio.Lock:
        lock = self._locks.get(key)
        if lock is None:
            lock = asyncio.Lock()
            self._locks[key] = lock
        self._lock_users[key] = self._lock_users.get(key, 0) + 1
        return lock

    def _release_lock(self, key: str) -> None:
        # The lock is dropped once its last holder or waiter is done.
        users = self._lock_users[key] - 1
        if users:
            self._lock_users[key] = users
        else:
            del self._lock_users[key]
            del self._locks[key]

    @property
    def active_keys(self) -> int:
        """Number of fingerprints with a lock currently held or awaited."""
        return len(self._locks)
