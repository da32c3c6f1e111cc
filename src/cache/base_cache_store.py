# src/cache/base_cache_store.py - v2
"""Abstract cache store interface."""

from __future__ import annotations

from abc import ABC, abstractmethod

from mermaid_processor.cache.models import CacheEntry


class BaseCacheStore(ABC):
    """Unified interface for persisted cache backends.

    Implementations keep at most one entry per key. ``put`` on an existing
    key refreshes the path and ``updated_at`` but keeps ``created_at``.
    """

    @abstractmethod
    async def get(self, key: str) -> CacheEntry | None:
        """Retrieve cache entry by fingerprint key."""

    @abstractmethod
    async def put(self, key: str, svg_path: str) -> CacheEntry:
        """Store (or refresh) the artifact path for a key."""

    @abstractmethod
    async def delete(self, key: str) -> None:
        """Remove cache entry."""

    @abstractmethod
    async def list_entries(self) -> list[CacheEntry]:
        """List all cached entries."""

    def close(self) -> None:
        """Release backend resources. Safe to call more than once."""
