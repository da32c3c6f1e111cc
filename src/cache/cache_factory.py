# src/cache/cache_factory.py - v3
"""Factory for cache store instantiation."""

from __future__ import annotations

from mermaid_processor.cache.base_cache_store import BaseCacheStore
from mermaid_processor.config.settings import Settings


def open_cache_store(settings: Settings) -> BaseCacheStore | None:
    """Open the configured persisted store.

    Returns:
        The opened store, or None when no ``db_path`` is configured
        (the cache then behaves as an always-miss pass-through).

    Raises:
        CacheInitError: If the store cannot be opened or created.
    """
    if settings.db_path is None:
        return None

    if settings.cache_backend == "sqlite":
        from mermaid_processor.cache.sqlite_store import SqliteCacheStore
        return SqliteCacheStore(db_path=settings.db_path)

    if settings.cache_backend == "json":
        from mermaid_processor.cache.json_store import JsonCacheStore
        return JsonCacheStore(cache_root=settings.db_path)

    raise ValueError(f"Unsupported cache backend: {settings.cache_backend!r}")
