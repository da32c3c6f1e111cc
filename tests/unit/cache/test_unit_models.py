# tests/unit/cache/test_unit_models.py - v1
"""Tests for cache/models.py and the cache/base_cache_store.py ABC."""

from __future__ import annotations

from datetime import datetime, timezone
from pathlib import Path

import pytest
from pydantic import ValidationError

from mermaid_processor.cache.base_cache_store import BaseCacheStore
from mermaid_processor.cache.models import CacheEntry, CacheResolution


class TestBaseCacheStore:
    def test_cannot_instantiate(self):
        with pytest.raises(TypeError):
            BaseCacheStore()  # type: ignore[abstract]

    def test_has_required_methods(self):
        for method in ["get", "put", "delete", "list_entries", "close"]:
            assert hasattr(BaseCacheStore, method)


class TestCacheEntry:
    def test_create(self):
        now = datetime(2026, 2, 7, tzinfo=timezone.utc)
        entry = CacheEntry(content_hash="ab" * 32, svg_path="out/a.svg", created_at=now, updated_at=now)
        assert entry.svg_path == "out/a.svg"

    def test_frozen(self):
        now = datetime.now(timezone.utc)
        entry = CacheEntry(content_hash="k", svg_path="a.svg", created_at=now, updated_at=now)
        with pytest.raises(ValidationError):
            entry.svg_path = "b.svg"


class TestCacheResolution:
    def test_path_coerced(self):
        res = CacheResolution(path="out/a.svg", from_cache=True)
        assert res.path == Path("out/a.svg")
