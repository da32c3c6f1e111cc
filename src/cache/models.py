# src/cache/models.py - v2
"""Cache domain models: CacheEntry, CacheResolution."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict


class CacheEntry(BaseModel):
    """A completed render: fingerprint key -> artifact path."""

    model_config = ConfigDict(frozen=True)

    content_hash: str
    svg_path: str
    created_at: datetime
    updated_at: datetime


class CacheResolution(BaseModel):
    """Artifact path obtained through ContentCache.get_or_create."""

    model_config = ConfigDict(frozen=True)

    path: Path
    from_cache: bool
