# src/core/models.py - v2
"""Core domain models: DiagramBlock, ArtifactLink, ProcessingResult,
ProcessingStats, FileAnalysis, RunFailure.

All models are frozen; derived values are produced by copying.
"""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class DiagramBlock(BaseModel):
    """One fenced diagram extracted from a document."""

    model_config = ConfigDict(frozen=True)

    index: int = Field(ge=0)
    code: str
    id: str
    label: str
    start: int = Field(ge=0)
    end: int = Field(ge=0)


class ArtifactLink(BaseModel):
    """Artifacts produced for one diagram block.

    ``path`` is the artifact rendered with the default theme. When both
    light and dark variants were generated, ``light_path`` and
    ``dark_path`` are set and the rewriter references both.
    """

    model_config = ConfigDict(frozen=True)

    path: Path
    light_path: Path | None = None
    dark_path: Path | None = None

    @property
    def has_variants(self) -> bool:
        return self.light_path is not None and self.dark_path is not None


class ProcessingResult(BaseModel):
    """Outcome of processing one document."""

    model_config = ConfigDict(frozen=True)

    success: bool
    file_path: str
    diagrams_processed: int = 0
    diagrams_rendered: int = 0
    diagrams_cached: int = 0
    diagrams_failed: int = 0
    error: str | None = None


class ProcessingStats(BaseModel):
    """Run-level totals folded from ProcessingResults."""

    model_config = ConfigDict(frozen=True)

    files_processed: int = 0
    diagrams_generated: int = 0
    diagrams_skipped: int = 0
    errors: int = 0


class FileAnalysis(BaseModel):
    """Dry-run inspection of a single document."""

    model_config = ConfigDict(frozen=True)

    file_path: str
    total_blocks: int
    diagram_ids: list[str] = Field(default_factory=list)

    @property
    def needs_processing(self) -> bool:
        return self.total_blocks > 0


class RunFailure(BaseModel):
    """Single descriptive failure for a whole run."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["root_access", "cache_init"]
    message: str
