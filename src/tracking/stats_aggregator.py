# src/tracking/stats_aggregator.py - v2
"""Fold per-document results into run-level statistics.

The fold only sums and counts, so any permutation of the results yields
the same totals.
"""

from __future__ import annotations

import json
import logging
from functools import reduce
from pathlib import Path
from typing import Iterable

from mermaid_processor.core.models import ProcessingResult, ProcessingStats

logger = logging.getLogger(__name__)


def result_stats(result: ProcessingResult) -> ProcessingStats:
    """Contribution of a single document to the run totals."""
    if not result.success:
        return ProcessingStats(files_processed=1, errors=1)
    return ProcessingStats(
        files_processed=1,
        diagrams_generated=result.diagrams_processed,
        diagrams_skipped=result.diagrams_cached,
        errors=result.diagrams_failed,
    )


def merge_stats(a: ProcessingStats, b: ProcessingStats) -> ProcessingStats:
    """Field-wise sum of two stats records."""
    return ProcessingStats(
        files_processed=a.files_processed + b.files_processed,
        diagrams_generated=a.diagrams_generated + b.diagrams_generated,
        diagrams_skipped=a.diagrams_skipped + b.diagrams_skipped,
        errors=a.errors + b.errors,
    )


def aggregate_stats(results: Iterable[ProcessingResult]) -> ProcessingStats:
    """Fold ProcessingResults into ProcessingStats."""
    return reduce(merge_stats, (result_stats(r) for r in results), ProcessingStats())


def save_stats(stats: ProcessingStats, path: Path) -> None:
    """Persist a run report as JSON."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(stats.model_dump_json(indent=2), encoding="utf-8")


def load_stats(path: Path) -> ProcessingStats | None:
    """Load a run report, None if missing or unreadable."""
    if not path.exists():
        return None
    try:
        return ProcessingStats(**json.loads(path.read_text(encoding="utf-8")))
    except (ValueError, OSError) as e:
        logger.warning("Failed to load stats from %s: %s", path, e)
        return None
