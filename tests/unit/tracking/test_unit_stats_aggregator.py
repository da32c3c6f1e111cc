# tests/unit/tracking/test_unit_stats_aggregator.py - v1
"""Tests for tracking/stats_aggregator.py."""

from __future__ import annotations

import itertools

from mermaid_processor.core.models import ProcessingResult, ProcessingStats
from mermaid_processor.tracking.stats_aggregator import (
    aggregate_stats,
    load_stats,
    merge_stats,
    result_stats,
    save_stats,
)


def _ok(name: str, processed: int = 0, cached: int = 0, failed: int = 0) -> ProcessingResult:
    return ProcessingResult(
        success=True,
        file_path=name,
        diagrams_processed=processed,
        diagrams_rendered=processed - cached,
        diagrams_cached=cached,
        diagrams_failed=failed,
    )


def _failed(name: str) -> ProcessingResult:
    return ProcessingResult(success=False, file_path=name, error="Failed to read")


class TestResultStats:
    def test_success(self):
        stats = result_stats(_ok("a.md", processed=3, cached=1, failed=1))
        assert stats == ProcessingStats(
            files_processed=1, diagrams_generated=3, diagrams_skipped=1, errors=1,
        )

    def test_failure_counts_one_error(self):
        assert result_stats(_failed("a.md")) == ProcessingStats(files_processed=1, errors=1)


class TestAggregateStats:
    def test_empty(self):
        assert aggregate_stats([]) == ProcessingStats()

    def test_mixed_results(self):
        stats = aggregate_stats([
            _ok("a.md", processed=2),
            _ok("b.md", processed=1, cached=1),
            _failed("c.md"),
            _ok("d.md", processed=2, failed=1),
        ])
        assert stats.files_processed == 4
        assert stats.diagrams_generated == 5
        assert stats.diagrams_skipped == 1
        assert stats.errors == 2

    def test_order_independent(self):
        results = [_ok("a.md", 2, 1), _failed("b.md"), _ok("c.md", 1, 0, 2)]
        totals = {aggregate_stats(p) for p in itertools.permutations(results)}
        assert len(totals) == 1

    def test_merge_is_fieldwise_sum(self):
        a = ProcessingStats(files_processed=1, diagrams_generated=2, diagrams_skipped=3, errors=4)
        assert merge_stats(a, a) == ProcessingStats(
            files_processed=2, diagrams_generated=4, diagrams_skipped=6, errors=8,
        )


class TestPersistence:
    def test_save_and_load(self, tmp_path):
        stats = ProcessingStats(files_processed=3, diagrams_generated=5, errors=1)
        path = tmp_path / "reports" / "run.json"
        save_stats(stats, path)
        assert load_stats(path) == stats

    def test_load_missing(self, tmp_path):
        assert load_stats(tmp_path / "none.json") is None

    def test_load_corrupt(self, tmp_path):
        path = tmp_path / "bad.json"
        path.write_text("{not json", encoding="utf-8")
        assert load_stats(path) is None
