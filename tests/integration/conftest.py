# tests/integration/conftest.py - v1
"""Shared fixtures for integration tests.

Everything runs against the filesystem with the placeholder or a recording
renderer. Tests marked ``kroki`` talk to a real Kroki server and are
skipped unless ``MERMAID_IT_KROKI_URL`` points at one.
"""

from __future__ import annotations

import os
import shutil
from pathlib import Path
from typing import Callable

import pytest


# ── Pytest markers ──────────────────────────────────────────────

def pytest_configure(config):
    config.addinivalue_line("markers", "kroki: marks tests requiring a reachable Kroki server")


@pytest.fixture
def kroki_url() -> str:
    url = os.environ.get("MERMAID_IT_KROKI_URL")
    if not url:
        pytest.skip("MERMAID_IT_KROKI_URL not set")
    return url


@pytest.fixture
def snapshot_docs(docs_dir: Path, tmp_path: Path) -> Callable[[], Callable[[], None]]:
    """Copy docs_dir aside; the returned callable restores the copy."""

    def _snapshot() -> Callable[[], None]:
        saved = tmp_path / "docs-snapshot"
        if saved.exists():
            shutil.rmtree(saved)
        shutil.copytree(docs_dir, saved)

        def _restore() -> None:
            shutil.rmtree(docs_dir)
            shutil.copytree(saved, docs_dir)

        return _restore

    return _snapshot


@pytest.fixture
def tree_text() -> Callable[[Path], dict[str, str]]:
    """Map of relative path to text for every file under a directory."""

    def _read(root: Path) -> dict[str, str]:
        return {
            str(p.relative_to(root)): p.read_text(encoding="utf-8")
            for p in sorted(root.rglob("*"))
            if p.is_file()
        }

    return _read
