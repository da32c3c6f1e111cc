# tests/conftest.py - v2
"""Shared test fixtures.

Provides a recording fake renderer, a settings factory rooted in
``tmp_path`` and sample documents. No network access.
"""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import Any, Callable

import pytest

from mermaid_processor.config.settings import Settings
from mermaid_processor.render.base_renderer import BaseRenderer


class FakeRenderer(BaseRenderer):
    """Records every call; fails for sources containing a marker."""

    def __init__(self) -> None:
        self.calls: list[tuple[str, str]] = []
        self.fail_markers: set[str] = set()
        self.delays: dict[str, float] = {}

    async def render(self, source: str, theme: str) -> bytes:
        self.calls.append((source, theme))
        for marker, delay in self.delays.items():
            if marker in source:
                await asyncio.sleep(delay)
        for marker in self.fail_markers:
            if marker in source:
                raise RuntimeError(f"syntax error near {marker!r}")
        return f"<svg><!-- {theme} --><text>{source}</text></svg>".encode("utf-8")

    @property
    def name(self) -> str:
        return "fake"


SIMPLE_DOC = "# T\n```mermaid\ngraph TD\nA-->B\n```"

THREE_DIAGRAM_DOC = (
    "# Three\n\n"
    "```mermaid\ngraph TD\nA-->B\n```\n\n"
    "Middle text.\n\n"
    "```mermaid\ngraph TD\nB-->C\n```\n\n"
    "```mermaid\nsequenceDiagram\nAlice->>Bob: Hi\n```\n"
)


@pytest.fixture
def simple_doc() -> str:
    return SIMPLE_DOC


@pytest.fixture
def three_diagram_doc() -> str:
    return THREE_DIAGRAM_DOC


@pytest.fixture
def fake_renderer() -> FakeRenderer:
    return FakeRenderer()


@pytest.fixture
def docs_dir(tmp_path: Path) -> Path:
    d = tmp_path / "docs"
    d.mkdir()
    return d


@pytest.fixture
def make_settings(tmp_path: Path, docs_dir: Path) -> Callable[..., Settings]:
    """Factory for Settings rooted in tmp_path, isolated from .env files."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "input_dir": docs_dir,
            "output_dir": tmp_path / "out",
            "base_url": "/out",
            "renderer": "placeholder",
            "default_theme": "dark",
            "source_code_style": "none",
            "concurrent": 2,
        }
        values.update(overrides)
        return Settings(_env_file=None, **values)  # type: ignore[call-arg]

    return _make


@pytest.fixture
def write_doc(docs_dir: Path) -> Callable[[str, str], Path]:
    """Write a document under docs_dir and return its path."""

    def _write(name: str, content: str) -> Path:
        path = docs_dir / name
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_bytes(content.encode("utf-8"))
        return path

    return _write
