# tests/unit/render/test_unit_gateway.py - v1
"""Tests for render/gateway.py."""

from __future__ import annotations

import asyncio

import pytest

from mermaid_processor.core.errors import RenderError
from mermaid_processor.core.result import Err, Ok
from mermaid_processor.extraction.diagram_extractor import extract_diagrams
from mermaid_processor.render.base_renderer import BaseRenderer
from mermaid_processor.render.gateway import RenderGateway


class _StubRenderer(BaseRenderer):
    def __init__(self, output: bytes = b"<svg/>", error: Exception | None = None,
                 delay: float = 0.0) -> None:
        self._output = output
        self._error = error
        self._delay = delay

    async def render(self, source: str, theme: str) -> bytes:
        await asyncio.sleep(self._delay)
        if self._error is not None:
            raise self._error
        return self._output

    @property
    def name(self) -> str:
        return "stub"


@pytest.fixture
def block():
    return extract_diagrams("```mermaid\ngraph TD\nA-->B\n```")[0]


class TestRenderGateway:
    @pytest.mark.asyncio
    async def test_success(self, block):
        result = await RenderGateway(_StubRenderer()).render(block, "dark")
        assert result == Ok(b"<svg/>")

    @pytest.mark.asyncio
    async def test_exception_becomes_err(self, block):
        gateway = RenderGateway(_StubRenderer(error=RuntimeError("Parse error")))
        result = await gateway.render(block, "dark")
        assert isinstance(result, Err)
        assert isinstance(result.error, RenderError)
        assert result.error.diagram_id == block.id
        assert "Parse error" in result.error.reason

    @pytest.mark.asyncio
    async def test_empty_output_is_unusable(self, block):
        result = await RenderGateway(_StubRenderer(output=b"")).render(block, "dark")
        assert isinstance(result, Err)
        assert "empty" in result.error.reason

    @pytest.mark.asyncio
    async def test_timeout(self, block):
        gateway = RenderGateway(_StubRenderer(delay=1.0), timeout_s=0.05)
        result = await gateway.render(block, "dark")
        assert isinstance(result, Err)
        assert "timed out" in result.error.reason

    def test_exposes_renderer(self):
        renderer = _StubRenderer()
        assert RenderGateway(renderer).renderer is renderer
