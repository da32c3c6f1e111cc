# src/render/gateway.py - v1
"""Render gateway: bounded, failure-capturing access to a renderer."""

from __future__ import annotations

import asyncio
import logging

from mermaid_processor.core.errors import RenderError
from mermaid_processor.core.models import DiagramBlock
from mermaid_processor.core.result import Err, Ok, Result
from mermaid_processor.render.base_renderer import BaseRenderer

logger = logging.getLogger(__name__)


class RenderGateway:
    """Call a renderer with a timeout and capture failures as values."""

    def __init__(self, renderer: BaseRenderer, timeout_s: float = 30.0) -> None:
        self._renderer = renderer
        self._timeout = timeout_s

    @property
    def renderer(self) -> BaseRenderer:
        return self._renderer

    async def render(self, block: DiagramBlock, theme: str) -> Result[bytes, RenderError]:
        try:
            data = await asyncio.wait_for(
                self._renderer.render(block.code, theme), timeout=self._timeout,
            )
        except asyncio.TimeoutError:
            logger.warning(
                "Render of %s timed out after %.1fs", block.id, self._timeout,
            )
            return Err(RenderError(block.id, f"timed out after {self._timeout:g}s"))
        except Exception as e:
            logger.warning("Render of %s failed (%s): %s", block.id, self._renderer.name, e)
            return Err(RenderError(block.id, str(e)))

        if not data:
            return Err(RenderError(block.id, "renderer returned empty output"))
        return Ok(data)
