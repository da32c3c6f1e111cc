# src/render/placeholder_renderer.py - v1
"""Offline placeholder renderer.

Produces a small deterministic SVG naming the theme and a preview of the
source. Useful without network access and in tests.
"""

from __future__ import annotations

from xml.sax.saxutils import escape

from mermaid_processor.render.base_renderer import BaseRenderer

_PREVIEW_CHARS = 30

_TEMPLATE = (
    '<svg xmlns="http://www.w3.org/2000/svg" viewBox="0 0 200 100">\n'
    '  <rect width="100%" height="100%" fill="{background}"/>\n'
    '  <text x="10" y="50" fill="currentColor">Mermaid Diagram ({theme})</text>\n'
    '  <text x="10" y="70" fill="currentColor" font-size="12">{preview}</text>\n'
    "</svg>\n"
)


class PlaceholderRenderer(BaseRenderer):
    """Deterministic SVG stand-in for a real renderer."""

    def __init__(self, background_color: str = "transparent") -> None:
        self._background = background_color

    async def render(self, source: str, theme: str) -> bytes:
        preview = source[:_PREVIEW_CHARS]
        if len(source) > _PREVIEW_CHARS:
            preview += "..."
        svg = _TEMPLATE.format(
            background=escape(self._background, {'"': "&quot;"}),
            theme=escape(theme),
            preview=escape(preview),
        )
        return svg.encode("utf-8")

    @property
    def name(self) -> str:
        return "placeholder"
