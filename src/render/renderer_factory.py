# src/render/renderer_factory.py - v1
"""Factory: instantiate the configured renderer."""

from __future__ import annotations

from mermaid_processor.config.settings import Settings
from mermaid_processor.render.base_renderer import BaseRenderer


def create_renderer(settings: Settings) -> BaseRenderer:
    """Instantiate the renderer selected by ``settings.renderer``."""
    if settings.renderer == "kroki":
        from mermaid_processor.render.kroki_renderer import KrokiRenderer
        return KrokiRenderer(
            base_url=settings.kroki_url,
            output_format=settings.output_format,
            background_color=settings.background_color,
            timeout_s=settings.render_timeout_s,
        )

    if settings.renderer == "placeholder":
        from mermaid_processor.render.placeholder_renderer import PlaceholderRenderer
        return PlaceholderRenderer(background_color=settings.background_color)

    raise ValueError(f"Unsupported renderer: {settings.renderer!r}")
