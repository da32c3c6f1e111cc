# src/render/kroki_renderer.py - v2
"""Kroki HTTP renderer.

POSTs Mermaid source to ``{base_url}/mermaid/{format}``. The theme and
background colour are passed through a Mermaid ``%%{init}%%`` directive
prepended to the source. The blocking urllib call runs in a worker thread.
"""

from __future__ import annotations

import asyncio
import json
import logging
import urllib.error
import urllib.request

from mermaid_processor.render.base_renderer import BaseRenderer

logger = logging.getLogger(__name__)

# Mermaid has no "light" theme; "default" is its light palette.
_THEME_ALIASES = {"light": "default"}

_MAX_ERROR_CHARS = 500


class KrokiRenderError(RuntimeError):
    """Kroki answered with a non-200 status or could not be reached."""


def build_init_directive(theme: str, background_color: str) -> str:
    """Mermaid front directive selecting theme and background."""
    config = {
        "theme": _THEME_ALIASES.get(theme, theme),
        "themeVariables": {"background": background_color},
    }
    return f"%%{{init: {json.dumps(config, sort_keys=True)}}}%%"


class KrokiRenderer(BaseRenderer):
    """Render Mermaid diagrams through a Kroki server."""

    def __init__(
        self,
        base_url: str = "https://kroki.io",
        output_format: str = "svg",
        background_color: str = "transparent",
        timeout_s: float = 30.0,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._format = output_format
        self._background = background_color
        self._timeout = timeout_s

    async def render(self, source: str, theme: str) -> bytes:
        payload = f"{build_init_directive(theme, self._background)}\n{source}"
        return await asyncio.to_thread(self._post, payload)

    @property
    def name(self) -> str:
        return "kroki"

    @property
    def identity(self) -> str:
        return f"kroki:{self._base_url}"

    @property
    def endpoint(self) -> str:
        return f"{self._base_url}/mermaid/{self._format}"

    def _post(self, payload: str) -> bytes:
        req = urllib.request.Request(
            self.endpoint,
            data=payload.encode("utf-8"),
            headers={"Content-Type": "text/plain"},
            method="POST",
        )
        try:
            with urllib.request.urlopen(req, timeout=self._timeout) as resp:
                return resp.read()
        except urllib.error.HTTPError as e:
            detail = e.read().decode("utf-8", errors="replace")[:_MAX_ERROR_CHARS]
            raise KrokiRenderError(
                f"Kroki returned HTTP {e.code}: {detail or e.reason}"
            ) from e
        except urllib.error.URLError as e:
            raise KrokiRenderError(f"Kroki unreachable at {self._base_url}: {e.reason}") from e
