# src/render/base_renderer.py - v2
"""Abstract diagram renderer interface."""

from __future__ import annotations

from abc import ABC, abstractmethod


class BaseRenderer(ABC):
    """Turns diagram source + theme into artifact bytes.

    Implementations raise on failure; RenderGateway converts exceptions
    into ``Err(RenderError)`` values.
    """

    @abstractmethod
    async def render(self, source: str, theme: str) -> bytes:
        """Render ``source`` with ``theme`` and return the artifact bytes."""

    @property
    @abstractmethod
    def name(self) -> str:
        """Short renderer identifier for logs."""

    @property
    def identity(self) -> str:
        """Backend identity folded into cache keys; defaults to ``name``."""
        return self.name
