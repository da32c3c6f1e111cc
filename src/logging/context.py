# src/logging/context.py - v2
"""Contextual logging: attach the current document and diagram to records.

Values live in context variables, so every asyncio task processing a
document or a diagram sees its own values.
"""

from __future__ import annotations

import contextvars
from dataclasses import dataclass
from typing import Any

_document: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "document", default=None
)
_diagram_id: contextvars.ContextVar[str | None] = contextvars.ContextVar(
    "diagram_id", default=None
)


@dataclass(frozen=True)
class LogContext:
    """Snapshot of the current logging context."""

    document: str | None = None
    diagram_id: str | None = None

    def as_dict(self) -> dict[str, Any]:
        """Return non-None fields for JSON log injection."""
        return {k: v for k, v in self.__dict__.items() if v is not None}


def get_context() -> LogContext:
    return LogContext(document=_document.get(), diagram_id=_diagram_id.get())


def set_document_context(document: str) -> None:
    """Set the document being processed (once per document task)."""
    _document.set(document)
    _diagram_id.set(None)


def set_diagram_context(diagram_id: str) -> None:
    _diagram_id.set(diagram_id)


def clear_context() -> None:
    _document.set(None)
    _diagram_id.set(None)
