# src/core/errors.py - v1
"""Error taxonomy.

Fatal, run-level: RootAccessError, CacheInitError.
Recoverable, carried inside ``Err`` values: CacheOperationError,
RenderError, DocumentIOError.
"""

from __future__ import annotations

from pathlib import Path


class MermaidProcessorError(Exception):
    """Base class for all processor errors."""


class RootAccessError(MermaidProcessorError):
    """Input root is missing, not a directory, or unreadable."""

    def __init__(self, root: Path | str, reason: str) -> None:
        self.root = Path(root)
        self.reason = reason
        super().__init__(f"Cannot read input directory {root}: {reason}")


class CacheInitError(MermaidProcessorError):
    """Persisted cache store could not be opened or created."""

    def __init__(self, location: Path | str, reason: str) -> None:
        self.location = Path(location)
        self.reason = reason
        super().__init__(f"Cannot open cache store at {location}: {reason}")


class CacheOperationError(MermaidProcessorError):
    """A single cache lookup or store failed."""

    def __init__(self, operation: str, key: str, reason: str) -> None:
        self.operation = operation
        self.key = key
        self.reason = reason
        super().__init__(f"Cache {operation} failed for {key[:12]}: {reason}")


class RenderError(MermaidProcessorError):
    """Rendering a single diagram failed or produced unusable output."""

    def __init__(self, diagram_id: str, reason: str) -> None:
        self.diagram_id = diagram_id
        self.reason = reason
        super().__init__(f"Failed to render diagram {diagram_id}: {reason}")


class DocumentIOError(MermaidProcessorError):
    """A document could not be read or written."""

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} {path}: {reason}")
