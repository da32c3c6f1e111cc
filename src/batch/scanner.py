# src/batch/scanner.py - v2
"""Document discovery: walk the input tree for eligible documents.

The walk uses an explicit stack, so deep trees do not grow the Python
call stack. Results are sorted to make runs reproducible.
"""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Iterable

from mermaid_processor.core.errors import RootAccessError

logger = logging.getLogger(__name__)

DEFAULT_EXTENSIONS: tuple[str, ...] = (".md", ".mdx")


def is_document(path: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS) -> bool:
    """Whether ``path`` has one of the eligible extensions (case-insensitive)."""
    return path.suffix.lower() in {e.lower() for e in extensions}


def discover_documents(
    root: Path, extensions: Iterable[str] = DEFAULT_EXTENSIONS,
) -> list[Path]:
    """List every eligible document under ``root``, at any depth.

    Unreadable subdirectories are logged and skipped; an unreadable root is
    fatal.

    Raises:
        RootAccessError: If ``root`` is missing, not a directory or unreadable.
    """
    if not root.exists():
        raise RootAccessError(root, "no such directory")
    if not root.is_dir():
        raise RootAccessError(root, "not a directory")

    allowed = {e.lower() for e in extensions}
    found: list[Path] = []
    stack: list[Path] = [root]

    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                entries = list(it)
        except OSError as e:
            if current == root:
                raise RootAccessError(root, e.strerror or str(e)) from e
            logger.warning("Skipping unreadable directory %s: %s", current, e)
            continue

        for entry in entries:
            path = Path(entry.path)
            try:
                if entry.is_dir(follow_symlinks=False):
                    stack.append(path)
                elif entry.is_file() and path.suffix.lower() in allowed:
                    found.append(path)
            except OSError as e:
                logger.warning("Skipping %s: %s", path, e)

    found.sort()
    logger.info("Discovered %d documents under %s", len(found), root)
    return found
