# src/extraction/diagram_extractor.py - v1
"""Diagram extractor: locate fenced Mermaid blocks in document text.

A block opens on a line that is exactly ```` ```mermaid ```` and closes on
the first following line that is exactly ```` ``` ````. Nested fences are not
supported. Blocks with an empty or whitespace-only body are skipped and do
not consume an index.
"""

from __future__ import annotations

import hashlib
import logging
from pathlib import Path

from mermaid_processor.core.errors import DocumentIOError
from mermaid_processor.core.models import DiagramBlock, FileAnalysis
from mermaid_processor.core.result import Err, Ok, Result

logger = logging.getLogger(__name__)

FENCE_CLOSE = "```"
DEFAULT_LANGUAGE = "mermaid"
DIAGRAM_ID_LENGTH = 8


def diagram_id(code: str) -> str:
    """Short content id: SHA-256 prefix of the trimmed diagram source."""
    return hashlib.sha256(code.encode("utf-8")).hexdigest()[:DIAGRAM_ID_LENGTH]


def extract_diagrams(text: str, language: str = DEFAULT_LANGUAGE) -> list[DiagramBlock]:
    """Extract diagram blocks in document order.

    Args:
        text: Full document text.
        language: Info string of the opening fence.

    Returns:
        Blocks with contiguous indices starting at 0.
    """
    fence_open = f"{FENCE_CLOSE}{language}"
    blocks: list[DiagramBlock] = []

    offset = 0
    open_start: int | None = None
    body_start = 0

    for line in text.splitlines(keepends=True):
        content = line.rstrip("\r\n")
        line_start = offset
        offset += len(line)

        if open_start is None:
            if content == fence_open:
                open_start = line_start
                body_start = offset
            continue

        if content != FENCE_CLOSE:
            continue

        code = text[body_start:line_start].strip()
        span_end = line_start + len(content)
        if code:
            index = len(blocks)
            blocks.append(
                DiagramBlock(
                    index=index,
                    code=code,
                    id=diagram_id(code),
                    label=f"Diagram {index + 1}",
                    start=open_start,
                    end=span_end,
                )
            )
        else:
            logger.debug("Skipping empty diagram block at offset %d", open_start)
        open_start = None

    if open_start is not None:
        logger.debug("Unterminated diagram fence at offset %d ignored", open_start)

    return blocks


def analyze_document(path: Path) -> Result[FileAnalysis, DocumentIOError]:
    """Count the diagram blocks of one document without rendering anything."""
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            text = fh.read()
    except (OSError, UnicodeDecodeError) as e:
        return Err(DocumentIOError(path, "read", str(e)))

    blocks = extract_diagrams(text)
    return Ok(
        FileAnalysis(
            file_path=str(path),
            total_blocks=len(blocks),
            diagram_ids=[b.id for b in blocks],
        )
    )
