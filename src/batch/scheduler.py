# src/batch/scheduler.py - v1
"""Batch scheduler: run FileProcessor over documents with bounded parallelism."""

from __future__ import annotations

import asyncio
import logging
import time
from pathlib import Path
from typing import Sequence

from mermaid_processor.batch.scanner import discover_documents
from mermaid_processor.core.models import ProcessingResult
from mermaid_processor.processing.file_processor import FileProcessor

logger = logging.getLogger(__name__)


class BatchScheduler:
    """Dispatch documents to a FileProcessor, at most ``concurrency`` at once.

    Args:
        processor: Shared per-document processor.
        concurrency: Maximum number of documents in flight (>= 1).
    """

    def __init__(self, processor: FileProcessor, concurrency: int = 2) -> None:
        if concurrency < 1:
            raise ValueError(f"concurrency must be >= 1, got {concurrency}")
        self._processor = processor
        self._concurrency = concurrency

    @property
    def concurrency(self) -> int:
        return self._concurrency

    async def run(
        self, root: Path, extensions: Sequence[str] = (".md", ".mdx"),
    ) -> list[ProcessingResult]:
        """Discover documents under ``root`` and process all of them.

        Raises:
            RootAccessError: If ``root`` cannot be read (before any work).
        """
        documents = discover_documents(root, extensions)
        return await self.process_all(documents)

    async def process_all(self, documents: Sequence[Path]) -> list[ProcessingResult]:
        """Process ``documents``; results come back in input order."""
        t0 = time.perf_counter()
        semaphore = asyncio.Semaphore(self._concurrency)

        async def _guarded(path: Path) -> ProcessingResult:
            async with semaphore:
                try:
                    return await self._processor.process(path)
                except Exception as e:
                    logger.exception("Unexpected failure processing %s", path)
                    return ProcessingResult(
                        success=False, file_path=str(path), error=f"Failed to process file: {e}",
                    )

        tasks = [asyncio.create_task(_guarded(path)) for path in documents]
        results = list(await asyncio.gather(*tasks))

        logger.info(
            "Batch finished: %d documents in %.2fs (concurrency=%d)",
            len(results), time.perf_counter() - t0, self._concurrency,
        )
        return results
