# src/api/facade.py - v2
"""Public API facade: one call per run.

Usage:
    from mermaid_processor.api.facade import process_diagrams
    outcome = await process_diagrams(input_dir=Path("docs"), db_path=Path(".cache.db"))
    if outcome.ok:
        print(outcome.value.diagrams_generated)
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any

from mermaid_processor.batch.scanner import discover_documents
from mermaid_processor.batch.scheduler import BatchScheduler
from mermaid_processor.cache.cache_factory import open_cache_store
from mermaid_processor.cache.content_cache import ContentCache
from mermaid_processor.config.settings import Settings, load_settings, with_overrides
from mermaid_processor.core.errors import CacheInitError, RootAccessError
from mermaid_processor.core.models import FileAnalysis, ProcessingStats, RunFailure
from mermaid_processor.core.result import Err, Ok, Result
from mermaid_processor.extraction.diagram_extractor import analyze_document
from mermaid_processor.processing.file_processor import FileProcessor
from mermaid_processor.render.gateway import RenderGateway
from mermaid_processor.render.renderer_factory import create_renderer
from mermaid_processor.tracking.stats_aggregator import aggregate_stats

if TYPE_CHECKING:
    from mermaid_processor.render.base_renderer import BaseRenderer

logger = logging.getLogger(__name__)


def resolve_settings(settings: Settings | None = None, **overrides: Any) -> Settings:
    """Start from ``settings`` (or the environment) and apply overrides."""
    if settings is None:
        return load_settings(**overrides)
    if overrides:
        return with_overrides(settings, **overrides)
    return settings


async def process_diagrams(
    settings: Settings | None = None,
    renderer: BaseRenderer | None = None,
    **overrides: Any,
) -> Result[ProcessingStats, RunFailure]:
    """Run the full pipeline over ``settings.input_dir``.

    Args:
        settings: Base settings. Loaded from the environment if None.
        renderer: Renderer to use. Built from settings if None.
        **overrides: Settings fields overriding ``settings``.

    Returns:
        ``Ok(ProcessingStats)`` (possibly with errors > 0) or
        ``Err(RunFailure)`` when the input root or the cache store cannot
        be opened. In the failure case no document has been touched.
    """
    settings = resolve_settings(settings, **overrides)

    try:
        documents = discover_documents(settings.input_dir, settings.document_extensions_list)
    except RootAccessError as e:
        logger.error("%s", e)
        return Err(RunFailure(kind="root_access", message=str(e)))

    try:
        store = open_cache_store(settings)
    except CacheInitError as e:
        logger.error("%s", e)
        return Err(RunFailure(kind="cache_init", message=str(e)))

    try:
        gateway = RenderGateway(
            renderer or create_renderer(settings), timeout_s=settings.render_timeout_s,
        )
        processor = FileProcessor(settings, ContentCache(store), gateway)
        scheduler = BatchScheduler(processor, concurrency=settings.concurrent)

        logger.info(
            "Processing %d documents from %s (renderer=%s, cache=%s)",
            len(documents), settings.input_dir, gateway.renderer.name,
            settings.db_path or "disabled",
        )
        results = await scheduler.process_all(documents)
    finally:
        if store is not None:
            store.close()

    stats = aggregate_stats(results)
    logger.info(
        "Run complete: %d files, %d diagrams generated, %d skipped, %d errors",
        stats.files_processed, stats.diagrams_generated,
        stats.diagrams_skipped, stats.errors,
    )
    return Ok(stats)


def analyze_directory(
    settings: Settings | None = None, **overrides: Any,
) -> Result[list[FileAnalysis], RunFailure]:
    """Dry run: count diagram blocks per document without rendering.

    Unreadable documents are logged and left out of the listing.
    """
    settings = resolve_settings(settings, **overrides)
    try:
        documents = discover_documents(settings.input_dir, settings.document_extensions_list)
    except RootAccessError as e:
        return Err(RunFailure(kind="root_access", message=str(e)))

    analyses: list[FileAnalysis] = []
    for path in documents:
        result = analyze_document(path)
        if isinstance(result, Err):
            logger.warning("%s", result.error)
            continue
        analyses.append(result.value)
    return Ok(analyses)
