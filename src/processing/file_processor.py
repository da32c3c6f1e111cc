# src/processing/file_processor.py - v2
"""Per-document pipeline: read, extract, link every block, rewrite, write.

Every diagram of a document is attempted concurrently; ``asyncio.gather``
keeps the results in block order so the rewrite is independent of render
completion order. Render failures leave their block untouched and are
counted; only read/write failures fail the document.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass
from pathlib import Path

from mermaid_processor.cache.content_cache import ContentCache
from mermaid_processor.cache.fingerprint import compute_cache_key
from mermaid_processor.config.settings import Settings
from mermaid_processor.core.errors import DocumentIOError, RenderError
from mermaid_processor.core.models import ArtifactLink, DiagramBlock, ProcessingResult
from mermaid_processor.core.result import Err, Ok, Result
from mermaid_processor.extraction.diagram_extractor import extract_diagrams
from mermaid_processor.logging.context import set_diagram_context, set_document_context
from mermaid_processor.render.gateway import RenderGateway
from mermaid_processor.rewrite.document_rewriter import rewrite_document

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BlockOutcome:
    """Result of linking one block; ``link`` is None when it failed."""

    link: ArtifactLink | None
    rendered: int = 0
    cached: int = 0
    existing: bool = False
    error: RenderError | None = None


def artifact_path(
    settings: Settings, document: Path, block: DiagramBlock, theme: str | None = None,
) -> Path:
    """Artifact location: ``{output_dir}/{stem}-{id}[-{theme}].{format}``."""
    suffix = f"-{theme}" if theme else ""
    name = f"{document.stem}-{block.id}{suffix}.{settings.output_format}"
    return settings.output_dir / name


def read_document(path: Path) -> Result[str, DocumentIOError]:
    try:
        with open(path, encoding="utf-8", newline="") as fh:
            return Ok(fh.read())
    except (OSError, UnicodeDecodeError) as e:
        return Err(DocumentIOError(path, "read", str(e)))


def write_document(path: Path, text: str) -> Result[None, DocumentIOError]:
    try:
        with open(path, "w", encoding="utf-8", newline="") as fh:
            fh.write(text)
    except (OSError, UnicodeEncodeError) as e:
        return Err(DocumentIOError(path, "write", str(e)))
    return Ok(None)


class FileProcessor:
    """Process one document at a time against a shared cache and renderer.

    Args:
        settings: Run settings.
        cache: Shared content cache (one per run).
        gateway: Render gateway wrapping the configured renderer.
    """

    def __init__(
        self, settings: Settings, cache: ContentCache, gateway: RenderGateway,
    ) -> None:
        self._settings = settings
        self._cache = cache
        self._gateway = gateway

    async def process(self, path: Path) -> ProcessingResult:
        set_document_context(str(path))

        read = await asyncio.to_thread(read_document, path)
        if isinstance(read, Err):
            logger.error("%s", read.error)
            return ProcessingResult(success=False, file_path=str(path), error=str(read.error))
        text = read.value

        blocks = extract_diagrams(text)
        if not blocks:
            logger.debug("No diagrams in %s", path)
            return ProcessingResult(success=True, file_path=str(path))

        outcomes = await asyncio.gather(
            *(self._link_block(path, block) for block in blocks)
        )
        if all(o.existing for o in outcomes):
            logger.info("All %d diagrams of %s already rendered, skipping", len(blocks), path)
            return ProcessingResult(
                success=True, file_path=str(path), diagrams_cached=len(blocks),
            )

        links = [o.link for o in outcomes]
        failed = sum(1 for o in outcomes if o.link is None)
        linked = len(blocks) - failed

        if linked:
            updated = rewrite_document(text, blocks, links, self._settings)
            if updated != text:
                written = await asyncio.to_thread(write_document, path, updated)
                if isinstance(written, Err):
                    logger.error("%s", written.error)
                    return ProcessingResult(
                        success=False, file_path=str(path), error=str(written.error),
                    )

        logger.info(
            "Processed %s: %d/%d diagrams linked (%d rendered, %d cached)",
            path, linked, len(blocks),
            sum(o.rendered for o in outcomes), sum(o.cached for o in outcomes),
        )
        return ProcessingResult(
            success=True,
            file_path=str(path),
            diagrams_processed=linked,
            diagrams_rendered=sum(o.rendered for o in outcomes),
            diagrams_cached=sum(o.cached for o in outcomes),
            diagrams_failed=failed,
        )

    async def _link_block(self, document: Path, block: DiagramBlock) -> BlockOutcome:
        set_diagram_context(block.id)
        themes = self._settings.render_themes
        both = self._settings.generate_both_themes

        targets = [
            artifact_path(self._settings, document, block, theme if both else None)
            for theme in themes
        ]
        if self._settings.skip_existing and all(t.is_file() for t in targets):
            logger.debug("Artifacts for %s exist, skipping render", block.id)
            return BlockOutcome(link=_make_link(targets), cached=1, existing=True)

        paths: list[Path] = []
        rendered = 0
        for theme, target in zip(themes, targets):
            result = await self._resolve_variant(block, theme, target)
            if isinstance(result, Err):
                return BlockOutcome(link=None, error=result.error)
            path, from_cache = result.value
            paths.append(path)
            if not from_cache:
                rendered = 1

        # A block counts once: rendered if any variant was rendered.
        return BlockOutcome(link=_make_link(paths), rendered=rendered, cached=1 - rendered)

    async def _resolve_variant(
        self, block: DiagramBlock, theme: str, target: Path,
    ) -> Result[tuple[Path, bool], RenderError]:

        key = compute_cache_key(
            block.code,
            theme,
            background_color=self._settings.background_color,
            output_format=self._settings.output_format,
            renderer=self._gateway.renderer.identity,
            output_dir=str(self._settings.output_dir.resolve()),
        )

        async def produce() -> Result[Path, RenderError]:
            return await self._render_to(block, theme, target)

        resolved = await self._cache.get_or_create(key, produce)
        if isinstance(resolved, Err):
            return resolved
        return Ok((resolved.value.path, resolved.value.from_cache))

    async def _render_to(
        self, block: DiagramBlock, theme: str, target: Path,
    ) -> Result[Path, RenderError]:
        rendered = await self._gateway.render(block, theme)
        if isinstance(rendered, Err):
            return rendered
        try:
            await asyncio.to_thread(_write_artifact, target, rendered.value)
        except OSError as e:
            logger.warning("Could not write artifact %s: %s", target, e)
            return Err(RenderError(block.id, f"cannot write artifact {target}: {e}"))
        logger.debug("Rendered %s (%s) -> %s", block.id, theme, target)
        return Ok(target)


def _make_link(paths: list[Path]) -> ArtifactLink:
    if len(paths) == 2:
        return ArtifactLink(path=paths[0], light_path=paths[0], dark_path=paths[1])
    return ArtifactLink(path=paths[0])


def _write_artifact(target: Path, data: bytes) -> None:
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
