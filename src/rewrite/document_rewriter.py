# src/rewrite/document_rewriter.py - v1
"""Replace diagram blocks with artifact references.

Pure function of (text, blocks, artifacts, settings). Blocks without an
artifact keep their original fenced span; everything outside the spans is
copied through unchanged.
"""

from __future__ import annotations

from pathlib import Path, PurePosixPath
from typing import Sequence

from mermaid_processor.config.settings import Settings
from mermaid_processor.core.models import ArtifactLink, DiagramBlock

LIGHT_FRAGMENT = "#gh-light-mode-only"
DARK_FRAGMENT = "#gh-dark-mode-only"


def public_url(artifact: Path, output_dir: Path, base_url: str) -> str:
    """Translate an artifact path under ``output_dir`` into a ``base_url`` URL."""
    for candidate, root in (
        (artifact, output_dir),
        (artifact.resolve(), output_dir.resolve()),
    ):
        try:
            relative = candidate.relative_to(root)
        except ValueError:
            continue
        return f"{base_url.rstrip('/')}/{PurePosixPath(*relative.parts)}"

    # Artifact outside the output tree (e.g. an older cache entry).
    return artifact.as_posix().replace(output_dir.as_posix(), base_url, 1)


def render_source(code: str, style: str, language: str = "mermaid") -> str:
    """Re-emit diagram source according to the inclusion style."""
    fenced = f"```{language}\n{code}\n```"
    if style == "inline":
        return f"\n\n{fenced}"
    if style == "details":
        return f"\n\n<details>\n<summary>View source</summary>\n\n{fenced}\n\n</details>"
    if style == "blockquote":
        quoted = "\n".join(f"> {line}" if line else ">" for line in fenced.split("\n"))
        return f"\n\n{quoted}"
    return ""


def build_reference(block: DiagramBlock, link: ArtifactLink, settings: Settings) -> str:
    """Image reference (plus re-embedded source) replacing one block."""
    def url(path: Path) -> str:
        return public_url(path, settings.output_dir, settings.base_url)

    if link.has_variants:
        image = (
            f"![{block.label}]({url(link.light_path)}{LIGHT_FRAGMENT})\n"  # type: ignore[arg-type]
            f"![{block.label}]({url(link.dark_path)}{DARK_FRAGMENT})"  # type: ignore[arg-type]
        )
    else:
        image = f"![{block.label}]({url(link.path)})"

    return image + render_source(block.code, settings.effective_source_style)


def rewrite_document(
    text: str,
    blocks: Sequence[DiagramBlock],
    artifacts: Sequence[ArtifactLink | None],
    settings: Settings,
) -> str:
    """Substitute artifact references for linked blocks, in block order."""
    if len(blocks) != len(artifacts):
        raise ValueError(
            f"blocks/artifacts length mismatch: {len(blocks)} != {len(artifacts)}"
        )

    parts: list[str] = []
    cursor = 0
    for block, link in zip(blocks, artifacts):
        if block.start < cursor:
            raise ValueError(f"block {block.index} overlaps the previous block")
        parts.append(text[cursor:block.start])
        if link is None:
            parts.append(text[block.start:block.end])
        else:
            parts.append(build_reference(block, link, settings))
        cursor = block.end
    parts.append(text[cursor:])
    return "".join(parts)
