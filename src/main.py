# src/main.py - v2
"""CLI entry point: process, analyze and cache commands.

Usage:
    mermaid-processor process [-i DIR] [-o DIR] [options]
    mermaid-processor analyze [-i DIR]
    mermaid-processor cache list|prune --db PATH
"""

from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from pathlib import Path
from typing import Any

from mermaid_processor.version import __version__

logger = logging.getLogger(__name__)

_THEMES = ["light", "dark", "neutral", "forest", "base", "default"]
_STYLES = ["inline", "details", "blockquote", "footnote", "none"]


def main(argv: list[str] | None = None) -> int:
    """Main CLI entry point."""
    parser = _build_parser()
    args = parser.parse_args(argv)

    if not hasattr(args, "func"):
        parser.print_help()
        return 1

    from mermaid_processor.config.settings import ConfigurationError

    try:
        settings = _settings_from_args(args)
    except (ConfigurationError, ValueError) as exc:
        print(f"Invalid configuration: {exc}", file=sys.stderr)
        return 2

    _setup_logging(settings, args.verbose)

    try:
        return asyncio.run(args.func(args, settings))
    except KeyboardInterrupt:
        logger.info("Interrupted by user")
        return 130
    except Exception as exc:
        logger.error("Fatal error: %s", exc, exc_info=args.verbose)
        return 1


def _build_parser() -> argparse.ArgumentParser:
    """Build CLI argument parser."""
    parser = argparse.ArgumentParser(
        prog="mermaid-processor",
        description=f"mermaid-processor v{__version__}: render Mermaid blocks in Markdown",
    )
    parser.add_argument(
        "--version", action="version", version=f"%(prog)s {__version__}",
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true",
        help="Enable debug logging",
    )

    subparsers = parser.add_subparsers(dest="command")

    # --- process ---
    p_process = subparsers.add_parser(
        "process", help="Render diagrams and rewrite documents in place",
    )
    _add_input_args(p_process)
    p_process.add_argument("-o", "--output", type=Path, default=None, help="Artifact directory")
    p_process.add_argument("--base-url", default=None, help="Public URL prefix for artifacts")
    p_process.add_argument("--theme", choices=_THEMES, default=None, help="Default theme")
    p_process.add_argument(
        "--both-themes", action="store_true", help="Generate light and dark variants",
    )
    p_process.add_argument(
        "--source-style", choices=_STYLES, default=None,
        help="How to re-embed diagram source next to the image",
    )
    p_process.add_argument(
        "--no-source", action="store_true", help="Do not re-embed diagram source",
    )
    p_process.add_argument(
        "-j", "--concurrency", type=int, default=None, help="Documents processed in parallel",
    )
    p_process.add_argument(
        "--skip-existing", action="store_true",
        help="Do not re-render diagrams whose artifacts already exist",
    )
    p_process.add_argument("--db", type=Path, default=None, help="Cache store location")
    p_process.add_argument(
        "--renderer", choices=["kroki", "placeholder"], default=None, help="Rendering backend",
    )
    p_process.add_argument(
        "--report", type=Path, default=None, help="Write run statistics as JSON",
    )
    p_process.set_defaults(func=_cmd_process)

    # --- analyze ---
    p_analyze = subparsers.add_parser(
        "analyze", help="List documents and their diagram counts (no rendering)",
    )
    _add_input_args(p_analyze)
    p_analyze.set_defaults(func=_cmd_analyze)

    # --- cache ---
    p_cache = subparsers.add_parser("cache", help="Inspect or clean the cache store")
    p_cache.add_argument("action", choices=["list", "prune"])
    p_cache.add_argument("--db", type=Path, required=True, help="Cache store location")
    p_cache.set_defaults(func=_cmd_cache)

    return parser


def _add_input_args(p: argparse.ArgumentParser) -> None:
    p.add_argument("-i", "--input", type=Path, default=None, help="Document root directory")
    p.add_argument(
        "--extensions", default=None,
        help="Comma-separated document extensions (default: .md,.mdx)",
    )


def _settings_from_args(args: argparse.Namespace) -> Any:
    """Map CLI flags onto Settings overrides; unset flags keep env/defaults."""
    from mermaid_processor.config.settings import load_settings

    mapping = {
        "input": "input_dir",
        "extensions": "document_extensions",
        "output": "output_dir",
        "base_url": "base_url",
        "theme": "default_theme",
        "source_style": "source_code_style",
        "concurrency": "concurrent",
        "db": "db_path",
        "renderer": "renderer",
    }
    overrides: dict[str, Any] = {}
    for arg_name, field in mapping.items():
        value = getattr(args, arg_name, None)
        if value is not None:
            overrides[field] = value

    if getattr(args, "both_themes", False):
        overrides["generate_both_themes"] = True
    if getattr(args, "no_source", False):
        overrides["include_source_code"] = False
    if getattr(args, "skip_existing", False):
        overrides["skip_existing"] = True
    if args.verbose:
        overrides["verbose"] = True
    return load_settings(**overrides)


async def _cmd_process(args: argparse.Namespace, settings: Any) -> int:
    """Run the full pipeline."""
    from mermaid_processor.api.facade import process_diagrams
    from mermaid_processor.core.result import Err
    from mermaid_processor.tracking.stats_aggregator import save_stats

    outcome = await process_diagrams(settings)
    if isinstance(outcome, Err):
        print(f"Processing failed: {outcome.error.message}", file=sys.stderr)
        return 1

    stats = outcome.value
    print("Processing completed successfully:")
    print(f"  Files processed:     {stats.files_processed}")
    print(f"  Diagrams generated:  {stats.diagrams_generated}")
    print(f"  Diagrams skipped:    {stats.diagrams_skipped}")
    print(f"  Errors:              {stats.errors}")

    if args.report is not None:
        save_stats(stats, args.report)
    return 0


async def _cmd_analyze(args: argparse.Namespace, settings: Any) -> int:
    """List documents with their diagram counts."""
    from mermaid_processor.api.facade import analyze_directory
    from mermaid_processor.core.result import Err

    outcome = analyze_directory(settings)
    if isinstance(outcome, Err):
        print(f"Analysis failed: {outcome.error.message}", file=sys.stderr)
        return 1

    pending = 0
    for analysis in outcome.value:
        marker = "*" if analysis.needs_processing else " "
        print(f" {marker} {analysis.total_blocks:3d}  {analysis.file_path}")
        pending += analysis.total_blocks
    print(f"\n{len(outcome.value)} documents, {pending} diagram blocks")
    return 0


async def _cmd_cache(args: argparse.Namespace, settings: Any) -> int:
    """List or prune cache entries."""
    from mermaid_processor.cache.cache_factory import open_cache_store
    from mermaid_processor.cache.content_cache import ContentCache
    from mermaid_processor.core.errors import CacheInitError

    try:
        store = open_cache_store(settings)
    except CacheInitError as exc:
        print(str(exc), file=sys.stderr)
        return 1
    if store is None:
        print("No cache store configured", file=sys.stderr)
        return 1

    try:
        if args.action == "list":
            entries = await store.list_entries()
            for entry in entries:
                print(f"{entry.content_hash[:12]}  {entry.updated_at:%Y-%m-%d %H:%M}  {entry.svg_path}")
            print(f"\n{len(entries)} entries")
        else:
            removed = await ContentCache(store).prune_stale()
            print(f"Removed {removed} stale entries")
    finally:
        store.close()
    return 0


def _setup_logging(settings: Any, verbose: bool) -> None:
    """Configure logging for CLI usage."""
    from mermaid_processor.logging.logger import setup_logging

    level = "DEBUG" if verbose else settings.log_level
    if not settings.verbose and level == "INFO":
        level = "WARNING"
    setup_logging(level=level, log_format=settings.log_format, log_file=settings.log_file)


if __name__ == "__main__":
    sys.exit(main())
