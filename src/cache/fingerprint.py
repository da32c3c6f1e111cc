# src/cache/fingerprint.py - v3
"""Content fingerprints for rendered diagrams.

The key covers everything that changes the rendered bytes or where they
land: the trimmed source, the theme, the background colour, the output
format, the renderer backend and the output directory.
"""

from __future__ import annotations

import hashlib
import json


def compute_cache_key(
    code: str,
    theme: str,
    background_color: str = "transparent",
    output_format: str = "svg",
    renderer: str = "",
    output_dir: str = "",
) -> str:
    """Return the SHA-256 hex fingerprint of a renderable unit.

    Args:
        renderer: Backend identity, e.g. ``kroki:https://kroki.io``.
        output_dir: Absolute artifact directory; a hit is only valid for
            the output root it was rendered into.
    """
    payload = json.dumps(
        {
            "code": code,
            "theme": theme,
            "background": background_color,
            "format": output_format,
            "renderer": renderer,
            "output_dir": output_dir,
        },
        sort_keys=True,
        ensure_ascii=False,
    )
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()
