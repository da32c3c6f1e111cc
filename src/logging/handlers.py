# src/logging/handlers.py - v2
"""Size-based rotating file handler for the optional log file."""

from __future__ import annotations

import re
from logging.handlers import RotatingFileHandler
from pathlib import Path

_UNITS = {"": 1, "B": 1, "KB": 1024, "MB": 1024**2, "GB": 1024**3}


def parse_size(size_str: str) -> int:
    """Parse '10MB', '512KB' or a plain byte count into bytes."""
    match = re.fullmatch(r"(\d+)\s*([KMG]?B)?", size_str.strip(), re.IGNORECASE)
    if not match:
        raise ValueError(f"Invalid size format: {size_str!r}. Use e.g. '10MB'.")
    unit = (match.group(2) or "").upper()
    return int(match.group(1)) * _UNITS[unit]


def create_rotating_handler(
    log_file: Path | str, rotation: str = "10MB", retention: int = 5,
) -> RotatingFileHandler:
    """Rotating handler keeping ``retention`` backups of ``rotation`` bytes each."""
    path = Path(log_file).expanduser()
    path.parent.mkdir(parents=True, exist_ok=True)
    return RotatingFileHandler(
        filename=str(path),
        maxBytes=parse_size(rotation),
        backupCount=retention,
        encoding="utf-8",
    )
