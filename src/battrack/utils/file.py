"""Filesystem helpers for the sample log and rendered output."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Final

logger: Final = logging.getLogger(__name__)


def ensure_parent_directory(path: Path) -> Path:
    """Create the directory that will hold ``path``.

    Args:
        path: File about to be written

    Returns:
        The same path, for chaining
    """
    parent = path.parent
    if not parent.is_dir():
        parent.mkdir(parents=True, exist_ok=True)
        logger.debug("Created directory: %s", parent)
    return path


def is_empty_or_missing(path: Path) -> bool:
    """True when ``path`` does not exist yet or holds no bytes.

    Raises:
        OSError: If the file exists but cannot be inspected
    """
    try:
        return path.stat().st_size == 0
    except FileNotFoundError:
        return True
