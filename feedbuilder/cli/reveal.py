# feedbuilder/cli/reveal.py
"""Open a folder in the platform's file browser."""

from __future__ import annotations

from pathlib import Path

import typer

from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import CLI

logger = get_logger(__name__)


def reveal_folder(path: str | Path) -> bool:
    """
    Ask the OS to show path. Never required for correctness.

    Returns:
        True if the launcher reported success.
    """
    path = Path(path)
    if not path.is_dir():
        logger.warning(f"{CLI} Cannot open {path}: not a folder")
        return False

    try:
        code = typer.launch(str(path))
    except OSError as e:
        logger.warning(f"{CLI} Cannot open {path}: {e}")
        return False
    return code == 0
