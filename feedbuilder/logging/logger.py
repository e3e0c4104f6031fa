# feedbuilder/logging/logger.py
"""
Logger factory.

Modules call get_logger(__name__). The CLI calls configure_logging() once
to attach a single rich handler (stderr) to the package logger.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.logging import RichHandler

ROOT_LOGGER_NAME = "feedbuilder"

_HANDLER_ATTR = "_feedbuilder_handler"


def get_logger(name: str) -> logging.Logger:
    return logging.getLogger(name)


def configure_logging(level: str | int = "INFO") -> logging.Logger:
    """
    Configure the package logger.

    Safe to call more than once: the handler is installed only the first
    time, later calls just update the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)

    if not any(getattr(h, _HANDLER_ATTR, False) for h in logger.handlers):
        handler = RichHandler(
            console=Console(stderr=True, highlight=False),
            show_path=False,
            markup=False,
        )
        handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
        setattr(handler, _HANDLER_ATTR, True)
        logger.addHandler(handler)

    return logger
