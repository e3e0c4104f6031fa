# feedbuilder/feed/reporting.py
"""
Reporting seam between the core and whatever displays progress.

The CLI passes its rich `ui` object, which already has these methods.
Library callers get LogReporter, which forwards to logging.
"""

from __future__ import annotations

import logging
from typing import Protocol, runtime_checkable


@runtime_checkable
class Reporter(Protocol):
    """Protocol for user-facing progress events."""

    def info(self, msg: str) -> None:
        ...

    def warning(self, msg: str) -> None:
        ...

    def error(self, msg: str) -> None:
        ...

    def success(self, msg: str) -> None:
        ...


class LogReporter:
    """Reporter that writes every event to a logger."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._logger = logger or logging.getLogger("feedbuilder.report")

    def info(self, msg: str) -> None:
        self._logger.info(msg)

    def warning(self, msg: str) -> None:
        self._logger.warning(msg)

    def error(self, msg: str) -> None:
        self._logger.error(msg)

    def success(self, msg: str) -> None:
        self._logger.info(msg)
