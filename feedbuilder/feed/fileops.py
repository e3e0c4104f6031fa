# feedbuilder/feed/fileops.py
"""
File staging with bounded retry.

Directory creation and file copies can fail transiently on a slow or
locked disk. Both are retried on OSError (I/O and permission errors) with
a fixed delay; any other exception propagates on the first attempt.

The retry sleeps block the calling thread. There is no cancellation.
"""

from __future__ import annotations

import logging
import os
import shutil
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from tenacity import (
    Retrying,
    before_sleep_log,
    retry_if_exception_type,
    stop_after_attempt,
    wait_fixed,
)

from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import STAGING

logger = get_logger(__name__)


@dataclass(frozen=True)
class RetryPolicy:
    """Total attempts and the fixed delay between them."""

    max_attempts: int = 3
    delay_seconds: float = 0.2


class ResilientFileOps:
    """
    Directory creation and overwrite-copy with retry.

    Usage:
        ops = ResilientFileOps()
        if not ops.copy_file("bin/app.exe", "publish/app.exe"):
            failed += 1
    """

    def __init__(
        self,
        policy: RetryPolicy | None = None,
        *,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        self.policy = policy or RetryPolicy()
        self._sleep = sleep
        self.replaced = 0

    def _retrying(self) -> Retrying:
        return Retrying(
            stop=stop_after_attempt(self.policy.max_attempts),
            wait=wait_fixed(self.policy.delay_seconds),
            retry=retry_if_exception_type(OSError),
            sleep=self._sleep,
            reraise=True,
            before_sleep=before_sleep_log(logger, logging.WARNING),
        )

    def ensure_directory(self, path: str | Path) -> None:
        """
        Create path and its parents if missing.

        Raises:
            OSError: the directory still could not be created after all
                attempts.
        """
        path = os.fspath(path)
        if os.path.isdir(path):
            return

        for attempt in self._retrying():
            with attempt:
                os.makedirs(path, exist_ok=True)
        logger.debug(f"{STAGING} Created directory {path}")

    @staticmethod
    def _remove_existing(dest: str) -> bool:
        if not os.path.lexists(dest):
            return False
        os.remove(dest)
        return True

    @staticmethod
    def _is_same_file(source: str, dest: str) -> bool:
        try:
            return os.path.exists(dest) and os.path.samefile(source, dest)
        except OSError:
            # unreadable source; the retried copy reports it
            return False

    def copy_file(self, source: str | Path, dest: str | Path) -> bool:
        """
        Copy source over dest.

        Returns:
            True when copied, False when every attempt failed with an
            OSError. Other exceptions are raised immediately.
        """
        source, dest = os.fspath(source), os.fspath(dest)

        if self._is_same_file(source, dest):
            logger.debug(f"{STAGING} {dest} is the source file, nothing to copy")
            return True

        try:
            self.ensure_directory(os.path.dirname(os.path.abspath(dest)))
        except OSError as e:
            logger.error(f"{STAGING} Cannot create folder for {dest}: {e}")
            return False

        # a destination removed on several attempts is still one replacement
        removed = False
        try:
            for attempt in self._retrying():
                with attempt:
                    removed = self._remove_existing(dest) or removed
                    shutil.copy2(source, dest)
        except OSError as e:
            self.replaced += removed
            logger.error(
                f"{STAGING} Failed to copy {source} -> {dest} after "
                f"{self.policy.max_attempts} attempts: {e}"
            )
            return False

        self.replaced += removed
        logger.debug(f"{STAGING} Copied {source} -> {dest}")
        return True
