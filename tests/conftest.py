# tests/conftest.py
from __future__ import annotations

from pathlib import Path
from typing import List

import pytest

from feedbuilder.feed.fileops import ResilientFileOps


class RecordingReporter:
    """Reporter that keeps every event for assertions."""

    def __init__(self) -> None:
        self.events: List[tuple[str, str]] = []

    def info(self, msg: str) -> None:
        self.events.append(("info", msg))

    def warning(self, msg: str) -> None:
        self.events.append(("warning", msg))

    def error(self, msg: str) -> None:
        self.events.append(("error", msg))

    def success(self, msg: str) -> None:
        self.events.append(("success", msg))

    def of(self, kind: str) -> List[str]:
        return [msg for k, msg in self.events if k == kind]


@pytest.fixture
def reporter() -> RecordingReporter:
    return RecordingReporter()


@pytest.fixture
def sleeps() -> List[float]:
    return []


@pytest.fixture
def fast_ops(sleeps: List[float]) -> ResilientFileOps:
    """File ops whose retry delays are recorded instead of slept."""
    return ResilientFileOps(sleep=sleeps.append)


def write_file(path: Path, data: bytes = b"") -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(data)
    return path
