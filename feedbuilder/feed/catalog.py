# feedbuilder/feed/catalog.py
"""
Per-file metadata snapshot.

A FileCatalogEntry is created once per scanned file and never mutated.
Size and last-modified time are always populated; version and content
hash only when the matching comparison is enabled, since both cost I/O.
"""

from __future__ import annotations

import hashlib
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

import pefile

# 100ns ticks between 1601-01-01 and 1970-01-01 (Windows FILETIME epoch)
FILETIME_EPOCH_OFFSET = 116_444_736_000_000_000

_HASH_BLOCK_SIZE = 1024 * 1024


def to_file_time(mtime_ns: int) -> int:
    """Convert a POSIX timestamp in nanoseconds to FILETIME ticks."""
    return mtime_ns // 100 + FILETIME_EPOCH_OFFSET


def compute_content_hash(path: str | Path) -> str:
    """Lowercase hex SHA-256 of the file's bytes."""
    digest = hashlib.sha256()
    with open(path, "rb") as f:
        for block in iter(lambda: f.read(_HASH_BLOCK_SIZE), b""):
            digest.update(block)
    return digest.hexdigest()


def _looks_like_pe(path: str | Path) -> bool:
    try:
        with open(path, "rb") as f:
            return f.read(2) == b"MZ"
    except OSError:
        return False


def read_file_version(path: str | Path) -> Optional[str]:
    """
    Read the file version from a PE image's version resource.

    Returns a dotted four-part string such as "1.2.0.0", or None when the
    file is not a PE image or carries no version resource.
    """
    if not _looks_like_pe(path):
        return None

    try:
        pe = pefile.PE(str(path), fast_load=True)
    except pefile.PEFormatError:
        return None

    try:
        pe.parse_data_directories(
            directories=[pefile.DIRECTORY_ENTRY["IMAGE_DIRECTORY_ENTRY_RESOURCE"]]
        )
        fixed = getattr(pe, "VS_FIXEDFILEINFO", None)
        if not fixed:
            return None
        info = fixed[0] if isinstance(fixed, list) else fixed
        ms, ls = info.FileVersionMS, info.FileVersionLS
        return f"{ms >> 16}.{ms & 0xFFFF}.{ls >> 16}.{ls & 0xFFFF}"
    finally:
        pe.close()


@dataclass(frozen=True)
class FileCatalogEntry:
    """
    Metadata for one file of the feed.

    relative_path is the key within a scan; absolute_path is where the
    bytes live on disk. last_modified is in FILETIME ticks, matching what
    the update client compares against.
    """

    relative_path: str
    absolute_path: str
    size_bytes: int
    last_modified: int
    file_version: Optional[str] = None
    content_hash: Optional[str] = None

    @property
    def ext(self) -> str:
        return os.path.splitext(self.relative_path)[1].lower()

    @classmethod
    def from_path(
        cls,
        path: str | Path,
        root: str | Path,
        *,
        with_version: bool = False,
        with_hash: bool = False,
    ) -> "FileCatalogEntry":
        """
        Snapshot a file under root.

        root is stripped from path including its trailing separator.
        """
        absolute = os.path.abspath(path)
        root_prefix = os.path.join(os.path.abspath(root), "")
        if not absolute.startswith(root_prefix):
            raise ValueError(f"{absolute} is not under {root_prefix}")

        stat = os.stat(absolute)
        return cls(
            relative_path=absolute[len(root_prefix):],
            absolute_path=absolute,
            size_bytes=stat.st_size,
            last_modified=to_file_time(stat.st_mtime_ns),
            file_version=read_file_version(absolute) if with_version else None,
            content_hash=compute_content_hash(absolute) if with_hash else None,
        )
