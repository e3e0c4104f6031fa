# feedbuilder/feed/scanner.py
"""
Source tree scanner.

Walks the build output folder once and returns an ordered mapping of
relative path -> FileCatalogEntry. Ignorable files (debug symbols, the
Visual Studio hosting stub) are reported and left out.

Walk order is made deterministic by sorting directory and file names, so
two scans of an unchanged tree produce the same entry order.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterator, List, Optional, Tuple

from feedbuilder.config.schema import ComparisonPolicy
from feedbuilder.exceptions import DuplicateEntryError
from feedbuilder.feed.catalog import FileCatalogEntry
from feedbuilder.feed.reporting import LogReporter, Reporter
from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import SCAN

logger = get_logger(__name__)

DEBUG_SYMBOL_EXTENSIONS: Tuple[str, ...] = (".pdb",)
HOSTING_STUB_PATTERNS: Tuple[str, ...] = ("vshost.exe",)


@dataclass(frozen=True)
class IgnoreRules:
    """Decides which scanned files stay out of the feed."""

    ignore_debug_symbols: bool = False
    ignore_hosting_stub: bool = False
    debug_symbol_extensions: Tuple[str, ...] = DEBUG_SYMBOL_EXTENSIONS
    hosting_stub_patterns: Tuple[str, ...] = HOSTING_STUB_PATTERNS

    @classmethod
    def from_policy(cls, policy: ComparisonPolicy) -> "IgnoreRules":
        return cls(
            ignore_debug_symbols=policy.ignore_debug_symbols,
            ignore_hosting_stub=policy.ignore_hosting_stub,
        )

    def is_ignorable(self, path: str | Path) -> bool:
        path = str(path)
        if self.ignore_debug_symbols:
            ext = os.path.splitext(path)[1].lower()
            if ext in self.debug_symbol_extensions:
                return True
        if self.ignore_hosting_stub:
            lowered = path.lower()
            return any(pattern in lowered for pattern in self.hosting_stub_patterns)
        return False


@dataclass
class ScanResult:
    """Entries in walk order plus the files that were ignored."""

    root: str
    entries: Dict[str, FileCatalogEntry] = field(default_factory=dict)
    ignored: List[str] = field(default_factory=list)

    @property
    def total_scanned(self) -> int:
        return len(self.entries) + len(self.ignored)

    def __len__(self) -> int:
        return len(self.entries)

    def __iter__(self) -> Iterator[FileCatalogEntry]:
        return iter(self.entries.values())


class FileScanner:
    """
    Scans a folder into catalog entries.

    Usage:
        scanner = FileScanner(IgnoreRules(ignore_debug_symbols=True))
        result = scanner.scan("./bin/Release")
        for entry in result:
            print(entry.relative_path, entry.size_bytes)
    """

    def __init__(
        self,
        rules: Optional[IgnoreRules] = None,
        *,
        reporter: Optional[Reporter] = None,
        case_sensitive: bool = False,
        with_version: bool = False,
        with_hash: bool = False,
    ) -> None:
        self._rules = rules or IgnoreRules()
        self._reporter = reporter or LogReporter()
        self._case_sensitive = case_sensitive
        self._with_version = with_version
        self._with_hash = with_hash

    def _key(self, relative_path: str) -> str:
        return relative_path if self._case_sensitive else relative_path.casefold()

    def _walk(self, root: str) -> Iterator[str]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames.sort()
            for name in sorted(filenames):
                path = os.path.join(dirpath, name)
                if os.path.isfile(path):
                    yield path

    def scan(self, root: str | Path) -> ScanResult:
        """
        Scan root recursively.

        A missing root yields an empty result; the caller decides whether
        that is an error.

        Raises:
            DuplicateEntryError: two files share a relative path.
        """
        root = os.path.abspath(str(root))
        result = ScanResult(root=root)

        if not os.path.isdir(root):
            logger.debug(f"{SCAN} Root {root} does not exist, nothing to scan")
            return result

        seen: Dict[str, str] = {}
        for path in self._walk(root):
            if self._rules.is_ignorable(path):
                self._reporter.warning(f"Skipping {path}")
                result.ignored.append(path)
                continue

            entry = FileCatalogEntry.from_path(
                path,
                root,
                with_version=self._with_version,
                with_hash=self._with_hash,
            )

            key = self._key(entry.relative_path)
            if key in seen:
                raise DuplicateEntryError(entry.relative_path, seen[key], path)
            seen[key] = path

            result.entries[entry.relative_path] = entry
            self._reporter.success(f"Added {entry.relative_path} to file list")

        logger.info(
            f"{SCAN} Scanned {result.total_scanned} files under {root} "
            f"({len(result.entries)} added, {len(result.ignored)} ignored)"
        )
        return result


def scan_directory(
    root: str | Path,
    rules: Optional[IgnoreRules] = None,
    **kwargs,
) -> ScanResult:
    """Convenience wrapper around FileScanner.scan()."""
    return FileScanner(rules, **kwargs).scan(root)
