# feedbuilder/feed/__init__.py
"""
Feed building for feedbuilder.

This package turns a folder of build outputs into an update feed:
- Scanner: walks the folder and snapshots per-file metadata
- Conditions: derives the ordered update conditions per file
- Writer: assembles and writes the feed XML
- FileOps: stages files next to the feed with bounded retry
- Executor: orchestrates the full pipeline

Usage:
    from feedbuilder.config import load_settings
    from feedbuilder.feed import run_feed_build

    summary = run_feed_build(load_settings("feed.yaml"))
    print(summary)  # "tasks 12, copied 12, cleaned 0, ..."
"""

from .catalog import (
    FileCatalogEntry,
    compute_content_hash,
    read_file_version,
    to_file_time,
)
from .conditions import Condition, ConditionBuilder, has_comparisons
from .executor import BuildSummary, FeedBuildExecutor, run_feed_build
from .fileops import ResilientFileOps, RetryPolicy
from .reporting import LogReporter, Reporter
from .scanner import FileScanner, IgnoreRules, ScanResult, scan_directory
from .writer import ManifestWriter, PathResolution, write_manifest

__all__ = [
    # Catalog
    "FileCatalogEntry",
    "compute_content_hash",
    "read_file_version",
    "to_file_time",
    # Scanner
    "IgnoreRules",
    "FileScanner",
    "ScanResult",
    "scan_directory",
    # Conditions
    "Condition",
    "ConditionBuilder",
    "has_comparisons",
    # Writer
    "ManifestWriter",
    "PathResolution",
    "write_manifest",
    # FileOps
    "RetryPolicy",
    "ResilientFileOps",
    # Reporting
    "Reporter",
    "LogReporter",
    # Executor
    "BuildSummary",
    "FeedBuildExecutor",
    "run_feed_build",
]
