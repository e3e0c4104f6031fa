# feedbuilder/feed/executor.py
"""
Executor for a feed build.

Orchestrates the full pipeline:
1. Scan the output folder into catalog entries
2. Build the condition list for each entry
3. Append a FileUpdateTask per entry
4. (Optional) Stage each file next to the manifest
5. Write the manifest
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from feedbuilder.config.schema import FeedSettings
from feedbuilder.feed.conditions import ConditionBuilder, has_comparisons
from feedbuilder.feed.fileops import ResilientFileOps
from feedbuilder.feed.reporting import LogReporter, Reporter
from feedbuilder.feed.scanner import FileScanner, IgnoreRules, ScanResult
from feedbuilder.feed.writer import ManifestWriter
from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import MANIFEST, STAGING

logger = get_logger(__name__)


@dataclass
class BuildSummary:
    """Counters for one build run."""

    tasks: int = 0
    copied: int = 0
    cleaned: int = 0  # Existing staged files replaced
    skipped: int = 0  # Entries that could not be pathed for staging
    failed: int = 0
    missing_conditions: int = 0
    ignored: int = 0
    manifest_path: Optional[Path] = None
    started_at: datetime = field(default_factory=datetime.now)
    finished_at: Optional[datetime] = None

    @property
    def duration_seconds(self) -> float:
        if self.finished_at is None:
            return 0.0
        return (self.finished_at - self.started_at).total_seconds()

    def lines(self) -> List[str]:
        """Non-zero counters, formatted for the final report."""
        counters = (
            (self.copied, "items copied"),
            (self.cleaned, "items cleaned"),
            (self.skipped, "items skipped"),
            (self.failed, "items failed"),
            (self.missing_conditions, "items without any conditions"),
        )
        return [f"{count:5} {label}" for count, label in counters if count > 0]

    def __str__(self) -> str:
        return (
            f"tasks {self.tasks}, copied {self.copied}, cleaned {self.cleaned}, "
            f"skipped {self.skipped}, failed {self.failed}, "
            f"missing_conditions {self.missing_conditions}"
        )


class FeedBuildExecutor:
    """
    Runs a feed build from settings.

    Usage:
        executor = FeedBuildExecutor(settings, reporter=ui)
        scan = executor.scan()
        summary = executor.build(scan)
    """

    def __init__(
        self,
        settings: FeedSettings,
        *,
        reporter: Optional[Reporter] = None,
        file_ops: Optional[ResilientFileOps] = None,
    ) -> None:
        self._settings = settings
        self._policy = settings.policy
        self._reporter = reporter or LogReporter()
        self._file_ops = file_ops or ResilientFileOps()

    @property
    def settings(self) -> FeedSettings:
        return self._settings

    def scan(self) -> ScanResult:
        """Scan the configured output folder; empty when it is unset or missing."""
        root = self._settings.output_folder
        if not root:
            logger.info("No output folder configured, nothing to scan")
            return ScanResult(root="")

        scanner = FileScanner(
            IgnoreRules.from_policy(self._policy),
            reporter=self._reporter,
            case_sensitive=self._settings.case_sensitive_paths,
            with_version=self._policy.compare_version,
            with_hash=self._policy.compare_hash,
        )
        return scanner.scan(root)

    def build(self, scan_result: Optional[ScanResult] = None) -> BuildSummary:
        """
        Build the manifest and stage files.

        Raises:
            InvalidFeedLocationError: feed_xml is unset.
            ManifestWriteError: the feed folder or file cannot be written.
            DuplicateEntryError: scanning found clashing relative paths.
        """
        summary = BuildSummary()
        self._reporter.info(f"Building NAppUpdater feed '{self._settings.base_url}'")

        writer = ManifestWriter(
            self._settings.feed_xml,
            self._settings.base_url,
            file_ops=self._file_ops,
        )
        writer.ensure_output_directory()

        if scan_result is None:
            scan_result = self.scan()
        summary.ignored = len(scan_result.ignored)

        builder = ConditionBuilder(self._policy)
        replaced_before = self._file_ops.replaced

        self._reporter.info("Processing feed items")
        for entry in scan_result:
            conditions = builder.build(entry)
            if not has_comparisons(conditions):
                summary.missing_conditions += 1

            writer.add_task(entry, conditions)
            summary.tasks += 1
            self._reporter.success(f"Added tasks for {entry.relative_path}")

            if not self._policy.copy_files:
                continue

            resolution = writer.resolve_destination(entry)
            if not resolution.ok:
                summary.skipped += 1
                self._reporter.warning(str(resolution.error))
                continue

            if self._file_ops.copy_file(entry.absolute_path, resolution.destination):
                summary.copied += 1
            else:
                summary.failed += 1
                logger.warning(f"{STAGING} Could not stage {entry.relative_path}")

        summary.cleaned = self._file_ops.replaced - replaced_before
        summary.manifest_path = writer.save()
        summary.finished_at = datetime.now()

        logger.info(f"{MANIFEST} Build complete: {summary}")
        return summary


def run_feed_build(
    settings: FeedSettings,
    *,
    reporter: Optional[Reporter] = None,
    file_ops: Optional[ResilientFileOps] = None,
) -> BuildSummary:
    """Convenience function: scan and build in one call."""
    executor = FeedBuildExecutor(settings, reporter=reporter, file_ops=file_ops)
    return executor.build(executor.scan())
