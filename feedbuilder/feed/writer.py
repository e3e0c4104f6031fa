# feedbuilder/feed/writer.py
"""
Manifest (feed XML) assembly and serialization.

Document shape:

    <?xml version="1.0" encoding="utf-8"?>
    <Feed BaseUrl="...">
      <Tasks>
        <FileUpdateTask localPath=... lastModified=... fileSize=... version=...>
          <Conditions>
            <FileExistsCondition type="or" />
            ...
          </Conditions>
        </FileUpdateTask>
      </Tasks>
    </Feed>

The tree is built in memory and written once. Tasks keep insertion order,
so the same scan always serializes to the same bytes.
"""

from __future__ import annotations

import os
import xml.etree.ElementTree as ET
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Mapping, Optional, Sequence

from feedbuilder.exceptions import (
    InvalidFeedLocationError,
    ManifestWriteError,
    PathResolutionError,
)
from feedbuilder.feed.catalog import FileCatalogEntry
from feedbuilder.feed.conditions import Condition
from feedbuilder.feed.fileops import ResilientFileOps
from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import MANIFEST

logger = get_logger(__name__)

XML_DECLARATION = '<?xml version="1.0" encoding="utf-8"?>\n'
INDENT = "  "


@dataclass(frozen=True)
class PathResolution:
    """Outcome of joining an entry's relative path with the output folder."""

    destination: Optional[Path] = None
    error: Optional[PathResolutionError] = None

    @property
    def ok(self) -> bool:
        return self.destination is not None


class ManifestWriter:
    """
    Builds the feed document and writes it to disk.

    Usage:
        writer = ManifestWriter("publish/feed.xml", base_url="https://host/app/")
        for entry in scan_result:
            writer.add_task(entry, builder.build(entry))
        writer.save()
    """

    def __init__(
        self,
        output_path: str | Path | None,
        base_url: str = "",
        *,
        file_ops: Optional[ResilientFileOps] = None,
    ) -> None:
        if output_path is None or not str(output_path).strip():
            raise InvalidFeedLocationError(
                "The feed file location needs to be defined.\n"
                "The outputs cannot be generated without this."
            )

        self.output_path = Path(str(output_path).strip()).expanduser().absolute()
        self.base_url = (base_url or "").strip()
        self._file_ops = file_ops or ResilientFileOps()

        self._feed = ET.Element("Feed")
        if self.base_url:
            self._feed.set("BaseUrl", self.base_url)
        self._tasks = ET.SubElement(self._feed, "Tasks")

    @property
    def output_dir(self) -> Path:
        return self.output_path.parent

    @property
    def task_count(self) -> int:
        return len(self._tasks)

    # ------------------------------------------------------------------ #
    # Document assembly
    # ------------------------------------------------------------------ #
    def add_task(self, entry: FileCatalogEntry, conditions: Sequence[Condition]) -> ET.Element:
        task = ET.SubElement(self._tasks, "FileUpdateTask")
        task.set("localPath", entry.relative_path)
        task.set("lastModified", str(entry.last_modified))
        task.set("fileSize", str(entry.size_bytes))
        if entry.file_version:
            task.set("version", entry.file_version)

        conds = ET.SubElement(task, "Conditions")
        for condition in conditions:
            ET.SubElement(conds, condition.tag, dict(condition.attributes))

        logger.debug(f"{MANIFEST} Added task for {entry.relative_path}")
        return task

    def resolve_destination(self, entry: FileCatalogEntry) -> PathResolution:
        """Where the staged copy of entry goes, or why it cannot be placed."""
        folder = str(self.output_dir)
        filename = entry.relative_path

        if not filename or not filename.strip():
            return PathResolution(error=PathResolutionError(folder, filename, "empty path"))
        if os.path.isabs(filename):
            return PathResolution(error=PathResolutionError(folder, filename, "absolute path"))

        destination = Path(os.path.normpath(os.path.join(folder, filename)))
        try:
            destination.relative_to(self.output_dir)
        except ValueError:
            return PathResolution(
                error=PathResolutionError(folder, filename, "outside the output folder")
            )
        if destination == self.output_dir:
            return PathResolution(error=PathResolutionError(folder, filename, "empty path"))

        return PathResolution(destination=destination)

    # ------------------------------------------------------------------ #
    # Serialization
    # ------------------------------------------------------------------ #
    def to_bytes(self) -> bytes:
        tree = ET.ElementTree(self._feed)
        ET.indent(tree, space=INDENT)
        body = ET.tostring(self._feed, encoding="unicode")
        return (XML_DECLARATION + body + "\n").encode("utf-8")

    def ensure_output_directory(self) -> None:
        try:
            self._file_ops.ensure_directory(self.output_dir)
        except OSError as e:
            raise ManifestWriteError(
                f"Cannot create feed folder {self.output_dir}: {e}"
            ) from e

    def save(self) -> Path:
        """
        Write the manifest, replacing any existing file.

        Raises:
            ManifestWriteError: folder creation or the write failed.
        """
        self.ensure_output_directory()
        data = self.to_bytes()
        try:
            self.output_path.write_bytes(data)
        except OSError as e:
            raise ManifestWriteError(f"Cannot write feed {self.output_path}: {e}") from e

        logger.info(f"{MANIFEST} Wrote {self.task_count} tasks to {self.output_path}")
        return self.output_path


def write_manifest(
    entries: Iterable[FileCatalogEntry],
    conditions_per_entry: Mapping[str, Sequence[Condition]],
    base_url: str,
    output_path: str | Path,
) -> Path:
    """
    Build and write a manifest in one call.

    conditions_per_entry is keyed by relative path; entries without a key
    get an empty Conditions element.
    """
    writer = ManifestWriter(output_path, base_url)
    for entry in entries:
        writer.add_task(entry, conditions_per_entry.get(entry.relative_path, ()))
    return writer.save()
