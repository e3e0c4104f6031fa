# feedbuilder/cli/cli.py
"""
Command-line feed builder.

High-level flow:

    settings file → scan → (--build) conditions + tasks + staging → feed XML

- Without --build the source tree is only scanned and listed
- With --build the manifest is written and, if enabled, files are staged
- --open-outputs reveals the manifest folder afterwards

Exit codes are bit flags (see ExitCode) and may combine.
"""

from __future__ import annotations

import enum
from pathlib import Path
from typing import Optional

import typer

from feedbuilder.config import FeedSettings, load_settings
from feedbuilder.exceptions import (
    ConfigError,
    ConfigNotFoundError,
    DuplicateEntryError,
    InvalidFeedLocationError,
    ManifestWriteError,
)
from feedbuilder.feed import FeedBuildExecutor
from feedbuilder.cli.reveal import reveal_folder
from feedbuilder.cli.ui import ui
from feedbuilder.logging import configure_logging, get_logger
from feedbuilder.logging.tags import CLI

app = typer.Typer(help="Build NAppUpdate feeds from a folder of build outputs")
logger = get_logger(__name__)


class ExitCode(enum.IntFlag):
    SUCCESS = 0
    FAILURE = 1
    FILE_NOT_FOUND = 2
    INVALID_FEED_FILE_LOCATION = 4


def _exit(code: ExitCode) -> typer.Exit:
    return typer.Exit(code=int(code))


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------

def _load(settings_file: Optional[Path]) -> FeedSettings:
    if settings_file is None:
        return FeedSettings()

    try:
        return load_settings(settings_file)
    except ConfigNotFoundError:
        ui.warning(f"Unable to locate file {settings_file}")
        raise _exit(ExitCode.FAILURE | ExitCode.FILE_NOT_FOUND)
    except ConfigError as e:
        ui.error(str(e))
        raise _exit(ExitCode.FAILURE)


def _report(executor: FeedBuildExecutor, open_outputs: bool) -> None:
    try:
        summary = executor.build(executor.scan())
    except InvalidFeedLocationError as e:
        ui.error(str(e))
        raise _exit(ExitCode.FAILURE | ExitCode.INVALID_FEED_FILE_LOCATION)
    except (ManifestWriteError, DuplicateEntryError) as e:
        ui.error(str(e))
        raise _exit(ExitCode.FAILURE)

    if open_outputs and summary.manifest_path is not None:
        if not reveal_folder(summary.manifest_path.parent):
            ui.warning(f"Could not open {summary.manifest_path.parent}")

    ui.success("Done building feed.")
    for line in summary.lines():
        ui.success(line)


# ---------------------------------------------------------------------------
# Command
# ---------------------------------------------------------------------------

@app.command()
def main(
    settings_file: Optional[Path] = typer.Argument(
        None,
        help="YAML settings file describing the folder to scan and the feed to write.",
    ),
    build: bool = typer.Option(
        False,
        "--build",
        "-b",
        help="Write the feed (and stage files when copy_files is set).",
    ),
    open_outputs: bool = typer.Option(
        False,
        "--open-outputs",
        "-o",
        help="Open the feed folder after a successful build.",
    ),
    verbose: bool = typer.Option(
        False,
        "--verbose",
        "-v",
        help="Enable debug logging.",
    ),
) -> None:
    """
    Scan a build output folder and, with --build, write its update feed.
    """
    if settings_file is None and not (build or open_outputs or verbose):
        ui.warning("No arguments provided. Exiting.")
        raise _exit(ExitCode.SUCCESS)

    settings = _load(settings_file)
    configure_logging("DEBUG" if verbose else settings.logging.level)
    logger.debug(f"{CLI} Settings: {settings.model_dump()}")

    if settings_file is not None:
        ui.header("feedbuilder", str(settings_file))

    executor = FeedBuildExecutor(settings, reporter=ui)

    if build:
        _report(executor, open_outputs)
        return

    try:
        scan = executor.scan()
    except DuplicateEntryError as e:
        ui.error(str(e))
        raise _exit(ExitCode.FAILURE)
    ui.info(f"{len(scan)} files in {scan.root or '(no output folder)'}")


if __name__ == "__main__":
    app()
