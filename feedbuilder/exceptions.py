# feedbuilder/exceptions.py
"""
Error taxonomy for feedbuilder.

Fatal errors (config, manifest location, manifest write, duplicate scan
entries) propagate to the CLI, which maps them onto exit flags.
PathResolutionError is per-entry and travels inside a PathResolution value
instead of being raised.
"""

from __future__ import annotations


class FeedBuilderError(Exception):
    """Base class for all feedbuilder errors."""


class ConfigError(FeedBuilderError):
    """Settings file could not be parsed or validated."""


class ConfigNotFoundError(ConfigError):
    """Named settings file does not exist."""


class InvalidFeedLocationError(FeedBuilderError):
    """The feed (manifest) output path is unset."""

    def __init__(self, message: str = "The feed file location needs to be defined.") -> None:
        super().__init__(message)


class ManifestWriteError(FeedBuilderError):
    """The manifest directory could not be created or the file written."""


class DuplicateEntryError(FeedBuilderError):
    """Two scanned files map to the same relative path."""

    def __init__(self, relative_path: str, first: str, second: str) -> None:
        self.relative_path = relative_path
        self.first = first
        self.second = second
        super().__init__(
            f"Duplicate relative path '{relative_path}': '{first}' and '{second}'"
        )


class PathResolutionError(FeedBuilderError):
    """A relative path could not be joined with the output directory."""

    def __init__(self, folder: str, filename: str, reason: str = "") -> None:
        self.folder = folder
        self.filename = filename
        self.reason = reason
        detail = f" ({reason})" if reason else ""
        super().__init__(
            f"The file could not be pathed: folder='{folder}' file='{filename}'{detail}"
        )


__all__ = [
    "FeedBuilderError",
    "ConfigError",
    "ConfigNotFoundError",
    "InvalidFeedLocationError",
    "ManifestWriteError",
    "DuplicateEntryError",
    "PathResolutionError",
]
