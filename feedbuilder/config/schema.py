# feedbuilder/config/schema.py
"""
Configuration schema for feedbuilder.

This is the SINGLE source of truth for build settings.

Schema hierarchy:
- FeedSettings: everything one build reads (paths, base URL, flags)
- LoggingConfig: logging settings
- ComparisonPolicy: immutable flag snapshot handed to the core

Keys may be written in snake_case or with the original settings names
(OutputFolder, FeedXML, BaseURL, CompareVersion, ...).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

# =============================================================================
# Comparison Policy
# =============================================================================


@dataclass(frozen=True)
class ComparisonPolicy:
    """Flags that drive file filtering, condition building and staging."""

    compare_version: bool = False
    compare_size: bool = False
    compare_date: bool = False
    compare_hash: bool = False
    copy_files: bool = False
    ignore_debug_symbols: bool = False
    ignore_hosting_stub: bool = False


# =============================================================================
# Logging Configuration
# =============================================================================


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"

    model_config = ConfigDict(extra="forbid", frozen=True)


# =============================================================================
# Main Configuration
# =============================================================================


class FeedSettings(BaseModel):
    """
    Complete settings for one feed build.

    Example YAML:
        output_folder: ./bin/Release
        feed_xml: ./publish/feed.xml
        base_url: https://updates.example.com/myapp/
        ignore_debug_symbols: true
        ignore_vs_hosting: true
        compare_version: true
        compare_size: false
        compare_date: false
        compare_hash: true
        copy_files: true
    """

    output_folder: str = Field(
        default="", alias="OutputFolder", description="Folder scanned for files"
    )
    feed_xml: str = Field(default="", alias="FeedXML", description="Manifest output path")
    base_url: str = Field(default="", alias="BaseURL", description="Feed base URL")

    ignore_debug_symbols: bool = Field(default=True, alias="IgnoreDebugSymbols")
    ignore_vs_hosting: bool = Field(default=True, alias="IgnoreVsHosting")

    compare_version: bool = Field(default=True, alias="CompareVersion")
    compare_size: bool = Field(default=False, alias="CompareSize")
    compare_date: bool = Field(default=False, alias="CompareDate")
    compare_hash: bool = Field(default=True, alias="CompareHash")

    copy_files: bool = Field(default=True, alias="CopyFiles")
    case_sensitive_paths: bool = Field(
        default=False,
        alias="CaseSensitivePaths",
        description="Treat relative paths differing only in case as distinct",
    )

    logging: LoggingConfig = Field(
        default_factory=LoggingConfig, description="Logging configuration"
    )

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    @field_validator("output_folder", "feed_xml", "base_url", mode="before")
    @classmethod
    def strip_strings(cls, v: Any) -> Any:
        if v is None:
            return ""
        if isinstance(v, str):
            return v.strip()
        return v

    @property
    def policy(self) -> ComparisonPolicy:
        return ComparisonPolicy(
            compare_version=self.compare_version,
            compare_size=self.compare_size,
            compare_date=self.compare_date,
            compare_hash=self.compare_hash,
            copy_files=self.copy_files,
            ignore_debug_symbols=self.ignore_debug_symbols,
            ignore_hosting_stub=self.ignore_vs_hosting,
        )

    @classmethod
    def from_dict(cls, data: dict) -> "FeedSettings":
        """Create settings from a dictionary using pydantic validation."""
        return cls.model_validate(data)
