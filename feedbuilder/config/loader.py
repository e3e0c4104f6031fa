# feedbuilder/config/loader.py
"""
Settings loader for feedbuilder.

Responsibilities:
- Read a YAML settings file
- Expand ${ENV_VAR} placeholders
- Resolve relative paths against the settings file's folder
- Validate via schema
"""

from __future__ import annotations

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import ValidationError

from feedbuilder.config.schema import FeedSettings
from feedbuilder.exceptions import ConfigError, ConfigNotFoundError
from feedbuilder.logging import get_logger
from feedbuilder.logging.tags import CONFIG

logger = get_logger(__name__)

_PATH_KEYS = (("output_folder", "OutputFolder"), ("feed_xml", "FeedXML"))


def _expand_env(value: Any) -> Any:
    if isinstance(value, str):
        return os.path.expandvars(value)
    if isinstance(value, dict):
        return {k: _expand_env(v) for k, v in value.items()}
    if isinstance(value, list):
        return [_expand_env(v) for v in value]
    return value


def load_settings_dict(path: str | Path) -> dict:
    path = Path(path)
    if not path.is_file():
        raise ConfigNotFoundError(f"Settings file not found: {path}")

    try:
        with path.open("r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise ConfigError(f"Settings file {path} must contain a mapping")

    return _expand_env(data)


def _resolve_paths(data: dict, base_dir: Path) -> dict:
    resolved = dict(data)
    for snake, alias in _PATH_KEYS:
        for key in (snake, alias):
            value = resolved.get(key)
            if isinstance(value, str) and value.strip():
                candidate = Path(value.strip()).expanduser()
                if not candidate.is_absolute():
                    candidate = base_dir / candidate
                resolved[key] = str(candidate)
    return resolved


def load_settings(path: str | Path) -> FeedSettings:
    """
    Load and validate a settings file.

    Raises:
        ConfigNotFoundError: the file does not exist.
        ConfigError: the file is not valid YAML or fails validation.
    """
    path = Path(path)
    logger.debug(f"{CONFIG} Loading settings from {path}")

    data = _resolve_paths(load_settings_dict(path), path.resolve().parent)

    try:
        return FeedSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid settings in {path}: {e}") from e
