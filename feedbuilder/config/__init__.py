# feedbuilder/config/__init__.py
"""
Build settings.

Usage:
    >>> from feedbuilder.config import load_settings
    >>> settings = load_settings("feed.yaml")
    >>> settings.policy.compare_hash
    True
"""

from .loader import load_settings, load_settings_dict
from .schema import ComparisonPolicy, FeedSettings, LoggingConfig

__all__ = [
    "FeedSettings",
    "ComparisonPolicy",
    "LoggingConfig",
    "load_settings",
    "load_settings_dict",
]
