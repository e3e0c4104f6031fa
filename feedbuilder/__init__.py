# feedbuilder/__init__.py
"""
feedbuilder - update-feed manifest generator.

Scans a folder of build outputs and writes a NAppUpdate-style XML feed
describing every file and the conditions under which a client should
fetch it. Optionally stages the files next to the feed.
"""

from feedbuilder.config import ComparisonPolicy, FeedSettings, load_settings
from feedbuilder.feed import BuildSummary, FeedBuildExecutor, run_feed_build

__version__ = "0.3.0"

__all__ = [
    "ComparisonPolicy",
    "FeedSettings",
    "load_settings",
    "BuildSummary",
    "FeedBuildExecutor",
    "run_feed_build",
    "__version__",
]
