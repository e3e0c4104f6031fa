# feedbuilder/cli/ui/__init__.py
"""
CLI UI components.

Usage:
    from feedbuilder.cli.ui import ui

    ui.header("feedbuilder")
    ui.success("Done!")

The `ui` object also satisfies feedbuilder.feed.Reporter, so it can be
handed straight to the build executor.
"""

from __future__ import annotations

from .console import console
from .output import OutputMixin


class UI(OutputMixin):
    """Unified rich output helpers."""

    pass


# Singleton instance
ui = UI()

__all__ = ["ui", "UI", "console"]
