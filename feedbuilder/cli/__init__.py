# feedbuilder/cli/__init__.py
"""
feedbuilder CLI.

Provides the `feedbuilder` command.
"""

from feedbuilder.cli.cli import ExitCode, app

__all__ = ["app", "ExitCode"]
