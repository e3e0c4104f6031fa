# feedbuilder/cli/ui/output.py
"""
Output methods for CLI display.

Success is green, warnings dark yellow, errors red, info plain.
"""

from __future__ import annotations

from rich.markup import escape

from .console import CHECK, CROSS, WARN, Panel, console


class OutputMixin:
    """Mixin providing output methods for the UI class."""

    def header(self, title: str, subtitle: str = "") -> None:
        """Print a command header in a fitted box."""
        if subtitle:
            content = f"[bold]{escape(title)}[/bold]\n[dim]{escape(subtitle)}[/dim]"
        else:
            content = f"[bold]{escape(title)}[/bold]"
        console.print(Panel.fit(content, border_style="blue"))

    def success(self, msg: str) -> None:
        """Print a success message."""
        console.print(f"[green]{CHECK} {escape(msg)}[/green]")

    def error(self, msg: str) -> None:
        """Print an error message."""
        console.print(f"[red]{CROSS} {escape(msg)}[/red]")

    def warning(self, msg: str, detail: str = "") -> None:
        """Print a warning message."""
        detail_str = f" [dim]({escape(detail)})[/dim]" if detail else ""
        console.print(f"[dark_orange]{WARN} {escape(msg)}[/dark_orange]{detail_str}")

    def info(self, msg: str) -> None:
        """Print an info message."""
        console.print(escape(msg))

