"""Rich console formatting utilities.

Provides consistent formatting for CLI output using Rich.
"""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

from rich.console import Console
from rich.table import Table

from macclean.core.theme import get_theme
from macclean.models.orphan import Confidence

if TYPE_CHECKING:
    from macclean.models.orphan import OrphanFile


def _detect_color_system() -> str | None:
    """Detect the best color system for the current terminal.

    Returns "truecolor" for interactive terminals to enable full hex color support,
    None otherwise to let Rich auto-detect.
    """
    if sys.stdout.isatty():
        return "truecolor"
    return None


# Shared console instances (theme loaded once at import)
console = Console(theme=get_theme(), color_system=_detect_color_system())
err_console = Console(theme=get_theme(), stderr=True, color_system=_detect_color_system())

CONFIDENCE_ICONS: dict[Confidence | None, str] = {
    Confidence.HIGH: "\U0001f534",  # red circle
    Confidence.MEDIUM: "\U0001f7e1",  # yellow circle
    Confidence.LOW: "⚪",  # white circle
    None: "\U0001f4e6",  # package
}


def format_size(size_bytes: int | None) -> str:
    """Format byte count as human-readable string (binary units)."""
    if not size_bytes:
        return "0 B"
    size = float(size_bytes)
    for unit in ("B", "KB", "MB", "GB"):
        if abs(size) < 1024:
            return f"{size:.2f} {unit}" if unit != "B" else f"{int(size)} B"
        size /= 1024
    return f"{size:.2f} TB"


def confidence_style(confidence: Confidence | None) -> str:
    """Return the theme style name for a confidence level."""
    if confidence is None:
        return "text"
    return f"confidence_{confidence.value}"


def create_orphan_table(title: str = "Application Residue") -> Table:
    """Create a pre-configured table for displaying orphan records.

    Args:
        title: Table title.

    Returns:
        Rich Table configured for orphan display.
    """
    table = Table(
        title=title,
        show_header=True,
        header_style="bold_header",
        border_style="border",
        row_styles=["", "on grey7"],
    )
    table.add_column("", width=2, justify="center")
    table.add_column("Application", no_wrap=True)
    table.add_column("Category", style="muted")
    table.add_column("Size", style="size", justify="right")
    table.add_column("Path", style="text", overflow="fold")
    return table


def format_orphan_row(orphan: OrphanFile) -> tuple[str, str, str, str, str]:
    """Format an orphan record as a table row with confidence styling.

    Args:
        orphan: The orphan record to format.

    Returns:
        Tuple of (icon, name, category, size, path) with Rich markup.
    """
    style = confidence_style(orphan.confidence)
    return (
        CONFIDENCE_ICONS[orphan.confidence],
        f"[{style}]{orphan.app_name}[/]",
        orphan.category,
        format_size(orphan.size),
        orphan.path,
    )


def print_info(message: str) -> None:
    """Print an info message."""
    console.print(f"[info]{message}[/]")


def print_warning(message: str) -> None:
    """Print a warning message."""
    err_console.print(f"[warning]Warning:[/] {message}")


def print_error(message: str) -> None:
    """Print an error message."""
    err_console.print(f"[error]Error:[/] {message}")


def print_success(message: str) -> None:
    """Print a success message."""
    console.print(f"[success]{message}[/]")
