"""Unit tests for shared CLI display helpers."""

from unittest.mock import patch

from macclean.cleanup.commands import CommandOutcome, CommandStatus
from macclean.cleanup.scanner import CleanupItem, CleanupPath
from macclean.cli.display import (
    create_cleanup_table,
    print_command_outcomes,
    print_deletion_summary,
)
from macclean.core.config import CleanupTask
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionSummary, RemovalResult, RemovalStatus


def test_cleanup_table_rows() -> None:
    """One row per task with path count and size."""
    item = CleanupItem(
        task=CleanupTask(name="npm", description="npm cache"),
        paths=(CleanupPath("/a", 1024), CleanupPath("/b", 1024)),
    )

    table = create_cleanup_table([item])

    assert table.row_count == 1
    headers = [c.header for c in table.columns]
    assert headers == ["Task", "Description", "Paths", "Size", "Commands"]


def test_deletion_summary_success() -> None:
    """A clean run prints a success line."""
    summary = DeletionSummary(
        (RemovalResult(SelectableItem("a", "/a", 2048), RemovalStatus.REMOVED),)
    )
    with patch("macclean.cli.display.print_success") as success:
        print_deletion_summary(summary)

    success.assert_called_once_with("All 1 item(s) removed, 2.00 KB freed")


def test_deletion_summary_failures() -> None:
    """Failures produce a warning with both counts."""
    summary = DeletionSummary(
        (
            RemovalResult(SelectableItem("a", "/a", 1024), RemovalStatus.REMOVED),
            RemovalResult(SelectableItem("b", "/b", 1024), RemovalStatus.FAILED, "denied"),
        )
    )
    with patch("macclean.cli.display.print_warning") as warning:
        print_deletion_summary(summary)

    warning.assert_called_once_with("1 succeeded, 1 failed, 1.00 KB freed")


def test_command_outcomes() -> None:
    """Each outcome gets its own marker and reason."""
    outcomes = [
        CommandOutcome("Homebrew", "brew cleanup -s", CommandStatus.OK),
        CommandOutcome(
            "DNS Cache",
            "dscacheutil -flushcache",
            CommandStatus.SKIPPED,
            "Requires administrator privileges",
        ),
        CommandOutcome("Go", "go clean -cache", CommandStatus.FAILED, "[exit] code 1"),
    ]
    with patch("macclean.cli.display.console") as console:
        print_command_outcomes(outcomes)

    lines = [c.args[0] for c in console.print.call_args_list]
    assert "✓" in lines[0] and "brew cleanup -s" in lines[0]
    assert "Requires administrator privileges" in lines[1]
    assert "✗" in lines[2] and "\\[exit] code 1" in lines[2]
