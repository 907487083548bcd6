"""Shared Rich display functions for scan reports and deletion results.

Used by the orphans, caches and full commands.
"""

from rich.markup import escape
from rich.table import Table

from macclean.cleanup.commands import CommandOutcome, CommandStatus
from macclean.cleanup.scanner import CleanupItem
from macclean.models.orphan import Confidence, OrphanFile, ScanResult
from macclean.review.executor import DeletionSummary
from macclean.utils.formatting import (
    CONFIDENCE_ICONS,
    confidence_style,
    console,
    create_orphan_table,
    format_orphan_row,
    format_size,
    print_success,
    print_warning,
)


def create_cleanup_table(items: list[CleanupItem]) -> Table:
    """Create a Rich table summarizing cache cleanup candidates.

    Args:
        items: Cleanup items with at least one match each.

    Returns:
        Rich Table with one row per task.
    """
    table = Table(
        title="Cache Cleanup",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Task", no_wrap=True)
    table.add_column("Description", style="muted")
    table.add_column("Paths", justify="right")
    table.add_column("Size", style="size", justify="right")
    table.add_column("Commands", justify="right")

    for item in items:
        table.add_row(
            item.task.name,
            item.task.description,
            str(len(item.paths)),
            format_size(item.total_size),
            str(len(item.task.commands)) if item.task.commands else "-",
        )

    return table


def print_orphan_report(
    result: ScanResult,
    orphans: list[OrphanFile] | None = None,
) -> None:
    """Print the orphan table, confidence breakdown and totals.

    Args:
        result: Full scan result (used for totals and the breakdown).
        orphans: Subset to list in the table (default: all orphans).
    """
    shown = list(result.orphans) if orphans is None else orphans

    table = create_orphan_table()
    for orphan in shown:
        table.add_row(*format_orphan_row(orphan))
    console.print(table)

    console.print(
        f"\n  Found [size]{len(result.orphans)}[/] residue item(s), "
        f"[size]{format_size(result.total_size)}[/] reclaimable",
        highlight=False,
    )
    console.print("\n  [dim]By confidence:[/]")
    for level in (Confidence.HIGH, Confidence.MEDIUM, Confidence.LOW):
        count = len(result.by_confidence(level))
        console.print(
            f"  {CONFIDENCE_ICONS[level]} [{confidence_style(level)}]{level.value}: "
            f"{count} ({format_size(result.size_for(level))})[/]",
            highlight=False,
        )

    if len(shown) < len(result.orphans):
        console.print(f"\n[dim](showing {len(shown)} of {len(result.orphans)})[/]")


def print_deletion_summary(summary: DeletionSummary) -> None:
    """Print a one-line outcome after a review session."""
    if summary.failure_count:
        print_warning(
            f"{summary.success_count} succeeded, {summary.failure_count} failed, "
            f"{format_size(summary.freed_bytes)} freed"
        )
    else:
        print_success(
            f"All {summary.success_count} item(s) removed, "
            f"{format_size(summary.freed_bytes)} freed"
        )


def print_command_outcomes(outcomes: list[CommandOutcome]) -> None:
    """Print one line per cleanup command that was attempted or skipped."""
    for outcome in outcomes:
        task = escape(outcome.task)
        command = escape(outcome.command)
        if outcome.status == CommandStatus.OK:
            console.print(f"  [success]✓[/] {task}: {command}", highlight=False)
        elif outcome.status == CommandStatus.SKIPPED:
            console.print(
                f"  [muted]- {task}: {command} ({escape(outcome.error or '')})[/]",
                highlight=False,
            )
        else:
            console.print(
                f"  [error]✗[/] {task}: {command} - {escape(outcome.error or '')}",
                highlight=False,
            )
