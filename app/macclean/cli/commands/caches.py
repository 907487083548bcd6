"""Cache cleanup commands.

Provides commands to measure developer and application caches and to
review and delete them interactively.
"""

from typing import Annotated

import typer

from macclean.cleanup.commands import CommandOutcome, TaskCommandRunner
from macclean.cleanup.scanner import CleanupItem
from macclean.cli.display import (
    create_cleanup_table,
    print_command_outcomes,
    print_deletion_summary,
)
from macclean.cli.session import acquire_privileges, run_review
from macclean.cli.types import build_cleanup_scanner
from macclean.core.config import CleanupTask, require_config
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionSummary
from macclean.utils.formatting import console, format_size, print_info, print_success

app = typer.Typer(
    help="Measure and clean developer and application caches.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def scan() -> None:
    """Show how much space each cleanup task would free."""
    items = scan_caches()
    if not items:
        print_success("No caches to clean.")
        return

    _print_cleanup_report(items)


@app.command()
def clean(
    sudo: Annotated[
        bool | None,
        typer.Option(
            "--sudo/--no-sudo",
            help="Request administrator privileges (default: ask).",
        ),
    ] = None,
    yes: Annotated[
        bool,
        typer.Option(
            "--yes",
            "-y",
            help="Skip the prompts before the review screen and before cleanup commands.",
        ),
    ] = False,
) -> None:
    """Scan caches and review them interactively for deletion."""
    items = scan_caches()
    if not items:
        print_success("No caches to clean.")
        return

    _print_cleanup_report(items)

    if not yes and not typer.confirm("\nReview and delete these caches?", default=True):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    has_elevation = acquire_privileges(sudo)
    summary = review_caches(items, has_elevation)
    if summary is not None:
        print_deletion_summary(summary)
    outcomes = run_task_commands(items, has_elevation, assume_yes=yes)

    if summary is None and not outcomes:
        print_info("Nothing deleted.")
        return

    failed = (summary is not None and summary.failure_count > 0) or any(
        not o.success for o in outcomes
    )
    if failed:
        raise typer.Exit(code=1)


def scan_caches() -> list[CleanupItem]:
    """Load configuration and scan every enabled cleanup task."""
    config = require_config()
    scanner = build_cleanup_scanner(config)

    with console.status("Scanning caches...") as status:

        def _progress(task: CleanupTask) -> None:
            status.update(f"Scanning {task.name}...")

        return scanner.scan(progress=_progress)


def review_caches(items: list[CleanupItem], has_elevation: bool) -> DeletionSummary | None:
    """Run the interactive review over every matched cache path."""
    selectable: list[SelectableItem] = []
    for item in items:
        selectable.extend(item.to_selectable())
    return run_review(selectable, title="Cache Cleanup", has_elevation=has_elevation)


def run_task_commands(
    items: list[CleanupItem],
    has_elevation: bool,
    assume_yes: bool = False,
) -> list[CommandOutcome]:
    """Offer and run the commands of every task that has them.

    Each task is confirmed separately unless assume_yes is set.

    Returns:
        Outcomes of every command that was attempted or skipped.
    """
    runner = TaskCommandRunner(has_elevation=has_elevation)
    outcomes: list[CommandOutcome] = []

    for item in items:
        task = item.task
        if not task.commands:
            continue
        commands = "; ".join(task.commands)
        prompt = f"Run {task.name} cleanup ({commands})?"
        if not assume_yes and not typer.confirm(prompt, default=False):
            continue
        with console.status(f"Running {task.name} cleanup..."):
            task_outcomes = runner.run(task)
        print_command_outcomes(task_outcomes)
        outcomes.extend(task_outcomes)

    return outcomes


def _print_cleanup_report(items: list[CleanupItem]) -> None:
    console.print(create_cleanup_table(items))
    total = sum(item.total_size for item in items)
    console.print(
        f"\n[dim]{len(items)} task(s), {format_size(total)} reclaimable[/]",
        highlight=False,
    )
