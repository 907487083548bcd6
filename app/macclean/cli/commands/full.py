"""Full cleanup command.

Runs the cache cleanup review followed by the residue review, sharing a
single privilege check.
"""

from typing import Annotated

import typer

from macclean.cleanup.commands import CommandOutcome
from macclean.cli.commands.caches import review_caches, run_task_commands, scan_caches
from macclean.cli.commands.orphans import scan_residue
from macclean.cli.display import create_cleanup_table, print_deletion_summary, print_orphan_report
from macclean.cli.session import acquire_privileges, run_review
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionSummary
from macclean.utils.formatting import console, format_size, print_info, print_success

app = typer.Typer(
    help="Clean caches, then application residue.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def full(
    ctx: typer.Context,
    sudo: Annotated[
        bool | None,
        typer.Option(
            "--sudo/--no-sudo",
            help="Request administrator privileges (default: ask).",
        ),
    ] = None,
) -> None:
    """Review caches and then application residue for deletion."""
    if ctx.invoked_subcommand is not None:
        return

    has_elevation = acquire_privileges(sudo)
    summaries: list[DeletionSummary] = []
    outcomes: list[CommandOutcome] = []

    items = scan_caches()
    if items:
        console.print(create_cleanup_table(items))
        summary = review_caches(items, has_elevation)
        if summary is not None:
            print_deletion_summary(summary)
            summaries.append(summary)
        outcomes = run_task_commands(items, has_elevation)
    else:
        print_success("No caches to clean.")

    result = scan_residue()
    if result.orphans:
        print_orphan_report(result)
        orphan_items = [SelectableItem.from_orphan(o) for o in result.orphans]
        summary = run_review(
            orphan_items, title="Application Residue", has_elevation=has_elevation
        )
        if summary is not None:
            print_deletion_summary(summary)
            summaries.append(summary)
    else:
        print_success("No application residue found.")

    if not summaries and not outcomes:
        print_info("Nothing deleted.")
        return

    if summaries:
        freed = sum(s.freed_bytes for s in summaries)
        console.print(f"\n[bold]Total freed: {format_size(freed)}[/]", highlight=False)
    if any(s.failure_count for s in summaries) or any(not o.success for o in outcomes):
        raise typer.Exit(code=1)
