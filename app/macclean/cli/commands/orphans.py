"""Application residue commands.

Provides commands to scan the residual locations for data left behind by
uninstalled applications and to review and delete it interactively.
"""

import json
from pathlib import Path
from typing import Annotated

import typer

from macclean.cli.display import print_deletion_summary, print_orphan_report
from macclean.cli.session import acquire_privileges, run_review
from macclean.cli.types import ConfidenceChoice, OutputFormat, build_residue_scanner
from macclean.core.config import ResidualLocation, require_config
from macclean.models.orphan import ScanResult
from macclean.models.selectable import SelectableItem
from macclean.utils.formatting import console, print_error, print_info, print_success

app = typer.Typer(
    help="Find and remove residue of uninstalled applications.",
    invoke_without_command=True,
    no_args_is_help=True,
)


@app.command()
def scan(
    output_format: Annotated[
        OutputFormat,
        typer.Option(
            "--format",
            "-f",
            help="Output format.",
            case_sensitive=False,
        ),
    ] = OutputFormat.TABLE,
    export_path: Annotated[
        Path | None,
        typer.Option(
            "--export",
            "-e",
            help="Export results to JSON file.",
        ),
    ] = None,
    limit: Annotated[
        int | None,
        typer.Option(
            "--limit",
            "-l",
            help="Limit number of results.",
        ),
    ] = None,
    confidence: Annotated[
        ConfidenceChoice | None,
        typer.Option(
            "--confidence",
            "-c",
            help="Only show entries of this confidence level.",
            case_sensitive=False,
        ),
    ] = None,
) -> None:
    """Scan for residue of uninstalled applications."""
    result = scan_residue(quiet=output_format == OutputFormat.JSON)

    if not result.orphans:
        if output_format == OutputFormat.JSON:
            console.print_json(json.dumps(result.to_dict()))
        else:
            print_success("No application residue found.")
        return

    orphans = list(result.orphans)
    if confidence is not None:
        orphans = result.by_confidence(confidence.to_confidence())
    display_orphans = orphans[:limit] if limit else orphans

    # Export everything, not the limited view
    if export_path is not None:
        _export_results(result, export_path)

    if output_format == OutputFormat.JSON:
        console.print_json(json.dumps([o.to_dict() for o in display_orphans]))
        return

    print_orphan_report(result, display_orphans)


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
        typer.Option("--yes", "-y", help="Skip the prompt before the review screen."),
    ] = False,
) -> None:
    """Scan for residue and review it interactively for deletion."""
    result = scan_residue()

    if not result.orphans:
        print_success("No application residue found.")
        return

    print_orphan_report(result)

    if not yes and not typer.confirm("\nReview and delete these items?", default=True):
        print_info("Aborted.")
        raise typer.Exit(code=0)

    has_elevation = acquire_privileges(sudo)
    items = [SelectableItem.from_orphan(o) for o in result.orphans]
    summary = run_review(items, title="Application Residue", has_elevation=has_elevation)

    if summary is None:
        print_info("Nothing deleted.")
        return

    print_deletion_summary(summary)
    if summary.failure_count:
        raise typer.Exit(code=1)


def scan_residue(quiet: bool = False) -> ScanResult:
    """Load configuration, enumerate installed apps and scan all locations.

    Args:
        quiet: Suppress progress output (for machine-readable output).

    Returns:
        The scan result.
    """
    config = require_config()
    if quiet:
        return build_residue_scanner(config).scan()

    with console.status("Enumerating installed applications...") as status:
        scanner = build_residue_scanner(config)
        count = len(scanner.classifier.installed_apps)
        console.print(f"[dim]Loaded {count} installed application identifiers[/]")

        def _progress(location: ResidualLocation, root: Path) -> None:
            status.update(f"Scanning {location.category} ({root})...")

        return scanner.scan(progress=_progress)


def _export_results(result: ScanResult, export_path: Path) -> None:
    """Export the scan result to a JSON file."""
    export_path = export_path.resolve()
    if export_path.is_dir():
        print_error(f"Export path is a directory: {export_path}")
        raise typer.Exit(code=1)

    try:
        export_path.parent.mkdir(parents=True, exist_ok=True)
        export_path.write_text(json.dumps(result.to_dict(), indent=2))
        print_info(f"Results exported to {export_path}")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
