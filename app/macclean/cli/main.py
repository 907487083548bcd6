"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer

from macclean import __version__
from macclean.cli.commands import caches, config, full, orphans

# Create main Typer app
app = typer.Typer(
    name="macclean",
    help="Find and remove residue of uninstalled macOS applications.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"macclean version {__version__}")
        raise typer.Exit()


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable debug logging.",
        ),
    ] = False,
) -> None:
    """macclean - Find and remove residue of uninstalled macOS applications.

    Scans the usual Library locations for data whose owning application
    is gone, and cleans developer and application caches, with an
    interactive review before anything is deleted.
    """
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s: %(name)s: %(message)s",
    )
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(orphans.app, name="orphans")
app.add_typer(caches.app, name="caches")
app.add_typer(full.app, name="full")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
