"""CLI package for macclean.

This package contains the Typer application and all subcommands.
"""

from macclean.cli.main import app

__all__ = ["app"]
