"""CLI commands for macclean.

This package contains all subcommand implementations.
"""

from macclean.cli.commands import caches, config, full, orphans

__all__ = ["caches", "config", "full", "orphans"]
