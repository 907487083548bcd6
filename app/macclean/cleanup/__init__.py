"""Developer and application cache cleanup."""

from macclean.cleanup.commands import (
    CommandOutcome,
    CommandStatus,
    TaskCommandRunner,
)
from macclean.cleanup.scanner import CacheCleanupScanner, CleanupItem, CleanupPath

__all__ = [
    "CacheCleanupScanner",
    "CleanupItem",
    "CleanupPath",
    "CommandOutcome",
    "CommandStatus",
    "TaskCommandRunner",
]
