"""Cache cleanup scanner.

Expands the path templates of each enabled cleanup task and measures
what they match. Unlike the residue scanner, nothing is classified:
every non-empty match of an enabled task is a cleanup candidate.
"""

import glob
import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass
from pathlib import Path

from macclean.core.config import CleanupTask
from macclean.core.paths import expand_home
from macclean.models.selectable import SelectableItem
from macclean.providers.base import DiskUsageProvider

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class CleanupPath:
    """One matched path of a cleanup task with its measured size."""

    path: str
    size: int


@dataclass(frozen=True, slots=True)
class CleanupItem:
    """All non-empty matches of one cleanup task.

    A task with commands is kept even when no path matched.

    Attributes:
        task: The task whose templates produced the matches.
        paths: Matched paths with their sizes, in template order.
    """

    task: CleanupTask
    paths: tuple[CleanupPath, ...]

    @property
    def total_size(self) -> int:
        """Total bytes across all matched paths."""
        return sum(p.size for p in self.paths)

    def to_selectable(self) -> list[SelectableItem]:
        """Project every matched path onto the review shape."""
        return [
            SelectableItem.from_cleanup_path(
                self.task.name, self.task.description, p.path, p.size
            )
            for p in self.paths
        ]


class CacheCleanupScanner:
    """Finds cache directories worth cleaning.

    Args:
        tasks: Cleanup tasks; disabled ones are ignored.
        disk_usage: Provider used to measure each match.
        home: Home directory used to expand "~/" templates.
    """

    def __init__(
        self,
        tasks: Sequence[CleanupTask],
        disk_usage: DiskUsageProvider,
        home: Path | None = None,
    ) -> None:
        self._tasks = [t for t in tasks if t.enabled]
        self._disk_usage = disk_usage
        self._home = home if home is not None else Path.home()

    def scan(self, progress: Callable[[CleanupTask], None] | None = None) -> list[CleanupItem]:
        """Scan every enabled task.

        Args:
            progress: Optional callback invoked before each task is scanned.

        Returns:
            One CleanupItem per task with at least one non-empty match
            or with commands to run, in task order.
        """
        items: list[CleanupItem] = []

        for task in self._tasks:
            if progress is not None:
                progress(task)

            matched: list[CleanupPath] = []
            seen: set[str] = set()
            for template in task.paths:
                for path in self.expand_template(template):
                    if path in seen:
                        continue
                    seen.add(path)
                    size = self._disk_usage.measure(Path(path))
                    if size > 0:
                        matched.append(CleanupPath(path=path, size=size))

            if matched or task.commands:
                items.append(CleanupItem(task=task, paths=tuple(matched)))
            else:
                logger.debug("Cleanup task %s matched nothing", task.name)

        return items

    def expand_template(self, template: str) -> list[str]:
        """Expand one path template into existing paths, sorted.

        Wildcards match hidden entries too, so "~/Library/Caches/*" covers
        dot-directories as well.
        """
        pattern = str(expand_home(template, self._home))
        return sorted(glob.glob(pattern, include_hidden=True))
