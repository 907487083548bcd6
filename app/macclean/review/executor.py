"""Deletion executor.

Removes the confirmed items one by one, choosing a strategy from the
shape of each path:

- Sandboxed container directories (under ~/Library/Containers or
  ~/Library/Group Containers): the inner Data directory is emptied first,
  then the container itself is removed. The OS often refuses to delete
  the outer shell; if only the inner removal worked, the item is a
  partial success.
- System paths (outside the home directory), when elevated privileges
  are held: removed through sudo.
- Everything else: direct recursive removal.

Failures are recorded per item and never abort the batch.
"""

import logging
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from enum import Enum
from pathlib import Path

from macclean.core.paths import is_within
from macclean.models.selectable import SelectableItem
from macclean.providers.base import RemovalError, RemovalProvider

logger = logging.getLogger(__name__)

CONTAINER_MARKERS = ("/Containers/", "/Group Containers/")
CONTAINER_DATA_DIR = "Data"


class RemovalStatus(str, Enum):
    """Outcome of removing a single item."""

    REMOVED = "removed"
    PARTIAL = "partial"
    FAILED = "failed"


@dataclass(frozen=True, slots=True)
class RemovalResult:
    """Result of removing a single item.

    Attributes:
        item: The item that was processed.
        status: REMOVED, PARTIAL (contents removed, shell protected) or FAILED.
        error: Error message for FAILED and PARTIAL results, None otherwise.
    """

    item: SelectableItem
    status: RemovalStatus
    error: str | None = None

    @property
    def success(self) -> bool:
        """Partial removals count as success."""
        return self.status != RemovalStatus.FAILED

    @property
    def freed_bytes(self) -> int:
        return self.item.size if self.success else 0


@dataclass(frozen=True, slots=True)
class DeletionSummary:
    """Aggregate outcome of a deletion batch."""

    results: tuple[RemovalResult, ...] = ()

    @property
    def success_count(self) -> int:
        return sum(1 for r in self.results if r.success)

    @property
    def failure_count(self) -> int:
        return sum(1 for r in self.results if not r.success)

    @property
    def partial_count(self) -> int:
        return sum(1 for r in self.results if r.status == RemovalStatus.PARTIAL)

    @property
    def freed_bytes(self) -> int:
        return sum(r.freed_bytes for r in self.results)

    @property
    def failures(self) -> list[RemovalResult]:
        return [r for r in self.results if not r.success]


def is_container_path(path: str) -> bool:
    """Check if path lies under a sandbox container root."""
    return any(marker in path for marker in CONTAINER_MARKERS)


class DeletionExecutor:
    """Removes confirmed items with a path-class-specific strategy.

    Args:
        removal: Provider performing the actual removals.
        has_elevation: Whether elevated privileges were granted this session.
        home: Home directory; paths outside it are system paths.
    """

    def __init__(
        self,
        removal: RemovalProvider,
        has_elevation: bool = False,
        home: Path | None = None,
    ) -> None:
        self._removal = removal
        self._has_elevation = has_elevation
        self._home = home if home is not None else Path.home()

    @property
    def has_elevation(self) -> bool:
        return self._has_elevation

    def execute(
        self,
        items: Iterable[SelectableItem],
        on_result: Callable[[RemovalResult], None] | None = None,
    ) -> DeletionSummary:
        """Remove every item, in order.

        Args:
            items: Confirmed items to remove.
            on_result: Optional callback invoked after each item.

        Returns:
            DeletionSummary with one result per item.
        """
        results: list[RemovalResult] = []

        for item in items:
            try:
                result = self.remove_item(item)
            except Exception as e:
                logger.debug("Unexpected error removing %s", item.path, exc_info=True)
                result = RemovalResult(item=item, status=RemovalStatus.FAILED, error=str(e))
            if result.success:
                logger.info("Removed %s (%s)", item.path, result.status.value)
            else:
                logger.warning("Failed to remove %s: %s", item.path, result.error)
            results.append(result)
            if on_result is not None:
                on_result(result)

        return DeletionSummary(results=tuple(results))

    def remove_item(self, item: SelectableItem) -> RemovalResult:
        """Remove one item and report how it went."""
        if is_container_path(item.path):
            return self._remove_container(item)

        try:
            if self.is_system_path(item.path) and self._has_elevation:
                self._removal.remove_elevated(item.path)
            else:
                self._removal.remove(item.path, recursive=True)
        except (RemovalError, OSError) as e:
            return RemovalResult(item=item, status=RemovalStatus.FAILED, error=str(e))

        return RemovalResult(item=item, status=RemovalStatus.REMOVED)

    def is_system_path(self, path: str) -> bool:
        """Check if path lies outside the home directory."""
        return not is_within(Path(path), self._home)

    def _remove_container(self, item: SelectableItem) -> RemovalResult:
        inner = str(Path(item.path) / CONTAINER_DATA_DIR)

        inner_removed = True
        try:
            self._remove_path(inner)
        except (RemovalError, OSError) as e:
            inner_removed = False
            logger.debug("Could not remove container data %s: %s", inner, e)

        try:
            self._remove_path(item.path)
        except (RemovalError, OSError) as e:
            if inner_removed:
                return RemovalResult(
                    item=item,
                    status=RemovalStatus.PARTIAL,
                    error=f"Contents removed; container is protected by the system ({e})",
                )
            return RemovalResult(item=item, status=RemovalStatus.FAILED, error=str(e))

        return RemovalResult(item=item, status=RemovalStatus.REMOVED)

    def _remove_path(self, path: str) -> None:
        if self._has_elevation:
            self._removal.remove_elevated(path)
        else:
            self._removal.remove(path, recursive=True)
