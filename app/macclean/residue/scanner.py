"""Residue scanner.

Walks the configured residual locations (e.g. ~/Library/Application
Support, ~/Library/Caches) and reports top-level entries that no
installed application claims.
"""

import logging
from collections.abc import Callable, Iterator, Sequence
from pathlib import Path

from macclean.core.config import ResidualLocation
from macclean.core.paths import expand_home
from macclean.models.orphan import EntryType, OrphanFile, ScanResult
from macclean.providers.base import DiskUsageProvider
from macclean.residue.classifier import OrphanClassifier

logger = logging.getLogger(__name__)

ProgressCallback = Callable[[ResidualLocation, Path], None]


class ResidueScanner:
    """Scans residual locations for orphaned application data.

    Locations and entries are processed strictly one after another.

    Args:
        locations: Residual locations to visit, in order.
        classifier: Classifier holding the installed-app set for this session.
        disk_usage: Provider used to measure each candidate.
        home: Home directory used to expand "~/" locations.
    """

    def __init__(
        self,
        locations: Sequence[ResidualLocation],
        classifier: OrphanClassifier,
        disk_usage: DiskUsageProvider,
        home: Path | None = None,
    ) -> None:
        self._locations = tuple(locations)
        self._classifier = classifier
        self._disk_usage = disk_usage
        self._home = home if home is not None else Path.home()

    @property
    def classifier(self) -> OrphanClassifier:
        return self._classifier

    def scan(self, progress: ProgressCallback | None = None) -> ScanResult:
        """Scan every location and return orphans sorted by descending size.

        Equal sizes keep their encounter order (locations in configured
        order, entries by name within a location).

        Args:
            progress: Optional callback invoked before each location is scanned.

        Returns:
            ScanResult with the sorted orphans and the visited locations.
        """
        orphans: list[OrphanFile] = []
        scanned: list[str] = []

        for location in self._locations:
            root = expand_home(location.path, self._home)
            scanned.append(str(root))
            if progress is not None:
                progress(location, root)
            orphans.extend(self._scan_location(location, root))

        orphans.sort(key=lambda o: o.size, reverse=True)
        logger.debug("Scan found %d orphans in %d locations", len(orphans), len(scanned))
        return ScanResult(orphans=tuple(orphans), scanned_locations=tuple(scanned))

    def _scan_location(self, location: ResidualLocation, root: Path) -> Iterator[OrphanFile]:
        """Yield orphans among the immediate children of one location."""
        try:
            entries = sorted(root.iterdir())
        except OSError as e:
            # Missing or unreadable locations contribute nothing.
            logger.debug("Cannot list %s: %s", root, e)
            return

        for entry in entries:
            name = entry.name
            # Name rules first so kept entries are never measured
            if not self._classifier.is_candidate(name):
                continue

            size = self._disk_usage.measure(entry)
            classification = self._classifier.classify(name, location, size)
            if not classification.is_orphan:
                continue

            yield OrphanFile(
                path=str(entry),
                type=self._get_entry_type(entry),
                size=size,
                app_name=self._classifier.extract_app_name(name),
                reason=f"Found in {location.category}; the owning application "
                "appears to be uninstalled",
                confidence=classification.confidence,
                category=location.category,
            )

    @staticmethod
    def _get_entry_type(path: Path) -> EntryType:
        """Return DIRECTORY for directories, FILE otherwise (including on error)."""
        try:
            return EntryType.DIRECTORY if path.is_dir() else EntryType.FILE
        except OSError:
            return EntryType.FILE
