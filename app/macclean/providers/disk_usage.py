"""Disk-usage providers.

Two backends are available: ``du`` (what the tool has always used on
macOS) and a native ``os.walk`` implementation that needs no external
binary. Both count allocated blocks and fail closed to 0.
"""

import logging
import os
import subprocess
from pathlib import Path

from macclean.providers.base import DiskUsageProvider
from macclean.utils.shell import run_command

logger = logging.getLogger(__name__)

# st_blocks is always expressed in 512-byte units
_BLOCK_SIZE = 512


class DuDiskUsage(DiskUsageProvider):
    """Measures disk usage with ``du -sk``.

    Args:
        timeout: Seconds to wait for a single ``du`` call. None waits forever.
    """

    def __init__(self, timeout: float | None = 120.0) -> None:
        self._timeout = timeout

    def measure(self, path: Path) -> int:
        """Return ``du -sk`` output for path in bytes, 0 on failure."""
        try:
            result = run_command(["du", "-sk", str(path)], timeout=self._timeout)
        except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
            logger.debug("du failed for %s: %s", path, e)
            return 0

        # du exits non-zero when some children are unreadable but still
        # prints a total for what it could see.
        first_line = result.stdout.strip().split("\n", 1)[0]
        try:
            return int(first_line.split("\t", 1)[0]) * 1024
        except ValueError:
            logger.debug("Unparseable du output for %s: %r", path, result.stdout)
            return 0


class WalkDiskUsage(DiskUsageProvider):
    """Measures disk usage by walking the tree and summing st_blocks.

    Symlinks are not followed and hard links are counted once, matching
    ``du`` semantics.
    """

    def measure(self, path: Path) -> int:
        """Return the allocated size of path in bytes, 0 on failure."""
        try:
            root_stat = path.lstat()
        except OSError as e:
            logger.debug("Cannot stat %s: %s", path, e)
            return 0

        total = root_stat.st_blocks * _BLOCK_SIZE
        if not path.is_dir() or path.is_symlink():
            return total

        seen: set[tuple[int, int]] = set()
        for dirpath, dirnames, filenames in os.walk(path):
            for name in (*dirnames, *filenames):
                try:
                    st = os.lstat(os.path.join(dirpath, name))
                except OSError:
                    continue
                if st.st_nlink > 1:
                    key = (st.st_dev, st.st_ino)
                    if key in seen:
                        continue
                    seen.add(key)
                total += st.st_blocks * _BLOCK_SIZE
        return total


def get_disk_usage_provider(backend: str = "du") -> DiskUsageProvider:
    """Return the disk-usage provider for a configured backend name.

    Args:
        backend: "du" or "walk".

    Returns:
        DiskUsageProvider instance.

    Raises:
        ValueError: If the backend name is unknown.
    """
    if backend == "du":
        return DuDiskUsage()
    if backend == "walk":
        return WalkDiskUsage()
    msg = f"Unknown disk usage backend: {backend}"
    raise ValueError(msg)
