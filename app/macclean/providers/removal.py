"""Filesystem removal provider.

Direct removal uses shutil/pathlib with ``rm -rf`` semantics; elevated
removal runs ``sudo -n rm -rf`` so a batch never stops to prompt for a
password.
"""

import logging
import shutil
import subprocess
from pathlib import Path

from macclean.providers.base import RemovalError, RemovalProvider
from macclean.utils.shell import run_command

logger = logging.getLogger(__name__)


class LocalRemoval(RemovalProvider):
    """Removes paths with the current process privileges or via sudo."""

    def remove(self, path: str, recursive: bool = True) -> None:
        """Remove a file, symlink or directory.

        Dispatches on the entry type:
        - Directories: shutil.rmtree (or rmdir when not recursive)
        - Files, symlinks and dead symlinks: Path.unlink

        Args:
            path: Absolute filesystem path to remove.
            recursive: Remove directory trees.

        Raises:
            RemovalError: If the entry could not be removed.
        """
        target = Path(path)

        if not target.exists() and not target.is_symlink():
            logger.debug("Nothing to remove at %s", path)
            return

        try:
            if target.is_dir() and not target.is_symlink():
                if recursive:
                    shutil.rmtree(path)
                else:
                    target.rmdir()
            else:
                target.unlink()
        except OSError as e:
            raise RemovalError(str(e)) from e

    def remove_elevated(self, path: str) -> None:
        """Remove path with ``sudo -n rm -rf``.

        Raises:
            RemovalError: If sudo is missing, not authorized, or rm fails.
        """
        try:
            result = run_command(["sudo", "-n", "rm", "-rf", path], timeout=None)
        except (FileNotFoundError, OSError, subprocess.SubprocessError) as e:
            raise RemovalError(f"sudo unavailable: {e}") from e

        if not result.success:
            raise RemovalError(result.stderr.strip() or "sudo rm failed")
