"""Abstract provider interfaces.

Providers isolate every interaction with the host system (size
measurement, installed-app enumeration, removal) so the classifier,
scanner and deletion state machine never shell out directly and can be
exercised against fakes.
"""

from abc import ABC, abstractmethod
from pathlib import Path


class RemovalError(Exception):
    """Raised when a filesystem entry could not be removed."""


class DiskUsageProvider(ABC):
    """Measures on-disk usage of a path.

    Implementations report allocated blocks (like ``du``), not logical
    file length, and fail closed: any error yields 0.
    """

    @abstractmethod
    def measure(self, path: Path) -> int:
        """Return the disk usage of path in bytes, or 0 on any error."""


class AppEnumerator(ABC):
    """Lists application identifiers known to be installed.

    Example:
        >>> source = HomebrewCaskApps()
        >>> if source.is_available():
        ...     print(source.list_installed_apps())
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Short name of the enumeration source (for logging)."""

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the underlying tool exists on this system."""

    @abstractmethod
    def list_installed_apps(self) -> list[str]:
        """Return installed application names.

        Returns:
            Names as reported by the source; normalization to lowercase
            is the registry's job.

        Raises:
            RuntimeError: If the source tool is unavailable or fails.
        """


class RemovalProvider(ABC):
    """Removes filesystem entries, optionally with elevated privileges."""

    @abstractmethod
    def remove(self, path: str, recursive: bool = True) -> None:
        """Remove path with the current user's privileges.

        A path that does not exist is treated as already removed.

        Args:
            path: Absolute path to remove.
            recursive: Remove directory trees (otherwise only empty directories).

        Raises:
            RemovalError: If the path could not be removed.
            OSError: On unexpected filesystem errors.
        """

    @abstractmethod
    def remove_elevated(self, path: str) -> None:
        """Remove path recursively with elevated privileges.

        Raises:
            RemovalError: If the privileged removal failed.
        """
