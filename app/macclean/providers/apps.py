"""Installed-application enumeration sources.

Three independent macOS sources are queried:

- Spotlight (``mdfind``) for every ``.app`` bundle the index knows about.
- Homebrew casks (``brew list --cask``).
- Package receipts (``pkgutil --pkgs``).
"""

import subprocess
from pathlib import PurePosixPath

from macclean.providers.base import AppEnumerator
from macclean.utils.shell import CommandResult, command_exists, run_command


def _run_source(name: str, args: list[str], timeout: float) -> CommandResult:
    """Run an enumeration command, converting every failure to RuntimeError."""
    try:
        result = run_command(args, timeout=timeout)
    except (FileNotFoundError, OSError, subprocess.TimeoutExpired) as e:
        msg = f"{name} unavailable: {e}"
        raise RuntimeError(msg) from e

    if not result.success:
        msg = f"{' '.join(args[:2])} failed: {result.stderr.strip()}"
        raise RuntimeError(msg)
    return result


class SpotlightApps(AppEnumerator):
    """Application bundles found by the Spotlight index."""

    _QUERY = "kMDItemKind == 'Application'"

    @property
    def name(self) -> str:
        return "spotlight"

    def is_available(self) -> bool:
        return command_exists("mdfind")

    def list_installed_apps(self) -> list[str]:
        """Return bundle names (without ``.app``) of indexed applications."""
        result = _run_source(self.name, ["mdfind", self._QUERY], timeout=60.0)
        names: list[str] = []
        for line in result.lines():
            bundle = PurePosixPath(line).name
            if bundle.endswith(".app"):
                bundle = bundle[: -len(".app")]
            if bundle:
                names.append(bundle)
        return names


class HomebrewCaskApps(AppEnumerator):
    """Applications installed as Homebrew casks."""

    @property
    def name(self) -> str:
        return "homebrew"

    def is_available(self) -> bool:
        return command_exists("brew")

    def list_installed_apps(self) -> list[str]:
        """Return installed cask tokens."""
        return _run_source(self.name, ["brew", "list", "--cask"], timeout=30.0).lines()


class PkgutilApps(AppEnumerator):
    """Applications with an installer package receipt.

    Receipt ids are reverse-DNS (``com.vendor.product``); only the last
    segment is kept, and only when it is long enough to be meaningful.
    """

    _MIN_NAME_LENGTH = 3

    @property
    def name(self) -> str:
        return "pkgutil"

    def is_available(self) -> bool:
        return command_exists("pkgutil")

    def list_installed_apps(self) -> list[str]:
        """Return the product segment of every package receipt."""
        result = _run_source(self.name, ["pkgutil", "--pkgs"], timeout=30.0)
        names: list[str] = []
        for receipt in result.lines():
            parts = receipt.split(".")
            if len(parts) < 2:
                continue
            product = parts[-1]
            if len(product) >= self._MIN_NAME_LENGTH:
                names.append(product)
        return names


def default_app_sources() -> list[AppEnumerator]:
    """Return the three enumeration sources in query order."""
    return [SpotlightApps(), HomebrewCaskApps(), PkgutilApps()]
