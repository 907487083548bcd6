"""Installed application registry.

Builds the lowercase set of application identifiers that the classifier
treats as "still installed". Sources are independent: one that fails
contributes nothing and the build carries on with the rest.
"""

import logging
from collections.abc import Sequence

from macclean.providers.apps import default_app_sources
from macclean.providers.base import AppEnumerator

logger = logging.getLogger(__name__)


class InstalledAppRegistry:
    """Union of installed-application names across enumeration sources.

    Args:
        sources: Enumeration sources to query. Defaults to Spotlight,
            Homebrew casks and pkgutil receipts.
    """

    def __init__(self, sources: Sequence[AppEnumerator] | None = None) -> None:
        self._sources = list(sources) if sources is not None else default_app_sources()

    def build(self) -> frozenset[str]:
        """Query every source once and return the merged, lowercase set.

        Returns:
            Read-only set of installed application identifiers.
        """
        apps: set[str] = set()

        for source in self._sources:
            try:
                names = source.list_installed_apps()
            except (RuntimeError, OSError) as e:
                logger.debug("App source %s contributed nothing: %s", source.name, e)
                continue

            before = len(apps)
            apps.update(n.strip().lower() for n in names if n.strip())
            logger.debug("App source %s added %d names", source.name, len(apps) - before)

        return frozenset(apps)
