"""Host system providers.

Disk usage, installed-application enumeration, removal and privilege
backends used by the scanners and the deletion executor.
"""

from macclean.providers.apps import (
    HomebrewCaskApps,
    PkgutilApps,
    SpotlightApps,
    default_app_sources,
)
from macclean.providers.base import (
    AppEnumerator,
    DiskUsageProvider,
    RemovalError,
    RemovalProvider,
)
from macclean.providers.disk_usage import DuDiskUsage, WalkDiskUsage, get_disk_usage_provider
from macclean.providers.removal import LocalRemoval

__all__ = [
    "AppEnumerator",
    "DiskUsageProvider",
    "DuDiskUsage",
    "HomebrewCaskApps",
    "LocalRemoval",
    "PkgutilApps",
    "RemovalError",
    "RemovalProvider",
    "SpotlightApps",
    "WalkDiskUsage",
    "default_app_sources",
    "get_disk_usage_provider",
]
