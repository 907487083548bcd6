"""Shared types and factories for CLI commands.

Keeps option enums and the wiring of scanners from configuration in one
place so the command modules stay thin.
"""

from enum import Enum
from pathlib import Path

from macclean.cleanup.scanner import CacheCleanupScanner
from macclean.core.config import MaccleanConfig
from macclean.models.orphan import Confidence
from macclean.providers.disk_usage import get_disk_usage_provider
from macclean.residue.classifier import OrphanClassifier
from macclean.residue.registry import InstalledAppRegistry
from macclean.residue.scanner import ResidueScanner


class OutputFormat(str, Enum):
    """Output format options for scan reports."""

    TABLE = "table"
    JSON = "json"


class ConfidenceChoice(str, Enum):
    """Confidence levels selectable on the command line."""

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"

    def to_confidence(self) -> Confidence:
        return Confidence(self.value)


def build_residue_scanner(
    config: MaccleanConfig,
    registry: InstalledAppRegistry | None = None,
    home: Path | None = None,
) -> ResidueScanner:
    """Build a residue scanner from configuration.

    The installed-app set is enumerated here, once per call.

    Args:
        config: Loaded configuration.
        registry: Registry to enumerate installed apps with (default sources if None).
        home: Home directory override.

    Returns:
        A ready-to-run ResidueScanner.
    """
    registry = registry if registry is not None else InstalledAppRegistry()
    classifier = OrphanClassifier(
        installed_apps=registry.build(),
        system_prefixes=config.system_prefixes,
        bundle_mappings=config.bundle_mappings,
    )
    return ResidueScanner(
        locations=config.locations,
        classifier=classifier,
        disk_usage=get_disk_usage_provider(config.disk_usage),
        home=home,
    )


def build_cleanup_scanner(config: MaccleanConfig, home: Path | None = None) -> CacheCleanupScanner:
    """Build a cache cleanup scanner from configuration."""
    return CacheCleanupScanner(
        tasks=config.cleanup_tasks,
        disk_usage=get_disk_usage_provider(config.disk_usage),
        home=home,
    )
