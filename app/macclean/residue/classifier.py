"""Orphan classification rules.

Pure decision logic: given an entry name, the location it was found in
and its measured size, decide whether it is residue of an uninstalled
application and how confident that call is. Nothing here touches the
filesystem.
"""

import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from enum import Enum

from macclean.core.config import ResidualLocation
from macclean.models.orphan import Confidence

# Entries below this size are not worth the operator's attention.
MIN_REPORT_SIZE = 1024
# Anything this large is high confidence wherever it lives.
HIGH_CONFIDENCE_SIZE = 100 * 1024 * 1024
# Tiny preference files are usually harmless plist leftovers.
LOW_CONFIDENCE_PREFERENCES_SIZE = 10 * 1024
PREFERENCES_CATEGORY = "Preferences"

# Last reverse-DNS segments shorter than this are too generic to match on.
_MIN_SEGMENT_LENGTH = 3

_UUID_PATTERN = re.compile(
    r"^[0-9a-f]{8}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{4}-[0-9a-f]{12}$",
    re.IGNORECASE,
)


class Verdict(str, Enum):
    """Outcome of classifying a single entry.

    Attributes:
        KEEP: Belongs to the system or to an installed application.
        FLAG: Residue; report it to the operator.
        SKIP: Residue too small to report.
    """

    KEEP = "keep"
    FLAG = "flag"
    SKIP = "skip"


@dataclass(frozen=True, slots=True)
class Classification:
    """Verdict plus confidence (None unless the verdict is FLAG)."""

    verdict: Verdict
    confidence: Confidence | None = None

    @property
    def is_orphan(self) -> bool:
        """Check if the entry should be reported."""
        return self.verdict == Verdict.FLAG


def is_uuid(name: str) -> bool:
    """Check if name is an 8-4-4-4-12 hexadecimal UUID."""
    return _UUID_PATTERN.match(name) is not None


class OrphanClassifier:
    """Decides keep-or-flag for residue candidates.

    Args:
        installed_apps: Lowercase identifiers of installed applications.
        system_prefixes: Names (or name prefixes) owned by the OS.
        bundle_mappings: Ordered bundle-id prefix to display-name table.
    """

    def __init__(
        self,
        installed_apps: frozenset[str],
        system_prefixes: Sequence[str],
        bundle_mappings: Mapping[str, str],
    ) -> None:
        self._installed_apps = installed_apps
        self._system_prefixes = tuple(p.lower() for p in system_prefixes)
        self._bundle_mappings = tuple((k.lower(), v) for k, v in bundle_mappings.items())

    @property
    def installed_apps(self) -> frozenset[str]:
        """Installed application identifiers this classifier matches against."""
        return self._installed_apps

    def is_candidate(self, name: str) -> bool:
        """Check the name-only rules, before anything is measured.

        Hidden entries, system items and entries of installed applications
        are never residue.
        """
        if name.startswith("."):
            return False
        return not (self.is_system_item(name) or self.is_app_installed(name))

    def classify(self, name: str, location: ResidualLocation, size: int) -> Classification:
        """Classify one entry.

        Args:
            name: Entry name (basename).
            location: Residual location the entry was found in.
            size: Measured disk usage in bytes.

        Returns:
            Classification with verdict and, for FLAG, the confidence.
        """
        if not self.is_candidate(name):
            return Classification(Verdict.KEEP)

        confidence = self.confidence_for(location, size)
        if confidence is None:
            return Classification(Verdict.SKIP)
        return Classification(Verdict.FLAG, confidence)

    def is_system_item(self, name: str) -> bool:
        """Check if name matches a system-reserved prefix (case-insensitive)."""
        lower = name.lower()
        return any(lower == p or lower.startswith(p) for p in self._system_prefixes)

    def extract_app_name(self, name: str) -> str:
        """Resolve a display name for an entry.

        Known bundle-id prefixes map to a vendor name; other reverse-DNS
        names with three or more segments use their last segment; anything
        else is returned unchanged.
        """
        lower = name.lower()
        for prefix, display_name in self._bundle_mappings:
            if lower.startswith(prefix):
                return display_name

        parts = name.split(".")
        if len(parts) >= 3:
            return parts[-1]
        return name

    def is_app_installed(self, name: str) -> bool:
        """Check whether the entry belongs to an installed application.

        UUID-named folders are per-install data of removed apps and are
        never considered installed, even if the literal string happens to
        appear in the installed set.
        """
        if is_uuid(name):
            return False

        lower = name.lower()
        if lower in self._installed_apps:
            return True
        if self.extract_app_name(name).lower() in self._installed_apps:
            return True

        last_part = lower.split(".")[-1]
        return len(last_part) >= _MIN_SEGMENT_LENGTH and last_part in self._installed_apps

    def confidence_for(self, location: ResidualLocation, size: int) -> Confidence | None:
        """Assign a confidence level from location and size.

        Returns:
            The confidence, or None when the entry is below the report threshold.
        """
        if size < MIN_REPORT_SIZE:
            return None
        if size > HIGH_CONFIDENCE_SIZE:
            return Confidence.HIGH
        if location.category == PREFERENCES_CATEGORY and size < LOW_CONFIDENCE_PREFERENCES_SIZE:
            return Confidence.LOW
        return location.confidence_base
