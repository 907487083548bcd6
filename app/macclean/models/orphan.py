"""Residue domain models.

This module defines the data structures produced by a residue scan:
confidence levels, entry types, orphan records and the aggregated
scan result used for reporting.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any


class Confidence(str, Enum):
    """Heuristic certainty that an orphan entry is safe to delete.

    Attributes:
        HIGH: Almost certainly residue of an uninstalled application.
        MEDIUM: Probably residue; worth a quick look before deleting.
        LOW: Weak signal; review carefully.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EntryType(str, Enum):
    """Type of a scanned filesystem entry."""

    FILE = "file"
    DIRECTORY = "directory"


@dataclass(frozen=True, slots=True)
class OrphanFile:
    """A filesystem entry believed to belong to an uninstalled application.

    Created once per scan pass and never modified afterwards.

    Attributes:
        path: Absolute filesystem path.
        type: File or directory.
        size: Disk usage in bytes (allocated blocks, not logical length).
        app_name: Best-effort owning application label.
        reason: Human-readable explanation for the classification.
        confidence: Confidence level assigned by the classifier.
        category: Tag of the residual location the entry was found in.
    """

    path: str
    type: EntryType
    size: int
    app_name: str
    reason: str
    confidence: Confidence
    category: str

    def __post_init__(self) -> None:
        """Validate orphan data after initialization."""
        if not self.path:
            msg = "Path cannot be empty"
            raise ValueError(msg)
        if self.size < 0:
            msg = f"Size must be non-negative, got {self.size}"
            raise ValueError(msg)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "path": self.path,
            "type": self.type.value,
            "size": self.size,
            "app_name": self.app_name,
            "reason": self.reason,
            "confidence": self.confidence.value,
            "category": self.category,
        }


@dataclass(frozen=True, slots=True)
class ScanResult:
    """Outcome of one residue scan session.

    Attributes:
        orphans: Orphan records sorted by descending size.
        scanned_locations: Absolute paths of every location visited.
    """

    orphans: tuple[OrphanFile, ...] = ()
    scanned_locations: tuple[str, ...] = ()

    @property
    def total_size(self) -> int:
        """Total bytes across all orphan records."""
        return sum(o.size for o in self.orphans)

    def by_confidence(self, confidence: Confidence) -> list[OrphanFile]:
        """Return the orphans carrying the given confidence level."""
        return [o for o in self.orphans if o.confidence == confidence]

    def size_for(self, confidence: Confidence) -> int:
        """Return the total size of orphans at the given confidence level."""
        return sum(o.size for o in self.by_confidence(confidence))

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary for JSON serialization."""
        return {
            "scanned_locations": list(self.scanned_locations),
            "total_size": self.total_size,
            "orphans": [o.to_dict() for o in self.orphans],
        }
