"""Uniform item shape consumed by the interactive review.

Both residue scans and cache cleanup scans project their results onto
SelectableItem so a single review/delete flow can handle either.
"""

from dataclasses import dataclass

from macclean.models.orphan import Confidence, OrphanFile


@dataclass(frozen=True, slots=True)
class SelectableItem:
    """A single row in the review list.

    Attributes:
        name: Display name (application or cleanup task name).
        path: Absolute path that is removed when the item is deleted.
        size: Size in bytes.
        detail: Optional one-line explanation shown under the list.
        confidence: Optional confidence level; enables the confidence filter.
        category: Optional short category tag.
    """

    name: str
    path: str
    size: int
    detail: str | None = None
    confidence: Confidence | None = None
    category: str | None = None

    @classmethod
    def from_orphan(cls, orphan: OrphanFile) -> "SelectableItem":
        """Project an orphan record onto the review shape."""
        return cls(
            name=orphan.app_name,
            path=orphan.path,
            size=orphan.size,
            detail=orphan.reason,
            confidence=orphan.confidence,
            category=orphan.category,
        )

    @classmethod
    def from_cleanup_path(
        cls,
        task_name: str,
        description: str,
        path: str,
        size: int,
    ) -> "SelectableItem":
        """Project one matched cache path of a cleanup task onto the review shape."""
        return cls(
            name=task_name,
            path=path,
            size=size,
            detail=description,
            category=task_name,
        )
