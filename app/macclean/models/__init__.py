"""Data models for macclean.

This module exports the core data structures used throughout the application.
"""

from macclean.models.orphan import Confidence, EntryType, OrphanFile, ScanResult
from macclean.models.selectable import SelectableItem

__all__ = [
    "Confidence",
    "EntryType",
    "OrphanFile",
    "ScanResult",
    "SelectableItem",
]
