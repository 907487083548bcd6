"""Application residue detection.

Registry of installed applications, the orphan classifier, and the
scanner that applies both to the residual locations.
"""

from macclean.residue.classifier import Classification, OrphanClassifier, Verdict
from macclean.residue.registry import InstalledAppRegistry
from macclean.residue.scanner import ResidueScanner

__all__ = [
    "Classification",
    "InstalledAppRegistry",
    "OrphanClassifier",
    "ResidueScanner",
    "Verdict",
]
