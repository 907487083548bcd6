"""Interactive review and deletion of selectable items."""

from macclean.review.executor import (
    DeletionExecutor,
    DeletionSummary,
    RemovalResult,
    RemovalStatus,
)
from macclean.review.keys import Key, decode_key
from macclean.review.render import ReviewRenderer, RichReviewRenderer
from macclean.review.selection import VISIBLE_ROWS, SelectionModel
from macclean.review.session import ReviewSession, SessionState

__all__ = [
    "VISIBLE_ROWS",
    "DeletionExecutor",
    "DeletionSummary",
    "Key",
    "RemovalResult",
    "RemovalStatus",
    "ReviewRenderer",
    "ReviewSession",
    "RichReviewRenderer",
    "SelectionModel",
    "SessionState",
    "decode_key",
]
