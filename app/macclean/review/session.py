"""Interactive review session.

A small state machine driven by raw keystrokes:

    IDLE -> REVIEWING -> CONFIRMING -> EXECUTING -> DONE

Quitting while reviewing discards the selection and returns to IDLE.
Declining the confirmation goes back to REVIEWING. Once EXECUTING starts
every marked item is attempted.
"""

import logging
from collections.abc import Iterable, Sequence
from enum import Enum

from macclean.models.orphan import Confidence
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionExecutor, DeletionSummary
from macclean.review.keys import Key, decode_key
from macclean.review.render import ReviewRenderer
from macclean.review.selection import VISIBLE_ROWS, SelectionModel

logger = logging.getLogger(__name__)

NOTHING_MARKED_NOTICE = "No items marked for deletion"

_FILTER_KEYS: dict[Key, Confidence | None] = {
    Key.FILTER_HIGH: Confidence.HIGH,
    Key.FILTER_MEDIUM: Confidence.MEDIUM,
    Key.FILTER_LOW: Confidence.LOW,
    Key.FILTER_ALL: None,
}


class SessionState(str, Enum):
    """States of a review session."""

    IDLE = "idle"
    REVIEWING = "reviewing"
    CONFIRMING = "confirming"
    EXECUTING = "executing"
    DONE = "done"


class ReviewSession:
    """Review, confirm and delete a list of items.

    Args:
        items: Items offered for review; never modified during the session.
        executor: Executor that removes the confirmed items.
        renderer: Output surface, redrawn after every state change.
        title: Heading shown above the list.
        visible_rows: Height of the scrolling window.
    """

    def __init__(
        self,
        items: Sequence[SelectableItem],
        executor: DeletionExecutor,
        renderer: ReviewRenderer,
        title: str = "Review",
        visible_rows: int = VISIBLE_ROWS,
    ) -> None:
        self._items = tuple(items)
        self._executor = executor
        self._renderer = renderer
        self._title = title
        self._visible_rows = visible_rows
        self._selection = SelectionModel(self._items, visible_rows)
        self._state = SessionState.IDLE
        self._summary: DeletionSummary | None = None
        self._notice: str | None = None

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def selection(self) -> SelectionModel:
        return self._selection

    @property
    def summary(self) -> DeletionSummary | None:
        """Deletion summary once the session is DONE, otherwise None."""
        return self._summary

    def start(self) -> None:
        """Enter REVIEWING with a fresh selection."""
        if self._state != SessionState.IDLE:
            raise RuntimeError(f"Cannot start a session in state {self._state.value}")
        self._selection = SelectionModel(self._items, self._visible_rows)
        self._summary = None
        self._notice = None
        self._state = SessionState.REVIEWING
        self._redraw()

    def handle_key(self, raw: str) -> SessionState:
        """Feed one raw keystroke to the session.

        Args:
            raw: Characters produced by one key press.

        Returns:
            The state after handling the key.
        """
        if self._state == SessionState.REVIEWING:
            self._handle_review_key(raw)
        elif self._state == SessionState.CONFIRMING:
            self._handle_confirm_key(raw)
        return self._state

    def run(self, keys: Iterable[str]) -> DeletionSummary | None:
        """Run the session to completion.

        Args:
            keys: Source of raw keystrokes, consumed until the session ends.

        Returns:
            The deletion summary, or None if the operator quit (or there
            was nothing to review).
        """
        if not self._items:
            return None

        self.start()
        try:
            for raw in keys:
                if self.handle_key(raw) in (SessionState.DONE, SessionState.IDLE):
                    break
            else:
                # Input ended before a decision: treat as quit.
                self._reset()
        finally:
            self._renderer.close()

        return self._summary

    def _handle_review_key(self, raw: str) -> None:
        key = decode_key(raw)
        if key is None:
            return

        self._notice = None
        selection = self._selection

        if key == Key.QUIT:
            self._reset()
            return
        if key == Key.UP:
            selection.move(-1)
        elif key == Key.DOWN:
            selection.move(1)
        elif key == Key.TOGGLE:
            selection.toggle_mark()
        elif key == Key.SELECT_ALL:
            selection.toggle_select_all()
        elif key in _FILTER_KEYS:
            if selection.has_confidence:
                selection.set_filter(_FILTER_KEYS[key])
        elif key == Key.CONFIRM:
            if not selection.marked_items:
                self._notice = NOTHING_MARKED_NOTICE
            else:
                self._state = SessionState.CONFIRMING
                self._renderer.render_confirm(
                    selection.marked_items,
                    selection.marked_size,
                    self._executor.has_elevation,
                )
                return

        self._redraw()

    def _handle_confirm_key(self, raw: str) -> None:
        if raw not in ("y", "Y"):
            logger.debug("Deletion declined")
            self._state = SessionState.REVIEWING
            self._redraw()
            return

        marked = self._selection.marked_items
        self._state = SessionState.EXECUTING
        self._renderer.start_execution(len(marked))
        self._summary = self._executor.execute(marked, on_result=self._renderer.report_result)
        self._state = SessionState.DONE
        self._renderer.render_summary(self._summary)

    def _reset(self) -> None:
        self._selection = SelectionModel(self._items, self._visible_rows)
        self._summary = None
        self._notice = None
        self._state = SessionState.IDLE

    def _redraw(self) -> None:
        self._renderer.render_review(self._selection, self._title, self._notice)
