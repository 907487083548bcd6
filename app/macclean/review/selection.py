"""Selection state for the interactive review.

The backing item list never changes during a session. Marks are kept as
indices into that list, so they survive any change of the confidence
filter; the cursor and scroll offset refer to the filtered view.
"""

from collections.abc import Sequence

from macclean.models.orphan import Confidence
from macclean.models.selectable import SelectableItem

VISIBLE_ROWS = 12


class SelectionModel:
    """Marked set, confidence filter and cursor over a fixed item list.

    Args:
        items: Backing items, in display order.
        visible_rows: Height of the scrolling window.
    """

    def __init__(self, items: Sequence[SelectableItem], visible_rows: int = VISIBLE_ROWS) -> None:
        self._items: tuple[SelectableItem, ...] = tuple(items)
        self._visible_rows = visible_rows
        self._marked: set[int] = set()
        self._filter: Confidence | None = None
        self._cursor = 0
        self._scroll = 0
        # Indices added by the last select-all, so a second call can undo it
        self._select_all_added: frozenset[int] | None = None

    @property
    def items(self) -> tuple[SelectableItem, ...]:
        return self._items

    @property
    def active_filter(self) -> Confidence | None:
        return self._filter

    @property
    def cursor(self) -> int:
        """Cursor position within the filtered view."""
        return self._cursor

    @property
    def scroll(self) -> int:
        """Index of the first visible row within the filtered view."""
        return self._scroll

    @property
    def visible_row_count(self) -> int:
        return self._visible_rows

    @property
    def has_confidence(self) -> bool:
        """Check if any item carries a confidence (enables filtering)."""
        return any(item.confidence is not None for item in self._items)

    @property
    def filtered_indices(self) -> list[int]:
        """Backing indices of the items that pass the active filter."""
        if self._filter is None:
            return list(range(len(self._items)))
        return [i for i, item in enumerate(self._items) if item.confidence == self._filter]

    @property
    def filtered_items(self) -> list[SelectableItem]:
        return [self._items[i] for i in self.filtered_indices]

    @property
    def current_item(self) -> SelectableItem | None:
        """Item under the cursor, or None if the filtered view is empty."""
        indices = self.filtered_indices
        if not indices:
            return None
        return self._items[indices[self._cursor]]

    @property
    def marked_indices(self) -> frozenset[int]:
        return frozenset(self._marked)

    @property
    def marked_items(self) -> list[SelectableItem]:
        """Marked items in backing order, regardless of the filter."""
        return [self._items[i] for i in sorted(self._marked)]

    @property
    def marked_size(self) -> int:
        return sum(self._items[i].size for i in self._marked)

    def is_marked(self, backing_index: int) -> bool:
        return backing_index in self._marked

    def toggle_mark(self, filtered_index: int | None = None) -> None:
        """Flip the mark of one item of the filtered view.

        Args:
            filtered_index: Position in the filtered view; defaults to the cursor.
        """
        indices = self.filtered_indices
        if not indices:
            return

        position = self._cursor if filtered_index is None else filtered_index
        if not 0 <= position < len(indices):
            raise IndexError(f"Filtered index out of range: {position}")

        backing = indices[position]
        self._select_all_added = None
        if backing in self._marked:
            self._marked.discard(backing)
        else:
            self._marked.add(backing)

    def toggle_select_all(self) -> None:
        """Mark every visible item, or unmark them all if all are already marked.

        Items hidden by the active filter keep their state. Two consecutive
        calls restore the previous marks exactly: unmarking right after a
        select-all only drops the items that select-all added.
        """
        indices = self.filtered_indices
        if not indices:
            return

        if all(i in self._marked for i in indices):
            if self._select_all_added is not None:
                self._marked.difference_update(self._select_all_added)
            else:
                self._marked.difference_update(indices)
            self._select_all_added = None
        else:
            added = frozenset(i for i in indices if i not in self._marked)
            self._marked.update(added)
            self._select_all_added = added

    def set_filter(self, level: Confidence | None) -> None:
        """Switch the confidence filter.

        Selecting the active level again returns to showing all items.
        Cursor and scroll reset; marks are kept.
        """
        if level is not None and level == self._filter:
            level = None
        self._filter = level
        self._select_all_added = None
        self._cursor = 0
        self._scroll = 0

    def move(self, delta: int) -> None:
        """Move the cursor by delta rows, clamped, scrolling minimally."""
        length = len(self.filtered_indices)
        if length == 0:
            self._cursor = 0
            self._scroll = 0
            return

        self._cursor = max(0, min(length - 1, self._cursor + delta))

        if self._cursor < self._scroll:
            self._scroll = self._cursor
        elif self._cursor >= self._scroll + self._visible_rows:
            self._scroll = self._cursor - self._visible_rows + 1

    def visible_rows(self) -> list[tuple[int, SelectableItem]]:
        """Return (filtered position, item) pairs inside the scroll window."""
        items = self.filtered_items
        end = min(len(items), self._scroll + self._visible_rows)
        return [(pos, items[pos]) for pos in range(self._scroll, end)]

    def backing_index(self, filtered_index: int) -> int:
        """Translate a filtered-view position into a backing index."""
        return self.filtered_indices[filtered_index]
