"""Unit tests for SelectionModel.

Covers marking through a filter, select-all, filter switching and
cursor/scroll movement.
"""

import pytest
from macclean.models.orphan import Confidence
from macclean.models.selectable import SelectableItem
from macclean.review.selection import VISIBLE_ROWS, SelectionModel


def _items(count: int) -> list[SelectableItem]:
    return [SelectableItem(name=f"item{i}", path=f"/tmp/item{i}", size=i + 1) for i in range(count)]


class TestMarking:
    """Tests for toggle_mark and marked views."""

    def test_toggle_at_cursor(self, sample_items: list[SelectableItem]) -> None:
        """Toggling without an index uses the cursor."""
        model = SelectionModel(sample_items)
        model.toggle_mark()
        assert model.marked_indices == {0}
        model.toggle_mark()
        assert model.marked_indices == set()

    def test_toggle_resolves_backing_index(self, sample_items: list[SelectableItem]) -> None:
        """Filtered positions are translated to backing indices."""
        model = SelectionModel(sample_items)
        model.set_filter(Confidence.HIGH)

        model.toggle_mark(1)

        assert model.marked_indices == {2}
        assert model.marked_items == [sample_items[2]]

    def test_toggle_on_empty_view_is_noop(self) -> None:
        """Nothing happens when the filtered view is empty."""
        model = SelectionModel(_items(3))
        model.set_filter(Confidence.HIGH)
        model.toggle_mark()
        assert model.marked_indices == set()

    def test_toggle_out_of_range(self, sample_items: list[SelectableItem]) -> None:
        """An explicit out-of-range position raises IndexError."""
        with pytest.raises(IndexError):
            SelectionModel(sample_items).toggle_mark(10)

    def test_marked_items_in_backing_order(self, sample_items: list[SelectableItem]) -> None:
        """Marked items come back in backing order, not marking order."""
        model = SelectionModel(sample_items)
        model.toggle_mark(3)
        model.toggle_mark(0)

        assert [i.name for i in model.marked_items] == ["Alpha", "Delta"]
        assert model.marked_size == 350


class TestSelectAll:
    """Tests for toggle_select_all."""

    def test_marks_only_visible(self, sample_items: list[SelectableItem]) -> None:
        """Select-all under a filter leaves hidden items alone."""
        model = SelectionModel(sample_items)
        model.set_filter(Confidence.HIGH)

        model.toggle_select_all()

        assert model.marked_indices == {0, 2}

    def test_unmarks_when_all_marked(self, sample_items: list[SelectableItem]) -> None:
        """Select-all clears the view when every visible item is marked."""
        model = SelectionModel(sample_items)
        model.toggle_mark(0)
        model.toggle_mark(1)
        model.toggle_mark(2)
        model.toggle_mark(3)

        model.toggle_select_all()

        assert model.marked_indices == set()

    @pytest.mark.parametrize("initial", [set(), {1}, {0, 3}, {0, 1, 2, 3}])
    def test_involution(self, sample_items: list[SelectableItem], initial: set[int]) -> None:
        """Two consecutive select-alls restore the prior marks exactly."""
        model = SelectionModel(sample_items)
        for index in sorted(initial):
            model.toggle_mark(index)

        model.toggle_select_all()
        model.toggle_select_all()

        assert model.marked_indices == initial

    def test_involution_under_filter(self, sample_items: list[SelectableItem]) -> None:
        """The involution also holds with a filter active."""
        model = SelectionModel(sample_items)
        model.toggle_mark(1)
        model.set_filter(Confidence.HIGH)
        model.toggle_mark(0)
        before = model.marked_indices

        model.toggle_select_all()
        model.toggle_select_all()

        assert model.marked_indices == before


class TestFilter:
    """Tests for set_filter."""

    def test_filter_persistence(self) -> None:
        """Marks survive switching filters away and back."""
        items = [
            SelectableItem(name="a", path="/a", size=1, confidence=Confidence.LOW),
            SelectableItem(name="b", path="/b", size=1, confidence=Confidence.HIGH),
            SelectableItem(name="c", path="/c", size=1, confidence=Confidence.LOW),
            SelectableItem(name="d", path="/d", size=1, confidence=Confidence.HIGH),
        ]
        model = SelectionModel(items)
        model.set_filter(Confidence.HIGH)
        model.toggle_mark(1)
        assert model.marked_indices == {3}

        model.set_filter(Confidence.LOW)
        model.set_filter(Confidence.HIGH)

        assert model.is_marked(3)
        assert model.marked_indices == {3}

    def test_reselect_returns_to_all(self, sample_items: list[SelectableItem]) -> None:
        """Choosing the active level again shows everything."""
        model = SelectionModel(sample_items)
        model.set_filter(Confidence.MEDIUM)
        assert len(model.filtered_items) == 1

        model.set_filter(Confidence.MEDIUM)

        assert model.active_filter is None
        assert len(model.filtered_items) == 4

    def test_none_shows_all(self, sample_items: list[SelectableItem]) -> None:
        """A None filter shows every item."""
        model = SelectionModel(sample_items)
        model.set_filter(Confidence.LOW)
        model.set_filter(None)
        assert model.filtered_indices == [0, 1, 2, 3]

    def test_resets_cursor_and_scroll(self) -> None:
        """Changing the filter moves the cursor back to the top."""
        items = [
            SelectableItem(name=f"i{n}", path=f"/i{n}", size=1, confidence=Confidence.HIGH)
            for n in range(20)
        ]
        model = SelectionModel(items)
        model.move(15)
        assert model.scroll > 0

        model.set_filter(Confidence.HIGH)

        assert model.cursor == 0
        assert model.scroll == 0

    def test_has_confidence(self, sample_items: list[SelectableItem]) -> None:
        """Confidence filtering is only offered when items carry one."""
        assert SelectionModel(sample_items).has_confidence is True
        assert SelectionModel(_items(2)).has_confidence is False


class TestMovement:
    """Tests for move and the visible window."""

    def test_clamps_at_bounds(self) -> None:
        """The cursor never leaves the filtered view."""
        model = SelectionModel(_items(5))
        model.move(-3)
        assert model.cursor == 0
        model.move(50)
        assert model.cursor == 4

    def test_scrolls_minimally(self) -> None:
        """The window follows the cursor one row at a time."""
        model = SelectionModel(_items(30))
        model.move(VISIBLE_ROWS - 1)
        assert model.scroll == 0

        model.move(1)
        assert model.scroll == 1

        model.move(-1)
        assert model.scroll == 1

        model.move(-VISIBLE_ROWS)
        assert model.cursor == 0
        assert model.scroll == 0

    def test_visible_rows_window(self) -> None:
        """visible_rows returns at most one window of rows."""
        model = SelectionModel(_items(30))
        model.move(20)

        rows = model.visible_rows()

        assert len(rows) == VISIBLE_ROWS
        assert rows[-1][0] == 20
        assert rows[0][0] == 20 - VISIBLE_ROWS + 1

    def test_current_item(self, sample_items: list[SelectableItem]) -> None:
        """current_item follows the cursor through the filter."""
        model = SelectionModel(sample_items)
        model.set_filter(Confidence.HIGH)
        model.move(1)
        assert model.current_item == sample_items[2]

    def test_current_item_empty(self) -> None:
        """current_item is None for an empty view."""
        assert SelectionModel([]).current_item is None

    def test_backing_never_changes(self, sample_items: list[SelectableItem]) -> None:
        """No operation removes items from the backing list."""
        model = SelectionModel(sample_items)
        model.toggle_select_all()
        model.set_filter(Confidence.LOW)
        model.move(5)
        assert model.items == tuple(sample_items)
