"""Output surfaces for the interactive review."""

from abc import ABC, abstractmethod
from collections.abc import Sequence

from rich.console import Console
from rich.markup import escape
from rich.rule import Rule

from macclean.models.orphan import Confidence
from macclean.models.selectable import SelectableItem
from macclean.review.executor import DeletionSummary, RemovalResult, RemovalStatus
from macclean.review.selection import SelectionModel
from macclean.utils.formatting import CONFIDENCE_ICONS, confidence_style, format_size

# How many items the confirmation screen lists before summarizing the rest.
CONFIRM_PREVIEW_LIMIT = 10

_FILTER_LABELS: dict[Confidence | None, str] = {
    None: "all",
    Confidence.HIGH: "high",
    Confidence.MEDIUM: "medium",
    Confidence.LOW: "low",
}


class ReviewRenderer(ABC):
    """Surface the review session draws on."""

    @abstractmethod
    def render_review(self, selection: SelectionModel, title: str, notice: str | None) -> None:
        """Redraw the review list."""
        ...

    @abstractmethod
    def render_confirm(
        self, items: Sequence[SelectableItem], total_size: int, has_elevation: bool
    ) -> None:
        """Show the confirmation prompt for the marked items."""
        ...

    @abstractmethod
    def start_execution(self, count: int) -> None:
        """Announce that deletion of count items begins."""
        ...

    @abstractmethod
    def report_result(self, result: RemovalResult) -> None:
        """Report the outcome of one removal."""
        ...

    @abstractmethod
    def render_summary(self, summary: DeletionSummary) -> None:
        """Show the final summary line."""
        ...

    def close(self) -> None:
        """Release the surface (restore the cursor, etc.)."""


class RichReviewRenderer(ReviewRenderer):
    """Full-screen redraws on a Rich console.

    Args:
        console: Console to draw on.
    """

    def __init__(self, console: Console) -> None:
        self._console = console
        self._cursor_hidden = False

    def render_review(self, selection: SelectionModel, title: str, notice: str | None) -> None:
        out = self._console
        self._clear()

        out.print(Rule(style="border"))
        out.print(f"  [bold_header]{escape(title)}[/]")
        out.print(Rule(style="border"))
        out.print(
            "\n  [dim]up/down move | space mark | a all | enter delete | q quit[/]",
            highlight=False,
        )
        if selection.has_confidence:
            out.print("  [dim]1 high | 2 medium | 3 low | 0 all[/]", highlight=False)

        out.print(
            f"\n  Marked: [size]{len(selection.marked_indices)}[/]"
            f" | Size: [size]{format_size(selection.marked_size)}[/]"
            f" | Filter: {_FILTER_LABELS[selection.active_filter]}",
            highlight=False,
        )
        out.print(Rule(style="border"))

        filtered = selection.filtered_items
        if not filtered:
            out.print("\n  [dim]No items match the current filter[/]")
        else:
            for position, item in selection.visible_rows():
                backing = selection.backing_index(position)
                out.print(
                    self._format_row(item, selection.is_marked(backing)),
                    style="cursor" if position == selection.cursor else None,
                    highlight=False,
                )
            if len(filtered) > selection.visible_row_count:
                pct = round((selection.cursor + 1) / len(filtered) * 100)
                out.print(f"\n  [dim]{pct}% ({selection.cursor + 1}/{len(filtered)})[/]")

        out.print(Rule(style="border"))

        current = selection.current_item
        if current is not None:
            out.print(f"\n[bold]{escape(current.name)}[/]")
            out.print(f"  Path: [info]{escape(current.path)}[/]", highlight=False)
            out.print(f"  Size: [size]{format_size(current.size)}[/]", highlight=False)
            if current.detail:
                out.print(f"  [dim]{escape(current.detail)}[/]")

        if notice:
            out.print(f"\n[warning]{escape(notice)}[/]")

    def render_confirm(
        self, items: Sequence[SelectableItem], total_size: int, has_elevation: bool
    ) -> None:
        out = self._console
        self._clear()

        out.print(Rule(style="error"))
        out.print("  [error]Confirm deletion[/]")
        out.print(Rule(style="error"))
        out.print(f"\nAbout to delete {len(items)} item(s):\n")

        for item in items[:CONFIRM_PREVIEW_LIMIT]:
            out.print(f"  [error]x[/] {escape(item.name)}")
            out.print(
                f"    [dim]{escape(item.path)} ({format_size(item.size)})[/]", highlight=False
            )
        if len(items) > CONFIRM_PREVIEW_LIMIT:
            out.print(f"  [dim]... and {len(items) - CONFIRM_PREVIEW_LIMIT} more[/]")

        out.print(f"\n[size]Total: {format_size(total_size)}[/]")
        out.print("\n[error]This cannot be undone.[/]")
        if not has_elevation:
            out.print("[warning]No administrator privileges; system paths may fail to delete.[/]")
        out.print("\nPress [success]y[/] to confirm, any other key to go back")

    def start_execution(self, count: int) -> None:
        self._show_cursor()
        self._console.print(f"\n[info]Deleting {count} item(s)...[/]\n")

    def report_result(self, result: RemovalResult) -> None:
        path = escape(result.item.path)
        if result.status == RemovalStatus.REMOVED:
            self._console.print(f"[success]✓[/] {path}", highlight=False)
        elif result.status == RemovalStatus.PARTIAL:
            self._console.print(
                f"[warning]◐[/] {path} [dim](contents removed; container is protected)[/]",
                highlight=False,
            )
        else:
            self._console.print(
                f"[error]✗[/] {path} - {escape(result.error or 'unknown error')}",
                highlight=False,
            )

    def render_summary(self, summary: DeletionSummary) -> None:
        out = self._console
        out.print(Rule(style="border"))
        line = f"[success]Succeeded: {summary.success_count}[/]"
        if summary.partial_count:
            line += f" [dim]({summary.partial_count} partial)[/]"
        if summary.failure_count:
            line += f" | [error]Failed: {summary.failure_count}[/]"
        out.print(line, highlight=False)
        out.print(f"[size]Freed: {format_size(summary.freed_bytes)}[/]", highlight=False)

    def close(self) -> None:
        self._show_cursor()

    def _format_row(self, item: SelectableItem, marked: bool) -> str:
        check = "[marked]◉[/]" if marked else "○"
        icon = CONFIDENCE_ICONS[item.confidence] if item.confidence is not None else " "
        style = confidence_style(item.confidence)
        name = escape(item.name[:30].ljust(30))
        return f"  {check} {icon} [{style}]{name}[/] [size]{format_size(item.size):>10}[/]"

    def _clear(self) -> None:
        self._console.clear()
        if not self._cursor_hidden:
            self._console.show_cursor(False)
            self._cursor_hidden = True

    def _show_cursor(self) -> None:
        if self._cursor_hidden:
            self._console.show_cursor(True)
            self._cursor_hidden = False
