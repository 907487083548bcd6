"""Glue between the CLI and the interactive review.

Privilege acquisition, raw key reading and session construction shared by
the orphans, caches and full commands.
"""

import logging
from collections.abc import Iterator, Sequence

import typer

from macclean.models.selectable import SelectableItem
from macclean.providers.privileges import check_sudo, request_sudo
from macclean.providers.removal import LocalRemoval
from macclean.review.executor import DeletionExecutor, DeletionSummary
from macclean.review.render import RichReviewRenderer
from macclean.review.session import ReviewSession
from macclean.utils.formatting import console, print_info, print_warning

logger = logging.getLogger(__name__)


def acquire_privileges(sudo: bool | None) -> bool:
    """Decide whether this session runs with elevated privileges.

    Checked once per session; the result is reused for every removal.

    Args:
        sudo: True to request a sudo ticket, False to run unprivileged,
            None to ask the operator when not already privileged.

    Returns:
        True if elevated removal is available.
    """
    if check_sudo():
        logger.debug("Elevated privileges already held")
        return True
    if sudo is False:
        return False

    if sudo is None:
        print_warning("Administrator privileges are needed to clean system files.")
        if not typer.confirm("Authenticate with sudo now?", default=False):
            print_info("Continuing with normal privileges.")
            return False

    if request_sudo():
        return True

    print_warning("Could not obtain administrator privileges; continuing without them.")
    return False


def read_keys() -> Iterator[str]:
    """Yield raw keystrokes from the terminal until interrupted."""
    while True:
        try:
            yield typer.getchar()
        except (KeyboardInterrupt, EOFError):
            return


def run_review(
    items: Sequence[SelectableItem],
    title: str,
    has_elevation: bool,
    keys: Iterator[str] | None = None,
) -> DeletionSummary | None:
    """Run an interactive review over items.

    Args:
        items: Items to offer.
        title: Heading of the review screen.
        has_elevation: Whether elevated removal is available.
        keys: Keystroke source (default: the terminal).

    Returns:
        The deletion summary, or None if the operator quit.
    """
    session = ReviewSession(
        items,
        executor=DeletionExecutor(LocalRemoval(), has_elevation=has_elevation),
        renderer=RichReviewRenderer(console),
        title=title,
    )
    return session.run(keys if keys is not None else read_keys())
