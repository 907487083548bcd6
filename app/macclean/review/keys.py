"""Keystroke normalization for the interactive review."""

from enum import Enum


class Key(str, Enum):
    """Normalized key events understood by the review session."""

    UP = "up"
    DOWN = "down"
    TOGGLE = "toggle"
    CONFIRM = "confirm"
    SELECT_ALL = "select_all"
    FILTER_HIGH = "filter_high"
    FILTER_MEDIUM = "filter_medium"
    FILTER_LOW = "filter_low"
    FILTER_ALL = "filter_all"
    QUIT = "quit"


_KEY_MAP: dict[str, Key] = {
    "\x1b[A": Key.UP,
    "\x1bOA": Key.UP,
    "k": Key.UP,
    "\x1b[B": Key.DOWN,
    "\x1bOB": Key.DOWN,
    "j": Key.DOWN,
    " ": Key.TOGGLE,
    "\r": Key.CONFIRM,
    "\n": Key.CONFIRM,
    "a": Key.SELECT_ALL,
    "A": Key.SELECT_ALL,
    "1": Key.FILTER_HIGH,
    "2": Key.FILTER_MEDIUM,
    "3": Key.FILTER_LOW,
    "0": Key.FILTER_ALL,
    "\x1b": Key.QUIT,
    "q": Key.QUIT,
    "Q": Key.QUIT,
}


def decode_key(raw: str) -> Key | None:
    """Map a raw keystroke to a Key.

    Args:
        raw: Characters produced by one key press (escape sequences intact).

    Returns:
        The matching Key, or None for keys the review ignores.
    """
    return _KEY_MAP.get(raw)
