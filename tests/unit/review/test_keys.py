"""Unit tests for keystroke decoding."""

import pytest
from macclean.review.keys import Key, decode_key


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("\x1b[A", Key.UP),
        ("k", Key.UP),
        ("\x1b[B", Key.DOWN),
        ("j", Key.DOWN),
        (" ", Key.TOGGLE),
        ("\r", Key.CONFIRM),
        ("\n", Key.CONFIRM),
        ("a", Key.SELECT_ALL),
        ("A", Key.SELECT_ALL),
        ("1", Key.FILTER_HIGH),
        ("2", Key.FILTER_MEDIUM),
        ("3", Key.FILTER_LOW),
        ("0", Key.FILTER_ALL),
        ("\x1b", Key.QUIT),
        ("q", Key.QUIT),
        ("Q", Key.QUIT),
    ],
)
def test_decode_known_keys(raw: str, expected: Key) -> None:
    """Raw keystrokes map to their normalized key."""
    assert decode_key(raw) == expected


@pytest.mark.parametrize("raw", ["x", "4", "\x1b[C", ""])
def test_decode_unknown_keys(raw: str) -> None:
    """Unbound keys decode to None."""
    assert decode_key(raw) is None
