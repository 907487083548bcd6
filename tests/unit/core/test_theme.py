"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import macclean.core.theme as theme_module
import pytest
from macclean.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_rich_theme,
    get_theme,
    load_theme,
    reload_theme,
)
from rich.theme import Theme


@pytest.fixture
def no_user_theme(tmp_path: Path):
    """Point the user theme path at a file that does not exist."""
    with patch(
        "macclean.core.theme.get_user_theme_path",
        return_value=tmp_path / "missing.toml",
    ):
        yield


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_default_values(self) -> None:
        """ThemeColors has sensible defaults."""
        colors = ThemeColors()
        assert colors.text == "#ffffff"
        assert colors.confidence_high == "#f53263"
        assert colors.success == "#03b971"

    def test_valid_hex_colors(self) -> None:
        """ThemeColors accepts valid hex color codes."""
        colors = ThemeColors(text="#AABBCC", muted="#abc")
        assert colors.text == "#AABBCC"
        assert colors.muted == "#abc"

    def test_invalid_hex_no_hash(self) -> None:
        """ThemeColors rejects colors without # prefix."""
        with pytest.raises(ValueError, match="must start with '#'"):
            ThemeColors(text="ffffff")

    def test_invalid_hex_wrong_length(self) -> None:
        """ThemeColors rejects colors with wrong length."""
        with pytest.raises(ValueError, match="must be #RGB or #RRGGBB"):
            ThemeColors(text="#ff")

    def test_invalid_hex_chars(self) -> None:
        """ThemeColors rejects invalid hex characters."""
        with pytest.raises(ValueError, match="invalid hex color"):
            ThemeColors(text="#gggggg")

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(unknown_field="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_valid_toml(self, tmp_path: Path) -> None:
        """Loads colors from valid TOML file."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nheader = "#aabbcc"\n')

        result = _load_toml_colors(theme_file)

        assert result == {"text": "#000000", "header": "#aabbcc"}

    def test_returns_none_for_missing_file(self, tmp_path: Path) -> None:
        """Returns None when file doesn't exist."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") is None

    def test_returns_none_for_invalid_toml(self, tmp_path: Path) -> None:
        """Returns None for malformed TOML."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) is None

    def test_returns_empty_dict_for_missing_colors_section(self, tmp_path: Path) -> None:
        """Returns empty dict when colors section is missing."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[other]\nkey = "value"\n')

        assert _load_toml_colors(theme_file) == {}


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_loads_bundled_theme(self, no_user_theme: None) -> None:
        """Loads theme from bundled data file."""
        colors = load_theme()

        assert colors.text == "#ffffff"
        assert colors.header == "#4fc1e9"
        assert colors.cursor == "#1d4f91"

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User theme overrides bundled theme values."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "#ff0000"\n')

        with patch("macclean.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#ff0000"
        assert colors.success == "#03b971"

    def test_invalid_user_colors_fall_back_to_defaults(self, tmp_path: Path) -> None:
        """An invalid user color falls back to ThemeColors defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("macclean.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()

    def test_graceful_fallback_on_invalid_user_toml(self, tmp_path: Path) -> None:
        """Falls back to bundled theme when user theme is not valid TOML."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text("invalid toml [[[")

        with patch("macclean.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.header == "#4fc1e9"


class TestGetRichTheme:
    """Tests for get_rich_theme function."""

    def test_includes_review_styles(self) -> None:
        """Theme includes the styles the review screen uses."""
        theme = get_rich_theme(ThemeColors())

        for style in (
            "confidence_high",
            "confidence_medium",
            "confidence_low",
            "marked",
            "cursor",
            "size",
            "bold_header",
        ):
            assert style in theme.styles

    def test_cursor_is_background_style(self) -> None:
        """The cursor style paints the row background."""
        theme = get_rich_theme(ThemeColors(cursor="#123456"))

        assert theme.styles["cursor"].bgcolor is not None


class TestGetTheme:
    """Tests for get_theme caching function."""

    def test_caches_theme(self) -> None:
        """get_theme returns cached instance on subsequent calls."""
        theme_module._cached_theme = None

        theme1 = get_theme()
        theme2 = get_theme()

        assert isinstance(theme1, Theme)
        assert theme1 is theme2

    def test_reload_creates_new_theme(self) -> None:
        """reload_theme creates a new Theme instance."""
        theme_module._cached_theme = None

        original = get_theme()
        reloaded = reload_theme()

        assert reloaded is not original
        assert get_theme() is reloaded
