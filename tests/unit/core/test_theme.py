"""Unit tests for theme module.

Tests for theme loading, validation, and Rich theme generation.
"""

# pyright: reportPrivateUsage=false

from pathlib import Path
from unittest.mock import patch

import pytest
from aurctl.core.theme import (
    ThemeColors,
    _load_toml_colors,
    get_bundled_theme_path,
    get_rich_theme,
    get_theme,
    load_theme,
)
from rich.theme import Theme


class TestThemeColors:
    """Tests for ThemeColors Pydantic model."""

    def test_accepts_short_and_long_hex(self) -> None:
        """ThemeColors accepts #RGB and #RRGGBB."""
        colors = ThemeColors(text="#abc", header="#123456")
        assert colors.text == "#abc"
        assert colors.header == "#123456"

    @pytest.mark.parametrize(
        ("value", "message"),
        [
            ("ffffff", "must start with '#'"),
            ("#ff", "must be #RGB or #RRGGBB"),
            ("#gggggg", "invalid hex color"),
        ],
    )
    def test_rejects_invalid_colors(self, value: str, message: str) -> None:
        """ThemeColors rejects malformed hex codes."""
        with pytest.raises(ValueError, match=message):
            ThemeColors(text=value)

    def test_extra_fields_forbidden(self) -> None:
        """ThemeColors rejects unknown fields."""
        with pytest.raises(ValueError):
            ThemeColors(unknown_field="#ffffff")  # type: ignore[call-arg]


class TestLoadTomlColors:
    """Tests for _load_toml_colors internal function."""

    def test_loads_colors_table(self, tmp_path: Path) -> None:
        """Loads string values from [colors]."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text('[colors]\ntext = "#000000"\nborder = 3\n')

        assert _load_toml_colors(theme_file) == {"text": "#000000"}

    def test_missing_file(self, tmp_path: Path) -> None:
        """A missing file yields no colors."""
        assert _load_toml_colors(tmp_path / "nonexistent.toml") == {}

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Malformed TOML yields no colors."""
        theme_file = tmp_path / "theme.toml"
        theme_file.write_text("not valid [ toml syntax")

        assert _load_toml_colors(theme_file) == {}

    def test_bundled_theme_is_readable(self) -> None:
        """The packaged theme file defines every color."""
        colors = _load_toml_colors(get_bundled_theme_path())
        assert set(colors) == set(ThemeColors.model_fields)


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_user_theme_overrides_bundled(self, tmp_path: Path) -> None:
        """User colors replace bundled ones key by key."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nversion_new = "#00ff00"\n')

        with patch("aurctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors.version_new == "#00ff00"
        assert colors.error == ThemeColors().error

    def test_invalid_user_color_falls_back_to_defaults(self, tmp_path: Path) -> None:
        """An invalid color in the user theme gives the built-in defaults."""
        user_theme = tmp_path / "theme.toml"
        user_theme.write_text('[colors]\nheader = "red"\n')

        with patch("aurctl.core.theme.get_user_theme_path", return_value=user_theme):
            colors = load_theme()

        assert colors == ThemeColors()


class TestGetRichTheme:
    """Tests for get_rich_theme and get_theme."""

    def test_defines_markup_styles(self) -> None:
        """Every style name used in console markup exists."""
        theme = get_rich_theme(ThemeColors())

        for name in (
            "info",
            "success",
            "warning",
            "error",
            "muted",
            "border",
            "bold_header",
            "package.name",
            "version.old",
            "version.new",
        ):
            assert name in theme.styles

    def test_get_theme_is_cached(self) -> None:
        """get_theme returns the same instance every time."""
        first = get_theme()
        assert isinstance(first, Theme)
        assert get_theme() is first
