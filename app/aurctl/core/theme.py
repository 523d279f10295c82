"""Color theme for aurctl output.

The bundled data/theme.toml provides the defaults; keys under [colors] in
~/.config/aurctl/theme.toml override them one by one.
"""

import logging
import tomllib
from functools import cache
from importlib import resources
from pathlib import Path

from pydantic import BaseModel, ConfigDict, ValidationError, ValidationInfo, field_validator
from rich.theme import Theme

from aurctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"


class ThemeColors(BaseModel):
    """Hex colors (#RGB or #RRGGBB) used by the console styles."""

    model_config = ConfigDict(extra="forbid")

    text: str = "#ffffff"
    muted: str = "#b2bec3"
    header: str = "#e06c75"
    border: str = "#29526d"

    success: str = "#03b971"
    warning: str = "#f5b332"
    error: str = "#f53263"
    info: str = "#0e8ac8"

    # Old/new columns of the outdated table
    version_old: str = "#b2bec3"
    version_new: str = "#c1ff62"

    @field_validator("*", mode="before")
    @classmethod
    def check_hex(cls, value: object, info: ValidationInfo) -> str:
        if not isinstance(value, str):
            raise ValueError(f"{info.field_name}: color must be a string")
        color = value.strip()
        digits = color.removeprefix("#")
        if digits == color:
            raise ValueError(f"{info.field_name}: color must start with '#'")
        if len(digits) not in (3, 6):
            raise ValueError(f"{info.field_name}: color must be #RGB or #RRGGBB format")
        try:
            int(digits, 16)
        except ValueError:
            raise ValueError(f"{info.field_name}: invalid hex color '{color}'") from None
        return color


def get_user_theme_path() -> Path:
    """Path to the user's theme overrides, ~/.config/aurctl/theme.toml."""
    return get_config_dir() / THEME_FILENAME


def get_bundled_theme_path() -> Path:
    """Path to the theme shipped with the package."""
    return Path(str(resources.files("aurctl.data").joinpath(THEME_FILENAME)))


def _load_toml_colors(path: Path) -> dict[str, str]:
    """Read the [colors] table of a theme file.

    Missing, unreadable or malformed files yield no colors; problems are
    logged, never raised, so a broken theme cannot stop a command.
    """
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return {}
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", path, e)
        return {}

    colors = data.get("colors", {})
    if not isinstance(colors, dict):
        logger.warning("Ignoring theme file %s: [colors] is not a table", path)
        return {}
    return {key: value for key, value in colors.items() if isinstance(value, str)}


def load_theme() -> ThemeColors:
    """Merge user overrides over the bundled colors.

    Returns:
        Validated colors; the built-in defaults if validation fails.
    """
    merged = _load_toml_colors(get_bundled_theme_path())
    merged.update(_load_toml_colors(get_user_theme_path()))

    try:
        return ThemeColors(**merged)
    except ValidationError as e:
        logger.warning("Invalid theme configuration, using defaults: %s", e)
        return ThemeColors()


def get_rich_theme(colors: ThemeColors | None = None) -> Theme:
    """Build the Rich theme from a set of colors.

    Args:
        colors: Colors to use. Loaded with load_theme() if None.

    Returns:
        Rich Theme defining every style name used in aurctl markup.
    """
    colors = colors if colors is not None else load_theme()

    return Theme(
        {
            "text": colors.text,
            "muted": colors.muted,
            "header": colors.header,
            "border": colors.border,
            "success": f"bold {colors.success}",
            "warning": f"bold {colors.warning}",
            "error": f"bold {colors.error}",
            "info": f"bold {colors.info}",
            "version.old": colors.version_old,
            "version.new": f"bold {colors.version_new}",
            "bold_header": f"bold {colors.header}",
            "package.name": f"bold {colors.text}",
        }
    )


@cache
def get_theme() -> Theme:
    """Rich theme shared by the console instances, loaded once."""
    return get_rich_theme()
