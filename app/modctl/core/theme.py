"""Console colours for modctl.

Every style names something the CLI renders: a tracked or untracked
archive, a reconciliation outcome or an update state. Colours can be
overridden in ~/.config/modctl/theme.toml under ``[colors]``; any colour
Rich can parse (``"red"``, ``"#ff0000"``, ``"color(196)"``) is accepted.
"""

import functools
import logging
import tomllib
from pathlib import Path
from typing import Annotated

from pydantic import AfterValidator, BaseModel, ConfigDict, ValidationError
from rich.color import Color, ColorParseError
from rich.theme import Theme

from modctl.core.paths import get_config_dir

logger = logging.getLogger(__name__)

THEME_FILENAME = "theme.toml"


def _check_color(value: str) -> str:
    try:
        Color.parse(value)
    except ColorParseError as e:
        raise ValueError(str(e)) from e
    return value


ColorValue = Annotated[str, AfterValidator(_check_color)]


class ThemeColors(BaseModel):
    """Colour per rendered state.

    Attributes:
        tracked: Archives recognised by the catalog.
        untracked: Archives tracked under their own filename.
        added: Archives newly assigned by a rescan.
        refreshed: Entries whose version was re-derived.
        pruned: Entries whose archive disappeared.
        dropped: Archives that lost a duplicate tie-break.
        update_available: Newer release of an installed mod.
        not_installed: Release of a mod that is not installed yet.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    text: ColorValue = "#ffffff"
    muted: ColorValue = "#b2bec3"
    header: ColorValue = "#69b9a1"
    border: ColorValue = "#29526d"
    success: ColorValue = "#03b971"
    warning: ColorValue = "#f5b332"
    error: ColorValue = "#f53263"
    info: ColorValue = "#0ec1c8"

    tracked: ColorValue = "#69b9a1"
    untracked: ColorValue = "#226666"

    added: ColorValue = "#c1ff62"
    refreshed: ColorValue = "#0e8ac8"
    pruned: ColorValue = "#f53263"
    dropped: ColorValue = "#b2bec3"

    update_available: ColorValue = "#f5b332"
    not_installed: ColorValue = "#c1ff62"

    def styles(self) -> dict[str, str]:
        """Map the style names used in CLI markup to Rich style strings."""
        return {
            "text": self.text,
            "muted": self.muted,
            "bold_header": f"bold {self.header}",
            "border": self.border,
            "success": self.success,
            "warning": self.warning,
            "error": f"bold {self.error}",
            "info": self.info,
            "mod.tracked": f"bold {self.tracked}",
            "mod.untracked": self.untracked,
            "reconcile.added": self.added,
            "reconcile.refreshed": self.refreshed,
            "reconcile.pruned": self.pruned,
            "reconcile.dropped": f"italic {self.dropped}",
            "update.available": f"bold {self.update_available}",
            "update.new": self.not_installed,
        }


def get_user_theme_path() -> Path:
    """Get the path of the user theme file (~/.config/modctl/theme.toml)."""
    return get_config_dir() / THEME_FILENAME


def load_theme(path: Path | None = None) -> ThemeColors:
    """Load theme colours, falling back to the defaults.

    A missing file means defaults. An unreadable file or one with an
    invalid colour is ignored with a warning.

    Args:
        path: Theme file. If None, uses the user theme path.

    Returns:
        Validated ThemeColors.
    """
    theme_path = path or get_user_theme_path()
    try:
        with open(theme_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError:
        return ThemeColors()
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.warning("Ignoring theme file %s: %s", theme_path, e)
        return ThemeColors()

    try:
        return ThemeColors.model_validate(data.get("colors", {}))
    except ValidationError as e:
        logger.warning("Ignoring invalid theme %s: %s", theme_path, e)
        return ThemeColors()


@functools.cache
def get_theme() -> Theme:
    """Get the Rich theme for the shared consoles (loaded once)."""
    return Theme(load_theme().styles())
