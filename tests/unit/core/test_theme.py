"""Unit tests for theme module.

Tests for colour validation, user overrides and the Rich style names used
in CLI markup.
"""

from pathlib import Path

import pytest
from modctl.core.theme import ThemeColors, load_theme
from pydantic import ValidationError


class TestThemeColors:
    """Tests for ThemeColors model."""

    def test_accepts_rich_colors(self) -> None:
        """Named, hex and palette colours are all valid."""
        colors = ThemeColors(tracked="green", pruned="#123456", dropped="color(244)")

        assert colors.tracked == "green"
        assert colors.pruned == "#123456"

    def test_rejects_unknown_color(self) -> None:
        """Strings Rich cannot parse are rejected."""
        with pytest.raises(ValidationError):
            ThemeColors(added="not-a-colour")

    def test_rejects_unknown_key(self) -> None:
        """Misspelt keys are not silently ignored."""
        with pytest.raises(ValidationError):
            ThemeColors.model_validate({"refershed": "red"})

    def test_styles_cover_rendered_states(self) -> None:
        """Every state the CLI renders has a style."""
        styles = ThemeColors(refreshed="blue").styles()

        assert styles["reconcile.refreshed"] == "blue"
        for name in (
            "mod.tracked",
            "mod.untracked",
            "reconcile.added",
            "reconcile.pruned",
            "reconcile.dropped",
            "update.available",
            "update.new",
            "bold_header",
        ):
            assert name in styles


class TestLoadTheme:
    """Tests for load_theme function."""

    def test_missing_file_gives_defaults(self, tmp_path: Path) -> None:
        """No theme file means the built-in colours."""
        assert load_theme(tmp_path / "theme.toml") == ThemeColors()

    def test_partial_override(self, tmp_path: Path) -> None:
        """User values replace defaults, the rest stays."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\npruned = "magenta"\n', encoding="utf-8")

        colors = load_theme(path)

        assert colors.pruned == "magenta"
        assert colors.added == ThemeColors().added

    def test_invalid_color_falls_back(self, tmp_path: Path) -> None:
        """An invalid colour discards the file."""
        path = tmp_path / "theme.toml"
        path.write_text('[colors]\nadded = "sparkly"\n', encoding="utf-8")

        assert load_theme(path) == ThemeColors()

    def test_invalid_toml_falls_back(self, tmp_path: Path) -> None:
        """Broken TOML is ignored."""
        path = tmp_path / "theme.toml"
        path.write_text("[colors\n", encoding="utf-8")

        assert load_theme(path) == ThemeColors()
