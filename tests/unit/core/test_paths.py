"""Unit tests for XDG path management.

Tests for the paths module that provides XDG-compliant directory paths.
"""

import os
from pathlib import Path
from unittest.mock import patch

from modctl.core.paths import (
    APP_NAME,
    MANIFEST_FILENAME,
    get_cache_dir,
    get_catalog_cache_path,
    get_config_dir,
    get_config_path,
    get_default_mods_dir,
    get_manifest_path,
    get_state_dir,
)


class TestXdgDirs:
    """Tests for the XDG base directories."""

    def test_default_config_dir(self) -> None:
        """get_config_dir returns default path when XDG_CONFIG_HOME not set."""
        with patch.dict(os.environ, {}, clear=True):
            assert get_config_dir() == Path.home() / ".config" / APP_NAME

    def test_respects_xdg_config_home(self, tmp_path: Path) -> None:
        """get_config_dir respects XDG_CONFIG_HOME environment variable."""
        with patch.dict(os.environ, {"XDG_CONFIG_HOME": str(tmp_path)}):
            assert get_config_dir() == tmp_path / APP_NAME
            assert get_config_path() == tmp_path / APP_NAME / "config.toml"

    def test_manifest_lives_in_state_dir(self, tmp_path: Path) -> None:
        """The manifest is stored under XDG_STATE_HOME."""
        with patch.dict(os.environ, {"XDG_STATE_HOME": str(tmp_path)}):
            assert get_state_dir() == tmp_path / APP_NAME
            assert get_manifest_path() == tmp_path / APP_NAME / MANIFEST_FILENAME

    def test_catalog_cache_in_cache_dir(self, tmp_path: Path) -> None:
        """The catalog cache is stored under XDG_CACHE_HOME."""
        with patch.dict(os.environ, {"XDG_CACHE_HOME": str(tmp_path)}):
            assert get_cache_dir() == tmp_path / APP_NAME
            assert get_catalog_cache_path() == tmp_path / APP_NAME / "mods.json"


class TestDefaultModsDir:
    """Tests for get_default_mods_dir function."""

    def test_windows_local_app_data(self, tmp_path: Path) -> None:
        """LOCALAPPDATA points at the game's user folder."""
        with patch.dict(os.environ, {"LOCALAPPDATA": str(tmp_path)}):
            result = get_default_mods_dir()

        assert result == tmp_path / "BeamNG" / "BeamNG.drive" / "current" / "mods"

    def test_fallback_under_home(self) -> None:
        """Without LOCALAPPDATA the folder lives under ~/.local/share."""
        with patch.dict(os.environ, {}, clear=True):
            expected = Path.home() / ".local" / "share" / "BeamNG.drive" / "current" / "mods"
            assert get_default_mods_dir() == expected
