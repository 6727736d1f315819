"""XDG-compliant path management for modctl.

This module provides standardized paths following the XDG Base Directory
Specification for configuration, state, and cache storage.

XDG defaults:
- Config: ~/.config/modctl/
- State: ~/.local/state/modctl/
- Cache: ~/.cache/modctl/
"""

import os
from pathlib import Path

# Application identifier for directory naming
APP_NAME = "modctl"

MANIFEST_FILENAME = "mod_manifest.json"


def _get_xdg_dir(env_var: str, default_subdir: str) -> Path:
    """Get XDG directory respecting environment variable override.

    Args:
        env_var: XDG environment variable name (e.g., "XDG_CONFIG_HOME").
        default_subdir: Default subdirectory under home (e.g., ".config").

    Returns:
        Path to the application-specific directory.
    """
    base = os.environ.get(env_var)
    if base:
        return Path(base) / APP_NAME
    return Path.home() / default_subdir / APP_NAME


def get_config_dir() -> Path:
    """Get the configuration directory path.

    Returns:
        Path to ~/.config/modctl/ (or XDG_CONFIG_HOME/modctl/).
    """
    return _get_xdg_dir("XDG_CONFIG_HOME", ".config")


def get_state_dir() -> Path:
    """Get the state directory path.

    State data includes the mod manifest, which must persist between runs
    but is derived from the mods folder rather than configured.

    Returns:
        Path to ~/.local/state/modctl/ (or XDG_STATE_HOME/modctl/).
    """
    return _get_xdg_dir("XDG_STATE_HOME", ".local/state")


def get_cache_dir() -> Path:
    """Get the cache directory path.

    Returns:
        Path to ~/.cache/modctl/ (or XDG_CACHE_HOME/modctl/).
    """
    return _get_xdg_dir("XDG_CACHE_HOME", ".cache")


def get_config_path() -> Path:
    """Get the application config file path.

    Returns:
        Path to ~/.config/modctl/config.toml.
    """
    return get_config_dir() / "config.toml"


def get_manifest_path() -> Path:
    """Get the default manifest file path.

    Returns:
        Path to ~/.local/state/modctl/mod_manifest.json.
    """
    return get_state_dir() / MANIFEST_FILENAME


def get_catalog_cache_path() -> Path:
    """Get the cached catalog file path.

    Returns:
        Path to ~/.cache/modctl/mods.json.
    """
    return get_cache_dir() / "mods.json"


def get_default_mods_dir() -> Path:
    """Guess the game's user mods folder.

    Uses %LOCALAPPDATA% on Windows, otherwise the equivalent location
    under ~/.local/share.

    Returns:
        Path to the mods folder (not guaranteed to exist).
    """
    local_app_data = os.environ.get("LOCALAPPDATA")
    if local_app_data:
        return Path(local_app_data) / "BeamNG" / "BeamNG.drive" / "current" / "mods"
    return Path.home() / ".local" / "share" / "BeamNG.drive" / "current" / "mods"

