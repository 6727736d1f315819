"""Application configuration.

Configuration is stored in ~/.config/modctl/config.toml and covers the
mods folder location and the remote catalog settings. A missing file
means defaults; ``MODCTL_CATALOG_URL`` overrides the catalog URL at
runtime.
"""

import logging
import os
import tomllib
from pathlib import Path
from typing import Annotated

import tomli_w
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from modctl.core.paths import get_config_path, get_default_mods_dir

logger = logging.getLogger(__name__)

CATALOG_URL_ENV = "MODCTL_CATALOG_URL"

DEFAULT_CATALOG_URL = "https://raw.githubusercontent.com/RLS-Modding/rls-installer/main/public/mods.json"

DEFAULT_REQUEST_TIMEOUT = 15


class AppConfig(BaseModel):
    """modctl configuration.

    Attributes:
        mods_dir: Mods folder to manage. If None, the game's default is used.
        catalog_url: URL of the remote mods.json catalog.
        github_token: Optional token for the GitHub releases API.
        request_timeout: HTTP timeout in seconds (1-300).
    """

    model_config = ConfigDict(extra="forbid")

    mods_dir: Annotated[
        Path | None,
        Field(description="Mods folder (None = detect game default)"),
    ] = None
    catalog_url: Annotated[
        str | None,
        Field(description="Remote catalog URL (None = built-in default)"),
    ] = None
    github_token: Annotated[
        str | None,
        Field(description="GitHub API token for release lookups"),
    ] = None
    request_timeout: Annotated[
        int,
        Field(ge=1, le=300, description="HTTP timeout in seconds (1-300)"),
    ] = DEFAULT_REQUEST_TIMEOUT

    @property
    def effective_mods_dir(self) -> Path:
        """Get the configured mods folder, or the detected default."""
        if self.mods_dir is not None:
            return self.mods_dir.expanduser()
        return get_default_mods_dir()

    @property
    def effective_catalog_url(self) -> str:
        """Get the catalog URL, honouring the environment override."""
        override = os.environ.get(CATALOG_URL_ENV)
        if override:
            return override
        return self.catalog_url or DEFAULT_CATALOG_URL


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigParseError(ConfigError):
    """Raised when the config file cannot be parsed."""


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a TOML file.

    Args:
        path: Path to the config file. If None, uses the default path.

    Returns:
        Validated AppConfig; defaults if the file does not exist.

    Raises:
        ConfigParseError: If the TOML syntax is invalid.
        ConfigError: If the file cannot be read or fails validation.
    """
    config_path = path or get_config_path()

    if not config_path.exists():
        logger.debug("No config at %s, using defaults", config_path)
        return AppConfig()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigParseError(f"Invalid TOML syntax: {e}") from e
    except OSError as e:
        raise ConfigError(f"Failed to read config: {e}") from e

    try:
        return AppConfig.model_validate(data)
    except (ValueError, ValidationError) as e:
        raise ConfigError(f"Invalid config content: {e}") from e


def save_config(config: AppConfig, path: Path | None = None) -> Path:
    """Save configuration to a TOML file.

    The file is written atomically by first writing to a temporary file
    and then using os.replace() for atomic rename.

    Args:
        config: The AppConfig object to save.
        path: Path to save the config. If None, uses the default path.

    Returns:
        Path where the config was saved.

    Raises:
        ConfigError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    config_path = path or get_config_path()
    config_path.parent.mkdir(parents=True, exist_ok=True)

    data = _config_to_dict(config)

    tmp_path: Path | None = None
    try:
        with NamedTemporaryFile(
            mode="wb",
            dir=config_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            tomli_w.dump(data, f)
        os.replace(str(tmp_path), str(config_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ConfigError(f"Failed to write config: {e}") from e

    return config_path


def _config_to_dict(config: AppConfig) -> dict[str, object]:
    """Convert AppConfig to a dictionary for TOML serialization.

    TOML has no null, so unset values are left out.
    """
    result: dict[str, object] = {}

    if config.mods_dir is not None:
        result["mods_dir"] = str(config.mods_dir)

    if config.catalog_url is not None:
        result["catalog_url"] = config.catalog_url

    if config.github_token is not None:
        result["github_token"] = config.github_token

    if config.request_timeout != DEFAULT_REQUEST_TIMEOUT:
        result["request_timeout"] = config.request_timeout

    return result
