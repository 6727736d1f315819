"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

from collections.abc import Callable, Iterator
from pathlib import Path
from unittest.mock import patch

import pytest
from modctl.core.config import AppConfig, save_config
from modctl.models.catalog import ModDescriptor, parse_catalog
from modctl.remote.catalog import CatalogLoad


@pytest.fixture
def raw_catalog() -> list[dict[str, object]]:
    """Catalog entries as published in mods.json."""
    return [
        {
            "id": "rls_career_overhaul",
            "name": "RLS Career Overhaul",
            "description": "Career mode overhaul",
            "assetPattern": "rls_career_overhaul.*\\.zip",
            "githubRepo": "RLS-Modding/rls_career_overhaul",
            "category": "core",
            "state": "Public",
        },
        {
            "id": "rls_map",
            "name": "RLS Map",
            "description": "Custom map",
            "assetPattern": "rls_map",
            "version": "1.4",
            "directDownload": "https://example.com/files/rls_map_1.4.zip",
            "category": "map",
        },
        {
            "id": "rls_traffic",
            "name": "Traffic Pack",
            "category": "vehicle",
        },
    ]


@pytest.fixture
def catalog(raw_catalog: list[dict[str, object]]) -> tuple[ModDescriptor, ...]:
    """Validated catalog descriptors."""
    return parse_catalog(raw_catalog)


@pytest.fixture
def mods_dir(tmp_path: Path) -> Path:
    """Empty mods folder."""
    path = tmp_path / "mods"
    path.mkdir()
    return path


@pytest.fixture
def touch() -> Callable[..., None]:
    """Return a helper creating empty archive files in a folder."""

    def _touch(folder: Path, *names: str) -> None:
        for name in names:
            (folder / name).write_bytes(b"")

    return _touch


@pytest.fixture
def cli_env(
    tmp_path: Path,
    mods_dir: Path,
    catalog: tuple[ModDescriptor, ...],
    monkeypatch: pytest.MonkeyPatch,
) -> Iterator[Path]:
    """Isolate CLI runs: XDG folders under tmp_path, a config pointing at
    ``mods_dir`` and a catalog fetch that never touches the network.

    Yields:
        The mods folder.
    """
    for var in ("XDG_CONFIG_HOME", "XDG_STATE_HOME", "XDG_CACHE_HOME"):
        monkeypatch.setenv(var, str(tmp_path / var.lower()))
    monkeypatch.delenv("MODCTL_CATALOG_URL", raising=False)
    save_config(AppConfig(mods_dir=mods_dir))

    loaded = CatalogLoad(descriptors=catalog, origin="https://example.com/mods.json")
    with patch("modctl.cli.types.fetch_catalog", return_value=loaded):
        yield mods_dir
