"""Shared types and utilities for CLI commands.

This module provides the helpers every command uses to load
configuration, the catalog and the mod library, turning their errors
into a printed message and exit code 1.
"""

from pathlib import Path

import typer

from modctl.core.config import AppConfig, ConfigError, load_config
from modctl.core.library import ModLibrary
from modctl.core.manifest import ManifestError
from modctl.core.paths import get_manifest_path
from modctl.models.catalog import ModDescriptor
from modctl.remote.catalog import CatalogError, fetch_catalog
from modctl.remote.http import HttpClient
from modctl.scanners.base import ScanError
from modctl.scanners.folder import ZipFolderScanner
from modctl.utils.formatting import print_error, print_warning


def require_config() -> AppConfig:
    """Load the configuration or exit with an error."""
    try:
        return load_config()
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e


def get_client(config: AppConfig) -> HttpClient:
    """Create an HTTP client honouring the configured timeout."""
    return HttpClient(timeout=config.request_timeout)


def require_catalog(config: AppConfig, client: HttpClient) -> tuple[ModDescriptor, ...]:
    """Load the catalog (remote, else cached) or exit with an error."""
    try:
        loaded = fetch_catalog(client, config.effective_catalog_url)
    except CatalogError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    if loaded.from_cache:
        print_warning(f"Catalog unreachable, using cached copy from {loaded.origin}")
    return loaded.descriptors


def optional_catalog(config: AppConfig, client: HttpClient) -> tuple[ModDescriptor, ...] | None:
    """Load the catalog, warning and returning None when it is unavailable."""
    try:
        loaded = fetch_catalog(client, config.effective_catalog_url)
    except CatalogError as e:
        print_warning(f"{e}. Showing the manifest without rescanning.")
        return None

    if loaded.from_cache:
        print_warning(f"Catalog unreachable, using cached copy from {loaded.origin}")
    return loaded.descriptors


def open_library(
    config: AppConfig,
    catalog: tuple[ModDescriptor, ...] = (),
    manifest_path: Path | None = None,
) -> ModLibrary:
    """Create the library for the configured mods folder.

    A missing mods folder scans as empty and is reported with a warning.
    """
    scanner = ZipFolderScanner(config.effective_mods_dir)
    if not scanner.is_available():
        print_warning(f"Mods folder not found: {scanner.root}")
    return ModLibrary(scanner, manifest_path or get_manifest_path(), catalog)


def refresh_library(library: ModLibrary) -> None:
    """Reconcile the library with the mods folder.

    An unreadable mods folder only warns; the last known manifest stays in
    use. A manifest that cannot be saved is an error.
    """
    try:
        library.refresh()
    except ScanError as e:
        print_warning(f"{e}. Showing the last known state.")
    except ManifestError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e
