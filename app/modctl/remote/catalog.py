"""Catalog loading.

The catalog is fetched from the configured URL. A successful fetch is
cached locally; when the remote is unreachable the cached copy is used
instead so the CLI keeps working offline.
"""

from __future__ import annotations

import json
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from modctl.core.paths import get_catalog_cache_path
from modctl.models.catalog import ModDescriptor, parse_catalog
from modctl.remote.http import HttpClient, RemoteError

logger = logging.getLogger(__name__)


class CatalogError(RemoteError):
    """Raised when no catalog could be loaded at all."""


@dataclass(frozen=True, slots=True)
class CatalogLoad:
    """A loaded catalog and where it came from.

    Attributes:
        descriptors: Validated catalog entries.
        origin: URL or cache path the catalog was read from.
        from_cache: True if the remote fetch failed and the cache was used.
    """

    descriptors: tuple[ModDescriptor, ...]
    origin: str
    from_cache: bool = False


def _require_list(data: Any, origin: str) -> list[Any]:
    if not isinstance(data, list):
        raise CatalogError(f"Catalog from {origin} is not a JSON list")
    return data


def read_cached_catalog(path: Path | None = None) -> tuple[ModDescriptor, ...]:
    """Read the cached catalog.

    Raises:
        CatalogError: If there is no usable cached copy.
    """
    cache_path = path or get_catalog_cache_path()
    try:
        data = json.loads(cache_path.read_text(encoding="utf-8"))
    except FileNotFoundError as e:
        raise CatalogError(f"No cached catalog at {cache_path}") from e
    except (OSError, json.JSONDecodeError) as e:
        raise CatalogError(f"Cached catalog is unreadable: {e}") from e
    return parse_catalog(_require_list(data, str(cache_path)))


def _write_cache(data: list[Any], path: Path) -> None:
    try:
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(json.dumps(data, indent=2), encoding="utf-8")
    except OSError as e:
        logger.warning("Failed to cache catalog at %s: %s", path, e)


def fetch_catalog(
    client: HttpClient,
    url: str,
    cache_path: Path | None = None,
) -> CatalogLoad:
    """Load the catalog, preferring the remote copy.

    Args:
        client: HTTP client.
        url: Catalog URL.
        cache_path: Cache location. If None, uses the default path.

    Returns:
        CatalogLoad with the descriptors and their origin.

    Raises:
        CatalogError: If neither the remote nor the cache is usable.
    """
    path = cache_path or get_catalog_cache_path()

    try:
        data = _require_list(client.get_json(url), url)
    except RemoteError as e:
        logger.warning("Failed to load catalog from %s, using cache: %s", url, e)
        try:
            descriptors = read_cached_catalog(path)
        except CatalogError as cache_error:
            raise CatalogError(f"Could not load catalog: {e}; {cache_error}") from e
        return CatalogLoad(descriptors=descriptors, origin=str(path), from_cache=True)

    _write_cache(data, path)
    descriptors = parse_catalog(data)
    logger.info("Loaded %d mods from %s", len(descriptors), url)
    return CatalogLoad(descriptors=descriptors, origin=url)
