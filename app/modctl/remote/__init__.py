"""Remote catalog, release and download access."""

from modctl.remote.catalog import CatalogError, CatalogLoad, fetch_catalog, read_cached_catalog
from modctl.remote.http import HttpClient, RemoteError
from modctl.remote.releases import ReleaseResolver, parse_github_release

__all__ = [
    "CatalogError",
    "CatalogLoad",
    "HttpClient",
    "ReleaseResolver",
    "RemoteError",
    "fetch_catalog",
    "parse_github_release",
    "read_cached_catalog",
]
