"""Remote release lookups for catalog mods.

A mod's latest release comes either from its GitHub repository's latest
release (tag name plus first asset) or from the static version and direct
download pinned in the catalog. Lookups never raise: failures come back as
``RemoteLookup.failed`` so update detection can skip the mod.
"""

from __future__ import annotations

import logging
from typing import Any

from modctl.models.catalog import ModDescriptor
from modctl.models.update import RemoteLookup, RemoteRelease
from modctl.remote.http import HttpClient, RemoteError

logger = logging.getLogger(__name__)

GITHUB_API_URL = "https://api.github.com"


def latest_release_url(repo: str) -> str:
    """Build the GitHub API URL for a repository's latest release."""
    return f"{GITHUB_API_URL}/repos/{repo}/releases/latest"


def parse_github_release(data: Any) -> RemoteRelease:
    """Extract tag and first asset URL from a GitHub release payload.

    Raises:
        RemoteError: If the payload has no tag name.
    """
    if not isinstance(data, dict) or not data.get("tag_name"):
        raise RemoteError("Release payload has no tag_name")

    download_url: str | None = None
    assets = data.get("assets") or []
    if isinstance(assets, list) and assets and isinstance(assets[0], dict):
        download_url = assets[0].get("browser_download_url")

    return RemoteRelease(
        version=str(data["tag_name"]),
        download_url=download_url,
        source="github",
    )


class ReleaseResolver:
    """Resolves the latest release for catalog entries.

    Instances are callables usable as the update detector's lookup.

    Args:
        client: HTTP client.
        github_token: Optional token sent to the GitHub API.
    """

    def __init__(self, client: HttpClient, github_token: str | None = None) -> None:
        self._client = client
        self._headers = {"Accept": "application/vnd.github+json"}
        if github_token:
            self._headers["Authorization"] = f"Bearer {github_token}"

    def __call__(self, descriptor: ModDescriptor) -> RemoteLookup:
        return self.resolve(descriptor)

    def resolve(self, descriptor: ModDescriptor) -> RemoteLookup:
        """Look up the latest release of one mod.

        Args:
            descriptor: Catalog entry.

        Returns:
            RemoteLookup with the release, with None if the entry has no
            remote source, or a failure.
        """
        if descriptor.github_repo:
            url = latest_release_url(descriptor.github_repo)
            try:
                release = parse_github_release(self._client.get_json(url, headers=self._headers))
            except RemoteError as e:
                logger.debug("GitHub check failed for %s: %s", descriptor.id, e)
                return RemoteLookup.failed(str(e))
            return RemoteLookup.ok(release)

        if descriptor.has_static_release:
            return RemoteLookup.ok(
                RemoteRelease(
                    version=descriptor.version,
                    download_url=descriptor.direct_download,
                    source="static",
                )
            )

        return RemoteLookup.ok(None)
