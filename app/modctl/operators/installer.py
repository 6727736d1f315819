"""Mod archive installation and removal.

Downloads archives into the mods folder and deletes old ones. The
installer only moves bytes; it reports the final archive name back so the
library can record it and reconcile.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from pathlib import Path
from urllib.parse import unquote, urlsplit

import requests

from modctl.models.catalog import ModDescriptor
from modctl.models.update import UpdateCandidate
from modctl.remote.http import HttpClient, RemoteError

logger = logging.getLogger(__name__)

DOWNLOAD_CHUNK_SIZE = 131072

_UNSAFE_FILENAME_CHARS = re.compile(r'[<>:"/\\|?*]')
_CONTENT_DISPOSITION_FILENAME = re.compile(r'filename="([^"]*)"')

# Called with (downloaded_bytes, total_bytes or None)
ProgressCallback = Callable[[int, int | None], None]


class InstallError(Exception):
    """Raised when an archive cannot be downloaded or written."""


@dataclass(frozen=True, slots=True)
class DeleteResult:
    """Result of deleting one archive.

    Attributes:
        path: Archive path that was operated on.
        success: Whether the archive is gone afterwards.
        message: What happened.
        dry_run: Whether this was a dry-run (no actual deletion).
    """

    path: str
    success: bool
    message: str
    dry_run: bool = False


@dataclass(frozen=True, slots=True)
class InstallResult:
    """Result of installing one mod.

    Attributes:
        mod_id: Catalog id of the mod.
        filename: Final archive name in the mods folder.
        version: Version that was installed.
        removed: Old archives deleted before the download.
    """

    mod_id: str
    filename: str
    version: str
    removed: tuple[DeleteResult, ...] = ()


def sanitize_filename(name: str) -> str:
    """Replace characters that are not allowed in Windows filenames."""
    return _UNSAFE_FILENAME_CHARS.sub("_", name)


def guess_filename(url: str, mod_id: str, version: str | None) -> str:
    """Guess the archive name from the download URL.

    Falls back to ``<mod_id>_<version>.zip`` when the URL path has no
    final component.
    """
    last = unquote(urlsplit(url).path.rsplit("/", 1)[-1])
    if not last:
        last = f"{mod_id}_{version or 'latest'}.zip"
    return sanitize_filename(last)


def filename_from_content_disposition(header: str | None) -> str | None:
    """Extract ``filename="..."`` from a Content-Disposition header."""
    if not header:
        return None
    match = _CONTENT_DISPOSITION_FILENAME.search(header)
    if match is None or not match.group(1):
        return None
    return sanitize_filename(match.group(1))


class ModInstaller:
    """Downloads and removes mod archives in a mods folder.

    Args:
        mods_dir: Mods folder.
        client: HTTP client used for downloads.
        dry_run: If True, report deletions without performing them.
    """

    def __init__(self, mods_dir: Path, client: HttpClient, dry_run: bool = False) -> None:
        self._mods_dir = mods_dir
        self._client = client
        self._dry_run = dry_run

    @property
    def mods_dir(self) -> Path:
        """Mods folder this installer writes to."""
        return self._mods_dir

    def delete(self, filename: str) -> DeleteResult:
        """Delete one archive from the mods folder.

        An archive that is already gone counts as deleted. A permission
        error also counts as success when the file has disappeared anyway.

        Args:
            filename: Archive name inside the mods folder.

        Returns:
            DeleteResult describing the outcome.
        """
        target = self._mods_dir / filename

        if self._dry_run:
            logger.info("Dry-run: would delete %s", target)
            return DeleteResult(path=str(target), success=True, message="dry-run", dry_run=True)

        if not target.exists():
            return DeleteResult(path=str(target), success=True, message="did not exist")

        try:
            target.unlink()
        except OSError as e:
            if not target.exists():
                return DeleteResult(path=str(target), success=True, message="already deleted")
            logger.warning("Failed to delete %s: %s", target, e)
            return DeleteResult(path=str(target), success=False, message=str(e))

        logger.info("Deleted %s", target)
        return DeleteResult(path=str(target), success=True, message="deleted")

    def remove_stale(
        self,
        descriptor: ModDescriptor,
        current_filename: str | None,
        on_disk: Iterable[str],
    ) -> tuple[DeleteResult, ...]:
        """Delete the mod's current archive and any other matching archive.

        Every archive matching the mod's identifying pattern is removed
        before a new one is downloaded, so only one version stays in the
        folder.

        Args:
            descriptor: Catalog entry of the mod being installed.
            current_filename: Archive recorded for the mod in the manifest.
            on_disk: Archive names currently in the folder.

        Returns:
            One DeleteResult per archive that was targeted.
        """
        targets: list[str] = []
        if current_filename:
            targets.append(current_filename)

        pattern = descriptor.pattern
        if pattern is not None and pattern.is_valid:
            targets.extend(
                name for name in sorted(on_disk) if pattern.matches(name) and name not in targets
            )

        return tuple(self.delete(name) for name in targets)

    def download(
        self,
        url: str,
        filename: str,
        progress: ProgressCallback | None = None,
    ) -> Path:
        """Stream an archive into the mods folder.

        The server-provided Content-Disposition filename, when present,
        replaces ``filename``.

        Args:
            url: Download URL.
            filename: Name to use when the server does not provide one.
            progress: Optional callback receiving byte counts.

        Returns:
            Path of the written archive.

        Raises:
            InstallError: If the download or the write fails.
        """
        try:
            response = self._client.get(url, stream=True)
        except RemoteError as e:
            raise InstallError(str(e)) from e

        with response:
            server_name = filename_from_content_disposition(
                response.headers.get("content-disposition")
            )
            dest = self._mods_dir / (server_name or filename)
            length = response.headers.get("content-length", "")
            total = int(length) if length.isdigit() else None

            downloaded = 0
            try:
                dest.parent.mkdir(parents=True, exist_ok=True)
                with open(dest, "wb") as f:
                    for chunk in response.iter_content(chunk_size=DOWNLOAD_CHUNK_SIZE):
                        if not chunk:
                            continue
                        f.write(chunk)
                        downloaded += len(chunk)
                        if progress is not None:
                            progress(downloaded, total)
            # RequestException derives from OSError, so it must come first
            except requests.RequestException as e:
                dest.unlink(missing_ok=True)
                raise InstallError(f"Download of {url} interrupted: {e}") from e
            except OSError as e:
                raise InstallError(f"Failed to write {dest}: {e}") from e

        logger.info("Downloaded %s (%d bytes)", dest, downloaded)
        return dest

    def install(
        self,
        candidate: UpdateCandidate,
        descriptor: ModDescriptor,
        current_filename: str | None,
        on_disk: Iterable[str],
        progress: ProgressCallback | None = None,
    ) -> InstallResult:
        """Replace a mod's archives with the candidate's release.

        Args:
            candidate: Release to install.
            descriptor: Catalog entry of the mod.
            current_filename: Archive currently recorded for the mod.
            on_disk: Archive names currently in the folder.
            progress: Optional download progress callback.

        Returns:
            InstallResult with the final archive name.

        Raises:
            InstallError: If the download fails.
        """
        removed = self.remove_stale(descriptor, current_filename, on_disk)
        guessed = guess_filename(candidate.download_url, candidate.mod_id, candidate.new_version)
        path = self.download(candidate.download_url, guessed, progress)
        return InstallResult(
            mod_id=candidate.mod_id,
            filename=path.name,
            version=candidate.new_version,
            removed=removed,
        )
