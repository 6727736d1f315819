"""Ownership of the in-memory manifest.

ModLibrary is the only writer of the manifest. Reconciliation passes and
single-entry changes (after an install or a removal) are serialized
through it: a refresh requested while another pass is running is
coalesced into one extra pass of the running caller instead of running
interleaved. A pass commits only after the manifest has been saved, so a
failed pass leaves the previous manifest in effect.
"""

from __future__ import annotations

import logging
import threading
from collections.abc import Sequence
from pathlib import Path

from modctl.core.manifest import load_manifest_or_empty, save_manifest
from modctl.core.reconcile import ReconcileResult, reconcile
from modctl.models.catalog import ModDescriptor
from modctl.models.manifest import InstalledEntry, Manifest
from modctl.scanners.base import Scanner

logger = logging.getLogger(__name__)


class ModLibrary:
    """Single owner of the manifest for one mods folder.

    Attributes:
        scanner: Scanner listing the mods folder.
        manifest_path: Where the manifest is persisted.

    Example:
        >>> library = ModLibrary(ZipFolderScanner(mods_dir), get_manifest_path())
        >>> result = library.refresh()
        >>> for mod_id, entry in library.manifest.items():
        ...     print(mod_id, entry.version)
    """

    def __init__(
        self,
        scanner: Scanner,
        manifest_path: Path,
        catalog: Sequence[ModDescriptor] = (),
        manifest: Manifest | None = None,
    ) -> None:
        """Initialize the library.

        Args:
            scanner: Scanner listing the mods folder.
            manifest_path: Manifest file location.
            catalog: Catalog used to recognise archives.
            manifest: Starting manifest. If None, it is loaded from
                ``manifest_path`` (missing or corrupt files start empty).
        """
        self.scanner = scanner
        self.manifest_path = manifest_path
        self._catalog: tuple[ModDescriptor, ...] = tuple(catalog)
        self._manifest = manifest if manifest is not None else load_manifest_or_empty(manifest_path)
        self._last_result: ReconcileResult | None = None

        # Held for every read-modify-write of the manifest
        self._writer = threading.Lock()
        # Guards _running/_pending
        self._state = threading.Lock()
        self._running = False
        self._pending = False

    @property
    def manifest(self) -> Manifest:
        """Current committed manifest snapshot."""
        return self._manifest

    @property
    def catalog(self) -> tuple[ModDescriptor, ...]:
        """Catalog used by the next pass."""
        return self._catalog

    @property
    def last_result(self) -> ReconcileResult | None:
        """Result of the most recent completed pass."""
        return self._last_result

    def refresh(self) -> ReconcileResult | None:
        """Scan the mods folder and reconcile the manifest.

        If a pass is already running, the request is folded into it (the
        running pass repeats once more) and None is returned.

        Returns:
            ReconcileResult of the final pass, or None if coalesced.

        Raises:
            ScanError: If the mods folder cannot be read. The previous
                manifest stays in effect.
            ManifestError: If the manifest cannot be saved. The previous
                manifest stays in effect.
        """
        with self._state:
            if self._running:
                logger.debug("Reconciliation already running, coalescing trigger")
                self._pending = True
                return None
            self._running = True

        try:
            while True:
                with self._state:
                    self._pending = False
                result = self._run_pass()
                with self._state:
                    if not self._pending:
                        self._running = False
                        return result
        except BaseException:
            with self._state:
                self._running = False
                self._pending = False
            raise

    def _run_pass(self) -> ReconcileResult:
        files = self.scanner.scan_set()
        with self._writer:
            result = reconcile(self._manifest, files, self._catalog)
            if result.changed:
                save_manifest(result.manifest, self.manifest_path)
                self._manifest = result.manifest
                logger.info(
                    "Manifest changed: %d pruned, %d refreshed, %d added",
                    len(result.pruned),
                    len(result.refreshed),
                    len(result.added),
                )
            else:
                logger.debug("No changes detected - manifest is up to date")
        self._last_result = result
        return result

    def _commit(self, manifest: Manifest) -> None:
        save_manifest(manifest, self.manifest_path)
        self._manifest = manifest

    def record_install(self, mod_id: str, version: str, filename: str) -> ReconcileResult | None:
        """Record a freshly installed archive, then reconcile.

        Any other id that claimed the same archive gives it up.

        Args:
            mod_id: Catalog id of the installed mod.
            version: Installed version (re-derived from the filename by
                the following pass).
            filename: Final archive name reported by the installer.

        Returns:
            ReconcileResult of the follow-up pass, or None if coalesced.
        """
        with self._writer:
            manifest = self._manifest
            previous_owner = manifest.find_by_filename(filename)
            if previous_owner is not None and previous_owner != mod_id:
                manifest = manifest.without_entry(previous_owner)
            self._commit(manifest.with_entry(mod_id, InstalledEntry(version=version, filename=filename)))
        logger.info("Recorded install of %s as %s", mod_id, filename)
        return self.refresh()

    def record_removal(self, mod_id: str) -> ReconcileResult | None:
        """Forget a removed mod, then reconcile.

        Args:
            mod_id: Id of the removed mod.

        Returns:
            ReconcileResult of the follow-up pass, or None if coalesced.
        """
        with self._writer:
            self._commit(self._manifest.without_entry(mod_id))
        logger.info("Recorded removal of %s", mod_id)
        return self.refresh()
