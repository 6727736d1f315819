"""Manifest reconciliation against the mods folder.

Merges a scan of the mods folder into the stored manifest. The archive
filename is the source of truth: entries whose file is gone are dropped,
versions are re-derived from filenames, and untracked archives are
assigned to a catalog mod (or to themselves) with a quality-score
tie-break when two archives compete for one id.

The functions here are pure; the input manifest is never modified.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from modctl.core.extract import extract_version_label
from modctl.core.matcher import match_descriptor
from modctl.core.quality import score_version
from modctl.models.catalog import ModDescriptor
from modctl.models.manifest import InstalledEntry, Manifest

logger = logging.getLogger(__name__)


@dataclass(frozen=True, slots=True)
class ReconcileResult:
    """Outcome of one reconciliation pass.

    Attributes:
        manifest: The reconciled manifest.
        changed: True if any id or entry differs from the input manifest.
        pruned: Ids removed because their archive is gone or is owned
            by another id.
        refreshed: Ids whose version was re-derived from the filename.
        added: Ids assigned (or reassigned) to a new archive.
        dropped: Archives left untracked after losing a tie-break.
    """

    manifest: Manifest
    changed: bool
    pruned: tuple[str, ...] = ()
    refreshed: tuple[str, ...] = ()
    added: tuple[str, ...] = ()
    dropped: tuple[str, ...] = ()

    def to_dict(self) -> dict[str, object]:
        """Convert to dictionary for JSON serialization."""
        return {
            "changed": self.changed,
            "pruned": list(self.pruned),
            "refreshed": list(self.refreshed),
            "added": list(self.added),
            "dropped": list(self.dropped),
        }


def resolve_mod_id(filename: str, catalog: Sequence[ModDescriptor]) -> str:
    """Pick the manifest id for an untracked archive.

    Returns:
        The matching catalog id, or the filename itself.
    """
    descriptor = match_descriptor(filename, catalog)
    return descriptor.id if descriptor is not None else filename


def _owner_rank(
    mod_id: str, entry: InstalledEntry, catalog_ids: set[str]
) -> tuple[bool, int, str]:
    # Catalog ids first, then the better version score, then the smaller id
    return (mod_id not in catalog_ids, -score_version(entry.version), mod_id)


def reconcile(
    manifest: Manifest,
    on_disk: Iterable[str],
    catalog: Sequence[ModDescriptor],
) -> ReconcileResult:
    """Merge the mods folder listing into the manifest.

    Steps:
    1. Prune entries whose archive is not on disk.
    2. Refresh versions of archives already tracked. If the stored
       manifest lists one archive under several ids, one owner is kept
       (a catalog id, then the better score, then the smaller id) and the
       others are reported as pruned.
    3. Assign untracked archives (sorted by name) to an id. On collision
       the newcomer wins if its version scores at least as high, except
       that an entry carried over from the input manifest keeps a tie.

    Running it twice on the same folder and catalog gives ``changed=False``
    the second time and an identical manifest.

    Args:
        manifest: Current manifest.
        on_disk: Archive filenames in the mods folder (duplicates ignored).
        catalog: Catalog entries used to recognise archives.

    Returns:
        ReconcileResult with the new manifest and what changed.

    Raises:
        ManifestInvariantError: If two ids end up on one archive.
    """
    files = set(on_disk)
    entries: dict[str, InstalledEntry] = {}
    pruned: list[str] = []
    refreshed: list[str] = []
    added: list[str] = []
    dropped: list[str] = []

    # 1. Prune, 2. refresh
    for mod_id, entry in manifest.items():
        if entry.filename not in files:
            logger.info("Removing %s - archive %s no longer exists", mod_id, entry.filename)
            pruned.append(mod_id)
            continue

        version = extract_version_label(entry.filename)
        if version != entry.version:
            logger.info("Refreshing %s version %s -> %s", mod_id, entry.version, version)
            entry = InstalledEntry(version=version, filename=entry.filename)
            refreshed.append(mod_id)
        entries[mod_id] = entry

    # Stored manifests may list one archive under two ids
    catalog_ids = {descriptor.id for descriptor in catalog}
    owners: dict[str, list[str]] = {}
    for mod_id, entry in entries.items():
        owners.setdefault(entry.filename, []).append(mod_id)

    for filename, claimants in owners.items():
        if len(claimants) < 2:
            continue
        keep = min(
            claimants,
            key=lambda mod_id: _owner_rank(mod_id, entries[mod_id], catalog_ids),
        )
        for mod_id in claimants:
            if mod_id == keep:
                continue
            logger.info("Removing %s - archive %s belongs to %s", mod_id, filename, keep)
            del entries[mod_id]
            pruned.append(mod_id)
            if mod_id in refreshed:
                refreshed.remove(mod_id)

    # 3. Assign untracked archives
    tracked = {entry.filename for entry in entries.values()}
    assigned_this_pass: set[str] = set()

    for filename in sorted(files - tracked):
        version = extract_version_label(filename)
        mod_id = resolve_mod_id(filename, catalog)
        existing = entries.get(mod_id)

        if existing is not None:
            new_score = score_version(version)
            current_score = score_version(existing.version)
            wins = new_score > current_score or (
                new_score == current_score and mod_id in assigned_this_pass
            )
            if not wins:
                logger.info(
                    "Keeping %s for %s; %s scores %d vs %d",
                    existing.filename,
                    mod_id,
                    filename,
                    new_score,
                    current_score,
                )
                dropped.append(filename)
                continue
            logger.info("Replacing %s with %s for %s", existing.filename, filename, mod_id)
            dropped.append(existing.filename)

        logger.info("Adding %s as %s (version %s)", filename, mod_id, version)
        entries[mod_id] = InstalledEntry(version=version, filename=filename)
        assigned_this_pass.add(mod_id)
        if mod_id not in added:
            added.append(mod_id)

    result_manifest = Manifest(entries)
    result_manifest.check_unique_filenames()

    return ReconcileResult(
        manifest=result_manifest,
        changed=result_manifest != manifest,
        pruned=tuple(pruned),
        refreshed=tuple(refreshed),
        added=tuple(added),
        dropped=tuple(dropped),
    )
