"""Update detection for catalog mods.

Compares each catalog entry's latest remote release with the installed
entry from the manifest. Remote lookups are injected as a callable so the
detector itself stays free of network code.
"""

from __future__ import annotations

import functools
import logging
from collections.abc import Callable, Sequence

from modctl.core.version import UNKNOWN_VERSION, is_newer
from modctl.models.catalog import ModDescriptor
from modctl.models.manifest import InstalledEntry, Manifest
from modctl.models.update import RemoteLookup, UpdateCandidate, UpdateReport

logger = logging.getLogger(__name__)

RemoteLookupFn = Callable[[ModDescriptor], RemoteLookup]


def _newest_first(left: InstalledEntry, right: InstalledEntry) -> int:
    # An unknown version ranks below every known one
    left_known = left.version != UNKNOWN_VERSION
    right_known = right.version != UNKNOWN_VERSION
    if left_known != right_known:
        return -1 if left_known else 1
    if is_newer(left.version, right.version) and not is_newer(right.version, left.version):
        return -1
    if is_newer(right.version, left.version) and not is_newer(left.version, right.version):
        return 1
    return (left.filename > right.filename) - (left.filename < right.filename)


def find_installed(descriptor: ModDescriptor, manifest: Manifest) -> InstalledEntry | None:
    """Find the installed entry for a catalog mod.

    The entry stored under the mod's own id wins. Otherwise every entry
    whose filename matches the identifying pattern is a candidate; the one
    with the newest version is returned, filename breaking remaining ties.

    Args:
        descriptor: Catalog entry.
        manifest: Current manifest.

    Returns:
        The installed entry, or None if the mod is not installed.
    """
    direct = manifest.get(descriptor.id)
    if direct is not None:
        return direct

    pattern = descriptor.pattern
    if pattern is None or not pattern.is_valid:
        return None

    matches = [entry for entry in manifest.values() if pattern.matches(entry.filename)]
    if not matches:
        return None
    return sorted(matches, key=functools.cmp_to_key(_newest_first))[0]


def detect_updates(
    catalog: Sequence[ModDescriptor],
    manifest: Manifest,
    lookup: RemoteLookupFn,
    include_uninstalled: bool = False,
) -> UpdateReport:
    """Compute pending updates for the catalog.

    A failing lookup (an exception or a failed RemoteLookup) only skips
    that one mod; the failure is collected in the report instead of being
    raised.

    Args:
        catalog: Catalog entries to check.
        manifest: Current manifest.
        lookup: Callable returning the remote release info for a mod.
        include_uninstalled: Also offer mods that are not installed yet.

    Returns:
        UpdateReport with candidates in catalog order.
    """
    candidates: list[UpdateCandidate] = []
    failures: dict[str, str] = {}

    for descriptor in catalog:
        try:
            result = lookup(descriptor)
        except Exception as e:  # noqa: BLE001
            logger.debug("Remote lookup raised for %s: %s", descriptor.id, e)
            failures[descriptor.id] = str(e)
            continue

        if not result.succeeded:
            logger.debug("Remote lookup failed for %s: %s", descriptor.id, result.error)
            failures[descriptor.id] = result.error or "lookup failed"
            continue

        release = result.release
        if release is None or not release.is_installable:
            continue

        # is_installable guarantees both are set
        remote_version = release.version or ""
        download_url = release.download_url or ""

        installed = find_installed(descriptor, manifest)
        if installed is None:
            if not include_uninstalled:
                continue
        elif not is_newer(remote_version, installed.version):
            continue

        candidates.append(
            UpdateCandidate(
                mod_id=descriptor.id,
                new_version=remote_version,
                download_url=download_url,
                installed_version=installed.version if installed else None,
            )
        )

    return UpdateReport(
        candidates=tuple(candidates),
        failures=failures,
        checked=len(catalog),
    )
