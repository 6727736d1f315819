"""Catalog pattern matching for mod archives.

Maps an archive filename to the catalog entry it most likely belongs to.
When several identifying patterns match, the longest pattern text wins,
on the grounds that it is the most specific.
"""

import logging
from collections.abc import Iterable

from modctl.models.catalog import ModDescriptor

logger = logging.getLogger(__name__)

# Prefix stripped from mod ids before the substring fallback
ID_FALLBACK_PREFIX = "rls_"


def sort_by_specificity(catalog: Iterable[ModDescriptor]) -> list[ModDescriptor]:
    """Order descriptors by descending pattern length.

    Entries without a pattern sort last. The sort is stable, so catalog
    order decides between equally long patterns.
    """
    return sorted(catalog, key=lambda descriptor: descriptor.pattern_length, reverse=True)


def _fallback_fragment(descriptor: ModDescriptor) -> str:
    mod_id = descriptor.id.lower()
    if mod_id.startswith(ID_FALLBACK_PREFIX):
        return mod_id[len(ID_FALLBACK_PREFIX) :]
    return mod_id


def matches_descriptor(filename: str, descriptor: ModDescriptor) -> bool:
    """Check whether ``filename`` belongs to ``descriptor``.

    Descriptors with a pattern are tested case-insensitively against the
    filename. A pattern that failed to compile (logged once when the
    catalog was parsed) is a non-match. Descriptors without a pattern
    match when the filename contains their id (minus the ``rls_`` prefix).

    Args:
        filename: Archive filename.
        descriptor: Catalog entry to test.

    Returns:
        True if the descriptor claims the file.
    """
    pattern = descriptor.pattern
    if pattern is None:
        fragment = _fallback_fragment(descriptor)
        return bool(fragment) and fragment in filename.lower()

    return pattern.matches(filename)


def match_descriptor(filename: str, catalog: Iterable[ModDescriptor]) -> ModDescriptor | None:
    """Find the most specific catalog entry for an archive.

    Args:
        filename: Archive filename.
        catalog: Catalog entries.

    Returns:
        The matching descriptor with the longest pattern, or None.
    """
    for descriptor in sort_by_specificity(catalog):
        if matches_descriptor(filename, descriptor):
            logger.debug("Matched %s to mod %s", filename, descriptor.id)
            return descriptor
    return None
