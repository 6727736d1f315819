"""Heuristic quality score for version labels.

Only used to decide which of two files keeps a contested mod id during
reconciliation. Update detection never looks at it.
"""

import re

from modctl.core.version import UNKNOWN_VERSION

_PHASE_MARKER = re.compile(r"beta|alpha", re.IGNORECASE)
_YEAR_LIKE = re.compile(r"\d{4}")


def score_version(version: str) -> int:
    """Rank how specific a version label looks (higher is better).

    Args:
        version: Version label produced by the extractor.

    Returns:
        0 for unknown, 3 for dotted versions, 2 for phase or date labels,
        1 for anything else.
    """
    if version == UNKNOWN_VERSION:
        return 0
    if "." in version:
        return 3
    if _PHASE_MARKER.search(version):
        return 2
    if _YEAR_LIKE.search(version):
        return 2
    return 1
