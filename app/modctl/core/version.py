"""Version tokenizer and comparator.

Version labels taken from mod filenames are loosely structured
("2.6.2_hotfix", "2.0_beta_2", "v1-3", "Jan_12_2026"). This module splits
them into typed, weighted segments and compares them position by
position. The ordering is lexicographic over segment weights, not a real
semantic-version ordering: phase markers sort below numbers and a hotfix
sorts above everything.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum

# Label used when no version could be derived from a filename
UNKNOWN_VERSION = "Unknown"

_SEPARATORS = re.compile(r"[._-]")
_LEADING_DIGITS = re.compile(r"^\d+")


class SegmentKind(Enum):
    """Type of a single version segment."""

    NUMBER = "number"
    HOTFIX = "hotfix"
    BETA = "beta"
    ALPHA = "alpha"
    RC = "rc"
    TEXT = "text"


# Fixed ordering weights for non-numeric segments
_KEYWORD_WEIGHTS: dict[str, tuple[SegmentKind, int]] = {
    "hotfix": (SegmentKind.HOTFIX, 999),
    "beta": (SegmentKind.BETA, -2),
    "alpha": (SegmentKind.ALPHA, -3),
    "rc": (SegmentKind.RC, -1),
}

_TEXT_WEIGHT = -10


@dataclass(frozen=True, slots=True)
class VersionSegment:
    """One typed token of a version label.

    Attributes:
        kind: Segment type.
        weight: Integer ordering weight (the number itself for NUMBER).
    """

    kind: SegmentKind
    weight: int

    @classmethod
    def number(cls, value: int) -> VersionSegment:
        """Create a numeric segment."""
        return cls(SegmentKind.NUMBER, value)


# Implicit value of a segment missing at the end of the shorter label
PADDING_SEGMENT = VersionSegment.number(0)


def classify_segment(piece: str) -> VersionSegment:
    """Classify a single lower-cased piece of a version label.

    A piece starting with a digit run is numeric ("3rc" is 3).

    Args:
        piece: Text between two separators.

    Returns:
        The weighted segment for the piece.
    """
    digits = _LEADING_DIGITS.match(piece)
    if digits:
        return VersionSegment.number(int(digits.group(0)))

    keyword = _KEYWORD_WEIGHTS.get(piece)
    if keyword is not None:
        kind, weight = keyword
        return VersionSegment(kind, weight)

    return VersionSegment(SegmentKind.TEXT, _TEXT_WEIGHT)


def tokenize(version: str) -> tuple[VersionSegment, ...]:
    """Split a version label into weighted segments.

    The label is lower-cased, a single leading "v" is dropped, and the
    rest is split on ".", "_" and "-".

    Args:
        version: Version label, e.g. "v2.0_beta_2".

    Returns:
        Tuple of segments in label order.
    """
    normalized = version.lower()
    if normalized.startswith("v"):
        normalized = normalized[1:]
    return tuple(classify_segment(piece) for piece in _SEPARATORS.split(normalized))


def is_newer(candidate: str, reference: str) -> bool:
    """Check whether ``candidate`` is strictly newer than ``reference``.

    Identical labels are never newer. If exactly one side is the unknown
    label the result is True: an unknown version is always a reason to
    prefer the other one.

    Args:
        candidate: Version label being tested (e.g. a remote release tag).
        reference: Version label to compare against (e.g. installed).

    Returns:
        True if the first differing segment weighs more in ``candidate``.
    """
    if candidate == reference:
        return False
    if UNKNOWN_VERSION in (candidate, reference):
        return True

    left = tokenize(candidate)
    right = tokenize(reference)

    for index in range(max(len(left), len(right))):
        left_segment = left[index] if index < len(left) else PADDING_SEGMENT
        right_segment = right[index] if index < len(right) else PADDING_SEGMENT

        if left_segment.weight > right_segment.weight:
            return True
        if left_segment.weight < right_segment.weight:
            return False

    return False
