"""Version extraction from mod archive filenames.

Mod authors name their archives inconsistently, so the version is derived
by an ordered cascade of rules. The cascade is a table: each rule pairs a
compiled pattern with a renderer, and rules are tried in table order
until one matches.
"""

import re
from collections.abc import Callable
from dataclasses import dataclass

from modctl.core.version import UNKNOWN_VERSION

_ARCHIVE_SUFFIX = re.compile(r"\.zip$", re.IGNORECASE)
_NAME_SEPARATORS = re.compile(r"[_-]")
_HAS_DIGIT = re.compile(r"\d")

# Longest trailing segment still accepted as a version by the fallback rule
_MAX_FALLBACK_LENGTH = 15


@dataclass(frozen=True, slots=True)
class ExtractionRule:
    """A single step of the extraction cascade.

    Attributes:
        name: Short rule identifier, used in logs and tests.
        pattern: Compiled pattern searched in the bare filename.
        render: Turns a successful match into the version label.
    """

    name: str
    pattern: re.Pattern[str]
    render: Callable[[re.Match[str]], str]

    def apply(self, name: str) -> str | None:
        """Return the rendered version if the rule matches ``name``."""
        match = self.pattern.search(name)
        if match is None:
            return None
        return self.render(match)


def _group(index: int) -> Callable[[re.Match[str]], str]:
    return lambda match: match.group(index)


def _render_phase(match: re.Match[str]) -> str:
    return f"{match.group(1)}_{match.group(2)}"


EXTRACTION_RULES: tuple[ExtractionRule, ...] = (
    # rls_career_overhaul_2.6.2_hotfix
    ExtractionRule(
        "hotfix",
        re.compile(r"_(\d+(?:\.\d+)+_hotfix)\s*$", re.IGNORECASE),
        _group(1),
    ),
    # some_mod_2.0_beta_2
    ExtractionRule(
        "complex",
        re.compile(r"_(\d+\.\d+(?:[._-](?:beta|alpha|rc)?[._-]?\d+)?)\s*$", re.IGNORECASE),
        lambda match: match.group(1).replace("_", "."),
    ),
    ExtractionRule(
        "v_prefixed",
        re.compile(r"v(\d+(?:[._-]\d+)*)", re.IGNORECASE),
        _group(1),
    ),
    ExtractionRule(
        "semver_suffix",
        re.compile(r"(\d+\.\d+(?:[._]\d+)*)$"),
        _group(0),
    ),
    ExtractionRule(
        "phase",
        re.compile(r"(beta|alpha|rc)[_-]?(\d+)", re.IGNORECASE),
        _render_phase,
    ),
    # Jan_12_2026
    ExtractionRule(
        "date",
        re.compile(r"([a-zA-Z]+_\d{1,2}_\d{4})"),
        _group(0),
    ),
)


def strip_archive_suffix(filename: str) -> str:
    """Remove a trailing ``.zip`` (any case) from a filename."""
    return _ARCHIVE_SUFFIX.sub("", filename)


def _last_segment(name: str) -> str | None:
    last = _NAME_SEPARATORS.split(name)[-1]
    if _HAS_DIGIT.search(last) and len(last) < _MAX_FALLBACK_LENGTH:
        return last
    return None


def extract_version(filename: str) -> str | None:
    """Derive a version label from a mod archive filename.

    Args:
        filename: Bare filename, e.g. "rls_career_overhaul_2.6.2_hotfix.zip".

    Returns:
        The version label, or None when no rule matched.
    """
    name = strip_archive_suffix(filename)
    for rule in EXTRACTION_RULES:
        version = rule.apply(name)
        if version is not None:
            return version
    return _last_segment(name)


def extract_version_label(filename: str) -> str:
    """Like :func:`extract_version` but never empty.

    Returns:
        The extracted label, or ``"Unknown"`` when nothing matched.
    """
    return extract_version(filename) or UNKNOWN_VERSION
