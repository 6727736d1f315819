"""Catalog models for available mods.

The catalog is a JSON list published remotely (``mods.json``). Each entry
describes one mod: how to recognise its archive on disk and where newer
releases come from. Keys use the published camelCase names.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Annotated, Any, Literal

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr, ValidationError

logger = logging.getLogger(__name__)

ModCategory = Literal["core", "map", "vehicle"]
ModState = Literal["Public", "Beta"]


@dataclass(frozen=True, slots=True)
class CompiledPattern:
    """Result of compiling an identifying pattern.

    Exactly one of ``regex`` and ``error`` is set.

    Attributes:
        source: Pattern text as published in the catalog.
        regex: Case-insensitive compiled expression, if compilation worked.
        error: Compiler message, if it did not.
    """

    source: str
    regex: re.Pattern[str] | None = None
    error: str | None = None

    @property
    def is_valid(self) -> bool:
        """Check if the pattern compiled."""
        return self.regex is not None

    def matches(self, text: str) -> bool:
        """Search the pattern in ``text``; invalid patterns never match."""
        if self.regex is None:
            return False
        return self.regex.search(text) is not None


def compile_pattern(source: str) -> CompiledPattern:
    """Compile an identifying pattern without raising.

    Args:
        source: Regular expression text.

    Returns:
        CompiledPattern carrying either the regex or the error message.
    """
    try:
        return CompiledPattern(source=source, regex=re.compile(source, re.IGNORECASE))
    except re.error as e:
        return CompiledPattern(source=source, error=str(e))


class ModDescriptor(BaseModel):
    """One entry of the mod catalog.

    Attributes:
        id: Unique mod identifier (also the manifest key).
        name: Display name.
        description: Short description.
        identifying_pattern: Regex recognising the mod's archive filenames.
        version: Static latest version for direct-download mods.
        direct_download: Static download URL for direct-download mods.
        github_repo: ``owner/repo`` whose latest release is the mod's latest.
        image_url: Preview image.
        category: Catalog grouping.
        state: Release channel.
    """

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    id: Annotated[str, Field(min_length=1, description="Unique mod identifier")]
    name: Annotated[str, Field(description="Display name")]
    description: Annotated[str, Field(description="Short description")] = ""
    identifying_pattern: Annotated[
        str | None,
        Field(alias="assetPattern", description="Regex matching archive filenames"),
    ] = None
    version: Annotated[str | None, Field(description="Static latest version")] = None
    direct_download: Annotated[
        str | None,
        Field(alias="directDownload", description="Static download URL"),
    ] = None
    github_repo: Annotated[
        str | None,
        Field(alias="githubRepo", description="GitHub owner/repo for releases"),
    ] = None
    image_url: Annotated[str | None, Field(alias="imageUrl")] = None
    category: ModCategory | None = None
    state: ModState | None = None

    _compiled: CompiledPattern | None = PrivateAttr(default=None)

    def model_post_init(self, __context: Any) -> None:
        """Compile the identifying pattern once, at load time."""
        if self.identifying_pattern:
            self._compiled = compile_pattern(self.identifying_pattern)

    @property
    def pattern(self) -> CompiledPattern | None:
        """Compiled identifying pattern, or None if the entry has none."""
        return self._compiled

    @property
    def pattern_length(self) -> int:
        """Length of the pattern text (0 without a pattern)."""
        return len(self.identifying_pattern or "")

    @property
    def has_static_release(self) -> bool:
        """Check if the entry pins a version and a direct download."""
        return bool(self.version and self.direct_download)


def parse_catalog(entries: Iterable[Any]) -> tuple[ModDescriptor, ...]:
    """Validate raw catalog entries.

    Invalid entries and duplicate ids are logged and skipped so that one
    broken record does not hide the rest of the catalog.

    Args:
        entries: Decoded JSON items.

    Returns:
        Descriptors in catalog order.
    """
    descriptors: list[ModDescriptor] = []
    seen: set[str] = set()

    for position, raw in enumerate(entries):
        try:
            descriptor = ModDescriptor.model_validate(raw)
        except ValidationError as e:
            logger.warning("Skipping invalid catalog entry #%d: %s", position, e)
            continue

        if descriptor.id in seen:
            logger.warning("Skipping duplicate catalog id: %s", descriptor.id)
            continue

        pattern = descriptor.pattern
        if pattern is not None and not pattern.is_valid:
            logger.error(
                "Invalid identifying pattern for mod %s (%r): %s",
                descriptor.id,
                pattern.source,
                pattern.error,
            )

        seen.add(descriptor.id)
        descriptors.append(descriptor)

    return tuple(descriptors)
