"""Manifest models for tracked mods.

The manifest maps each logical mod id to the archive that currently
represents it and the version derived from that archive's filename.
Instances are immutable; every change produces a new Manifest.
"""

from __future__ import annotations

from collections.abc import Iterator, Mapping
from types import MappingProxyType
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field


class ManifestInvariantError(AssertionError):
    """Raised when two mod ids claim the same archive.

    Reconciliation rules make this impossible, so hitting it means a
    logic defect rather than bad input.
    """


class InstalledEntry(BaseModel):
    """A tracked archive.

    Attributes:
        version: Version label derived from the filename.
        filename: Archive name inside the mods folder.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    version: Annotated[str, Field(description="Version label derived from the filename")]
    filename: Annotated[str, Field(min_length=1, description="Archive name in the mods folder")]

    def to_dict(self) -> dict[str, str]:
        """Convert to the persisted representation."""
        return {"version": self.version, "filename": self.filename}


class Manifest(Mapping[str, InstalledEntry]):
    """Immutable mapping from mod id to its installed entry.

    Example:
        >>> entry = InstalledEntry(version="2.6", filename="rls_2.6.zip")
        >>> manifest = Manifest.empty().with_entry("rls_career", entry)
        >>> manifest["rls_career"].version
        '2.6'
    """

    __slots__ = ("_entries",)

    def __init__(self, entries: Mapping[str, InstalledEntry] | None = None) -> None:
        self._entries: Mapping[str, InstalledEntry] = MappingProxyType(dict(entries or {}))

    @classmethod
    def empty(cls) -> Manifest:
        """Create a manifest with no entries."""
        return cls()

    def __getitem__(self, mod_id: str) -> InstalledEntry:
        return self._entries[mod_id]

    def __iter__(self) -> Iterator[str]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Manifest):
            return dict(self._entries) == dict(other._entries)
        return NotImplemented

    def __hash__(self) -> int:
        return hash(frozenset(self._entries.items()))

    def __repr__(self) -> str:
        return f"Manifest({dict(self._entries)!r})"

    @property
    def filenames(self) -> frozenset[str]:
        """All archive names referenced by the manifest."""
        return frozenset(entry.filename for entry in self._entries.values())

    def find_by_filename(self, filename: str) -> str | None:
        """Return the id of the entry backed by ``filename``, if any."""
        for mod_id, entry in self._entries.items():
            if entry.filename == filename:
                return mod_id
        return None

    def with_entry(self, mod_id: str, entry: InstalledEntry) -> Manifest:
        """Return a copy with ``mod_id`` set to ``entry``."""
        entries = dict(self._entries)
        entries[mod_id] = entry
        return Manifest(entries)

    def without_entry(self, mod_id: str) -> Manifest:
        """Return a copy without ``mod_id`` (no-op if absent)."""
        entries = dict(self._entries)
        entries.pop(mod_id, None)
        return Manifest(entries)

    def check_unique_filenames(self) -> None:
        """Assert that no archive backs more than one mod id.

        Raises:
            ManifestInvariantError: If a filename is claimed twice.
        """
        owners: dict[str, str] = {}
        for mod_id, entry in self._entries.items():
            previous = owners.setdefault(entry.filename, mod_id)
            if previous != mod_id:
                msg = f"Archive {entry.filename!r} is claimed by both {previous!r} and {mod_id!r}"
                raise ManifestInvariantError(msg)

    def to_dict(self) -> dict[str, dict[str, str]]:
        """Convert to the persisted flat mapping, sorted by id."""
        return {mod_id: self._entries[mod_id].to_dict() for mod_id in sorted(self._entries)}
