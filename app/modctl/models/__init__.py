"""Data models for modctl.

This module exports the core data structures used throughout the application.
"""

from modctl.models.catalog import CompiledPattern, ModDescriptor, compile_pattern, parse_catalog
from modctl.models.manifest import InstalledEntry, Manifest, ManifestInvariantError
from modctl.models.update import RemoteLookup, RemoteRelease, UpdateCandidate, UpdateReport

__all__ = [
    "CompiledPattern",
    "InstalledEntry",
    "Manifest",
    "ManifestInvariantError",
    "ModDescriptor",
    "RemoteLookup",
    "RemoteRelease",
    "UpdateCandidate",
    "UpdateReport",
    "compile_pattern",
    "parse_catalog",
]
