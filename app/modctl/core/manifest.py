"""Manifest I/O operations.

The manifest is a pretty-printed JSON object mapping each mod id to
``{"version": ..., "filename": ...}``. A reserved ``$schema_version`` key
records the layout version so the entry shape can evolve later; files
written before it existed are read as version 1.
"""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from modctl.core.paths import get_manifest_path
from modctl.models.manifest import InstalledEntry, Manifest

logger = logging.getLogger(__name__)

SCHEMA_VERSION_KEY = "$schema_version"
SCHEMA_VERSION = 1


class ManifestError(Exception):
    """Base exception for manifest-related errors."""


class ManifestNotFoundError(ManifestError):
    """Raised when the manifest file is not found."""


class ManifestParseError(ManifestError):
    """Raised when the manifest file is not valid JSON."""


class ManifestValidationError(ManifestError):
    """Raised when the manifest content does not match the schema."""


def parse_manifest(data: Any) -> Manifest:
    """Build a Manifest from decoded JSON.

    Args:
        data: Decoded JSON document.

    Returns:
        The validated Manifest.

    Raises:
        ManifestValidationError: If the document has the wrong shape or an
            unsupported schema version.
    """
    if not isinstance(data, dict):
        raise ManifestValidationError("Manifest must be a JSON object")

    raw = dict(data)
    schema_version = raw.pop(SCHEMA_VERSION_KEY, SCHEMA_VERSION)
    if schema_version != SCHEMA_VERSION:
        raise ManifestValidationError(f"Unsupported manifest schema version: {schema_version!r}")

    try:
        entries = {
            str(mod_id): InstalledEntry.model_validate(value) for mod_id, value in raw.items()
        }
    except ValidationError as e:
        raise ManifestValidationError(f"Invalid manifest content: {e}") from e

    return Manifest(entries)


def serialize_manifest(manifest: Manifest) -> str:
    """Render a manifest as pretty-printed JSON."""
    data: dict[str, Any] = {SCHEMA_VERSION_KEY: SCHEMA_VERSION}
    data.update(manifest.to_dict())
    return json.dumps(data, indent=2) + "\n"


def load_manifest(path: Path | None = None) -> Manifest:
    """Load a manifest from a JSON file.

    Args:
        path: Path to the manifest file. If None, uses the default path.

    Returns:
        Validated Manifest.

    Raises:
        ManifestNotFoundError: If the manifest file doesn't exist.
        ManifestParseError: If the JSON syntax is invalid.
        ManifestValidationError: If the content doesn't match the schema.
        ManifestError: If the file cannot be read.
    """
    manifest_path = path or get_manifest_path()

    if not manifest_path.exists():
        raise ManifestNotFoundError(f"Manifest not found: {manifest_path}")

    try:
        with open(manifest_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ManifestParseError(f"Invalid JSON syntax: {e}") from e
    except OSError as e:
        raise ManifestError(f"Failed to read manifest: {e}") from e

    return parse_manifest(data)


def load_manifest_or_empty(path: Path | None = None) -> Manifest:
    """Load the manifest, starting empty when it is missing or unreadable.

    A missing or corrupt manifest is not an error for the user: the next
    reconciliation rebuilds it from the mods folder.

    Args:
        path: Path to the manifest file. If None, uses the default path.

    Returns:
        The loaded Manifest, or an empty one.
    """
    try:
        return load_manifest(path)
    except ManifestNotFoundError:
        logger.debug("No manifest yet, starting empty")
        return Manifest.empty()
    except ManifestError as e:
        logger.warning("Ignoring unreadable manifest: %s", e)
        return Manifest.empty()


def save_manifest(manifest: Manifest, path: Path | None = None) -> Path:
    """Save a manifest to a JSON file.

    The file is written atomically by first writing to a temporary file
    in the same directory and then using os.replace() for atomic rename.
    The temporary file is cleaned up on failure.

    Args:
        manifest: The Manifest object to save.
        path: Path to save the manifest. If None, uses the default path.

    Returns:
        Path where the manifest was saved.

    Raises:
        ManifestError: If the file cannot be written.
    """
    from tempfile import NamedTemporaryFile

    manifest_path = path or get_manifest_path()

    tmp_path: Path | None = None
    try:
        manifest_path.parent.mkdir(parents=True, exist_ok=True)
        with NamedTemporaryFile(
            mode="w",
            encoding="utf-8",
            dir=manifest_path.parent,
            delete=False,
            suffix=".tmp",
        ) as f:
            tmp_path = Path(f.name)
            f.write(serialize_manifest(manifest))
        # os.replace() is atomic on POSIX and Windows
        os.replace(str(tmp_path), str(manifest_path))
    except OSError as e:
        if tmp_path is not None and tmp_path.exists():
            tmp_path.unlink()
        raise ManifestError(f"Failed to write manifest: {e}") from e

    return manifest_path
