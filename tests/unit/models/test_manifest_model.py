"""Unit tests for manifest models."""

import pytest
from modctl.models.manifest import InstalledEntry, Manifest, ManifestInvariantError


@pytest.fixture
def entry() -> InstalledEntry:
    """A single installed entry."""
    return InstalledEntry(version="1.4", filename="rls_map_1.4.zip")


class TestInstalledEntry:
    """Tests for InstalledEntry model."""

    def test_requires_filename(self) -> None:
        """An empty filename is invalid."""
        with pytest.raises(ValueError):
            InstalledEntry(version="1.0", filename="")

    def test_to_dict(self, entry: InstalledEntry) -> None:
        """Entries serialize to the persisted shape."""
        assert entry.to_dict() == {"version": "1.4", "filename": "rls_map_1.4.zip"}


class TestManifest:
    """Tests for Manifest mapping."""

    def test_with_entry_returns_copy(self, entry: InstalledEntry) -> None:
        """Adding an entry leaves the original untouched."""
        empty = Manifest.empty()

        updated = empty.with_entry("rls_map", entry)

        assert len(empty) == 0
        assert updated["rls_map"] == entry

    def test_without_entry(self, entry: InstalledEntry) -> None:
        """Removing an entry returns a copy; missing ids are a no-op."""
        manifest = Manifest({"rls_map": entry})

        assert "rls_map" not in manifest.without_entry("rls_map")
        assert manifest.without_entry("other") == manifest
        assert "rls_map" in manifest

    def test_find_by_filename(self, entry: InstalledEntry) -> None:
        """The owning id of an archive can be looked up."""
        manifest = Manifest({"rls_map": entry})

        assert manifest.find_by_filename("rls_map_1.4.zip") == "rls_map"
        assert manifest.find_by_filename("other.zip") is None
        assert manifest.filenames == frozenset({"rls_map_1.4.zip"})

    def test_equality_and_hash(self, entry: InstalledEntry) -> None:
        """Manifests compare by content."""
        left = Manifest({"rls_map": entry})
        right = Manifest({"rls_map": InstalledEntry(version="1.4", filename="rls_map_1.4.zip")})

        assert left == right
        assert hash(left) == hash(right)

    def test_to_dict_sorted(self, entry: InstalledEntry) -> None:
        """Serialization is ordered by id."""
        manifest = Manifest({"z": entry, "a": InstalledEntry(version="1", filename="a.zip")})

        assert list(manifest.to_dict()) == ["a", "z"]

    def test_unique_filenames(self, entry: InstalledEntry) -> None:
        """Two ids on one archive violate the manifest invariant."""
        manifest = Manifest({"a": entry, "b": entry})

        with pytest.raises(ManifestInvariantError):
            manifest.check_unique_filenames()
