"""Unit tests for update detection."""

from collections.abc import Callable

import pytest
from modctl.core.updates import detect_updates, find_installed
from modctl.models.catalog import ModDescriptor
from modctl.models.manifest import InstalledEntry, Manifest
from modctl.models.update import RemoteLookup, RemoteRelease

URL = "https://example.com/download.zip"


def _lookup(
    releases: dict[str, RemoteLookup],
) -> Callable[[ModDescriptor], RemoteLookup]:
    """Build a lookup returning canned results (no remote source by default)."""
    return lambda descriptor: releases.get(descriptor.id, RemoteLookup.ok(None))


def _release(version: str, url: str | None = URL) -> RemoteLookup:
    return RemoteLookup.ok(RemoteRelease(version=version, download_url=url))


@pytest.fixture
def manifest() -> Manifest:
    """Manifest with the career overhaul installed."""
    return Manifest(
        {
            "rls_career_overhaul": InstalledEntry(
                version="2.6.2", filename="rls_career_overhaul_2.6.2.zip"
            )
        }
    )


class TestFindInstalled:
    """Tests for find_installed function."""

    def test_exact_id(self, catalog: tuple[ModDescriptor, ...], manifest: Manifest) -> None:
        """The entry stored under the mod id is used."""
        entry = find_installed(catalog[0], manifest)

        assert entry is not None
        assert entry.version == "2.6.2"

    def test_pattern_prefers_newest(self, catalog: tuple[ModDescriptor, ...]) -> None:
        """Among pattern matches the newest version wins, whatever the order."""
        manifest = Manifest(
            {
                "rls_map_2.0.zip": InstalledEntry(version="2.0", filename="rls_map_2.0.zip"),
                "rls_map_1.1.zip": InstalledEntry(version="1.1", filename="rls_map_1.1.zip"),
            }
        )

        entry = find_installed(catalog[1], manifest)

        assert entry is not None
        assert entry.filename == "rls_map_2.0.zip"

    def test_equal_versions_use_filename(self, catalog: tuple[ModDescriptor, ...]) -> None:
        """Equivalent versions fall back to the smallest filename."""
        manifest = Manifest(
            {
                "b": InstalledEntry(version="2.0.0", filename="rls_map_b.zip"),
                "a": InstalledEntry(version="2.0", filename="rls_map_a.zip"),
            }
        )

        entry = find_installed(catalog[1], manifest)

        assert entry is not None
        assert entry.filename == "rls_map_a.zip"

    def test_unknown_version_ranks_last(self, catalog: tuple[ModDescriptor, ...]) -> None:
        """An archive without a readable version never beats a versioned one."""
        manifest = Manifest(
            {
                "rls_map.zip": InstalledEntry(version="Unknown", filename="rls_map.zip"),
                "rls_map_2.0.zip": InstalledEntry(version="2.0", filename="rls_map_2.0.zip"),
            }
        )

        entry = find_installed(catalog[1], manifest)

        assert entry is not None
        assert entry.filename == "rls_map_2.0.zip"

    def test_not_installed(self, catalog: tuple[ModDescriptor, ...], manifest: Manifest) -> None:
        """Mods with no matching entry are not installed."""
        assert find_installed(catalog[1], manifest) is None


class TestDetectUpdates:
    """Tests for detect_updates function."""

    def test_newer_release_is_candidate(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """An installed mod with a newer remote release is offered."""
        lookup = _lookup({"rls_career_overhaul": _release("v2.7")})

        report = detect_updates(catalog, manifest, lookup)

        assert len(report.candidates) == 1
        candidate = report.candidates[0]
        assert candidate.mod_id == "rls_career_overhaul"
        assert candidate.new_version == "v2.7"
        assert candidate.installed_version == "2.6.2"
        assert report.checked == 3

    def test_same_version_is_not_candidate(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """An up-to-date mod yields nothing."""
        lookup = _lookup({"rls_career_overhaul": _release("v2.6.2")})

        assert detect_updates(catalog, manifest, lookup).candidates == ()

    def test_uninstalled_excluded_by_default(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """Mods absent from the manifest are never offered unless asked."""
        lookup = _lookup({"rls_map": _release("9.9")})

        report = detect_updates(catalog, manifest, lookup, include_uninstalled=False)

        assert report.candidates == ()

    def test_uninstalled_included_on_request(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """include_uninstalled offers fresh installs."""
        lookup = _lookup({"rls_map": _release("1.4")})

        report = detect_updates(catalog, manifest, lookup, include_uninstalled=True)

        assert [c.mod_id for c in report.candidates] == ["rls_map"]
        assert report.candidates[0].is_fresh_install is True
        assert report.installed_updates == ()

    def test_release_without_url_skipped(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """Releases that cannot be downloaded are not candidates or failures."""
        lookup = _lookup({"rls_career_overhaul": _release("v3.0", url=None)})

        report = detect_updates(catalog, manifest, lookup)

        assert report.candidates == ()
        assert report.failures == {}

    def test_failing_lookup_skips_only_that_mod(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """A raising lookup is recorded and the others still run."""

        def lookup(descriptor: ModDescriptor) -> RemoteLookup:
            if descriptor.id == "rls_map":
                raise ConnectionError("offline")
            if descriptor.id == "rls_traffic":
                return RemoteLookup.failed("rate limited")
            return _release("v2.7")

        report = detect_updates(catalog, manifest, lookup)

        assert [c.mod_id for c in report.candidates] == ["rls_career_overhaul"]
        assert report.failures == {"rls_map": "offline", "rls_traffic": "rate limited"}
        assert report.failed_all is False

    def test_all_lookups_failed(
        self, catalog: tuple[ModDescriptor, ...], manifest: Manifest
    ) -> None:
        """The aggregate failure flag is set when nothing could be checked."""
        report = detect_updates(catalog, manifest, lambda d: RemoteLookup.failed("down"))

        assert report.failed_all is True
        assert report.to_dict()["summary"] == {"checked": 3, "updates": 0, "failed": 3}
