"""Unit tests for the plain-text mod list export."""

from modctl.core.export import render_mod_list
from modctl.models.manifest import InstalledEntry, Manifest


class TestRenderModList:
    """Tests for render_mod_list function."""

    def test_sections(self) -> None:
        """Tracked archives come first, repository archives second."""
        manifest = Manifest(
            {
                "rls_map": InstalledEntry(version="1.4", filename="rls_map_1.4.zip"),
                "custom.zip": InstalledEntry(version="Unknown", filename="custom.zip"),
            }
        )

        text = render_mod_list(manifest, ["repo_car.zip"])

        assert text == (
            "[Non-Repo Mods]\ncustom.zip\nrls_map_1.4.zip\n\n[Repo Mods]\nrepo_car.zip"
        )

    def test_empty(self) -> None:
        """Both headers are present even without mods."""
        assert render_mod_list(Manifest.empty()) == "[Non-Repo Mods]\n\n[Repo Mods]"
