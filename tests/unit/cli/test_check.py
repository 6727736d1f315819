"""Unit tests for the check command."""

import json
from collections.abc import Callable
from pathlib import Path
from unittest.mock import patch

from modctl.cli.main import app
from modctl.models.catalog import ModDescriptor
from modctl.models.update import RemoteLookup, RemoteRelease
from typer.testing import CliRunner

runner = CliRunner()

URL = "https://example.com/download.zip"


def _releases(descriptor: ModDescriptor) -> RemoteLookup:
    versions = {"rls_career_overhaul": "v2.7", "rls_map": "1.4"}
    version = versions.get(descriptor.id)
    if version is None:
        return RemoteLookup.ok(None)
    return RemoteLookup.ok(RemoteRelease(version=version, download_url=URL))


class TestCheckCommand:
    """Tests for modctl check command."""

    def test_reports_installed_updates(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """Only installed mods with newer releases are listed by default."""
        touch(cli_env, "rls_career_overhaul_2.6.2_hotfix.zip")

        with patch("modctl.cli.commands.check.ReleaseResolver", return_value=_releases):
            result = runner.invoke(app, ["check", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [u["mod_id"] for u in data["updates"]] == ["rls_career_overhaul"]
        assert data["updates"][0]["installed_version"] == "2.6.2_hotfix"

    def test_all_includes_uninstalled(self, cli_env: Path) -> None:
        """--all also offers mods that are not installed."""
        with patch("modctl.cli.commands.check.ReleaseResolver", return_value=_releases):
            result = runner.invoke(app, ["check", "--all", "--json"])

        assert result.exit_code == 0
        data = json.loads(result.stdout)
        assert [u["mod_id"] for u in data["updates"]] == ["rls_career_overhaul", "rls_map"]

    def test_up_to_date(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """A current installation reports no updates."""
        touch(cli_env, "rls_map_1.4.zip")

        with patch("modctl.cli.commands.check.ReleaseResolver", return_value=_releases):
            result = runner.invoke(app, ["check"])

        assert result.exit_code == 0
        assert "up to date" in result.stdout

    def test_every_lookup_failed(self, cli_env: Path) -> None:
        """An aggregate failure is reported once with exit code 1."""
        with patch(
            "modctl.cli.commands.check.ReleaseResolver",
            return_value=lambda d: RemoteLookup.failed("offline"),
        ):
            result = runner.invoke(app, ["check"])

        assert result.exit_code == 1
        assert result.output.count("every release lookup failed") == 1
