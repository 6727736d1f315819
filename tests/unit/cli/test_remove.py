"""Unit tests for the remove command."""

import json
from collections.abc import Callable
from pathlib import Path

from modctl.cli.main import app
from modctl.core.paths import get_manifest_path
from typer.testing import CliRunner

runner = CliRunner()


class TestRemoveCommand:
    """Tests for modctl remove command."""

    def test_remove_with_yes(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """The archive is deleted and the entry forgotten."""
        touch(cli_env, "rls_map_1.4.zip", "unknown_mod.zip")

        result = runner.invoke(app, ["remove", "rls_map", "--yes"])

        assert result.exit_code == 0, result.output
        assert not (cli_env / "rls_map_1.4.zip").exists()
        saved = json.loads(get_manifest_path().read_text(encoding="utf-8"))
        assert "rls_map" not in saved
        assert "unknown_mod.zip" in saved

    def test_confirmation_declined(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """Answering no keeps the archive."""
        touch(cli_env, "rls_map_1.4.zip")

        result = runner.invoke(app, ["remove", "rls_map"], input="n\n")

        assert result.exit_code == 0
        assert "Aborted" in result.stdout
        assert (cli_env / "rls_map_1.4.zip").exists()

    def test_dry_run(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """--dry-run deletes nothing."""
        touch(cli_env, "rls_map_1.4.zip")

        result = runner.invoke(app, ["remove", "rls_map", "--dry-run"])

        assert result.exit_code == 0
        assert (cli_env / "rls_map_1.4.zip").exists()

    def test_not_installed(self, cli_env: Path) -> None:
        """Unknown ids are reported."""
        result = runner.invoke(app, ["remove", "rls_map", "--yes"])

        assert result.exit_code == 1
        assert "Mod is not installed: rls_map" in result.output
