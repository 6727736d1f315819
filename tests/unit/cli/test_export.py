"""Unit tests for the export command."""

from collections.abc import Callable
from pathlib import Path

from modctl.cli.main import app
from typer.testing import CliRunner

runner = CliRunner()


class TestExportCommand:
    """Tests for modctl export command."""

    def test_prints_sections(self, cli_env: Path, touch: Callable[..., None]) -> None:
        """Tracked archives and repo archives are listed in two sections."""
        touch(cli_env, "rls_map_1.4.zip")
        (cli_env / "repo").mkdir()
        touch(cli_env / "repo", "repo_car.zip")

        result = runner.invoke(app, ["export"])

        assert result.exit_code == 0
        assert result.stdout == (
            "[Non-Repo Mods]\nrls_map_1.4.zip\n\n[Repo Mods]\nrepo_car.zip\n"
        )

    def test_writes_file(self, cli_env: Path, tmp_path: Path) -> None:
        """--output writes the list to a file."""
        target = tmp_path / "out" / "mods.txt"

        result = runner.invoke(app, ["export", "--output", str(target)])

        assert result.exit_code == 0
        assert target.read_text(encoding="utf-8") == "[Non-Repo Mods]\n\n[Repo Mods]\n"
