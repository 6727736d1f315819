"""Export command implementation.

Prints (or writes) the shareable list of installed mod archives.
"""

from pathlib import Path
from typing import Annotated

import typer

from modctl.cli.types import (
    get_client,
    open_library,
    optional_catalog,
    refresh_library,
    require_config,
)
from modctl.core.export import REPO_SUBDIR, render_mod_list
from modctl.scanners.base import ScanError
from modctl.scanners.folder import ZipFolderScanner
from modctl.utils.formatting import print_error, print_info

app = typer.Typer(
    help="Export the list of installed mods.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def export_list(
    ctx: typer.Context,
    output: Annotated[
        Path | None,
        typer.Option(
            "--output",
            "-o",
            help="Write the list to a file instead of stdout.",
        ),
    ] = None,
) -> None:
    """Export tracked archives and repository mods as plain text.

    Examples:
        modctl export                   # Print the list
        modctl export -o mods.txt       # Write it to mods.txt
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    catalog = optional_catalog(config, get_client(config))
    library = open_library(config, catalog or ())
    if catalog is not None:
        refresh_library(library)

    repo_scanner = ZipFolderScanner(config.effective_mods_dir / REPO_SUBDIR)
    try:
        repo_files = list(repo_scanner.scan())
    except ScanError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    text = render_mod_list(library.manifest, repo_files)

    if output is None:
        typer.echo(text)
        return

    output = output.resolve()
    if output.is_dir():
        print_error(f"Export path is a directory: {output}")
        raise typer.Exit(code=1)

    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
    except OSError as e:
        print_error(f"Failed to export: {e}")
        raise typer.Exit(code=1) from e
    print_info(f"Mod list exported to {output}")
