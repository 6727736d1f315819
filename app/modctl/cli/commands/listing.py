"""List command implementation.

Reconciles the manifest with the mods folder and shows the tracked mods.
"""

import json
from typing import Annotated

import typer

from modctl.cli.display import create_manifest_table, print_reconcile_summary
from modctl.cli.types import (
    get_client,
    open_library,
    optional_catalog,
    refresh_library,
    require_config,
)
from modctl.utils.formatting import console, print_info

app = typer.Typer(
    help="List installed mods.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def list_mods(
    ctx: typer.Context,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Rescan the mods folder and list tracked mods.

    Archives that disappeared are dropped from the manifest, versions are
    re-read from filenames and new archives are picked up. When the
    catalog cannot be loaded at all, the stored manifest is shown as is.

    Examples:
        modctl list                 # Rescan and show a table
        modctl list --json   # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    catalog = optional_catalog(config, get_client(config))
    library = open_library(config, catalog or ())

    if catalog is not None:
        refresh_library(library)

    manifest = library.manifest

    if json_output:
        data: dict[str, object] = {"mods": manifest.to_dict()}
        if library.last_result is not None:
            data["changes"] = library.last_result.to_dict()
        console.print_json(json.dumps(data))
        return

    print_reconcile_summary(library.last_result)

    if not manifest:
        print_info(f"No mods found in {config.effective_mods_dir}")
        return

    console.print(create_manifest_table(manifest, catalog or ()))
    console.print(f"\n[dim]{len(manifest)} mod(s) tracked[/dim]")
