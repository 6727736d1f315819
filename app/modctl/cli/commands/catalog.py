"""Catalog command implementation.

Shows the mods available from the catalog and which of them are installed.
"""

import json
from typing import Annotated

import typer

from modctl.cli.display import create_catalog_table
from modctl.cli.types import (
    get_client,
    open_library,
    refresh_library,
    require_catalog,
    require_config,
)
from modctl.core.updates import find_installed
from modctl.utils.formatting import console, print_info

app = typer.Typer(
    help="Show the mod catalog.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def show_catalog(
    ctx: typer.Context,
    category: Annotated[
        str | None,
        typer.Option(
            "--category",
            "-c",
            help="Only show one category (core, map, vehicle).",
        ),
    ] = None,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show catalog entries with their installed versions.

    Examples:
        modctl catalog                  # All catalog mods
        modctl catalog -c map           # Maps only
        modctl catalog --json    # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    catalog = require_catalog(config, get_client(config))
    library = open_library(config, catalog)
    refresh_library(library)

    entries = [d for d in catalog if category is None or d.category == category]
    if not entries:
        print_info("No catalog entries to show.")
        return

    if json_output:
        data = []
        for descriptor in entries:
            installed = find_installed(descriptor, library.manifest)
            item = descriptor.model_dump(by_alias=True, exclude_none=True)
            item["installed"] = installed.to_dict() if installed else None
            data.append(item)
        console.print_json(json.dumps(data))
        return

    console.print(create_catalog_table(entries, library.manifest))
