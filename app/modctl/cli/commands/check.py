"""Check command implementation.

Compares the installed mods with the latest catalog releases.
"""

import json
from typing import Annotated

import typer

from modctl.cli.display import create_updates_table
from modctl.cli.types import (
    get_client,
    open_library,
    refresh_library,
    require_catalog,
    require_config,
)
from modctl.core.updates import detect_updates
from modctl.remote.releases import ReleaseResolver
from modctl.utils.formatting import console, print_error, print_success, print_warning

app = typer.Typer(
    help="Check for mod updates.",
    invoke_without_command=True,
)


@app.callback(invoke_without_command=True)
def check_updates(
    ctx: typer.Context,
    include_all: Annotated[
        bool,
        typer.Option(
            "--all",
            "-a",
            help="Also list catalog mods that are not installed.",
        ),
    ] = False,
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Check catalog mods for newer releases.

    A mod whose release lookup fails is skipped. If every lookup fails the
    command exits with an error.

    Examples:
        modctl check            # Updates for installed mods
        modctl check --all      # Include mods that are not installed
        modctl check --json     # Output as JSON
    """
    if ctx.invoked_subcommand is not None:
        return

    config = require_config()
    client = get_client(config)
    catalog = require_catalog(config, client)
    library = open_library(config, catalog)
    refresh_library(library)

    resolver = ReleaseResolver(client, config.github_token)
    report = detect_updates(catalog, library.manifest, resolver, include_uninstalled=include_all)

    if report.failed_all:
        print_error("Could not check for updates: every release lookup failed.")
        raise typer.Exit(code=1)

    if json_output:
        console.print_json(json.dumps(report.to_dict()))
        return

    if report.failures:
        verbose = bool(ctx.obj and ctx.obj.get("verbose"))
        print_warning(f"Release lookup failed for {len(report.failures)} mod(s).")
        if verbose:
            for mod_id, reason in report.failures.items():
                console.print(f"  [muted]{mod_id}: {reason}[/muted]")

    if not report.candidates:
        print_success("All mods are up to date.")
        return

    console.print(create_updates_table(report.candidates))
    updates = len(report.installed_updates)
    fresh = len(report.candidates) - updates
    summary = f"\n[dim]{updates} update(s) available"
    if include_all:
        summary += f", {fresh} not installed"
    console.print(summary + "[/dim]")
