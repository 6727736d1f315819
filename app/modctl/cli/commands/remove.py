"""Remove command implementation.

Deletes a tracked mod's archive and forgets it in the manifest.
"""

from typing import Annotated

import typer

from modctl.cli.types import (
    get_client,
    open_library,
    optional_catalog,
    refresh_library,
    require_config,
)
from modctl.core.manifest import ManifestError
from modctl.operators.installer import ModInstaller
from modctl.scanners.base import ScanError
from modctl.utils.formatting import print_error, print_info, print_success


def remove_mod(
    mod_id: Annotated[
        str,
        typer.Argument(help="Manifest id of the mod (see `modctl list`)."),
    ],
    dry_run: Annotated[
        bool,
        typer.Option("--dry-run", help="Show what would be deleted."),
    ] = False,
    yes: Annotated[
        bool,
        typer.Option("--yes", "-y", help="Skip confirmation prompt."),
    ] = False,
) -> None:
    """Delete a mod's archive and remove it from the manifest.

    Examples:
        modctl remove rls_career_overhaul
        modctl remove my_custom_car.zip --yes
    """
    config = require_config()
    client = get_client(config)
    catalog = optional_catalog(config, client)
    library = open_library(config, catalog or ())
    if catalog is not None:
        refresh_library(library)

    entry = library.manifest.get(mod_id)
    if entry is None:
        print_error(f"Mod is not installed: {mod_id}")
        raise typer.Exit(code=1)

    installer = ModInstaller(config.effective_mods_dir, client, dry_run=dry_run)

    if dry_run:
        result = installer.delete(entry.filename)
        print_info(f"Would delete {result.path}")
        return

    if not yes and not typer.confirm(f"Delete {entry.filename}?", default=False):
        print_info("Aborted.")
        return

    result = installer.delete(entry.filename)
    if not result.success:
        print_error(f"Failed to delete {entry.filename}: {result.message}")
        raise typer.Exit(code=1)

    try:
        library.record_removal(mod_id)
    except (ScanError, ManifestError) as e:
        print_error(f"Deleted {entry.filename} but could not update the manifest: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Removed {mod_id} ({entry.filename})")
