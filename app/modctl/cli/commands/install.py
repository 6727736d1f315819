"""Install command implementation.

Downloads the latest release of a catalog mod into the mods folder,
replacing any older archive of the same mod.
"""

from typing import Annotated

import typer
from rich.progress import BarColumn, DownloadColumn, Progress, TextColumn

from modctl.cli.types import (
    get_client,
    open_library,
    refresh_library,
    require_catalog,
    require_config,
)
from modctl.core.manifest import ManifestError
from modctl.core.updates import find_installed
from modctl.core.version import is_newer
from modctl.models.update import UpdateCandidate
from modctl.operators.installer import InstallError, ModInstaller
from modctl.remote.releases import ReleaseResolver
from modctl.scanners.base import ScanError
from modctl.utils.formatting import console, print_error, print_info, print_success, print_warning


def install_mod(
    mod_id: Annotated[
        str,
        typer.Argument(help="Catalog id of the mod to install or update."),
    ],
    force: Annotated[
        bool,
        typer.Option(
            "--force",
            help="Reinstall even if the installed version is current.",
        ),
    ] = False,
) -> None:
    """Install or update one catalog mod.

    Older archives of the mod are deleted before the download, then the
    manifest records the new archive and the folder is rescanned.

    Examples:
        modctl install rls_career_overhaul
        modctl install rls_career_overhaul --force
    """
    config = require_config()
    client = get_client(config)
    catalog = require_catalog(config, client)

    descriptor = next((d for d in catalog if d.id == mod_id), None)
    if descriptor is None:
        print_error(f"Unknown mod: {mod_id}")
        raise typer.Exit(code=1)

    library = open_library(config, catalog)
    refresh_library(library)

    lookup = ReleaseResolver(client, config.github_token).resolve(descriptor)
    if not lookup.succeeded:
        print_error(f"Could not look up the latest release of {mod_id}: {lookup.error}")
        raise typer.Exit(code=1)

    release = lookup.release
    if release is None or not release.version or not release.download_url:
        print_error(f"No downloadable release is published for {mod_id}.")
        raise typer.Exit(code=1)

    installed = find_installed(descriptor, library.manifest)
    if installed is not None and not force and not is_newer(release.version, installed.version):
        print_info(f"{descriptor.name} is up to date ({installed.version}).")
        return

    candidate = UpdateCandidate(
        mod_id=mod_id,
        new_version=release.version,
        download_url=release.download_url,
        installed_version=installed.version if installed else None,
    )
    installer = ModInstaller(config.effective_mods_dir, client)

    with Progress(
        TextColumn("[info]{task.description}[/info]"),
        BarColumn(),
        DownloadColumn(),
        console=console,
        transient=True,
    ) as progress:
        task = progress.add_task(f"Downloading {descriptor.name}", total=None)
        try:
            result = installer.install(
                candidate,
                descriptor,
                current_filename=installed.filename if installed else None,
                on_disk=library.scanner.scan_set(),
                progress=lambda done, total: progress.update(task, completed=done, total=total),
            )
        except (InstallError, ScanError) as e:
            print_error(f"Failed to install {mod_id}: {e}")
            raise typer.Exit(code=1) from e

    for removed in result.removed:
        if not removed.success:
            print_warning(f"Could not delete {removed.path}: {removed.message}")

    try:
        library.record_install(result.mod_id, result.version, result.filename)
    except (ScanError, ManifestError) as e:
        print_error(f"Installed {result.filename} but could not update the manifest: {e}")
        raise typer.Exit(code=1) from e

    print_success(f"Installed {descriptor.name} {result.version} ({result.filename})")
