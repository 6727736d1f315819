"""Shared Rich display functions for mods, updates and reconciliation.

Provides reusable table builders and summary printers used across CLI
commands (list, catalog, check, install).
"""

from collections.abc import Sequence

from rich.table import Table

from modctl.core.reconcile import ReconcileResult
from modctl.core.updates import find_installed
from modctl.models.catalog import ModDescriptor
from modctl.models.manifest import Manifest
from modctl.models.update import UpdateCandidate
from modctl.utils.formatting import console, create_mod_table


def create_manifest_table(manifest: Manifest, catalog: Sequence[ModDescriptor] = ()) -> Table:
    """Create a table of tracked mods.

    Mods known to the catalog are shown by name and marked as tracked;
    archives the catalog does not know are listed under their filename id.

    Args:
        manifest: Manifest to display.
        catalog: Catalog used to resolve display names.

    Returns:
        Rich Table with one row per manifest entry, sorted by id.
    """
    names = {d.id: d.name for d in catalog}
    table = create_mod_table()

    for mod_id in sorted(manifest):
        entry = manifest[mod_id]
        if mod_id in names:
            icon = "[mod.tracked]●[/]"
            label = f"[mod.tracked]{names[mod_id]}[/] [muted]({mod_id})[/]"
        else:
            icon = "[mod.untracked]○[/]"
            label = f"[mod.untracked]{mod_id}[/]"
        table.add_row(icon, label, entry.version, entry.filename)

    return table


def create_catalog_table(catalog: Sequence[ModDescriptor], manifest: Manifest) -> Table:
    """Create a table of catalog entries with their installed versions.

    Args:
        catalog: Catalog entries in catalog order.
        manifest: Current manifest.

    Returns:
        Rich Table configured for catalog display.
    """
    table = Table(
        title="Mod Catalog",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("ID", no_wrap=True)
    table.add_column("Name")
    table.add_column("Category", style="muted")
    table.add_column("Source", style="muted")
    table.add_column("Installed")

    for descriptor in catalog:
        installed = find_installed(descriptor, manifest)
        if descriptor.github_repo:
            source = descriptor.github_repo
        elif descriptor.has_static_release:
            source = f"static {descriptor.version}"
        else:
            source = "-"

        table.add_row(
            descriptor.id,
            descriptor.name,
            descriptor.category or "",
            source,
            f"[success]{installed.version}[/success]" if installed else "[muted]-[/muted]",
        )

    return table


def create_updates_table(candidates: Sequence[UpdateCandidate]) -> Table:
    """Create a table of pending updates.

    Args:
        candidates: Update candidates to display.

    Returns:
        Rich Table with installed and available versions.
    """
    table = Table(
        title="Available Updates",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Mod", no_wrap=True)
    table.add_column("Installed", style="muted")
    table.add_column("Available")

    for candidate in candidates:
        if candidate.is_fresh_install:
            installed = "[muted]not installed[/muted]"
            available = f"[update.new]{candidate.new_version}[/]"
        else:
            installed = candidate.installed_version or ""
            available = f"[update.available]{candidate.new_version}[/]"
        table.add_row(candidate.mod_id, installed, available)

    return table


def print_reconcile_summary(result: ReconcileResult | None) -> None:
    """Print what the last reconciliation changed.

    Produces no output when nothing changed.

    Args:
        result: Result of the pass, or None if it was coalesced.
    """
    if result is None or not result.changed:
        return

    parts: list[str] = []
    if result.added:
        parts.append(f"[reconcile.added]{len(result.added)} added[/]")
    if result.refreshed:
        parts.append(f"[reconcile.refreshed]{len(result.refreshed)} refreshed[/]")
    if result.pruned:
        parts.append(f"[reconcile.pruned]{len(result.pruned)} removed[/]")

    if parts:
        console.print(f"[muted]Manifest updated:[/muted] {', '.join(parts)}")
    for filename in result.dropped:
        console.print(f"[reconcile.dropped]Not tracked (older duplicate): {filename}[/]")
