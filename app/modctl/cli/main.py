"""Main CLI application entry point.

Defines the Typer application and global options.
"""

import logging
from typing import Annotated

import typer
from rich.logging import RichHandler

from modctl import __version__
from modctl.cli.commands import catalog, check, config, export, install, listing, remove
from modctl.utils.formatting import err_console

# Create main Typer app
app = typer.Typer(
    name="modctl",
    help="Install, track and update BeamNG.drive mod archives.",
    no_args_is_help=True,
    rich_markup_mode="rich",
    context_settings={"help_option_names": ["-h", "--help"]},
)


def version_callback(value: bool) -> None:
    """Print version and exit."""
    if value:
        typer.echo(f"modctl version {__version__}")
        raise typer.Exit()


def configure_logging(verbose: bool) -> None:
    """Route the package's log records to stderr through Rich."""
    logger = logging.getLogger("modctl")
    logger.handlers.clear()
    logger.addHandler(RichHandler(console=err_console, show_path=False, markup=False))
    logger.setLevel(logging.DEBUG if verbose else logging.WARNING)


@app.callback()
def main(
    ctx: typer.Context,
    version: Annotated[
        bool | None,
        typer.Option(
            "--version",
            "-V",
            callback=version_callback,
            is_eager=True,
            help="Show version and exit.",
        ),
    ] = None,
    verbose: Annotated[
        bool,
        typer.Option(
            "--verbose",
            "-v",
            help="Enable verbose output.",
        ),
    ] = False,
) -> None:
    """modctl - Mod manager for BeamNG.drive.

    Keeps a manifest of the mod archives in your mods folder in sync with
    the folder itself and installs updates from the mod catalog.
    """
    configure_logging(verbose)
    # Store options in context for subcommands
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose


# Register commands
app.add_typer(listing.app, name="list")
app.add_typer(catalog.app, name="catalog")
app.add_typer(check.app, name="check")
app.command(name="install")(install.install_mod)
app.command(name="remove")(remove.remove_mod)
app.add_typer(export.app, name="export")
app.add_typer(config.app, name="config")


if __name__ == "__main__":
    app()
