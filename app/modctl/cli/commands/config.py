"""Configuration commands.

Provides commands to show and change the settings stored in
~/.config/modctl/config.toml.
"""

import json
from typing import Annotated

import typer
from pydantic import ValidationError
from rich.table import Table

from modctl.cli.types import require_config
from modctl.core.config import AppConfig, ConfigError, save_config
from modctl.core.paths import get_config_path
from modctl.utils.formatting import console, print_error, print_success

app = typer.Typer(
    help="Show or change modctl settings.",
    invoke_without_command=True,
    no_args_is_help=True,
)


def _mask(token: str | None) -> str | None:
    """Hide all but the last four characters of a secret."""
    if not token:
        return token
    return "*" * max(len(token) - 4, 0) + token[-4:]


@app.command()
def show(
    json_output: Annotated[
        bool,
        typer.Option(
            "--json",
            help="Output as JSON.",
        ),
    ] = False,
) -> None:
    """Show the effective configuration."""
    config = require_config()
    values: dict[str, object] = {
        "mods_dir": str(config.effective_mods_dir),
        "catalog_url": config.effective_catalog_url,
        "github_token": _mask(config.github_token),
        "request_timeout": config.request_timeout,
    }

    if json_output:
        console.print_json(json.dumps(values))
        return

    table = Table(
        title=f"Configuration ({get_config_path()})",
        show_header=True,
        header_style="bold_header",
        border_style="border",
    )
    table.add_column("Setting", no_wrap=True)
    table.add_column("Value")
    for key, value in values.items():
        table.add_row(key, "[muted]not set[/muted]" if value is None else str(value))
    console.print(table)


@app.command("set")
def set_value(
    key: Annotated[
        str,
        typer.Argument(help="Setting name (mods_dir, catalog_url, github_token, request_timeout)."),
    ],
    value: Annotated[
        str,
        typer.Argument(help="New value. Use an empty string to reset to the default."),
    ],
) -> None:
    """Change one setting."""
    if key not in AppConfig.model_fields:
        print_error(f"Unknown setting: {key}")
        raise typer.Exit(code=1)

    config = require_config()
    data = config.model_dump(exclude_none=True)
    if value:
        data[key] = value
    else:
        data.pop(key, None)

    try:
        updated = AppConfig.model_validate(data)
    except ValidationError as e:
        print_error(f"Invalid value for {key}: {e.errors()[0]['msg']}")
        raise typer.Exit(code=1) from e

    try:
        path = save_config(updated)
    except ConfigError as e:
        print_error(str(e))
        raise typer.Exit(code=1) from e

    print_success(f"Updated {key} in {path}")
