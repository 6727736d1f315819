"""CLI commands for modctl.

This package contains all subcommand implementations.
"""

from modctl.cli.commands import catalog, check, config, export, install, listing, remove

__all__ = ["catalog", "check", "config", "export", "install", "listing", "remove"]
