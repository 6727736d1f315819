"""Mod archive operators.

This module exports the installer used to download and delete archives.
"""

from modctl.operators.installer import (
    DeleteResult,
    InstallError,
    InstallResult,
    ModInstaller,
)

__all__ = ["DeleteResult", "InstallError", "InstallResult", "ModInstaller"]
