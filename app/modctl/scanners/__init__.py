"""Mods folder scanners.

This module exports the scanner classes for listing installed archives.
"""

from modctl.scanners.base import Scanner, ScanError
from modctl.scanners.folder import ZipFolderScanner

__all__ = ["ScanError", "Scanner", "ZipFolderScanner"]
