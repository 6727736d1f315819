"""Abstract base class for mod folder scanners.

This module defines the Scanner interface used to list the archives that
are currently present in a mods folder.
"""

from abc import ABC, abstractmethod
from collections.abc import Iterator
from pathlib import Path


class ScanError(Exception):
    """Raised when a mods folder exists but cannot be read."""


class Scanner(ABC):
    """Abstract base class for all mod folder scanners.

    Scanners only report filenames; deciding what they mean is left to
    reconciliation.

    Example:
        >>> scanner = ZipFolderScanner(Path("~/mods").expanduser())
        >>> if scanner.is_available():
        ...     for name in scanner.scan():
        ...         print(name)
    """

    @property
    @abstractmethod
    def root(self) -> Path:
        """Return the folder this scanner lists."""

    @abstractmethod
    def scan(self) -> Iterator[str]:
        """Yield archive filenames found in the folder.

        Yields:
            Bare filenames (no directory part).

        Raises:
            ScanError: If the folder cannot be read.
        """

    @abstractmethod
    def is_available(self) -> bool:
        """Check if the folder exists.

        Returns:
            True if the folder can be scanned, False otherwise.
        """

    def scan_set(self) -> frozenset[str]:
        """Return the scan result with set semantics (duplicates collapse)."""
        return frozenset(self.scan())
