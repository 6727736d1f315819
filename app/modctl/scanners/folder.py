"""Scanner for zip archives in a mods folder."""

import logging
from collections.abc import Iterator
from pathlib import Path

from modctl.scanners.base import Scanner, ScanError

logger = logging.getLogger(__name__)

ARCHIVE_EXTENSION = ".zip"


class ZipFolderScanner(Scanner):
    """Lists ``.zip`` archives directly inside a folder.

    Only regular files are reported and the extension check ignores case.
    Sub-folders (such as the game's ``repo`` folder) are not descended into.
    A missing folder yields nothing.

    Args:
        root: Folder to scan.
    """

    def __init__(self, root: Path) -> None:
        self._root = root

    @property
    def root(self) -> Path:
        return self._root

    def is_available(self) -> bool:
        return self._root.is_dir()

    def scan(self) -> Iterator[str]:
        if not self._root.exists():
            logger.debug("Mods folder does not exist: %s", self._root)
            return

        try:
            entries = sorted(self._root.iterdir())
        except OSError as e:
            msg = f"Cannot read mods folder {self._root}: {e}"
            raise ScanError(msg) from e

        for entry in entries:
            try:
                if not entry.is_file():
                    continue
            except OSError:
                logger.warning("Cannot determine type of: %s", entry)
                continue

            if entry.suffix.lower() == ARCHIVE_EXTENSION:
                yield entry.name
