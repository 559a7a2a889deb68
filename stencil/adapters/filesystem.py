"""
Filesystem storage — the real disk.
"""

from __future__ import annotations

import glob as _glob
import logging
from pathlib import Path

from stencil.adapters.base import Storage
from stencil.core.errors import StorageError, TargetMissingError

logger = logging.getLogger(__name__)


class FilesystemStorage(Storage):
    """UTF-8 text files on the local filesystem."""

    def exists(self, path: Path) -> bool:
        return path.exists()

    def read(self, path: Path) -> str:
        if not path.is_file():
            raise TargetMissingError(f"File not found: {path}", path)
        try:
            # newline="" so CRLF files come back (and go out) unchanged
            with path.open("r", encoding="utf-8", newline="") as fh:
                return fh.read()
        except (OSError, UnicodeDecodeError) as e:
            raise StorageError(f"Cannot read {path}: {e}", path) from e

    def write(self, path: Path, content: str) -> None:
        try:
            path.parent.mkdir(parents=True, exist_ok=True)
            with path.open("w", encoding="utf-8", newline="") as fh:
                fh.write(content)
        except OSError as e:
            raise StorageError(f"Cannot write {path}: {e}", path) from e
        logger.debug("Wrote %d chars to %s", len(content), path)

    def glob(self, pattern: str) -> list[Path]:
        return [Path(p) for p in sorted(_glob.glob(pattern, recursive=True))]
