"""
In-memory storage — a test double for the filesystem.

``MemoryStorage`` keeps files in a dict and logs every write, so a test
can assert both the final tree and that a re-run wrote nothing.
"""

from __future__ import annotations

import fnmatch
from pathlib import Path

from stencil.adapters.base import Storage
from stencil.core.errors import StorageError, TargetMissingError


def _key(path: Path | str) -> str:
    return Path(path).as_posix()


class MemoryStorage(Storage):
    """Dict-backed storage.

    Args:
        files: Initial files, path → content.
        read_only: Paths whose writes fail with StorageError.
    """

    def __init__(
        self,
        files: dict[str, str] | None = None,
        read_only: set[str] | None = None,
    ):
        self._files: dict[str, str] = {_key(p): c for p, c in (files or {}).items()}
        self._read_only = {_key(p) for p in (read_only or set())}
        self._write_log: list[tuple[str, str]] = []

    @property
    def files(self) -> dict[str, str]:
        """Current contents, keyed by POSIX path string."""
        return dict(self._files)

    @property
    def write_log(self) -> list[tuple[str, str]]:
        """Every write, in order, as (path, content)."""
        return self._write_log

    @property
    def write_count(self) -> int:
        return len(self._write_log)

    def exists(self, path: Path) -> bool:
        key = _key(path)
        if key in self._files:
            return True
        prefix = key.rstrip("/") + "/"
        return any(k.startswith(prefix) for k in self._files)

    def read(self, path: Path) -> str:
        key = _key(path)
        if key not in self._files:
            raise TargetMissingError(f"File not found: {path}", path)
        return self._files[key]

    def write(self, path: Path, content: str) -> None:
        key = _key(path)
        if key in self._read_only:
            raise StorageError(f"Cannot write {path}: read-only", path)
        self._files[key] = content
        self._write_log.append((key, content))

    def glob(self, pattern: str) -> list[Path]:
        pat = _key(pattern)
        return [Path(k) for k in sorted(self._files) if fnmatch.fnmatchcase(k, pat)]

    def reset_log(self) -> None:
        """Forget past writes, keep the files."""
        self._write_log.clear()
