"""
Adapter base — the port contracts between the engine and the outside world.

The engine never touches the disk or the terminal directly. It reads and
writes through a ``Storage`` and reports what it did through a
``Printer``. Both are wired in at construction time, so tests can run
the whole pipeline in memory.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from pathlib import Path


class Storage(ABC):
    """File access used by a generation run.

    To create a new storage:
        1. Subclass Storage
        2. Implement exists, read, write, glob
        3. Pass it to ``Generator(storage=...)``
    """

    @abstractmethod
    def exists(self, path: Path) -> bool:
        """Whether a file exists at ``path``. Never raises."""

    @abstractmethod
    def read(self, path: Path) -> str:
        """Return the text of ``path``.

        Raises:
            TargetMissingError: If the file does not exist.
            StorageError: On any other read failure.
        """

    @abstractmethod
    def write(self, path: Path, content: str) -> None:
        """Write ``content`` to ``path``, creating parent directories.

        Raises:
            StorageError: On failure.
        """

    @abstractmethod
    def glob(self, pattern: str) -> list[Path]:
        """Return existing paths matching a glob pattern."""

    def __repr__(self) -> str:
        return f"<{self.__class__.__name__}>"


class Printer(ABC):
    """Observer for file events. Never affects control flow."""

    @abstractmethod
    def on_added(self, path: Path) -> None:
        """A new file was written."""

    @abstractmethod
    def on_overwritten(self, path: Path) -> None:
        """An existing file was replaced."""

    @abstractmethod
    def on_skipped_existing(self, path: Path) -> None:
        """A directive was skipped because its target (or glob) exists."""

    @abstractmethod
    def on_injected(self, path: Path) -> None:
        """An existing file was patched."""
