"""
Adapters — the storage and notification ports the engine talks through.

    from stencil.adapters import FilesystemStorage, ConsolePrinter
"""

from stencil.adapters.base import Printer, Storage
from stencil.adapters.console import CollectingPrinter, ConsolePrinter, SilentPrinter
from stencil.adapters.filesystem import FilesystemStorage
from stencil.adapters.memory import MemoryStorage

__all__ = [
    "CollectingPrinter",
    "ConsolePrinter",
    "FilesystemStorage",
    "MemoryStorage",
    "Printer",
    "SilentPrinter",
    "Storage",
]
