"""
Shared test fixtures and configuration.
"""

import logging
from pathlib import Path

import pytest

from stencil.adapters.console import CollectingPrinter
from stencil.adapters.memory import MemoryStorage
from stencil.core.engine.generator import Generator


@pytest.fixture(autouse=True)
def _restore_root_logger():
    """setup_logging() rewires the root logger; put it back after each test."""
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def storage() -> MemoryStorage:
    """Empty in-memory storage."""
    return MemoryStorage()


@pytest.fixture
def printer() -> CollectingPrinter:
    return CollectingPrinter()


@pytest.fixture
def generator(storage: MemoryStorage, printer: CollectingPrinter) -> Generator:
    """Generator wired to in-memory storage and a recording printer."""
    return Generator(storage=storage, printer=printer)


@pytest.fixture
def fs_generator(tmp_path: Path, printer: CollectingPrinter) -> Generator:
    """Generator on the real filesystem, rooted at tmp_path."""
    return Generator.with_working_dir(tmp_path, printer=printer)
