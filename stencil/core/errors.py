"""
Error taxonomy for a generation run.

Every failure surfaces immediately as one of these types. Nothing in the
core retries; the CLI is the only layer that catches them.
"""

from __future__ import annotations

from pathlib import Path


class StencilError(Exception):
    """Base class for all generation errors."""


class ParseError(StencilError):
    """The rendered document or one of its directive blocks is malformed."""


class ConfigurationError(ParseError):
    """A directive block decodes, but describes an impossible request.

    Raised at decode time for invalid regular expressions and for
    injections that set more than one placement key.
    """


class RenderError(StencilError):
    """The template engine failed to render the input."""


class StorageError(StencilError):
    """Reading or writing a file failed."""

    def __init__(self, message: str, path: Path | str | None = None):
        super().__init__(message)
        self.path = Path(path) if path is not None else None


class TargetMissingError(StorageError):
    """A file that must already exist (an injection target) does not."""
