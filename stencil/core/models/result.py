"""
Generation result — the outcome handed back to the caller.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel


class GenResult(BaseModel):
    """Outcome of generating one directive, or a whole document.

    A document run is always ``generated``; its message is the
    newline-joined messages of every pair that was written.
    """

    status: Literal["skipped", "generated"] = "generated"
    message: str | None = None

    @property
    def skipped(self) -> bool:
        return self.status == "skipped"

    @property
    def generated(self) -> bool:
        return self.status == "generated"

    @classmethod
    def skip(cls) -> GenResult:
        """Create a skipped result."""
        return cls(status="skipped")

    @classmethod
    def done(cls, message: str | None = None) -> GenResult:
        """Create a generated result."""
        return cls(status="generated", message=message)
