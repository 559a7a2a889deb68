"""
Directive and Injection models — the decoded header of one generation unit.

A rendered document is a sequence of (directive, body) pairs. The
directive says where the body goes, when to skip it, and which existing
files to patch afterwards. Both models are read-only value objects built
once by the document splitter.

YAML keys keep their short names (``to``, ``into``, ``content``,
``skip_exists``, ``skip_glob``); the long field names are accepted too.
"""

from __future__ import annotations

import re
from enum import Enum
from typing import Any

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationInfo,
    field_validator,
    model_validator,
)

from stencil.core.errors import ConfigurationError


class InjectionKind(str, Enum):
    """Which edit an injection performs."""

    PREPEND = "prepend"
    APPEND = "append"
    BEFORE = "before"
    BEFORE_LAST = "before_last"
    BEFORE_ALL = "before_all"
    AFTER = "after"
    AFTER_LAST = "after_last"
    AFTER_ALL = "after_all"
    REMOVE_LINES = "remove_lines"
    REPLACE = "replace"
    REPLACE_ALL = "replace_all"


# Placement keys that carry a regular expression.
_PATTERN_KINDS: tuple[InjectionKind, ...] = tuple(
    k for k in InjectionKind if k not in (InjectionKind.PREPEND, InjectionKind.APPEND)
)

_REGEX_FIELDS = ("skip_if",) + tuple(k.value for k in _PATTERN_KINDS)


def _compile(field: str, value: Any) -> re.Pattern[str] | None:
    if value is None or isinstance(value, re.Pattern):
        return value
    if not isinstance(value, str):
        raise ConfigurationError(
            f"'{field}' must be a regular expression string, got {type(value).__name__}"
        )
    try:
        return re.compile(value)
    except re.error as e:
        raise ConfigurationError(f"Invalid regular expression for '{field}': {value!r} ({e})") from e


class Injection(BaseModel):
    """One patch operation against an already-existing file.

    At most one placement key may be set. ``kind`` exposes the selected
    placement as a single value; ``None`` means the injection is a no-op
    (the file is rewritten unchanged and a warning is logged).
    """

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    target_path: str = Field(alias="into")
    payload: str = Field(default="", alias="content")
    inline: bool = False
    skip_if: re.Pattern[str] | None = None

    prepend: bool = False
    append: bool = False
    before: re.Pattern[str] | None = None
    before_last: re.Pattern[str] | None = None
    before_all: re.Pattern[str] | None = None
    after: re.Pattern[str] | None = None
    after_last: re.Pattern[str] | None = None
    after_all: re.Pattern[str] | None = None
    remove_lines: re.Pattern[str] | None = None
    replace: re.Pattern[str] | None = None
    replace_all: re.Pattern[str] | None = None

    @field_validator(*_REGEX_FIELDS, mode="before")
    @classmethod
    def _compile_patterns(cls, value: Any, info: ValidationInfo) -> re.Pattern[str] | None:
        return _compile(info.field_name, value)

    @field_validator("payload", mode="before")
    @classmethod
    def _payload_to_text(cls, value: Any) -> Any:
        # YAML turns bare numbers and booleans into non-strings
        if value is None:
            return ""
        if isinstance(value, (int, float, bool)):
            return str(value)
        return value

    @model_validator(mode="after")
    def _single_placement(self) -> Injection:
        selected = self._selected_kinds()
        if len(selected) > 1:
            names = ", ".join(k.value for k in selected)
            raise ConfigurationError(
                f"Injection into '{self.target_path}' sets more than one placement: {names}"
            )
        return self

    def _selected_kinds(self) -> list[InjectionKind]:
        selected = []
        if self.prepend:
            selected.append(InjectionKind.PREPEND)
        if self.append:
            selected.append(InjectionKind.APPEND)
        for kind in _PATTERN_KINDS:
            if getattr(self, kind.value) is not None:
                selected.append(kind)
        return selected

    @property
    def kind(self) -> InjectionKind | None:
        """The single placement this injection performs, if any."""
        selected = self._selected_kinds()
        return selected[0] if selected else None

    @property
    def pattern(self) -> re.Pattern[str] | None:
        """Compiled pattern of the placement (None for prepend/append/no-op)."""
        kind = self.kind
        if kind is None or kind not in _PATTERN_KINDS:
            return None
        return getattr(self, kind.value)


class Directive(BaseModel):
    """What to do with one rendered body."""

    model_config = ConfigDict(extra="forbid", populate_by_name=True, frozen=True)

    target_path: str = Field(alias="to")
    skip_if_exists: bool = Field(default=False, alias="skip_exists")
    skip_if_glob_matches: str | None = Field(default=None, alias="skip_glob")
    message: str | None = None
    injections: list[Injection] = Field(default_factory=list)

    @field_validator("injections", mode="before")
    @classmethod
    def _none_is_empty(cls, value: Any) -> Any:
        return [] if value is None else value
