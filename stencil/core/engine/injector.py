"""
Injector — apply one decoded Injection to an existing file.

The pure part (``apply_injection``) turns old content into new content.
``run_injection`` wraps it with the storage and printer ports: read the
target, honour ``skip_if``, write the result back and notify.
"""

from __future__ import annotations

import logging
import re
from pathlib import Path

from stencil.adapters.base import Printer, Storage
from stencil.core.engine.document import normalize_newlines
from stencil.core.engine.insertion import (
    InsertionPoint,
    insert_content_at_positions,
    join_lines,
    split_lines,
)
from stencil.core.engine.positions import MatchPositions
from stencil.core.errors import TargetMissingError
from stencil.core.models.directive import Injection, InjectionKind

logger = logging.getLogger(__name__)

# kind → (selection mode, placement)
_POSITIONAL: dict[InjectionKind, tuple[MatchPositions, InsertionPoint]] = {
    InjectionKind.BEFORE: (MatchPositions.FIRST, InsertionPoint.BEFORE),
    InjectionKind.BEFORE_LAST: (MatchPositions.LAST, InsertionPoint.BEFORE),
    InjectionKind.BEFORE_ALL: (MatchPositions.ALL, InsertionPoint.BEFORE),
    InjectionKind.AFTER: (MatchPositions.FIRST, InsertionPoint.AFTER),
    InjectionKind.AFTER_LAST: (MatchPositions.LAST, InsertionPoint.AFTER),
    InjectionKind.AFTER_ALL: (MatchPositions.ALL, InsertionPoint.AFTER),
}


def apply_injection(file_content: str, injection: Injection) -> str:
    """Return ``file_content`` with ``injection`` applied.

    ``skip_if`` is not evaluated here; see ``should_skip``.
    """
    kind = injection.kind
    content = injection.payload

    if kind is None:
        logger.warning("No injection made into %s: no placement key set", injection.target_path)
        return file_content

    if kind is InjectionKind.PREPEND:
        return f"{content}\n{file_content}"

    if kind is InjectionKind.APPEND:
        return f"{file_content}\n{content}"

    pattern = injection.pattern
    assert pattern is not None  # every remaining kind carries a pattern

    if kind in _POSITIONAL:
        mode, point = _POSITIONAL[kind]
        return insert_content_at_positions(
            file_content, content, injection.inline, pattern, mode, point
        )

    if kind is InjectionKind.REMOVE_LINES:
        return _remove_lines(file_content, pattern)

    # Function replacement keeps backslashes in the payload literal
    if kind is InjectionKind.REPLACE:
        return pattern.sub(lambda _m: content, file_content, count=1)

    return pattern.sub(lambda _m: content, file_content)


def _remove_lines(file_content: str, pattern: re.Pattern[str]) -> str:
    """Drop matching lines. A final newline, if present, is kept."""
    had_newline = file_content.endswith("\n")
    lines = split_lines(file_content[:-1] if had_newline else file_content)
    kept = [ln for ln in lines if not pattern.search(ln)]
    if had_newline and kept:
        return join_lines(kept) + "\n"
    return join_lines(kept)


def should_skip(file_content: str, injection: Injection) -> bool:
    """Whether the file already satisfies ``skip_if``."""
    return injection.skip_if is not None and injection.skip_if.search(file_content) is not None


def run_injection(
    injection: Injection,
    path: Path,
    storage: Storage,
    printer: Printer,
) -> bool:
    """Patch ``path`` in place. Returns False when ``skip_if`` matched.

    Raises:
        TargetMissingError: If ``path`` does not exist. Injections never
            create their target.
        StorageError: If reading or writing fails.
    """
    if not storage.exists(path):
        raise TargetMissingError(f"cannot inject into {path}: file does not exist", path)

    # CRLF targets are matched and written back as LF
    file_content = normalize_newlines(storage.read(path))

    if should_skip(file_content, injection):
        logger.debug("Skipping injection into %s: skip_if matched", path)
        return False

    new_content = apply_injection(file_content, injection)
    storage.write(path, new_content)
    printer.on_injected(path)
    logger.info("Injected %s into %s", injection.kind.value if injection.kind else "nothing", path)
    return True
