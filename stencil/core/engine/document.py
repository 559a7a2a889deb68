"""
Document splitter — rendered text in, (Directive, body) pairs out.

A rendered document looks like::

    ---
    to: app/models/post.py
    message: "Model created"
    ---
    class Post: ...
    ---
    to: app/routes.py
    injections: [...]
    ---
    ...

Chunks are separated by lines consisting solely of ``---``. Empty chunks
are dropped, the rest pair up as (directive, body). The leading
delimiter is optional.
"""

from __future__ import annotations

import logging
import re

import yaml
from pydantic import ValidationError

from stencil.core.errors import ConfigurationError, ParseError
from stencil.core.models.directive import Directive

logger = logging.getLogger(__name__)

DELIMITER = "---"

_DELIMITER_RE = re.compile(rf"^{re.escape(DELIMITER)}[ \t]*(?:\n|\Z)", re.MULTILINE)


def normalize_newlines(text: str) -> str:
    """CRLF and lone CR become LF."""
    return text.replace("\r\n", "\n").replace("\r", "\n")


def split_chunks(text: str) -> list[str]:
    """Split on delimiter lines and drop chunks that are blank."""
    return [c for c in _DELIMITER_RE.split(normalize_newlines(text)) if c.strip()]


def parse_directive(block: str) -> Directive:
    """Decode one YAML directive block.

    Raises:
        ConfigurationError: Invalid regular expression, or an injection
            with more than one placement.
        ParseError: Invalid YAML, a non-mapping block, unknown keys,
            missing ``to`` or wrongly typed values.
    """
    try:
        data = yaml.safe_load(block)
    except yaml.YAMLError as e:
        raise ParseError(f"Invalid YAML in directive block: {e}") from e

    if not isinstance(data, dict):
        raise ParseError(
            f"Expected a YAML mapping as directive, got {type(data).__name__}: {block.strip()[:60]!r}"
        )

    try:
        return Directive.model_validate(data)
    except ConfigurationError:
        raise
    except ValidationError as e:
        raise ParseError(f"Invalid directive: {e}") from e


def parse_document(text: str) -> list[tuple[Directive, str]]:
    """Split ``text`` into (Directive, body) pairs.

    Every directive is decoded before anything is returned, so a bad
    block anywhere aborts the run before any file is touched.

    Raises:
        ParseError: Odd number of chunks or a malformed directive.
    """
    chunks = split_chunks(text)
    if len(chunks) % 2:
        raise ParseError(
            f"cannot split document into directive and body: "
            f"{len(chunks)} chunk(s), the last one has no body"
        )

    pairs: list[tuple[Directive, str]] = []
    for i in range(0, len(chunks), 2):
        directive = parse_directive(chunks[i].strip())
        body = chunks[i + 1].strip()
        pairs.append((directive, body))

    logger.debug("Parsed %d directive(s)", len(pairs))
    return pairs
