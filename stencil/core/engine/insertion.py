"""
Insertion executor — splice a payload before or after matching lines.

Two granularities:

    line    the payload becomes a new line next to each selected line
    inline  the payload is glued to the matched text inside the line

All selected positions are computed against the original lines first, so
an insertion never shifts the reference point of another one.
"""

from __future__ import annotations

import re
from enum import Enum

from stencil.core.engine.positions import MatchPositions, find_positions


class InsertionPoint(str, Enum):
    """Where the payload goes relative to the match."""

    BEFORE = "before"
    AFTER = "after"


def split_lines(content: str) -> list[str]:
    """Split on ``\\n`` only, keeping a trailing empty line if present.

    ``"\\n".join(split_lines(s)) == s`` for every ``s``, so a final
    newline (or its absence) survives an edit untouched.
    """
    return content.split("\n")


def join_lines(lines: list[str]) -> str:
    return "\n".join(lines)


def insert_content_at_positions(
    file_content: str,
    content: str,
    inline: bool,
    pattern: re.Pattern[str],
    mode: MatchPositions,
    point: InsertionPoint,
) -> str:
    """Insert ``content`` at every position ``pattern`` selects in ``file_content``.

    Args:
        file_content: Text being edited.
        content: Payload to insert.
        inline: Splice next to the matched text instead of adding a line.
        pattern: Compiled pattern locating the positions.
        mode: FIRST, LAST or ALL matching lines.
        point: BEFORE or AFTER the match.

    Returns:
        The edited text. Unchanged if nothing matches.
    """
    lines = split_lines(file_content)
    positions = set(find_positions(lines, pattern, mode))
    if not positions:
        return file_content

    if inline:
        # FIRST touches one occurrence; LAST and ALL every occurrence on the line
        count = 1 if mode is MatchPositions.FIRST else 0
        for idx in positions:
            lines[idx] = _splice(lines[idx], content, pattern, point, count)
        return join_lines(lines)

    out: list[str] = []
    for idx, line in enumerate(lines):
        if idx not in positions:
            out.append(line)
        elif point is InsertionPoint.BEFORE:
            out.extend((content, line))
        else:
            out.extend((line, content))
    return join_lines(out)


def _splice(
    line: str,
    content: str,
    pattern: re.Pattern[str],
    point: InsertionPoint,
    count: int,
) -> str:
    if point is InsertionPoint.BEFORE:
        return pattern.sub(lambda m: content + m.group(0), line, count=count)
    return pattern.sub(lambda m: m.group(0) + content, line, count=count)
