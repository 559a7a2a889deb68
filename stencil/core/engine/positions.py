"""
Position finder — which lines of a text a pattern selects.
"""

from __future__ import annotations

import re
from collections.abc import Sequence
from enum import Enum


class MatchPositions(str, Enum):
    """Which matching lines an edit acts on."""

    FIRST = "first"
    LAST = "last"
    ALL = "all"


def find_positions(
    lines: Sequence[str],
    pattern: re.Pattern[str],
    mode: MatchPositions,
) -> list[int]:
    """Return the indices of lines matching ``pattern``, filtered by ``mode``.

    A line matches when the pattern is found anywhere in it. ``FIRST`` and
    ``LAST`` return at most one index; ``ALL`` returns every match in
    ascending order. No match is an empty list, never an error.
    """
    if mode is MatchPositions.FIRST:
        for idx, line in enumerate(lines):
            if pattern.search(line):
                return [idx]
        return []

    if mode is MatchPositions.LAST:
        for idx in range(len(lines) - 1, -1, -1):
            if pattern.search(lines[idx]):
                return [idx]
        return []

    return [idx for idx, line in enumerate(lines) if pattern.search(line)]
