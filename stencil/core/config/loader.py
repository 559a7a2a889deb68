"""
Variables loader — builds the mapping a template is rendered with.

Variables come from a YAML (or JSON) file and from ``key=value``
assignments given on the command line. Assignments win over the file.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

import yaml

logger = logging.getLogger(__name__)


class ConfigError(Exception):
    """Raised when a variables file or assignment is invalid."""


def load_variables_file(path: Path) -> dict[str, Any]:
    """Load a YAML or JSON mapping of template variables.

    Args:
        path: File to read. An empty file yields an empty mapping.

    Returns:
        The decoded mapping.

    Raises:
        ConfigError: If the file is missing, unreadable, not valid YAML,
            or not a mapping.
    """
    if not path.is_file():
        raise ConfigError(f"Variables file not found: {path}")

    logger.debug("Loading variables from %s", path)

    try:
        raw = path.read_text(encoding="utf-8")
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e

    try:
        data = yaml.safe_load(raw)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {path}: {e}") from e

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ConfigError(f"Expected a YAML mapping in {path}, got {type(data).__name__}")
    return data


def parse_assignment(assignment: str) -> tuple[list[str], Any]:
    """Split ``a.b=value`` into ``(["a", "b"], value)``.

    The value is read as a YAML scalar, so ``true`` and ``3`` become
    bool and int. An empty value is the empty string.
    """
    key, sep, raw = assignment.partition("=")
    key = key.strip()
    if not sep or not key:
        raise ConfigError(f"Expected key=value, got {assignment!r}")

    parts = key.split(".")
    if any(not p for p in parts):
        raise ConfigError(f"Invalid variable name: {key!r}")

    if raw == "":
        return parts, ""
    try:
        value = yaml.safe_load(raw)
    except yaml.YAMLError:
        value = raw
    # Only scalars; "[a" or "{x" are taken literally
    if isinstance(value, (dict, list)) or value is None:
        value = raw
    return parts, value


def apply_assignments(variables: dict[str, Any], assignments: Iterable[str]) -> dict[str, Any]:
    """Merge ``key=value`` assignments into ``variables`` (in place) and return it."""
    for assignment in assignments:
        parts, value = parse_assignment(assignment)
        node = variables
        for part in parts[:-1]:
            child = node.get(part)
            if not isinstance(child, dict):
                child = {}
                node[part] = child
            node = child
        node[parts[-1]] = value
    return variables


def load_variables(
    path: Path | None = None,
    assignments: Iterable[str] = (),
) -> dict[str, Any]:
    """Variables from an optional file, overridden by assignments."""
    variables = load_variables_file(path) if path is not None else {}
    return apply_assignments(variables, assignments)
