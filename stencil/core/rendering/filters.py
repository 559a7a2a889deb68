"""
Template filters — case conversion and pluralization.

    {{ name | pascal_case }}   email_stats → EmailStats
    {{ name | plural }}        post → posts

Every filter accepts any casing style as input. Separators other than
letters and digits are folded into underscores before ``inflection``
does the actual conversion.
"""

from __future__ import annotations

import re
from collections.abc import Callable

import inflection

_SEPARATOR_RE = re.compile(r"[^0-9A-Za-z]+")

_LAST_WORD_RE = re.compile(r"(?:[A-Z]?[a-z]+|[A-Z]+)$")

# Consonant + o nouns taking -oes that inflection pluralizes with -s
_OES_NOUNS = frozenset({"hero", "echo", "veto", "torpedo", "embargo"})


def snake_case(value: str) -> str:
    """``"HTTPServerError"`` → ``"http_server_error"``."""
    return inflection.underscore(_SEPARATOR_RE.sub("_", str(value)).strip("_"))


def kebab_case(value: str) -> str:
    return inflection.dasherize(snake_case(value))


def pascal_case(value: str) -> str:
    return inflection.camelize(snake_case(value))


def lower_camel_case(value: str) -> str:
    snake = snake_case(value)
    return inflection.camelize(snake, uppercase_first_letter=False) if snake else ""


# Same as the lower-camel variant
camel_case = lower_camel_case


def _plural_word(word: str) -> str:
    if word.lower() in _OES_NOUNS:
        return word + "es"
    result = inflection.pluralize(word)
    # inflection leaves any -s word alone; -us is singular (campus, bonus)
    if result == word and word.lower().endswith("us"):
        return word + "es"
    return result


def plural(value: str) -> str:
    """Pluralize the last word, keeping everything before it.

    ``email_stat`` → ``email_stats``, ``BlogPerson`` → ``BlogPeople``.
    Words already ending in a plural ``s`` are left alone.
    """
    value = str(value)
    match = _LAST_WORD_RE.search(value)
    if not match:
        return value
    return value[: match.start()] + _plural_word(match.group(0))


FILTERS: dict[str, Callable[[str], str]] = {
    "snake_case": snake_case,
    "camel_case": camel_case,
    "kebab_case": kebab_case,
    "pascal_case": pascal_case,
    "lower_camel_case": lower_camel_case,
    "plural": plural,
}
