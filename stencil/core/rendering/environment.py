"""
Template renderer — Jinja2 wrapped behind a small surface.

The engine only needs three things from a template engine: render a
string, register a named template, render a named template. Every
Jinja2 failure comes out as ``RenderError``.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

import jinja2

from stencil.core.errors import RenderError
from stencil.core.rendering.filters import FILTERS

logger = logging.getLogger(__name__)


class TemplateRenderer:
    """Jinja2 environment with the stencil filters and a named-template registry."""

    def __init__(self, strict: bool = False):
        self._templates: dict[str, str] = {}
        self.env = jinja2.Environment(
            loader=jinja2.DictLoader(self._templates),
            keep_trailing_newline=True,
            undefined=jinja2.StrictUndefined if strict else jinja2.Undefined,
        )
        self.env.filters.update(FILTERS)

    @property
    def template_names(self) -> list[str]:
        return sorted(self._templates)

    def add_template(self, name: str, source: str) -> None:
        """Register ``source`` under ``name``. Syntax errors surface now."""
        try:
            self.env.parse(source)
        except jinja2.TemplateSyntaxError as e:
            raise RenderError(f"Invalid template '{name}': {e}") from e
        if name in self._templates:
            logger.debug("Replacing template: %s", name)
        self._templates[name] = source

    def render_str(self, source: str, variables: Mapping[str, Any]) -> str:
        try:
            return self.env.from_string(source).render(dict(variables))
        except jinja2.TemplateError as e:
            raise RenderError(f"Cannot render template: {e}") from e

    def render_named(self, name: str, variables: Mapping[str, Any]) -> str:
        try:
            return self.env.get_template(name).render(dict(variables))
        except jinja2.TemplateNotFound as e:
            raise RenderError(f"No template registered as '{name}'") from e
        except jinja2.TemplateError as e:
            raise RenderError(f"Cannot render template '{name}': {e}") from e
