"""
Rendering — Jinja2 environment and the filters templates can use.
"""

from stencil.core.rendering.environment import TemplateRenderer

__all__ = ["TemplateRenderer"]
