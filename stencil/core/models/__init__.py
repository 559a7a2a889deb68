"""
Domain models — Pydantic types for a generation run.

    from stencil.core.models import Directive, Injection, InjectionKind, GenResult
"""

from stencil.core.models.directive import Directive, Injection, InjectionKind
from stencil.core.models.result import GenResult

__all__ = [
    "Directive",
    "GenResult",
    "Injection",
    "InjectionKind",
]
