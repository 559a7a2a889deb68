"""
Stencil — template-driven file generation and idempotent file patching.

    from stencil import Generator

    Generator().generate(template_text, {"name": "post"})
"""

__version__ = "0.1.0"

from stencil.core.engine.generator import Generator  # noqa: E402
from stencil.core.models.result import GenResult  # noqa: E402

__all__ = ["GenResult", "Generator", "__version__"]
