"""
Generator — the central generation loop.

Takes a template, renders it, splits the result into directive/body
pairs and runs them in order.

Flow:
    template → render → split into pairs → for each pair:
        skip check → write body → run injections → collect message

Pairs run strictly in source order and the first failure stops the
run. Files written by earlier pairs stay on disk.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from functools import reduce
from pathlib import Path
from typing import Any

from stencil.adapters.base import Printer, Storage
from stencil.adapters.console import ConsolePrinter
from stencil.adapters.filesystem import FilesystemStorage
from stencil.core.engine.document import parse_document
from stencil.core.engine.injector import run_injection
from stencil.core.models.directive import Directive
from stencil.core.models.result import GenResult
from stencil.core.rendering.environment import TemplateRenderer

logger = logging.getLogger(__name__)


def merge_messages(results: list[GenResult]) -> GenResult:
    """Fold per-pair results into the document result.

    Skipped pairs and pairs without a message contribute nothing.
    """

    def _fold(acc: list[str], result: GenResult) -> list[str]:
        if result.generated and result.message:
            return [*acc, result.message]
        return acc

    messages: list[str] = reduce(_fold, results, [])
    return GenResult.done("\n".join(messages))


class Generator:
    """Renders templates and applies the resulting directives.

    Args:
        storage: File access. Defaults to the real filesystem.
        printer: Event reporting. Defaults to the console.
        working_dir: Base directory for relative target paths and globs.
        renderer: Template engine. Defaults to a fresh Jinja2 renderer.
    """

    def __init__(
        self,
        storage: Storage | None = None,
        printer: Printer | None = None,
        working_dir: Path | str | None = None,
        renderer: TemplateRenderer | None = None,
    ):
        self.storage = storage or FilesystemStorage()
        self.printer = printer or ConsolePrinter()
        self.working_dir = Path(working_dir) if working_dir is not None else None
        self.renderer = renderer or TemplateRenderer()

    @classmethod
    def with_working_dir(cls, working_dir: Path | str, **kwargs: Any) -> Generator:
        """Generator whose relative paths resolve under ``working_dir``."""
        return cls(working_dir=working_dir, **kwargs)

    # ── Public operations ───────────────────────────────────────

    def generate(self, template: str, variables: Mapping[str, Any] | None = None) -> GenResult:
        """Render ``template`` with ``variables`` and run it.

        Raises:
            RenderError: Template failed to render. Nothing is written.
            ParseError: Rendered document is malformed. Nothing is written.
            TargetMissingError: An injection target does not exist.
            StorageError: A read or write failed.
        """
        variables = variables or {}
        logger.debug("input: %r", template)
        logger.debug("vars: %r", variables)
        rendered = self.renderer.render_str(template, variables)
        return self.handle_rendered(rendered)

    def generate_named(self, name: str, variables: Mapping[str, Any] | None = None) -> GenResult:
        """Same as ``generate`` with a template added by ``register_template``."""
        rendered = self.renderer.render_named(name, variables or {})
        return self.handle_rendered(rendered)

    def register_template(self, name: str, template: str) -> None:
        """Add a reusable template to the renderer's namespace."""
        self.renderer.add_template(name, template)

    def handle_rendered(self, rendered: str) -> GenResult:
        """Split an already-rendered document into pairs and run them."""
        logger.debug("rendered: %r", rendered)
        pairs = parse_document(rendered)
        results = [self.handle_directive(directive, body) for directive, body in pairs]
        return merge_messages(results)

    # ── One pair ────────────────────────────────────────────────

    def resolve(self, path: str) -> Path:
        """Resolve a target path against the working directory."""
        p = Path(path)
        if self.working_dir is None or p.is_absolute():
            return p
        return self.working_dir / p

    def handle_directive(self, directive: Directive, body: str) -> GenResult:
        """Apply one directive: skip, or write ``body`` and run its injections."""
        path_to = self.resolve(directive.target_path)

        if directive.skip_if_exists and self.storage.exists(path_to):
            logger.debug("Skipping %s: target exists", path_to)
            self.printer.on_skipped_existing(path_to)
            return GenResult.skip()

        if directive.skip_if_glob_matches:
            pattern = str(self.resolve(directive.skip_if_glob_matches))
            if self.storage.glob(pattern):
                logger.debug("Skipping %s: glob %s matched", path_to, pattern)
                self.printer.on_skipped_existing(path_to)
                return GenResult.skip()

        existed = self.storage.exists(path_to)
        self.storage.write(path_to, body)
        if existed:
            self.printer.on_overwritten(path_to)
        else:
            self.printer.on_added(path_to)
        logger.info("Wrote %s", path_to)

        for injection in directive.injections:
            run_injection(injection, self.resolve(injection.target_path), self.storage, self.printer)

        return GenResult.done(directive.message)
