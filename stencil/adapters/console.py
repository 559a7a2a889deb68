"""
Console printers — report file events on the terminal, or collect them.
"""

from __future__ import annotations

from pathlib import Path

import click

from stencil.adapters.base import Printer


class ConsolePrinter(Printer):
    """One line per event, ``added: path`` style."""

    def on_added(self, path: Path) -> None:
        click.secho("added: ", fg="green", nl=False)
        click.echo(str(path))

    def on_overwritten(self, path: Path) -> None:
        click.secho("overwritten: ", fg="yellow", nl=False)
        click.echo(str(path))

    def on_skipped_existing(self, path: Path) -> None:
        click.secho("skipped (exists): ", fg="cyan", nl=False)
        click.echo(str(path))

    def on_injected(self, path: Path) -> None:
        click.secho("injected: ", fg="magenta", nl=False)
        click.echo(str(path))


class SilentPrinter(Printer):
    """Discards every event."""

    def on_added(self, path: Path) -> None:
        pass

    def on_overwritten(self, path: Path) -> None:
        pass

    def on_skipped_existing(self, path: Path) -> None:
        pass

    def on_injected(self, path: Path) -> None:
        pass


class CollectingPrinter(Printer):
    """Keeps (event, path) tuples instead of printing; backs ``--json`` output."""

    def __init__(self) -> None:
        self.events: list[tuple[str, str]] = []

    def _record(self, event: str, path: Path) -> None:
        self.events.append((event, Path(path).as_posix()))

    def on_added(self, path: Path) -> None:
        self._record("added", path)

    def on_overwritten(self, path: Path) -> None:
        self._record("overwritten", path)

    def on_skipped_existing(self, path: Path) -> None:
        self._record("skipped", path)

    def on_injected(self, path: Path) -> None:
        self._record("injected", path)

    def of(self, event: str) -> list[str]:
        """Paths recorded for one event type."""
        return [p for e, p in self.events if e == event]

    def reset(self) -> None:
        self.events.clear()
