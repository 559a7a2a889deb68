"""
Stencil — CLI entrypoint.

Usage:
    python -m stencil.main --help
    stencil generate templates/model.t --set name=post
    stencil check templates/model.t --vars vars.yml
"""

from __future__ import annotations

import json
import sys
from pathlib import Path

import click

from stencil import __version__
from stencil.core.observability.logging_config import resolve_level, setup_from_env

_TEMPLATE_ARG = click.Path(exists=True, dir_okay=False, path_type=Path)


def _vars_options(func):
    """Shared ``--vars`` / ``--set`` options."""
    func = click.option(
        "--set",
        "-s",
        "assignments",
        multiple=True,
        metavar="KEY=VALUE",
        help="Set a template variable (dotted keys nest). Repeatable.",
    )(func)
    func = click.option(
        "--vars",
        "-V",
        "vars_file",
        type=click.Path(dir_okay=False, path_type=Path),
        default=None,
        help="YAML or JSON file with template variables.",
    )(func)
    return func


@click.group()
@click.version_option(version=__version__, prog_name="stencil")
@click.option("--verbose", "-v", is_flag=True, help="Enable verbose output.")
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-essential output.")
@click.option("--debug", is_flag=True, help="Enable debug logging (very verbose).")
@click.pass_context
def cli(ctx: click.Context, verbose: bool, quiet: bool, debug: bool) -> None:
    """Stencil — generate files from templates and patch existing ones."""
    ctx.ensure_object(dict)
    ctx.obj["verbose"] = verbose
    ctx.obj["quiet"] = quiet
    ctx.obj["debug"] = debug

    setup_from_env(resolve_level(debug, verbose, quiet), debug=debug)


@cli.command()
@click.argument("template", type=_TEMPLATE_ARG)
@_vars_options
@click.option(
    "--working-dir",
    "-C",
    "working_dir",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Resolve relative target paths under this directory.",
)
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
@click.pass_context
def generate(
    ctx: click.Context,
    template: Path,
    vars_file: Path | None,
    assignments: tuple[str, ...],
    working_dir: Path | None,
    as_json: bool,
) -> None:
    """Render TEMPLATE and write / patch the files it describes.

    Examples:

        stencil generate model.t --set name=post

        stencil generate controller.t --vars vars.yml -C ./app
    """
    from stencil.adapters.console import CollectingPrinter, ConsolePrinter, SilentPrinter
    from stencil.core.config.loader import ConfigError, load_variables
    from stencil.core.engine.generator import Generator
    from stencil.core.errors import StencilError

    if as_json:
        printer = CollectingPrinter()
    elif ctx.obj.get("quiet"):
        printer = SilentPrinter()
    else:
        printer = ConsolePrinter()

    try:
        variables = load_variables(vars_file, assignments)
        generator = Generator(printer=printer, working_dir=working_dir)
        result = generator.generate(template.read_text(encoding="utf-8"), variables)
    except (StencilError, ConfigError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        payload = result.model_dump(mode="json")
        payload["events"] = [{"event": e, "path": p} for e, p in printer.events]
        click.echo(json.dumps(payload, indent=2))
        return

    if result.message:
        click.echo()
        click.secho(result.message, fg="green")


@cli.command()
@click.argument("template", type=_TEMPLATE_ARG)
@_vars_options
@click.option("--json-output", "--json", "as_json", is_flag=True, help="Output as JSON.")
def check(
    template: Path,
    vars_file: Path | None,
    assignments: tuple[str, ...],
    as_json: bool,
) -> None:
    """Render and parse TEMPLATE without touching any file."""
    from stencil.core.config.loader import ConfigError, load_variables
    from stencil.core.engine.document import parse_document
    from stencil.core.errors import StencilError
    from stencil.core.rendering.environment import TemplateRenderer

    try:
        variables = load_variables(vars_file, assignments)
        rendered = TemplateRenderer().render_str(template.read_text(encoding="utf-8"), variables)
        pairs = parse_document(rendered)
    except (StencilError, ConfigError) as e:
        _fail(str(e), as_json)
        return

    if as_json:
        click.echo(json.dumps([_describe(d, body) for d, body in pairs], indent=2))
        return

    click.secho(f"✅ {len(pairs)} directive(s)", fg="green", bold=True)
    for directive, body in pairs:
        info = _describe(directive, body)
        policy = []
        if info["skip_exists"]:
            policy.append("skip if exists")
        if info["skip_glob"]:
            policy.append(f"skip if {info['skip_glob']}")
        policy_label = f" ({', '.join(policy)})" if policy else ""
        click.echo(f"   • {info['to']}{policy_label}  [{info['lines']} line(s)]")
        for inj in info["injections"]:
            click.echo(f"       ↳ {inj['kind'] or 'no-op'} → {inj['into']}")


def _describe(directive, body: str) -> dict:
    return {
        "to": directive.target_path,
        "skip_exists": directive.skip_if_exists,
        "skip_glob": directive.skip_if_glob_matches,
        "message": directive.message,
        "lines": len(body.splitlines()),
        "injections": [
            {
                "into": inj.target_path,
                "kind": inj.kind.value if inj.kind else None,
                "inline": inj.inline,
            }
            for inj in directive.injections
        ],
    }


def _fail(message: str, as_json: bool) -> None:
    if as_json:
        click.echo(json.dumps({"error": message}, indent=2))
    else:
        click.secho(f"❌ {message}", fg="red", err=True)
    sys.exit(1)


if __name__ == "__main__":
    cli()
