"""CLI command: pcoslint inspect -- show the resolved declaration registry."""

from __future__ import annotations

import json
from pathlib import Path

import click

from pcoslint.cli.loader import entry_ids, load_sources
from pcoslint.engine import analyze
from pcoslint.report import registry_to_dict


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--entry", "entries", multiple=True, type=click.Path(exists=True, path_type=Path),
              help="Entry file to start import traversal from (repeatable).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              show_default=True)
def inspect(paths: tuple[Path, ...], entries: tuple[Path, ...], output_format: str) -> None:
    """List declarations found in the given stylesheets."""
    sources, root = load_sources(paths)
    result = analyze(sources, entry_ids(entries, root) if entries else None)
    registry = result.registry

    if output_format == "json":
        click.echo(json.dumps(registry_to_dict(registry), indent=2))
        return

    click.echo(f"Files: {len(registry.files)}")
    for file_id in registry.files:
        click.echo(f"  {file_id}")
    click.echo(f"Declarations: {len(registry)}")
    for decl in registry.declarations.values():
        line = f"  {decl.kind.value:<10} {decl.name:<30} {decl.span}"
        if decl.implements:
            line += f"  implements {decl.implements}"
        click.echo(line)
