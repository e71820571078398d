"""CLI command: pcoslint check -- lint stylesheets for PCOS conventions."""

from __future__ import annotations

import logging
import sys
from pathlib import Path

import click

from pcoslint.cli.loader import entry_ids, load_sources
from pcoslint.config import ConfigError, LintConfig, prefixes
from pcoslint.engine import analyze
from pcoslint.model.diagnostic import Severity
from pcoslint.report import format_json, format_text

logger = logging.getLogger(__name__)

_SEVERITIES = click.Choice([s.value for s in Severity])


def build_config(
    prefix: tuple[str, ...],
    max_depth: int,
    unresolved_as_warning: bool,
    type_mismatch: str,
    ignore: tuple[str, ...],
) -> LintConfig:
    try:
        return LintConfig(
            allowed_prefixes=prefixes(prefix) if prefix else LintConfig.allowed_prefixes,
            max_element_nesting_depth=max_depth,
            treat_unresolved_implements_as_error=not unresolved_as_warning,
            type_mismatch_severity=Severity.parse(type_mismatch),
            ignore_selectors=ignore,
        )
    except ConfigError as exc:
        raise click.UsageError(str(exc)) from exc


@click.command()
@click.argument("paths", nargs=-1, required=True, type=click.Path(exists=True, path_type=Path))
@click.option("--entry", "entries", multiple=True, type=click.Path(exists=True, path_type=Path),
              help="Entry file to start import traversal from (repeatable). Default: all files.")
@click.option("--prefix", multiple=True, help="Allowed type prefix (repeatable). Default: c, u.")
@click.option("--max-depth", default=1, show_default=True, help="Maximum element nesting depth.")
@click.option("--unresolved-as-warning", is_flag=True,
              help="Report unresolved @implements references as warnings.")
@click.option("--type-mismatch", type=_SEVERITIES, default="warning", show_default=True,
              help="Severity for member type tag mismatches.")
@click.option("--ignore", multiple=True, help="Regex of class names to skip (repeatable).")
@click.option("--format", "output_format", type=click.Choice(["text", "json"]), default="text",
              show_default=True)
@click.option("--fail-on", type=_SEVERITIES, default="error", show_default=True,
              help="Lowest severity that makes the command exit non-zero.")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging.")
def check(
    paths: tuple[Path, ...],
    entries: tuple[Path, ...],
    prefix: tuple[str, ...],
    max_depth: int,
    unresolved_as_warning: bool,
    type_mismatch: str,
    ignore: tuple[str, ...],
    output_format: str,
    fail_on: str,
    verbose: bool,
) -> None:
    """Lint stylesheets for PCOS naming and interface conformance.

    Prints diagnostics and exits with code 1 if any diagnostic reaches
    the --fail-on severity, otherwise 0.
    """
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    config = build_config(prefix, max_depth, unresolved_as_warning, type_mismatch, ignore)
    sources, root = load_sources(paths)
    entry_list = entry_ids(entries, root) if entries else None
    logger.debug("Loaded %d file(s) from %s", len(sources), root)

    result = analyze(sources, entry_list, config)

    if output_format == "json":
        click.echo(format_json(result.diagnostics))
    elif not result.diagnostics:
        click.echo(f"OK: {len(sources)} file(s) checked (0 diagnostics)")
    else:
        click.echo(format_text(result.diagnostics))

    sys.exit(result.exit_code(Severity.parse(fail_on)))
