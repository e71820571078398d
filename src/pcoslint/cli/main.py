"""pcoslint CLI entry point: Click group with subcommands."""

import click

from pcoslint import __version__


@click.group()
@click.version_option(version=__version__, prog_name="pcoslint")
def cli() -> None:
    """pcoslint - naming and interface linter for PCOS stylesheets."""


# Import and register subcommands
from pcoslint.cli.check import check  # noqa: E402
from pcoslint.cli.inspect import inspect  # noqa: E402

cli.add_command(check)
cli.add_command(inspect)
