"""Pappascan CLI — top-level Click group."""

from __future__ import annotations

import click


@click.group()
@click.version_option(package_name="pappascan")
@click.option("--verbose", "-v", is_flag=True, help="Debug logging and full tracebacks on errors.")
def cli(verbose: bool) -> None:
    """Pappascan — bubble detection and crunch metrics for fried discs."""
    from pappascan.cli import utils

    utils.verbose = verbose
    if verbose:
        utils.configure_logging()


def _register_commands() -> None:
    """Register all subcommands — imports deferred to avoid loading heavy deps at startup."""
    from pappascan.cli.analyze import analyze
    from pappascan.cli.annotate import annotate
    from pappascan.cli.compare import compare

    cli.add_command(analyze)
    cli.add_command(annotate)
    cli.add_command(compare)


_register_commands()
