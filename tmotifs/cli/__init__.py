"""
Command-line interface for tmotifs.

``tmotifs count`` and ``tmotifs summary`` work on a network file,
``tmotifs run`` on a YAML run configuration.
"""

import logging

import click

from ..log import setup_logging
from .commands.count import register_count_commands
from .commands.pipeline import register_pipeline_commands

# -v -> INFO, -vv (or more) -> DEBUG
VERBOSITY = {0: logging.WARNING, 1: logging.INFO}


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="tmotifs")
@click.option("-v", "--verbose", count=True, help="Increase log verbosity (-v info, -vv debug)")
@click.pass_context
def cli(ctx: click.Context, verbose: int) -> None:
    """Temporal network motif counting."""
    ctx.ensure_object(dict)
    level = VERBOSITY.get(verbose, logging.DEBUG)
    ctx.obj["log_level"] = level
    setup_logging(level)


register_count_commands(cli)
register_pipeline_commands(cli)


def main() -> None:
    """Console script entry point."""
    cli(obj={})
