"""YAML-based run CLI commands."""

import sys
import click
from pathlib import Path


def register_pipeline_commands(cli: click.Group) -> None:
    """Register pipeline-related commands."""
    @cli.command("run", help="Run a motif count from YAML configuration")
    @click.argument("config", type=click.Path(exists=True, path_type=Path))
    @click.option(
        "--validate-only",
        is_flag=True,
        help="Only validate configuration, don't run"
    )
    def run(config: Path, validate_only: bool):
        """Run a motif count from a YAML configuration file.

        Examples:

        \b
            tmotifs run configs/email.yaml
            tmotifs run configs/email.yaml --validate-only
        """
        from ...config import RunConfig
        from ...exceptions import SearchResourceError
        from ...factory import run_from_config
        from ...log import setup_logging

        try:
            cfg = RunConfig.from_yaml(config)
        except (ValueError, TypeError) as e:
            click.echo(f"Configuration error: {e}", err=True)
            sys.exit(1)

        if validate_only:
            delta = cfg.search.delta if cfg.search.delta is not None else "inf"
            click.echo(f"Configuration valid: {config}")
            click.echo(f"  Input: {cfg.input.path} ({cfg.input.format}, "
                       f"{'directed' if cfg.input.directed else 'undirected'})")
            click.echo(f"  Search: delta={delta}, max_nodes={cfg.search.max_nodes}, "
                       f"max_edges={cfg.search.max_edges}")
            click.echo(f"  Output: {cfg.output.directory} ({cfg.output.format})")
            return

        setup_logging(cfg.logging.level, cfg.logging.log_file)
        try:
            result = run_from_config(cfg)
        except (ValueError, FileNotFoundError, SearchResourceError) as e:
            click.echo(f"Run failed: {e}", err=True)
            sys.exit(1)

        click.echo(f"Found {len(result.table)} motifs "
                   f"({result.table.total_occurrences} occurrences)")
        for path in result.written:
            click.echo(f"Wrote {path}")
        click.echo(f"Time for reading: {result.read_seconds:.3f} secs")
        click.echo(f"Time for motifs mining: {result.search_seconds:.3f} secs")
