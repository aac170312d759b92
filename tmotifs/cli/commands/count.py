"""Motif counting and network inspection commands."""

import sys
import time
from pathlib import Path
from typing import Optional

import click

from ...config import parse_delta
from ...exceptions import InvalidConfigurationError, SearchResourceError
from ...io_text import read_network
from ...motifs.search import DEFAULT_MAX_EDGES, DEFAULT_MAX_NODES, MotifEnumerator


class DeltaType(click.ParamType):
    """Non-negative integer or ``inf``."""
    name = "delta"

    def convert(self, value, param, ctx):
        if value is None or isinstance(value, int):
            return value
        try:
            return parse_delta(value)
        except ValueError as e:
            self.fail(str(e), param, ctx)


def register_count_commands(cli: click.Group) -> None:
    """Register motif counting commands."""
    @cli.command("count", help="Count temporal motifs of a network file")
    @click.argument("network", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option(
        "-d", "--delta",
        type=DeltaType(),
        default="inf",
        show_default=True,
        help="Maximum time spread of an occurrence ('inf' for no limit)"
    )
    @click.option(
        "-u", "--undirected",
        is_flag=True,
        help="Treat the network as undirected (default: directed)"
    )
    @click.option(
        "-n", "--max-nodes",
        type=click.IntRange(min=2),
        default=DEFAULT_MAX_NODES,
        show_default=True,
        help="Maximum number of nodes per motif"
    )
    @click.option(
        "-e", "--max-edges",
        type=click.IntRange(min=1),
        default=DEFAULT_MAX_EDGES,
        show_default=True,
        help="Maximum number of edges per motif"
    )
    @click.option(
        "-o", "--output",
        type=click.Path(file_okay=False, path_type=Path),
        default=Path("out"),
        show_default=True,
        help="Output directory"
    )
    @click.option(
        "--format", "fmt",
        type=click.Choice(["csv", "json"]),
        default="csv",
        show_default=True,
        help="Result file format"
    )
    @click.option("--dump", is_flag=True, help="Also write every occurrence")
    @click.option("--max-states", type=click.IntRange(min=1), default=None,
                  help="Abort once this many distinct occurrences were explored")
    @click.option("--progress", is_flag=True, help="Show a progress bar over seed nodes")
    def count(network: Path, delta: Optional[int], undirected: bool, max_nodes: int,
              max_edges: int, output: Path, fmt: str, dump: bool,
              max_states: Optional[int], progress: bool):
        """Count every motif of NETWORK and write the result table.

        Examples:

        \b
            tmotifs count data/network.txt
            tmotifs count data/network.txt -d 3600 -u -n 4 -e 6
        """
        try:
            start = time.perf_counter()
            click.echo(f"Reading target graph {network}...")
            graph = read_network(network, directed=not undirected)
            read_seconds = time.perf_counter() - start

            start = time.perf_counter()
            click.echo("Mining motifs...")
            enumerator = MotifEnumerator(
                graph,
                max_nodes=max_nodes,
                max_edges=max_edges,
                keep_occurrences=dump,
                max_states=max_states,
                show_progress=progress,
            )
            table = enumerator.find_motifs(delta)
            search_seconds = time.perf_counter() - start
        except (ValueError, SearchResourceError) as e:
            kind = "Configuration error" if isinstance(e, InvalidConfigurationError) else "Error"
            click.echo(f"{kind}: {e}", err=True)
            sys.exit(1)

        filename = table.filename(network.name)
        if fmt == "json":
            path = table.write_json(output / (Path(filename).stem + ".json"))
        else:
            path = table.write_csv(output / filename)
        click.echo(f"Found {len(table)} motifs ({table.total_occurrences} occurrences)")
        click.echo(f"Results written to {path}")
        if dump:
            occ_path = table.write_occurrences(output / (Path(filename).stem + ".occ.txt"), graph)
            click.echo(f"Occurrences written to {occ_path}")

        click.echo(f"Time for reading: {read_seconds:.3f} secs")
        click.echo(f"Time for motifs mining: {search_seconds:.3f} secs")
        click.echo(f"Total time: {read_seconds + search_seconds:.3f} secs")

    @cli.command("summary", help="Print summary statistics of a network file")
    @click.argument("network", type=click.Path(exists=True, dir_okay=False, path_type=Path))
    @click.option("-u", "--undirected", is_flag=True, help="Treat the network as undirected")
    def summary(network: Path, undirected: bool):
        """Print node/edge counts, degrees, labels and time span."""
        try:
            graph = read_network(network, directed=not undirected)
        except ValueError as e:
            click.echo(f"Error: {e}", err=True)
            sys.exit(1)
        for key, value in graph.summary().items():
            click.echo(f"{key}: {value}")
