"""
Plain-text temporal network format.

Layout::

    4                     <- number of nodes
    0<TAB>A               <- node id and label, one line per node
    1<TAB>B
    ...
    0 1 1:x               <- source, destination, timestamp:label
    0 3 4:x,5:y           <- several timestamped edges between one pair

Edges get ids in file order. Self edges are skipped.
"""

from __future__ import annotations

import logging
from itertools import groupby
from pathlib import Path
from typing import Dict, Iterable, List, Tuple, Union

from .core.graph import TemporalGraph

logger = logging.getLogger(__name__)


def _parse_node(line: str, lineno: int) -> Tuple[int, str]:
    fields = line.split()
    if len(fields) != 2:
        raise ValueError(f"Line {lineno}: expected '<id>\\t<label>', got {line!r}")
    try:
        node_id = int(fields[0])
    except ValueError:
        raise ValueError(f"Line {lineno}: invalid node id {fields[0]!r}")
    if ":" in fields[1]:
        raise ValueError(f"Line {lineno}: label {fields[1]!r} looks like an edge, "
                         f"expected '<id>\\t<label>'")
    return node_id, fields[1]


def _parse_edges(line: str, lineno: int) -> List[Tuple[int, int, int, str]]:
    fields = line.split()
    if len(fields) != 3:
        raise ValueError(f"Line {lineno}: expected '<src> <dst> <t>:<label>[,...]', got {line!r}")
    try:
        source, destination = int(fields[0]), int(fields[1])
    except ValueError:
        raise ValueError(f"Line {lineno}: invalid node ids in {line!r}")

    edges = []
    for item in fields[2].split(","):
        timestamp, sep, label = item.partition(":")
        if not sep:
            raise ValueError(f"Line {lineno}: edge {item!r} is not '<timestamp>:<label>'")
        try:
            edges.append((source, destination, int(timestamp), label))
        except ValueError:
            raise ValueError(f"Line {lineno}: invalid timestamp {timestamp!r}")
    return edges


def parse_network(lines: Iterable[str], directed: bool = True) -> TemporalGraph:
    """
    Build a temporal graph from lines in the text format.

    Parameters
    ----------
    lines : iterable of str
        File contents, one entry per line
    directed : bool
        Interpret edges as directed

    Returns
    -------
    TemporalGraph

    Raises
    ------
    ValueError
        On malformed content; the message names the offending line
    """
    it = ((i, raw.strip()) for i, raw in enumerate(lines, start=1))
    it = ((i, line) for i, line in it if line)

    try:
        lineno, first = next(it)
    except StopIteration:
        raise ValueError("Empty network: missing node count")
    try:
        n_nodes = int(first)
    except ValueError:
        raise ValueError(f"Line {lineno}: expected node count, got {first!r}")

    labels: Dict[int, str] = {}
    for _ in range(n_nodes):
        try:
            lineno, line = next(it)
        except StopIteration:
            raise ValueError(f"Expected {n_nodes} node lines, found {len(labels)}")
        node_id, label = _parse_node(line, lineno)
        if node_id in labels:
            raise ValueError(f"Line {lineno}: duplicate node id {node_id}")
        labels[node_id] = label

    edges: List[Tuple[int, int, int, str]] = []
    self_loops = 0
    for lineno, line in it:
        parsed = _parse_edges(line, lineno)
        if parsed[0][0] == parsed[0][1]:
            self_loops += len(parsed)
            continue
        edges.extend(parsed)

    if self_loops:
        logger.debug(f"Skipped {self_loops} self edges")

    return TemporalGraph(labels, edges, directed=directed)


def read_network(path: Union[str, Path], directed: bool = True) -> TemporalGraph:
    """Load a temporal graph from a text network file."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Network file not found: {path}")
    logger.info(f"Reading network {path}")
    with open(path, "r") as f:
        return parse_network(f, directed=directed)


def format_network(graph: TemporalGraph) -> str:
    """Render ``graph`` in the text format (inverse of ``parse_network``)."""
    lines = [str(graph.n_nodes)]
    lines.extend(f"{n}\t{graph.label(n)}" for n in graph.nodes)
    # consecutive edges on one pair share a line, so edge ids survive a round trip
    for (source, destination), run in groupby(graph.edges, key=lambda e: (e.source, e.destination)):
        items = ",".join(f"{e.timestamp}:{e.label}" for e in run)
        lines.append(f"{source} {destination} {items}")
    return "\n".join(lines) + "\n"


def write_network(graph: TemporalGraph, path: Union[str, Path]) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(format_network(graph))
    logger.info(f"Wrote network to {path}")
    return path
