"""
Columnar and graph-library adapters for tmotifs.

Provides thin adapters that turn pandas edge tables and NetworkX multigraphs
into a ``TemporalGraph``. The search core only ever sees ``TemporalGraph``.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Dict, Hashable, Optional, Union

import networkx as nx
import pandas as pd

from .core.graph import TemporalGraph

logger = logging.getLogger(__name__)

DEFAULT_LABEL = "0"


def from_pandas(
    edges: pd.DataFrame,
    nodes: Optional[pd.DataFrame] = None,
    source_col: str = "source",
    destination_col: str = "destination",
    time_col: str = "timestamp",
    label_col: Optional[str] = "label",
    node_col: str = "id",
    node_label_col: str = "label",
    directed: bool = True,
) -> TemporalGraph:
    """
    Build a temporal graph from pandas DataFrames.

    Parameters
    ----------
    edges : pd.DataFrame
        One row per timestamped edge; row order fixes edge ids
    nodes : pd.DataFrame, optional
        Node ids and labels. Nodes that only appear in ``edges`` (or all
        nodes, when omitted) get the label ``"0"``.
    source_col, destination_col, time_col : str
        Edge columns
    label_col : str, optional
        Edge label column; if None or absent every edge is labeled ``"0"``
    node_col, node_label_col : str
        Node columns
    directed : bool
        Interpret edges as directed

    Returns
    -------
    TemporalGraph

    Examples
    --------
    >>> df = pd.DataFrame({'source': [0, 1], 'destination': [1, 2],
    ...                    'timestamp': [10, 12], 'label': ['a', 'b']})
    >>> from_pandas(df, directed=False).n_edges
    2
    """
    for col in (source_col, destination_col, time_col):
        if col not in edges.columns:
            raise ValueError(f"Edge column '{col}' not found in DataFrame")

    # Drop rows with missing endpoints or timestamps
    required = [source_col, destination_col, time_col]
    n_before = len(edges)
    edges = edges.dropna(subset=required)
    if len(edges) < n_before:
        logger.warning(f"Dropped {n_before - len(edges)} edge rows with missing values")

    self_loops = edges[source_col] == edges[destination_col]
    if self_loops.any():
        logger.debug(f"Skipped {int(self_loops.sum())} self edges")
        edges = edges[~self_loops]

    labels: Dict[int, Hashable] = {}
    if nodes is not None:
        for col in (node_col, node_label_col):
            if col not in nodes.columns:
                raise ValueError(f"Node column '{col}' not found in DataFrame")
        for node_id, label in zip(nodes[node_col].astype(int), nodes[node_label_col].astype(str)):
            labels.setdefault(int(node_id), label)

    sources = edges[source_col].astype(int).tolist()
    destinations = edges[destination_col].astype(int).tolist()
    for node_id in sources + destinations:
        labels.setdefault(node_id, DEFAULT_LABEL)

    if label_col is not None and label_col in edges.columns:
        edge_labels = edges[label_col].astype(str).tolist()
    else:
        edge_labels = [DEFAULT_LABEL] * len(edges)

    # TemporalGraph rejects non-integral timestamps
    rows = zip(sources, destinations, edges[time_col].tolist(), edge_labels)
    return TemporalGraph(labels, rows, directed=directed)


def read_csv_network(
    path: Union[str, Path],
    nodes_path: Optional[Union[str, Path]] = None,
    directed: bool = True,
    **kwargs,
) -> TemporalGraph:
    """Load a temporal graph from a CSV edge list (and optional nodes CSV)."""
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Edge list not found: {path}")
    logger.info(f"Reading CSV edge list {path}")
    edges = pd.read_csv(path)
    nodes = pd.read_csv(nodes_path) if nodes_path is not None else None
    return from_pandas(edges, nodes, directed=directed, **kwargs)


def from_networkx(
    G: nx.Graph,
    time_attr: str = "timestamp",
    label_attr: str = "label",
    node_label_attr: str = "label",
) -> TemporalGraph:
    """
    Build a temporal graph from a NetworkX (multi)graph.

    Directedness follows ``G.is_directed()``. Non-integer node names are
    replaced by integers in sorted order. Edges without ``time_attr`` are
    rejected.
    """
    if not all(isinstance(n, int) for n in G.nodes):
        G = nx.convert_node_labels_to_integers(G, ordering="sorted", label_attribute="name")

    labels = {n: str(data.get(node_label_attr, DEFAULT_LABEL)) for n, data in G.nodes(data=True)}
    rows = []
    for u, v, data in G.edges(data=True):
        if time_attr not in data:
            raise ValueError(f"Edge ({u}, {v}) has no '{time_attr}' attribute")
        if u == v:
            continue
        rows.append((u, v, data[time_attr], str(data.get(label_attr, DEFAULT_LABEL))))
    return TemporalGraph(labels, rows, directed=G.is_directed())
