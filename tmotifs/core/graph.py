"""
Temporal graph representation.

Nodes carry a label, edges carry a timestamp and a label. Adjacency is indexed
once at construction time and is read-only afterwards.
"""

import logging
import numbers
from dataclasses import dataclass
from typing import Any, Dict, Hashable, Iterable, List, Mapping, Optional, Tuple

import numpy as np
from numpy.typing import NDArray

logger = logging.getLogger(__name__)


def _as_timestamp(value: Any, edge_id: int) -> int:
    """Integer timestamp; integral floats are accepted, anything else is rejected."""
    if isinstance(value, numbers.Integral) and not isinstance(value, bool):
        return int(value)
    if isinstance(value, numbers.Real) and not isinstance(value, bool) and float(value).is_integer():
        return int(value)
    raise ValueError(f"Edge {edge_id} has non-integral timestamp {value!r}")


@dataclass(frozen=True)
class Edge:
    """
    A single timestamped, labeled edge.

    Attributes
    ----------
    id : int
        Unique edge id (position in the graph's edge sequence)
    source, destination : int
        Endpoint node ids
    timestamp : int
        Time at which the edge occurs
    label : hashable
        Edge label
    """

    id: int
    source: int
    destination: int
    timestamp: int
    label: Hashable

    def other(self, node: int) -> int:
        """Endpoint opposite to ``node``."""
        if node == self.source:
            return self.destination
        if node == self.destination:
            return self.source
        raise ValueError(f"Node {node} is not an endpoint of edge {self.id}")


class TemporalGraph:
    """
    Immutable temporal network with time-ordered adjacency indexes.

    Parameters
    ----------
    node_labels : mapping of int -> label
        Every node id with its label
    edges : iterable of (source, destination, timestamp, label)
        Edge ids are assigned progressively from 0 in input order
    directed : bool
        If False, a single reciprocal index is kept and ``in_edges`` is empty

    Notes
    -----
    Incident edges of a node are ordered by ``(timestamp, source,
    destination, id)``, so enumeration order is reproducible.

    Examples
    --------
    >>> G = TemporalGraph({0: "A", 1: "B"}, [(0, 1, 10, "x"), (1, 0, 12, "y")])
    >>> G.n_edges
    2
    >>> [e.id for e in G.out_edges(1)]
    [1]
    """

    def __init__(
        self,
        node_labels: Mapping[int, Hashable],
        edges: Iterable[Tuple[int, int, int, Hashable]],
        directed: bool = True,
    ):
        self.directed = bool(directed)
        self._labels: Dict[int, Hashable] = {int(n): lab for n, lab in node_labels.items()}
        self._nodes: Tuple[int, ...] = tuple(sorted(self._labels))

        edge_list: List[Edge] = []
        for i, (source, destination, timestamp, label) in enumerate(edges):
            source, destination = int(source), int(destination)
            for endpoint in (source, destination):
                if endpoint not in self._labels:
                    raise ValueError(f"Edge {i} references unknown node {endpoint}")
            if source == destination:
                raise ValueError(f"Edge {i} is a self-loop on node {source}")
            edge_list.append(Edge(i, source, destination, _as_timestamp(timestamp, i), label))
        self._edges: Tuple[Edge, ...] = tuple(edge_list)

        self._out: Dict[int, Tuple[Edge, ...]] = {}
        self._in: Dict[int, Tuple[Edge, ...]] = {}
        self._build_indexes()

        logger.info(f"Built temporal graph: nodes={self.n_nodes}, edges={self.n_edges}, "
                    f"directed={self.directed}")

    def _build_indexes(self) -> None:
        out: Dict[int, List[Edge]] = {n: [] for n in self._nodes}
        inc: Dict[int, List[Edge]] = {n: [] for n in self._nodes}

        if self._edges:
            ids = np.fromiter((e.id for e in self._edges), dtype=np.int64, count=self.n_edges)
            src = np.fromiter((e.source for e in self._edges), dtype=np.int64, count=self.n_edges)
            dst = np.fromiter((e.destination for e in self._edges), dtype=np.int64, count=self.n_edges)
            ts = self.timestamps()
            # lexsort: last key is primary
            order = np.lexsort((ids, dst, src, ts))
        else:
            order = np.empty(0, dtype=np.int64)

        for idx in order:
            edge = self._edges[int(idx)]
            out[edge.source].append(edge)
            if self.directed:
                inc[edge.destination].append(edge)
            else:
                out[edge.destination].append(edge)

        self._out = {n: tuple(lst) for n, lst in out.items()}
        self._in = {n: tuple(lst) for n, lst in inc.items()} if self.directed else {}

    @property
    def nodes(self) -> Tuple[int, ...]:
        """Node ids in ascending order."""
        return self._nodes

    @property
    def edges(self) -> Tuple[Edge, ...]:
        """Edges indexed by edge id."""
        return self._edges

    @property
    def node_labels(self) -> Dict[int, Hashable]:
        return dict(self._labels)

    @property
    def n_nodes(self) -> int:
        return len(self._nodes)

    @property
    def n_edges(self) -> int:
        return len(self._edges)

    def label(self, node: int) -> Hashable:
        return self._labels[node]

    def edge(self, edge_id: int) -> Edge:
        return self._edges[edge_id]

    def out_edges(self, node: int) -> Tuple[Edge, ...]:
        """
        Time-ordered outgoing edges of ``node``.

        For undirected graphs this is every incident edge.
        """
        return self._out[node]

    def in_edges(self, node: int) -> Tuple[Edge, ...]:
        """Time-ordered incoming edges of ``node`` (empty when undirected)."""
        if not self.directed:
            return ()
        return self._in[node]

    def timestamps(self) -> NDArray[np.int64]:
        """Edge timestamps in edge-id order."""
        return np.fromiter((e.timestamp for e in self._edges), dtype=np.int64, count=self.n_edges)

    def time_span(self) -> Optional[Tuple[int, int]]:
        """(earliest, latest) timestamp, or None for a graph without edges."""
        if not self._edges:
            return None
        ts = self.timestamps()
        return int(ts.min()), int(ts.max())

    def degree_sequence(self) -> NDArray[np.int64]:
        """
        Number of incident edges per node, in ``nodes`` order.

        Parallel edges with different timestamps are counted separately.
        """
        index = {n: i for i, n in enumerate(self._nodes)}
        endpoints = [index[e.source] for e in self._edges] + [index[e.destination] for e in self._edges]
        return np.bincount(np.asarray(endpoints, dtype=np.int64), minlength=self.n_nodes)

    def summary(self) -> Dict[str, Any]:
        """
        Graph summary statistics.

        Returns
        -------
        stats : dict
            n_nodes, n_edges, directed, avg_degree, max_degree,
            n_node_labels, n_edge_labels, t_min, t_max
        """
        degrees = self.degree_sequence()
        span = self.time_span()
        return {
            'n_nodes': self.n_nodes,
            'n_edges': self.n_edges,
            'directed': self.directed,
            'avg_degree': float(np.mean(degrees)) if self.n_nodes else 0.0,
            'max_degree': int(degrees.max()) if self.n_nodes else 0,
            'n_node_labels': len(set(self._labels.values())),
            'n_edge_labels': len({e.label for e in self._edges}),
            't_min': span[0] if span else None,
            't_max': span[1] if span else None,
        }

    def as_networkx(self):
        """
        Convert to a NetworkX multigraph.

        Returns
        -------
        G : networkx.MultiDiGraph or networkx.MultiGraph
            Nodes carry ``label``; edges are keyed by edge id and carry
            ``timestamp`` and ``label``.
        """
        import networkx as nx

        G = nx.MultiDiGraph() if self.directed else nx.MultiGraph()
        for node in self._nodes:
            G.add_node(node, label=self._labels[node])
        for e in self._edges:
            G.add_edge(e.source, e.destination, key=e.id, timestamp=e.timestamp, label=e.label)
        return G

    def __repr__(self) -> str:
        return (f"TemporalGraph(n_nodes={self.n_nodes}, n_edges={self.n_edges}, "
                f"directed={self.directed})")
