"""
Isomorphism-invariant canonical forms of temporal motifs.

Two occurrences get the same ``CanonicalForm`` when a node relabeling maps one
onto the other while preserving node labels, edge labels, edge direction (for
directed graphs) and the relative order of edge timestamps, ties included.
Absolute timestamps never reach the canonical form: each timestamp is replaced
by its dense rank among the distinct timestamps of the occurrence.

Canonical labeling is exact. Nodes are split into classes by an invariant
(label, degrees, multiset of incident (rank, edge label, neighbour label)),
classes are laid out in invariant order, and every permutation inside each
class is tried. The lexicographically smallest adjacency wins. Motif sizes are
small by configuration, which keeps this search tractable.
"""

from dataclasses import dataclass
from itertools import groupby, permutations, product
from typing import Dict, Hashable, List, Mapping, Optional, Tuple

from .partial import PartialMotif


@dataclass(frozen=True, order=True)
class CanonicalEdge:
    """Adjacency entry: canonical destination index, time rank, edge label."""

    destination: int
    rank: int
    label: Hashable

    def __str__(self) -> str:
        return f"(id:{self.destination} t:{self.rank} l:{self.label})"


@dataclass(frozen=True)
class CanonicalForm:
    """
    Canonical signature of a temporal motif.

    Attributes
    ----------
    node_labels : tuple
        Label of canonical node ``i`` at position ``i``
    adjacency : tuple of tuple of CanonicalEdge
        Sorted outgoing adjacency of canonical node ``i`` at position ``i``.
        For undirected motifs every edge appears at both endpoints.
    directed : bool
        Whether the motif comes from a directed graph

    Examples
    --------
    >>> str(form)  # doctest: +SKIP
    '(0:A)(1:B), [0: (id:1 t:0 l:x)][1: (id:0 t:0 l:x)]'
    """

    node_labels: Tuple[Hashable, ...]
    adjacency: Tuple[Tuple[CanonicalEdge, ...], ...]
    directed: bool = True

    @property
    def n_nodes(self) -> int:
        return len(self.node_labels)

    @property
    def n_edges(self) -> int:
        entries = sum(len(adj) for adj in self.adjacency)
        return entries if self.directed else entries // 2

    @property
    def n_timestamps(self) -> int:
        """Number of distinct time ranks."""
        return len({e.rank for adj in self.adjacency for e in adj})

    def as_networkx(self):
        """Convert to a NetworkX multigraph with ``label``/``rank`` attributes."""
        import networkx as nx

        G = nx.MultiDiGraph() if self.directed else nx.MultiGraph()
        for i, label in enumerate(self.node_labels):
            G.add_node(i, label=label)
        for i, adj in enumerate(self.adjacency):
            for e in adj:
                if not self.directed and e.destination < i:
                    continue
                G.add_edge(i, e.destination, rank=e.rank, label=e.label)
        return G

    def __str__(self) -> str:
        nodes = "".join(f"({i}:{label})" for i, label in enumerate(self.node_labels))
        adjacency = "".join(
            f"[{i}: " + "".join(str(e) for e in adj) + "]"
            for i, adj in enumerate(self.adjacency)
            if adj
        )
        return f"{nodes}, {adjacency}"


# (neighbour, rank, edge label)
_Entry = Tuple[int, int, Hashable]


def _time_ranks(motif: PartialMotif) -> Dict[int, int]:
    distinct = sorted({e.timestamp for e in motif.edges})
    return {t: rank for rank, t in enumerate(distinct)}


def canonicalize(
    motif: PartialMotif,
    node_labels: Mapping[int, Hashable],
    directed: bool,
) -> CanonicalForm:
    """
    Compute the canonical form of ``motif``.

    Parameters
    ----------
    motif : PartialMotif
        Occurrence with at least one edge
    node_labels : mapping of int -> label
        Labels of (at least) the motif's nodes
    directed : bool
        Whether edge direction is significant

    Returns
    -------
    CanonicalForm

    Raises
    ------
    ValueError
        If the motif has no edges
    """
    if motif.edge_count() == 0:
        raise ValueError("Cannot canonicalize a motif without edges")

    ranks = _time_ranks(motif)
    nodes = motif.node_ids
    out_adj: Dict[int, List[_Entry]] = {n: [] for n in nodes}
    in_adj: Dict[int, List[_Entry]] = {n: [] for n in nodes}
    for e in motif.edges:
        rank = ranks[e.timestamp]
        out_adj[e.source].append((e.destination, rank, e.label))
        if directed:
            in_adj[e.destination].append((e.source, rank, e.label))
        else:
            out_adj[e.destination].append((e.source, rank, e.label))

    def invariant(node: int):
        return (
            node_labels[node],
            len(out_adj[node]),
            len(in_adj[node]),
            tuple(sorted((r, lab, node_labels[d]) for d, r, lab in out_adj[node])),
            tuple(sorted((r, lab, node_labels[s]) for s, r, lab in in_adj[node])),
        )

    invariants = {n: invariant(n) for n in nodes}
    ordered = sorted(nodes, key=lambda n: (invariants[n], n))
    classes = [tuple(group) for _, group in groupby(ordered, key=invariants.__getitem__)]

    best_order: Optional[List[int]] = None
    best_adjacency: Optional[Tuple[Tuple[CanonicalEdge, ...], ...]] = None
    for arrangement in product(*(permutations(c) for c in classes)):
        order = [n for group in arrangement for n in group]
        position = {n: i for i, n in enumerate(order)}
        adjacency = tuple(
            tuple(sorted(CanonicalEdge(position[d], r, lab) for d, r, lab in out_adj[n]))
            for n in order
        )
        if best_adjacency is None or adjacency < best_adjacency:
            best_order, best_adjacency = order, adjacency

    return CanonicalForm(
        node_labels=tuple(node_labels[n] for n in best_order),
        adjacency=best_adjacency,
        directed=directed,
    )


class Canonicalizer:
    """
    Canonical forms bound to one graph's node labels and directedness.

    Parameters
    ----------
    node_labels : mapping of int -> label
    directed : bool
    """

    def __init__(self, node_labels: Mapping[int, Hashable], directed: bool):
        self.node_labels = dict(node_labels)
        self.directed = directed

    @classmethod
    def for_graph(cls, graph) -> "Canonicalizer":
        return cls(graph.node_labels, graph.directed)

    def __call__(self, motif: PartialMotif) -> CanonicalForm:
        return canonicalize(motif, self.node_labels, self.directed)
