"""
Growable occurrence accumulator used during motif enumeration.
"""

from typing import Dict, List, Set, Tuple

from ..core.graph import Edge


class PartialMotif:
    """
    Node set and edge set of one candidate occurrence.

    The enumerator never mutates a motif it keeps: it calls ``clone`` and
    extends the copy, so sibling branches of the search never see each
    other's edges.

    Examples
    --------
    >>> m = PartialMotif.seed(Edge(0, 1, 2, 5, "x"))
    >>> m.node_count(), m.edge_count()
    (2, 1)
    >>> m.exact_signature()
    (0,)
    """

    __slots__ = ("_nodes", "_edges")

    def __init__(self):
        self._nodes: Set[int] = set()
        self._edges: Dict[int, Edge] = {}

    @classmethod
    def seed(cls, edge: Edge) -> "PartialMotif":
        """Two-node, one-edge motif built from ``edge``."""
        motif = cls()
        motif.add_node(edge.source)
        motif.add_node(edge.destination)
        motif.add_edge(edge)
        return motif

    def add_node(self, node: int) -> None:
        self._nodes.add(node)

    def add_edge(self, edge: Edge) -> None:
        if edge.id in self._edges:
            raise ValueError(f"Edge {edge.id} is already part of the motif")
        self._edges[edge.id] = edge

    def contains_node(self, node: int) -> bool:
        return node in self._nodes

    def contains_edge(self, edge_id: int) -> bool:
        return edge_id in self._edges

    def node_count(self) -> int:
        return len(self._nodes)

    def edge_count(self) -> int:
        return len(self._edges)

    @property
    def node_ids(self) -> Set[int]:
        return set(self._nodes)

    @property
    def edges(self) -> List[Edge]:
        """Edges in insertion order."""
        return list(self._edges.values())

    def exact_signature(self) -> Tuple[int, ...]:
        """
        Sorted edge ids.

        Equal only for motifs built from the same edge set, whatever the
        insertion order. Not isomorphism-invariant.
        """
        return tuple(sorted(self._edges))

    def clone(self) -> "PartialMotif":
        copy = PartialMotif()
        copy._nodes = set(self._nodes)
        copy._edges = dict(self._edges)
        return copy

    def __repr__(self) -> str:
        return f"PartialMotif(nodes={sorted(self._nodes)}, edges={list(self.exact_signature())})"
