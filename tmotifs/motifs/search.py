"""
Exhaustive enumeration of temporal motifs.

Every connected edge set of a temporal graph with at most ``max_nodes`` nodes,
at most ``max_edges`` edges and a timestamp spread of at most ``delta`` is
found exactly once, canonicalized, and counted under its motif.

Search outline
--------------
For every node (ascending id) and every incident edge (time order), a
two-node seed is built. The seed's timestamp becomes the base timestamp of the
search tree: no edge older than it is ever added. Each occurrence is extended
one edge at a time by depth-first recursion with backtracking. An occurrence
reached along several insertion orders is processed only the first time,
using its sorted edge ids as identity key. When an occurrence is accepted it
is extended from the node it grew from, from the newly reached endpoint and
then from its remaining nodes, so none of its one-edge extensions is missed.
"""

import logging
from contextlib import contextmanager
from dataclasses import dataclass, field
from itertools import chain
from typing import Dict, Iterable, Iterator, List, Optional, Set, Tuple

from tqdm.auto import tqdm

from ..core.graph import Edge, TemporalGraph
from ..exceptions import InvalidConfigurationError, SearchResourceError
from ..results import MotifTable
from .canonical import CanonicalForm, Canonicalizer
from .partial import PartialMotif

logger = logging.getLogger(__name__)

DEFAULT_MAX_NODES = 5
DEFAULT_MAX_EDGES = 5


class TimeWindow:
    """
    Timestamps of the edges on the current exploration path.

    Timestamps are pushed when an edge is accepted and popped when the search
    backtracks over it. With a finite ``delta`` a new timestamp ``t`` is
    admissible iff ``min_time - slack <= t <= max_time + slack`` where
    ``slack = delta - (max_time - min_time)``, i.e. adding ``t`` keeps the
    spread of the path within ``delta``.
    """

    def __init__(self, delta: Optional[int] = None):
        self.delta = delta
        self._stack: List[int] = []
        self._bounds: Optional[Tuple[int, int]] = None

    def __len__(self) -> int:
        return len(self._stack)

    @property
    def min_time(self) -> Optional[int]:
        return self._bounds[0] if self._bounds else None

    @property
    def max_time(self) -> Optional[int]:
        return self._bounds[1] if self._bounds else None

    @property
    def slack(self) -> Optional[int]:
        """Remaining extension of the window; None when unbounded."""
        if self.delta is None or self._bounds is None:
            return None
        return self.delta - (self._bounds[1] - self._bounds[0])

    def admits(self, timestamp: int) -> bool:
        slack = self.slack
        if slack is None:
            return True
        return self._bounds[0] - slack <= timestamp <= self._bounds[1] + slack

    def _update_bounds(self) -> None:
        self._bounds = (min(self._stack), max(self._stack)) if self._stack else None

    @contextmanager
    def push(self, timestamp: int) -> Iterator["TimeWindow"]:
        """Hold ``timestamp`` in the window for the duration of the block."""
        self._stack.append(timestamp)
        self._update_bounds()
        try:
            yield self
        finally:
            self._stack.pop()
            self._update_bounds()


@dataclass
class SearchContext:
    """
    State shared by every frame of one ``find_motifs`` run.

    ``window`` follows the current path and is restored after each recursive
    call returns. ``seen`` and ``counts`` only grow.
    """

    window: TimeWindow
    seen: Set[Tuple[int, ...]] = field(default_factory=set)
    counts: Dict[CanonicalForm, int] = field(default_factory=dict)
    occurrences: Optional[Dict[CanonicalForm, List[Tuple[int, ...]]]] = None
    max_states: Optional[int] = None

    def register(self, motif: PartialMotif) -> bool:
        """Record the motif's edge set; False if it was already seen."""
        key = motif.exact_signature()
        if key in self.seen:
            return False
        if self.max_states is not None and len(self.seen) >= self.max_states:
            raise SearchResourceError(
                f"Search exceeded max_states={self.max_states} distinct occurrences",
                states=len(self.seen),
            )
        self.seen.add(key)
        return True

    def record(self, form: CanonicalForm, motif: PartialMotif) -> None:
        self.counts[form] = self.counts.get(form, 0) + 1
        if self.occurrences is not None:
            self.occurrences.setdefault(form, []).append(motif.exact_signature())


def _check_size(name: str, value, minimum: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidConfigurationError(f"{name} must be an integer, got {value!r}")
    if value < minimum:
        raise InvalidConfigurationError(f"{name} must be >= {minimum}, got {value}")
    return value


def check_delta(delta: Optional[int]) -> Optional[int]:
    """Validate a time window: None (infinite) or a non-negative integer."""
    if delta is None:
        return None
    if isinstance(delta, bool) or not isinstance(delta, int):
        raise InvalidConfigurationError(f"delta must be an integer or None, got {delta!r}")
    if delta < 0:
        raise InvalidConfigurationError(f"delta must be >= 0, got {delta}")
    return delta


class MotifEnumerator:
    """
    Count every temporal motif of a graph.

    Parameters
    ----------
    graph : TemporalGraph
        Target network; must have at least one edge
    max_nodes : int
        Maximum number of nodes per occurrence (>= 2)
    max_edges : int
        Maximum number of edges per occurrence (>= 1)
    keep_occurrences : bool
        Keep the edge ids of every occurrence in the result
    max_states : int, optional
        Abort with ``SearchResourceError`` once this many distinct
        occurrences have been registered
    show_progress : bool
        Display a progress bar over seed nodes

    Raises
    ------
    InvalidConfigurationError
        On invalid size bounds or a graph without edges

    Examples
    --------
    >>> G = TemporalGraph({0: "A", 1: "A", 2: "A"}, [(0, 1, 1, "x"), (1, 2, 2, "x")])
    >>> table = MotifEnumerator(G, max_nodes=3, max_edges=2).find_motifs()
    >>> table.total_occurrences
    3
    """

    def __init__(
        self,
        graph: TemporalGraph,
        max_nodes: int = DEFAULT_MAX_NODES,
        max_edges: int = DEFAULT_MAX_EDGES,
        keep_occurrences: bool = False,
        max_states: Optional[int] = None,
        show_progress: bool = False,
    ):
        self.max_nodes = _check_size("max_nodes", max_nodes, 2)
        self.max_edges = _check_size("max_edges", max_edges, 1)
        if max_states is not None:
            _check_size("max_states", max_states, 1)
        if graph.n_edges == 0:
            raise InvalidConfigurationError("Target graph has no edges")

        self.graph = graph
        self.keep_occurrences = keep_occurrences
        self.max_states = max_states
        self.show_progress = show_progress
        self._canonicalize = Canonicalizer.for_graph(graph)

    def _incident(self, node: int) -> Iterable[Edge]:
        return chain(self.graph.out_edges(node), self.graph.in_edges(node))

    def find_motifs(self, delta: Optional[int] = None) -> MotifTable:
        """
        Enumerate and count all motifs.

        Parameters
        ----------
        delta : int, optional
            Maximum timestamp spread within one occurrence (None = infinite)

        Returns
        -------
        MotifTable
            Canonical form -> number of occurrences

        Raises
        ------
        InvalidConfigurationError
            If ``delta`` is negative or not an integer
        SearchResourceError
            If memory or the ``max_states`` cap is exhausted
        """
        delta = check_delta(delta)
        ctx = SearchContext(
            window=TimeWindow(delta),
            occurrences={} if self.keep_occurrences else None,
            max_states=self.max_states,
        )
        logger.info(f"Searching motifs: delta={'inf' if delta is None else delta}, "
                    f"max_nodes={self.max_nodes}, max_edges={self.max_edges}")
        try:
            self._seed_all(ctx)
        except MemoryError as e:
            if isinstance(e, SearchResourceError):
                raise
            raise SearchResourceError(
                f"Out of memory after {len(ctx.seen)} distinct occurrences",
                states=len(ctx.seen),
            ) from e

        table = MotifTable(
            ctx.counts,
            delta=delta,
            max_nodes=self.max_nodes,
            max_edges=self.max_edges,
            directed=self.graph.directed,
            occurrences=ctx.occurrences,
            states=len(ctx.seen),
        )
        logger.info(f"Found {len(table)} motifs, {table.total_occurrences} occurrences, "
                    f"{table.states} states explored")
        return table

    def _seed_all(self, ctx: SearchContext) -> None:
        nodes = tqdm(self.graph.nodes, desc="Seeding", disable=not self.show_progress)
        for node in nodes:
            for edge in self._incident(node):
                seed = PartialMotif.seed(edge)
                if not ctx.register(seed):
                    continue
                self._accept(seed, ctx)
                with ctx.window.push(edge.timestamp):
                    self._explore(seed, (node, edge.other(node)), edge.timestamp, ctx)

    def _accept(self, motif: PartialMotif, ctx: SearchContext) -> None:
        ctx.record(self._canonicalize(motif), motif)

    def _explore(
        self,
        motif: PartialMotif,
        anchors: Tuple[int, int],
        base_timestamp: int,
        ctx: SearchContext,
    ) -> None:
        """Extend from both anchors first, then from the motif's other nodes."""
        rest = sorted(n for n in motif.node_ids if n not in anchors)
        for node in chain(dict.fromkeys(anchors), rest):
            self._extend(motif, node, base_timestamp, ctx)

    def _extend(
        self,
        motif: PartialMotif,
        current_node: int,
        base_timestamp: int,
        ctx: SearchContext,
    ) -> None:
        if motif.edge_count() >= self.max_edges:
            return

        for edge in self._incident(current_node):
            if motif.contains_edge(edge.id):
                continue
            if edge.timestamp < base_timestamp or not ctx.window.admits(edge.timestamp):
                continue

            neighbor = edge.other(current_node)
            new_node = not motif.contains_node(neighbor)
            if new_node and motif.node_count() >= self.max_nodes:
                continue

            candidate = motif.clone()
            if new_node:
                candidate.add_node(neighbor)
            candidate.add_edge(edge)

            if not ctx.register(candidate):
                continue
            self._accept(candidate, ctx)

            with ctx.window.push(edge.timestamp):
                self._explore(candidate, (current_node, neighbor), base_timestamp, ctx)


def find_motifs(
    graph: TemporalGraph,
    delta: Optional[int] = None,
    max_nodes: int = DEFAULT_MAX_NODES,
    max_edges: int = DEFAULT_MAX_EDGES,
    **kwargs,
) -> MotifTable:
    """
    Count the temporal motifs of ``graph``.

    Shorthand for ``MotifEnumerator(graph, max_nodes, max_edges, **kwargs).find_motifs(delta)``.
    """
    enumerator = MotifEnumerator(graph, max_nodes=max_nodes, max_edges=max_edges, **kwargs)
    return enumerator.find_motifs(delta)
