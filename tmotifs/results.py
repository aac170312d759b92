"""
Motif count tables and their file renderings.
"""

from __future__ import annotations

import json
import logging
from collections import Counter
from collections.abc import Mapping
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Iterator, List, Optional, Tuple, Union

import pandas as pd

from .core.graph import TemporalGraph

if TYPE_CHECKING:
    from .motifs.canonical import CanonicalForm

logger = logging.getLogger(__name__)

HEADER = "NODES, EDGES, NUM_OCC"


def format_delta(delta: Optional[int]) -> str:
    """Delta as used in file names: the integer, or ``inf``."""
    return "inf" if delta is None else str(delta)


def output_filename(network_name: str, delta: Optional[int], max_nodes: int, max_edges: int) -> str:
    """
    Result file name encoding the run parameters.

    >>> output_filename("net.txt", None, 5, 5)
    '[Dinf-N5-E5]net.txt.csv'
    """
    return f"[D{format_delta(delta)}-N{max_nodes}-E{max_edges}]{network_name}.csv"


class MotifTable(Mapping):
    """
    Occurrence counts per canonical motif.

    Iteration follows discovery order, which is deterministic for a given
    graph and parameters. Renderings (``rows``, files, data frames) are sorted
    by signature text so they never depend on hashing.

    Attributes
    ----------
    delta : int or None
        Time window used for the search (None = infinite)
    max_nodes, max_edges : int
        Size bounds used for the search
    directed : bool
        Whether the searched graph was directed
    occurrences : dict or None
        Edge-id tuples per canonical form, when the search kept them
    """

    def __init__(
        self,
        counts: Mapping[CanonicalForm, int],
        delta: Optional[int],
        max_nodes: int,
        max_edges: int,
        directed: bool,
        occurrences: Optional[Mapping[CanonicalForm, List[Tuple[int, ...]]]] = None,
        states: int = 0,
    ):
        self._counts: Dict[CanonicalForm, int] = dict(counts)
        self.delta = delta
        self.max_nodes = max_nodes
        self.max_edges = max_edges
        self.directed = directed
        self.occurrences = dict(occurrences) if occurrences is not None else None
        self.states = states

    def __getitem__(self, form: CanonicalForm) -> int:
        return self._counts[form]

    def __iter__(self) -> Iterator[CanonicalForm]:
        return iter(self._counts)

    def __len__(self) -> int:
        return len(self._counts)

    @property
    def total_occurrences(self) -> int:
        return sum(self._counts.values())

    def by_size(self) -> Dict[Tuple[int, int], int]:
        """Occurrence totals keyed by ``(n_nodes, n_edges)``."""
        sizes: Counter = Counter()
        for form, count in self._counts.items():
            sizes[(form.n_nodes, form.n_edges)] += count
        return dict(sorted(sizes.items()))

    def rows(self) -> List[Tuple[str, int]]:
        """(signature, count) pairs sorted by signature text."""
        return sorted((str(form), count) for form, count in self._counts.items())

    def to_dict(self) -> Dict[str, int]:
        return dict(self.rows())

    def _records(self) -> List[Dict[str, object]]:
        return [
            {
                "signature": str(form),
                "n_nodes": form.n_nodes,
                "n_edges": form.n_edges,
                "count": count,
            }
            for form, count in self._counts.items()
        ]

    def to_dataframe(self) -> pd.DataFrame:
        """
        One row per motif.

        Columns: signature, n_nodes, n_edges, count.
        """
        df = pd.DataFrame(self._records(), columns=["signature", "n_nodes", "n_edges", "count"])
        return df.sort_values("signature", kind="mergesort").reset_index(drop=True)

    def filename(self, network_name: str) -> str:
        return output_filename(network_name, self.delta, self.max_nodes, self.max_edges)

    def write_csv(self, path: Union[str, Path]) -> Path:
        """Write the ``NODES, EDGES, NUM_OCC`` table."""
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        with open(path, "w") as f:
            f.write(HEADER + "\n")
            for signature, count in self.rows():
                f.write(f"{signature}, {count}\n")
        logger.info(f"Wrote {len(self)} motifs to {path}")
        return path

    def write_json(self, path: Union[str, Path]) -> Path:
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        payload = {
            "delta": self.delta,
            "max_nodes": self.max_nodes,
            "max_edges": self.max_edges,
            "directed": self.directed,
            "total_occurrences": self.total_occurrences,
            "motifs": sorted(self._records(), key=lambda r: r["signature"]),
        }
        with open(path, "w") as f:
            json.dump(payload, f, indent=2, default=str)
        logger.info(f"Wrote {len(self)} motifs to {path}")
        return path

    def write_occurrences(self, path: Union[str, Path], graph: TemporalGraph) -> Path:
        """
        Dump every kept occurrence, grouped under its motif signature.

        Each occurrence line reads ``(id:label),...<TAB>(src,dst,t:label),...``.
        """
        if self.occurrences is None:
            raise ValueError("Occurrences were not kept; search with keep_occurrences=True")
        path = Path(path)
        path.parent.mkdir(parents=True, exist_ok=True)
        by_signature = sorted(self.occurrences.items(), key=lambda item: str(item[0]))
        with open(path, "w") as f:
            for form, occurrences in by_signature:
                f.write(f"# {form}\n")
                for edge_ids in occurrences:
                    f.write(format_occurrence(graph, edge_ids) + "\n")
        logger.info(f"Wrote occurrences of {len(by_signature)} motifs to {path}")
        return path

    def __repr__(self) -> str:
        return (f"MotifTable(motifs={len(self)}, occurrences={self.total_occurrences}, "
                f"delta={format_delta(self.delta)}, max_nodes={self.max_nodes}, "
                f"max_edges={self.max_edges})")


def format_occurrence(graph: TemporalGraph, edge_ids: Tuple[int, ...]) -> str:
    edges = [graph.edge(i) for i in edge_ids]
    nodes = sorted({n for e in edges for n in (e.source, e.destination)})
    node_part = ",".join(f"({n}:{graph.label(n)})" for n in nodes)
    edge_part = ",".join(f"({e.source},{e.destination},{e.timestamp}:{e.label})" for e in edges)
    return f"{node_part}\t{edge_part}"
