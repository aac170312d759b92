"""
Test configuration and fixtures for pytest.

This file contains fixtures and configuration that will be available to all tests.
"""
from pathlib import Path

import numpy as np
import pytest

from tmotifs import TemporalGraph, read_network

DATA_DIR = Path(__file__).parent / "data"


@pytest.fixture
def example_path():
    """Documented 4-node / 5-edge example network."""
    return DATA_DIR / "example_network.txt"


@pytest.fixture
def example_graph(example_path):
    """Example network read as undirected."""
    return read_network(example_path, directed=False)


@pytest.fixture
def directed_graph():
    """Reciprocal pair 0<->1 followed by 1->2, all labels equal."""
    return TemporalGraph(
        {0: "A", 1: "A", 2: "A"},
        [(0, 1, 1, "x"), (1, 0, 2, "x"), (1, 2, 3, "x")],
        directed=True,
    )


def make_random_graph(seed, n_nodes=6, n_edges=9, t_max=6, directed=True):
    """Small random labeled temporal multigraph without self-loops."""
    rng = np.random.RandomState(seed)
    labels = {n: "AB"[rng.randint(2)] for n in range(n_nodes)}
    edges = []
    while len(edges) < n_edges:
        u, v = rng.randint(n_nodes, size=2)
        if u == v:
            continue
        edges.append((int(u), int(v), int(rng.randint(t_max)), "xy"[rng.randint(2)]))
    return TemporalGraph(labels, edges, directed=directed)


@pytest.fixture
def random_graph_factory():
    """Factory for reproducible random temporal graphs."""
    return make_random_graph
