"""Unit tests for the temporal graph and its adjacency indexes."""
import networkx as nx
import numpy as np
import pytest

from tmotifs import Edge, TemporalGraph


class TestEdge:
    """Tests for the Edge value type."""

    def test_other_endpoint(self):
        e = Edge(0, 3, 7, 10, "x")
        assert e.other(3) == 7
        assert e.other(7) == 3

    def test_other_rejects_foreign_node(self):
        with pytest.raises(ValueError):
            Edge(0, 3, 7, 10, "x").other(5)

    def test_edges_are_hashable_and_immutable(self):
        e = Edge(0, 1, 2, 3, "x")
        assert e == Edge(0, 1, 2, 3, "x")
        assert len({e, Edge(0, 1, 2, 3, "x")}) == 1
        with pytest.raises(AttributeError):
            e.timestamp = 5


class TestConstruction:
    """Tests for building a TemporalGraph."""

    def test_edge_ids_follow_input_order(self):
        G = TemporalGraph({0: "A", 1: "B"}, [(0, 1, 5, "x"), (1, 0, 2, "y"), (0, 1, 5, "z")])
        assert [e.id for e in G.edges] == [0, 1, 2]
        assert G.edge(1) == Edge(1, 1, 0, 2, "y")

    def test_nodes_sorted(self):
        G = TemporalGraph({5: "A", 1: "B", 3: "A"}, [(5, 1, 0, "x")])
        assert G.nodes == (1, 3, 5)
        assert G.n_nodes == 3

    def test_self_loop_rejected(self):
        with pytest.raises(ValueError, match="self-loop"):
            TemporalGraph({0: "A"}, [(0, 0, 1, "x")])

    def test_unknown_node_rejected(self):
        with pytest.raises(ValueError, match="unknown node"):
            TemporalGraph({0: "A"}, [(0, 1, 1, "x")])

    def test_non_integral_timestamp_rejected(self):
        with pytest.raises(ValueError, match="non-integral timestamp"):
            TemporalGraph({0: "A", 1: "A"}, [(0, 1, 1.9, "x")])
        with pytest.raises(ValueError, match="non-integral timestamp"):
            TemporalGraph({0: "A", 1: "A"}, [(0, 1, float("nan"), "x")])

    def test_integral_timestamps_accepted(self):
        G = TemporalGraph({0: "A", 1: "A"}, [(0, 1, np.float64(2.0), "x"), (1, 0, np.int64(3), "x")])
        assert [e.timestamp for e in G.edges] == [2, 3]
        assert all(type(e.timestamp) is int for e in G.edges)

    def test_graph_without_edges(self):
        G = TemporalGraph({0: "A", 1: "B"}, [])
        assert G.n_edges == 0
        assert G.out_edges(0) == ()
        assert G.time_span() is None


class TestAdjacency:
    """Tests for time-ordered adjacency indexes."""

    def test_out_edges_time_ordered(self):
        G = TemporalGraph(
            {0: "A", 1: "A", 2: "A"},
            [(0, 1, 9, "x"), (0, 2, 3, "x"), (0, 1, 5, "x")],
        )
        assert [e.timestamp for e in G.out_edges(0)] == [3, 5, 9]

    def test_ties_broken_by_source_destination_id(self):
        G = TemporalGraph(
            {0: "A", 1: "A", 2: "A", 3: "A"},
            [(0, 3, 4, "x"), (0, 2, 4, "x"), (0, 2, 4, "y"), (0, 1, 4, "x")],
        )
        assert [e.id for e in G.out_edges(0)] == [3, 1, 2, 0]

    def test_directed_indexes(self, directed_graph):
        G = directed_graph
        assert [e.id for e in G.out_edges(1)] == [1, 2]
        assert [e.id for e in G.in_edges(1)] == [0]
        assert [e.id for e in G.in_edges(2)] == [2]
        assert G.out_edges(2) == ()

    def test_every_edge_indexed_once_per_direction(self, random_graph_factory):
        G = random_graph_factory(3, n_nodes=8, n_edges=20, directed=True)
        out_ids = sorted(e.id for n in G.nodes for e in G.out_edges(n))
        in_ids = sorted(e.id for n in G.nodes for e in G.in_edges(n))
        assert out_ids == list(range(G.n_edges))
        assert in_ids == list(range(G.n_edges))

    def test_undirected_reciprocal_index(self, example_graph):
        G = example_graph
        assert G.in_edges(0) == ()
        assert [e.id for e in G.out_edges(0)] == [0, 3, 4]
        assert [e.id for e in G.out_edges(3)] == [2, 3, 4]
        # each edge appears at both endpoints
        ids = sorted(e.id for n in G.nodes for e in G.out_edges(n))
        assert ids == sorted(list(range(G.n_edges)) * 2)


class TestSummary:
    """Tests for summary statistics and conversions."""

    def test_degree_sequence(self, example_graph):
        np.testing.assert_array_equal(example_graph.degree_sequence(), [3, 2, 2, 3])

    def test_summary(self, example_graph):
        s = example_graph.summary()
        assert s["n_nodes"] == 4
        assert s["n_edges"] == 5
        assert s["directed"] is False
        assert s["avg_degree"] == pytest.approx(2.5)
        assert s["max_degree"] == 3
        assert s["n_node_labels"] == 2
        assert s["n_edge_labels"] == 2
        assert (s["t_min"], s["t_max"]) == (1, 5)

    def test_as_networkx(self, example_graph, directed_graph):
        G = example_graph.as_networkx()
        assert isinstance(G, nx.MultiGraph)
        assert G.number_of_edges() == 5
        assert G.nodes[1]["label"] == "B"
        assert G.number_of_edges(0, 3) == 2

        D = directed_graph.as_networkx()
        assert isinstance(D, nx.MultiDiGraph)
        assert D.has_edge(1, 0) and D.has_edge(0, 1)
