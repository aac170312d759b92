"""Unit tests for the PartialMotif accumulator."""
import pytest

from tmotifs import Edge, PartialMotif


@pytest.fixture
def edges():
    return [
        Edge(0, 0, 1, 1, "x"),
        Edge(1, 1, 2, 2, "x"),
        Edge(2, 2, 0, 3, "y"),
    ]


class TestPartialMotif:
    """Tests for membership, signatures and cloning."""

    def test_seed(self, edges):
        m = PartialMotif.seed(edges[1])
        assert m.node_count() == 2
        assert m.edge_count() == 1
        assert m.contains_node(1) and m.contains_node(2)
        assert m.contains_edge(1)
        assert not m.contains_edge(0)

    def test_exact_signature_ignores_insertion_order(self, edges):
        a = PartialMotif.seed(edges[2])
        a.add_node(1)
        a.add_edge(edges[0])
        a.add_edge(edges[1])

        b = PartialMotif.seed(edges[0])
        b.add_node(2)
        b.add_edge(edges[1])
        b.add_edge(edges[2])

        assert a.exact_signature() == b.exact_signature() == (0, 1, 2)

    def test_exact_signature_distinguishes_edge_sets(self, edges):
        a = PartialMotif.seed(edges[0])
        b = PartialMotif.seed(edges[1])
        assert a.exact_signature() != b.exact_signature()

    def test_clone_isolates_branches(self, edges):
        parent = PartialMotif.seed(edges[0])
        child = parent.clone()
        child.add_node(2)
        child.add_edge(edges[1])

        assert parent.edge_count() == 1
        assert parent.node_count() == 2
        assert not parent.contains_node(2)
        assert child.edge_count() == 2
        assert child.exact_signature() == (0, 1)

    def test_duplicate_edge_rejected(self, edges):
        m = PartialMotif.seed(edges[0])
        with pytest.raises(ValueError):
            m.add_edge(edges[0])

    def test_add_existing_node_is_noop(self, edges):
        m = PartialMotif.seed(edges[0])
        m.add_node(0)
        assert m.node_count() == 2

    def test_edges_in_insertion_order(self, edges):
        m = PartialMotif.seed(edges[2])
        m.add_edge(edges[0])
        assert [e.id for e in m.edges] == [2, 0]
        assert m.node_ids == {0, 2}
