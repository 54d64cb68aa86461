"""Tests for the GraphStore data structure."""

import math

import pytest

from simplerank.graphs import GraphStore


class TestInterning:
    """Tests for key -> index interning."""

    def test_empty_store(self):
        """Test empty store creation."""
        store = GraphStore()
        assert store.node_count() == 0
        assert store.edge_count() == 0
        assert len(store) == 0
        assert store.is_empty()
        assert list(store.edges()) == []

    def test_two_nodes_are_created(self):
        """Test that one edge creates both endpoints."""
        store = GraphStore()
        store.add_edge("foo", "bar")
        assert store.node_count() == 2
        assert not store.is_empty()

    def test_indices_follow_insertion_order(self):
        """Test that indices are dense and in first-appearance order."""
        store = GraphStore()
        store.add_edge("foo", "bar")
        store.add_edge("baz", "foo")
        assert store.get_or_create_node("foo") == 0
        assert store.get_or_create_node("bar") == 1
        assert store.get_or_create_node("baz") == 2
        assert store.keys() == ["foo", "bar", "baz"]

    def test_get_or_create_node_is_stable(self):
        """Test that re-interning an existing key returns the same index."""
        store = GraphStore()
        first = store.get_or_create_node("x")
        second = store.get_or_create_node("x")
        assert first == second == 0
        assert store.node_count() == 1

    def test_isolated_node(self):
        """Test that get_or_create_node adds a node without edges."""
        store = GraphStore()
        idx = store.get_or_create_node("lonely")
        assert store.out_weight(idx) == 0.0
        assert list(store.successors(idx)) == []
        assert store.edge_count() == 0

    def test_index_and_key_lookup(self):
        """Test index_of / key_of round trip and unknown keys."""
        store = GraphStore()
        store.add_edge("a", "b")
        assert store.index_of("b") == 1
        assert store.key_of(1) == "b"
        assert store.index_of("zzz") is None
        assert "a" in store
        assert "zzz" not in store

    def test_key_of_out_of_range(self):
        """Test that key_of rejects invalid indices."""
        store = GraphStore()
        store.add_edge("a", "b")
        with pytest.raises(IndexError, match="out of range"):
            store.key_of(2)
        with pytest.raises(IndexError):
            store.key_of(-1)

    def test_mixed_key_types(self):
        """Test that any hashable works as a key, without ordering between types."""
        store = GraphStore()
        store.add_edge(1, "one")
        store.add_edge(("t", 1), 1)
        store.add_edge(None, frozenset({2}))
        assert store.keys() == [1, "one", ("t", 1), None, frozenset({2})]


class TestEdges:
    """Tests for weighted edge accumulation."""

    def test_repeated_edges_accumulate(self):
        """Test that inserting the same pair k times accumulates weight k."""
        store = GraphStore()
        for _ in range(3):
            store.add_edge("a", "b")
        assert list(store.successors(0)) == [(1, 3.0)]
        assert store.out_weight(0) == 3.0
        assert store.edge_count() == 3

    def test_custom_weights(self):
        """Test caller-supplied weights."""
        store = GraphStore()
        store.add_edge("a", "b", 2.5)
        store.add_edge("a", "c", 0.5)
        store.add_edge("a", "b", 1.0)
        assert dict(store.successors(0)) == {1: 3.5, 2: 0.5}
        assert store.out_weight(0) == 4.0

    def test_out_weight_matches_successors(self):
        """Test the out-weight invariant after many insertions."""
        store = GraphStore()
        edges = [("a", "b", 1.0), ("a", "c", 2.0), ("b", "a", 0.25), ("a", "b", 4.0)]
        for u, v, w in edges:
            store.add_edge(u, v, w)
        for i in range(store.node_count()):
            assert math.isclose(store.out_weight(i), sum(w for _, w in store.successors(i)))

    def test_self_edge(self):
        """Test that self-edges count toward both out- and in-weight."""
        store = GraphStore()
        store.add_edge("a", "a")
        assert store.node_count() == 1
        assert list(store.successors(0)) == [(0, 1.0)]
        assert store.out_degree("a") == 1
        assert store.in_degree("a") == 1

    def test_successors_is_restartable(self):
        """Test that successors can be iterated repeatedly."""
        store = GraphStore()
        store.add_edge("a", "b")
        store.add_edge("a", "c")
        first = list(store.successors(0))
        second = list(store.successors(0))
        assert first == second == [(1, 1.0), (2, 1.0)]

    def test_degrees(self):
        """Test in/out edge insertion counts."""
        store = GraphStore()
        store.add_edge("foo", "bar")
        assert store.in_degree("foo") == 0
        assert store.out_degree("foo") == 1
        assert store.in_degree("bar") == 1
        assert store.out_degree("bar") == 0
        assert store.in_degree("missing") is None
        assert store.out_degree("missing") is None

    def test_edges_listing(self):
        """Test that edges() yields accumulated pairs by key."""
        store = GraphStore()
        store.add_edge("a", "b")
        store.add_edge("b", "a", 2.0)
        store.add_edge("a", "b")
        assert list(store.edges()) == [("a", "b", 2.0), ("b", "a", 2.0)]

    def test_zero_weight_edge(self):
        """Test that a zero weight creates the nodes but no out-weight."""
        store = GraphStore()
        store.add_edge("a", "b", 0.0)
        assert store.node_count() == 2
        assert store.out_weight(0) == 0.0

    def test_out_weight_overflow_rejected(self):
        """Test that weights summing past the float range are rejected across targets."""
        store = GraphStore()
        store.add_edge("A", "B", 1e308)
        with pytest.raises(ValueError, match="overflows"):
            store.add_edge("A", "C", 1e308)
        assert store.keys() == ["A", "B"]
        assert store.out_weight(0) == 1e308
        assert list(store.successors(0)) == [(1, 1e308)]
        assert store.edge_count() == 1
        assert store.out_degree("A") == 1

    def test_pair_weight_overflow_rejected(self):
        """Test that repeating a huge weight on one pair is rejected."""
        store = GraphStore()
        store.add_edge("A", "B", 1e308)
        with pytest.raises(ValueError, match="overflows"):
            store.add_edge("A", "B", 1e308)
        assert list(store.edges()) == [("A", "B", 1e308)]
        assert math.isfinite(store.out_weight(0))
        assert store.in_degree("B") == 1

    def test_large_weights_from_other_sources_are_independent(self):
        """Test that out-weight totals are tracked per source."""
        store = GraphStore()
        store.add_edge("A", "C", 1e308)
        store.add_edge("B", "C", 1e308)
        assert store.out_weight(0) == store.out_weight(1) == 1e308

    def test_adjacency_is_private(self):
        """Test that the adjacency is only reachable through accessors."""
        store = GraphStore()
        store.add_edge("a", "b")
        assert not hasattr(store, "adj")
        assert list(store.successors(0)) == [(1, 1.0)]

    @pytest.mark.parametrize("weight", [-1.0, float("nan"), float("inf")])
    def test_invalid_weight(self, weight):
        """Test that negative and non-finite weights are rejected."""
        store = GraphStore()
        with pytest.raises(ValueError, match="Edge weight"):
            store.add_edge("a", "b", weight)
        assert store.node_count() == 0
