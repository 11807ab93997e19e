"""Unit tests for the shared graph helpers."""

import pytest

from knowgraph.core.exceptions import GraphIntegrityError
from knowgraph.core.graph import (
    connected_components,
    describe,
    fingerprint,
    to_networkx,
    validate_graph,
)
from knowgraph.core.types import GraphData, Link, Node


def make_graph(node_ids, edges):
    return GraphData(
        nodes=[Node(id=node_id) for node_id in node_ids],
        links=[Link(source=s, target=t) for s, t in edges],
    )


class TestValidateGraph:
    def test_valid_graph_passes(self):
        validate_graph(make_graph(["a", "b"], [("a", "b"), ("b", "b")]))

    def test_dangling_target(self):
        graph = make_graph(["a", "b"], [("a", "b"), ("b", "ghost")])
        with pytest.raises(GraphIntegrityError) as exc:
            validate_graph(graph)
        assert exc.value.missing_id == "ghost"
        assert exc.value.link_index == 1

    def test_duplicate_node_id(self):
        with pytest.raises(GraphIntegrityError) as exc:
            validate_graph(make_graph(["a", "a"], []))
        assert exc.value.link_index is None


class TestConnectedComponents:
    def test_two_pairs(self):
        graph = make_graph(["A", "B", "C", "D"], [("A", "B"), ("C", "D")])
        assert connected_components(graph.node_ids(), graph.links) == [["A", "B"], ["C", "D"]]

    def test_direction_is_ignored(self):
        graph = make_graph(["A", "B", "C"], [("B", "A"), ("C", "B")])
        components = connected_components(graph.node_ids(), graph.links)
        assert len(components) == 1
        assert components[0][0] == "A"

    def test_isolated_nodes(self):
        components = connected_components(["x", "y", "z"], [])
        assert components == [["x"], ["y"], ["z"]]

    def test_long_chain_does_not_recurse(self):
        ids = [f"n{i}" for i in range(5000)]
        graph = make_graph(ids, list(zip(ids, ids[1:])))
        components = connected_components(graph.node_ids(), graph.links)
        assert len(components) == 1
        assert len(components[0]) == 5000


class TestFingerprint:
    def test_same_structure_same_fingerprint(self):
        g1 = make_graph(["a", "b"], [("a", "b")])
        g2 = make_graph(["a", "b"], [("a", "b")])
        g2.links[0].weight = 5
        assert fingerprint(g1) == fingerprint(g2)

    def test_structure_change_changes_fingerprint(self):
        g1 = make_graph(["a", "b"], [("a", "b")])
        g2 = make_graph(["a", "b"], [("b", "a")])
        assert fingerprint(g1) != fingerprint(g2)

    def test_ids_are_delimited(self):
        assert fingerprint(make_graph(["ab", "c"], [])) != fingerprint(make_graph(["a", "bc"], []))


class TestDescribe:
    def test_star(self):
        graph = make_graph(["Z", "a", "b", "c"], [("Z", "a"), ("Z", "b"), ("Z", "c")])
        stats = describe(graph)
        assert stats.node_count == 4
        assert stats.link_count == 3
        assert stats.average_degree == pytest.approx(1.5)
        assert stats.is_tree_shaped
        assert not stats.has_self_loops
        assert stats.component_count == 1

    def test_self_loop_and_fan_in(self):
        graph = make_graph(["a", "b", "c"], [("a", "a"), ("a", "b"), ("c", "b")])
        stats = describe(graph)
        assert stats.has_self_loops
        assert not stats.is_tree_shaped
        assert stats.max_in_degree == 2

    def test_parallel_links_count_separately(self):
        stats = describe(make_graph(["a", "b"], [("a", "b"), ("a", "b")]))
        assert stats.link_count == 2
        assert stats.max_in_degree == 2
        assert not stats.is_tree_shaped

    def test_empty(self):
        stats = describe(GraphData())
        assert stats.average_degree == 0.0
        assert stats.component_count == 0


def test_to_networkx_keeps_parallel_links():
    graph = make_graph(["a", "b"], [("a", "b"), ("a", "b"), ("b", "a")])
    g = to_networkx(graph)
    assert g.number_of_nodes() == 2
    assert g.number_of_edges() == 3
