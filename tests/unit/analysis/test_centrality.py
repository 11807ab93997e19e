"""Unit tests for importance, weight normalization and communities."""

import pytest

from knowgraph.analysis.centrality import (
    CentralityAnalyzer,
    analyze_graph,
    assign_communities,
    normalize_importance,
    normalize_weights,
    pagerank,
)
from knowgraph.config import CentralityConfig
from knowgraph.core.types import GraphData, Link, Node


class TestPageRank:
    def test_two_node_chain(self, make_graph):
        ranks = pagerank(make_graph(["A", "B"], [("A", "B")]))
        assert ranks["A"] == pytest.approx(0.075)
        assert ranks["B"] == pytest.approx(0.075 + 0.85 * 0.075)

    def test_ranks_never_exceed_one(self, medical_graph, chain_graph, make_graph):
        star = make_graph(["Z", "a", "b", "c"], [("a", "Z"), ("b", "Z"), ("c", "Z")])
        for graph in (medical_graph, chain_graph, star):
            assert sum(pagerank(graph).values()) <= 1.0 + 1e-9

    def test_isolated_node_sits_on_floor(self, make_graph):
        ranks = pagerank(make_graph(["A", "B", "C"], [("A", "B")]))
        assert ranks["C"] == pytest.approx(0.15 / 3)

    def test_weights_shift_rank(self, make_graph):
        graph = make_graph(["S", "heavy", "light"], [("S", "heavy"), ("S", "light")])
        graph.links[0].weight = 4
        ranks = pagerank(graph)
        assert ranks["heavy"] > ranks["light"]

    def test_empty_graph(self):
        assert pagerank(GraphData()) == {}


class TestNormalizeImportance:
    def test_max_is_one(self):
        normalized = normalize_importance({"a": 0.2, "b": 0.4})
        assert normalized == {"a": pytest.approx(0.5), "b": 1.0}

    def test_empty(self):
        assert normalize_importance({}) == {}


class TestNormalizeWeights:
    def test_linear_rescale(self):
        links = [Link(source="a", target="b", weight=w) for w in (1, 2, 3)]
        assert [link.weight for link in normalize_weights(links)] == pytest.approx([1, 3, 5])

    def test_equal_weights_collapse_to_minimum(self):
        links = [Link(source="a", target="b", weight=7) for _ in range(3)]
        assert [link.weight for link in normalize_weights(links)] == [1, 1, 1]

    def test_returns_copies(self):
        links = [Link(source="a", target="b", weight=2), Link(source="b", target="a", weight=4)]
        normalize_weights(links)
        assert [link.weight for link in links] == [2, 4]

    def test_custom_range(self):
        links = [Link(source="a", target="b", weight=w) for w in (10, 20)]
        config = CentralityConfig(min_weight=2, max_weight=8)
        assert [link.weight for link in normalize_weights(links, config)] == pytest.approx([2, 8])


class TestCommunities:
    def test_sequential_ids_in_first_seen_order(self, make_graph):
        graph = make_graph(["A", "B", "C", "D", "E"], [("A", "B"), ("C", "D")])
        assert assign_communities(graph) == {"A": 0, "B": 0, "C": 1, "D": 1, "E": 2}


class TestCentralityAnalyzer:
    def test_top_node_has_full_importance(self, medical_graph):
        analyzed = analyze_graph(medical_graph)
        assert max(node.importance for node in analyzed.nodes) == 1.0
        assert all(0 <= node.importance <= 1 for node in analyzed.nodes)

    def test_sizes_follow_importance(self, medical_graph):
        analyzed = analyze_graph(medical_graph)
        for node in analyzed.nodes:
            assert node.size == pytest.approx(5 + node.importance * 25)
            assert 5 <= node.size <= 30

    def test_cycle_is_uniform(self, make_graph):
        analyzed = analyze_graph(make_graph(["A", "B", "C"], [("A", "B"), ("B", "C"), ("C", "A")]))
        assert [node.importance for node in analyzed.nodes] == pytest.approx([1.0, 1.0, 1.0])

    def test_group_is_overwritten_by_community(self):
        graph = GraphData(
            nodes=[Node(id="a", group=5), Node(id="b", group=9), Node(id="c", group=5)],
            links=[Link(source="a", target="b")],
        )
        analyzed = analyze_graph(graph)
        assert [node.group for node in analyzed.nodes] == [0, 0, 1]

    def test_links_are_normalized(self, medical_graph):
        analyzed = analyze_graph(medical_graph)
        assert [link.weight for link in analyzed.links] == pytest.approx([5, 1])

    def test_input_not_mutated(self, medical_graph):
        analyze_graph(medical_graph)
        assert all(node.importance == 0 for node in medical_graph.nodes)
        assert medical_graph.links[0].weight == 3

    def test_empty_graph(self):
        assert CentralityAnalyzer().analyze(GraphData()).is_empty

    def test_node_size(self):
        analyzer = CentralityAnalyzer(CentralityConfig(min_size=2, size_range=10))
        assert analyzer.node_size(0.5) == pytest.approx(7)
