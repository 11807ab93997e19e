"""Unit tests for layout selection and the fixed-position layouts."""

import math

import pytest

from knowgraph.config import CircularLayoutOptions, LayoutConfig, TreeLayoutOptions
from knowgraph.core.exceptions import LayoutError
from knowgraph.core.graph import describe
from knowgraph.core.types import GraphData, LayoutAlgorithm, TreeOrientation
from knowgraph.layout.selector import (
    LayoutSelector,
    apply_layout,
    choose_algorithm,
    circular_positions,
    tree_positions,
    tree_root,
    unlock_positions,
)


@pytest.fixture
def star(make_graph):
    leaves = ["a", "b", "c", "d", "e"]
    return make_graph(["Z"] + leaves, [("Z", leaf) for leaf in leaves])


def coords(graph: GraphData):
    return {node.id: (node.position.x, node.position.y) for node in graph.nodes}


class TestTreeLayout:
    def test_star_is_auto_tree(self, star):
        result = apply_layout(star)
        assert result.algorithm == LayoutAlgorithm.TREE
        assert result.requested == LayoutAlgorithm.AUTO
        positions = coords(result.graph)
        assert positions["Z"] == (0, 0)
        assert [positions[leaf] for leaf in "abcde"] == [
            (-100, 100), (-50, 100), (0, 100), (50, 100), (100, 100),
        ]

    def test_positions_are_pinned(self, star):
        result = apply_layout(star, LayoutAlgorithm.TREE)
        for node in result.graph.nodes:
            assert node.pinned == node.position
        assert result.is_prepositioned

    def test_unreachable_nodes_at_origin(self, make_graph):
        graph = make_graph(["A", "B", "C"], [("A", "B")])
        positions = coords(apply_layout(graph, "tree").graph)
        assert positions["B"] == (0, 100)
        assert positions["C"] == (0, 0)

    def test_horizontal(self, make_graph):
        graph = make_graph(["root", "x", "y"], [("root", "x"), ("root", "y")])
        options = TreeLayoutOptions(orientation=TreeOrientation.HORIZONTAL)
        positions = tree_positions(graph, options)
        assert positions["x"] == (100, -25)
        assert positions["y"] == (100, 25)

    def test_radial_rings(self, star):
        options = TreeLayoutOptions(orientation=TreeOrientation.RADIAL)
        positions = tree_positions(star, options)
        assert positions["Z"] == (0, 0)
        for leaf in "abcde":
            assert math.hypot(*positions[leaf]) == pytest.approx(100)

    def test_explicit_root(self, star):
        options = TreeLayoutOptions(root="c")
        positions = tree_positions(star, options)
        assert positions["c"] == (0, 0)

    def test_unknown_root_raises(self, star):
        with pytest.raises(LayoutError):
            tree_root(star, "ghost")

    def test_cycle_falls_back_to_first_node(self, make_graph):
        graph = make_graph(["A", "B"], [("A", "B"), ("B", "A")])
        assert tree_root(graph) == "A"


class TestCircularLayout:
    def test_minimum_radius(self, make_graph):
        positions = circular_positions(make_graph(["a", "b", "c", "d"], []))
        assert positions["a"] == pytest.approx((200, 0))
        assert positions["b"] == pytest.approx((0, 200), abs=1e-9)

    def test_radius_grows_with_node_count(self, make_graph):
        ids = [f"n{i}" for i in range(30)]
        positions = circular_positions(make_graph(ids, []))
        assert all(math.hypot(*xy) == pytest.approx(300) for xy in positions.values())

    def test_radius_override(self, make_graph):
        positions = circular_positions(make_graph(["a", "b"], []), CircularLayoutOptions(radius=50))
        assert positions["b"] == pytest.approx((-50, 0), abs=1e-9)


class TestAutoSelection:
    def test_sparse_dag_is_hierarchical(self, make_graph):
        ids = [f"n{i}" for i in range(12)]
        edges = list(zip(ids, ids[1:])) + [("n0", "n2")]
        result = apply_layout(make_graph(ids, edges))
        assert result.algorithm == LayoutAlgorithm.HIERARCHICAL
        assert all(node.position is not None for node in result.graph.nodes)

    def test_small_graph_with_fan_in_is_circular(self, make_graph):
        graph = make_graph(["A", "B", "C"], [("A", "B"), ("A", "C"), ("B", "C")])
        assert apply_layout(graph).algorithm == LayoutAlgorithm.CIRCULAR

    def test_self_loop_falls_back_to_force(self, make_graph):
        graph = make_graph(["A", "B", "C"], [("A", "A"), ("A", "B"), ("C", "B")])
        result = apply_layout(graph)
        assert result.algorithm == LayoutAlgorithm.FORCE
        assert not result.is_prepositioned
        assert all(node.position is None for node in result.graph.nodes)

    def test_choose_algorithm_from_stats(self, star):
        assert choose_algorithm(describe(star)) == LayoutAlgorithm.TREE


class TestLayoutSelector:
    def test_empty_graph(self):
        result = LayoutSelector().apply(GraphData(), "circular")
        assert result.graph.is_empty
        assert result.algorithm == LayoutAlgorithm.FORCE
        assert result.requested == LayoutAlgorithm.CIRCULAR

    def test_unknown_algorithm(self, star):
        with pytest.raises(LayoutError):
            LayoutSelector().apply(star, "spiral")

    def test_dagre_alias(self, star):
        assert LayoutSelector().apply(star, "dagre").algorithm == LayoutAlgorithm.HIERARCHICAL

    def test_configured_default(self, star):
        selector = LayoutSelector(LayoutConfig(algorithm=LayoutAlgorithm.CIRCULAR))
        assert selector.apply(star).algorithm == LayoutAlgorithm.CIRCULAR

    def test_input_not_mutated(self, star):
        apply_layout(star, "circular")
        assert all(node.position is None for node in star.nodes)


def test_unlock_positions(star):
    laid_out = apply_layout(star, "tree").graph
    unlocked = unlock_positions(laid_out)
    assert all(node.pinned is None for node in unlocked.nodes)
    assert coords(unlocked) == coords(laid_out)
    assert all(node.pinned is not None for node in laid_out.nodes)
