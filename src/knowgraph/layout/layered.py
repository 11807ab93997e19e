"""
Layered (Sugiyama-style) hierarchical layout.

The classic four phases, in the manner of dagre:

1. Cycle removal: depth-first back edges are reversed so the link set
   becomes acyclic. Self-links and parallel links carry no layering
   information and are dropped.
2. Ranking: longest path from the roots (nodes without predecessors).
3. Ordering: links spanning several ranks are split with zero-size dummy
   nodes, then barycenter sweeps (alternating down and up) reorder each
   rank, keeping the ordering with the fewest crossings seen.
4. Coordinates: nodes are packed along their rank using their extents and
   ``nodesep``; ranks are stacked ``ranksep`` apart and centered on the
   widest one, then rotated or flipped for the rank direction.
"""

import logging
from bisect import bisect_right, insort
from dataclasses import dataclass, field
from typing import Dict, List, Set, Tuple

import networkx as nx

from ..config import DEFAULT_NODE_SIZE, NODE_EXTENT_FACTOR, HierarchicalLayoutOptions
from ..core.types import GraphData, RankDirection

logger = logging.getLogger(__name__)

_DUMMY_PREFIX = "\x00dummy:"


@dataclass
class LayerGraph:
    """Proper layered graph: every segment joins adjacent ranks."""
    layers: List[List[str]] = field(default_factory=list)
    upper: Dict[str, List[str]] = field(default_factory=dict)
    lower: Dict[str, List[str]] = field(default_factory=dict)

    def add_segment(self, top: str, bottom: str) -> None:
        self.lower.setdefault(top, []).append(bottom)
        self.upper.setdefault(bottom, []).append(top)


def acyclic_edges(node_ids: List[str], edges: List[Tuple[str, str]]) -> nx.DiGraph:
    """
    Directed graph over ``node_ids`` with back edges reversed.

    The DFS is iterative and visits roots in node order, so the result is
    deterministic for a given input order.
    """
    g = nx.DiGraph()
    g.add_nodes_from(node_ids)
    g.add_edges_from((u, v) for u, v in edges if u != v)

    state: Dict[str, int] = {}
    back_edges: Set[Tuple[str, str]] = set()
    for start in node_ids:
        if start in state:
            continue
        state[start] = 1
        stack = [(start, iter(list(g.successors(start))))]
        while stack:
            current, successors = stack[-1]
            advanced = False
            for nxt in successors:
                status = state.get(nxt, 0)
                if status == 1:
                    back_edges.add((current, nxt))
                elif status == 0:
                    state[nxt] = 1
                    stack.append((nxt, iter(list(g.successors(nxt)))))
                    advanced = True
                    break
            if not advanced:
                state[current] = 2
                stack.pop()

    dag = nx.DiGraph()
    dag.add_nodes_from(node_ids)
    for u, v in g.edges():
        if (u, v) in back_edges:
            dag.add_edge(v, u)
        else:
            dag.add_edge(u, v)

    if back_edges:
        logger.debug(f"Reversed {len(back_edges)} back edge(s) to break cycles")
    return dag


def longest_path_ranks(dag: nx.DiGraph) -> Dict[str, int]:
    """Rank = length of the longest path from any root."""
    ranks: Dict[str, int] = {}
    for node in nx.topological_sort(dag):
        preds = list(dag.predecessors(node))
        ranks[node] = max((ranks[p] + 1 for p in preds), default=0)
    return ranks


def build_layers(node_ids: List[str], dag: nx.DiGraph, ranks: Dict[str, int]) -> LayerGraph:
    """Assign nodes to ranks in node order, inserting dummies along long edges."""
    depth = max(ranks.values(), default=-1) + 1
    layered = LayerGraph(layers=[[] for _ in range(depth)])
    for node_id in node_ids:
        layered.layers[ranks[node_id]].append(node_id)

    dummy_count = 0
    for u, v in dag.edges():
        previous = u
        for rank in range(ranks[u] + 1, ranks[v]):
            dummy = f"{_DUMMY_PREFIX}{dummy_count}"
            dummy_count += 1
            layered.layers[rank].append(dummy)
            layered.add_segment(previous, dummy)
            previous = dummy
        layered.add_segment(previous, v)

    return layered


def count_crossings(layered: LayerGraph, layers: List[List[str]]) -> int:
    """Total segment crossings between every pair of adjacent ranks."""
    total = 0
    for r in range(len(layers) - 1):
        top_pos = {node: i for i, node in enumerate(layers[r])}
        bottom_pos = {node: i for i, node in enumerate(layers[r + 1])}
        segments = sorted(
            (top_pos[node], bottom_pos[child])
            for node in layers[r]
            for child in layered.lower.get(node, [])
        )
        seen: List[int] = []
        for _, b in segments:
            total += len(seen) - bisect_right(seen, b)
            insort(seen, b)
    return total


def _barycenter_sweep(layered: LayerGraph, layers: List[List[str]], downward: bool) -> None:
    if downward:
        order = range(1, len(layers))
        neighbors_of, step = layered.upper, -1
    else:
        order = range(len(layers) - 2, -1, -1)
        neighbors_of, step = layered.lower, 1

    for r in order:
        fixed_pos = {node: i for i, node in enumerate(layers[r + step])}
        scored = []
        for i, node in enumerate(layers[r]):
            adjacent = [fixed_pos[n] for n in neighbors_of.get(node, []) if n in fixed_pos]
            barycenter = sum(adjacent) / len(adjacent) if adjacent else float(i)
            scored.append((barycenter, i, node))
        scored.sort()
        layers[r] = [node for _, _, node in scored]


def order_layers(layered: LayerGraph, sweeps: int) -> List[List[str]]:
    """Reduce crossings with alternating barycenter sweeps; returns the best ordering."""
    current = [list(layer) for layer in layered.layers]
    best = [list(layer) for layer in current]
    best_crossings = count_crossings(layered, best)

    for sweep in range(sweeps):
        if best_crossings == 0:
            break
        _barycenter_sweep(layered, current, downward=(sweep % 2 == 0))
        crossings = count_crossings(layered, current)
        if crossings < best_crossings:
            best = [list(layer) for layer in current]
            best_crossings = crossings

    logger.debug(f"Layer ordering settled with {best_crossings} crossing(s)")
    return best


def layered_positions(
    graph: GraphData,
    options: HierarchicalLayoutOptions | None = None,
) -> Dict[str, Tuple[float, float]]:
    """
    Compute (x, y) centers for every node of ``graph``.

    Node boxes are ``size * 4`` on a side (size 10 when unset or zero).
    """
    options = options or HierarchicalLayoutOptions()
    node_ids = graph.node_ids()
    if not node_ids:
        return {}

    extents: Dict[str, float] = {}
    for node in graph.nodes:
        size = node.size if node.size > 0 else DEFAULT_NODE_SIZE
        extents[node.id] = size * NODE_EXTENT_FACTOR

    dag = acyclic_edges(node_ids, [(link.source, link.target) for link in graph.links])
    ranks = longest_path_ranks(dag)
    layered = build_layers(node_ids, dag, ranks)
    layers = order_layers(layered, options.sweeps)

    # Boxes are square, so breadth and depth extents coincide
    def extent(node: str) -> float:
        return extents.get(node, 0.0)

    layer_breadths = [
        sum(extent(n) for n in layer) + options.nodesep * max(len(layer) - 1, 0)
        for layer in layers
    ]
    layer_depths = [max((extent(n) for n in layer), default=0.0) for layer in layers]
    total_breadth = max(layer_breadths, default=0.0)
    total_depth = sum(layer_depths) + options.ranksep * max(len(layers) - 1, 0)

    abstract: Dict[str, Tuple[float, float]] = {}
    depth_offset = 0.0
    for layer, breadth, depth in zip(layers, layer_breadths, layer_depths):
        cursor = (total_breadth - breadth) / 2
        for node in layer:
            w = extent(node)
            if not node.startswith(_DUMMY_PREFIX):
                abstract[node] = (cursor + w / 2, depth_offset + depth / 2)
            cursor += w + options.nodesep
        depth_offset += depth + options.ranksep

    positions: Dict[str, Tuple[float, float]] = {}
    for node_id, (b, d) in abstract.items():
        if options.rankdir == RankDirection.TOP_BOTTOM:
            x, y = b, d
        elif options.rankdir == RankDirection.BOTTOM_TOP:
            x, y = b, total_depth - d
        elif options.rankdir == RankDirection.LEFT_RIGHT:
            x, y = d, b
        else:
            x, y = total_depth - d, b
        positions[node_id] = (x + options.marginx, y + options.marginy)

    logger.debug(f"Layered layout: {len(layers)} rank(s), {len(positions)} node(s)")
    return positions
