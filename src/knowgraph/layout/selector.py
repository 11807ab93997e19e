"""
Layout selection and fixed-position layouts.

Pre-computed layouts set both ``position`` and ``pinned`` on every node so
a physics-based renderer does not move them. ``force`` leaves positions
alone and lets the renderer's simulation handle placement.

Auto selection inspects the graph's shape, in priority order:
1. tree       - every node has at most one incoming link and no self-loops
2. hierarchical - sparse (average degree < 3) with more than 10 links
3. circular   - fewer than 50 nodes and no self-loops
4. force      - everything else
"""

import logging
import math
from collections import deque
from dataclasses import dataclass
from typing import Dict, List, Tuple

from ..config import (
    AUTO_MAX_CIRCULAR_NODES,
    AUTO_MIN_LINKS_FOR_HIERARCHY,
    AUTO_SPARSE_DEGREE,
    CIRCULAR_MIN_RADIUS,
    CIRCULAR_RADIUS_PER_NODE,
    CircularLayoutOptions,
    LayoutConfig,
    TreeLayoutOptions,
)
from ..core.exceptions import LayoutError
from ..core.graph import GraphStats, describe, validate_graph
from ..core.types import GraphData, LayoutAlgorithm, Position, TreeOrientation
from .layered import layered_positions

logger = logging.getLogger(__name__)


@dataclass
class LayoutResult:
    """
    Outcome of a layout request.

    Attributes:
        graph: Copy of the input with positions applied (or untouched for force).
        algorithm: The algorithm actually applied; never AUTO.
        requested: The algorithm the caller asked for.
    """
    graph: GraphData
    algorithm: LayoutAlgorithm
    requested: LayoutAlgorithm

    @property
    def is_prepositioned(self) -> bool:
        return self.algorithm != LayoutAlgorithm.FORCE


def pin_positions(graph: GraphData, positions: Dict[str, Tuple[float, float]]) -> GraphData:
    """Apply positions and pin them; nodes missing from ``positions`` go to (0, 0)."""
    for node in graph.nodes:
        x, y = positions.get(node.id, (0.0, 0.0))
        node.position = Position(x=x, y=y)
        node.pinned = Position(x=x, y=y)
    return graph


def unlock_positions(graph: GraphData) -> GraphData:
    """Copy of ``graph`` with pinned positions cleared, handing nodes back to the simulation."""
    result = graph.clone()
    for node in result.nodes:
        node.pinned = None
    return result


def tree_root(graph: GraphData, root: str | None = None) -> str:
    """
    Explicit root, else the first node without incoming links, else the first node.

    Raises:
        LayoutError: If an explicit root is not in the graph.
    """
    node_ids = graph.node_ids()
    if root is not None:
        if root not in node_ids:
            raise LayoutError(f"Tree root '{root}' is not in the graph")
        return root

    has_parent = {link.target for link in graph.links}
    for node_id in node_ids:
        if node_id not in has_parent:
            return node_id

    logger.warning("No root node found for tree layout, using first node")
    return node_ids[0]


def tree_levels(graph: GraphData, root: str) -> List[List[str]]:
    """Breadth-first levels from ``root`` following link direction."""
    children: Dict[str, List[str]] = {node_id: [] for node_id in graph.node_ids()}
    for link in graph.links:
        children[link.source].append(link.target)

    levels: List[List[str]] = []
    visited = {root}
    queue = deque([(root, 0)])
    while queue:
        current, level = queue.popleft()
        if level == len(levels):
            levels.append([])
        levels[level].append(current)
        for child in children.get(current, []):
            if child not in visited:
                visited.add(child)
                queue.append((child, level + 1))
    return levels


def tree_positions(graph: GraphData, options: TreeLayoutOptions | None = None) -> Dict[str, Tuple[float, float]]:
    """
    Breadth-first tree positions.

    Nodes unreachable from the root get no entry (and end up at the origin).
    """
    options = options or TreeLayoutOptions()
    if graph.is_empty:
        return {}

    root = tree_root(graph, options.root)
    positions: Dict[str, Tuple[float, float]] = {}

    for level, members in enumerate(tree_levels(graph, root)):
        count = len(members)
        for index, node_id in enumerate(members):
            along = (index - (count - 1) / 2) * options.sibling_separation
            across = level * options.level_separation
            if options.orientation == TreeOrientation.VERTICAL:
                positions[node_id] = (along, across)
            elif options.orientation == TreeOrientation.HORIZONTAL:
                positions[node_id] = (across, along)
            else:
                # Radial: each level on its own ring, root at the center
                angle = 2 * math.pi * index / count
                positions[node_id] = (across * math.cos(angle), across * math.sin(angle))

    return positions


def circular_positions(graph: GraphData, options: CircularLayoutOptions | None = None) -> Dict[str, Tuple[float, float]]:
    """Nodes evenly spaced on a circle of radius max(200, 10 * N) unless overridden."""
    options = options or CircularLayoutOptions()
    count = len(graph.nodes)
    if count == 0:
        return {}

    radius = options.radius or max(CIRCULAR_MIN_RADIUS, count * CIRCULAR_RADIUS_PER_NODE)
    positions = {}
    for index, node in enumerate(graph.nodes):
        angle = 2 * math.pi * index / count
        positions[node.id] = (radius * math.cos(angle), radius * math.sin(angle))
    return positions


def choose_algorithm(stats: GraphStats) -> LayoutAlgorithm:
    """Pick a layout from graph shape statistics."""
    if stats.is_tree_shaped and not stats.has_self_loops:
        return LayoutAlgorithm.TREE
    if stats.average_degree < AUTO_SPARSE_DEGREE and stats.link_count > AUTO_MIN_LINKS_FOR_HIERARCHY:
        return LayoutAlgorithm.HIERARCHICAL
    if stats.node_count < AUTO_MAX_CIRCULAR_NODES and not stats.has_self_loops:
        return LayoutAlgorithm.CIRCULAR
    return LayoutAlgorithm.FORCE


class LayoutSelector:
    """Applies a requested layout algorithm, resolving ``auto`` from graph shape."""

    def __init__(self, config: LayoutConfig | None = None):
        self.config = config or LayoutConfig()

    def apply(self, graph: GraphData, algorithm: "LayoutAlgorithm | str | None" = None) -> LayoutResult:
        """
        Lay out a copy of ``graph``.

        Raises:
            LayoutError: For an unknown algorithm name or an invalid tree root.
        """
        requested = self._resolve(algorithm)
        if graph.is_empty:
            return LayoutResult(graph=GraphData(), algorithm=LayoutAlgorithm.FORCE, requested=requested)

        validate_graph(graph)
        result = graph.clone()

        chosen = requested
        if requested == LayoutAlgorithm.AUTO:
            chosen = choose_algorithm(describe(result))
            logger.info(f"Auto-selected {chosen.value} layout")

        if chosen == LayoutAlgorithm.TREE:
            pin_positions(result, tree_positions(result, self.config.tree))
        elif chosen == LayoutAlgorithm.HIERARCHICAL:
            pin_positions(result, layered_positions(result, self.config.hierarchical))
        elif chosen == LayoutAlgorithm.CIRCULAR:
            pin_positions(result, circular_positions(result, self.config.circular))

        return LayoutResult(graph=result, algorithm=chosen, requested=requested)

    def _resolve(self, algorithm: "LayoutAlgorithm | str | None") -> LayoutAlgorithm:
        if algorithm is None:
            return self.config.algorithm
        try:
            return LayoutAlgorithm(algorithm)
        except ValueError as e:
            raise LayoutError(f"Unknown layout algorithm '{algorithm}'") from e


def apply_layout(
    graph: GraphData,
    algorithm: "LayoutAlgorithm | str" = LayoutAlgorithm.AUTO,
    config: LayoutConfig | None = None,
) -> LayoutResult:
    """Convenience wrapper around ``LayoutSelector.apply``."""
    return LayoutSelector(config).apply(graph, algorithm)
