"""
Focus highlighting for interactive exploration.

Two modes, driven by the focused node:
- Direct: the focus, its immediate neighbors and every link touching it.
- Pathway: everything within ``max_depth`` hops (breadth-first), plus
  every link whose endpoints are both inside that set.

Recomputation runs on every hover, so it leans on a memoized NeighborIndex
instead of rescanning links for adjacency.
"""

import logging
from collections import deque
from typing import List, Set, Tuple

from ..config import HighlightConfig, STRONGEST_RELATIONSHIP_LIMIT
from ..core.types import GraphData, HighlightState, Link, Node, link_key
from .neighbors import NeighborIndex, NeighborMap

logger = logging.getLogger(__name__)


def direct_highlight(graph: GraphData, neighbor_map: NeighborMap, focus_id: str) -> HighlightState:
    nodes = {focus_id}
    nodes.update(neighbor_map.get(focus_id, frozenset()))
    links = {
        link_key(index)
        for index, link in enumerate(graph.links)
        if link.touches(focus_id)
    }
    return HighlightState(nodes=frozenset(nodes), links=frozenset(links))


def pathway_highlight(
    graph: GraphData,
    neighbor_map: NeighborMap,
    focus_id: str,
    max_depth: int,
) -> HighlightState:
    """Bounded breadth-first search; nodes are marked visited when enqueued."""
    visited: Set[str] = {focus_id}
    queue = deque([(focus_id, 0)])
    while queue:
        current, depth = queue.popleft()
        if depth >= max_depth:
            continue
        for neighbor in neighbor_map.get(current, frozenset()):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append((neighbor, depth + 1))

    links = {
        link_key(index)
        for index, link in enumerate(graph.links)
        if link.source in visited and link.target in visited
    }
    return HighlightState(nodes=frozenset(visited), links=frozenset(links))


class PathwayHighlighter:
    """
    Highlight state machine: Idle, Direct or Pathway.

    An unknown focus id highlights only the id itself (no neighbors, no
    links), the idle-equivalent outcome.
    """

    def __init__(
        self,
        graph: GraphData,
        config: HighlightConfig | None = None,
        index: NeighborIndex | None = None,
    ):
        self.config = config or HighlightConfig()
        self._index = index or NeighborIndex()
        self._graph = graph
        self._focus_id: str | None = None
        self._pathway_mode = self.config.pathway_mode
        self._state = HighlightState.empty()

    @property
    def graph(self) -> GraphData:
        return self._graph

    @property
    def focus_id(self) -> str | None:
        return self._focus_id

    @property
    def pathway_mode(self) -> bool:
        return self._pathway_mode

    @property
    def state(self) -> HighlightState:
        return self._state

    def set_graph(self, graph: GraphData) -> HighlightState:
        """Swap in a new graph, keeping the current focus and mode."""
        self._graph = graph
        return self._recompute()

    def focus(self, node: "str | Node | None") -> HighlightState:
        """Change the focused node (None returns to idle)."""
        self._focus_id = node.id if isinstance(node, Node) else node
        return self._recompute()

    def set_pathway_mode(self, enabled: bool) -> HighlightState:
        self._pathway_mode = enabled
        return self._recompute()

    def clear(self) -> HighlightState:
        return self.focus(None)

    def is_node_highlighted(self, node_id: str) -> bool:
        return node_id in self._state.nodes

    def is_link_highlighted(self, link: Link) -> bool:
        """A link is highlighted when both of its endpoints are."""
        return link.source in self._state.nodes and link.target in self._state.nodes

    def _recompute(self) -> HighlightState:
        focus_id = self._focus_id
        if focus_id is None:
            self._state = HighlightState.empty()
            return self._state

        neighbor_map = self._index.build(self._graph)
        if focus_id not in neighbor_map:
            self._state = HighlightState(nodes=frozenset({focus_id}))
        elif self._pathway_mode:
            self._state = pathway_highlight(self._graph, neighbor_map, focus_id, self.config.max_depth)
        else:
            self._state = direct_highlight(self._graph, neighbor_map, focus_id)

        logger.debug(
            f"Highlight for {focus_id} ({'pathway' if self._pathway_mode else 'direct'}): "
            f"{len(self._state.nodes)} nodes, {len(self._state.links)} links"
        )
        return self._state


def compute_highlight(
    graph: GraphData,
    focus_id: str | None,
    pathway_mode: bool = False,
    max_depth: int | None = None,
    index: NeighborIndex | None = None,
) -> HighlightState:
    """One-shot highlight computation for a single focus."""
    config = HighlightConfig(pathway_mode=pathway_mode)
    if max_depth is not None:
        config = HighlightConfig(pathway_mode=pathway_mode, max_depth=max_depth)
    return PathwayHighlighter(graph, config=config, index=index).focus(focus_id)


def strongest_relationships(
    graph: GraphData,
    node_id: str,
    limit: int = STRONGEST_RELATIONSHIP_LIMIT,
) -> List[Tuple[Node, Link]]:
    """
    The direct relationships of a node, heaviest first.

    Returns (other node, link) pairs; a self-link pairs the node with itself.
    Equal weights keep link order.
    """
    nodes = graph.node_map()
    related = []
    for link in graph.links:
        if not link.touches(node_id):
            continue
        other_id = link.target if link.source == node_id else link.source
        other = nodes.get(other_id)
        if other is not None:
            related.append((other, link))

    related.sort(key=lambda pair: pair[1].weight, reverse=True)
    return related[:limit]
