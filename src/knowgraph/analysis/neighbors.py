"""
Neighbor index.

Pre-computes undirected adjacency so hover and focus handlers look up
neighbors in O(1) instead of scanning every link per event. Results are
memoized on the graph's structural fingerprint.
"""

import logging
from collections import OrderedDict, deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, FrozenSet, Mapping, Tuple

from ..config import NEIGHBOR_CACHE_SIZE, PATHWAY_MAX_DEPTH
from ..core.exceptions import GraphIntegrityError
from ..core.graph import fingerprint
from ..core.types import GraphData, link_key

logger = logging.getLogger(__name__)

NeighborMap = Mapping[str, FrozenSet[str]]


@dataclass(frozen=True)
class HopNeighbors:
    """Direct neighbors and everything reachable within the hop limit."""
    direct: FrozenSet[str]
    multi_hop: FrozenSet[str]


class NeighborIndex:
    """
    Memoized builder of neighbor maps.

    The cache is a small LRU keyed by ``fingerprint(graph)``. Replacing the
    graph produces a new key, so stale entries simply age out; ``clear()``
    drops everything at once.
    """

    def __init__(self, maxsize: int = NEIGHBOR_CACHE_SIZE):
        self._maxsize = maxsize
        self._cache: "OrderedDict[str, NeighborMap]" = OrderedDict()
        self.hits = 0
        self.misses = 0

    def build(self, graph: GraphData) -> NeighborMap:
        """
        Return the neighbor map for ``graph``.

        Self-links put a node in its own neighbor set.

        Raises:
            GraphIntegrityError: If a link references an unknown node.
        """
        key = fingerprint(graph)
        cached = self._cache.get(key)
        if cached is not None:
            self._cache.move_to_end(key)
            self.hits += 1
            return cached

        self.misses += 1
        neighbor_map = build_neighbor_map(graph)
        self._cache[key] = neighbor_map
        if len(self._cache) > self._maxsize:
            self._cache.popitem(last=False)
        return neighbor_map

    def clear(self) -> None:
        self._cache.clear()

    def __len__(self) -> int:
        return len(self._cache)


def build_neighbor_map(graph: GraphData) -> NeighborMap:
    """Build the undirected neighbor map in a single pass, without caching."""
    sets: Dict[str, set] = {node.id: set() for node in graph.nodes}

    for index, link in enumerate(graph.links):
        if link.source not in sets:
            raise GraphIntegrityError(link.source, link_index=index)
        if link.target not in sets:
            raise GraphIntegrityError(link.target, link_index=index)
        sets[link.source].add(link.target)
        sets[link.target].add(link.source)

    logger.debug(f"Built neighbor map for {len(sets)} nodes, {len(graph.links)} links")
    return MappingProxyType({node_id: frozenset(ids) for node_id, ids in sets.items()})


def multi_hop_neighbors(
    graph: GraphData,
    max_depth: int = PATHWAY_MAX_DEPTH,
    neighbor_map: NeighborMap | None = None,
) -> Dict[str, HopNeighbors]:
    """
    For every node, its direct neighbors and all nodes within ``max_depth`` hops.

    The start node itself is never part of its own multi-hop set.
    """
    if neighbor_map is None:
        neighbor_map = build_neighbor_map(graph)

    result: Dict[str, HopNeighbors] = {}
    for node in graph.nodes:
        visited = {node.id}
        reached = set()
        queue = deque([(node.id, 0)])
        while queue:
            current, depth = queue.popleft()
            if depth >= max_depth:
                continue
            for neighbor in neighbor_map.get(current, frozenset()):
                if neighbor not in visited:
                    visited.add(neighbor)
                    reached.add(neighbor)
                    queue.append((neighbor, depth + 1))

        result[node.id] = HopNeighbors(
            direct=neighbor_map.get(node.id, frozenset()),
            multi_hop=frozenset(reached),
        )
    return result


def link_endpoints(graph: GraphData) -> Dict[str, Tuple[str, str, float]]:
    """Map each link identifier to its (source, target, weight)."""
    return {
        link_key(index): (link.source, link.target, link.weight)
        for index, link in enumerate(graph.links)
    }
