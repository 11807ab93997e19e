"""
Graph analytics: importance, link weights and communities.

Importance is a weighted PageRank over the directed link multigraph. Each
link passes on a share of its source's rank proportional to the link's
weight over the source's total outgoing weight. Rank that would flow out
of nodes without outgoing links is not redistributed, so the raw ranks sum
to at most 1. Ranks are then normalized by their maximum so the most
important node scores exactly 1.0.

Communities are connected components (flood fill), used purely for
grouping and colouring.
"""

import logging
from collections import defaultdict
from typing import Dict, List, Tuple

from ..config import CentralityConfig
from ..core.graph import connected_components, validate_graph
from ..core.types import GraphData, Link, Node

logger = logging.getLogger(__name__)


def pagerank(graph: GraphData, config: CentralityConfig | None = None) -> Dict[str, float]:
    """
    Raw (un-normalized) weighted PageRank for every node.

    Every node starts at 1/N. Nodes without links settle on the damping
    floor (1 - d) / N. An empty graph yields an empty mapping.
    """
    config = config or CentralityConfig()
    n = len(graph.nodes)
    if n == 0:
        return {}

    d = config.damping
    out_weight: Dict[str, float] = defaultdict(float)
    incoming: Dict[str, List[Tuple[str, float]]] = defaultdict(list)
    for link in graph.links:
        out_weight[link.source] += link.weight
        incoming[link.target].append((link.source, link.weight))

    ranks = {node.id: 1.0 / n for node in graph.nodes}
    floor = (1.0 - d) / n

    for _ in range(config.iterations):
        new_ranks: Dict[str, float] = {}
        for node in graph.nodes:
            rank_sum = 0.0
            for source, weight in incoming.get(node.id, ()):
                rank_sum += ranks.get(source, 0.0) * weight / (out_weight[source] or 1.0)
            new_ranks[node.id] = floor + d * rank_sum
        ranks = new_ranks

    return ranks


def normalize_importance(ranks: Dict[str, float]) -> Dict[str, float]:
    """Divide by the maximum rank; the top node gets 1.0."""
    if not ranks:
        return {}
    max_rank = max(ranks.values())
    if max_rank <= 0:
        return {node_id: 0.0 for node_id in ranks}
    return {node_id: min(rank / max_rank, 1.0) for node_id, rank in ranks.items()}


def normalize_weights(links: List[Link], config: CentralityConfig | None = None) -> List[Link]:
    """
    Rescale link weights linearly into [min_weight, max_weight].

    When every weight is equal, every link gets ``min_weight``.
    Returns new link objects.
    """
    config = config or CentralityConfig()
    if not links:
        return []

    weights = [link.weight for link in links]
    low, high = min(weights), max(weights)
    span = high - low
    target_span = config.max_weight - config.min_weight

    rescaled = []
    for link in links:
        if span > 0:
            value = config.min_weight + (link.weight - low) / span * target_span
        else:
            value = config.min_weight
        rescaled.append(link.model_copy(deep=True, update={"weight": value}))
    return rescaled


def assign_communities(graph: GraphData) -> Dict[str, int]:
    """Sequential community ids (0, 1, ...) by connected component, first-seen order."""
    communities: Dict[str, int] = {}
    for community_id, component in enumerate(connected_components(graph.node_ids(), graph.links)):
        for node_id in component:
            communities[node_id] = community_id
    return communities


class CentralityAnalyzer:
    """
    Enriches nodes with importance, size and community, and links with
    normalized weights.
    """

    def __init__(self, config: CentralityConfig | None = None):
        self.config = config or CentralityConfig()

    def node_size(self, importance: float) -> float:
        return self.config.min_size + importance * self.config.size_range

    def analyze(self, graph: GraphData) -> GraphData:
        """
        Return an analyzed copy of ``graph``.

        PageRank runs on the raw relationship weights; the weight
        normalization is applied to the output links afterwards.

        Raises:
            GraphIntegrityError: If a link references an unknown node.
        """
        validate_graph(graph)
        if graph.is_empty:
            return GraphData()

        importance = normalize_importance(pagerank(graph, self.config))
        communities = assign_communities(graph)

        nodes: List[Node] = []
        for node in graph.nodes:
            score = importance[node.id]
            nodes.append(node.model_copy(deep=True, update={
                "importance": score,
                "size": self.node_size(score),
                "group": communities[node.id],
            }))

        links = normalize_weights(graph.links, self.config)

        logger.debug(
            f"Analyzed {len(nodes)} nodes into {len(set(communities.values()))} "
            f"communities over {self.config.iterations} iterations"
        )
        return GraphData(nodes=nodes, links=links)


def analyze_graph(graph: GraphData, config: CentralityConfig | None = None) -> GraphData:
    """Convenience wrapper around ``CentralityAnalyzer.analyze``."""
    return CentralityAnalyzer(config).analyze(graph)
