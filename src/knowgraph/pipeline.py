"""
Enrichment pipeline.

Runs once per extraction result:

    raw graph -> validate -> repair -> analyze -> layout -> curvature

Curvature runs last so the cardinal-angle nudge can use the laid-out
positions and self-loops can scale with the computed node sizes.
"""

import logging
from typing import Any, Dict

from .analysis.centrality import CentralityAnalyzer
from .analysis.connectivity import ConnectivityRepairer
from .config import KnowGraphConfig
from .core.graph import validate_graph
from .core.types import GraphData, LayoutAlgorithm
from .layout.curvature import CurvatureAssigner
from .layout.selector import LayoutResult, LayoutSelector

logger = logging.getLogger(__name__)


def coerce_graph(graph: "GraphData | Dict[str, Any]") -> GraphData:
    """Accept either a GraphData or the raw ``{nodes, links}`` mapping."""
    if isinstance(graph, GraphData):
        return graph
    return GraphData.from_dict(graph)


def enrich_graph(
    graph: "GraphData | Dict[str, Any]",
    config: KnowGraphConfig | None = None,
    algorithm: "LayoutAlgorithm | str | None" = None,
) -> LayoutResult:
    """
    Turn raw extraction output into a connected, render-ready graph.

    The input is never mutated.

    Raises:
        GraphIntegrityError: If a link references an unknown node.
        LayoutError: If the layout algorithm is unknown.
    """
    config = config or KnowGraphConfig()
    data = coerce_graph(graph)
    validate_graph(data)

    repaired = ConnectivityRepairer(config.repair).repair(data)
    analyzed = CentralityAnalyzer(config.centrality).analyze(repaired)
    result = LayoutSelector(config.layout).apply(analyzed, algorithm)

    laid_out = result.graph
    laid_out.links = CurvatureAssigner(config.curvature).assign(laid_out.links, laid_out.nodes)

    logger.info(
        f"Enriched graph: {len(laid_out.nodes)} nodes, {len(laid_out.links)} links "
        f"({len(laid_out.links) - len(data.links)} inferred), layout={result.algorithm.value}"
    )
    return result
