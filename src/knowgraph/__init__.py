"""
knowgraph - enrichment core for interactive knowledge graphs.

Turns raw extraction output (entities and relationships) into a connected,
render-ready graph: importance scores, communities, link curvature and
pre-computed layouts, plus fast highlight sets for interactive exploration.
"""

from .core.exceptions import GraphIntegrityError, KnowGraphError
from .core.types import GraphData, HighlightState, LayoutAlgorithm, Link, Node, Position
from .pipeline import enrich_graph

__version__ = "0.3.0"

__all__ = [
    "GraphData",
    "GraphIntegrityError",
    "HighlightState",
    "KnowGraphError",
    "LayoutAlgorithm",
    "Link",
    "Node",
    "Position",
    "enrich_graph",
]
