"""
Graph analysis: neighbor indexing, connectivity repair, importance scoring
and focus highlighting.
"""

from .centrality import CentralityAnalyzer, analyze_graph, pagerank
from .connectivity import ConnectivityRepairer, connect_components, node_similarity
from .highlight import PathwayHighlighter, compute_highlight, strongest_relationships
from .neighbors import NeighborIndex, build_neighbor_map, link_endpoints, multi_hop_neighbors

__all__ = [
    "CentralityAnalyzer",
    "ConnectivityRepairer",
    "NeighborIndex",
    "PathwayHighlighter",
    "analyze_graph",
    "build_neighbor_map",
    "compute_highlight",
    "connect_components",
    "link_endpoints",
    "multi_hop_neighbors",
    "node_similarity",
    "pagerank",
    "strongest_relationships",
]
