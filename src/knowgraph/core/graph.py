"""
Graph helpers shared by every enrichment component.

This module provides:
- Referential integrity checks (the only contract the core enforces).
- A structural fingerprint used as a memoization key.
- Iterative connected-component discovery in first-seen order.
- A NetworkX view of the graph and shape statistics.
"""

import hashlib
from typing import Dict, Iterable, List, Sequence

import networkx as nx
from pydantic import BaseModel

from .exceptions import GraphIntegrityError
from .types import GraphData, Link


class GraphStats(BaseModel):
    """Shape statistics used to pick a layout and to report on a graph."""
    node_count: int
    link_count: int
    average_degree: float
    has_self_loops: bool
    is_tree_shaped: bool
    component_count: int
    inferred_link_count: int
    max_in_degree: int


def validate_graph(graph: GraphData) -> None:
    """
    Reject graphs with duplicate node ids or dangling link endpoints.

    Raises:
        GraphIntegrityError: On the first violation found.
    """
    seen = set()
    for node in graph.nodes:
        if node.id in seen:
            raise GraphIntegrityError(node.id)
        seen.add(node.id)

    for index, link in enumerate(graph.links):
        if link.source not in seen:
            raise GraphIntegrityError(link.source, link_index=index)
        if link.target not in seen:
            raise GraphIntegrityError(link.target, link_index=index)


def fingerprint(graph: GraphData) -> str:
    """
    Structural fingerprint of a graph: node ids and link endpoints, in order.

    Two graphs with the same fingerprint have identical adjacency, whatever
    their object identity, so caches keyed on it cannot go stale when a
    caller reuses a graph object with mutated contents.
    """
    digest = hashlib.sha256()
    for node in graph.nodes:
        digest.update(b"n\x00")
        digest.update(node.id.encode("utf-8"))
        digest.update(b"\x00")
    for link in graph.links:
        digest.update(b"l\x00")
        digest.update(link.source.encode("utf-8"))
        digest.update(b"\x00")
        digest.update(link.target.encode("utf-8"))
        digest.update(b"\x00")
    return digest.hexdigest()


def undirected_adjacency(node_ids: Iterable[str], links: Iterable[Link]) -> Dict[str, Dict[str, None]]:
    """
    Build an undirected adjacency structure.

    Neighbors are kept in a dict used as an insertion-ordered set, so
    traversals visit them in link order and results stay deterministic.
    Endpoints that are not in ``node_ids`` are ignored.
    """
    adjacency: Dict[str, Dict[str, None]] = {node_id: {} for node_id in node_ids}
    for link in links:
        if link.source not in adjacency or link.target not in adjacency:
            continue
        adjacency[link.source][link.target] = None
        adjacency[link.target][link.source] = None
    return adjacency


def connected_components(node_ids: Sequence[str], links: Iterable[Link]) -> List[List[str]]:
    """
    Find connected components of the undirected graph.

    Uses an explicit stack rather than recursion so long chains cannot hit
    the interpreter's recursion limit. Nodes are marked visited when pushed.
    Components are returned in the order their first node appears in
    ``node_ids``; members are listed in depth-first discovery order.
    """
    adjacency = undirected_adjacency(node_ids, links)
    visited = set()
    components: List[List[str]] = []

    for start in node_ids:
        if start in visited:
            continue

        component: List[str] = []
        visited.add(start)
        stack = [start]
        while stack:
            current = stack.pop()
            component.append(current)
            # Reverse so the first neighbor is expanded first
            for neighbor in reversed(list(adjacency[current])):
                if neighbor not in visited:
                    visited.add(neighbor)
                    stack.append(neighbor)
        components.append(component)

    return components


def to_networkx(graph: GraphData) -> nx.MultiDiGraph:
    """Directed multigraph view; node and link models ride along as ``data``."""
    g = nx.MultiDiGraph()
    for node in graph.nodes:
        g.add_node(node.id, data=node)
    for index, link in enumerate(graph.links):
        g.add_edge(link.source, link.target, key=index, data=link)
    return g


def describe(graph: GraphData) -> GraphStats:
    """Compute shape statistics for a validated graph."""
    g = to_networkx(graph)
    node_count = g.number_of_nodes()
    link_count = g.number_of_edges()
    in_degree = dict(g.in_degree())

    return GraphStats(
        node_count=node_count,
        link_count=link_count,
        average_degree=(2 * link_count / node_count) if node_count else 0.0,
        has_self_loops=nx.number_of_selfloops(g) > 0,
        is_tree_shaped=all(count <= 1 for count in in_degree.values()),
        component_count=len(connected_components(graph.node_ids(), graph.links)),
        inferred_link_count=sum(1 for link in graph.links if link.is_inferred),
        max_in_degree=max(in_degree.values(), default=0),
    )
