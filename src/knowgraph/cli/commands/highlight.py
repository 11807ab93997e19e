"""
Highlight Command - Compute the highlight set for a focus node.

Prints the node ids and link identifiers (``link-<index>``) a renderer
should emphasise, plus the node's strongest direct relationships.
"""

import sys

import click

from ...analysis.highlight import compute_highlight, strongest_relationships
from ...config import PATHWAY_MAX_DEPTH
from ...core.exceptions import KnowGraphError
from ..utils import echo_error, load_graph, write_json


@click.command()
@click.argument("graph_file", type=click.Path())
@click.argument("node_id")
@click.option("--pathway", is_flag=True, help="Multi-hop pathway mode instead of direct neighbors")
@click.option("--depth", default=PATHWAY_MAX_DEPTH, type=click.IntRange(min=1),
              help="Maximum hops in pathway mode")
def highlight(graph_file: str, node_id: str, pathway: bool, depth: int):
    """
    Show which nodes and links light up when NODE_ID is focused.
    """
    graph = load_graph(graph_file)
    if graph is None:
        sys.exit(1)

    try:
        state = compute_highlight(graph, node_id, pathway_mode=pathway, max_depth=depth)
    except KnowGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    strongest = [
        {"node": other.id, "type": link.type, "weight": link.weight}
        for other, link in strongest_relationships(graph, node_id)
    ]

    write_json({
        "focus": node_id,
        "mode": "pathway" if pathway else "direct",
        "nodes": sorted(state.nodes),
        "links": sorted(state.links, key=lambda key: int(key.split("-")[1])),
        "strongest": strongest,
    }, None)
