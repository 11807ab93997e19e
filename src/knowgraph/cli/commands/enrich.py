"""
Enrich Command - Run the full enrichment pipeline.

Reads raw extraction output (nodes and links, links weighted by ``value``)
and writes a connected, analyzed, laid-out graph ready for rendering.
"""

import sys

import click

from ...config import load_config
from ...core.exceptions import KnowGraphError
from ...core.types import LayoutAlgorithm
from ...pipeline import enrich_graph
from ..utils import echo_error, echo_info, load_graph, write_json

LAYOUT_CHOICES = [algorithm.value for algorithm in LayoutAlgorithm] + ["dagre"]


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-o", "--output", default=None, help="Output JSON file (default: stdout)")
@click.option("--layout", "layout_name", type=click.Choice(LAYOUT_CHOICES, case_sensitive=False),
              default=None, help="Layout algorithm (default: from config, else auto)")
@click.option("-c", "--config", "config_path", default="knowgraph.yaml",
              help="YAML configuration file")
def enrich(graph_file: str, output: str | None, layout_name: str | None, config_path: str):
    """
    Repair, analyze and lay out a raw extraction graph.
    """
    graph = load_graph(graph_file)
    if graph is None:
        sys.exit(1)

    try:
        config = load_config(config_path)
        result = enrich_graph(graph, config=config, algorithm=layout_name)
    except KnowGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    payload = result.graph.to_dict()
    payload["layout"] = result.algorithm.value
    write_json(payload, output)

    if output is not None:
        inferred = sum(1 for link in result.graph.links if link.is_inferred)
        echo_info(f"{len(result.graph.nodes)} nodes, {len(result.graph.links)} links "
                  f"({inferred} inferred), layout: {result.algorithm.value}")
