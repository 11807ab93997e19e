"""
Layout Command - Apply a single layout to a graph.

Useful when switching algorithms on an already enriched graph without
re-running repair and analysis.
"""

import sys

import click

from ...config import load_config
from ...core.exceptions import KnowGraphError
from ...layout.selector import LayoutSelector, unlock_positions
from ..utils import echo_error, load_graph, write_json
from .enrich import LAYOUT_CHOICES


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("-a", "--algorithm", type=click.Choice(LAYOUT_CHOICES, case_sensitive=False),
              default="auto", help="Layout algorithm")
@click.option("-o", "--output", default=None, help="Output JSON file (default: stdout)")
@click.option("-c", "--config", "config_path", default="knowgraph.yaml",
              help="YAML configuration file")
@click.option("--unlock", is_flag=True, help="Clear pinned positions instead of laying out")
def layout(graph_file: str, algorithm: str, output: str | None, config_path: str, unlock: bool):
    """
    Position nodes with ALGORITHM (force leaves positions untouched).
    """
    graph = load_graph(graph_file)
    if graph is None:
        sys.exit(1)

    if unlock:
        write_json(unlock_positions(graph).to_dict(), output)
        return

    try:
        config = load_config(config_path)
        result = LayoutSelector(config.layout).apply(graph, algorithm)
    except KnowGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    payload = result.graph.to_dict()
    payload["layout"] = result.algorithm.value
    write_json(payload, output)
