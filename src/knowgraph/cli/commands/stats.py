"""
Stats Command - Describe a graph's shape.
"""

import json
import sys

import click
from rich.console import Console
from rich.table import Table

from ...core.exceptions import KnowGraphError
from ...core.graph import describe, validate_graph
from ...layout.selector import choose_algorithm
from ..utils import echo_error, load_graph

console = Console()


@click.command()
@click.argument("graph_file", type=click.Path())
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def stats(graph_file: str, as_json: bool):
    """
    Show node/link counts, connectivity and the layout auto mode would pick.
    """
    graph = load_graph(graph_file)
    if graph is None:
        sys.exit(1)

    try:
        validate_graph(graph)
    except KnowGraphError as e:
        echo_error(str(e))
        sys.exit(1)

    summary = describe(graph)
    suggested = choose_algorithm(summary).value if not graph.is_empty else "none"

    if as_json:
        payload = summary.model_dump()
        payload["suggested_layout"] = suggested
        click.echo(json.dumps(payload, indent=2))
        return

    table = Table(title=f"Graph: {graph_file}")
    table.add_column("Metric", style="cyan")
    table.add_column("Value", justify="right")
    table.add_row("Nodes", str(summary.node_count))
    table.add_row("Links", str(summary.link_count))
    table.add_row("Inferred links", str(summary.inferred_link_count))
    table.add_row("Average degree", f"{summary.average_degree:.2f}")
    table.add_row("Components", str(summary.component_count))
    table.add_row("Self-loops", "yes" if summary.has_self_loops else "no")
    table.add_row("Tree-shaped", "yes" if summary.is_tree_shaped else "no")
    table.add_row("Max in-degree", str(summary.max_in_degree))
    table.add_row("Suggested layout", suggested)
    console.print(table)
