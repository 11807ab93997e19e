"""
knowgraph CLI - Main entry point.

This module registers all CLI commands. Each command is implemented
in its own module under cli/commands/.
"""

import click

from .commands import enrich, highlight, layout, stats
from .utils import configure_logging


@click.group()
@click.version_option(package_name="knowgraph")
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
def main(verbose: bool):
    """knowgraph: enrichment for interactive knowledge graphs.

    Repairs fragmented extraction output, scores entity importance,
    and pre-computes layouts and highlight sets for rendering.

    \b
    Quick Start:
      knowgraph enrich raw.json -o graph.json
      knowgraph highlight graph.json aspirin --pathway
      knowgraph stats graph.json
    """
    configure_logging(verbose)


# Register commands
main.add_command(enrich.enrich)
main.add_command(highlight.highlight)
main.add_command(layout.layout)
main.add_command(stats.stats)

if __name__ == "__main__":
    main()
