"""
CLI Utilities - Shared helper functions for command line operations.

This module provides formatted printing and the graph file I/O used by
every command.
"""

import json
import logging
from pathlib import Path
from typing import Any, Dict

import click
from pydantic import ValidationError

from ..core.types import GraphData

LOG_FORMAT = "%(asctime)s %(levelname)s %(message)s"


def echo_success(message: str) -> None:
    """
    Print a success message with a green checkmark.

    Args:
        message (str): The message to display.
    """
    click.echo(click.style(f"✅ {message}", fg="green"), err=True)


def echo_error(message: str) -> None:
    """
    Print an error message with a red cross.

    Args:
        message (str): The error message to display.
    """
    click.echo(click.style(f"❌ {message}", fg="red"), err=True)


def echo_info(message: str) -> None:
    """
    Print an informational message, dimmed.

    Args:
        message (str): The info message to display.
    """
    click.echo(click.style(f"   {message}", dim=True), err=True)


def configure_logging(verbose: bool) -> None:
    """Route library logs to stderr; DEBUG when verbose, WARNING otherwise."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=LOG_FORMAT,
        datefmt="[%X]",
    )


def load_graph(graph_file: str) -> GraphData | None:
    """
    Load a graph from a JSON file of the form ``{"nodes": [...], "links": [...]}``.

    Reports the problem and returns None when the file is missing, is not
    JSON, or does not match the graph shape.
    """
    path = Path(graph_file)
    if not path.exists():
        echo_error(f"Graph file not found: {graph_file}")
        return None

    try:
        raw = json.loads(path.read_text())
    except json.JSONDecodeError as e:
        echo_error(f"Invalid JSON in {graph_file}: {e}")
        return None

    try:
        return GraphData.from_dict(raw)
    except ValidationError as e:
        echo_error(f"Malformed graph in {graph_file}: {e.error_count()} validation error(s)")
        click.echo(str(e), err=True)
        return None


def write_json(payload: Dict[str, Any], output: str | None) -> None:
    """Write ``payload`` to ``output``, or to stdout when no output is given."""
    text = json.dumps(payload, indent=2)
    if output is None:
        click.echo(text)
        return

    output_path = Path(output)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    output_path.write_text(text)
    echo_success(f"Wrote: {output_path}")
