"""Shared fixtures for knowgraph tests."""

from typing import Iterable, Tuple

import pytest

from knowgraph.core.types import GraphData, Link, Node


def build_graph(node_ids: Iterable[str], edges: Iterable[Tuple[str, str]]) -> GraphData:
    return GraphData(
        nodes=[Node(id=node_id) for node_id in node_ids],
        links=[Link(source=source, target=target) for source, target in edges],
    )


@pytest.fixture
def make_graph():
    """Factory: make_graph(["a", "b"], [("a", "b")])."""
    return build_graph


@pytest.fixture
def chain_graph() -> GraphData:
    """A - B - C - D - E."""
    return build_graph(["A", "B", "C", "D", "E"], [("A", "B"), ("B", "C"), ("C", "D"), ("D", "E")])


@pytest.fixture
def medical_graph() -> GraphData:
    """Small extraction result shaped like the LLM output."""
    return GraphData.from_dict({
        "nodes": [
            {"id": "Aspirin", "group": 1, "type": "drug", "context": ["Aspirin reduces fever and pain."]},
            {"id": "Fever", "group": 2, "type": "symptom", "context": ["Fever is reduced by aspirin."]},
            {"id": "Pain", "group": 2, "type": "symptom", "context": ["Pain is reduced by aspirin."]},
            {"id": "Ibuprofen", "group": 1, "type": "drug", "context": ["Ibuprofen reduces pain."]},
        ],
        "links": [
            {"source": "Aspirin", "target": "Fever", "value": 3, "type": "treats"},
            {"source": "Aspirin", "target": "Pain", "value": 1, "type": "treats"},
        ],
    })
