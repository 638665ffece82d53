"""Pytest configuration and fixtures."""

import random

import pytest

from kgview.config import Settings, get_test_settings
from kgview.graph.builder import GraphBuilder
from kgview.graph.models import Graph, GraphEdge, GraphNode, NodeKind
from kgview.models import MemoryItem


@pytest.fixture
def test_settings() -> Settings:
    """Test settings with defaults."""
    return get_test_settings()


@pytest.fixture
def coffee_items() -> list[MemoryItem]:
    """Two memories sharing the "coffee" tag."""
    return [
        MemoryItem(id="m1", type="preference", content="Loves coffee", tags=["coffee", "morning"]),
        MemoryItem(id="m2", type="fact", content="Dark mode", tags=["coffee"]),
    ]


@pytest.fixture
def builder() -> GraphBuilder:
    """Builder with a seeded random source."""
    return GraphBuilder(rng=random.Random(1234))


@pytest.fixture
def coffee_graph(builder: GraphBuilder, coffee_items: list[MemoryItem]) -> Graph:
    return builder.build(coffee_items)


def make_node(node_id: str, x: float, y: float, radius: float = 8.0, **kwargs) -> GraphNode:
    """Memory node at a fixed position."""
    kwargs.setdefault("kind", NodeKind.MEMORY)
    kwargs.setdefault("label", node_id)
    return GraphNode(id=node_id, x=x, y=y, radius=radius, **kwargs)


@pytest.fixture
def triangle_graph() -> Graph:
    """Three nodes, two springs, at fixed positions."""
    return Graph(
        nodes=[
            make_node("a", 100.0, 100.0),
            make_node("b", 300.0, 120.0),
            make_node("t", 200.0, 300.0, radius=12.0, kind=NodeKind.TAG),
        ],
        edges=[GraphEdge("a", "t"), GraphEdge("b", "t")],
    )
