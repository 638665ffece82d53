"""Memory/tag graph construction and per-view graph storage."""

from kgview.graph.builder import GraphBuilder, tag_key, truncate
from kgview.graph.models import Graph, GraphEdge, GraphNode, NodeKind
from kgview.graph.store import GraphStore, ItemFeed

__all__ = [
    # Models
    "Graph",
    "GraphNode",
    "GraphEdge",
    "NodeKind",
    # Building
    "GraphBuilder",
    "truncate",
    "tag_key",
    # Stores
    "GraphStore",
    "ItemFeed",
]
