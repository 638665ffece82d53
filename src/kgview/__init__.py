"""kgview - interactive force-directed knowledge graph of memories and tags."""

__version__ = "0.1.0"
