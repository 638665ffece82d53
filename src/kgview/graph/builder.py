"""Build the memory/tag graph from a flat list of memory items.

Memory nodes link only to tag nodes. Tags are deduplicated case-insensitively,
so two items sharing a tag produce two edges into the same tag node.
"""

import logging
import random
from collections.abc import Iterable

from kgview.config import settings
from kgview.graph.models import Graph, GraphEdge, GraphNode, NodeKind
from kgview.models import MemoryItem

logger = logging.getLogger(__name__)

ELLIPSIS = "…"


def truncate(text: str, max_len: int) -> str:
    """Cut text to max_len characters, ending with an ellipsis when shortened."""
    if len(text) <= max_len:
        return text
    return text[: max_len - 1] + ELLIPSIS


def tag_key(tag: str) -> str:
    """Node id for a tag. Normalizing here keeps case variants on one node."""
    return f"tag:{tag.strip().lower()}"


def validate_items(items: Iterable[MemoryItem]) -> None:
    """Raise ValueError unless items can form one graph.

    Item ids must be unique and must not coincide with any tag node id, since
    memory and tag nodes share one id space.
    """
    seen: set[str] = set()
    duplicates: set[str] = set()
    tag_ids: set[str] = set()
    for item in items:
        if item.id in seen:
            duplicates.add(item.id)
        seen.add(item.id)
        tag_ids.update(tag_key(t) for t in item.tags if t.strip())

    if duplicates:
        raise ValueError(f"Item ids must be unique, repeated: {sorted(duplicates)}")
    clashes = seen & tag_ids
    if clashes:
        raise ValueError(f"Item ids collide with tag node ids: {sorted(clashes)}")


class GraphBuilder:
    """
    Turns memory items into a graph, keeping layout continuity across rebuilds.

    Structure (node order, ids, labels, edges) is a pure function of the items;
    only first-time positions are random.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        label_length: int | None = None,
        memory_radius: float | None = None,
        tag_radius: float | None = None,
        spawn_width: float | None = None,
        spawn_height: float | None = None,
    ) -> None:
        self.rng = rng or random.Random()
        self.label_length = label_length or settings.memory_label_length
        self.memory_radius = memory_radius or settings.memory_radius
        self.tag_radius = tag_radius or settings.tag_radius
        self.spawn_width = spawn_width or settings.spawn_width
        self.spawn_height = spawn_height or settings.spawn_height

    def build(self, items: Iterable[MemoryItem], previous: Graph | None = None) -> Graph:
        """Build a fresh graph and carry over positions from previous."""
        nodes: list[GraphNode] = []
        edges: list[GraphEdge] = []
        tag_nodes: dict[str, GraphNode] = {}

        for item in items:
            nodes.append(
                GraphNode(
                    id=item.id,
                    kind=NodeKind.MEMORY,
                    label=truncate(item.content, self.label_length),
                    radius=self.memory_radius,
                    category=item.type,
                    data=item,
                )
            )

            for tag in item.tags:
                if not tag.strip():
                    # Blank tags name nothing; no node, no edge
                    continue
                key = tag_key(tag)
                if key not in tag_nodes:
                    tag_node = GraphNode(
                        id=key,
                        kind=NodeKind.TAG,
                        label=f"#{tag.strip()}",
                        radius=self.tag_radius,
                    )
                    tag_nodes[key] = tag_node
                    nodes.append(tag_node)
                edges.append(GraphEdge(source=item.id, target=key))

        graph = Graph(nodes=nodes, edges=edges)
        carried = self.merge_positions(graph, previous)
        logger.debug(
            f"Built graph: {len(nodes)} nodes, {len(edges)} edges, "
            f"{carried} positions carried over"
        )
        return graph

    def merge_positions(self, graph: Graph, previous: Graph | None) -> int:
        """Copy (x, y) from previous for matching ids, scatter the rest.

        Returns the number of nodes that kept a prior position.
        """
        carried = 0
        for node in graph.nodes:
            old = previous.get(node.id) if previous is not None else None
            if old is not None:
                node.x = old.x
                node.y = old.y
                carried += 1
            else:
                node.x, node.y = self.spawn_position()
        return carried

    def spawn_position(self) -> tuple[float, float]:
        half_w = self.spawn_width / 2
        half_h = self.spawn_height / 2
        return (
            self.rng.uniform(-half_w, half_w),
            self.rng.uniform(-half_h, half_h),
        )
