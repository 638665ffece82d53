"""Node/edge models for the knowledge graph view."""

from dataclasses import dataclass, field
from enum import Enum

from kgview.models import MemoryItem, MemoryType


class NodeKind(str, Enum):
    """Kind of vertex in the graph."""

    MEMORY = "memory"  # One per memory item
    TAG = "tag"  # One per case-insensitive tag


@dataclass(eq=False)
class GraphNode:
    """A vertex with its simulation state.

    Pinned nodes are frozen: the simulator never moves them, but they still
    push and pull on everything else.
    """

    id: str
    kind: NodeKind
    label: str
    x: float = 0.0
    y: float = 0.0
    vx: float = 0.0
    vy: float = 0.0
    radius: float = 8.0
    pinned: bool = False
    category: MemoryType | None = None  # Memory subtype, None for tags
    data: MemoryItem | None = None  # Backing item, None for tags

    def __post_init__(self) -> None:
        if self.radius <= 0:
            raise ValueError(f"Node radius must be positive, got {self.radius}")

    @property
    def is_tag(self) -> bool:
        return self.kind is NodeKind.TAG


@dataclass(frozen=True)
class GraphEdge:
    """Undirected "item tagged with tag" association."""

    source: str
    target: str

    def touches(self, node_id: str) -> bool:
        return self.source == node_id or self.target == node_id

    def other(self, node_id: str) -> str:
        return self.target if self.source == node_id else self.source


@dataclass
class Graph:
    """Nodes in draw order plus edges."""

    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)

    def __post_init__(self) -> None:
        self._index: dict[str, GraphNode] = {}
        for node in self.nodes:
            if node.id in self._index:
                raise ValueError(f"Duplicate node id: {node.id}")
            self._index[node.id] = node

    def __len__(self) -> int:
        return len(self.nodes)

    @property
    def is_empty(self) -> bool:
        return not self.nodes

    def get(self, node_id: str | None) -> GraphNode | None:
        if node_id is None:
            return None
        return self._index.get(node_id)

    def neighbors(self, node_id: str) -> set[str]:
        """Ids of nodes sharing an edge with node_id."""
        return {e.other(node_id) for e in self.edges if e.touches(node_id)}

    def degree(self, node_id: str) -> int:
        """Edge count at node_id (duplicate edges counted separately)."""
        return sum(1 for e in self.edges if e.touches(node_id))

    def positions(self) -> dict[str, tuple[float, float]]:
        return {n.id: (n.x, n.y) for n in self.nodes}

    def stats(self) -> dict[str, int]:
        memories = sum(1 for n in self.nodes if n.kind is NodeKind.MEMORY)
        return {
            "memories": memories,
            "tags": len(self.nodes) - memories,
            "connections": len(self.edges),
        }
