"""Hit-test indexes over node positions.

Draw order doubles as z-order: the last node drawn is on top and must win a
hit test. LinearHitIndex is an O(n) reverse scan. GridHitIndex buckets nodes
into a uniform grid so a query only looks at nearby cells; it pays off once
graphs reach the thousands and is otherwise just a tunable.
"""

import math
from collections import defaultdict
from typing import Protocol

from kgview.graph.models import GraphNode


class HitIndex(Protocol):
    def rebuild(self, nodes: list[GraphNode]) -> None: ...

    def find(self, gx: float, gy: float, padding: float) -> GraphNode | None: ...


def _hits(node: GraphNode, gx: float, gy: float, padding: float) -> bool:
    dx = gx - node.x
    dy = gy - node.y
    reach = node.radius + padding
    return dx * dx + dy * dy <= reach * reach


class LinearHitIndex:
    """Reverse scan in draw order; first match wins."""

    def __init__(self) -> None:
        self._nodes: list[GraphNode] = []

    def rebuild(self, nodes: list[GraphNode]) -> None:
        self._nodes = nodes

    def find(self, gx: float, gy: float, padding: float) -> GraphNode | None:
        for node in reversed(self._nodes):
            if _hits(node, gx, gy, padding):
                return node
        return None


class GridHitIndex:
    """Uniform grid keyed by cell; each node is filed under every cell its
    hit disc overlaps, so a point query only inspects one cell."""

    def __init__(self, cell_size: float, padding: float = 6.0) -> None:
        if cell_size <= 0:
            raise ValueError(f"cell_size must be positive, got {cell_size}")
        self.cell_size = cell_size
        self.padding = padding
        self._cells: dict[tuple[int, int], list[tuple[int, GraphNode]]] = defaultdict(list)

    def _cell(self, value: float) -> int:
        return math.floor(value / self.cell_size)

    def rebuild(self, nodes: list[GraphNode]) -> None:
        self._cells = defaultdict(list)
        for order, node in enumerate(nodes):
            reach = node.radius + self.padding
            for cx in range(self._cell(node.x - reach), self._cell(node.x + reach) + 1):
                for cy in range(self._cell(node.y - reach), self._cell(node.y + reach) + 1):
                    self._cells[(cx, cy)].append((order, node))

    def find(self, gx: float, gy: float, padding: float) -> GraphNode | None:
        if padding > self.padding:
            raise ValueError(f"Index built for padding {self.padding}, queried with {padding}")
        candidates = self._cells.get((self._cell(gx), self._cell(gy)), [])
        best: tuple[int, GraphNode] | None = None
        for order, node in candidates:
            if _hits(node, gx, gy, padding) and (best is None or order > best[0]):
                best = (order, node)
        return best[1] if best else None


def make_hit_index(cell_size: float, padding: float = 6.0) -> HitIndex:
    """Linear scan when cell_size <= 0, uniform grid otherwise."""
    if cell_size <= 0:
        return LinearHitIndex()
    return GridHitIndex(cell_size, padding=padding)
