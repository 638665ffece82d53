"""Force-directed layout: centering, pairwise repulsion and edge springs.

Runs continuously; there is no convergence test. Each step:
1. Reset unpinned velocities (velocities are recomputed, not accumulated)
2. Centering: v += (center - p) * k
3. Repulsion over all pairs: F = repulsion / d², d floored at min_distance
4. Springs along edges: F = spring_k * (d - spring_length)
5. Integrate: v *= damping, p += v * dt, clamp into stage minus margin

Pinned nodes are force sources only; nothing here writes to them.

Repulsion is O(n²) per step, which is the layout's scaling ceiling
(comfortable for a few hundred nodes).
"""

import math
from dataclasses import dataclass

from kgview.config import settings
from kgview.graph.models import Graph, GraphNode


@dataclass
class PhysicsParams:
    """Force constants for one simulation step."""

    centering: float = 0.005
    repulsion: float = 3000.0
    spring_length: float = 120.0
    spring_k: float = 0.03
    damping: float = 0.85
    margin: float = 40.0
    min_distance: float = 1.0

    @classmethod
    def from_settings(cls) -> "PhysicsParams":
        return cls(
            centering=settings.physics_centering,
            repulsion=settings.physics_repulsion,
            spring_length=settings.physics_spring_length,
            spring_k=settings.physics_spring_k,
            damping=settings.physics_damping,
            margin=settings.physics_margin,
            min_distance=settings.physics_min_distance,
        )


def _clamp_axis(value: float, extent: float, margin: float) -> float:
    low, high = margin, extent - margin
    if low > high:
        # Stage narrower than twice the margin
        return extent / 2
    return max(low, min(high, value))


class PhysicsSimulator:
    """Advances unpinned node positions one step at a time."""

    def __init__(self, params: PhysicsParams | None = None) -> None:
        self.params = params or PhysicsParams.from_settings()
        self.steps = 0

    def step(self, graph: Graph, width: float, height: float, dt: float = 1.0) -> float:
        """
        Advance the layout by one step.

        Args:
            graph: Nodes and edges to simulate (mutated in place)
            width: Stage width in graph units
            height: Stage height in graph units
            dt: Integration step in ticks (1.0 = one frame at the nominal rate)

        Returns:
            Kinetic energy (sum of squared velocities) after integration
        """
        if not (math.isfinite(width) and math.isfinite(height)) or width <= 0 or height <= 0:
            raise ValueError(f"Stage size must be finite and positive, got {width}x{height}")
        if not math.isfinite(dt) or dt < 0:
            raise ValueError(f"dt must be finite and non-negative, got {dt}")

        nodes = graph.nodes
        if not nodes:
            return 0.0

        p = self.params
        movable = [n for n in nodes if not n.pinned]

        for n in movable:
            n.vx = 0.0
            n.vy = 0.0

        self._apply_centering(movable, width / 2, height / 2)
        self._apply_repulsion(nodes)
        self._apply_springs(graph)

        energy = 0.0
        for n in movable:
            n.vx *= p.damping
            n.vy *= p.damping
            n.x = _clamp_axis(n.x + n.vx * dt, width, p.margin)
            n.y = _clamp_axis(n.y + n.vy * dt, height, p.margin)
            energy += n.vx * n.vx + n.vy * n.vy

        self.steps += 1
        return energy

    def _apply_centering(self, movable: list[GraphNode], cx: float, cy: float) -> None:
        k = self.params.centering
        for n in movable:
            n.vx += (cx - n.x) * k
            n.vy += (cy - n.y) * k

    def _apply_repulsion(self, nodes: list[GraphNode]) -> None:
        repulsion = self.params.repulsion
        floor = self.params.min_distance
        count = len(nodes)
        for i in range(count):
            a = nodes[i]
            for j in range(i + 1, count):
                b = nodes[j]
                if a.pinned and b.pinned:
                    continue
                dx = b.x - a.x
                dy = b.y - a.y
                dist = max(floor, math.hypot(dx, dy))
                force = repulsion / (dist * dist)
                fx = dx / dist * force
                fy = dy / dist * force
                if not a.pinned:
                    a.vx -= fx
                    a.vy -= fy
                if not b.pinned:
                    b.vx += fx
                    b.vy += fy

    def _apply_springs(self, graph: Graph) -> None:
        length = self.params.spring_length
        k = self.params.spring_k
        floor = self.params.min_distance
        for edge in graph.edges:
            a = graph.get(edge.source)
            b = graph.get(edge.target)
            if a is None or b is None:
                continue
            dx = b.x - a.x
            dy = b.y - a.y
            dist = max(floor, math.hypot(dx, dy))
            force = k * (dist - length)
            fx = dx / dist * force
            fy = dy / dist * force
            if not a.pinned:
                a.vx += fx
                a.vy += fy
            if not b.pinned:
                b.vx -= fx
                b.vy -= fy
