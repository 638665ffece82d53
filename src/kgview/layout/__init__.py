"""Force-directed layout and spatial lookups."""

from kgview.layout.physics import PhysicsParams, PhysicsSimulator
from kgview.layout.spatial import GridHitIndex, HitIndex, LinearHitIndex, make_hit_index

__all__ = [
    "PhysicsParams",
    "PhysicsSimulator",
    "HitIndex",
    "LinearHitIndex",
    "GridHitIndex",
    "make_hit_index",
]
