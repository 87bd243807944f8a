"""Geometry module for bounding boxes and shape primitives.

Components:
    aabb: Axis-Aligned Bounding Box with slab ray test
    sphere: Sphere primitive with closed-form ray-sphere intersection
    kernels: Taichi kernels for batched intersection

Every primitive satisfies the ``Bounded`` and ``Traceable`` protocols from
``primtrace.core.traits``:
    box = shape.aabb()
    hit = shape.intersect(ray)  # Hit or None
"""

from .aabb import Aabb
from .kernels import HitBatch, intersect_sphere_batch
from .sphere import Sphere

__all__ = [
    "Aabb",
    "Sphere",
    "HitBatch",
    "intersect_sphere_batch",
]
