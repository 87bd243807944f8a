"""Hit record returned by a successful ray intersection."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Any

import numpy as np

from .ray import Vec3, normalize


@dataclass(frozen=True, eq=False)
class Hit:
    """Record of a ray-primitive intersection.

    A ``Hit`` is produced fresh per intersection test and owned by the caller.
    It refers back to the primitive only through ``primitive_id``.

    Attributes:
        primitive_id: Caller-assigned identity of the primitive that was hit.
        t: Ray parameter of the closest valid intersection.
        shading_normal: Unit normal used for shading.
        geometric_normal: Unit normal of the actual surface. For shapes
            without interpolated normals this equals ``shading_normal``.
    """

    primitive_id: int
    t: np.floating
    shading_normal: Vec3
    geometric_normal: Vec3

    @classmethod
    def new(
        cls,
        primitive_id: int,
        t: Any,
        shading_normal: Vec3,
        geometric_normal: Vec3,
    ) -> "Hit":
        """Create a hit record, normalizing both normals.

        Args:
            primitive_id: Identity of the primitive.
            t: Ray parameter of the intersection.
            shading_normal: Shading normal, any non-zero length.
            geometric_normal: Geometric normal, any non-zero length.

        Returns:
            A Hit whose normals are unit length and read-only.
        """
        shading = normalize(np.asarray(shading_normal))
        geometric = normalize(np.asarray(geometric_normal))
        shading.setflags(write=False)
        geometric.setflags(write=False)
        return cls(int(primitive_id), t, shading, geometric)

    def with_primitive_id(self, primitive_id: int) -> "Hit":
        """Return a copy of this hit carrying a different primitive id."""
        return replace(self, primitive_id=int(primitive_id))

    @property
    def normal(self) -> Vec3:
        """Alias for ``geometric_normal``."""
        return self.geometric_normal

    def __repr__(self) -> str:
        return (
            f"Hit(primitive_id={self.primitive_id}, t={float(self.t)}, "
            f"normal={self.geometric_normal.tolist()})"
        )
