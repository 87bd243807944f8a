"""Axis-aligned bounding boxes.

An ``Aabb`` is the value a ``Bounded`` primitive hands to a spatial index.
Construction enforces ``minimum[i] <= maximum[i]`` on every axis; a NaN
component fails that check as well, so a box built from corrupted primitive
data is rejected instead of silently poisoning the index.

Example:
    >>> from primtrace.geometry.aabb import Aabb
    >>> box = Aabb.new((-1, -1, -1), (1, 1, 1))
    >>> float(box.surface_area())
    24.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable

import numpy as np

from ..core.numeric import Precision, precision_for
from ..core.ray import Ray, Vec3
from ..errors import InvalidBoundsError

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Aabb:
    """An axis-aligned box given by its minimum and maximum corners.

    Attributes:
        minimum: Corner with the smallest coordinate on every axis (read-only).
        maximum: Corner with the largest coordinate on every axis (read-only).
        precision: Precision of both corners.

    Raises:
        InvalidBoundsError: If ``minimum <= maximum`` does not hold on every axis.
    """

    minimum: Vec3
    maximum: Vec3
    precision: Precision = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        precision = self.precision
        if precision is None and isinstance(self.minimum, np.ndarray):
            if np.issubdtype(self.minimum.dtype, np.floating):
                precision = self.minimum.dtype
        precision = precision_for(precision)

        minimum = precision.point(self.minimum)
        maximum = precision.point(self.maximum)
        if not np.all(minimum <= maximum):
            logger.debug("Rejected bounds min=%s max=%s", minimum, maximum)
            raise InvalidBoundsError(minimum, maximum)

        minimum.setflags(write=False)
        maximum.setflags(write=False)
        object.__setattr__(self, "precision", precision)
        object.__setattr__(self, "minimum", minimum)
        object.__setattr__(self, "maximum", maximum)

    @classmethod
    def new(cls, minimum: Any, maximum: Any, precision: Any = None) -> "Aabb":
        """Create a box, converting both corners to ``precision``."""
        return cls(minimum, maximum, precision_for(precision))

    @classmethod
    def from_points(cls, points: Iterable[Any], precision: Any = None) -> "Aabb":
        """Smallest box enclosing a non-empty set of points.

        Raises:
            ValueError: If ``points`` is empty.
        """
        precision = precision_for(precision)
        pts = np.array([precision.point(p) for p in points], dtype=precision.dtype)
        if pts.size == 0:
            raise ValueError("Cannot build a bounding box from zero points")
        return cls(pts.min(axis=0), pts.max(axis=0), precision)

    def surrounding(self, other: "Aabb") -> "Aabb":
        """Smallest box enclosing both this box and ``other``."""
        return Aabb(
            np.minimum(self.minimum, other.minimum),
            np.maximum(self.maximum, other.maximum),
            self.precision,
        )

    def extent(self) -> Vec3:
        """Edge lengths along x, y and z."""
        return self.maximum - self.minimum

    def centroid(self) -> Vec3:
        return (self.minimum + self.maximum) * self.precision.scalar(0.5)

    def surface_area(self) -> np.floating:
        d = self.extent()
        return 2 * (d[0] * d[1] + d[0] * d[2] + d[1] * d[2])

    def contains(self, point: Any) -> bool:
        """Whether ``point`` lies inside or on the boundary of the box."""
        p = self.precision.point(point)
        return bool(np.all(p >= self.minimum) and np.all(p <= self.maximum))

    def hit(self, ray: Ray, t_min: float, t_max: float) -> bool:
        """Slab test: does the ray overlap the box for some t in [t_min, t_max]?

        Axes along which the ray direction is zero are handled through IEEE
        infinities: the ray overlaps that slab for all t or for none.

        Args:
            ray: The ray to test.
            t_min: Lower bound of the accepted parameter interval.
            t_max: Upper bound of the accepted parameter interval.

        Returns:
            True if the ray passes through the box within the interval.
        """
        ray = ray.astype(self.precision)
        with np.errstate(divide="ignore", invalid="ignore"):
            inv_d = 1.0 / ray.direction
            t0 = (self.minimum - ray.origin) * inv_d
            t1 = (self.maximum - ray.origin) * inv_d

        for axis in range(3):
            near, far = t0[axis], t1[axis]
            if inv_d[axis] < 0:
                near, far = far, near
            # 0 * inf on a slab boundary: the ray runs inside the slab plane
            if np.isnan(near):
                near = -np.inf
            if np.isnan(far):
                far = np.inf
            t_min = near if near > t_min else t_min
            t_max = far if far < t_max else t_max
            if t_max < t_min:
                return False
        return True

    def __repr__(self) -> str:
        return (
            f"Aabb(minimum={self.minimum.tolist()}, maximum={self.maximum.tolist()}, "
            f"precision={self.precision.name})"
        )
