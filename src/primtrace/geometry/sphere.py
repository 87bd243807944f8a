"""Sphere primitive with closed-form ray-sphere intersection.

The ray-sphere intersection is found by solving:
    |origin + t * direction - center|^2 = radius^2

Expanding and rearranging gives the quadratic equation:
    a*t^2 + b*t + c = 0

where:
    oc = origin - center
    a = dot(direction, direction)
    b = 2 * dot(oc, direction)
    c = dot(oc, oc) - radius^2

Of the two roots t1 <= t2 the nearer one is returned when it lies more than
machine epsilon in front of the origin. Otherwise the farther root is tried,
which is the exit point when the origin is inside the sphere. If neither root
qualifies, the sphere is behind the ray and there is no hit.

The constants 2 and 4 are obtained through ``Precision.try_from_uint`` so a
precision that cannot represent them raises instead of computing garbage.

Example:
    >>> from primtrace.core.ray import Ray
    >>> from primtrace.geometry.sphere import Sphere
    >>> sphere = Sphere.new((0.0, 0.0, 0.0), 1.0)
    >>> hit = sphere.intersect(Ray.new((0, 0, -5), (0, 0, 1)))
    >>> float(hit.t)
    4.0
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

import numpy as np
import numpy.typing as npt

from ..core.hit import Hit
from ..core.numeric import Precision, precision_for
from ..core.ray import Ray, Vec3, dot
from ..errors import InvalidGeometryError
from .aabb import Aabb
from .kernels import HitBatch, intersect_sphere_batch

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Sphere:
    """A sphere defined by center point and radius.

    Instances are immutable; any number of callers may query the same sphere
    concurrently.

    Attributes:
        center: The center point of the sphere (read-only array).
        radius: The radius of the sphere. Zero is allowed and degenerates to a
            point, for which intersection is numerically unstable.
        precision: Precision used for all computations on this sphere.
        primitive_id: Identity reported in every Hit this sphere produces.
    """

    center: Vec3
    radius: np.floating
    precision: Precision = field(default=None)  # type: ignore[assignment]
    primitive_id: int = 0

    def __post_init__(self) -> None:
        precision = self.precision
        if precision is None and isinstance(self.center, np.ndarray):
            if np.issubdtype(self.center.dtype, np.floating):
                precision = self.center.dtype
        precision = precision_for(precision)

        radius = precision.scalar(self.radius)
        # NaN compares false here and is let through on purpose
        if radius < 0:
            logger.debug("Rejected sphere with radius %s", radius)
            raise InvalidGeometryError("radius", self.radius, "sphere radius must be >= 0")

        center = precision.point(self.center)
        center.setflags(write=False)
        object.__setattr__(self, "precision", precision)
        object.__setattr__(self, "center", center)
        object.__setattr__(self, "radius", radius)
        object.__setattr__(self, "primitive_id", int(self.primitive_id))

    @classmethod
    def new(
        cls,
        center: Any,
        radius: Any,
        precision: Any = None,
        primitive_id: int = 0,
    ) -> "Sphere":
        """Create a sphere.

        Args:
            center: The center point, any length-3 sequence.
            radius: The radius; must not be negative.
            precision: Precision name, dtype or Precision. Defaults to
                ``config.DEFAULT_PRECISION``.
            primitive_id: Identity to report in hits.

        Returns:
            A new Sphere instance.

        Raises:
            InvalidGeometryError: If ``radius < 0``.
        """
        return cls(center, radius, precision_for(precision), primitive_id)

    def aabb(self) -> Aabb:
        """The bounding box ``center ± radius`` on every axis.

        Raises:
            InvalidBoundsError: If the radius is NaN.
        """
        r = np.full(3, self.radius, dtype=self.precision.dtype)
        return Aabb(self.center - r, self.center + r, self.precision)

    def intersect(self, ray: Ray) -> Optional[Hit]:
        """Intersect a ray with the sphere.

        Args:
            ray: The ray to test. It is converted to the sphere's precision if
                it was built with another one. Its direction need not be unit
                length.

        Returns:
            The closest Hit more than epsilon in front of the ray origin, or
            None if there is no such intersection.

        Raises:
            NumericConversionError: If the quadratic's constants cannot be
                represented in the sphere's precision.
        """
        precision = self.precision
        ray = ray.astype(precision)
        epsilon = precision.epsilon

        # Vector from sphere center to ray origin
        oc = ray.origin - self.center

        # Quadratic equation coefficients: a*t^2 + b*t + c = 0
        a = dot(ray.direction, ray.direction)
        b = precision.try_from_uint(2) * dot(oc, ray.direction)
        c = dot(oc, oc) - self.radius * self.radius

        discriminant = b * b - precision.try_from_uint(4) * a * c
        if discriminant < 0:
            return None

        sqrt_discriminant = precision.sqrt(discriminant)
        two_a = precision.try_from_uint(2) * a

        with np.errstate(divide="ignore", invalid="ignore"):
            t1 = (-b - sqrt_discriminant) / two_a
            t2 = (-b + sqrt_discriminant) / two_a

        if t1 > epsilon:
            t = t1
        elif t2 > epsilon:
            t = t2
        else:
            return None

        point = ray.at(t)
        with np.errstate(divide="ignore", invalid="ignore"):
            normal = (point - self.center) / self.radius

        return Hit.new(self.primitive_id, t, normal, normal)

    def intersect_many(
        self,
        origins: npt.ArrayLike,
        directions: npt.ArrayLike,
    ) -> HitBatch:
        """Intersect a batch of rays in one Taichi kernel launch.

        Uses the same quadratic and root-selection policy as ``intersect``.

        Args:
            origins: ``(N, 3)`` ray origins.
            directions: ``(N, 3)`` ray directions.

        Returns:
            A HitBatch with one entry per ray.
        """
        return intersect_sphere_batch(self, origins, directions)

    def __repr__(self) -> str:
        return (
            f"Sphere(center={self.center.tolist()}, radius={float(self.radius)}, "
            f"precision={self.precision.name}, primitive_id={self.primitive_id})"
        )
