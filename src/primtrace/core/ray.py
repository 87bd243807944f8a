"""Ray data structure and vector utilities.

Points and vectors are plain 3-component numpy arrays whose dtype follows the
chosen ``Precision``. A ``Ray`` stores read-only copies of its origin and
direction so it can be shared freely between callers.

Example:
    >>> from primtrace.core.ray import Ray
    >>> ray = Ray.new((0.0, 0.0, 0.0), (0.0, 0.0, -1.0))
    >>> ray.at(5.0)  # Point 5 units along the ray
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

import numpy as np
import numpy.typing as npt

from .numeric import Precision, precision_for

Vec3 = npt.NDArray[np.floating]


def _frozen(arr: Vec3) -> Vec3:
    arr.setflags(write=False)
    return arr


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and direction vector.

    Attributes:
        origin: The starting point of the ray.
        direction: The direction vector of the ray. It is not required to be
            unit length; the ray parameter ``t`` is measured in multiples of
            this vector.
        precision: Precision of both arrays. Inferred from ``origin`` when it
            is a floating numpy array, otherwise the configured default.
    """

    origin: Vec3
    direction: Vec3
    precision: Precision = field(default=None)  # type: ignore[assignment]

    def __post_init__(self) -> None:
        precision = self.precision
        if precision is None and isinstance(self.origin, np.ndarray):
            if np.issubdtype(self.origin.dtype, np.floating):
                precision = self.origin.dtype
        precision = precision_for(precision)
        object.__setattr__(self, "precision", precision)
        object.__setattr__(self, "origin", _frozen(precision.point(self.origin)))
        object.__setattr__(self, "direction", _frozen(precision.point(self.direction)))

    @classmethod
    def new(cls, origin: Any, direction: Any, precision: Any = None) -> "Ray":
        """Create a ray, converting origin and direction to ``precision``."""
        return cls(origin, direction, precision_for(precision))

    def at(self, t: Any) -> Vec3:
        """Compute the point ``origin + t * direction``.

        Args:
            t: The ray parameter. Positive values are in front of the origin.
        """
        return self.origin + self.direction * self.precision.scalar(t)

    def astype(self, precision: Any) -> "Ray":
        """Return this ray converted to another precision."""
        precision = precision_for(precision)
        if precision == self.precision:
            return self
        return Ray(self.origin, self.direction, precision)

    def __repr__(self) -> str:
        return (
            f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()}, "
            f"precision={self.precision.name})"
        )


# =============================================================================
# Vector Utility Functions
# =============================================================================


def vec3(x: Any, y: Any, z: Any, precision: Any = None) -> Vec3:
    """Build a 3-component vector in ``precision`` (default: configured)."""
    return precision_for(precision).vector(x, y, z)


def dot(a: Vec3, b: Vec3) -> np.floating:
    """Compute the dot product a . b."""
    return np.dot(a, b)


def length_squared(v: Vec3) -> np.floating:
    """Compute the squared length of a vector, avoiding the square root."""
    return np.dot(v, v)


def length(v: Vec3) -> np.floating:
    """Compute the Euclidean length of a vector."""
    return np.sqrt(np.dot(v, v))


def normalize(v: Vec3) -> Vec3:
    """Scale a vector to unit length.

    A zero-length (or non-finite) input yields NaN components rather than an
    exception, matching plain floating-point division.
    """
    with np.errstate(divide="ignore", invalid="ignore"):
        return v / length(v)
