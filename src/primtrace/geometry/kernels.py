"""Batched ray-sphere intersection on Taichi.

``Sphere.intersect`` handles one ray at a time on the host. When a caller has
thousands of rays against the same sphere, this module evaluates the same
closed-form solution for all of them in a single Taichi kernel. Results match
the scalar path ray for ray: same quadratic, same root-selection policy, same
epsilon.

Rays are passed as ``(N, 3)`` numpy arrays. The kernel is specialized per
array dtype, so f32 and f64 inputs each compile their own version.

Example:
    >>> import numpy as np
    >>> from primtrace import config
    >>> from primtrace.geometry.sphere import Sphere
    >>> config.init_taichi()
    >>> sphere = Sphere.new((0, 0, 0), 1.0)
    >>> batch = sphere.intersect_many(
    ...     np.array([[0, 0, -5], [5, 0, -5]], dtype=np.float64),
    ...     np.array([[0, 0, 1], [0, 0, 1]], dtype=np.float64),
    ... )
    >>> batch.mask.tolist()
    [True, False]
"""

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

import numpy as np
import numpy.typing as npt
import taichi as ti

from .. import config
from ..core.hit import Hit
from ..core.numeric import Precision

if TYPE_CHECKING:
    from .sphere import Sphere

logger = logging.getLogger(__name__)

# Layout of the per-sphere parameter array passed to the kernel
_CX, _CY, _CZ, _RADIUS, _EPSILON = range(5)


@dataclass(frozen=True, eq=False)
class HitBatch:
    """Structure-of-arrays result of a batched intersection.

    Attributes:
        primitive_id: Identity of the sphere that was tested.
        mask: Boolean array, True where the ray hit.
        t: Ray parameters; NaN where the ray missed.
        normals: ``(N, 3)`` outward unit normals; NaN rows where the ray missed.
    """

    primitive_id: int
    mask: npt.NDArray[np.bool_]
    t: npt.NDArray[np.floating]
    normals: npt.NDArray[np.floating]

    def __len__(self) -> int:
        return int(self.mask.shape[0])

    def hits(self) -> Iterator[Optional[Hit]]:
        """Yield a ``Hit`` (or None for a miss) for each ray, in input order."""
        for i in range(len(self)):
            if self.mask[i]:
                n = self.normals[i]
                yield Hit.new(self.primitive_id, self.t[i], n, n)
            else:
                yield None


@ti.kernel
def _intersect_sphere_kernel(
    params: ti.types.ndarray(),
    origins: ti.types.ndarray(),
    directions: ti.types.ndarray(),
    hit_out: ti.types.ndarray(),
    t_out: ti.types.ndarray(),
    normal_out: ti.types.ndarray(),
):
    """Intersect every ray with one sphere.

    Solves a*t^2 + b*t + c = 0 per ray with
        a = dot(d, d), b = 2 * dot(oc, d), c = dot(oc, oc) - r^2
    and keeps the nearer root if it exceeds epsilon, otherwise the farther one.
    """
    cx = params[_CX]
    cy = params[_CY]
    cz = params[_CZ]
    r = params[_RADIUS]
    eps = params[_EPSILON]

    for i in range(origins.shape[0]):
        ocx = origins[i, 0] - cx
        ocy = origins[i, 1] - cy
        ocz = origins[i, 2] - cz
        dx = directions[i, 0]
        dy = directions[i, 1]
        dz = directions[i, 2]

        a = dx * dx + dy * dy + dz * dz
        b = 2.0 * (ocx * dx + ocy * dy + ocz * dz)
        c = ocx * ocx + ocy * ocy + ocz * ocz - r * r
        discriminant = b * b - 4.0 * a * c

        hit_out[i] = 0
        if discriminant >= 0.0:
            sqrt_d = ti.sqrt(discriminant)
            two_a = 2.0 * a
            t1 = (-b - sqrt_d) / two_a
            t2 = (-b + sqrt_d) / two_a

            # Nearer root first, far root when the origin is inside the sphere
            t = t1
            if t <= eps:
                t = t2

            if t > eps:
                nx = (origins[i, 0] + dx * t - cx) / r
                ny = (origins[i, 1] + dy * t - cy) / r
                nz = (origins[i, 2] + dz * t - cz) / r
                inv_len = 1.0 / ti.sqrt(nx * nx + ny * ny + nz * nz)

                hit_out[i] = 1
                t_out[i] = t
                normal_out[i, 0] = nx * inv_len
                normal_out[i, 1] = ny * inv_len
                normal_out[i, 2] = nz * inv_len


def _as_rays(values: npt.ArrayLike, precision: Precision, name: str) -> npt.NDArray[np.floating]:
    arr = np.ascontiguousarray(values, dtype=precision.dtype)
    if arr.ndim != 2 or arr.shape[1] != 3:
        raise ValueError(f"{name} must have shape (N, 3), got {arr.shape}")
    return arr


def intersect_sphere_batch(
    sphere: "Sphere",
    origins: npt.ArrayLike,
    directions: npt.ArrayLike,
) -> HitBatch:
    """Intersect many rays with a single sphere.

    Args:
        sphere: The sphere to test against. Its precision selects the kernel
            dtype.
        origins: ``(N, 3)`` ray origins.
        directions: ``(N, 3)`` ray directions, not necessarily unit length.

    Returns:
        A HitBatch with one entry per ray.

    Raises:
        ValueError: If the arrays are not ``(N, 3)`` with matching N, or the
            sphere's precision has no Taichi kernel support.
        NumericConversionError: If the quadratic's constants are not
            representable in the sphere's precision.
    """
    precision = sphere.precision
    if precision.ti_dtype is None:
        raise ValueError(f"Batched intersection does not support {precision.name}")

    # Same constants the scalar path needs; fail before launching the kernel
    precision.try_from_uint(2)
    precision.try_from_uint(4)

    origins_arr = _as_rays(origins, precision, "origins")
    directions_arr = _as_rays(directions, precision, "directions")
    if origins_arr.shape != directions_arr.shape:
        raise ValueError(
            f"origins {origins_arr.shape} and directions {directions_arr.shape} differ in shape"
        )

    n = origins_arr.shape[0]
    params = np.array(
        [*sphere.center, sphere.radius, precision.epsilon],
        dtype=precision.dtype,
    )
    hit_out = np.zeros(n, dtype=np.int32)
    t_out = np.full(n, np.nan, dtype=precision.dtype)
    normal_out = np.full((n, 3), np.nan, dtype=precision.dtype)

    if n > 0:
        config.init_taichi()
        logger.debug("Launching sphere kernel: %d rays at %s", n, precision.name)
        _intersect_sphere_kernel(params, origins_arr, directions_arr, hit_out, t_out, normal_out)

    return HitBatch(
        primitive_id=sphere.primitive_id,
        mask=hit_out.astype(bool),
        t=t_out,
        normals=normal_out,
    )
