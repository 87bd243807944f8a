"""Numeric precision abstraction.

Geometry code in primtrace is written once against ``Precision`` and runs at
half, single or double precision. A ``Precision`` bundles a numpy dtype with
the operations the intersection routines need: machine epsilon, square root,
epsilon-aware comparison and exact conversion of small unsigned integers.

Conversions never round silently. ``try_from_uint`` raises
``NumericConversionError`` when the integer has no exact representation, and
callers propagate that error instead of substituting an approximation.

Example:
    >>> from primtrace.core.numeric import F32
    >>> two = F32.try_from_uint(2)
    >>> F32.approx_eq(F32.sqrt(two) ** 2, two)
    True
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np
import numpy.typing as npt
import taichi as ti

from .. import config
from ..errors import NumericConversionError


@dataclass(frozen=True)
class Precision:
    """A real-number representation usable by the geometry routines.

    Attributes:
        name: Short name ("f16", "f32", "f64").
        dtype: The numpy scalar type.
        ti_dtype: Matching Taichi dtype, or None if batched Taichi kernels do
            not support this precision.
    """

    name: str
    dtype: type[np.floating]
    ti_dtype: Any = None

    @property
    def epsilon(self) -> np.floating:
        """Machine epsilon of the dtype."""
        return np.finfo(self.dtype).eps

    def scalar(self, value: Any) -> np.floating:
        """Convert a number to this precision."""
        return self.dtype(value)

    def vector(self, x: Any, y: Any, z: Any) -> npt.NDArray[np.floating]:
        """Build a 3-component vector in this precision."""
        return np.array([x, y, z], dtype=self.dtype)

    def point(self, values: Any) -> npt.NDArray[np.floating]:
        """Convert any length-3 sequence to a fresh array in this precision.

        Raises:
            ValueError: If ``values`` does not have exactly three components.
        """
        arr = np.array(values, dtype=self.dtype).reshape(-1)
        if arr.shape != (3,):
            raise ValueError(f"Expected 3 components, got shape {arr.shape}")
        return arr

    def sqrt(self, x: Any) -> np.floating:
        return np.sqrt(self.dtype(x))

    def approx_eq(self, a: Any, b: Any, tolerance: float | None = None) -> bool:
        """Epsilon-aware equality.

        Two values compare equal when their difference is within ``tolerance``
        either absolutely or relative to the larger magnitude. The default
        tolerance is a small multiple of machine epsilon.
        """
        tol = self.dtype(tolerance) if tolerance is not None else self.epsilon * 4
        a = self.dtype(a)
        b = self.dtype(b)
        diff = abs(a - b)
        return bool(diff <= tol or diff <= tol * max(abs(a), abs(b)))

    def try_from_uint(self, n: int) -> np.floating:
        """Convert a small unsigned integer exactly.

        Args:
            n: The integer to convert.

        Returns:
            ``n`` as a scalar of this precision.

        Raises:
            NumericConversionError: If ``n`` is negative, not an integer, or
                not exactly representable in this precision.
        """
        if isinstance(n, bool) or not isinstance(n, (int, np.integer)) or n < 0:
            raise NumericConversionError(n, self.name)
        try:
            with np.errstate(over="ignore"):
                value = self.dtype(n)
        except OverflowError:
            raise NumericConversionError(n, self.name) from None
        if not np.isfinite(value) or int(value) != int(n):
            raise NumericConversionError(n, self.name)
        return value

    def __str__(self) -> str:
        return self.name


F16 = Precision("f16", np.float16)
F32 = Precision("f32", np.float32, ti.f32)
F64 = Precision("f64", np.float64, ti.f64)

PRECISIONS: dict[str, Precision] = {p.name: p for p in (F16, F32, F64)}


def precision_for(value: Any) -> Precision:
    """Resolve a precision from a name, numpy dtype or ``Precision``.

    Args:
        value: ``"f32"``, ``np.float32``, ``np.dtype("float64")``, a
            ``Precision``, or None for the configured default.

    Returns:
        The matching ``Precision``.

    Raises:
        ValueError: If no supported precision matches.
    """
    if isinstance(value, Precision):
        return value
    if value is None:
        value = config.DEFAULT_PRECISION
    if isinstance(value, str) and value.lower() in PRECISIONS:
        return PRECISIONS[value.lower()]
    try:
        dtype = np.dtype(value)
    except TypeError:
        raise ValueError(f"Unknown precision: {value!r}") from None
    for precision in PRECISIONS.values():
        if np.dtype(precision.dtype) == dtype:
            return precision
    raise ValueError(f"Unsupported precision: {value!r}")
