"""Error types raised by primtrace.

A ray that misses a primitive is not an error: ``intersect`` returns ``None``
for that case. The exceptions below are reserved for invalid input data and
for numeric conversions that cannot be performed exactly.

Hierarchy:
    GeometryError
        InvalidGeometryError   (also a ValueError)
        InvalidBoundsError     (also a ValueError)
        NumericConversionError (also an ArithmeticError)
"""

from __future__ import annotations

from typing import Any

import numpy as np


class GeometryError(Exception):
    """Base class for all primtrace errors."""


class InvalidGeometryError(GeometryError, ValueError):
    """A primitive's defining parameter violates a structural invariant.

    Attributes:
        parameter: Name of the offending parameter (e.g. ``"radius"``).
        value: The rejected value.
    """

    def __init__(self, parameter: str, value: Any, reason: str) -> None:
        self.parameter = parameter
        self.value = value
        super().__init__(f"Invalid {parameter} = {value!r}: {reason}")


class InvalidBoundsError(GeometryError, ValueError):
    """A bounding box would violate ``minimum <= maximum`` on some axis.

    Attributes:
        minimum: The rejected minimum corner.
        maximum: The rejected maximum corner.
    """

    def __init__(self, minimum: Any, maximum: Any) -> None:
        self.minimum = minimum
        self.maximum = maximum
        super().__init__(
            f"Bounding box minimum {np.asarray(minimum).tolist()} is not <= maximum "
            f"{np.asarray(maximum).tolist()} "
            "on every axis."
        )


class NumericConversionError(GeometryError, ArithmeticError):
    """An integer cannot be represented exactly in the requested precision.

    Attributes:
        value: The integer that failed to convert.
        precision: Name of the target precision (e.g. ``"f16"``).
    """

    def __init__(self, value: Any, precision: str) -> None:
        self.value = value
        self.precision = precision
        super().__init__(f"{value!r} is not exactly representable as {precision}")
