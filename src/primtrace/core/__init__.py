"""Core value types shared by all primitives.

Components:
    numeric: Precision abstraction (epsilon, sqrt, exact integer conversion)
    ray: Ray data structure and vector utilities
    hit: Hit record produced by a successful intersection
    traits: Bounded / Traceable capability protocols
"""

from .hit import Hit
from .numeric import F16, F32, F64, PRECISIONS, Precision, precision_for
from .ray import Ray, dot, length, length_squared, normalize, vec3
from .traits import Bounded, Primitive, Traceable

__all__ = [
    "Precision",
    "F16",
    "F32",
    "F64",
    "PRECISIONS",
    "precision_for",
    "Ray",
    "vec3",
    "dot",
    "length",
    "length_squared",
    "normalize",
    "Hit",
    "Bounded",
    "Traceable",
    "Primitive",
]
