"""Generic ray/primitive intersection library.

primtrace answers two questions for every supported primitive:
- Does this ray hit the shape, and where, with what surface normal?
- What is the shape's axis-aligned bounding box?

Geometry is written once against a numeric precision abstraction and runs at
f16, f32 or f64. Single rays are handled on the host with numpy; large ray
batches can be evaluated in Taichi kernels.

Subpackages:
    core: Numeric precision, rays, hit records and capability protocols
    geometry: Bounding boxes and shape primitives
"""

from .core import F16, F32, F64, Bounded, Hit, Precision, Primitive, Ray, Traceable
from .errors import (
    GeometryError,
    InvalidBoundsError,
    InvalidGeometryError,
    NumericConversionError,
)
from .geometry import Aabb, HitBatch, Sphere
from .logging_config import setup_logging

__version__ = "0.1.0"

__all__ = [
    "Aabb",
    "Bounded",
    "F16",
    "F32",
    "F64",
    "GeometryError",
    "Hit",
    "HitBatch",
    "InvalidBoundsError",
    "InvalidGeometryError",
    "NumericConversionError",
    "Precision",
    "Primitive",
    "Ray",
    "Sphere",
    "Traceable",
    "setup_logging",
]
