"""Capability protocols shared by all primitives.

Primitives are matched structurally: any object with a suitable ``aabb``
method is ``Bounded``, any object with a suitable ``intersect`` method is
``Traceable``. No base class is required, so new shapes plug into existing
caller code without touching it.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional, Protocol, runtime_checkable

if TYPE_CHECKING:
    from ..geometry.aabb import Aabb
    from .hit import Hit
    from .ray import Ray


@runtime_checkable
class Bounded(Protocol):
    """Something that can report its own axis-aligned bounding box."""

    def aabb(self) -> "Aabb":
        """Return the bounding box.

        Must be a pure function of the primitive's state. The returned box is
        immutable, so implementations may hand out a cached instance.

        Raises:
            InvalidBoundsError: If the primitive's data cannot produce a box
                with ``minimum <= maximum`` (e.g. a NaN radius).
        """
        ...


@runtime_checkable
class Traceable(Protocol):
    """Something that can be intersected by a ray."""

    def intersect(self, ray: "Ray") -> Optional["Hit"]:
        """Intersect a ray with the primitive.

        Returns:
            The closest hit in front of the ray origin, or None if the ray
            misses or only meets the primitive behind its origin.

        Raises:
            NumericConversionError: If a constant needed by the computation
                is not representable in the working precision.
        """
        ...


@runtime_checkable
class Primitive(Bounded, Traceable, Protocol):
    """A shape that is both ``Bounded`` and ``Traceable``."""
