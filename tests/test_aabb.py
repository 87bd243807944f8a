"""Unit tests for axis-aligned bounding boxes.

Tests cover:
- Construction and the minimum <= maximum invariant
- Immutability of stored corners
- Box utilities (surrounding, centroid, extent, surface area, contains)
- Slab ray test, including flat and point boxes
- Agreement between Sphere.aabb().hit and Sphere.intersect
"""

import numpy as np
import pytest

from primtrace.core.numeric import F32, F64
from primtrace.core.ray import Ray
from primtrace.errors import GeometryError, InvalidBoundsError
from primtrace.geometry.aabb import Aabb
from primtrace.geometry.sphere import Sphere


class TestAabbConstruction:
    """Tests for Aabb invariants."""

    def test_valid_box(self):
        box = Aabb.new((-1, -2, -3), (1, 2, 3))
        np.testing.assert_array_equal(box.minimum, [-1, -2, -3])
        np.testing.assert_array_equal(box.maximum, [1, 2, 3])
        assert box.precision is F64

    def test_degenerate_box_is_valid(self):
        """A flat or point box still satisfies minimum <= maximum."""
        box = Aabb.new((1, 1, 1), (1, 1, 1))
        np.testing.assert_array_equal(box.extent(), [0, 0, 0])

    @pytest.mark.parametrize(
        "minimum, maximum",
        [
            ((1, 0, 0), (0, 1, 1)),
            ((0, 2, 0), (1, 1, 1)),
            ((0, 0, 0.5), (1, 1, 0.4)),
        ],
    )
    def test_inverted_axis_raises(self, minimum, maximum):
        with pytest.raises(InvalidBoundsError) as excinfo:
            Aabb.new(minimum, maximum)
        np.testing.assert_array_equal(excinfo.value.minimum, minimum)
        np.testing.assert_array_equal(excinfo.value.maximum, maximum)

    def test_nan_corner_raises(self):
        with pytest.raises(InvalidBoundsError):
            Aabb.new((0, float("nan"), 0), (1, 1, 1))

    def test_error_hierarchy(self):
        with pytest.raises(GeometryError):
            Aabb.new((1, 1, 1), (0, 0, 0))
        with pytest.raises(ValueError):
            Aabb.new((1, 1, 1), (0, 0, 0))

    def test_infinite_box_is_valid(self):
        box = Aabb.new((-np.inf,) * 3, (np.inf,) * 3)
        assert box.contains((1e300, -1e300, 0))

    def test_precision_inferred_from_array(self):
        box = Aabb(np.zeros(3, dtype=np.float32), np.ones(3, dtype=np.float32))
        assert box.precision is F32

    def test_corners_are_read_only(self):
        box = Aabb.new((0, 0, 0), (1, 1, 1))
        with pytest.raises(ValueError):
            box.minimum[0] = -5.0
        with pytest.raises(ValueError):
            box.maximum[0] = 5.0

    def test_from_points(self):
        box = Aabb.from_points([(1, 5, -2), (-3, 0, 4), (0, 2, 0)])
        np.testing.assert_array_equal(box.minimum, [-3, 0, -2])
        np.testing.assert_array_equal(box.maximum, [1, 5, 4])

    def test_from_no_points_raises(self):
        with pytest.raises(ValueError):
            Aabb.from_points([])


class TestAabbUtilities:
    """Tests for derived box quantities."""

    def test_surrounding(self):
        a = Aabb.new((0, 0, 0), (1, 1, 1))
        b = Aabb.new((-1, 0.5, 2), (0.5, 3, 4))
        box = a.surrounding(b)
        np.testing.assert_array_equal(box.minimum, [-1, 0, 0])
        np.testing.assert_array_equal(box.maximum, [1, 3, 4])

    def test_centroid_and_extent(self):
        box = Aabb.new((-1, 0, 2), (3, 2, 2))
        np.testing.assert_allclose(box.centroid(), [1, 1, 2])
        np.testing.assert_allclose(box.extent(), [4, 2, 0])

    def test_surface_area(self):
        box = Aabb.new((-1, -1, -1), (1, 1, 1))
        assert box.surface_area() == pytest.approx(24.0)

    def test_contains(self):
        box = Aabb.new((0, 0, 0), (1, 1, 1))
        assert box.contains((0.5, 0.5, 0.5))
        assert box.contains((1, 1, 1))
        assert not box.contains((1.5, 0.5, 0.5))

    def test_repr(self):
        box = Aabb.new((0, 0, 0), (1, 1, 1), F32)
        assert repr(box) == "Aabb(minimum=[0.0, 0.0, 0.0], maximum=[1.0, 1.0, 1.0], precision=f32)"


class TestAabbHit:
    """Tests for the slab ray test."""

    @pytest.fixture
    def box(self):
        return Aabb.new((-1, -1, -1), (1, 1, 1))

    def test_ray_through_box(self, box):
        ray = Ray.new((0, 0, -5), (0, 0, 1))
        assert box.hit(ray, 0.0, np.inf)

    def test_ray_missing_box(self, box):
        ray = Ray.new((5, 0, -5), (0, 0, 1))
        assert not box.hit(ray, 0.0, np.inf)

    def test_ray_pointing_away(self, box):
        ray = Ray.new((0, 0, -5), (0, 0, -1))
        assert not box.hit(ray, 0.0, np.inf)

    def test_t_max_excludes_far_box(self, box):
        ray = Ray.new((0, 0, -5), (0, 0, 1))
        assert not box.hit(ray, 0.0, 3.0)

    def test_origin_inside_box(self, box):
        ray = Ray.new((0, 0, 0), (1, 1, 1))
        assert box.hit(ray, 0.0, np.inf)

    def test_ray_along_box_face(self, box):
        """Zero direction component with the origin on the slab boundary."""
        ray = Ray.new((1, 0, -5), (0, 0, 1))
        assert box.hit(ray, 0.0, np.inf)

    def test_diagonal_ray(self, box):
        ray = Ray.new((-5, -5, -5), (1, 1, 1))
        assert box.hit(ray, 0.0, np.inf)

    def test_mixed_precision_ray(self, box):
        ray = Ray.new((0, 0, -5), (0, 0, 1), F32)
        assert box.hit(ray, 0.0, np.inf)

    def test_flat_box_is_hit(self):
        """A box with zero thickness along the ray still counts as crossed."""
        flat = Aabb.new((-1, -1, 0), (1, 1, 0))
        assert flat.hit(Ray.new((0, 0, -5), (0, 0, 1)), 0.0, np.inf)

    def test_point_box_is_hit(self):
        point = Aabb.new((0, 0, 0), (0, 0, 0))
        assert point.hit(Ray.new((0, 0, -5), (0, 0, 1)), 0.0, np.inf)

    def test_point_box_missed_by_offset_ray(self):
        point = Aabb.new((0, 0, 0), (0, 0, 0))
        assert not point.hit(Ray.new((0.5, 0, -5), (0, 0, 1)), 0.0, np.inf)


class TestAabbAgreesWithSphere:
    """A ray that hits a sphere must also hit the sphere's bounding box."""

    @pytest.mark.parametrize(
        "center, radius, origin, direction",
        [
            ((0, 0, 0), 1.0, (0, 0, -5), (0, 0, 1)),
            ((0, 0, 0), 0.0, (0, 0, -5), (0, 0, 1)),
            ((0, 0, 0), 1.0, (0, 1, -5), (0, 0, 1)),
            ((0, 0, 0), 1.0, (1, 0, -5), (0, 0, 1)),
            ((0, 0, 0), 1.0, (0, 0, 0), (0, 0, 1)),
            ((0, 0, 0), 1.0, (0.2, -0.3, 0.1), (1, 1, 0)),
            ((2, 3, 4), 0.5, (2, 3, 0), (0, 0, 1)),
            ((2, 3, 4), 0.5, (-5, -5, -5), (7, 8, 9)),
        ],
        ids=[
            "direct",
            "zero-radius",
            "tangent-y",
            "tangent-x",
            "inside",
            "inside-oblique",
            "offset",
            "offset-diagonal",
        ],
    )
    @pytest.mark.parametrize("precision", [F32, F64], ids=["f32", "f64"])
    def test_box_hit_whenever_sphere_hit(self, center, radius, origin, direction, precision):
        sphere = Sphere.new(center, radius, precision)
        ray = Ray.new(origin, direction, precision)
        hit = sphere.intersect(ray)
        assert hit is not None
        assert sphere.aabb().hit(ray, 0.0, np.inf)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
