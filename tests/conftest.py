"""Shared fixtures: one Taichi runtime for the whole run, plus precision-aware
spheres, rays and tolerances.
"""

import numpy as np
import pytest

from primtrace import config
from primtrace.core.numeric import F32, F64
from primtrace.core.ray import Ray
from primtrace.geometry.sphere import Sphere


@pytest.fixture(scope="session", autouse=True)
def init_taichi_session():
    """Initialize Taichi once for the entire test session.

    Repeated ti.init() calls reset the runtime, so every test shares this one.
    """
    config.init_taichi(arch="cpu", random_seed=42)
    yield


@pytest.fixture(params=[F32, F64], ids=["f32", "f64"])
def precision(request):
    """Run a test at both kernel-capable precisions."""
    return request.param


@pytest.fixture
def unit_sphere(precision):
    """Unit sphere at the origin in the requested precision."""
    return Sphere.new((0.0, 0.0, 0.0), 1.0, precision)


@pytest.fixture
def make_ray(precision):
    """Factory building rays in the requested precision."""

    def _make(origin, direction):
        return Ray.new(origin, direction, precision)

    return _make


@pytest.fixture
def tol(precision):
    """Absolute tolerance suitable for comparisons at the requested precision."""
    return 1e-4 if np.dtype(precision.dtype).itemsize <= 4 else 1e-9
