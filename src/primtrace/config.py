"""Global settings for primtrace.

Values are read once from the environment at import time:

    PRIMTRACE_PRECISION      Default precision for new geometry ("f16", "f32", "f64").
    PRIMTRACE_LOG_LEVEL      Level used by ``setup_logging`` when none is given.
    PRIMTRACE_TAICHI_ARCH    Taichi backend for batched kernels ("cpu", "gpu", ...).
"""

from __future__ import annotations

import logging
import os

import taichi as ti

logger = logging.getLogger(__name__)

DEFAULT_PRECISION: str = os.environ.get("PRIMTRACE_PRECISION", "f64").lower()
LOG_LEVEL: str = os.environ.get("PRIMTRACE_LOG_LEVEL", "WARNING").upper()
TAICHI_ARCH: str = os.environ.get("PRIMTRACE_TAICHI_ARCH", "cpu").lower()

# Backend names accepted by init_taichi
TAICHI_ARCHS = ("cpu", "gpu", "cuda", "vulkan", "metal", "opengl")

_taichi_initialized = False


def taichi_runtime_active() -> bool:
    """Whether a Taichi runtime already exists, whoever called ``ti.init``."""
    runtime = ti.lang.impl.get_runtime()
    if hasattr(runtime, "_prog"):
        return runtime._prog is not None
    return runtime.prog is not None


def init_taichi(arch: str | None = None, **kwargs) -> None:
    """Initialize the Taichi runtime used by batched kernels.

    If a runtime already exists, either from an earlier call or from the
    application calling ``ti.init`` itself, it is left untouched: a second
    ``ti.init`` would reset it and invalidate the caller's fields.

    Args:
        arch: Taichi backend name, one of ``TAICHI_ARCHS``. Defaults to
            ``TAICHI_ARCH``.
        **kwargs: Extra keyword arguments forwarded to ``ti.init``.

    Raises:
        ValueError: If the backend name is not one of ``TAICHI_ARCHS``.
    """
    global _taichi_initialized

    arch_name = (arch or TAICHI_ARCH).lower()
    backend = getattr(ti, arch_name, None) if arch_name in TAICHI_ARCHS else None
    if backend is None:
        raise ValueError(f"Unknown Taichi arch: {arch_name} (expected one of {TAICHI_ARCHS})")

    if _taichi_initialized or taichi_runtime_active():
        _taichi_initialized = True
        return

    ti.init(arch=backend, **kwargs)
    _taichi_initialized = True
    logger.debug("Taichi initialized with arch=%s", arch_name)
