#!/usr/bin/env python3
"""Trace a grid of rays against a sphere and print an ASCII shading.

This script demonstrates both intersection paths: the whole image is traced
in one batched Taichi kernel, and the center pixel is re-traced with the
scalar ``Sphere.intersect`` as a cross-check.

Usage:
    python examples/trace_sphere.py [options]

Options:
    --width WIDTH         Columns (default: 64)
    --height HEIGHT       Rows (default: 32)
    --radius RADIUS       Sphere radius (default: 1.0)
    --precision NAME      f32 or f64 (default: f32)
    --verbose             Enable debug logging
"""

from __future__ import annotations

import argparse
import logging

import numpy as np

from primtrace import Ray, Sphere, config, setup_logging

# Characters from dark to bright
SHADES = " .:-=+*#%@"


def parse_args() -> argparse.Namespace:
    """Parse command-line arguments."""
    parser = argparse.ArgumentParser(description="Trace an ASCII sphere.")
    parser.add_argument("--width", type=int, default=64, help="Columns (default: 64)")
    parser.add_argument("--height", type=int, default=32, help="Rows (default: 32)")
    parser.add_argument("--radius", type=float, default=1.0, help="Sphere radius (default: 1.0)")
    parser.add_argument("--precision", default="f32", help="f32 or f64 (default: f32)")
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args()


def make_rays(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Orthographic rays on a [-1.5, 1.5] grid looking down +z.

    Terminal cells are about twice as tall as wide, so the default 2:1 grid
    keeps the sphere round.
    """
    xs = np.linspace(-1.5, 1.5, width)
    ys = np.linspace(1.5, -1.5, height)
    gx, gy = np.meshgrid(xs, ys)
    origins = np.stack([gx.ravel(), gy.ravel(), np.full(gx.size, -5.0)], axis=1)
    directions = np.tile([0.0, 0.0, 1.0], (gx.size, 1))
    return origins, directions


def main() -> int:
    args = parse_args()
    setup_logging(logging.DEBUG if args.verbose else config.LOG_LEVEL)
    config.init_taichi()

    sphere = Sphere.new((0.0, 0.0, 0.0), args.radius, args.precision)
    origins, directions = make_rays(args.width, args.height)
    batch = sphere.intersect_many(origins, directions)

    light = np.array([-0.5, 0.5, -1.0])
    light /= np.linalg.norm(light)
    brightness = np.clip(batch.normals @ light, 0.0, 1.0)

    rows = []
    for r in range(args.height):
        row = []
        for c in range(args.width):
            i = r * args.width + c
            if batch.mask[i]:
                row.append(SHADES[int(brightness[i] * (len(SHADES) - 1))])
            else:
                row.append(" ")
        rows.append("".join(row))
    print("\n".join(rows))

    center = sphere.intersect(Ray.new((0.0, 0.0, -5.0), (0.0, 0.0, 1.0), args.precision))
    print(f"\ncenter ray: {center}")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
