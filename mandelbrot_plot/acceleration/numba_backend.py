"""
Numba JIT compilation backend for the escape-time plot.

This module holds the compiled kernels shared by the scalar helpers in
``mandelbrot_plot.core`` and the engine's render pass. All arithmetic is
carried out in single precision so that the per-point helpers and the full
render agree bit for bit.
"""

import logging

import numba
import numpy as np
from numba import njit

logger = logging.getLogger(__name__)

logger.debug(f"Numba available: {numba.__version__}")

# Squared escape radius (|z| > 2)
ESCAPE_RADIUS_SQ = 4.0

# Returned by escape_kernel when the orbit stays bounded
BOUNDED = -1


@njit(cache=True)
def map_axis(index, extent, origin, span):
    """
    Map a pixel index along one axis into the complex plane.

    The last pixel lands exactly on ``origin + span``. A single-pixel axis
    has no spacing, so it maps onto ``origin``.
    """
    base = np.float32(origin)
    if extent <= 1:
        return base
    return base + np.float32(index) / np.float32(extent - 1) * np.float32(span)


@njit(cache=True)
def axis_samples(extent, origin, span):
    """Sample coordinate of every pixel along one axis, as float32."""
    samples = np.empty(extent, dtype=np.float32)
    for i in range(extent):
        samples[i] = map_axis(i, extent, origin, span)
    return samples


@njit(cache=True)
def escape_kernel(cx, cy, max_iter, point_seeded):
    """
    JIT-compiled escape-time iteration for a single point.

    Args:
        cx: Real component of c
        cy: Imaginary component of c
        max_iter: Maximum iterations
        point_seeded: Start the orbit at c instead of the origin

    Returns:
        Index of the iteration that escaped, or BOUNDED
    """
    cr = np.float32(cx)
    ci = np.float32(cy)
    two = np.float32(2.0)
    limit = np.float32(ESCAPE_RADIUS_SQ)

    if point_seeded:
        zr = cr
        zi = ci
    else:
        zr = np.float32(0.0)
        zi = np.float32(0.0)

    for i in range(max_iter):
        xi = zr * zr - zi * zi + cr
        yi = two * zr * zi + ci

        if xi * xi + yi * yi > limit:
            return i

        zr = xi
        zi = yi

    return BOUNDED


@njit(cache=True)
def render_kernel(plot, plot_width, plot_height, left, top, width, height,
                  max_iter, point_seeded):
    """
    Fill a flat row-major plot buffer with escape counts.

    Bounded points store ``max_iter``.
    """
    xs = axis_samples(plot_width, left, width)
    ys = axis_samples(plot_height, top, height)
    for x in range(plot_width):
        for y in range(plot_height):
            n = escape_kernel(xs[x], ys[y], max_iter, point_seeded)
            if n == BOUNDED:
                n = max_iter
            plot[y * plot_width + x] = n
    return plot
