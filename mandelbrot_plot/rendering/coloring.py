"""
Color quantization for escape-time plots.

Escape counts are turned into opaque RGBA by slicing the low six bits of the
count into three 2-bit fields, one per channel. Points that never escaped
are drawn black.
"""

from typing import Optional, Tuple
import logging

import numpy as np

logger = logging.getLogger(__name__)

CHANNEL_STEP = 64
OPAQUE = 255
INSIDE_COLOR = (0, 0, 0, OPAQUE)


def quantize(value: int, max_iterations: int) -> Tuple[int, int, int, int]:
    """
    Convert a single escape count to RGBA.

    Args:
        value: Stored escape count
        max_iterations: Iteration cap the count was produced with

    Returns:
        (r, g, b, a) tuple of ints in 0-255
    """
    if value >= max_iterations:
        return INSIDE_COLOR

    return (
        (value & 0x03) * CHANNEL_STEP,
        ((value & 0x0C) >> 2) * CHANNEL_STEP,
        ((value & 0x30) >> 4) * CHANNEL_STEP,
        OPAQUE,
    )


def quantize_plot(plot: np.ndarray, max_iterations: int,
                  out: Optional[np.ndarray] = None) -> np.ndarray:
    """
    Vectorized quantization of a whole plot buffer.

    Args:
        plot: Flat uint8 array of escape counts
        max_iterations: Iteration cap the counts were produced with
        out: Optional flat uint8 array of length 4 * plot.size to fill

    Returns:
        Flat uint8 RGBA array
    """
    counts = np.asarray(plot, dtype=np.uint8).reshape(-1)
    if out is None:
        out = np.empty(counts.size * 4, dtype=np.uint8)
    elif out.size != counts.size * 4:
        raise ValueError(f"RGBA buffer must hold {counts.size * 4} bytes, got {out.size}")

    rgba = out.reshape(-1, 4)
    rgba[:, 0] = (counts & 0x03) * CHANNEL_STEP
    rgba[:, 1] = ((counts & 0x0C) >> 2) * CHANNEL_STEP
    rgba[:, 2] = ((counts & 0x30) >> 4) * CHANNEL_STEP
    rgba[:, 3] = OPAQUE

    inside = counts >= max_iterations
    if np.any(inside):
        rgba[inside, :3] = 0

    return out


class BandedPalette:
    """Fixed 64-level-per-channel banding palette used by the engine."""

    name = "banded"

    def apply(self, plot: np.ndarray, max_iterations: int,
              out: Optional[np.ndarray] = None) -> np.ndarray:
        """Quantize a plot buffer into ``out``."""
        return quantize_plot(plot, max_iterations, out)

    def color_of(self, value: int, max_iterations: int) -> Tuple[int, int, int, int]:
        return quantize(value, max_iterations)

    @staticmethod
    def to_image(color_buffer: np.ndarray, plot_width: int, plot_height: int) -> np.ndarray:
        """Reshape a flat RGBA buffer to (height, width, 4) without copying."""
        return color_buffer.reshape(plot_height, plot_width, 4)
