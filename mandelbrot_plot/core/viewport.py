"""
Viewport handling and pixel to complex-plane mapping.

The viewport is the rectangle of the complex plane currently mapped onto the
pixel grid. Coordinates are kept in single precision.
"""

from dataclasses import dataclass
from typing import Tuple
import logging
import math

import numpy as np

from ..acceleration.numba_backend import axis_samples, map_axis

logger = logging.getLogger(__name__)


@dataclass
class Viewport:
    """Rectangle ``[left, left+width] x [top, top+height]`` of the complex plane."""

    left: float
    top: float
    width: float
    height: float

    def __post_init__(self):
        self.left = np.float32(self.left)
        self.top = np.float32(self.top)
        self.width = np.float32(self.width)
        self.height = np.float32(self.height)

        if not (self.width > 0 and self.height > 0):
            raise ValueError("Viewport width and height must be positive")

    @property
    def center(self) -> Tuple[float, float]:
        """Center of the viewport."""
        half = np.float32(0.5)
        return (np.float32(self.left + self.width * half),
                np.float32(self.top + self.height * half))

    @property
    def bounds(self) -> Tuple[float, float, float, float]:
        """Bounds as (xmin, xmax, ymin, ymax)."""
        return (self.left, np.float32(self.left + self.width),
                self.top, np.float32(self.top + self.height))

    def copy(self) -> 'Viewport':
        return Viewport(self.left, self.top, self.width, self.height)

    def recenter(self, x: float, y: float, plot_width: int, plot_height: int) -> None:
        """
        Move the pixel (x, y) of the current view to the center.

        Pixels outside the plot are accepted and extrapolate the center.
        """
        half = np.float32(0.5)
        fx = np.float32(x) / np.float32(plot_width)
        fy = np.float32(y) / np.float32(plot_height)
        self.left = np.float32(self.left + (fx - half) * self.width)
        self.top = np.float32(self.top + (fy - half) * self.height)

    def scale(self, factor: float) -> None:
        """
        Scale the viewport around its center.

        A factor below 1 zooms in, above 1 zooms out.
        """
        if not math.isfinite(factor) or factor <= 0:
            raise ValueError(f"Zoom factor must be a positive finite number, got {factor}")

        one = np.float32(1.0)
        two = np.float32(2.0)
        with np.errstate(over='ignore', under='ignore'):
            f = np.float32(factor)
            width = np.float32(self.width * f)
            height = np.float32(self.height * f)
            left = np.float32(self.left + (self.width / two) * (one - f))
            top = np.float32(self.top + (self.height / two) * (one - f))

        # The factor and the new extent must survive single precision
        if not (np.isfinite(f) and f > 0):
            raise ValueError(f"Zoom factor {factor} is out of single-precision range")
        if not (np.isfinite(width) and np.isfinite(height) and width > 0 and height > 0):
            raise ValueError(f"Zoom factor {factor} would leave an empty or unbounded viewport")
        if not (np.isfinite(left) and np.isfinite(top)):
            raise ValueError(f"Zoom factor {factor} would move the viewport out of range")

        self.left = left
        self.top = top
        self.width = width
        self.height = height

    def to_tuple(self) -> Tuple[float, float, float, float]:
        return (float(self.left), float(self.top), float(self.width), float(self.height))


class ViewportMapper:
    """Maps pixel coordinates of a fixed-size plot onto a viewport."""

    def __init__(self, viewport: Viewport, plot_width: int, plot_height: int):
        """
        Initialize the mapper.

        Args:
            viewport: Viewport to read from; later changes to it are picked up
            plot_width, plot_height: Plot resolution in pixels
        """
        if plot_width <= 0 or plot_height <= 0:
            raise ValueError("Plot width and height must be positive")

        self.viewport = viewport
        self.plot_width = plot_width
        self.plot_height = plot_height

        if plot_width == 1 or plot_height == 1:
            logger.debug("Single-pixel plot axis maps onto the viewport origin")

    def pixel_to_complex(self, x: int, y: int) -> Tuple[np.float32, np.float32]:
        """Convert pixel coordinates to a point (cx, cy)."""
        view = self.viewport
        cx = map_axis(x, self.plot_width, view.left, view.width)
        cy = map_axis(y, self.plot_height, view.top, view.height)
        return np.float32(cx), np.float32(cy)

    def coordinate_axes(self) -> Tuple[np.ndarray, np.ndarray]:
        """
        Sample coordinates of every column and row.

        Returns:
            Tuple of (cx per column, cy per row) float32 arrays
        """
        view = self.viewport
        return (axis_samples(self.plot_width, view.left, view.width),
                axis_samples(self.plot_height, view.top, view.height))
