"""
Main API class for Mandelbrot plotting.

This module provides the stateful engine a host application creates once,
then pans, zooms and re-renders into flat pixel buffers.
"""

from enum import Enum
from typing import Optional, Tuple
import logging

import numpy as np

from .acceleration.numba_backend import render_kernel
from .core.escape_time import SeedMode
from .core.viewport import Viewport, ViewportMapper
from .io.config import EngineConfig, validate_max_iterations
from .rendering.coloring import BandedPalette
from .tools.timer import RenderTimer

logger = logging.getLogger(__name__)

MAX_PLOT_EXTENT = 2 ** 32 - 1
RGBA_CHANNELS = 4


class EngineState(Enum):
    """Whether the buffers reflect the current view."""

    CONFIGURED = "configured"  # never rendered
    RENDERED = "rendered"
    DIRTY = "dirty"            # view or cap changed since last render


def _validate_extent(name: str, value) -> int:
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"{name} must be an integer, got {value!r}")
    value = int(value)
    if not 1 <= value <= MAX_PLOT_EXTENT:
        raise ValueError(f"{name} must be between 1 and {MAX_PLOT_EXTENT}, got {value}")
    return value


def _readonly(array: np.ndarray) -> np.ndarray:
    view = array.view()
    view.flags.writeable = False
    return view


class MandelbrotEngine:
    """Escape-time plot of the Mandelbrot set over a fixed pixel grid."""

    def __init__(self, plot_width: int, plot_height: int,
                 config: Optional[EngineConfig] = None):
        """
        Initialize the engine and allocate its buffers.

        Args:
            plot_width, plot_height: Plot resolution in pixels (fixed for the
                lifetime of the engine)
            config: Initial view and render settings (uses defaults if None)
        """
        self.config = config or EngineConfig()
        self.config.validate()

        self._plot_width = _validate_extent("plot_width", plot_width)
        self._plot_height = _validate_extent("plot_height", plot_height)

        self._view = self.config.initial_viewport()
        self._mapper = ViewportMapper(self._view, self._plot_width, self._plot_height)
        self._max_iterations = validate_max_iterations(self.config.max_iterations)
        self._seed_mode = SeedMode.parse(self.config.seed_mode)
        self._palette = BandedPalette()

        pixels = self._plot_width * self._plot_height
        self._plot = np.zeros(pixels, dtype=np.uint8)
        self._rgba = np.zeros(pixels * RGBA_CHANNELS, dtype=np.uint8) if self.config.color else None

        self.state = EngineState.CONFIGURED
        self.last_render_time = None

        logger.info(f"MandelbrotEngine initialized: {self._plot_width}x{self._plot_height}, "
                    f"max_iterations={self._max_iterations}, seed={self._seed_mode.value}")

    # Alias kept for hosts written against the constructor-function API
    @classmethod
    def new(cls, plot_width: int, plot_height: int) -> 'MandelbrotEngine':
        return cls(plot_width, plot_height)

    @property
    def plot_width(self) -> int:
        return self._plot_width

    @property
    def plot_height(self) -> int:
        return self._plot_height

    @property
    def max_iterations(self) -> int:
        return self._max_iterations

    def get_max_iterations(self) -> int:
        return self._max_iterations

    @property
    def seed_mode(self) -> SeedMode:
        return self._seed_mode

    @property
    def view(self) -> Viewport:
        """Copy of the current viewport."""
        return self._view.copy()

    @property
    def has_color(self) -> bool:
        return self._rgba is not None

    @property
    def dirty(self) -> bool:
        """True while the buffers do not reflect the current view and cap."""
        return self.state is not EngineState.RENDERED

    def _invalidate(self):
        if self.state is EngineState.RENDERED:
            self.state = EngineState.DIRTY

    def pan(self, x: float, y: float) -> None:
        """
        Re-center the view on a pixel of the current plot.

        Args:
            x: Pixel column, normally in [0, plot_width)
            y: Pixel row, normally in [0, plot_height)
        """
        self._view.recenter(x, y, self._plot_width, self._plot_height)
        self._invalidate()
        logger.debug(f"Panned to pixel ({x}, {y}): view={self._view.to_tuple()}")

    def zoom(self, factor: float) -> None:
        """
        Scale the view around its center.

        Args:
            factor: Below 1 zooms in, above 1 zooms out; must be positive
        """
        self._view.scale(factor)
        self._invalidate()
        logger.debug(f"Zoomed by {factor}: view={self._view.to_tuple()}")

    def set_max_iterations(self, max_iterations: int) -> None:
        """Replace the iteration cap (0-255); used from the next render on."""
        self._max_iterations = validate_max_iterations(max_iterations)
        self._invalidate()
        logger.debug(f"max_iterations set to {self._max_iterations}")

    def reset_view(self) -> None:
        """Return to the configured initial view."""
        initial = self.config.initial_viewport()
        self._view.left = initial.left
        self._view.top = initial.top
        self._view.width = initial.width
        self._view.height = initial.height
        self._invalidate()

    def pixel_to_complex(self, x: int, y: int) -> Tuple[np.float32, np.float32]:
        """Point of the complex plane sampled by pixel (x, y)."""
        return self._mapper.pixel_to_complex(x, y)

    def coordinate_axes(self) -> Tuple[np.ndarray, np.ndarray]:
        """Points sampled by every column (cx) and row (cy) of the next render."""
        return self._mapper.coordinate_axes()

    def render(self) -> None:
        """Recompute the plot buffer, and the color buffer when enabled."""
        with RenderTimer("MandelbrotEngine.render()", logger) as timer:
            view = self._view
            render_kernel(
                self._plot,
                self._plot_width,
                self._plot_height,
                view.left,
                view.top,
                view.width,
                view.height,
                self._max_iterations,
                self._seed_mode is SeedMode.POINT,
            )

            if self._rgba is not None:
                self._palette.apply(self._plot, self._max_iterations, out=self._rgba)

        self.last_render_time = timer.elapsed
        self.state = EngineState.RENDERED

    @property
    def plot_buffer(self) -> np.ndarray:
        """Read-only view of the escape counts, one byte per pixel, row-major."""
        return _readonly(self._plot)

    @property
    def color_buffer(self) -> np.ndarray:
        """Read-only view of the RGBA pixels, four bytes per pixel, row-major."""
        if self._rgba is None:
            raise RuntimeError("Color buffer disabled for this engine")
        return _readonly(self._rgba)

    def plot_image(self) -> np.ndarray:
        """Plot buffer as a (height, width) read-only array."""
        return self.plot_buffer.reshape(self._plot_height, self._plot_width)

    def color_image(self) -> np.ndarray:
        """Color buffer as a (height, width, 4) read-only array."""
        return self._palette.to_image(self.color_buffer, self._plot_width, self._plot_height)

    def get_exploration_info(self) -> dict:
        """Summary of the current engine state."""
        xmin, xmax, ymin, ymax = self._view.bounds
        xs, ys = self.coordinate_axes()
        return {
            "plot_width": self._plot_width,
            "plot_height": self._plot_height,
            "view": dict(zip(("left", "top", "width", "height"), self._view.to_tuple())),
            "bounds": [float(xmin), float(xmax), float(ymin), float(ymax)],
            "sampled_bounds": [float(xs[0]), float(xs[-1]), float(ys[0]), float(ys[-1])],
            "max_iterations": self._max_iterations,
            "seed_mode": self._seed_mode.value,
            "color": self.has_color,
            "state": self.state.value,
            "last_render_time": self.last_render_time,
        }

    # Names used by hosts of the original plotting API
    view_center = pan
    view_zoom = zoom
    max_iterations_set = set_max_iterations
    plot_generate = render

    def plot_data(self) -> np.ndarray:
        return self.plot_buffer

    def plot_rgba(self) -> np.ndarray:
        return self.color_buffer
