"""
Mandelbrot escape-time plotting library.

This library provides a small stateful engine that maps a pixel grid onto a
viewport of the complex plane, classifies every pixel with the escape-time
algorithm and exposes the result as flat, zero-copy pixel buffers.

Key Features:
- Single-precision viewport mapping with inclusive endpoints
- Numba-compiled escape-time kernel with origin or point seeding
- 64-level-per-channel RGBA banding palette
- Pan and zoom mutators for interactive hosts

Example usage:
    >>> from mandelbrot_plot import MandelbrotEngine
    >>> engine = MandelbrotEngine(500, 500)
    >>> engine.zoom(0.5)
    >>> engine.render()
    >>> rgba = engine.color_buffer
"""

__version__ = "1.0.0"
__author__ = "Mandelbrot Plot Team"

from mandelbrot_plot.core.escape_time import SeedMode, escape_count, escape_time
from mandelbrot_plot.core.viewport import Viewport, ViewportMapper
from mandelbrot_plot.rendering.coloring import BandedPalette, quantize, quantize_plot
from mandelbrot_plot.tools.diagnostics import install_crash_reporter
from mandelbrot_plot.tools.frame_stats import FrameStats
from mandelbrot_plot.tools.timer import RenderTimer
from mandelbrot_plot.io.config import EngineConfig

# Main API class
from mandelbrot_plot.api import EngineState, MandelbrotEngine

__all__ = [
    "MandelbrotEngine",
    "EngineState",
    "EngineConfig",
    "SeedMode",
    "Viewport",
    "ViewportMapper",
    "BandedPalette",
    "FrameStats",
    "RenderTimer",
    "escape_time",
    "escape_count",
    "quantize",
    "quantize_plot",
    "install_crash_reporter",
]
