"""
Command-line interface for Mandelbrot plotting.

Renders a view of the set as an ASCII preview, benchmarks repeated renders
and reports engine state. Nothing is written to disk.
"""

import click
import sys
import json
import logging

from .. import __version__
from ..api import MandelbrotEngine
from ..core.escape_time import SeedMode
from ..io.config import EngineConfig, parse_view
from ..tools.diagnostics import install_crash_reporter
from ..tools.frame_stats import FrameStats

logger = logging.getLogger(__name__)

# Darkest to brightest; the last character marks points inside the set
ASCII_RAMP = " .:-=+*#%@"


def ascii_preview(engine: MandelbrotEngine) -> str:
    """Render the plot buffer of an engine as text, one line per pixel row."""
    image = engine.plot_image()
    cap = engine.max_iterations
    top = len(ASCII_RAMP) - 1

    lines = []
    for row in image:
        chars = []
        for value in row:
            if value >= cap:
                chars.append(ASCII_RAMP[top])
            else:
                chars.append(ASCII_RAMP[int(value) * (top - 1) // max(cap - 1, 1)])
        lines.append("".join(chars))
    return "\n".join(lines)


def build_engine(width, height, max_iter, seed_mode, view, color=True) -> MandelbrotEngine:
    """Create an engine from environment defaults and command-line overrides."""
    config = EngineConfig.from_env()
    if view:
        config.left, config.top, config.width, config.height = parse_view(view)
    if max_iter is not None:
        config.max_iterations = max_iter
    if seed_mode is not None:
        config.seed_mode = seed_mode
    config.color = color
    return MandelbrotEngine(width, height, config)


def apply_navigation(engine: MandelbrotEngine, centers, zooms):
    """Apply pans first, then zooms, each in the order given."""
    for x, y in centers:
        engine.pan(x, y)
    for factor in zooms:
        engine.zoom(factor)


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version information')
@click.option('--verbose', '-v', is_flag=True, help='Enable verbose logging')
@click.option('--quiet', '-q', is_flag=True, help='Suppress most output')
@click.pass_context
def main(ctx, version, verbose, quiet):
    """
    Mandelbrot Plot - escape-time rendering of the Mandelbrot set.

    Configure a view with pans and zooms, render it and inspect the result
    from the terminal.
    """
    # Setup logging
    if quiet:
        logging.basicConfig(level=logging.ERROR)
    elif verbose:
        logging.basicConfig(level=logging.DEBUG,
                            format='%(asctime)s - %(name)s - %(levelname)s - %(message)s')
    else:
        logging.basicConfig(level=logging.WARNING,
                            format='%(levelname)s: %(message)s')

    install_crash_reporter()

    if version:
        click.echo(f"Mandelbrot Plot v{__version__}")
        click.echo(f"Python: {sys.version}")
        if ctx.invoked_subcommand is None:
            sys.exit(0)

    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose


_seed_choice = click.Choice([mode.value for mode in SeedMode])


@main.command()
@click.option('--width', '-w', type=int, default=72, show_default=True, help='Plot width in pixels')
@click.option('--height', '-h', type=int, default=32, show_default=True, help='Plot height in pixels')
@click.option('--max-iter', type=int, help='Maximum iterations (0-255)')
@click.option('--seed-mode', type=_seed_choice, help='Initial orbit value')
@click.option('--view', type=str, help='Initial view: "left,top,width,height"')
@click.option('--center', type=(float, float), multiple=True, help='Re-center on pixel X Y (repeatable)')
@click.option('--zoom', type=float, multiple=True, help='Zoom factor, <1 zooms in (repeatable)')
@click.pass_context
def render(ctx, width, height, max_iter, seed_mode, view, center, zoom):
    """Render a view and print it as ASCII art."""
    try:
        engine = build_engine(width, height, max_iter, seed_mode, view, color=False)
        apply_navigation(engine, center, zoom)
        engine.render()
        click.echo(ascii_preview(engine))

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option('--width', '-w', type=int, default=500, show_default=True, help='Plot width in pixels')
@click.option('--height', '-h', type=int, default=500, show_default=True, help='Plot height in pixels')
@click.option('--max-iter', type=int, help='Maximum iterations (0-255)')
@click.option('--seed-mode', type=_seed_choice, help='Initial orbit value')
@click.option('--frames', '-n', type=int, default=20, show_default=True, help='Number of renders')
@click.option('--window', type=int, default=100, show_default=True, help='Samples kept for statistics')
@click.option('--zoom', type=float, default=1.0, show_default=True, help='Zoom factor applied before each frame')
@click.pass_context
def benchmark(ctx, width, height, max_iter, seed_mode, frames, window, zoom):
    """Render repeatedly and report frames per second."""
    try:
        if frames <= 0:
            raise ValueError("frames must be positive")

        engine = build_engine(width, height, max_iter, seed_mode, None)

        # First render pays for kernel compilation
        engine.render()

        stats = FrameStats(window=window)
        for _ in range(frames):
            engine.zoom(zoom)
            engine.render()
            stats.record()

        click.echo(stats.summary())

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command()
@click.option('--width', '-w', type=int, default=500, show_default=True, help='Plot width in pixels')
@click.option('--height', '-h', type=int, default=500, show_default=True, help='Plot height in pixels')
@click.option('--max-iter', type=int, help='Maximum iterations (0-255)')
@click.option('--seed-mode', type=_seed_choice, help='Initial orbit value')
@click.option('--view', type=str, help='Initial view: "left,top,width,height"')
@click.option('--center', type=(float, float), multiple=True, help='Re-center on pixel X Y (repeatable)')
@click.option('--zoom', type=float, multiple=True, help='Zoom factor, <1 zooms in (repeatable)')
@click.pass_context
def info(ctx, width, height, max_iter, seed_mode, view, center, zoom):
    """Print the engine state after navigation as JSON."""
    try:
        engine = build_engine(width, height, max_iter, seed_mode, view)
        apply_navigation(engine, center, zoom)
        click.echo(json.dumps(engine.get_exploration_info(), indent=2))

    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == '__main__':
    main()
