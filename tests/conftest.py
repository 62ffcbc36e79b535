"""Shared fixtures for the test suite."""

import pytest

from mandelbrot_plot import MandelbrotEngine
from mandelbrot_plot.tools.diagnostics import uninstall_crash_reporter


@pytest.fixture
def engine():
    """4x4 engine with the default view and iteration cap."""
    return MandelbrotEngine(4, 4)


@pytest.fixture
def axis_engine():
    """5x5 engine whose samples fall on the integer grid -2..2."""
    return MandelbrotEngine(5, 5)


@pytest.fixture(autouse=True)
def restore_excepthook():
    yield
    uninstall_crash_reporter()
