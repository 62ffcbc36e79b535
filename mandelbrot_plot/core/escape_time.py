"""
Escape-time classification for the quadratic map z -> z^2 + c.

A point escapes at the first iteration whose value lies outside the radius-2
circle. Points that stay inside for the whole iteration budget are treated
as members of the set.
"""

from enum import Enum
from typing import Optional
import logging

from ..acceleration.numba_backend import BOUNDED, escape_kernel

logger = logging.getLogger(__name__)

MAX_ITERATIONS_LIMIT = 255


class SeedMode(Enum):
    """Initial value of the orbit."""

    ORIGIN = "origin"  # z0 = 0
    POINT = "point"    # z0 = c, one iteration ahead of ORIGIN

    @classmethod
    def parse(cls, value) -> "SeedMode":
        """Accept a SeedMode or its string name."""
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            available = ', '.join(mode.value for mode in cls)
            raise ValueError(f"Unknown seed mode '{value}'. Available: {available}") from None


def escape_time(cx: float, cy: float, max_iterations: int,
                seed_mode: SeedMode = SeedMode.ORIGIN) -> Optional[int]:
    """
    Classify a single point of the complex plane.

    Args:
        cx, cy: Real and imaginary parts of c
        max_iterations: Iteration budget
        seed_mode: Initial orbit value

    Returns:
        The escape iteration ``i`` (``0 <= i < max_iterations``), or None when
        the orbit stayed bounded
    """
    result = escape_kernel(cx, cy, int(max_iterations), seed_mode is SeedMode.POINT)
    if result == BOUNDED:
        return None
    return int(result)


def escape_count(cx: float, cy: float, max_iterations: int,
                 seed_mode: SeedMode = SeedMode.ORIGIN) -> int:
    """Escape iteration as stored in a plot buffer (bounded -> max_iterations)."""
    result = escape_time(cx, cy, max_iterations, seed_mode)
    return int(max_iterations) if result is None else result
