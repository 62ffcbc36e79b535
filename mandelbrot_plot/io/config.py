"""
Engine configuration.

Defaults describe the initial state of a freshly created engine. Values can
come from code, from a plain dictionary, or from environment variables.
"""

from dataclasses import asdict, dataclass, fields
from typing import Any, Dict, Mapping, Optional, Tuple
import logging
import math
import os

import numpy as np

from ..core.escape_time import MAX_ITERATIONS_LIMIT, SeedMode
from ..core.viewport import Viewport

logger = logging.getLogger(__name__)

DEFAULT_VIEW = (-2.0, -2.0, 4.0, 4.0)  # left, top, width, height
DEFAULT_MAX_ITERATIONS = 16

ENV_PREFIX = "MANDELBROT_"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_FALSE_VALUES = {"0", "false", "no", "off"}


@dataclass
class EngineConfig:
    """Configuration for a MandelbrotEngine."""

    # Initial viewport in complex-plane units
    left: float = DEFAULT_VIEW[0]
    top: float = DEFAULT_VIEW[1]
    width: float = DEFAULT_VIEW[2]
    height: float = DEFAULT_VIEW[3]

    max_iterations: int = DEFAULT_MAX_ITERATIONS
    seed_mode: str = SeedMode.ORIGIN.value

    # Maintain the RGBA buffer alongside the plot
    color: bool = True

    def validate(self):
        """Validate configuration parameters."""
        for name in ("left", "top", "width", "height"):
            value = getattr(self, name)
            if not isinstance(value, (int, float, np.floating)) or not math.isfinite(value):
                raise ValueError(f"{name} must be a finite number")

        if self.width <= 0 or self.height <= 0:
            raise ValueError("Viewport width and height must be positive")

        validate_max_iterations(self.max_iterations)
        SeedMode.parse(self.seed_mode)

    @property
    def view(self) -> Tuple[float, float, float, float]:
        return (self.left, self.top, self.width, self.height)

    def initial_viewport(self) -> Viewport:
        return Viewport(*self.view)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> 'EngineConfig':
        """Create a config from a dictionary, ignoring unknown keys."""
        known = {f.name for f in fields(cls)}
        unknown = set(data) - known
        if unknown:
            logger.warning(f"Ignoring unknown config keys: {', '.join(sorted(unknown))}")

        config = cls(**{k: v for k, v in data.items() if k in known})
        config.validate()
        return config

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None,
                 prefix: str = ENV_PREFIX) -> 'EngineConfig':
        """
        Build a config from environment variables.

        Recognized variables (with the default prefix):
            MANDELBROT_VIEW            "left,top,width,height"
            MANDELBROT_MAX_ITERATIONS  integer 0-255
            MANDELBROT_SEED_MODE       "origin" or "point"
            MANDELBROT_COLOR           boolean flag
        """
        environ = os.environ if environ is None else environ
        data: Dict[str, Any] = {}

        view = environ.get(prefix + "VIEW")
        if view:
            data.update(zip(("left", "top", "width", "height"), parse_view(view)))

        max_iterations = environ.get(prefix + "MAX_ITERATIONS")
        if max_iterations:
            try:
                data["max_iterations"] = int(max_iterations)
            except ValueError:
                raise ValueError(f"Invalid {prefix}MAX_ITERATIONS: {max_iterations!r}") from None

        seed_mode = environ.get(prefix + "SEED_MODE")
        if seed_mode:
            data["seed_mode"] = seed_mode

        color = environ.get(prefix + "COLOR")
        if color:
            data["color"] = parse_flag(color)

        return cls.from_dict(data)


def validate_max_iterations(value) -> int:
    """Check that an iteration cap fits in an unsigned byte."""
    if isinstance(value, bool) or not isinstance(value, (int, np.integer)):
        raise ValueError(f"max_iterations must be an integer, got {value!r}")
    value = int(value)

    if not 0 <= value <= MAX_ITERATIONS_LIMIT:
        raise ValueError(f"max_iterations must be between 0 and {MAX_ITERATIONS_LIMIT}, got {value}")
    return value


def parse_view(text: str) -> Tuple[float, float, float, float]:
    """Parse a "left,top,width,height" string."""
    try:
        values = tuple(float(part.strip()) for part in text.split(','))
    except ValueError:
        raise ValueError(f"Invalid view '{text}'. Use 'left,top,width,height'") from None
    if len(values) != 4:
        raise ValueError(f"Invalid view '{text}'. Use 'left,top,width,height'")
    return values


def parse_flag(text: str) -> bool:
    lowered = text.strip().lower()
    if lowered in _TRUE_VALUES:
        return True
    if lowered in _FALSE_VALUES:
        return False
    raise ValueError(f"Invalid boolean value: {text!r}")
