"""Wall-clock instrumentation for render passes."""

import logging
import time

logger = logging.getLogger(__name__)


class RenderTimer:
    """
    Context manager that logs how long the wrapped block took.

    Example:
        >>> with RenderTimer("MandelbrotEngine.render()") as timer:
        ...     engine.render()
        >>> timer.elapsed
    """

    def __init__(self, label: str, log: logging.Logger = None):
        self.label = label
        self.log = log or logger
        self.elapsed = None
        self._start = None

    def __enter__(self):
        self.log.debug(f"{self.label} started")
        self._start = time.perf_counter()
        return self

    def __exit__(self, exc_type, exc_value, traceback):
        self.elapsed = time.perf_counter() - self._start
        self.log.info(f"{self.label}: {self.elapsed * 1000:.2f} ms")
        return False
