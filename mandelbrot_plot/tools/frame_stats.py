"""
Frame rate bookkeeping for repeated renders.

Keeps a sliding window of frames-per-second samples and reports the latest,
mean, minimum and maximum over that window.
"""

from collections import deque
from typing import Optional
import logging
import time

logger = logging.getLogger(__name__)

DEFAULT_WINDOW = 100


class FrameStats:
    """Sliding window of frames-per-second samples."""

    def __init__(self, window: int = DEFAULT_WINDOW, start: Optional[float] = None):
        """
        Args:
            window: Number of samples kept
            start: Timestamp of the previous frame (defaults to now)
        """
        if window <= 0:
            raise ValueError("window must be positive")
        self.window = window
        self.frames = deque(maxlen=window)
        self.last_timestamp = time.perf_counter() if start is None else start

    def record(self, now: Optional[float] = None) -> Optional[float]:
        """
        Record a frame finishing at ``now``.

        Returns:
            The frames per second of this frame, or None when no time passed
        """
        if now is None:
            now = time.perf_counter()
        delta = now - self.last_timestamp
        self.last_timestamp = now

        if delta <= 0:
            logger.debug("Ignoring frame with non-positive duration")
            return None

        fps = 1.0 / delta
        self.frames.append(fps)
        return fps

    def __len__(self):
        return len(self.frames)

    @property
    def latest(self) -> float:
        return self.frames[-1] if self.frames else 0.0

    @property
    def mean(self) -> float:
        return sum(self.frames) / len(self.frames) if self.frames else 0.0

    @property
    def minimum(self) -> float:
        return min(self.frames) if self.frames else 0.0

    @property
    def maximum(self) -> float:
        return max(self.frames) if self.frames else 0.0

    def summary(self) -> str:
        """Human-readable report of the current window."""
        count = len(self.frames)
        return "\n".join([
            "Frames per Second:",
            f"latest = {round(self.latest)}",
            f"avg of last {count} = {round(self.mean)}",
            f"min of last {count} = {round(self.minimum)}",
            f"max of last {count} = {round(self.maximum)}",
        ])
