"""Frame-time statistics shown by the on-screen profiler."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import NamedTuple

from .animation import EPSILON, Point, lerp

FRAMETIMES_COUNT = 48


class FrameSummary(NamedTuple):
    min_ms: float
    max_ms: float
    avg_ms: float


def fps_label(dt: float) -> str:
    """Frames-per-second text for a frame that took ``dt`` seconds."""
    return f"{1.0 / max(dt, EPSILON):.0f}FPS"


@dataclass
class FrameStats:
    """The most recent frame times, in milliseconds."""

    frametimes: deque = field(default_factory=lambda: deque(maxlen=FRAMETIMES_COUNT))

    def record(self, dt: float) -> None:
        """Add a frame that took ``dt`` seconds, dropping the oldest beyond the limit."""
        self.frametimes.append(dt * 1000.0)

    def summary(self) -> FrameSummary:
        if not self.frametimes:
            raise ValueError("no frame times recorded")
        return FrameSummary(
            min(self.frametimes),
            max(self.frametimes),
            sum(self.frametimes) / len(self.frametimes),
        )

    def graph_points(
        self, left: float, right: float, bottom: float, graph_height: float
    ) -> list[Point]:
        """Points of the frame-time graph, oldest first, spread from ``left`` toward ``right``."""
        if not self.frametimes:
            return []
        stats = self.summary()
        min_g = stats.min_ms * 0.8
        max_g = stats.max_ms * 1.1
        diff = max_g - min_g
        count = len(self.frametimes)
        points = []
        for index, frame in enumerate(self.frametimes):
            x = lerp(left, right, index / count)
            y = bottom - graph_height * (frame - min_g) / diff if diff else math.nan
            points.append(Point(x, y))
        return points