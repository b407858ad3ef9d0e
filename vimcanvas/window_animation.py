"""Position and scroll animation of an editor window, driven by draw commands."""

from __future__ import annotations

import math
from collections import deque
from dataclasses import dataclass, field
from typing import Any, NamedTuple, Optional, Union

from .animation import EPSILON, Point, ease, ease_out_expo, ease_point
from .window_geometry import Dimensions

MAX_SNAPSHOTS = 5

# Any value outside 0..1 stops an animation.
_STOPPED = 2.0


@dataclass
class RendererSettings:
    position_animation_length: float = 0.15
    scroll_animation_length: float = 0.3
    floating_opacity: float = 0.7
    floating_blur: bool = True
    floating_blur_amount_x: float = 2.0
    floating_blur_amount_y: float = 2.0
    debug_renderer: bool = False
    profiler: bool = False
    underline_automatic_scaling: bool = False


class Rect(NamedTuple):
    left: float
    top: float
    right: float
    bottom: float

    @property
    def width(self) -> float:
        return self.right - self.left

    @property
    def height(self) -> float:
        return self.bottom - self.top


@dataclass(frozen=True)
class Position:
    """Place the window at ``grid_position`` with ``grid_size`` cells."""

    grid_position: tuple[float, float]
    grid_size: tuple[int, int]
    floating_order: Optional[int] = None


@dataclass(frozen=True)
class DrawLine:
    """New content for part of the window; ``fragments`` are opaque to the animation."""

    fragments: list[Any] = field(default_factory=list)


@dataclass(frozen=True)
class Scroll:
    top: int
    bottom: int
    left: int
    right: int
    rows: int
    cols: int


@dataclass(frozen=True)
class Clear:
    pass


@dataclass(frozen=True)
class Show:
    pass


@dataclass(frozen=True)
class Hide:
    pass


@dataclass(frozen=True)
class Close:
    pass


@dataclass(frozen=True)
class Viewport:
    top_line: float
    bottom_line: float


WindowDrawCommand = Union[Position, DrawLine, Scroll, Clear, Show, Hide, Close, Viewport]


@dataclass(frozen=True)
class _PositionOverride:
    top_line: int
    current_scroll: float


def _to_unsigned(value: float) -> int:
    """Truncate toward zero, saturating negatives and NaN at zero."""
    if math.isnan(value) or value <= 0:
        return 0
    if math.isinf(value):
        return (1 << 64) - 1
    return min(int(value), (1 << 64) - 1)


class WindowAnimation:
    """Animated placement and scrolling of one editor grid."""

    def __init__(self, id: int, grid_position: Point, grid_size: Dimensions) -> None:
        self.id = id
        self.hidden = False
        self.floating_order: Optional[int] = None
        self.grid_size = grid_size

        self.grid_start_position = grid_position
        self.grid_current_position = grid_position
        self.grid_destination = grid_position
        self.position_t = _STOPPED

        self.start_scroll = 0.0
        self.current_scroll = 0.0
        self.scroll_destination = 0.0
        self.scroll_t = _STOPPED

        self.top_line = 0
        self.snapshots: deque[int] = deque(maxlen=MAX_SNAPSHOTS)
        self._position_override: Optional[_PositionOverride] = None

    def pixel_region(self, font_dimensions: Dimensions) -> Rect:
        """The window's current area in pixels."""
        left = self.grid_current_position.x * font_dimensions.width
        top = self.grid_current_position.y * font_dimensions.height
        width = self.grid_size.width * font_dimensions.width
        height = self.grid_size.height * font_dimensions.height
        return Rect(left, top, left + width, top + height)

    def update(self, settings: RendererSettings, dt: float) -> bool:
        """Advance both animations by ``dt`` seconds; return whether either is running."""
        animating = False

        if 1.0 - self.position_t < EPSILON:
            self.position_t = _STOPPED
        else:
            animating = True
            self.position_t = min(
                self.position_t + dt / settings.position_animation_length, 1.0
            )
        self.grid_current_position = ease_point(
            ease_out_expo, self.grid_start_position, self.grid_destination, self.position_t
        )

        if 1.0 - self.scroll_t < EPSILON:
            self.scroll_t = _STOPPED
            self.snapshots.clear()
        else:
            animating = True
            self.scroll_t = min(self.scroll_t + dt / settings.scroll_animation_length, 1.0)
        self.current_scroll = ease(
            ease_out_expo, self.start_scroll, self.scroll_destination, self.scroll_t
        )

        return animating

    def scroll_offset(self, font_height: float) -> float:
        """Vertical pixel offset at which the current content is drawn."""
        if self._position_override is not None:
            top_line = self._position_override.top_line
            current_scroll = self._position_override.current_scroll
        else:
            top_line = self.top_line
            current_scroll = self.current_scroll
        return top_line * font_height - current_scroll * font_height

    def snapshot_offsets(self, font_height: float) -> list[float]:
        """Offsets of the scrolling snapshots, in the order they are drawn (newest first)."""
        return [
            top_line * font_height - self.current_scroll * font_height
            for top_line in reversed(self.snapshots)
        ]

    def handle_command(self, command: WindowDrawCommand) -> None:
        """Apply one draw command to the window's animation state."""
        if isinstance(command, Position):
            self._handle_position(command)
        elif isinstance(command, DrawLine):
            self._position_override = None
        elif isinstance(command, Clear):
            self.snapshots.clear()
        elif isinstance(command, Show):
            if self.hidden:
                self.hidden = False
                self.position_t = _STOPPED
                self.grid_start_position = self.grid_destination
        elif isinstance(command, Hide):
            self.hidden = True
        elif isinstance(command, Viewport):
            self._handle_viewport(command)
        # Scroll only moves pixels already drawn and Close is handled by the owner.

    def _handle_position(self, command: Position) -> None:
        grid_left, grid_top = command.grid_position
        new_destination = Point(max(grid_left, 0.0), max(grid_top, 0.0))
        width, height = command.grid_size
        new_grid_size = Dimensions(width=width, height=height)

        if self.grid_destination != new_destination:
            if (
                abs(self.grid_start_position.x) > EPSILON
                or abs(self.grid_start_position.y) > EPSILON
            ):
                self.position_t = 0.0
                self.grid_start_position = self.grid_current_position
            else:
                # Leaving the initial location is not animated.
                self.position_t = _STOPPED
                self.grid_start_position = new_destination
            self.grid_destination = new_destination

        if self.grid_size != new_grid_size:
            self.grid_size = new_grid_size

        self.floating_order = command.floating_order

        if self.hidden:
            self.hidden = False
            self.position_t = _STOPPED
            self.grid_start_position = new_destination
            self.grid_destination = new_destination

    def _handle_viewport(self, command: Viewport) -> None:
        new_top_line = _to_unsigned(command.top_line)
        if self.top_line == new_top_line:
            return
        self.snapshots.append(self.top_line)
        if self._position_override is None:
            self._position_override = _PositionOverride(self.top_line, self.current_scroll)
        self.top_line = new_top_line
        self.start_scroll = self.current_scroll
        self.scroll_destination = float(command.top_line)
        self.scroll_t = 0.0