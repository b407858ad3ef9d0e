"""Cursor shape and the animation of its four corners toward their destination."""

from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Protocol

from .animation import EPSILON, Point, ease_out_expo, ease_point, lerp
from .cursor_vfx import CursorVfx, VfxMode, VfxSettings, new_cursor_vfx

DEFAULT_CELL_PERCENTAGE = 1.0 / 8.0

STANDARD_CORNERS: tuple[tuple[float, float], ...] = (
    (-0.5, -0.5),
    (0.5, -0.5),
    (0.5, 0.5),
    (-0.5, 0.5),
)


class CursorShape(Enum):
    BLOCK = "block"
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"


@dataclass
class CursorSettings(VfxSettings):
    """Cursor animation settings; the effect settings are inherited."""

    antialiasing: bool = True
    animation_length: float = 0.06
    distance_length_adjust: bool = True
    animate_in_insert_mode: bool = True
    animate_command_line: bool = True
    trail_size: float = 0.7
    # Outline width in ems used for a block cursor while the window is unfocused.
    unfocused_outline_width: float = 1.0 / 8.0
    vfx_mode: VfxMode = VfxMode.DISABLED


@dataclass
class Corner:
    """One corner of the cursor, easing toward its place around the destination."""

    start_position: Point = field(default_factory=Point)
    current_position: Point = field(default_factory=Point)
    relative_position: Point = field(default_factory=Point)
    previous_destination: Point = field(default_factory=lambda: Point(-1000.0, -1000.0))
    length_multiplier: float = 1.0
    t: float = 0.0

    def update(
        self,
        settings: CursorSettings,
        font_dimensions: Point,
        destination: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Move toward ``destination`` (the cursor centre); return whether the corner moved."""
        if destination != self.previous_destination:
            self.t = 0.0
            self.start_position = self.current_position
            self.previous_destination = destination
            if settings.distance_length_adjust:
                distance = (destination - self.current_position).length()
                self.length_multiplier = max(math.log10(distance), 0.0) if distance > 0 else 0.0
            else:
                self.length_multiplier = 1.0

        if abs(self.t - 1.0) < EPSILON:
            return False

        relative_scaled = Point(
            self.relative_position.x * font_dimensions.x,
            self.relative_position.y * font_dimensions.y,
        )
        corner_destination = destination + relative_scaled

        if immediate_movement:
            self.t = 1.0
            self.current_position = corner_destination
            return True

        # Corners leading the motion move faster than the ones trailing behind.
        travel_direction = (destination - self.current_position).normalized()
        corner_direction = self.relative_position.normalized()
        direction_alignment = travel_direction.dot(corner_direction)

        trail = min(max(1.0 - settings.trail_size, 0.0), 1.0)
        corner_dt = dt * lerp(1.0, trail, -direction_alignment)
        duration = settings.animation_length * self.length_multiplier
        if duration == 0.0:
            self.t = 1.0
        else:
            self.t = min(self.t + corner_dt / duration, 1.0)

        self.current_position = ease_point(
            ease_out_expo, self.start_position, corner_destination, self.t
        )
        return True


class CursorAnimator:
    """The four animated corners of the cursor plus its optional visual effect."""

    def __init__(self) -> None:
        self.corners: list[Corner] = [Corner() for _ in STANDARD_CORNERS]
        self.shape = CursorShape.BLOCK
        self.vfx: Optional[CursorVfx] = None
        self.vfx_mode = VfxMode.DISABLED
        self._restart_vfx = False
        self.set_cursor_shape(CursorShape.BLOCK, DEFAULT_CELL_PERCENTAGE)

    def set_cursor_shape(
        self, shape: CursorShape, cell_percentage: Optional[float] = None
    ) -> None:
        """Place the corners for ``shape`` and restart their animation."""
        percentage = DEFAULT_CELL_PERCENTAGE if cell_percentage is None else cell_percentage
        for corner, (x, y) in zip(self.corners, STANDARD_CORNERS):
            if shape is CursorShape.BLOCK:
                relative = Point(x, y)
            elif shape is CursorShape.VERTICAL:
                # Pull the right edge in to the bar width.
                relative = Point((x + 0.5) * percentage - 0.5, y)
            else:
                # Same as vertical but along y, keeping the bar at the bottom of the cell.
                relative = Point(x, -((-y + 0.5) * percentage - 0.5))
            corner.relative_position = relative
            corner.t = 0.0
            corner.start_position = corner.current_position
        self.shape = shape
        self._restart_vfx = True

    def update(
        self,
        settings: CursorSettings,
        destination: Point,
        cursor_dimensions: Point,
        dt: float,
        immediate_movement: bool,
    ) -> bool:
        """Advance corners and effect toward the cell at ``destination``; return whether animating."""
        if settings.vfx_mode != self.vfx_mode:
            self.vfx = new_cursor_vfx(settings.vfx_mode)
            self.vfx_mode = settings.vfx_mode

        center_destination = destination + cursor_dimensions * 0.5

        if self._restart_vfx:
            self._restart_vfx = False
            if self.vfx is not None:
                self.vfx.restart(center_destination)

        if center_destination.is_zero():
            return False

        moved = [
            corner.update(
                settings, cursor_dimensions, center_destination, dt, immediate_movement
            )
            for corner in self.corners
        ]
        animating = any(moved)

        if self.vfx is not None:
            vfx_animating = self.vfx.update(settings, center_destination, cursor_dimensions, dt)
            animating = animating or vfx_animating

        return animating


class _GridSize(Protocol):
    height: int


class CursorWindow(Protocol):
    """What the cursor needs to know about the window it is in."""

    grid_current_position: Point
    current_scroll: float
    top_line: int
    grid_size: _GridSize


def cursor_destination(
    grid_position: tuple[int, int],
    font_dimensions: tuple[float, float],
    window: Optional[CursorWindow],
) -> Point:
    """Pixel position of the cursor cell, kept vertically inside its window."""
    cursor_x, cursor_y = grid_position
    font_width, font_height = font_dimensions
    if window is None:
        return Point(cursor_x * font_width, cursor_y * font_height)

    origin = window.grid_current_position
    grid_x = cursor_x + origin.x
    grid_y = cursor_y + origin.y - (window.current_scroll - window.top_line)
    grid_y = min(max(grid_y, origin.y), origin.y + window.grid_size.height - 1.0)
    return Point(grid_x * font_width, grid_y * font_height)