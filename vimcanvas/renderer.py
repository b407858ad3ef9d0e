"""Routing of batched draw commands to animated windows and their drawing order."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, NamedTuple, Optional, Union

from .animation import Point
from .font_options import FontOptions
from .window_animation import (
    Close,
    Position,
    Rect,
    RendererSettings,
    WindowAnimation,
    WindowDrawCommand,
)
from .window_geometry import Dimensions

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class CloseWindow:
    """Close notice for a grid; window removal arrives as a ``Close`` window command."""

    grid_id: int


@dataclass(frozen=True)
class WindowCommand:
    """A draw command addressed to one grid."""

    grid_id: int
    command: WindowDrawCommand


@dataclass(frozen=True)
class FontChanged:
    """The ``guifont`` setting changed to ``font``."""

    font: str


@dataclass(frozen=True)
class ModeChanged:
    """The editor switched to ``mode``."""

    mode: Any


DrawCommand = Union[CloseWindow, WindowCommand, FontChanged, ModeChanged]


class WindowDrawDetails(NamedTuple):
    """Where a window was placed on the last update."""

    id: int
    region: Rect
    floating_order: Optional[int]


def floating_sort_key(window: WindowAnimation) -> tuple[int, float, float]:
    """Floating windows are ordered by floating order, then grid x, then grid y."""
    if window.floating_order is None:
        raise ValueError(f"window {window.id} is not floating")
    position = window.grid_current_position
    return (window.floating_order, position.x, position.y)


@dataclass
class Renderer:
    """Keeps one animated window per grid and applies draw commands to them."""

    font_dimensions: Dimensions = field(default_factory=lambda: Dimensions(1, 1))
    settings: RendererSettings = field(default_factory=RendererSettings)
    windows: dict[int, WindowAnimation] = field(default_factory=dict)
    window_regions: list[WindowDrawDetails] = field(default_factory=list)
    current_mode: Any = None
    font_options: FontOptions = field(default_factory=FontOptions)

    def handle_draw_command(self, command: DrawCommand) -> None:
        """Apply one command."""
        if isinstance(command, WindowCommand):
            self._handle_window_command(command.grid_id, command.command)
        elif isinstance(command, FontChanged):
            self.font_options = FontOptions.parse(command.font)
        elif isinstance(command, ModeChanged):
            self.current_mode = command.mode
        # CloseWindow carries nothing to do here.

    def _handle_window_command(self, grid_id: int, command: WindowDrawCommand) -> None:
        if isinstance(command, Close):
            self.windows.pop(grid_id, None)
            return
        window = self.windows.get(grid_id)
        if window is not None:
            window.handle_command(command)
        elif isinstance(command, Position):
            left, top = command.grid_position
            width, height = command.grid_size
            self.windows[grid_id] = WindowAnimation(
                grid_id, Point(float(left), float(top)), Dimensions(width, height)
            )
        else:
            logger.error("WindowDrawCommand sent for uninitialized grid %s", grid_id)

    def handle_draw_commands(self, commands: Iterable[DrawCommand]) -> bool:
        """Apply commands in order; return whether any of them changed the font."""
        font_changed = False
        for command in commands:
            if isinstance(command, FontChanged):
                font_changed = True
            self.handle_draw_command(command)
        return font_changed

    def ordered_windows(self) -> list[WindowAnimation]:
        """Visible windows in drawing order: root windows by id, then floating windows."""
        visible = [window for window in self.windows.values() if not window.hidden]
        roots = sorted(
            (window for window in visible if window.floating_order is None),
            key=lambda window: window.id,
        )
        floating = sorted(
            (window for window in visible if window.floating_order is not None),
            key=floating_sort_key,
        )
        return roots + floating

    def update(self, dt: float) -> bool:
        """Advance every visible window by ``dt`` seconds and record where each one lands.

        Returns whether any window is still animating.
        """
        animating = False
        regions = []
        for window in self.ordered_windows():
            if window.update(self.settings, dt):
                animating = True
            regions.append(
                WindowDrawDetails(
                    window.id,
                    window.pixel_region(self.font_dimensions),
                    window.floating_order,
                )
            )
        self.window_regions = regions
        return animating