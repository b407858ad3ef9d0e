import pytest

from vimcanvas.animation import Point
from vimcanvas.window_animation import (
    MAX_SNAPSHOTS,
    Clear,
    Close,
    DrawLine,
    Hide,
    Position,
    RendererSettings,
    Scroll,
    Show,
    Viewport,
    WindowAnimation,
)
from vimcanvas.window_geometry import Dimensions


def make_window(x=1.0, y=1.0, width=10, height=5):
    return WindowAnimation(7, Point(x, y), Dimensions(width=width, height=height))


def run_until_idle(window, settings, dt=0.01, limit=1000):
    for _ in range(limit):
        if not window.update(settings, dt):
            return True
    return False


def test_renderer_settings_defaults():
    settings = RendererSettings()
    assert settings.position_animation_length == 0.15
    assert settings.scroll_animation_length == 0.3
    assert settings.floating_opacity == 0.7
    assert settings.floating_blur is True
    assert settings.debug_renderer is False


def test_new_window_is_idle_at_its_position():
    window = make_window(3.0, 4.0)
    assert window.update(RendererSettings(), 0.016) is False
    assert window.grid_current_position == Point(3.0, 4.0)
    assert window.current_scroll == 0.0
    assert window.hidden is False


def test_pixel_region_matches_grid_and_font():
    window = make_window(2.0, 3.0, width=10, height=4)
    font = Dimensions(width=8, height=16)
    region = window.pixel_region(font)
    assert region.left == 2.0 * 8
    assert region.top == 3.0 * 16
    assert region.width == 10 * 8
    assert region.height == 4 * 16


def test_position_change_animates_toward_destination():
    window = make_window(1.0, 1.0)
    settings = RendererSettings()
    window.handle_command(Position(grid_position=(5.0, 6.0), grid_size=(10, 5)))
    assert window.update(settings, 0.01) is True
    mid = window.grid_current_position
    assert 1.0 < mid.x < 5.0
    assert 1.0 < mid.y < 6.0
    assert run_until_idle(window, settings)
    assert window.grid_current_position.x == pytest.approx(5.0, abs=1e-4)
    assert window.grid_current_position.y == pytest.approx(6.0, abs=1e-4)


def test_position_from_origin_jumps_without_animation():
    window = make_window(0.0, 0.0)
    window.handle_command(Position(grid_position=(5.0, 6.0), grid_size=(10, 5)))
    assert window.update(RendererSettings(), 0.01) is False
    assert window.grid_current_position == Point(5.0, 6.0)


def test_position_clamps_negative_coordinates():
    window = make_window(0.0, 0.0)
    window.handle_command(Position(grid_position=(-3.0, -2.0), grid_size=(10, 5)))
    window.update(RendererSettings(), 0.01)
    assert window.grid_current_position == Point(0.0, 0.0)


def test_position_updates_size_and_floating_order():
    window = make_window()
    window.handle_command(
        Position(grid_position=(1.0, 1.0), grid_size=(20, 8), floating_order=3)
    )
    assert window.grid_size == Dimensions(width=20, height=8)
    assert window.floating_order == 3


def test_hide_and_show():
    window = make_window()
    window.handle_command(Hide())
    assert window.hidden is True
    window.handle_command(Show())
    assert window.hidden is False
    assert window.update(RendererSettings(), 0.01) is False


def test_position_on_hidden_window_shows_it_without_animation():
    window = make_window(1.0, 1.0)
    window.handle_command(Hide())
    window.handle_command(Position(grid_position=(4.0, 2.0), grid_size=(10, 5)))
    assert window.hidden is False
    assert window.update(RendererSettings(), 0.01) is False
    assert window.grid_current_position == Point(4.0, 2.0)


def test_viewport_starts_scroll_animation():
    window = make_window()
    settings = RendererSettings()
    window.handle_command(Viewport(top_line=10.0, bottom_line=20.0))
    assert window.top_line == 10
    assert list(window.snapshots) == [0]
    assert window.update(settings, 0.01) is True
    assert 0.0 < window.current_scroll < 10.0
    assert run_until_idle(window, settings)
    assert window.current_scroll == pytest.approx(10.0, abs=1e-3)
    assert list(window.snapshots) == []


def test_viewport_same_top_line_is_ignored():
    window = make_window()
    window.handle_command(Viewport(top_line=0.0, bottom_line=5.0))
    assert list(window.snapshots) == []
    assert window.update(RendererSettings(), 0.01) is False


def test_snapshots_are_limited():
    window = make_window()
    for line in range(1, MAX_SNAPSHOTS + 4):
        window.handle_command(Viewport(top_line=float(line), bottom_line=float(line + 5)))
    assert len(window.snapshots) == MAX_SNAPSHOTS
    assert window.snapshots[-1] == MAX_SNAPSHOTS + 2


def test_override_keeps_old_offset_until_drawn():
    window = make_window()
    window.handle_command(Viewport(top_line=4.0, bottom_line=9.0))
    assert window.scroll_offset(16) == 0.0
    window.handle_command(DrawLine(["text"]))
    expected = window.top_line * 16 - window.current_scroll * 16
    assert window.scroll_offset(16) == expected


def test_snapshot_offsets_newest_first():
    window = make_window()
    window.handle_command(Viewport(top_line=2.0, bottom_line=7.0))
    window.handle_command(Viewport(top_line=5.0, bottom_line=10.0))
    offsets = window.snapshot_offsets(10)
    scroll = window.current_scroll
    assert offsets == [2 * 10 - scroll * 10, 0 * 10 - scroll * 10]


def test_clear_drops_snapshots():
    window = make_window()
    window.handle_command(Viewport(top_line=3.0, bottom_line=8.0))
    window.handle_command(Clear())
    assert list(window.snapshots) == []
    assert window.snapshot_offsets(12) == []


def test_scroll_and_close_leave_state_unchanged():
    window = make_window(2.0, 2.0)
    window.handle_command(Scroll(top=0, bottom=5, left=0, right=10, rows=1, cols=0))
    window.handle_command(Close())
    assert window.grid_current_position == Point(2.0, 2.0)
    assert window.hidden is False
    assert window.top_line == 0
    assert window.update(RendererSettings(), 0.01) is False


def test_negative_viewport_saturates_at_zero():
    window = make_window()
    window.handle_command(Viewport(top_line=6.0, bottom_line=11.0))
    window.handle_command(Viewport(top_line=-3.0, bottom_line=2.0))
    assert window.top_line == 0
    assert window.scroll_destination == -3.0