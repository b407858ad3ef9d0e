# vimcanvas

vimcanvas holds the drawing-independent logic that a graphical editor front end needs. Each
part computes positions, timings, shapes or values. You pass the results to whatever canvas
or toolkit you draw with. The package has no runtime dependencies.

## Modules

- `vimcanvas.animation` provides the easing curves `ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
  `ease_in_out_cubic`, `ease_in_expo` and `ease_out_expo`. It also has `lerp`, `ease`,
  `ease_point` and an immutable `Point`, which supports `+`, `-`, scalar `*`, `length()`,
  `normalized()`, `dot()` and `is_zero()`.
- `vimcanvas.font_options` parses `guifont` strings with `FontOptions.parse`. It reads the
  comma-separated font list (an underscore stands for a space), `hN` sizes (a decimal point
  allows fractional sizes), `b`, `i`, `#h-<hinting>` and `#e-<edging>`. Sizes are converted
  with `points_to_pixels`, which uses 96/72 everywhere except macOS.
- `vimcanvas.values` converts incoming setting values: `parse_float`, `parse_u64`,
  `parse_u32`, `parse_i32`, `parse_str` and `parse_bool`. Each one returns the converted
  value. When the type does not fit, it logs an error and returns the current value
  unchanged.
- `vimcanvas.settings` contains `Settings`, which stores one value per type (`set`, `get`)
  and holds update and read handlers for each variable name (`set_setting_handlers`).
  - Its async `read_initial_values` and `setup_changed_listeners` talk to an editor client
    that you supply. The client needs `get_var`, `set_var` and `command` coroutines.
  - Editor variables are named `vimcanvas_<name>`.
  - `handle_changed_notification([name, value])` applies a change notification.
  - Failures raise `SettingsError`.
  - A shared instance is available as `SETTINGS`.
- `vimcanvas.window_geometry` reads and writes the window placement as
  `vimcanvas-settings.json` in the editor's data directory, or in a `data_dir` you pass.
  - `save_window_geometry`, `load_last_window_settings` and `last_window_geometry` handle
    the file. The saved placement is either `Maximized` or `Windowed`.
  - `parse_window_geometry("<width>x<height>")` raises `ValueError` when the text is
    malformed or a dimension is zero.
- `vimcanvas.profiler` keeps the last 48 frame times. `FrameStats.record` adds one,
  `summary` gives min, max and average, and `graph_points` gives the graph's points.
  `fps_label` formats a frame rate.
- `vimcanvas.blink` contains `BlinkStatus.update_status(cursor)`. It follows a cursor's
  `blinkwait`, `blinkon` and `blinkoff` times and says whether the cursor should be drawn.
  You can inject the clock and a scheduling callback.
- `vimcanvas.cursor_vfx` contains the cursor effects, selected by `VfxMode`:
  - highlight effects (`PointHighlight`): sonicboom, ripple and wireframe;
  - particle trails (`ParticleTrail`): railgun, torpedo and pixiedust.
  Randomness comes from a deterministic `PcgRng`. `new_cursor_vfx` builds the effect for a
  mode.
- `vimcanvas.cursor` contains `CursorAnimator`, which eases the four `Corner`s of a block,
  vertical or horizontal cursor toward a destination. `CursorSettings` configures it, and
  `cursor_destination` computes the cursor's pixel position inside a window.
- `vimcanvas.window_animation` contains `WindowAnimation`. It applies window draw commands
  (`Position`, `DrawLine`, `Scroll`, `Clear`, `Show`, `Hide`, `Close`, `Viewport`) and
  animates position and scrolling. It can report the window's `pixel_region`, its
  `scroll_offset` and its `snapshot_offsets`.
- `vimcanvas.renderer` contains `Renderer`, which routes `WindowCommand`, `FontChanged`,
  `ModeChanged` and `CloseWindow` commands. `ordered_windows` returns root windows by id,
  followed by floating windows ordered by `floating_sort_key`. `update(dt)` advances every
  visible window and records `window_regions`.
- `vimcanvas.tracker` contains `RunningTracker`, a thread-safe running flag with an exit
  code. A shared instance is available as `RUNNING_TRACKER`.

## Examples

Easing:

```python
from vimcanvas.animation import Point, ease, ease_point, ease_in_out_cubic, ease_out_expo

ease(ease_in_out_cubic, 1.0, 0.0, 0.25)          # 0.9375
ease_point(ease_out_expo, Point(0, 0), Point(1, 1), 1.0)   # Point(x=1.0, y=1.0)
```

Font settings:

```python
from vimcanvas.font_options import FontOptions, FontHinting

options = FontOptions.parse("Fira Code Mono:h15:b:i:#h-slight:#e-alias")
options.primary_font()                 # "Fira Code Mono"
options.hinting is FontHinting.SLIGHT  # True
```

Window geometry:

```python
from vimcanvas.window_geometry import parse_window_geometry

parse_window_geometry("100x50")   # Dimensions(width=100, height=50)
parse_window_geometry("0x50")     # raises ValueError
```

Driving window animations through a renderer:

```python
from vimcanvas.renderer import Renderer, WindowCommand
from vimcanvas.window_animation import Position

renderer = Renderer()
renderer.handle_draw_command(
    WindowCommand(grid_id=1, command=Position(grid_position=(0.0, 0.0), grid_size=(80, 24)))
)
renderer.update(1 / 60)
[window.id for window in renderer.ordered_windows()]   # [1]
```

## What it does not do

vimcanvas does not draw anything. It has no canvas, GPU surface, font loading, text
shaping or glyph cache, and it does not render underlines or text. It opens no editor
process and implements no RPC client. `Settings` works with any client object you pass
to it. There is no command-line program.

## Running the tests

```
pip install -e .[test]
pytest
```