# nvgrid

An in-memory model of the state a Neovim-style GUI front end keeps: the
character grid of each window, highlight styles and colours, the cursor,
floating window anchors, and the draw commands handed to a renderer.

You feed it redraw events and it produces batches of draw commands and
window commands for your own code to consume.

## Installation

```
pip install nvgrid
```

To run the test suite:

```
pip install "nvgrid[test]"
pytest
```

## Modules

- `nvgrid.style`: `Color` (RGBA floats), `Colors`, `UnderlineStyle` and
  `Style`. `Style.foreground`, `Style.background` and `Style.special`
  resolve colours against default colours and honour `reverse`; a missing
  default colour raises `ValueError`.
- `nvgrid.cursor`: `CursorShape` (with `CursorShape.from_type_name`),
  `CursorMode` and `Cursor`. A cursor's foreground falls back to the default
  background and its background to the default foreground; `Cursor.alpha()`
  turns the style's blend percentage into 0..255; `Cursor.change_mode`
  applies a mode, keeping shape and style where the mode leaves them unset.
- `nvgrid.frame`: `Frame`, `available_frames(platform)` and
  `parse_frame(value, platform)`. `transparent` and `buttonless` are only
  available when the platform is `"darwin"`; an unknown or unavailable name
  raises `ValueError`.
- `nvgrid.batcher`: `DrawCommandBatcher`. `queue` adds a command,
  `send_batch(send)` hands the current batch to `send`, and
  `set_enabled(enabled, send)` holds batches back while disabled and sends
  them in order when enabled again.
- `nvgrid.animation`: easing functions (`ease_linear`, `ease_in_quad`,
  `ease_out_quad`, `ease_in_out_quad`, `ease_in_cubic`, `ease_out_cubic`,
  `ease_in_out_cubic`, `ease_in_expo`, `ease_out_expo`), `lerp`, `ease`,
  `ease_point` and `CriticallyDampedSpringAnimation`, whose `update(dt,
  animation_length)` pulls `position` towards zero and returns whether it is
  still moving.
- `nvgrid.anchors`: `WindowAnchor` (with `modified_top_left`), `SortOrder`
  (ordered by z-index, then composition order) and `AnchorInfo`.
- `nvgrid.grid`: `CharacterGrid` and `default_cell()`. A scroll of the whole
  grid with no column movement only rotates the rows; other scrolls copy
  cells within the region.
- `nvgrid.window`: `Window`, `WindowType`, `GridLineCell`, `LineFragment`
  and `WindowDrawCommand`. A window applies grid line updates (splitting text
  into grapheme clusters) and emits `DRAW_LINE` commands made of line
  fragments that share a style.
- `nvgrid.editor`: `Editor`, `RedrawEvent`, `DrawCommand` and
  `WindowCommand`. `Editor(send_event, cursor_hack=True,
  transparent_frame=False)` applies events with `handle_redraw_event`;
  `send_event` receives `WindowCommand` objects and batches (lists) of draw
  commands.

## Examples

```python
from nvgrid.grid import CharacterGrid

grid = CharacterGrid((4, 4))
for y, line in enumerate(["abcd", "efgh", "ijkl", "mnop"]):
    for x, ch in enumerate(line):
        grid.set_cell(x, y, (ch, None))

grid.scroll_region(0, 4, 0, 4, 2, 0)   # whole-grid scroll by two rows
assert grid.get_cell(0, 0) == ("i", None)
```

```python
from nvgrid.editor import DrawCommand, Editor, RedrawEvent
from nvgrid.window import GridLineCell

sent = []
editor = Editor(sent.append)
editor.handle_redraw_event(RedrawEvent(RedrawEvent.Kind.RESIZE, grid=1, width=10, height=2))
editor.handle_redraw_event(
    RedrawEvent(RedrawEvent.Kind.GRID_LINE, grid=1, row=0, column_start=0,
                cells=[GridLineCell("hi")])
)
editor.handle_redraw_event(RedrawEvent(RedrawEvent.Kind.FLUSH))

batch = sent[-1]
assert batch[-1].kind is DrawCommand.Kind.UPDATE_CURSOR
```

## What it does not do

The package does not start or talk to a Neovim process, decode its
messages, open a window, or draw anything. It has no command-line program.
Redraw events have to be built by the caller, and the commands it emits are
plain objects for the caller to render.