"""The editor: turns Neovim redraw events into draw and window commands."""

from __future__ import annotations

import copy
import dataclasses
import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Callable, Optional

from nvgrid.anchors import AnchorInfo, SortOrder, WindowAnchor
from nvgrid.batcher import DrawCommandBatcher
from nvgrid.cursor import Cursor, CursorMode
from nvgrid.style import Color, Colors, Style
from nvgrid.window import Window, WindowDrawCommand, WindowType

log = logging.getLogger(__name__)

MODE_CMDLINE = 4
MSG_ZINDEX = 200  # The z-index Neovim gives to message windows.
DEFAULT_TITLE = "Neovide"

EventSender = Callable[[Any], Any]


@dataclass
class DrawCommand:
    """A command for the renderer that is not tied to a single window."""

    class Kind(enum.Enum):
        MODE_CHANGED = "mode_changed"
        DEFAULT_STYLE_CHANGED = "default_style_changed"
        UPDATE_CURSOR = "update_cursor"
        CLOSE_WINDOW = "close_window"
        FONT_CHANGED = "font_changed"
        LINE_SPACE_CHANGED = "line_space_changed"
        UI_READY = "ui_ready"

    kind: "DrawCommand.Kind"
    value: Any = None


@dataclass
class WindowCommand:
    """A command for the native window rather than for the renderer."""

    class Kind(enum.Enum):
        TITLE_CHANGED = "title_changed"
        SET_MOUSE_ENABLED = "set_mouse_enabled"
        LIST_AVAILABLE_FONTS = "list_available_fonts"
        MINIMIZE = "minimize"
        THEME_CHANGED = "theme_changed"

    kind: "WindowCommand.Kind"
    value: Any = None


@dataclass(init=False)
class RedrawEvent:
    """A redraw event from Neovim: a kind and its named fields."""

    class Kind(enum.Enum):
        SET_TITLE = "set_title"
        MODE_INFO_SET = "mode_info_set"
        OPTION_SET = "option_set"
        MODE_CHANGE = "mode_change"
        MOUSE_ON = "mouse_on"
        MOUSE_OFF = "mouse_off"
        BUSY_START = "busy_start"
        BUSY_STOP = "busy_stop"
        FLUSH = "flush"
        DEFAULT_COLORS_SET = "default_colors_set"
        HIGHLIGHT_ATTRIBUTES_DEFINE = "hl_attr_define"
        CURSOR_GOTO = "grid_cursor_goto"
        RESIZE = "grid_resize"
        GRID_LINE = "grid_line"
        CLEAR = "grid_clear"
        DESTROY = "grid_destroy"
        SCROLL = "grid_scroll"
        WINDOW_POSITION = "win_pos"
        WINDOW_FLOAT_POSITION = "win_float_pos"
        WINDOW_HIDE = "win_hide"
        WINDOW_CLOSE = "win_close"
        MESSAGE_SET_POSITION = "msg_set_pos"
        WINDOW_VIEWPORT = "win_viewport"
        WINDOW_VIEWPORT_MARGINS = "win_viewport_margins"
        SUSPEND = "suspend"
        NEOVIDE_SET_REDRAW = "neovide_set_redraw"

    kind: "RedrawEvent.Kind"
    fields: dict[str, Any] = field(default_factory=dict)

    def __init__(self, kind: "RedrawEvent.Kind", **fields: Any) -> None:
        self.kind = kind
        self.fields = fields

    def get(self, name: str, default: Any = None) -> Any:
        return self.fields.get(name, default)


def _is_light_color(color: Color) -> bool:
    return 0.2126 * color.r + 0.7152 * color.g + 0.0722 * color.b > 0.5


def _theme_for_background(background: Optional[Color]) -> Optional[str]:
    if background is None:
        return None
    return "light" if _is_light_color(background) else "dark"


class Editor:
    """Holds the window grids and cursor, and emits commands for each redraw event.

    ``send_event`` receives :class:`WindowCommand` objects and batches of draw
    commands (lists).
    """

    def __init__(
        self,
        send_event: EventSender,
        cursor_hack: bool = True,
        transparent_frame: bool = False,
    ) -> None:
        self.windows: dict[int, Window] = {}
        self.cursor = Cursor()
        self.defined_styles: dict[int, Style] = {}
        self.mode_list: list[CursorMode] = []
        self.draw_command_batcher = DrawCommandBatcher()
        self.current_mode_index: Optional[int] = None
        self.ui_ready = False
        self.cursor_hack = cursor_hack
        self.transparent_frame = transparent_frame
        self._send_event = send_event
        self._composition_order = 0

    def _queue(self, command: Any) -> None:
        self.draw_command_batcher.queue(command)

    def _window_command(self, kind: WindowCommand.Kind, value: Any = None) -> None:
        self._send_event(WindowCommand(kind, value))

    def handle_redraw_event(self, event: RedrawEvent) -> None:
        """Apply one redraw event."""
        kind = RedrawEvent.Kind
        k = event.kind
        if k is kind.SET_TITLE:
            title = event.get("title") or DEFAULT_TITLE
            self._window_command(WindowCommand.Kind.TITLE_CHANGED, title)
        elif k is kind.MODE_INFO_SET:
            self.mode_list = list(event.get("cursor_modes", []))
            index = self.current_mode_index
            if index is not None and 0 <= index < len(self.mode_list):
                self.cursor.change_mode(self.mode_list[index], self.defined_styles)
        elif k is kind.OPTION_SET:
            self._set_option(event.get("name"), event.get("value"))
        elif k is kind.MODE_CHANGE:
            mode_index = event.get("mode_index")
            if mode_index is not None and 0 <= mode_index < len(self.mode_list):
                self.cursor.change_mode(self.mode_list[mode_index], self.defined_styles)
                self.current_mode_index = mode_index
            else:
                self.current_mode_index = None
            self._queue(DrawCommand(DrawCommand.Kind.MODE_CHANGED, event.get("mode")))
        elif k is kind.MOUSE_ON:
            self._window_command(WindowCommand.Kind.SET_MOUSE_ENABLED, True)
        elif k is kind.MOUSE_OFF:
            self._window_command(WindowCommand.Kind.SET_MOUSE_ENABLED, False)
        elif k is kind.BUSY_START:
            log.debug("Cursor off")
            self.cursor.enabled = False
        elif k is kind.BUSY_STOP:
            log.debug("Cursor on")
            self.cursor.enabled = True
        elif k is kind.FLUSH:
            log.debug("Image flushed")
            self._send_cursor_info()
            self.draw_command_batcher.send_batch(self._send_event)
        elif k is kind.DEFAULT_COLORS_SET:
            colors: Colors = event.get("colors", Colors())
            if self.transparent_frame:
                self._window_command(
                    WindowCommand.Kind.THEME_CHANGED,
                    _theme_for_background(colors.background),
                )
            self._queue(DrawCommand(DrawCommand.Kind.DEFAULT_STYLE_CHANGED, Style(colors)))
            self._redraw_screen()
            self.draw_command_batcher.send_batch(self._send_event)
        elif k is kind.HIGHLIGHT_ATTRIBUTES_DEFINE:
            self.defined_styles[event.get("id")] = event.get("style")
        elif k is kind.CURSOR_GOTO:
            self._set_cursor_position(event.get("grid"), event.get("column"), event.get("row"))
        elif k is kind.RESIZE:
            self._resize_window(event.get("grid"), event.get("width"), event.get("height"))
        elif k is kind.GRID_LINE:
            self._set_ui_ready()
            window = self.windows.get(event.get("grid"))
            if window is not None:
                window.draw_grid_line(
                    self.draw_command_batcher,
                    event.get("row"),
                    event.get("column_start"),
                    event.get("cells", []),
                    self.defined_styles,
                )
        elif k is kind.CLEAR:
            window = self.windows.get(event.get("grid"))
            if window is not None:
                window.clear(self.draw_command_batcher)
        elif k in (kind.DESTROY, kind.WINDOW_CLOSE):
            self._close_window(event.get("grid"))
        elif k is kind.SCROLL:
            window = self.windows.get(event.get("grid"))
            if window is not None:
                window.scroll_region(
                    self.draw_command_batcher,
                    event.get("top"),
                    event.get("bottom"),
                    event.get("left"),
                    event.get("right"),
                    event.get("rows"),
                    event.get("columns"),
                )
        elif k is kind.WINDOW_POSITION:
            self._set_window_position(
                event.get("grid"),
                event.get("start_column"),
                event.get("start_row"),
                event.get("width"),
                event.get("height"),
            )
        elif k is kind.WINDOW_FLOAT_POSITION:
            self._handle_float_position(event)
        elif k is kind.WINDOW_HIDE:
            window = self.windows.get(event.get("grid"))
            if window is not None:
                window.anchor_info = None
                window.hide(self.draw_command_batcher)
        elif k is kind.MESSAGE_SET_POSITION:
            self._set_message_position(
                event.get("grid"),
                event.get("row"),
                bool(event.get("scrolled", False)),
                event.get("z_index"),
                event.get("comp_index"),
            )
        elif k is kind.WINDOW_VIEWPORT:
            scroll_delta = event.get("scroll_delta")
            # Viewport events without a scroll delta carry nothing to draw.
            if scroll_delta is not None:
                self._set_ui_ready()
                self._queue(
                    WindowDrawCommand(
                        event.get("grid"),
                        WindowDrawCommand.Kind.VIEWPORT,
                        {"scroll_delta": scroll_delta},
                    )
                )
        elif k is kind.WINDOW_VIEWPORT_MARGINS:
            self._queue(
                WindowDrawCommand(
                    event.get("grid"),
                    WindowDrawCommand.Kind.VIEWPORT_MARGINS,
                    {
                        "top": event.get("top"),
                        "bottom": event.get("bottom"),
                        "left": event.get("left"),
                        "right": event.get("right"),
                    },
                )
            )
        elif k is kind.SUSPEND:
            # A suspend request is interpreted as a minimize request.
            self._window_command(WindowCommand.Kind.MINIMIZE)
        elif k is kind.NEOVIDE_SET_REDRAW:
            self.draw_command_batcher.set_enabled(bool(event.get("enable")), self._send_event)

    def _handle_float_position(self, event: RedrawEvent) -> None:
        comp_index = event.get("comp_index")
        if comp_index is not None:
            anchor_type = WindowAnchor.ABSOLUTE
        else:
            self._composition_order += 1
            anchor_type = event.get("anchor", WindowAnchor.NORTH_WEST)
        sort_order = SortOrder(
            event.get("z_index", 0),
            comp_index if comp_index is not None else self._composition_order,
        )
        anchor = AnchorInfo(
            anchor_grid_id=event.get("anchor_grid"),
            anchor_type=anchor_type,
            anchor_left=float(event.get("anchor_column", 0.0)),
            anchor_top=float(event.get("anchor_row", 0.0)),
            sort_order=sort_order,
        )
        self._set_window_float_position(
            event.get("grid"), anchor, event.get("screen_col"), event.get("screen_row")
        )

    def _close_window(self, grid: int) -> None:
        window = self.windows.pop(grid, None)
        if window is not None:
            window.close(self.draw_command_batcher)
            self._queue(DrawCommand(DrawCommand.Kind.CLOSE_WINDOW, grid))

    def _resize_window(self, grid: int, width: int, height: int) -> None:
        window = self.windows.get(grid)
        if window is not None:
            window.resize(self.draw_command_batcher, (width, height))
            if window.anchor_info is not None:
                self._set_window_float_position(grid, copy.deepcopy(window.anchor_info), None, None)
        else:
            self.windows[grid] = Window(
                grid,
                WindowType.editor(),
                None,
                (0.0, 0.0),
                (width, height),
                self.draw_command_batcher,
            )

    def _set_window_position(
        self, grid: int, start_left: int, start_top: int, width: int, height: int
    ) -> None:
        position = (float(start_left), float(start_top))
        window = self.windows.get(grid)
        if window is not None:
            window.position(self.draw_command_batcher, None, (width, height), position)
            window.show(self.draw_command_batcher)
        else:
            self.windows[grid] = Window(
                grid,
                WindowType.editor(),
                None,
                position,
                (width, height),
                self.draw_command_batcher,
            )

    def _set_window_float_position(
        self,
        grid: int,
        anchor: AnchorInfo,
        screen_col: Optional[int],
        screen_row: Optional[int],
    ) -> None:
        if anchor.anchor_grid_id == grid:
            log.warning(
                "NeoVim requested a window to float relative to itself. This is not supported."
            )
            return

        parent_position = self._get_window_top_left(anchor.anchor_grid_id)
        window = self.windows.get(grid)
        if window is None:
            log.error("Attempted to float window that does not exist.")
            return

        width, height = window.width, window.height
        if anchor.anchor_type is WindowAnchor.ABSOLUTE:
            # The screen position is missing when the window was only resized.
            if screen_col is not None and screen_row is not None:
                left, top = float(screen_col), float(screen_row)
            else:
                left, top = window.grid_position
            sort_order = anchor.sort_order
        else:
            left, top = anchor.anchor_type.modified_top_left(
                anchor.anchor_left, anchor.anchor_top, width, height
            )
            if parent_position is not None:
                left += parent_position[0]
                top += parent_position[1]
            # Keep the old sort order unless this is the first placement or the z-index changed.
            old = window.anchor_info
            if old is not None and old.sort_order.z_index == anchor.sort_order.z_index:
                sort_order = old.sort_order
            else:
                sort_order = anchor.sort_order

        anchor = dataclasses.replace(anchor, sort_order=dataclasses.replace(sort_order))
        window.position(self.draw_command_batcher, anchor, (width, height), (left, top))
        window.show(self.draw_command_batcher)

    def _set_message_position(
        self,
        grid: int,
        grid_top: int,
        scrolled: bool,
        z_index: Optional[int],
        comp_index: Optional[int],
    ) -> None:
        z_index = MSG_ZINDEX if z_index is None else z_index
        parent = self.windows.get(1)
        parent_width = parent.width if parent is not None else 1

        anchor_info = AnchorInfo(
            anchor_grid_id=1,
            anchor_type=WindowAnchor.NORTH_WEST,
            anchor_left=0.0,
            anchor_top=float(grid_top),
            sort_order=SortOrder(
                z_index, comp_index if comp_index is not None else self._composition_order
            ),
        )
        window_type = WindowType.for_message(scrolled)
        position = (0.0, float(grid_top))

        window = self.windows.get(grid)
        if window is not None:
            window.window_type = window_type
            window.position(
                self.draw_command_batcher, anchor_info, (parent_width, window.height), position
            )
            window.show(self.draw_command_batcher)
        else:
            self.windows[grid] = Window(
                grid,
                window_type,
                anchor_info,
                position,
                (parent_width, 1),
                self.draw_command_batcher,
            )

    def _get_window_top_left(self, grid: int) -> Optional[tuple[float, float]]:
        window = self.windows.get(grid)
        if window is None:
            return None
        anchor_info = window.anchor_info
        if anchor_info is None or anchor_info.anchor_type is WindowAnchor.ABSOLUTE:
            return window.grid_position
        parent = self._get_window_top_left(anchor_info.anchor_grid_id)
        if parent is None:
            return None
        left, top = anchor_info.anchor_type.modified_top_left(
            anchor_info.anchor_left, anchor_info.anchor_top, window.width, window.height
        )
        return parent[0] + left, parent[1] + top

    def _set_cursor_position(self, grid: int, grid_left: int, grid_top: int) -> None:
        window = self.windows.get(grid)
        if window is not None and window.anchor_info is not None:
            # Neovim raises a window to the top of its layer whenever the cursor enters it.
            self._composition_order += 1
            sort_order = window.anchor_info.sort_order
            sort_order.composition_order = self._composition_order
            self._queue(
                WindowDrawCommand(
                    grid,
                    WindowDrawCommand.Kind.SORT_ORDER,
                    {"sort_order": dataclasses.replace(sort_order)},
                )
            )

        if self.cursor_hack and window is not None and window.window_type.is_message:
            # Typing ":" puts the cursor right after it, at column 1; other jumps are noise.
            intentional = grid_left == 1
            already_there = self.cursor.parent_window_id == grid
            using_cmdline = self.current_mode_index == MODE_CMDLINE
            if not (intentional or already_there or using_cmdline):
                log.debug(
                    "Cursor unexpectedly sent to message buffer %s (%s, %s)",
                    grid,
                    grid_left,
                    grid_top,
                )
                return

        self.cursor.parent_window_id = grid
        self.cursor.grid_position = (grid_left, grid_top)

    def _send_cursor_info(self) -> None:
        grid_left, grid_top = self.cursor.grid_position
        window = self.windows.get(self.cursor.parent_window_id)
        if window is not None:
            character, style, double_width = window.get_cursor_grid_cell(grid_left, grid_top)
            self.cursor.grid_cell = (character, style)
            self.cursor.double_width = double_width
        else:
            self.cursor.double_width = False
            self.cursor.grid_cell = (" ", None)
        self._queue(DrawCommand(DrawCommand.Kind.UPDATE_CURSOR, copy.copy(self.cursor)))

    def _set_option(self, name: Optional[str], value: Any) -> None:
        log.debug("Option set %s=%r", name, value)
        if name == "guifont":
            if value == "*":
                self._window_command(WindowCommand.Kind.LIST_AVAILABLE_FONTS)
            else:
                self._queue(DrawCommand(DrawCommand.Kind.FONT_CHANGED, value))
                self._redraw_screen()
        elif name == "linespace":
            self._queue(DrawCommand(DrawCommand.Kind.LINE_SPACE_CHANGED, float(value)))
            self._redraw_screen()

    def _redraw_screen(self) -> None:
        for window in self.windows.values():
            window.redraw(self.draw_command_batcher)

    def _set_ui_ready(self) -> None:
        if not self.ui_ready:
            self.ui_ready = True
            self._queue(DrawCommand(DrawCommand.Kind.UI_READY))