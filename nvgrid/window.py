"""Editor windows: a character grid plus the draw commands that mirror it."""

from __future__ import annotations

import enum
import logging
from dataclasses import dataclass, field
from typing import Any, Iterable, Mapping, Optional

import regex

from nvgrid.anchors import AnchorInfo
from nvgrid.batcher import DrawCommandBatcher
from nvgrid.grid import CharacterGrid, GridCell
from nvgrid.style import Style

log = logging.getLogger(__name__)

_GRAPHEME = regex.compile(r"\X")


def _is_box_char(text: str) -> bool:
    """True for a single box drawing or block element character."""
    return len(text) == 1 and 0x2500 <= ord(text) <= 0x259F


@dataclass(frozen=True)
class WindowType:
    """Either an ordinary editor window or a message window."""

    is_message: bool = False
    scrolled: bool = False

    @classmethod
    def editor(cls) -> "WindowType":
        return cls(is_message=False, scrolled=False)

    @classmethod
    def for_message(cls, scrolled: bool) -> "WindowType":
        return cls(is_message=True, scrolled=scrolled)


@dataclass
class GridLineCell:
    """One cell entry of a grid_line event."""

    text: str
    highlight_id: Optional[int] = None
    repeat: Optional[int] = None


@dataclass
class LineFragment:
    """A run of cells on one row that share a style."""

    text: str
    window_left: int
    width: int
    style: Optional[Style]


@dataclass
class WindowDrawCommand:
    """A draw command addressed to one window's rendered surface."""

    class Kind(enum.Enum):
        POSITION = "position"
        DRAW_LINE = "draw_line"
        SCROLL = "scroll"
        CLEAR = "clear"
        SHOW = "show"
        HIDE = "hide"
        CLOSE = "close"
        VIEWPORT = "viewport"
        VIEWPORT_MARGINS = "viewport_margins"
        SORT_ORDER = "sort_order"

    grid_id: int
    kind: "WindowDrawCommand.Kind"
    payload: dict[str, Any] = field(default_factory=dict)


class Window:
    """A Neovim grid shown as a window, emitting draw commands as it changes."""

    def __init__(
        self,
        grid_id: int,
        window_type: WindowType,
        anchor_info: Optional[AnchorInfo],
        grid_position: tuple[float, float],
        grid_size: tuple[int, int],
        batcher: DrawCommandBatcher,
    ) -> None:
        self.grid_id = grid_id
        self._grid = CharacterGrid((grid_size[0], grid_size[1]))
        self.window_type = window_type
        self.anchor_info = anchor_info
        self._grid_position = grid_position
        self._send_updated_position(batcher)

    @property
    def width(self) -> int:
        return self._grid.width

    @property
    def height(self) -> int:
        return self._grid.height

    @property
    def grid_position(self) -> tuple[float, float]:
        return self._grid_position

    def _send(
        self, batcher: DrawCommandBatcher, kind: WindowDrawCommand.Kind, **payload: Any
    ) -> None:
        batcher.queue(WindowDrawCommand(self.grid_id, kind, payload))

    def _send_updated_position(self, batcher: DrawCommandBatcher) -> None:
        self._send(
            batcher,
            WindowDrawCommand.Kind.POSITION,
            grid_position=self._grid_position,
            grid_size=(self._grid.width, self._grid.height),
            anchor_info=self.anchor_info,
            window_type=self.window_type,
        )

    def get_cursor_grid_cell(
        self, window_left: int, window_top: int
    ) -> tuple[str, Optional[Style], bool]:
        """The text and style under the cursor, and whether the cell is double width."""
        try:
            cell = self._grid.get_cell(window_left, window_top)
            next_cell = self._grid.get_cell(window_left + 1, window_top)
        except IndexError:
            return (" ", None, False)
        character, style = cell if cell is not None else (" ", None)
        double_width = next_cell is not None and next_cell[0] == ""
        return (character, style, double_width)

    def position(
        self,
        batcher: DrawCommandBatcher,
        anchor_info: Optional[AnchorInfo],
        grid_size: tuple[int, int],
        grid_position: tuple[float, float],
    ) -> None:
        """Resize, re-anchor and move the window."""
        self._grid.resize((grid_size[0], grid_size[1]))
        self.anchor_info = anchor_info
        self._grid_position = grid_position
        self._send_updated_position(batcher)

    def resize(self, batcher: DrawCommandBatcher, new_size: tuple[int, int]) -> None:
        """Change the grid size, keeping the cells that still fit."""
        self._grid.resize((new_size[0], new_size[1]))
        self._send_updated_position(batcher)

    def _put(self, column: int, row: int, cell: GridCell) -> None:
        if 0 <= column < self._grid.width:
            self._grid.set_cell(column, row, cell)

    def _apply_cells(
        self,
        row: int,
        column: int,
        cells: Iterable[GridLineCell],
        defined_styles: Mapping[int, Style],
    ) -> None:
        previous_style: Optional[Style] = None
        for cell in cells:
            if cell.highlight_id == 0:
                style = None
            elif cell.highlight_id is not None:
                style = defined_styles.get(cell.highlight_id)
            else:
                style = previous_style

            text = cell.text
            if cell.repeat is not None:
                # A repeat of zero marks trailing emptiness for terminal UIs only.
                if cell.repeat == 0:
                    continue
                text = text * cell.repeat

            if not text:
                self._put(column, row, (text, style))
                column += 1
            else:
                for grapheme in _GRAPHEME.findall(text):
                    self._put(column, row, (grapheme, style))
                    column += 1

            previous_style = style

    def _build_line_fragment(
        self, row: list[GridCell], start: int
    ) -> tuple[int, LineFragment]:
        style = row[start][1]
        text = ""
        width = 0
        last_box_char: Optional[str] = None

        for character, cell_style in row[start : self._grid.width]:
            if style != cell_style:
                break
            # Runs of one repeated box drawing character get a fragment of their own.
            if _is_box_char(character):
                if not text:
                    last_box_char = character
                if (text and last_box_char is None) or last_box_char != character:
                    break
            elif last_box_char is not None:
                break

            width += 1
            # An empty cell follows a double width character: end the fragment here.
            if not character:
                break
            text += character

        return start + width, LineFragment(text, start, width, style)

    def _redraw_line(self, batcher: DrawCommandBatcher, row_index: int) -> None:
        row = self._grid.row(row_index)
        if row is None:
            raise IndexError(f"row {row_index} outside window of height {self._grid.height}")
        fragments = []
        start = 0
        while start < self._grid.width:
            start, fragment = self._build_line_fragment(row, start)
            fragments.append(fragment)
        self._send(
            batcher,
            WindowDrawCommand.Kind.DRAW_LINE,
            row=row_index,
            line_fragments=fragments,
        )

    def draw_grid_line(
        self,
        batcher: DrawCommandBatcher,
        row: int,
        column_start: int,
        cells: Iterable[GridLineCell],
        defined_styles: Mapping[int, Style],
    ) -> None:
        """Apply a grid_line event and redraw the row and its neighbours."""
        if not 0 <= row < self._grid.height:
            log.warning("Draw command out of bounds")
            return
        self._apply_cells(row, column_start, cells, defined_styles)

        # Neighbouring rows are redrawn too so that underlines are not clipped.
        if row < self._grid.height - 1:
            self._redraw_line(batcher, row + 1)
        self._redraw_line(batcher, row)
        if row > 0:
            self._redraw_line(batcher, row - 1)

    def scroll_region(
        self,
        batcher: DrawCommandBatcher,
        top: int,
        bottom: int,
        left: int,
        right: int,
        rows: int,
        cols: int,
    ) -> None:
        """Scroll a region of the grid and emit the matching draw commands."""
        is_pure_updown = self._grid.scroll_region(top, bottom, left, right, rows, cols)
        self._send(
            batcher,
            WindowDrawCommand.Kind.SCROLL,
            top=top,
            bottom=bottom,
            left=left,
            right=right,
            rows=rows,
            cols=cols,
        )
        # Pure up/down scrolls need no redraw; Neovim sends the new lines itself.
        if is_pure_updown:
            return
        if rows > 0:
            bottom -= rows
        else:
            top -= rows
        for row in range(top, bottom):
            self._redraw_line(batcher, row)

    def clear(self, batcher: DrawCommandBatcher) -> None:
        """Empty the grid."""
        self._grid.clear()
        self._send(batcher, WindowDrawCommand.Kind.CLEAR)

    def redraw(self, batcher: DrawCommandBatcher) -> None:
        """Clear the surface and redraw every row from the bottom up."""
        self._send(batcher, WindowDrawCommand.Kind.CLEAR)
        for row in reversed(range(self._grid.height)):
            self._redraw_line(batcher, row)

    def hide(self, batcher: DrawCommandBatcher) -> None:
        self._send(batcher, WindowDrawCommand.Kind.HIDE)

    def show(self, batcher: DrawCommandBatcher) -> None:
        self._send(batcher, WindowDrawCommand.Kind.SHOW)

    def close(self, batcher: DrawCommandBatcher) -> None:
        self._send(batcher, WindowDrawCommand.Kind.CLOSE)