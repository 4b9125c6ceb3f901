"""A character grid with fast whole-screen vertical scrolling."""

from __future__ import annotations

from typing import Optional

from nvgrid.style import Style

GridCell = tuple[str, Optional[Style]]


def default_cell() -> GridCell:
    """The content of an empty cell: a single space without style."""
    return (" ", None)


class CharacterGrid:
    """A ``width`` x ``height`` grid of cells, addressed as (x, y).

    Rows are kept in a rotatable order so that pure up/down scrolls of the
    whole grid only rotate the rows instead of copying cells.
    """

    def __init__(self, size: tuple[int, int]) -> None:
        width, height = size
        self.width = width
        self.height = height
        self._lines: list[list[GridCell]] = [
            [default_cell()] * width for _ in range(height)
        ]

    def resize(self, size: tuple[int, int]) -> None:
        """Change the grid size, keeping the cells that still fit."""
        width, height = size
        del self._lines[height:]
        self._lines.extend([default_cell()] * width for _ in range(height - len(self._lines)))
        for line in self._lines:
            del line[width:]
            line.extend([default_cell()] * (width - len(line)))
        self.width = width
        self.height = height

    def clear(self) -> None:
        """Reset every cell to the default cell."""
        self.set_all_characters(default_cell())

    def _line(self, y: int) -> list[GridCell]:
        if not 0 <= y < self.height:
            raise IndexError(f"row {y} outside grid of height {self.height}")
        return self._lines[y]

    def get_cell(self, x: int, y: int) -> Optional[GridCell]:
        """The cell at (x, y), or None if x is outside the row.

        Raises IndexError if y is outside the grid.
        """
        line = self._line(y)
        if 0 <= x < len(line):
            return line[x]
        return None

    def set_cell(self, x: int, y: int, cell: GridCell) -> None:
        """Store ``cell`` at (x, y); raise IndexError if outside the grid."""
        line = self._line(y)
        if not 0 <= x < len(line):
            raise IndexError(f"column {x} outside grid of width {self.width}")
        line[x] = cell

    def set_all_characters(self, value: GridCell) -> None:
        """Set every cell of the grid to ``value``."""
        for line in self._lines:
            line[:] = [value] * len(line)

    def row(self, row_index: int) -> Optional[list[GridCell]]:
        """A copy of the cells of a row, or None if the row does not exist."""
        if 0 <= row_index < self.height:
            return list(self._lines[row_index])
        return None

    def _rotate(self, rows: int) -> None:
        if not self._lines:
            return
        shift = rows % len(self._lines)
        self._lines = self._lines[shift:] + self._lines[:shift]

    def scroll_region(
        self, top: int, bottom: int, left: int, right: int, rows: int, cols: int
    ) -> bool:
        """Scroll the region [top, bottom) x [left, right) by ``rows`` and ``cols``.

        Returns True if this was a pure up/down scroll of the whole grid, which
        only rotates the rows and keeps the scrolled-out content.
        """
        if top == 0 and bottom == self.height and left == 0 and right == self.width and cols == 0:
            self._rotate(rows)
            return True

        if rows > 0:
            y_range = range(top + rows, bottom)
        else:
            y_range = reversed(range(top, bottom + rows))

        for y in y_range:
            dest_y = y - rows
            if not 0 <= dest_y < self.height:
                continue
            if cols > 0:
                x_range = range(left + cols, right)
            else:
                x_range = reversed(range(left, right + cols))
            dest_line = self._lines[dest_y]
            for x in x_range:
                cell = self.get_cell(x, y)
                dest_x = x - cols
                if cell is not None and 0 <= dest_x < len(dest_line):
                    dest_line[dest_x] = cell

        return False