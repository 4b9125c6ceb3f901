"""Cursor state and cursor modes."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Mapping, Optional

from nvgrid.style import Color, Colors, Style

GridCell = tuple[str, Optional[Style]]


class CursorShape(enum.Enum):
    BLOCK = "block"
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"

    @classmethod
    def from_type_name(cls, name: str) -> Optional["CursorShape"]:
        """Return the shape for a mode_info_set shape name, or None."""
        try:
            return cls(name)
        except ValueError:
            return None


@dataclass
class CursorMode:
    shape: Optional[CursorShape] = None
    style_id: Optional[int] = None
    cell_percentage: Optional[float] = None
    blinkwait: Optional[int] = None
    blinkon: Optional[int] = None
    blinkoff: Optional[int] = None


def _required(color: Optional[Color], name: str) -> Color:
    if color is None:
        raise ValueError(f"default colours have no {name} colour")
    return color


@dataclass
class Cursor:
    grid_position: tuple[int, int] = (0, 0)
    parent_window_id: int = 0
    shape: CursorShape = CursorShape.BLOCK
    cell_percentage: Optional[float] = None
    blinkwait: Optional[int] = None
    blinkon: Optional[int] = None
    blinkoff: Optional[int] = None
    style: Optional[Style] = None
    enabled: bool = True
    double_width: bool = False
    grid_cell: GridCell = field(default_factory=lambda: (" ", None))

    def foreground(self, default_colors: Colors) -> Color:
        """Cursor foreground: the style's foreground or the default background."""
        if self.style is not None and self.style.colors.foreground is not None:
            return self.style.colors.foreground
        return _required(default_colors.background, "background")

    def background(self, default_colors: Colors) -> Color:
        """Cursor background: the style's background or the default foreground."""
        if self.style is not None and self.style.colors.background is not None:
            return self.style.colors.background
        return _required(default_colors.foreground, "foreground")

    def alpha(self) -> int:
        """Opacity in 0..255 derived from the style's blend percentage."""
        if self.style is None:
            return 255
        value = int(255.0 * ((100 - self.style.blend) / 100.0))
        return max(0, min(255, value))

    def change_mode(self, cursor_mode: CursorMode, styles: Mapping[int, Style]) -> None:
        """Apply a cursor mode, keeping shape and style where the mode leaves them unset."""
        if cursor_mode.shape is not None:
            self.shape = cursor_mode.shape
        if cursor_mode.style_id is not None:
            self.style = styles.get(cursor_mode.style_id)
        self.cell_percentage = cursor_mode.cell_percentage
        self.blinkwait = cursor_mode.blinkwait
        self.blinkon = cursor_mode.blinkon
        self.blinkoff = cursor_mode.blinkoff