"""Highlight styles and colours used by grid cells."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field
from typing import Optional


@dataclass(frozen=True)
class Color:
    """An RGBA colour with float channels in the 0..1 range."""

    r: float
    g: float
    b: float
    a: float = 1.0


@dataclass
class Colors:
    """Foreground, background and special colours; any of them may be unset."""

    foreground: Optional[Color] = None
    background: Optional[Color] = None
    special: Optional[Color] = None


class UnderlineStyle(enum.Enum):
    UNDERLINE = "underline"
    UNDER_DOUBLE = "underdouble"
    UNDER_DASH = "underdash"
    UNDER_DOT = "underdot"
    UNDER_CURL = "undercurl"


def _required(color: Optional[Color], name: str) -> Color:
    if color is None:
        raise ValueError(f"default colours have no {name} colour")
    return color


@dataclass
class Style:
    """A highlight definition: colours plus text attributes."""

    colors: Colors = field(default_factory=Colors)
    reverse: bool = False
    italic: bool = False
    bold: bool = False
    strikethrough: bool = False
    blend: int = 0
    underline: Optional[UnderlineStyle] = None

    def foreground(self, default_colors: Colors) -> Color:
        """The effective foreground colour, honouring reverse video."""
        if self.reverse:
            if self.colors.background is not None:
                return self.colors.background
            return _required(default_colors.background, "background")
        if self.colors.foreground is not None:
            return self.colors.foreground
        return _required(default_colors.foreground, "foreground")

    def background(self, default_colors: Colors) -> Color:
        """The effective background colour, honouring reverse video."""
        if self.reverse:
            if self.colors.foreground is not None:
                return self.colors.foreground
            return _required(default_colors.foreground, "foreground")
        if self.colors.background is not None:
            return self.colors.background
        return _required(default_colors.background, "background")

    def special(self, default_colors: Colors) -> Color:
        """The special colour, falling back to the effective foreground."""
        if self.colors.special is not None:
            return self.colors.special
        return self.foreground(default_colors)