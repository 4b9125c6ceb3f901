"""Window frame decoration options."""

from __future__ import annotations

import enum
import sys
from typing import Optional


class Frame(enum.Enum):
    FULL = "full"
    TRANSPARENT = "transparent"
    BUTTONLESS = "buttonless"
    NONE = "none"

    def __str__(self) -> str:
        return self.value


def _is_macos(platform: Optional[str]) -> bool:
    return (platform if platform is not None else sys.platform) == "darwin"


def available_frames(platform: Optional[str] = None) -> list[Frame]:
    """Frames usable on the given platform (defaults to the running one)."""
    if _is_macos(platform):
        return [Frame.FULL, Frame.TRANSPARENT, Frame.BUTTONLESS, Frame.NONE]
    return [Frame.FULL, Frame.NONE]


def parse_frame(value: str, platform: Optional[str] = None) -> Frame:
    """Parse a kebab-case frame name; raise ValueError if unknown or unavailable."""
    for frame in available_frames(platform):
        if frame.value == value:
            return frame
    choices = ", ".join(frame.value for frame in available_frames(platform))
    raise ValueError(f"invalid frame {value!r}; possible values: {choices}")