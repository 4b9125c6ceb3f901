"""Anchoring and stacking order of floating windows."""

from __future__ import annotations

import enum
from dataclasses import dataclass, field


class WindowAnchor(enum.Enum):
    NORTH_WEST = "NW"
    NORTH_EAST = "NE"
    SOUTH_WEST = "SW"
    SOUTH_EAST = "SE"
    ABSOLUTE = "absolute"

    def modified_top_left(
        self, grid_left: float, grid_top: float, width: int, height: int
    ) -> tuple[float, float]:
        """Top-left corner of a window of the given size anchored at (grid_left, grid_top)."""
        if self is WindowAnchor.NORTH_EAST:
            return grid_left - float(width), grid_top
        if self is WindowAnchor.SOUTH_WEST:
            return grid_left, grid_top - float(height)
        if self is WindowAnchor.SOUTH_EAST:
            return grid_left - float(width), grid_top - float(height)
        return grid_left, grid_top


@dataclass(order=True)
class SortOrder:
    """Stacking order: by z-index first, then by composition order."""

    z_index: int
    composition_order: int = 0


@dataclass
class AnchorInfo:
    anchor_grid_id: int
    anchor_type: WindowAnchor
    anchor_left: float
    anchor_top: float
    sort_order: SortOrder = field(default_factory=lambda: SortOrder(0, 0))