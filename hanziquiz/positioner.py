from __future__ import annotations

"""Mapping between a drawing surface and canonical character space.

The drawing surface is y-down with its origin at the top-left. Character
space is the makemeahanzi box, y-up. One uniform scale keeps the aspect
ratio and the character box is centred inside the padded surface.
"""

from dataclasses import dataclass, field
from typing import Any, Dict

from .geometry.vectors import Point

# All makemeahanzi characters share this bounding box
CHARACTER_BOUNDS = (Point(0, -124), Point(1024, 900))
_FROM, _TO = CHARACTER_BOUNDS
PRE_SCALED_WIDTH = _TO.x - _FROM.x
PRE_SCALED_HEIGHT = _TO.y - _FROM.y


@dataclass(frozen=True)
class Positioner:
    width: float = 300
    height: float = 300
    padding: float = 0
    scale: float = field(init=False)
    x_offset: float = field(init=False)
    y_offset: float = field(init=False)

    def __post_init__(self) -> None:
        effective_width = self.width - 2 * self.padding
        effective_height = self.height - 2 * self.padding
        scale_x = effective_width / PRE_SCALED_WIDTH
        scale_y = effective_height / PRE_SCALED_HEIGHT
        scale = min(scale_x, scale_y)

        x_centering = self.padding + (effective_width - scale * PRE_SCALED_WIDTH) / 2
        y_centering = self.padding + (effective_height - scale * PRE_SCALED_HEIGHT) / 2

        object.__setattr__(self, "scale", scale)
        object.__setattr__(self, "x_offset", -1 * _FROM.x * scale + x_centering)
        object.__setattr__(self, "y_offset", -1 * _FROM.y * scale + y_centering)

    @classmethod
    def from_config(cls, cfg: Dict[str, Any]) -> "Positioner":
        pos = cfg.get("positioner", {})
        return cls(
            width=float(pos.get("width", 300)),
            height=float(pos.get("height", 300)),
            padding=float(pos.get("padding", 0)),
        )

    def convert_external_point(self, point: Point) -> Point:
        """Drawing-surface point to character space (flips the y axis)."""
        x = (point.x - self.x_offset) / self.scale
        y = (self.height - self.y_offset - point.y) / self.scale
        return Point(x, y)

    def convert_internal_point(self, point: Point) -> Point:
        """Character-space point back to drawing-surface coordinates."""
        x = point.x * self.scale + self.x_offset
        y = self.height - self.y_offset - point.y * self.scale
        return Point(x, y)
