from __future__ import annotations
from enum import Enum
from typing import Any, Dict, Tuple
import pygame

from uikit.ui.style import ScrollbarStyle


class Orientation(Enum):
    VERTICAL = "vertical"
    HORIZONTAL = "horizontal"

    @classmethod
    def parse(cls, value: "Orientation | str") -> "Orientation":
        if isinstance(value, Orientation):
            return value
        try:
            return cls(str(value).lower())
        except ValueError:
            raise ValueError(f"orientation must be 'vertical' or 'horizontal', got {value!r}") from None

    @property
    def vertical(self) -> bool:
        return self is Orientation.VERTICAL

    # --- container access ---------------------------------------------------
    def metrics(self, c: Any) -> Tuple[float, float, float]:
        """(scroll position, content size, client size) along this axis."""
        if self.vertical:
            return c.scroll_top, c.scroll_height, c.client_height
        return c.scroll_left, c.scroll_width, c.client_width

    def set_position(self, c: Any, value: float) -> None:
        if self.vertical:
            c.scroll_top = value
        else:
            c.scroll_left = value

    def scroll_by_kwargs(self, delta: float, behavior: str = "smooth") -> Dict[str, Any]:
        key = "top" if self.vertical else "left"
        return {key: delta, "behavior": behavior}

    # --- pointer ------------------------------------------------------------
    def along(self, pos: Tuple[int, int]) -> int:
        return pos[1] if self.vertical else pos[0]

    # --- layout -------------------------------------------------------------
    def track_rect(self, host: pygame.Rect, sb: ScrollbarStyle) -> pygame.Rect:
        """Strip along the right edge (vertical) or bottom edge (horizontal) of the container."""
        if self.vertical:
            return pygame.Rect(host.right - sb.track_thickness, host.y, sb.track_thickness, host.h)
        return pygame.Rect(host.x, host.bottom - sb.track_thickness, host.w, sb.track_thickness)

    def thumb_rect(self, track: pygame.Rect, offset: float, size: float, sb: ScrollbarStyle) -> pygame.Rect:
        o, s = int(round(offset)), max(1, int(round(size)))
        if self.vertical:
            return pygame.Rect(track.right - sb.inset - sb.thickness, track.y + o, sb.thickness, s)
        return pygame.Rect(track.x + o, track.bottom - sb.inset - sb.thickness, s, sb.thickness)

    def track_start(self, track: pygame.Rect) -> int:
        return track.y if self.vertical else track.x
