from dataclasses import dataclass, replace, field
from typing import Optional
import pygame

@dataclass
class ScrollbarStyle:
    margin: int = 5               # inset at both ends of the track
    min_thumb_size: int = 20
    track_thickness: int = 10     # hit area along the container edge
    thickness: int = 8            # drawn thumb
    inset: int = 2                # gap between thumb and container edge
    radius: int = 4
    track_rgba: Optional[tuple[int, int, int, int]] = None   # None = invisible track
    thumb_rgb: tuple[int, int, int] = (156, 163, 175)
    alpha_idle: int = 128
    alpha_hover: int = 191
    wheel_pixels: int = 40        # per wheel notch over the track
    def derive(self, **overrides): return replace(self, **overrides)

@dataclass
class StatusColors:
    upcoming: tuple[int, int, int] = (96, 165, 250)
    overdue: tuple[int, int, int] = (248, 113, 113)
    completed: tuple[int, int, int] = (74, 222, 128)
    deleted: tuple[int, int, int] = (120, 120, 128)

    def for_status(self, status: str) -> tuple[int, int, int]:
        return getattr(self, status, self.upcoming)

@dataclass
class Theme:
    font_path: str | None = None
    font_size: int = 20
    text_rgb: tuple[int, int, int] = (229, 231, 235)
    muted_rgb: tuple[int, int, int] = (156, 163, 175)
    box_bg: tuple[int, int, int] = (31, 41, 55)
    box_border: tuple[int, int, int] = (55, 65, 81)
    hover_rgba: tuple[int, int, int, int] = (255, 255, 255, 18)
    border_radius: int = 10
    padding: tuple[int, int, int, int] = (8, 16, 8, 12)  # t, r, b, l
    row_h: int = 44
    card_w: int = 160
    gap: int = 12
    statuses: StatusColors = field(default_factory=StatusColors)
    scrollbar: ScrollbarStyle = field(default_factory=ScrollbarStyle)

    def derive(self, **overrides) -> "Theme":
        """ Variant theme (e.g. per panel) without mutating the base. """
        return replace(self, **overrides)

def compute_centered_rect(surface: pygame.Surface, frac_w=0.7, frac_h=0.45) -> pygame.Rect:
    sw, sh = surface.get_size()
    w, h = int(sw * frac_w), int(sh * frac_h)
    return pygame.Rect((sw - w) // 2, (sh - h) // 2, w, h)
