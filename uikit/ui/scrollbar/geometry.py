"""
Thumb geometry for the overlay scrollbar.

Everything here is axis-neutral: `pos` is scrollTop or scrollLeft, `size` is
scrollHeight or scrollWidth, `client` is clientHeight or clientWidth.
"""
from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from typing import Optional

SCROLLBAR_MARGIN = 5
MIN_THUMB_SIZE = 20


@dataclass(frozen=True)
class ThumbGeometry:
    size: float = 0.0      # thumb length along the axis
    offset: float = 0.0    # distance from the track start (includes the margin)
    visible: bool = False

    def end(self) -> float:
        return self.offset + self.size


HIDDEN = ThumbGeometry()


def track_length(client: float, margin: float = SCROLLBAR_MARGIN) -> float:
    return client - 2 * margin


def thumb_size(size: float, client: float,
               margin: float = SCROLLBAR_MARGIN, min_thumb: float = MIN_THUMB_SIZE) -> float:
    """Proportional to client/content, floored so it stays grabbable. Caller guarantees size > 0."""
    return max((client / size) * track_length(client, margin), min_thumb)


@lru_cache(maxsize=512)
def compute_thumb(pos: float, size: float, client: float,
                  margin: float = SCROLLBAR_MARGIN, min_thumb: float = MIN_THUMB_SIZE) -> ThumbGeometry:
    if size <= client:
        return HIDDEN
    track = track_length(client, margin)
    th = thumb_size(size, client, margin, min_thumb)
    fraction = max(0.0, min(1.0, pos / (size - client)))
    travel = max(0.0, track - th)
    return ThumbGeometry(size=th, offset=margin + fraction * travel, visible=True)


def drag_scroll_position(start_pos: float, delta: float, size: float, client: float,
                         margin: float = SCROLLBAR_MARGIN,
                         min_thumb: float = MIN_THUMB_SIZE) -> Optional[float]:
    """
    New scroll offset after the thumb moved `delta` pixels from where the drag began.
    None means the move should be ignored (no overflow, or the thumb fills the track).
    """
    if size <= client:
        return None
    travel = track_length(client, margin) - thumb_size(size, client, margin, min_thumb)
    if travel <= 0:
        return None
    scrollable = size - client
    target = start_pos + delta * (scrollable / travel)
    return max(0.0, min(target, scrollable))


def page_direction(click: float, geom: ThumbGeometry) -> int:
    """-1 to page back when the click is before the thumb, +1 otherwise."""
    return -1 if click < geom.offset else 1
