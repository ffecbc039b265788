"""
Scrollable viewport over a list of items, for pygame.

Rows stack top-to-bottom (vertical) or cards run left-to-right (horizontal).
The container only knows item extents; painting an item is delegated to a
`render_item(surface, item, rect, hovered)` callback supplied by the scene.

It exposes the DOM-like surface the scrollbar overlay reads:
scroll_top/scroll_left, scroll_height/scroll_width, client_height/client_width,
scroll_by(), and subscribe("mutation" | "scroll", cb).
"""
from __future__ import annotations
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple
import logging

import pygame

from uikit.window import Subscription, WindowHost
from uikit.ui.anim import Animator, Tween
from uikit.ui.scroll_model import ScrollModel
from uikit.ui.style import Theme

logger = logging.getLogger(__name__)

RenderItem = Callable[[pygame.Surface, Any, pygame.Rect, bool], None]
ChangeListener = Callable[["ScrollContainer"], None]

BEHAVIORS = ("auto", "instant", "smooth")


class ScrollContainer:
    KINDS = ("mutation", "scroll")

    def __init__(
        self,
        rect: pygame.Rect,
        *,
        theme: Theme,
        animator: Animator,
        axis: str = "vertical",
        item_extent: Optional[int] = None,
        render_item: Optional[RenderItem] = None,
        window: Optional[WindowHost] = None,
        smooth_duration: float = 0.3,
        wheel_pixels: int = 40,
    ) -> None:
        if axis not in ("vertical", "horizontal"):
            raise ValueError(f"axis must be 'vertical' or 'horizontal', got {axis!r}")
        self.rect = rect.copy()
        self.theme = theme
        self.animator = animator
        self.axis = axis
        self.item_extent = int(item_extent or (theme.row_h if axis == "vertical" else theme.card_w))
        self.render_item = render_item
        self.window = window
        self.smooth_duration = smooth_duration
        self.wheel_pixels = wheel_pixels

        self.items: List[Any] = []
        self.hover_index: Optional[int] = None

        self._y = ScrollModel()
        self._x = ScrollModel()
        self._listeners: Dict[str, List[ChangeListener]] = {k: [] for k in self.KINDS}
        self._relayout()

    # ------------------------------------------------------------------ #
    # Metrics
    # ------------------------------------------------------------------ #
    @property
    def client_height(self) -> int: return self.rect.h
    @property
    def client_width(self) -> int: return self.rect.w
    @property
    def scroll_height(self) -> int: return int(self._y.content)
    @property
    def scroll_width(self) -> int: return int(self._x.content)

    @property
    def scroll_top(self) -> float: return self._y.offset
    @scroll_top.setter
    def scroll_top(self, v: float) -> None:
        self.animator.cancel(self, "_anim_top")
        self._move(self._y, v)

    @property
    def scroll_left(self) -> float: return self._x.offset
    @scroll_left.setter
    def scroll_left(self, v: float) -> None:
        self.animator.cancel(self, "_anim_left")
        self._move(self._x, v)

    # tween targets: same write path, but don't cancel the running tween
    @property
    def _anim_top(self) -> float: return self._y.offset
    @_anim_top.setter
    def _anim_top(self, v: float) -> None: self._move(self._y, v)

    @property
    def _anim_left(self) -> float: return self._x.offset
    @_anim_left.setter
    def _anim_left(self, v: float) -> None: self._move(self._x, v)

    def _content_extent(self) -> int:
        t, r, b, l = self.theme.padding
        n = len(self.items)
        body = n * self.item_extent + max(0, n - 1) * self.theme.gap
        return body + ((t + b) if self.axis == "vertical" else (l + r))

    def _relayout(self) -> None:
        if self.axis == "vertical":
            self._y.content, self._x.content = self._content_extent(), self.rect.w
        else:
            self._x.content, self._y.content = self._content_extent(), self.rect.h
        self._y.viewport, self._x.viewport = self.rect.h, self.rect.w
        # content shrank under the offset: browsers clamp and fire scroll
        moved = self._y.clamp() | self._x.clamp()
        self._emit("mutation")
        if moved:
            self._emit("scroll")

    # ------------------------------------------------------------------ #
    # Scrolling
    # ------------------------------------------------------------------ #
    def scroll_by(self, top: float = 0.0, left: float = 0.0, behavior: str = "auto") -> None:
        if behavior not in BEHAVIORS:
            raise ValueError(f"behavior must be one of {BEHAVIORS}, got {behavior!r}")
        for delta, model, attr in ((top, self._y, "_anim_top"), (left, self._x, "_anim_left")):
            if not delta:
                continue
            if behavior == "smooth" and self.smooth_duration > 0:
                running = self.animator.find(self, attr)
                base = running.end if running else model.offset
                target = model.clamped(base + delta)
                if target == model.offset and running is None:
                    continue
                self.animator.add(Tween(self, attr, model.offset, target, self.smooth_duration))
            else:
                self.animator.cancel(self, attr)
                self._move(model, model.offset + delta)

    def _move(self, model: ScrollModel, v: float) -> None:
        if model.set(v):
            self._emit("scroll")

    # ------------------------------------------------------------------ #
    # Content
    # ------------------------------------------------------------------ #
    def set_items(self, items: Iterable[Any]) -> None:
        self.items = list(items)
        logger.debug("%s container: %d items", self.axis, len(self.items))
        self._relayout()

    def append(self, item: Any) -> None:
        self.items.append(item)
        self._relayout()

    def remove(self, index: int = -1) -> Optional[Any]:
        if not self.items:
            return None
        item = self.items.pop(index)
        self._relayout()
        return item

    def set_rect(self, rect: pygame.Rect) -> None:
        if rect == self.rect:
            return
        self.rect = rect.copy()
        self._relayout()

    # ------------------------------------------------------------------ #
    # Observation
    # ------------------------------------------------------------------ #
    def subscribe(self, kind: str, cb: ChangeListener) -> Subscription:
        if kind not in self._listeners:
            raise ValueError(f"unknown change kind {kind!r}; expected one of {self.KINDS}")
        bucket = self._listeners[kind]
        bucket.append(cb)

        def _release() -> None:
            if cb in bucket:
                bucket.remove(cb)

        return Subscription(_release)

    def listener_count(self) -> int:
        return sum(len(v) for v in self._listeners.values())

    def _emit(self, kind: str) -> None:
        for cb in list(self._listeners[kind]):
            cb(self)

    # ------------------------------------------------------------------ #
    # Input + draw
    # ------------------------------------------------------------------ #
    def item_rect(self, index: int) -> pygame.Rect:
        t, r, b, l = self.theme.padding
        step = self.item_extent + self.theme.gap
        if self.axis == "vertical":
            y = self.rect.y + t + index * step - int(round(self.scroll_top))
            return pygame.Rect(self.rect.x + l, y, self.rect.w - (l + r), self.item_extent)
        x = self.rect.x + l + index * step - int(round(self.scroll_left))
        return pygame.Rect(x, self.rect.y + t, self.item_extent, self.rect.h - (t + b))

    def item_at(self, pos: Tuple[int, int]) -> Optional[int]:
        if not self.rect.collidepoint(pos):
            return None
        for i in range(len(self.items)):
            if self.item_rect(i).collidepoint(pos):
                return i
        return None

    def handle_event(self, e: pygame.event.Event) -> bool:
        if e.type == pygame.MOUSEMOTION:
            # no hover feedback while something (a thumb drag) owns the pointer
            selectable = self.window is None or self.window.user_select
            self.hover_index = self.item_at(e.pos) if selectable else None
            return False
        if e.type == pygame.MOUSEWHEEL and self.rect.collidepoint(pygame.mouse.get_pos()):
            px = self.wheel_pixels
            if self.axis == "vertical":
                self.scroll_by(top=-e.y * px, behavior="smooth")
            else:
                self.scroll_by(left=(e.x or -e.y) * px, behavior="smooth")
            return True
        return False

    def draw(self, surface: pygame.Surface) -> None:
        th = self.theme
        pygame.draw.rect(surface, th.box_bg, self.rect, border_radius=th.border_radius)
        prev_clip = surface.get_clip()
        surface.set_clip(self.rect.clip(prev_clip))
        if self.render_item is not None:
            for i, item in enumerate(self.items):
                r = self.item_rect(i)
                if r.colliderect(self.rect):
                    self.render_item(surface, item, r, i == self.hover_index)
        surface.set_clip(prev_clip)
        pygame.draw.rect(surface, th.box_border, self.rect, width=1, border_radius=th.border_radius)
