from __future__ import annotations
from contextlib import ExitStack
from typing import Any, Optional, Tuple
import logging

import pygame

from uikit.frames import FrameScheduler
from uikit.ref import Ref
from uikit.window import WindowHost
from uikit.ui.style import ScrollbarStyle
from uikit.ui.scrollbar.axis import Orientation
from uikit.ui.scrollbar.drag import DragSession
from uikit.ui.scrollbar.geometry import (
    HIDDEN, ThumbGeometry, compute_thumb, drag_scroll_position, page_direction,
)

logger = logging.getLogger(__name__)


class ScrollbarOverlay:
    """
    Custom scrollbar drawn over a container it does not own.

    The container (reached through `ref.current`) must expose:
      rect, scroll_top/scroll_left (rw), scroll_height/scroll_width,
      client_height/client_width, scroll_by(top=|left=, behavior=),
      subscribe("mutation" | "scroll", cb) -> Subscription

    Geometry is recomputed at most once per frame from the container's live
    metrics. Gestures on the overlay write back to the container:
      - drag the thumb  -> scroll position follows the pointer
      - press the track -> page one client size toward the press (smooth)
      - wheel over track -> scroll by the wheel delta (smooth)
    """
    def __init__(
        self,
        ref: Ref,
        window: WindowHost,
        frames: FrameScheduler,
        *,
        orientation: "Orientation | str" = Orientation.VERTICAL,
        style: Optional[ScrollbarStyle] = None,
    ) -> None:
        self.ref = ref
        self.window = window
        self.frames = frames
        self.orientation = Orientation.parse(orientation)
        self.style = style or ScrollbarStyle()

        self.geometry: ThumbGeometry = HIDDEN
        self.hovered = False

        self._wanted = False
        self._target: Any = None
        self._subs: Optional[ExitStack] = None
        self._frame: Optional[int] = None
        self._drag: Optional[DragSession] = None

    # ------------------------------------------------------------------ #
    # Lifecycle
    # ------------------------------------------------------------------ #
    @property
    def mounted(self) -> bool:
        return self._subs is not None

    @property
    def dragging(self) -> bool:
        return self._drag is not None and self._drag.active

    def mount(self) -> None:
        self._wanted = True
        self.sync()

    def unmount(self) -> None:
        self._wanted = False
        self._detach()

    def sync(self) -> None:
        """Follow the ref: re-attach if it now points at another container (or at nothing)."""
        if not self._wanted:
            return
        container = self.ref.current
        if self._subs is not None and container is self._target:
            return
        if self._subs is not None:
            logger.debug("%s scrollbar: container changed", self.orientation.value)
        self._detach()
        if container is not None:
            self._attach(container)

    def _attach(self, container: Any) -> None:
        subs = ExitStack()
        subs.callback(container.subscribe("mutation", self._schedule_update).close)
        subs.callback(container.subscribe("scroll", self._schedule_update).close)
        subs.callback(self.window.add_listener(pygame.VIDEORESIZE, self._schedule_update).close)
        self._subs = subs
        self._target = container
        logger.debug("%s scrollbar mounted", self.orientation.value)
        self._schedule_update()

    def _detach(self) -> None:
        if self._drag is not None:
            self._drag.close()
        if self._frame is not None:
            self.frames.cancel(self._frame)
            self._frame = None
        if self._subs is not None:
            self._subs.close()
            self._subs = None
            logger.debug("%s scrollbar unmounted", self.orientation.value)
        self._target = None
        self.hovered = False

    # ------------------------------------------------------------------ #
    # Update scheduling
    # ------------------------------------------------------------------ #
    def _schedule_update(self, *_: Any) -> None:
        if self._frame is None:
            self._frame = self.frames.request(self._on_frame)

    def _on_frame(self) -> None:
        self._frame = None
        self.update_geometry()

    def update_geometry(self) -> ThumbGeometry:
        c = self.ref.current
        if c is None:
            return self.geometry
        self.geometry = self._live_geometry(c)
        return self.geometry

    def _live_geometry(self, c: Any) -> ThumbGeometry:
        pos, size, client = self.orientation.metrics(c)
        sb = self.style
        return compute_thumb(float(pos), float(size), float(client), sb.margin, sb.min_thumb_size)

    # ------------------------------------------------------------------ #
    # Layout
    # ------------------------------------------------------------------ #
    def track_rect(self) -> Optional[pygame.Rect]:
        c = self.ref.current
        if c is None:
            return None
        return self.orientation.track_rect(c.rect, self.style)

    def thumb_rect(self) -> Optional[pygame.Rect]:
        track = self.track_rect()
        if track is None or not self.geometry.visible:
            return None
        return self.orientation.thumb_rect(track, self.geometry.offset, self.geometry.size, self.style)

    def hit_test(self, pos: Tuple[int, int]) -> bool:
        track = self.track_rect()
        return bool(track and self.geometry.visible and track.collidepoint(pos))

    # ------------------------------------------------------------------ #
    # Input
    # ------------------------------------------------------------------ #
    def handle_event(self, e: pygame.event.Event) -> bool:
        if self.ref.current is None:
            return False

        if e.type == pygame.MOUSEMOTION:
            self.hovered = self.hit_test(e.pos)
            return False

        if e.type == pygame.MOUSEBUTTONDOWN and e.button == 1:
            return self._press(e.pos)

        if e.type == pygame.MOUSEWHEEL and self.hovered:
            return self._wheel(e)

        return False

    def _press(self, pos: Tuple[int, int]) -> bool:
        c = self.ref.current
        track = self.track_rect()
        if c is None or track is None or not track.collidepoint(pos):
            return False
        # the container may have moved since the last frame: classify against live metrics
        geom = self._live_geometry(c)
        if not geom.visible:
            return False
        thumb = self.orientation.thumb_rect(track, geom.offset, geom.size, self.style)
        if thumb.collidepoint(pos):
            self._start_drag(pos)
        else:
            self._page(pos, geom)
        return True

    def _start_drag(self, pos: Tuple[int, int]) -> None:
        c = self.ref.current
        if c is None or self.dragging:
            return
        start_scroll, _, _ = self.orientation.metrics(c)
        self._drag = DragSession(
            self.window,
            start_pointer=self.orientation.along(pos),
            start_scroll=float(start_scroll),
            on_move=self._drag_move,
            on_end=self._drag_end,
        )

    def _drag_move(self, session: DragSession, e: pygame.event.Event) -> None:
        c = self.ref.current
        if c is None:
            return
        # live metrics each move, content may have grown mid-drag
        _, size, client = self.orientation.metrics(c)
        delta = self.orientation.along(e.pos) - session.start_pointer
        sb = self.style
        target = drag_scroll_position(session.start_scroll, delta, float(size), float(client),
                                      sb.margin, sb.min_thumb_size)
        if target is None:
            return
        self.orientation.set_position(c, target)

    def _drag_end(self, session: DragSession) -> None:
        if self._drag is session:
            self._drag = None

    def _page(self, pos: Tuple[int, int], geom: ThumbGeometry) -> None:
        c = self.ref.current
        track = self.track_rect()
        if c is None or track is None or self.dragging:
            return
        click = self.orientation.along(pos) - self.orientation.track_start(track)
        _, _, client = self.orientation.metrics(c)
        c.scroll_by(**self.orientation.scroll_by_kwargs(page_direction(click, geom) * client))

    def _wheel(self, e: pygame.event.Event) -> bool:
        c = self.ref.current
        if c is None:
            return False
        notches = -e.y if self.orientation.vertical else (e.x or -e.y)
        if not notches:
            return False
        c.scroll_by(**self.orientation.scroll_by_kwargs(notches * self.style.wheel_pixels))
        return True

    # ------------------------------------------------------------------ #
    # Draw
    # ------------------------------------------------------------------ #
    def draw(self, surface: pygame.Surface) -> None:
        sb = self.style
        track = self.track_rect()
        if track is None or not self.geometry.visible:
            return
        if sb.track_rgba:
            layer = pygame.Surface(track.size, pygame.SRCALPHA)
            pygame.draw.rect(layer, sb.track_rgba, layer.get_rect(), border_radius=sb.radius)
            surface.blit(layer, track.topleft)

        thumb = self.thumb_rect()
        if thumb is None:
            return
        alpha = sb.alpha_hover if (self.hovered or self.dragging) else sb.alpha_idle
        layer = pygame.Surface(thumb.size, pygame.SRCALPHA)
        pygame.draw.rect(layer, (*sb.thumb_rgb, alpha), layer.get_rect(), border_radius=sb.radius)
        surface.blit(layer, thumb.topleft)
