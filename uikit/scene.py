from __future__ import annotations
from typing import Optional, Protocol, List
import logging

import pygame

from uikit.frames import FrameScheduler
from uikit.settings import AppCfg
from uikit.window import WindowHost

logger = logging.getLogger(__name__)


class Scene(Protocol):
    """Scene protocol; on_exit is where a scene tears down overlays and listeners."""
    def on_enter(self, prev: Optional["Scene"]) -> None: ...
    def on_exit(self,  nxt: Optional["Scene"]) -> None: ...

    def update(self, dt: float) -> None: ...
    def draw(self, surface: pygame.Surface) -> None: ...
    def handle_event(self, e: pygame.event.Event) -> bool: ...
    def on_resize(self, size: tuple[int, int]) -> None: ...


class SceneManager:
    """
    Stack of scenes sharing one window host and one frame scheduler.
      - push/pop/replace run on_enter/on_exit
      - only the top scene gets events and updates; the whole stack draws
    """
    def __init__(self, screen: pygame.Surface, cfg: AppCfg,
                 window: Optional[WindowHost] = None,
                 frames: Optional[FrameScheduler] = None) -> None:
        self._stack: List[Scene] = []
        self.screen = screen
        self.cfg = cfg
        self.window = window or WindowHost()
        self.frames = frames or FrameScheduler()
        self.request_quit = False

    # ----- stack ops --------------------------------------------------------
    def push(self, scene: Scene) -> None:
        prev = self.active()
        self._stack.append(scene)
        logger.debug("enter %s", type(scene).__name__)
        scene.on_enter(prev)

    def pop(self) -> Optional[Scene]:
        if not self._stack:
            return None
        top = self._stack.pop()
        logger.debug("exit %s", type(top).__name__)
        top.on_exit(self.active())
        return top

    def replace(self, scene: Scene) -> None:
        self.pop()
        self.push(scene)

    def clear(self) -> None:
        while self._stack:
            self.pop()

    # ----- loop -------------------------------------------------------------
    def active(self) -> Optional[Scene]:
        return self._stack[-1] if self._stack else None

    def handle_event(self, e: pygame.event.Event) -> bool:
        top = self.active()
        return bool(top and top.handle_event(e))

    def resize(self, screen: pygame.Surface) -> None:
        self.screen = screen
        for s in self._stack:
            s.on_resize(screen.get_size())

    def update(self, dt: float) -> None:
        top = self.active()
        if top:
            top.update(dt)

    def draw(self) -> None:
        for s in self._stack:
            s.draw(self.screen)
