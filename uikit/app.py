from __future__ import annotations
from typing import Callable
import logging

import pygame

from uikit.frames import FrameScheduler
from uikit.scene import Scene, SceneManager
from uikit.settings import AppCfg
from uikit.window import WindowHost

logger = logging.getLogger(__name__)


class App:
    """
    App shell: window init, main loop, resize.

    Per tick:
      1. every event goes to the WindowHost (window-level listeners) and then
         to the active scene
      2. update (tweens move containers)
      3. frame callbacks queued since the last tick run once
      4. draw, flip
    """

    def __init__(self, cfg: AppCfg, first_scene: Callable[[SceneManager], Scene]):
        self.cfg = cfg
        pygame.init()
        pygame.display.set_caption(cfg.window.title)

        self._flags = pygame.RESIZABLE | pygame.DOUBLEBUF
        self.screen = pygame.display.set_mode(
            (int(cfg.window.width), int(cfg.window.height)),
            flags=self._flags,
        )

        self.clock = pygame.time.Clock()
        self.running = True

        self.window = WindowHost()
        self.frames = FrameScheduler()
        self.scenes = SceneManager(self.screen, cfg, self.window, self.frames)
        self.scenes.push(first_scene(self.scenes))
        logger.info("window %dx%d @ %d fps", cfg.window.width, cfg.window.height, cfg.fps)

    # ------------------------------------------------------------------ #
    # Main loop
    # ------------------------------------------------------------------ #
    def run(self) -> None:
        try:
            while self.running and not self.scenes.request_quit:
                dt = self.clock.tick(self.cfg.fps) / 1000.0

                for e in pygame.event.get():
                    if e.type == pygame.QUIT:
                        self.running = False
                        break

                    if e.type == pygame.VIDEORESIZE:
                        self._resize_to(e.w, e.h)

                    self.window.dispatch(e)
                    if self.scenes.handle_event(e):
                        continue

                    if e.type == pygame.KEYDOWN and e.key == pygame.K_q \
                            and (pygame.key.get_mods() & pygame.KMOD_CTRL):
                        self.running = False

                # tweens move containers in update(); geometry catches up before draw
                self.scenes.update(dt)
                self.frames.run()
                self.screen.fill(self.cfg.window.bg_rgb)
                self.scenes.draw()
                pygame.display.flip()
        finally:
            self.scenes.clear()
            pygame.quit()

    # ------------------------------------------------------------------ #
    # Helpers
    # ------------------------------------------------------------------ #
    def _resize_to(self, w: int, h: int) -> None:
        """Recreate the window surface; scenes re-layout before listeners fire."""
        w = max(1, int(w))
        h = max(1, int(h))
        self.screen = pygame.display.set_mode((w, h), flags=self._flags)
        self.scenes.resize(self.screen)
