from __future__ import annotations
from contextlib import ExitStack
from typing import Callable
import logging

import pygame

from uikit.window import WindowHost

logger = logging.getLogger(__name__)


class DragSession:
    """
    One thumb drag, from button-down on the thumb to button-up anywhere.

    Acquiring the session registers window-level MOUSEMOTION / MOUSEBUTTONUP
    listeners and suppresses text selection; close() releases all of it, on
    whichever exit path comes first (button-up, unmount, container swap).
    """
    def __init__(
        self,
        window: WindowHost,
        *,
        start_pointer: int,
        start_scroll: float,
        on_move: Callable[["DragSession", pygame.event.Event], None],
        on_end: Callable[["DragSession"], None],
    ) -> None:
        self.start_pointer = start_pointer
        self.start_scroll = start_scroll
        self._on_move = on_move
        self._on_end = on_end
        self._resources = ExitStack()
        try:
            self._resources.enter_context(window.suppress_selection())
            self._resources.callback(window.add_listener(pygame.MOUSEMOTION, self._motion).close)
            self._resources.callback(window.add_listener(pygame.MOUSEBUTTONUP, self._button_up).close)
        except BaseException:
            self._resources.close()
            raise
        self.active = True
        logger.debug("drag started at %s (scroll %.1f)", start_pointer, start_scroll)

    def close(self) -> None:
        if not self.active:
            return
        self.active = False
        self._resources.close()
        logger.debug("drag ended")
        self._on_end(self)

    # --- window listeners ---------------------------------------------------
    def _motion(self, e: pygame.event.Event) -> None:
        if self.active:
            self._on_move(self, e)

    def _button_up(self, e: pygame.event.Event) -> None:
        if getattr(e, "button", 1) == 1:
            self.close()
