from __future__ import annotations
from collections import defaultdict
from contextlib import contextmanager
from typing import Callable, Dict, Iterator, List, Optional
import pygame

Listener = Callable[[pygame.event.Event], None]


class Subscription:
    """
    Handle returned by every subscribe/add_listener call.
    close() detaches the callback; calling it twice is harmless.
    """
    def __init__(self, release: Callable[[], None]) -> None:
        self._release: Optional[Callable[[], None]] = release

    @property
    def closed(self) -> bool:
        return self._release is None

    def close(self) -> None:
        release, self._release = self._release, None
        if release is not None:
            release()


class WindowHost:
    """
    Window-level listener registry.

    The app loop feeds every pygame event through dispatch(), so widgets that
    need events regardless of where the pointer is (drag tracking, resize)
    listen here instead of waiting for the scene to route them.
    """
    def __init__(self) -> None:
        self._listeners: Dict[int, List[Listener]] = defaultdict(list)
        self.user_select: bool = True

    # --- listeners -----------------------------------------------------------
    def add_listener(self, event_type: int, fn: Listener) -> Subscription:
        self._listeners[event_type].append(fn)

        def _release() -> None:
            bucket = self._listeners.get(event_type)
            if bucket and fn in bucket:
                bucket.remove(fn)
            if not bucket:
                self._listeners.pop(event_type, None)

        return Subscription(_release)

    def listener_count(self, event_type: Optional[int] = None) -> int:
        if event_type is None:
            return sum(len(v) for v in self._listeners.values())
        return len(self._listeners.get(event_type, ()))

    def dispatch(self, e: pygame.event.Event) -> None:
        # snapshot: a listener may remove itself (mouse-up ends a drag)
        for fn in list(self._listeners.get(e.type, ())):
            fn(e)

    # --- text selection ------------------------------------------------------
    @contextmanager
    def suppress_selection(self) -> Iterator[None]:
        prev = self.user_select
        self.user_select = False
        try:
            yield
        finally:
            self.user_select = prev
