from __future__ import annotations
from typing import Callable, Dict
import itertools


class FrameScheduler:
    """
    requestAnimationFrame for the pygame loop.

    request() queues a callback for the next run(); run() is called once per
    tick by the App, before update/draw. Callbacks queued while a frame is
    running land on the following frame.
    """
    def __init__(self) -> None:
        self._ids = itertools.count(1)
        self._queue: Dict[int, Callable[[], None]] = {}
        self._running: Dict[int, Callable[[], None]] = {}

    def request(self, cb: Callable[[], None]) -> int:
        handle = next(self._ids)
        self._queue[handle] = cb
        return handle

    def cancel(self, handle: int) -> None:
        # may target the batch currently running (a callback tearing down another widget)
        self._queue.pop(handle, None)
        self._running.pop(handle, None)

    def pending(self) -> int:
        return len(self._queue)

    def run(self) -> int:
        """Run everything queued before this call. Returns how many ran."""
        self._running, self._queue = self._queue, {}
        ran = 0
        try:
            for handle in list(self._running):
                cb = self._running.pop(handle, None)
                if cb is None:
                    continue
                cb()
                ran += 1
        finally:
            # a callback raised: whatever did not run stays queued, ahead of newer requests
            if self._running:
                self._queue = {**self._running, **self._queue}
            self._running = {}
        return ran
