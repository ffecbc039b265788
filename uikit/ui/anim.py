from dataclasses import dataclass
from typing import Callable, Any, Optional

def ease_linear(t: float) -> float: return t
def ease_out_cubic(t: float) -> float: t = max(0.0, min(1.0, t)); return 1 - (1 - t) ** 3

@dataclass
class Tween:
    """Drives `obj.attr` from start to end; attr may be a property (setter runs every step)."""
    obj: Any
    attr: str
    start: float
    end: float
    duration: float
    ease: Callable[[float], float] = ease_out_cubic
    t: float = 0.0
    on_done: Optional[Callable[[], None]] = None

    def targets(self, obj: Any, attr: str) -> bool:
        return self.obj is obj and self.attr == attr

    def update(self, dt: float) -> bool:
        self.t += dt
        u = 1.0 if self.duration <= 0 else max(0.0, min(1.0, self.t / self.duration))
        setattr(self.obj, self.attr, self.start + (self.end - self.start) * self.ease(u))
        done = u >= 1.0
        if done and self.on_done:
            self.on_done()
        return done


class Animator:
    def __init__(self):
        self._tweens: list[Tween] = []

    def add(self, tween: Tween) -> None:
        # one tween per target: a new smooth scroll replaces the running one
        self.cancel(tween.obj, tween.attr)
        self._tweens.append(tween)

    def cancel(self, obj: Any, attr: str) -> None:
        self._tweens[:] = [tw for tw in self._tweens if not tw.targets(obj, attr)]

    def find(self, obj: Any, attr: str) -> Optional[Tween]:
        return next((tw for tw in self._tweens if tw.targets(obj, attr)), None)

    def busy(self) -> bool:
        return bool(self._tweens)

    def update(self, dt: float) -> None:
        self._tweens[:] = [tw for tw in list(self._tweens) if not tw.update(dt)]
