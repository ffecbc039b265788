"""Shared fixtures: containers sized so the numbers stay readable (1000 px content in a 200 px viewport)."""
import pygame

from uikit.ui.anim import Animator
from uikit.ui.style import Theme
from uikit.ui.widgets.scroll_container import ScrollContainer

FLAT = Theme(padding=(0, 0, 0, 0), row_h=100, card_w=100, gap=0)


class SpyContainer(ScrollContainer):
    """Records every scroll_by call before performing it."""
    def __init__(self, *args, **kwargs):
        self.scroll_by_calls = []
        super().__init__(*args, **kwargs)

    def scroll_by(self, top=0.0, left=0.0, behavior="auto"):
        self.scroll_by_calls.append({"top": top, "left": left, "behavior": behavior})
        super().scroll_by(top=top, left=left, behavior=behavior)


def make_container(n=10, *, axis="vertical", rect=None, animator=None, window=None):
    if rect is None:
        rect = pygame.Rect(0, 0, 300, 200) if axis == "vertical" else pygame.Rect(0, 0, 200, 120)
    c = SpyContainer(rect, theme=FLAT, animator=animator or Animator(), axis=axis, window=window)
    c.set_items(range(n))
    return c
