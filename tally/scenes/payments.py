# tally/scenes/payments.py
from __future__ import annotations
from collections import Counter
from datetime import date, timedelta
from functools import lru_cache
from typing import Optional, Tuple
import logging

import pygame

from uikit.ref import Ref
from uikit.scene import Scene, SceneManager
from uikit.ui.anim import Animator
from uikit.ui.scrollbar.overlay import ScrollbarOverlay
from uikit.ui.style import Theme
from uikit.ui.widgets.scroll_container import ScrollContainer

from tally.models import Category, Payment, PaymentStatus, sample_categories, sample_payments

logger = logging.getLogger(__name__)


@lru_cache(maxsize=16)
def _font(path: Optional[str], size: int) -> pygame.font.Font:
    return pygame.font.Font(path, size)


class PaymentsScene(Scene):
    """
    Payments overview.
    - Category cards in a horizontal strip, payments in a vertical list
    - Each container carries a ScrollbarOverlay of the matching orientation
    - A adds a payment, Backspace removes the last one, Esc quits
    """
    MARGIN = 24
    HEADER_H = 48
    STRIP_H = 112

    def __init__(self, mgr: SceneManager, today: Optional[date] = None):
        self.mgr = mgr
        self.theme: Theme = mgr.cfg.theme
        self.today = today or date.today()
        self.animator = Animator()

        self.categories = sample_categories()
        self.payments = sample_payments(50, start=self.today, categories=self.categories)
        self._names = {c.id: c.name for c in self.categories}

        self.list_ref: Ref[ScrollContainer] = Ref()
        self.strip_ref: Ref[ScrollContainer] = Ref()
        self.list_bar = ScrollbarOverlay(self.list_ref, mgr.window, mgr.frames,
                                         orientation="vertical", style=self.theme.scrollbar)
        self.strip_bar = ScrollbarOverlay(self.strip_ref, mgr.window, mgr.frames,
                                          orientation="horizontal", style=self.theme.scrollbar)

    # --- lifecycle ---
    def on_enter(self, prev: Optional[Scene]) -> None:
        strip_rect, list_rect = self._layout(self.mgr.screen.get_size())
        scroll = self.mgr.cfg.scroll
        common = dict(theme=self.theme, animator=self.animator, window=self.mgr.window,
                      smooth_duration=scroll.smooth_duration, wheel_pixels=scroll.wheel_pixels)

        strip = ScrollContainer(strip_rect, axis="horizontal", render_item=self._draw_card, **common)
        strip.set_items(self._category_cards())
        payments = ScrollContainer(list_rect, axis="vertical", render_item=self._draw_row, **common)
        payments.set_items(self.payments)

        self.strip_ref.current = strip
        self.list_ref.current = payments
        self.strip_bar.mount()
        self.list_bar.mount()
        logger.info("payments scene: %d payments, %d categories", len(self.payments), len(self.categories))

    def on_exit(self, nxt: Optional[Scene]) -> None:
        self.list_bar.unmount()
        self.strip_bar.unmount()
        self.list_ref.current = None
        self.strip_ref.current = None

    def on_resize(self, size: Tuple[int, int]) -> None:
        strip_rect, list_rect = self._layout(size)
        if self.strip_ref.current:
            self.strip_ref.current.set_rect(strip_rect)
        if self.list_ref.current:
            self.list_ref.current.set_rect(list_rect)

    # --- loop ---
    def handle_event(self, e: pygame.event.Event) -> bool:
        # overlays sit above their containers
        for w in (self.list_bar, self.strip_bar, self.list_ref.current, self.strip_ref.current):
            if w is not None and w.handle_event(e):
                return True

        if e.type == pygame.KEYDOWN:
            if e.key == pygame.K_ESCAPE:
                self.mgr.request_quit = True
                return True
            if e.key == pygame.K_a:
                self.add_payment()
                return True
            if e.key == pygame.K_BACKSPACE:
                self.remove_last_payment()
                return True
        return False

    def update(self, dt: float) -> None:
        self.animator.update(dt)
        self.list_bar.sync()
        self.strip_bar.sync()

    def draw(self, surface: pygame.Surface) -> None:
        th = self.theme
        title = _font(th.font_path, th.font_size + 8).render("Payments", True, th.text_rgb)
        surface.blit(title, (self.MARGIN, self.MARGIN // 2 + 4))
        hint = _font(th.font_path, th.font_size - 4).render(
            "A add  ·  Backspace remove  ·  Esc quit", True, th.muted_rgb)
        surface.blit(hint, (surface.get_width() - self.MARGIN - hint.get_width(), self.MARGIN // 2 + 12))

        for ref, bar in ((self.strip_ref, self.strip_bar), (self.list_ref, self.list_bar)):
            if ref.current is not None:
                ref.current.draw(surface)
                bar.draw(surface)

    # --- content ---
    def add_payment(self) -> Payment:
        last = self.payments[-1].due_date if self.payments else self.today
        cat = self.categories[len(self.payments) % len(self.categories)] if self.categories else None
        p = Payment(
            id=f"local-{len(self.payments) + 1}",
            title=f"New payment #{len(self.payments) + 1}",
            amount=1000.0,
            due_date=last + timedelta(days=30),
            category_id=cat.id if cat else None,
        )
        self.payments.append(p)
        if self.list_ref.current:
            self.list_ref.current.append(p)
        self._refresh_cards()
        return p

    def remove_last_payment(self) -> Optional[Payment]:
        if not self.payments:
            return None
        p = self.payments.pop()
        if self.list_ref.current:
            self.list_ref.current.remove()
        self._refresh_cards()
        return p

    def _category_cards(self):
        counts = Counter(p.category_id for p in self.payments)
        return [(c, counts.get(c.id, 0)) for c in self.categories]

    def _refresh_cards(self) -> None:
        if self.strip_ref.current:
            self.strip_ref.current.set_items(self._category_cards())

    # --- layout + painting ---
    def _layout(self, size: Tuple[int, int]) -> Tuple[pygame.Rect, pygame.Rect]:
        w, h = size
        m = self.MARGIN
        strip = pygame.Rect(m, self.HEADER_H + m // 2, max(1, w - 2 * m), self.STRIP_H)
        top = strip.bottom + m
        payments = pygame.Rect(m, top, max(1, w - 2 * m), max(1, h - top - m))
        return strip, payments

    def _draw_row(self, surface: pygame.Surface, p: Payment, rect: pygame.Rect, hovered: bool) -> None:
        th = self.theme
        if hovered:
            hl = pygame.Surface(rect.size, pygame.SRCALPHA)
            pygame.draw.rect(hl, th.hover_rgba, hl.get_rect(), border_radius=6)
            surface.blit(hl, rect.topleft)
        pygame.draw.line(surface, th.box_border, (rect.x, rect.bottom + th.gap // 2),
                         (rect.right, rect.bottom + th.gap // 2))

        status = p.status_on(self.today)
        cy = rect.centery
        pygame.draw.circle(surface, th.statuses.for_status(status.value), (rect.x + 8, cy), 5)

        font = _font(th.font_path, th.font_size)
        small = _font(th.font_path, th.font_size - 4)
        name = font.render(p.title, True, th.text_rgb)
        surface.blit(name, (rect.x + 24, cy - name.get_height() // 2))

        meta = f"{p.due_date:%d.%m.%Y}  ·  {self._names.get(p.category_id, 'No category')}"
        if status is PaymentStatus.COMPLETED:
            meta += "  ·  paid"
        meta_s = small.render(meta, True, th.muted_rgb)
        surface.blit(meta_s, (rect.x + rect.w // 2 - 80, cy - meta_s.get_height() // 2))

        amount = font.render(p.amount_label(), True, th.text_rgb)
        sb = th.scrollbar
        surface.blit(amount, (rect.right - sb.track_thickness - amount.get_width(),
                              cy - amount.get_height() // 2))

    def _draw_card(self, surface: pygame.Surface, card: Tuple[Category, int],
                   rect: pygame.Rect, hovered: bool) -> None:
        th = self.theme
        cat, count = card
        body = rect.inflate(0, -th.scrollbar.track_thickness).move(0, -th.scrollbar.track_thickness // 2)
        fill = tuple(min(255, c + (24 if hovered else 12)) for c in th.box_bg)
        pygame.draw.rect(surface, fill, body, border_radius=th.border_radius)
        name = _font(th.font_path, th.font_size).render(cat.name, True, th.text_rgb)
        surface.blit(name, (body.x + 12, body.y + 12))
        n = _font(th.font_path, th.font_size - 4).render(
            f"{count} payment{'s' if count != 1 else ''}", True, th.muted_rgb)
        surface.blit(n, (body.x + 12, body.bottom - 12 - n.get_height()))
