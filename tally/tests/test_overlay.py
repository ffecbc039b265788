import unittest

import pygame

from uikit.frames import FrameScheduler
from uikit.ref import Ref
from uikit.ui.scrollbar.axis import Orientation
from uikit.ui.scrollbar.overlay import ScrollbarOverlay
from uikit.window import WindowHost

from tally.tests.helpers import make_container


def down(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONDOWN, pos=pos, button=button)

def up(pos, button=1):
    return pygame.event.Event(pygame.MOUSEBUTTONUP, pos=pos, button=button)

def motion(pos):
    return pygame.event.Event(pygame.MOUSEMOTION, pos=pos, rel=(0, 0), buttons=(1, 0, 0))


class _OverlayCase(unittest.TestCase):
    orientation = "vertical"

    def setUp(self):
        self.window = WindowHost()
        self.frames = FrameScheduler()
        self.container = make_container(10, axis=self.orientation)
        self.ref = Ref(self.container)
        self.bar = ScrollbarOverlay(self.ref, self.window, self.frames, orientation=self.orientation)
        self.bar.mount()
        self.frames.run()

    def tearDown(self):
        self.bar.unmount()


class TestMountAndScheduling(_OverlayCase):
    def test_initial_recompute_on_mount(self):
        g = self.bar.geometry
        self.assertTrue(g.visible)
        self.assertAlmostEqual(g.size, 38.0)
        self.assertAlmostEqual(g.offset, 5.0)

    def test_subscriptions(self):
        self.assertTrue(self.bar.mounted)
        self.assertEqual(self.container.listener_count(), 2)
        self.assertEqual(self.window.listener_count(pygame.VIDEORESIZE), 1)

    def test_bursts_coalesce_into_one_frame(self):
        self.container.append(10)
        self.container.scroll_top = 300
        self.container.scroll_top = 800
        self.window.dispatch(pygame.event.Event(pygame.VIDEORESIZE, w=800, h=600, size=(800, 600)))
        self.assertEqual(self.frames.pending(), 1)
        # geometry only moves when the frame runs, and reflects the latest state
        self.assertAlmostEqual(self.bar.geometry.offset, 5.0)
        self.frames.run()
        expected_size = max(200 / 1100 * 190, 20)
        self.assertAlmostEqual(self.bar.geometry.size, expected_size)
        self.assertAlmostEqual(self.bar.geometry.offset, 5 + 800 / 900 * (190 - expected_size))

    def test_scroll_to_bottom(self):
        self.container.scroll_top = 800
        self.frames.run()
        self.assertAlmostEqual(self.bar.geometry.offset, 157.0)

    def test_hidden_when_content_fits(self):
        self.container.set_items(range(2))
        self.frames.run()
        self.assertFalse(self.bar.geometry.visible)
        self.assertIsNone(self.bar.thumb_rect())
        self.assertFalse(self.bar.handle_event(down((295, 100))))

    def test_unmount_releases_everything(self):
        self.container.append(10)
        self.assertEqual(self.frames.pending(), 1)
        self.bar.unmount()
        self.assertFalse(self.bar.mounted)
        self.assertEqual(self.frames.pending(), 0)
        self.assertEqual(self.container.listener_count(), 0)
        self.assertEqual(self.window.listener_count(), 0)

    def test_ref_swap_moves_subscriptions(self):
        other = make_container(4)
        self.ref.current = other
        self.bar.sync()
        self.assertEqual(self.container.listener_count(), 0)
        self.assertEqual(other.listener_count(), 2)
        self.assertEqual(self.window.listener_count(pygame.VIDEORESIZE), 1)
        self.frames.run()
        self.assertAlmostEqual(self.bar.geometry.size, max(200 / 400 * 190, 20))

    def test_ref_cleared_is_a_no_op(self):
        self.ref.current = None
        self.bar.sync()
        self.assertFalse(self.bar.mounted)
        self.assertEqual(self.window.listener_count(), 0)
        self.assertFalse(self.bar.handle_event(down((295, 20))))
        self.assertIsNone(self.bar.track_rect())
        self.bar.draw(pygame.Surface((300, 200), pygame.SRCALPHA))

    def test_sync_after_unmount_stays_detached(self):
        self.bar.unmount()
        self.bar.sync()
        self.assertFalse(self.bar.mounted)


class TestThumbDrag(_OverlayCase):
    def grab(self, pos=(294, 20)):
        thumb = self.bar.thumb_rect()
        self.assertTrue(thumb.collidepoint(pos))
        self.assertTrue(self.bar.handle_event(down(pos)))
        self.assertTrue(self.bar.dragging)

    def test_drag_maps_pointer_to_scroll(self):
        self.grab()
        self.assertFalse(self.window.user_select)
        self.window.dispatch(motion((294, 20 + 76)))
        self.assertAlmostEqual(self.container.scroll_top, 400.0)

    def test_drag_is_clamped(self):
        self.grab()
        self.window.dispatch(motion((294, 2000)))
        self.assertEqual(self.container.scroll_top, 800)
        self.window.dispatch(motion((294, -2000)))
        self.assertEqual(self.container.scroll_top, 0)

    def test_motion_outside_the_overlay_still_drags(self):
        self.grab()
        self.window.dispatch(motion((-500, 20 + 38)))
        self.assertAlmostEqual(self.container.scroll_top, 200.0)

    def test_button_up_anywhere_ends_drag(self):
        self.grab()
        self.window.dispatch(up((9999, 9999)))
        self.assertFalse(self.bar.dragging)
        self.assertTrue(self.window.user_select)
        self.assertEqual(self.window.listener_count(pygame.MOUSEMOTION), 0)
        self.assertEqual(self.window.listener_count(pygame.MOUSEBUTTONUP), 0)
        self.window.dispatch(motion((294, 150)))
        self.assertEqual(self.container.scroll_top, 0)

    def test_unmount_mid_drag_removes_window_listeners(self):
        self.grab()
        self.assertEqual(self.window.listener_count(pygame.MOUSEMOTION), 1)
        self.bar.unmount()
        self.assertFalse(self.bar.dragging)
        self.assertEqual(self.window.listener_count(), 0)
        self.assertTrue(self.window.user_select)

    def test_drag_uses_live_metrics(self):
        self.grab()
        # content doubles mid-drag: 1800 px scrollable over 190 - 20 px travel
        self.container.set_items(range(20))
        self.window.dispatch(motion((294, 20 + 17)))
        thumb = max(200 / 2000 * 190, 20)
        self.assertAlmostEqual(self.container.scroll_top, 17 * 1800 / (190 - thumb))

    def test_drag_does_not_page(self):
        self.grab()
        self.assertEqual(self.container.scroll_by_calls, [])

    def test_press_uses_live_thumb_before_next_frame(self):
        # container jumped to the bottom, geometry not recomputed yet
        self.container.scroll_top = 800
        self.assertAlmostEqual(self.bar.geometry.offset, 5.0)
        self.assertTrue(self.bar.handle_event(down((294, 176))))
        self.assertTrue(self.bar.dragging)
        self.assertEqual(self.container.scroll_by_calls, [])
        self.window.dispatch(motion((294, 176 - 19)))
        self.assertAlmostEqual(self.container.scroll_top, 800 - 19 * 800 / 152)


class TestTrackAndWheel(_OverlayCase):
    def test_press_below_thumb_pages_down_once(self):
        self.assertTrue(self.bar.handle_event(down((295, 150))))
        self.assertEqual(self.container.scroll_by_calls,
                         [{"top": 200, "left": 0.0, "behavior": "smooth"}])
        self.assertFalse(self.bar.dragging)

    def test_press_above_thumb_pages_up(self):
        self.container.scroll_top = 800
        self.frames.run()
        self.bar.handle_event(down((295, 20)))
        self.assertEqual(self.container.scroll_by_calls,
                         [{"top": -200, "left": 0.0, "behavior": "smooth"}])

    def test_press_outside_track_is_ignored(self):
        self.assertFalse(self.bar.handle_event(down((100, 100))))
        self.assertFalse(self.bar.handle_event(down((295, 150), button=3)))
        self.assertEqual(self.container.scroll_by_calls, [])

    def test_wheel_over_track(self):
        self.bar.handle_event(motion((295, 100)))
        self.assertTrue(self.bar.hovered)
        wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-2, flipped=False)
        self.assertTrue(self.bar.handle_event(wheel))
        self.assertEqual(self.container.scroll_by_calls,
                         [{"top": 80, "left": 0.0, "behavior": "smooth"}])

    def test_wheel_elsewhere_is_not_consumed(self):
        self.bar.handle_event(motion((50, 100)))
        wheel = pygame.event.Event(pygame.MOUSEWHEEL, x=0, y=-1, flipped=False)
        self.assertFalse(self.bar.handle_event(wheel))

    def test_draw(self):
        surface = pygame.Surface((300, 200), pygame.SRCALPHA)
        self.bar.draw(surface)
        thumb = self.bar.thumb_rect()
        self.assertGreater(surface.get_at(thumb.center).a, 0)
        self.assertEqual(surface.get_at((50, 100)).a, 0)


class TestHorizontal(_OverlayCase):
    orientation = "horizontal"

    def test_geometry_uses_width(self):
        # 1000 px wide content in a 200 px viewport
        self.assertAlmostEqual(self.bar.geometry.size, 38.0)
        track = self.bar.track_rect()
        self.assertEqual(track.bottom, self.container.rect.bottom)
        self.assertEqual(track.w, self.container.rect.w)

    def test_drag_writes_scroll_left(self):
        thumb = self.bar.thumb_rect()
        self.bar.handle_event(down(thumb.center))
        self.window.dispatch(motion((thumb.centerx + 76, thumb.centery + 40)))
        self.assertAlmostEqual(self.container.scroll_left, 400.0)
        self.assertEqual(self.container.scroll_top, 0)

    def test_track_click_pages_left_right(self):
        track = self.bar.track_rect()
        self.bar.handle_event(down((150, track.centery)))
        self.assertEqual(self.container.scroll_by_calls,
                         [{"top": 0.0, "left": 200, "behavior": "smooth"}])


class TestOrientation(unittest.TestCase):
    def test_parse(self):
        self.assertIs(Orientation.parse("Vertical"), Orientation.VERTICAL)
        self.assertIs(Orientation.parse(Orientation.HORIZONTAL), Orientation.HORIZONTAL)
        with self.assertRaises(ValueError):
            Orientation.parse("sideways")


if __name__ == "__main__":
    unittest.main()
