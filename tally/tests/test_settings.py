import os
import tempfile
import unittest

from uikit.settings import DEFAULTS_PATH, build_theme_from_defaults, load_defaults, load_settings


class TestSettings(unittest.TestCase):
    def _write(self, text):
        fd, path = tempfile.mkstemp(suffix=".yaml")
        with os.fdopen(fd, "w", encoding="utf-8") as f:
            f.write(text)
        self.addCleanup(os.remove, path)
        return path

    def test_bundled_defaults(self):
        cfg = load_settings(DEFAULTS_PATH)
        sb = cfg.theme.scrollbar
        self.assertEqual(sb.margin, 5)
        self.assertEqual(sb.min_thumb_size, 20)
        self.assertEqual(sb.thickness, 8)
        self.assertIsNone(sb.track_rgba)
        self.assertEqual(cfg.fps, 60)

    def test_overrides(self):
        path = self._write(
            "fps: 30\n"
            "logging: {level: debug}\n"
            "scroll: {smooth_duration: 0.5}\n"
            "theme:\n"
            "  row_h: 52\n"
            "  statuses: {overdue: [1, 2, 3]}\n"
            "  scrollbar: {margin: 3, track_rgba: [0, 0, 0, 40]}\n"
        )
        cfg = load_settings(path)
        self.assertEqual(cfg.fps, 30)
        self.assertEqual(cfg.log_level, "DEBUG")
        self.assertEqual(cfg.scroll.smooth_duration, 0.5)
        self.assertEqual(cfg.theme.row_h, 52)
        self.assertEqual(cfg.theme.statuses.overdue, (1, 2, 3))
        self.assertEqual(cfg.theme.scrollbar.margin, 3)
        self.assertEqual(cfg.theme.scrollbar.track_rgba, (0, 0, 0, 40))
        self.assertEqual(cfg.theme.scrollbar.min_thumb_size, 20)

    def test_missing_file_uses_defaults(self):
        with self.assertLogs("uikit.settings", level="WARNING"):
            cfg = load_settings("/nonexistent/tally.yaml")
        self.assertEqual(cfg.window.width, 1280)

    def test_non_mapping_is_rejected(self):
        path = self._write("- just\n- a list\n")
        with self.assertLogs("uikit.settings", level="WARNING"):
            self.assertEqual(load_defaults(path), {})

    def test_empty_theme_section(self):
        th = build_theme_from_defaults({"theme": None})
        self.assertEqual(th.scrollbar.margin, 5)


if __name__ == "__main__":
    unittest.main()
