import os
import sys
import unittest
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]
sys.path.insert(0, str(ROOT / "apps" / "desktop"))
sys.path.insert(0, str(ROOT / "packages" / "core"))
sys.path.insert(0, str(ROOT / "packages" / "renderer"))

os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")

try:
    from PySide6.QtGui import QImage
    from PySide6.QtTest import QTest
    from PySide6.QtWidgets import QApplication
except ImportError:  # pragma: no cover
    QApplication = None

if QApplication is not None:
    from chaosgame_app.app import CanvasWindow, QtScheduler, QtViewport
    from chaosgame_core.config import DisplayConfig
    from chaosgame_renderer import Color, Point, RasterBuffer

EQUILATERAL = 2 / 3**0.5


class QtRuntimeTests(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        if QApplication is None:
            raise unittest.SkipTest("PySide6 is not available")
        cls.app = QApplication.instance() or QApplication([])

    def setUp(self):
        self.window = CanvasWindow(DisplayConfig(initial_width=8, initial_height=8))

    def tearDown(self):
        self.window.close()
        self.window.deleteLater()

    def _frame_rgba(self, x, y):
        image = self.window.frame.toImage().convertToFormat(QImage.Format.Format_RGBA8888)
        color = image.pixelColor(x, y)
        return (color.red(), color.green(), color.blue(), color.alpha())

    def test_window_uses_surface_id(self):
        self.assertEqual(self.window.objectName(), "chaos_game_canvas")

    def test_update_is_noop_while_canvas_hidden(self):
        viewport = QtViewport(self.window, 1.0)
        viewport.resize(8, 8)
        self.assertFalse(self.window.isVisible())
        self.assertFalse(viewport.update(RasterBuffer(2, 2)))
        self.assertIsNone(self.window.frame)

    def test_stretch_keeps_hard_pixel_edges(self):
        buf = RasterBuffer(2, 2)
        buf.plot(Point(0, 0), Color(255, 0, 0, 255))
        before = buf.tobytes()

        viewport = QtViewport(self.window, 1.0)
        viewport.resize(8, 8)
        self.window.show()
        self.assertTrue(viewport.update(buf))

        self.assertEqual((self.window.frame.width(), self.window.frame.height()), (8, 8))
        self.assertEqual(self._frame_rgba(0, 0), (255, 0, 0, 255))
        self.assertEqual(self._frame_rgba(3, 3), (255, 0, 0, 255))
        self.assertEqual(self._frame_rgba(4, 4)[3], 0)
        self.assertEqual(self._frame_rgba(7, 0)[3], 0)
        self.assertEqual(buf.tobytes(), before)

    def test_notify_resize_reaches_viewport(self):
        scheduler = QtScheduler(self.window)
        viewport = QtViewport(self.window, EQUILATERAL)
        scheduler.on_resize(viewport.resize)

        scheduler.notify_resize(800, 600)
        self.assertEqual(viewport.display_size, (692, 600))

        self.window.resized.connect(scheduler.notify_resize)
        self.window.resized.emit(400, 300)
        self.assertEqual(viewport.display_size, (346, 300))

    def test_cancel_stops_timer(self):
        scheduler = QtScheduler(self.window)
        calls = []
        handle = scheduler.call_every(10, lambda: calls.append(1))
        self.assertTrue(handle.active)

        QTest.qWait(60)
        self.assertGreater(len(calls), 0)

        handle.cancel()
        handle.cancel()
        self.assertFalse(handle.active)
        seen = len(calls)
        QTest.qWait(60)
        self.assertEqual(len(calls), seen)


if __name__ == "__main__":
    unittest.main()
