"""Desktop runtime: Qt window, timer-backed scheduler, and canvas viewport."""

from __future__ import annotations

import os
import sys
from typing import Callable

from PySide6.QtCore import QObject, QTimer, Qt, Signal
from PySide6.QtGui import QColor, QImage, QPainter, QPixmap
from PySide6.QtWidgets import QApplication, QWidget

from chaosgame_core import ChaosGameConfig, ChaosGameLoop
from chaosgame_core.config import DisplayConfig
from chaosgame_core.logging_setup import configure_logging, get_logger, install_crash_hooks
from chaosgame_renderer import RasterBuffer, Viewport


class QtTimerHandle:
    def __init__(self, timer: QTimer) -> None:
        self._timer = timer
        self._cancelled = False

    @property
    def active(self) -> bool:
        return not self._cancelled and self._timer.isActive()

    def cancel(self) -> None:
        if self._cancelled:
            return
        self._cancelled = True
        self._timer.stop()
        self._timer.deleteLater()


class QtScheduler:
    """Repeating callbacks on QTimer; resize callbacks fed by the window."""

    def __init__(self, parent: QObject) -> None:
        self._parent = parent
        self._resize_callbacks: list[Callable[[int, int], None]] = []

    def call_every(self, interval_ms: int, callback: Callable[[], None]) -> QtTimerHandle:
        timer = QTimer(self._parent)
        timer.setInterval(interval_ms)
        timer.timeout.connect(callback)
        timer.start()
        return QtTimerHandle(timer)

    def on_resize(self, callback: Callable[[int, int], None]) -> None:
        self._resize_callbacks.append(callback)

    def notify_resize(self, width: int, height: int) -> None:
        for callback in list(self._resize_callbacks):
            callback(width, height)


class CanvasWindow(QWidget):
    resized = Signal(int, int)

    def __init__(self, display: DisplayConfig) -> None:
        super().__init__()
        self.setObjectName(display.surface_id)
        self.setWindowTitle(display.window_title)
        self.resize(display.initial_width, display.initial_height)
        self._frame: QPixmap | None = None

    @property
    def frame(self) -> QPixmap | None:
        return self._frame

    def set_frame(self, frame: QPixmap) -> None:
        self._frame = frame
        self.update()

    def resizeEvent(self, event) -> None:  # noqa: N802
        super().resizeEvent(event)
        self.resized.emit(self.width(), self.height())

    def paintEvent(self, _event) -> None:  # noqa: N802
        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(0, 0, 0))
        if self._frame is not None:
            x = (self.width() - self._frame.width()) // 2
            y = (self.height() - self._frame.height()) // 2
            painter.drawPixmap(x, y, self._frame)
        painter.end()


class QtViewport(Viewport):
    """Stretches the raster buffer onto the window without smoothing."""

    def __init__(self, canvas: CanvasWindow, aspect_ratio: float) -> None:
        super().__init__(aspect_ratio)
        self.canvas = canvas

    def surface_available(self) -> bool:
        return self.canvas is not None and self.canvas.isVisible()

    def _present(self, buffer: RasterBuffer) -> None:
        data = buffer.tobytes()
        image = QImage(data, buffer.width, buffer.height, buffer.width * 4, QImage.Format.Format_RGBA8888)
        scaled = image.scaled(
            self.display_width,
            self.display_height,
            Qt.AspectRatioMode.IgnoreAspectRatio,
            Qt.TransformationMode.FastTransformation,
        )
        self.canvas.set_frame(QPixmap.fromImage(scaled))


def run_gui(config: ChaosGameConfig) -> int:
    configure_logging()
    install_crash_hooks()
    logger = get_logger()

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    app = QApplication.instance() or QApplication(sys.argv)
    app.setApplicationName("Chaos Game")

    window = CanvasWindow(config.display)
    scheduler = QtScheduler(window)
    viewport = QtViewport(window, config.render.aspect_ratio)
    scheduler.on_resize(viewport.resize)
    window.resized.connect(scheduler.notify_resize)

    try:
        game = ChaosGameLoop.from_config(config, scheduler, viewport)
    except ValueError as exc:
        logger.error("failed to build chaos game: %s", exc, extra={"event": "startup_error"})
        return 1

    window.show()
    viewport.resize(window.width(), window.height())
    game.start()

    exit_code = app.exec()
    game.stop()
    logger.info("app shutdown", extra={"event": "shutdown", "exit_code": int(exit_code)})
    return int(exit_code)
