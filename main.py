"""
MandalaRotate - Main Application
Qt window that feeds pointer input into the MandalaEngine and paints each frame.
"""

import sys
from pathlib import Path
from typing import Optional

import numpy as np
from PyQt6.QtWidgets import QApplication, QMainWindow, QWidget
from PyQt6.QtCore import Qt, QTimer, QPoint
from PyQt6.QtGui import QColor, QImage, QPainter, QPen, QPolygon

from command_wiring import dispatch_key_command
from config import Config
from config_persistence import load_config, save_config
from logging_utils import log_event, set_log_level
from mandala_engine import FrameContents, MandalaEngine
from raster_surface import pixel_offset


def surface_to_qimage(pixels: np.ndarray) -> QImage:
    """Wrap an (H, W, 3) uint8 array as an owned QImage."""
    h, w, _ = pixels.shape
    data = np.ascontiguousarray(pixels).tobytes()
    image = QImage(data, w, h, 3 * w, QImage.Format.Format_RGB888)
    return image.copy()  # detach from the bytes buffer


class MandalaCanvas(QWidget):
    """Drawing area: mouse drives the input path, a QTimer drives the render path"""

    def __init__(self, engine: MandalaEngine, frame_interval_ms: int = 17, parent=None):
        super().__init__(parent)
        self.engine = engine
        self.setFixedSize(engine.width, engine.height)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self._frame: Optional[FrameContents] = None
        self._surface_image: Optional[QImage] = None
        self._surface_dirty = True

        self.frame_timer = QTimer(self)
        self.frame_timer.timeout.connect(self._on_frame)
        self.frame_timer.start(frame_interval_ms)

    def mark_surface_dirty(self) -> None:
        self._frame = None
        self._surface_dirty = True
        self.update()

    def mousePressEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.engine.pointer_down()
        self.engine.pointer_move(int(pos.x()), int(pos.y()))

    def mouseMoveEvent(self, event):
        if not event.buttons() & Qt.MouseButton.LeftButton:
            return
        pos = event.position()
        self.engine.pointer_move(int(pos.x()), int(pos.y()))

    def mouseReleaseEvent(self, event):
        if event.button() != Qt.MouseButton.LeftButton:
            return
        self.engine.pointer_up()
        self._surface_dirty = True

    def _on_frame(self):
        self._frame = self.engine.render_tick()
        if self._frame.baked:
            self._surface_dirty = True
        self.update()

    def paintEvent(self, event):
        frame = self._frame
        if frame is None:
            frame = FrameContents(self.engine.surface, self.engine.points.snapshot(), False)
        if self._surface_dirty or self._surface_image is None:
            self._surface_image = surface_to_qimage(frame.surface.pixels)
            self._surface_dirty = False

        painter = QPainter(self)
        painter.fillRect(self.rect(), QColor(255, 255, 255))
        border = frame.surface.border
        painter.drawImage(-border, -border, self._surface_image)

        live = frame.live.to_array()
        if len(live):
            cols = self.width() // 2 + pixel_offset(live[:, 0])
            rows = self.height() // 2 + pixel_offset(live[:, 1])
            painter.setPen(QPen(QColor(0, 0, 0), 1))
            painter.drawPoints(QPolygon([QPoint(int(c), int(r)) for c, r in zip(cols, rows)]))
        painter.end()


class MandalaWindow(QMainWindow):
    """Top-level window; keys: s = save, c = clear"""

    def __init__(self, config: Optional[Config] = None, config_path: Optional[Path] = None):
        super().__init__()
        self.config_path = config_path
        self.config = config or load_config(config_path)
        set_log_level(self.config.log_level)

        self.engine = MandalaEngine.from_config(self.config)
        self.canvas = MandalaCanvas(self.engine, self.config.render.frame_interval_ms, self)
        self.setCentralWidget(self.canvas)
        self.setWindowTitle(f"MandalaRotate - {self.engine.segments} segments")
        self.statusBar().showMessage("Drag to draw | s: save | c: clear")

    def keyPressEvent(self, event):
        outcome = dispatch_key_command(self.engine, event.text(),
                                       save_name=self.config.export.save_name)
        if not outcome.handled:
            super().keyPressEvent(event)
            return

        self.canvas.mark_surface_dirty()
        if outcome.command == "save":
            if outcome.export is not None and outcome.export.ok:
                self.statusBar().showMessage(f"Saved {outcome.export.path}", 3000)
            else:
                self.statusBar().showMessage("Save failed", 3000)
        elif outcome.command == "clear":
            self.statusBar().showMessage("Cleared", 2000)

    def closeEvent(self, event):
        """Stop the render tick and persist config"""
        self.canvas.frame_timer.stop()
        stats = self.engine.stats
        log_event("INFO", "App", "Session ended", samples=stats.samples,
                  points=stats.points_generated, bakes=stats.bake_passes, saves=stats.saves)
        save_config(self.config, self.config_path)
        event.accept()


def main(config: Optional[Config] = None, config_path: Optional[Path] = None) -> int:
    app = QApplication.instance() or QApplication(sys.argv)
    app.setStyle('Fusion')

    window = MandalaWindow(config, config_path)
    window.show()
    return app.exec()


if __name__ == "__main__":
    sys.exit(main())
