#!/usr/bin/env python3
# tab-width:4

from __future__ import annotations

# pylint: disable=no-name-in-module
import sys
from collections.abc import Callable
from collections.abc import Iterable
from typing import Any

import numpy as np
from matplotlib.backends.backend_qtagg import FigureCanvasQTAgg as FigureCanvas
from matplotlib.figure import Figure
from PyQt6.QtCore import Qt
from PyQt6.QtCore import QTimer
from PyQt6.QtGui import QColor
from PyQt6.QtGui import QKeyEvent
from PyQt6.QtGui import QPalette
from PyQt6.QtWidgets import QApplication
from PyQt6.QtWidgets import QLabel
from PyQt6.QtWidgets import QMainWindow
from PyQt6.QtWidgets import QVBoxLayout
from PyQt6.QtWidgets import QWidget

from .BubbleOverlayChart import BubbleOverlayChart
from .ColorManager import DEFAULT_PALETTE
from .ColorManager import ColorManager


def enable_dark_mode(app_qt: QApplication) -> None:
    palette = QPalette()
    palette.setColor(QPalette.ColorRole.Window, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.WindowText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Base, QColor(35, 35, 35))
    palette.setColor(QPalette.ColorRole.Text, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Button, QColor(53, 53, 53))
    palette.setColor(QPalette.ColorRole.ButtonText, Qt.GlobalColor.white)
    palette.setColor(QPalette.ColorRole.Highlight, QColor(42, 130, 218))
    palette.setColor(QPalette.ColorRole.HighlightedText, Qt.GlobalColor.black)
    app_qt.setPalette(palette)


class BubbleOverlayViewer(QMainWindow):
    """
    Qt window showing a bubble overlay on top of an image.

    Keys:
    - q / Esc: close
    - r: full render
    - c: clear selection and redraw
    - d: toggle the pointer position readout

    With refresh_interval_ms set, the dataset source is re-read and the
    overlay redrawn on a timer, so a callable data source can feed live
    values.
    """

    def __init__(
        self,
        image: np.ndarray,
        points: Iterable[Any],
        data: Callable[[], Iterable[Any]] | Iterable[Any],
        min_bubble_r: None | float = None,
        max_bubble_r: None | float = None,
        colormap: str = DEFAULT_PALETTE,
        transition_duration: float = 750,
        refresh_interval_ms: None | int = None,
        debug: bool = False,
        title: str = "Bubble Overlay",
    ):
        # Ensure a QApplication exists, and track ownership
        self._owns_qapp = False
        self._app = QApplication.instance()
        if self._app is None:
            self._app = QApplication(sys.argv)
            self._owns_qapp = True

        super().__init__()

        if not isinstance(image, np.ndarray):
            raise TypeError("image must be a numpy.ndarray")

        self.fig = Figure(facecolor="black")
        self.canvas = FigureCanvas(self.fig)
        self.ax = self.fig.add_axes([0.0, 0.0, 1.0, 1.0])
        self.ax.imshow(image)
        self.ax.set_axis_off()

        self.chart = (
            BubbleOverlayChart(self.ax)
            .set_data(data)
            .set_colors(ColorManager(colormap=colormap))
            .set_min_bubble_r(min_bubble_r)
            .set_max_bubble_r(max_bubble_r)
            .set_transition_duration(transition_duration)
            .add_points(points)
        )
        self.chart.signals.filtered.connect(self._on_filtered)
        self.chart.signals.pointsReset.connect(self._update_status)

        self.canvas.mpl_connect("key_press_event", self.on_matplotlib_key_press)
        self.canvas.setFocusPolicy(Qt.FocusPolicy.StrongFocus)

        self._setup_ui(title)

        self.chart.render()
        if debug:
            self.chart.debug(True)
        self._update_status()

        self.refresh_timer = None
        if refresh_interval_ms:
            self.refresh_timer = QTimer()
            self.refresh_timer.timeout.connect(self.on_refresh_timer)
            self.refresh_timer.start(refresh_interval_ms)

        print(f"[INFO] Loaded {len(self.chart.points):,} point(s)")
        print(f"[INFO] Radius range: {self.chart.radius_range}")

    # ===== UI SETUP =====

    def _setup_ui(self, title: str):
        central = QWidget()
        layout = QVBoxLayout()
        layout.setContentsMargins(
            0,
            0,
            0,
            0,
        )
        layout.setSpacing(0)
        layout.addWidget(self.canvas, 1)

        self.status_label = QLabel("")
        layout.addWidget(self.status_label)

        central.setLayout(layout)
        self.setCentralWidget(central)
        self.setWindowTitle(title)

    def _update_status(self):
        filters = ", ".join(str(f) for f in self.chart.filters) or "none"
        self.status_label.setText(
            f"{len(self.chart.points)} point(s) | selected: {filters}"
        )

    # ===== SIGNAL HANDLERS =====

    def _on_filtered(self, key):
        print(f"[INFO] Selection toggled: {key!r}")
        self._update_status()

    def on_refresh_timer(self):
        """Re-read the data source and redraw."""
        self.chart.redraw()

    # ===== KEYBOARD EVENTS =====

    def on_matplotlib_key_press(self, event):
        if event.key in ("q", "escape"):
            print(f"[INFO] '{event.key}' pressed, closing viewer.")
            self.close()
        elif event.key == "r":
            self.chart.render()
        elif event.key == "c":
            self.chart.filter_all()
            self.chart.redraw()
        elif event.key == "d":
            self.chart.debug(not self.chart.diagnostics.enabled)

    def keyPressEvent(self, event: QKeyEvent):
        if event.key() in (Qt.Key.Key_Escape, Qt.Key.Key_Q):
            print("[INFO] Closing viewer.")
            self.close()
            return
        super().keyPressEvent(event)

    # ===== LIFECYCLE METHODS =====

    def __enter__(self) -> BubbleOverlayViewer:
        return self

    def __exit__(
        self,
        exc_type,
        exc,
        tb,
    ) -> None:
        self.shutdown()
        return None

    def shutdown(self) -> None:
        if self.refresh_timer is not None:
            self.refresh_timer.stop()
            self.refresh_timer = None
        if self.chart.container is not None:
            self.chart.container.disconnect()
        super().close()
        if self._owns_qapp and self._app is not None:
            self._app.quit()

    def closeEvent(self, event):
        if self.refresh_timer is not None:
            self.refresh_timer.stop()
            self.refresh_timer = None
        event.accept()

    def show_gui(self):
        self.show()
        self.raise_()
        self.activateWindow()

        try:
            self._app.exec()
        except KeyboardInterrupt:
            pass
