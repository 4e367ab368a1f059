"""App window: hosts the PendulumView and its status bar.

The window title shows the elapsed seconds of the most recent frame.
"""

import logging

from PyQt6.QtWidgets import QMainWindow, QStatusBar

from pendulum.view import PendulumView

logger = logging.getLogger(__name__)


class AppWindow(QMainWindow):
    """Top-level window for the double pendulum."""

    WIDTH = 1280
    HEIGHT = 720

    def __init__(self):
        super().__init__()
        self.setWindowTitle("Pendulum")
        self.resize(self.WIDTH, self.HEIGHT)

        self.pendulum_view = PendulumView()
        self.setCentralWidget(self.pendulum_view)

        # --- Status bar ---
        self._status_bar = QStatusBar()
        self.setStatusBar(self._status_bar)
        self._status_bar.addWidget(self.pendulum_view.time_label)
        self._status_bar.addWidget(self.pendulum_view.energy_label)
        self._status_bar.addWidget(self.pendulum_view.drift_label)

        self.pendulum_view.frame_stepped.connect(self._on_frame_stepped)

        logger.info("Window created (%dx%d)", self.WIDTH, self.HEIGHT)

    def _on_frame_stepped(self, elapsed: float) -> None:
        self.setWindowTitle(f"{elapsed}")

    def showEvent(self, event):
        super().showEvent(event)
        self.pendulum_view.start()

    def closeEvent(self, event):
        self.pendulum_view.stop()
        super().closeEvent(event)
