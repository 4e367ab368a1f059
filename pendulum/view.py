"""Pendulum view: drives the simulation from a frame timer.

Owns the DoublePendulum, measures the elapsed time of each frame, calls
``simulation.step`` once per frame and hands the new positions to the canvas.
"""

import logging
import math

from PyQt6.QtCore import QElapsedTimer, QTimer, pyqtSignal
from PyQt6.QtWidgets import QWidget, QHBoxLayout, QLabel

from model import DoublePendulum
from simulation import Formula, Integrator, step, total_energy
from pendulum.canvas import PendulumCanvas

logger = logging.getLogger(__name__)


def frame_times(elapsed_ms, max_dt):
    """Split a frame's measured time into (elapsed, step_dt) in seconds.

    ``elapsed`` is the true wall-clock time since the last frame and is what
    the window title shows; ``step_dt`` is the same value capped at ``max_dt``
    and is what the integrator receives.
    """
    elapsed = elapsed_ms / 1000.0
    return elapsed, min(elapsed, max_dt)


class PendulumView(QWidget):
    """Canvas + simulation wiring for a single double pendulum."""

    FPS = 60
    # Longest step fed to the integrator after a stalled frame
    MAX_FRAME_DT = 0.1
    INTEGRATOR = Integrator.RK4
    FORMULA = Formula.STANDARD

    # Pixel units: origin at the window centre, y up
    DEFAULT_ORIGIN = (0.0, 0.0)
    DEFAULT_GRAVITY = 100.0
    DEFAULT_TOP = (1.0, 150.0, math.pi)      # mass, length, angle
    DEFAULT_BOTTOM = (1.0, 150.0, 3.0)

    # Emitted after each step with the frame's uncapped elapsed seconds
    frame_stepped = pyqtSignal(float)

    def __init__(self, pendulum=None, parent=None):
        super().__init__(parent)

        self.canvas = PendulumCanvas()
        layout = QHBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.addWidget(self.canvas)

        # Status bar labels (AppWindow will place these in a real status bar)
        self.time_label = QLabel()
        self.energy_label = QLabel()
        self.drift_label = QLabel()

        self.pendulum = pendulum if pendulum is not None else self.default_pendulum()
        self.sim_time = 0.0
        self.initial_energy = total_energy(
            self.pendulum.state, self.pendulum.params,
        )
        self._reported_non_finite = False

        self.clock = QElapsedTimer()
        self.timer = QTimer()
        self.timer.setInterval(int(1000 / self.FPS))
        self.timer.timeout.connect(self._on_timer)

        self._update_display()

    @classmethod
    def default_pendulum(cls):
        top_mass, top_length, top_angle = cls.DEFAULT_TOP
        bottom_mass, bottom_length, bottom_angle = cls.DEFAULT_BOTTOM
        return DoublePendulum(
            cls.DEFAULT_ORIGIN[0], cls.DEFAULT_ORIGIN[1], cls.DEFAULT_GRAVITY,
            top_mass, top_length, top_angle,
            bottom_mass, bottom_length, bottom_angle,
        )

    # -- Playback --

    def start(self):
        logger.info(
            "Starting simulation: integrator=%s formula=%s fps=%d",
            self.INTEGRATOR.value, self.FORMULA.value, self.FPS,
        )
        self.clock.start()
        self.timer.start()

    def stop(self):
        self.timer.stop()

    def _on_timer(self):
        elapsed, dt = frame_times(self.clock.restart(), self.MAX_FRAME_DT)

        step(self.pendulum, dt, self.INTEGRATOR, self.FORMULA)
        self.sim_time += dt

        if not self._reported_non_finite and not self.pendulum.is_finite():
            self._reported_non_finite = True
            logger.warning(
                "Pendulum state is no longer finite at t=%.3f s: %r",
                self.sim_time, self.pendulum,
            )

        self._update_display()
        self.frame_stepped.emit(elapsed)

    def _update_display(self):
        self.canvas.set_pendulum(self.pendulum)

        energy = total_energy(self.pendulum.state, self.pendulum.params)
        drift = energy - self.initial_energy
        self.time_label.setText(f"  t = {self.sim_time:.3f} s  ")
        self.energy_label.setText(f"  E = {energy:.4f}  ")
        self.drift_label.setText(f"  \u0394E = {drift:+.6f}  ")
