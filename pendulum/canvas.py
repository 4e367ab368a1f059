"""Pendulum canvas: QPainter rendering of the double pendulum.

Draws the fixed origin, both rods and both bobs. World coordinates are
y-up with (0, 0) at the centre of the widget.
"""

from PyQt6.QtCore import Qt, QPointF
from PyQt6.QtGui import QPainter, QPen, QBrush, QColor
from PyQt6.QtWidgets import QWidget

BOB_DIAMETER = 25.0
ROD_WIDTH = 5.0


def to_pixel(x, y, width, height):
    """Convert world coords (y up, origin at centre) to pixel coords."""
    return width / 2 + x, height / 2 - y


class PendulumCanvas(QWidget):
    """Custom widget that draws one DoublePendulum using QPainter."""

    def __init__(self, parent=None):
        super().__init__(parent)
        self.origin = (0.0, 0.0)
        self.bob_positions = ((0.0, 0.0), (0.0, 0.0))
        self.setMinimumSize(400, 400)

    def set_pendulum(self, pendulum):
        """Copy the positions to draw and schedule a repaint."""
        self.origin = pendulum.origin
        self.bob_positions = (pendulum.top.position, pendulum.bottom.position)
        self.update()

    def _to_pixel(self, x, y):
        return to_pixel(x, y, self.width(), self.height())

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), QColor(255, 255, 255))

        origin_px = QPointF(*self._to_pixel(*self.origin))
        top_px = QPointF(*self._to_pixel(*self.bob_positions[0]))
        bottom_px = QPointF(*self._to_pixel(*self.bob_positions[1]))

        black = QColor(0, 0, 0)

        # Rods
        rod_pen = QPen(black)
        rod_pen.setWidthF(ROD_WIDTH)
        painter.setPen(rod_pen)
        painter.drawLine(origin_px, top_px)
        painter.drawLine(top_px, bottom_px)

        # Origin and bobs
        painter.setPen(Qt.PenStyle.NoPen)
        painter.setBrush(QBrush(black))
        origin_r = BOB_DIAMETER / 4
        bob_r = BOB_DIAMETER / 2
        painter.drawEllipse(origin_px, origin_r, origin_r)
        painter.drawEllipse(top_px, bob_r, bob_r)
        painter.drawEllipse(bottom_px, bob_r, bob_r)

        painter.end()
