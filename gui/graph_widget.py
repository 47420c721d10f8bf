from typing import Dict, List

from PyQt6.QtWidgets import QWidget
from PyQt6.QtGui import QPainter, QColor, QPen, QFont, QPainterPath, QPalette
from PyQt6.QtCore import Qt

from babybrain.modulator import HORMONES


HORMONE_QCOLORS = {
    'dopamine': QColor(255, 200, 50),
    'stress': QColor(255, 50, 50),
    'serotonin': QColor(50, 100, 255),
    'noradrenaline': QColor(255, 150, 50),
    'endorphins': QColor(200, 100, 255),
}


class HormoneGraphWidget(QWidget):
    """
    Real-time graph of the five hormone levels, one point per interaction.
    """

    def __init__(self, parent=None, max_points=200):
        super().__init__(parent)
        self.setMinimumHeight(150)
        self.max_points = max_points

        self.history: Dict[str, List[float]] = {name: [] for name in HORMONES}

        self.setBackgroundRole(QPalette.ColorRole.NoRole)

    def __len__(self):
        return len(self.history[HORMONES[0]])

    def add_data_point(self, levels: Dict[str, float]):
        """Append one sample; missing hormones are recorded as 0."""
        for name in HORMONES:
            self.history[name].append(float(levels.get(name, 0.0)))

        # Trim
        if len(self) > self.max_points:
            for series in self.history.values():
                series.pop(0)

        self.update()

    def clear(self):
        for series in self.history.values():
            series.clear()
        self.update()

    def paintEvent(self, event):
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        # Background
        painter.fillRect(self.rect(), QColor(40, 44, 52))

        if not len(self):
            return

        margin = 10
        w = self.width() - margin * 2
        h = self.height() - margin * 2 - 10

        x0 = margin
        y0 = self.height() - margin

        # Levels live in [0, 1]
        painter.setPen(QPen(QColor(60, 60, 60), 1, Qt.PenStyle.DashLine))
        painter.drawLine(x0, y0, x0 + w, y0)
        painter.drawLine(x0, y0 - h, x0 + w, y0 - h)

        x_step = w / max(self.max_points - 1, 1)
        y_scale = h

        for name in HORMONES:
            self._draw_line(painter, self.history[name], HORMONE_QCOLORS[name], x0, y0, x_step, y_scale)

        self._draw_legend(painter)

    def _draw_line(self, painter, data, color, x0, y0, x_step, y_scale):
        if len(data) < 2:
            return

        path = QPainterPath()
        path.moveTo(x0, y0 - data[0] * y_scale)

        for i, val in enumerate(data[1:], 1):
            path.lineTo(x0 + i * x_step, y0 - val * y_scale)

        painter.setPen(QPen(color, 2))
        painter.drawPath(path)

    def _draw_legend(self, painter):
        painter.setFont(QFont("Segoe UI", 8))
        x = 10
        for name in HORMONES:
            painter.setPen(HORMONE_QCOLORS[name])
            painter.drawText(x, 15, name.capitalize())
            x += 8 * len(name) + 12
