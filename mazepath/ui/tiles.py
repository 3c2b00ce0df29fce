"""Grid tile graphics items for the maze viewer."""

from PySide6.QtWidgets import QGraphicsRectItem
from PySide6.QtGui import QPainter, QBrush, QPen, QFont, QColor
from PySide6.QtCore import Qt

from ..domain.types import WALL


class CellTile(QGraphicsRectItem):
    """Graphics item for one maze cell, shaded by its cost."""

    # Color scheme for cell roles
    COLORS = {
        "wall": QColor(64, 64, 64),          # Dark gray
        "start": QColor(0, 200, 0),          # Green
        "goal": QColor(255, 215, 0),         # Gold
        "path": QColor(255, 80, 80),         # Red
    }
    LIGHTEST = QColor(245, 245, 245)
    DARKEST = QColor(150, 170, 200)

    def __init__(self, row: int, col: int, size: float, cost: int, max_cost: int):
        super().__init__(0, 0, size, size)
        self.row = row
        self.col = col
        self.size = size
        self.cost = cost
        self.max_cost = max(1, max_cost)
        self.role = "wall" if cost == WALL else "open"
        self.on_path = False
        self.show_cost = False

        self.setPos(col * size, row * size)
        self.setAcceptHoverEvents(True)
        self.setToolTip(f"({row}, {col}) cost {cost}" if cost != WALL else f"({row}, {col}) wall")
        self.update_appearance()

    def _cost_color(self) -> QColor:
        """Blend from light to dark as the cell gets more expensive."""
        t = min(1.0, max(0.0, self.cost / self.max_cost))
        return QColor(
            int(self.LIGHTEST.red() + (self.DARKEST.red() - self.LIGHTEST.red()) * t),
            int(self.LIGHTEST.green() + (self.DARKEST.green() - self.LIGHTEST.green()) * t),
            int(self.LIGHTEST.blue() + (self.DARKEST.blue() - self.LIGHTEST.blue()) * t),
        )

    def update_appearance(self):
        """Update the tile appearance from its role and path membership."""
        if self.role in ("wall", "start", "goal"):
            color = self.COLORS[self.role]
        elif self.on_path:
            color = self.COLORS["path"]
        else:
            color = self._cost_color()
        self.setBrush(QBrush(color))

        if self.role == "wall":
            self.setPen(QPen(Qt.black, 1))
        else:
            self.setPen(QPen(Qt.gray, 0.5))

    def set_role(self, role: str):
        """Mark the tile as start or goal."""
        self.role = role
        self.update_appearance()

    def set_on_path(self, on_path: bool):
        if self.on_path != on_path:
            self.on_path = on_path
            self.update_appearance()

    def set_show_cost(self, show: bool):
        """Enable or disable cost display."""
        self.show_cost = show
        self.update()

    def paint(self, painter: QPainter, option, widget=None):
        """Paint the tile with its cost if enabled and the tile is large enough."""
        super().paint(painter, option, widget)
        if self.show_cost and self.size > 18 and self.role != "wall":
            font = QFont("Arial", max(6, int(self.size / 3)))
            painter.setFont(font)
            painter.setPen(Qt.black)
            painter.drawText(self.rect(), Qt.AlignCenter, str(self.cost))

    def hoverEnterEvent(self, event):
        """Highlight on hover."""
        if self.role != "wall":
            self.setBrush(QBrush(self.brush().color().lighter(120)))
        super().hoverEnterEvent(event)

    def hoverLeaveEvent(self, event):
        self.update_appearance()
        super().hoverLeaveEvent(event)
