"""Grid view showing one maze and one solver's path."""

from typing import Dict, Optional, Sequence

from PySide6.QtWidgets import QGraphicsView, QGraphicsScene
from PySide6.QtGui import QPainter
from PySide6.QtCore import Qt, QTimer, Signal

from ..domain.types import Coord, MazeProblem, SolveResult
from .tiles import CellTile


class MazeView(QGraphicsView):
    """
    Graphics view for one comparison panel.

    The maze is drawn once per problem; solver paths are revealed cell by
    cell with a QTimer, or all at once when animation is skipped.
    """

    # Emitted when the path has been fully drawn
    animation_finished = Signal()

    def __init__(self, parent=None):
        super().__init__(parent)
        self.scene = QGraphicsScene()
        self.setScene(self.scene)

        self.tiles: Dict[Coord, CellTile] = {}
        self.tile_size = 20.0
        self.show_costs = False

        self._path: Sequence[Coord] = ()
        self._revealed = 0
        self._timer = QTimer(self)
        self._timer.timeout.connect(self._on_timer_tick)

        self.setRenderHint(QPainter.Antialiasing)
        self.setHorizontalScrollBarPolicy(Qt.ScrollBarAsNeeded)
        self.setVerticalScrollBarPolicy(Qt.ScrollBarAsNeeded)

    def show_maze(self, problem: Optional[MazeProblem]):
        """Redraw the scene for a new maze."""
        self.stop_animation()
        self.scene.clear()
        self.tiles.clear()
        self._path = ()
        if problem is None:
            return

        grid = problem.grid
        max_cost = int(grid.costs.max())
        self.scene.setSceneRect(0, 0, grid.cols * self.tile_size, grid.rows * self.tile_size)
        for row in range(grid.rows):
            for col in range(grid.cols):
                tile = CellTile(row, col, self.tile_size, grid.cost_of(row, col), max_cost)
                tile.set_show_cost(self.show_costs)
                self.scene.addItem(tile)
                self.tiles[(row, col)] = tile

        self.tiles[problem.start].set_role("start")
        self.tiles[problem.goal].set_role("goal")
        self.fit_maze()

    def fit_maze(self):
        if self.tiles:
            self.fitInView(self.scene.sceneRect(), Qt.KeepAspectRatio)

    def resizeEvent(self, event):
        super().resizeEvent(event)
        self.fit_maze()

    def show_result(self, result: SolveResult, interval_ms: int = 30, animate: bool = True):
        """
        Draw a solver's path.

        Args:
            result: Result whose path is drawn (nothing is drawn on failure)
            interval_ms: Delay between revealed cells
            animate: False draws the whole path immediately
        """
        self.clear_path()
        self._path = result.path if result.success else ()
        if not animate or not self._path:
            self.skip_animation()
            return
        self._timer.start(max(1, interval_ms))

    def set_interval(self, interval_ms: int):
        """Change the animation speed of a running reveal."""
        if self._timer.isActive():
            self._timer.setInterval(max(1, interval_ms))

    def skip_animation(self):
        """Reveal the rest of the path at once."""
        self._timer.stop()
        for coord in self._path[self._revealed:]:
            self._mark(coord)
        self._revealed = len(self._path)
        self.animation_finished.emit()

    def stop_animation(self):
        self._timer.stop()
        self._revealed = 0

    def clear_path(self):
        """Remove any drawn path."""
        self.stop_animation()
        for tile in self.tiles.values():
            tile.set_on_path(False)

    def set_show_costs(self, show: bool):
        """Enable or disable cost display on all tiles."""
        self.show_costs = show
        for tile in self.tiles.values():
            tile.set_show_cost(show)

    def is_animating(self) -> bool:
        return self._timer.isActive()

    def _mark(self, coord: Coord):
        tile = self.tiles.get(coord)
        if tile is not None:
            tile.set_on_path(True)

    def _on_timer_tick(self):
        if self._revealed >= len(self._path):
            self._timer.stop()
            self.animation_finished.emit()
            return
        self._mark(self._path[self._revealed])
        self._revealed += 1
