"""Main window comparing the four solver variants side by side."""

from typing import List

from PySide6.QtWidgets import (
    QMainWindow, QVBoxLayout, QHBoxLayout, QGridLayout, QWidget, QPushButton,
    QLabel, QSlider, QComboBox, QCheckBox, QSpinBox, QStatusBar, QGroupBox,
    QTextEdit, QFileDialog, QMessageBox
)
from PySide6.QtCore import Qt
from PySide6.QtGui import QKeySequence, QShortcut, QFont

from ..app.controller import ComparisonController
from ..domain.types import MazeProblem, SolveResult
from .grid_view import MazeView


class SolverPanel(QWidget):
    """One solver's maze view with its statistics line."""

    def __init__(self, title: str, parent=None):
        super().__init__(parent)
        layout = QVBoxLayout(self)
        layout.setContentsMargins(2, 2, 2, 2)

        self.title_label = QLabel(title)
        self.title_label.setAlignment(Qt.AlignCenter)
        self.title_label.setStyleSheet("font-weight: bold;")
        self.view = MazeView()
        self.stats_label = QLabel("-")
        self.stats_label.setAlignment(Qt.AlignCenter)

        layout.addWidget(self.title_label)
        layout.addWidget(self.view, 1)
        layout.addWidget(self.stats_label)

    def show_maze(self, problem: MazeProblem):
        self.view.show_maze(problem)
        self.stats_label.setText("Waiting...")

    def show_result(self, result: SolveResult, interval_ms: int, animate: bool):
        if result.success:
            self.stats_label.setText(
                f"Cost {result.cost} | {result.elapsed_ms:.1f} ms | "
                f"{result.nodes_expanded} nodes | {len(result.path)} cells")
        else:
            self.stats_label.setText(f"No path | {result.elapsed_ms:.1f} ms | {result.nodes_expanded} nodes")
        self.view.show_result(result, interval_ms, animate)


class MainWindow(QMainWindow):
    """Main application window."""

    def __init__(self, controller: ComparisonController):
        super().__init__()
        self.controller = controller

        self.setWindowTitle("Maze Pathfinding Comparison")
        self.setMinimumSize(1100, 800)

        self.panels: List[SolverPanel] = []
        self._create_ui()
        self._setup_connections()
        self._setup_shortcuts()

        self._refresh_maze_list()
        self._update_button_states(False)

    def _create_ui(self):
        """Create the user interface."""
        central_widget = QWidget()
        self.setCentralWidget(central_widget)
        main_layout = QVBoxLayout(central_widget)

        main_layout.addLayout(self._create_controls())

        panels_layout = QGridLayout()
        for index, name in enumerate(self.controller.solver_names):
            panel = SolverPanel(name)
            self.panels.append(panel)
            panels_layout.addWidget(panel, index // 2, index % 2)
        main_layout.addLayout(panels_layout, 1)

        self.benchmark_output = QTextEdit()
        self.benchmark_output.setReadOnly(True)
        self.benchmark_output.setFont(QFont("Courier", 9))
        self.benchmark_output.setMaximumHeight(160)
        self.benchmark_output.setPlaceholderText("Benchmark results appear here")
        main_layout.addWidget(self.benchmark_output)

        self.status_bar = QStatusBar()
        self.setStatusBar(self.status_bar)
        self.status_bar.showMessage("Ready - pick a maze and press Solve | Q to quit, Enter to solve")

    def _create_controls(self) -> QHBoxLayout:
        """Create the control panel."""
        layout = QHBoxLayout()

        # Maze selection
        maze_group = QGroupBox("Maze")
        maze_layout = QHBoxLayout(maze_group)
        self.maze_combo = QComboBox()
        self.maze_combo.setMinimumWidth(160)
        self.open_btn = QPushButton("Open...")
        maze_layout.addWidget(self.maze_combo)
        maze_layout.addWidget(self.open_btn)

        maze_layout.addWidget(QLabel("Size:"))
        self.size_spin = QSpinBox()
        self.size_spin.setRange(5, 151)
        self.size_spin.setValue(31)
        maze_layout.addWidget(self.size_spin)
        self.generate_btn = QPushButton("Generate")
        maze_layout.addWidget(self.generate_btn)

        # Run controls
        run_group = QGroupBox("Run")
        run_layout = QHBoxLayout(run_group)
        run_layout.addWidget(QLabel("Seed:"))
        self.seed_spin = QSpinBox()
        self.seed_spin.setRange(-1, 1_000_000)
        self.seed_spin.setSpecialValueText("random")
        self.seed_spin.setValue(self.controller.seed if self.controller.seed is not None else -1)
        run_layout.addWidget(self.seed_spin)

        self.solve_btn = QPushButton("Solve")
        self.benchmark_btn = QPushButton("Benchmark")
        run_layout.addWidget(self.solve_btn)
        run_layout.addWidget(self.benchmark_btn)

        # Animation controls
        anim_group = QGroupBox("Animation")
        anim_layout = QHBoxLayout(anim_group)
        anim_layout.addWidget(QLabel("Speed"))
        self.speed_slider = QSlider(Qt.Horizontal)
        self.speed_slider.setRange(1, 200)
        self.speed_slider.setValue(30)
        self.speed_slider.setInvertedAppearance(True)  # Right = faster
        anim_layout.addWidget(self.speed_slider)
        self.skip_check = QCheckBox("Skip animation")
        self.costs_check = QCheckBox("Show costs")
        anim_layout.addWidget(self.skip_check)
        anim_layout.addWidget(self.costs_check)

        layout.addWidget(maze_group)
        layout.addWidget(run_group)
        layout.addWidget(anim_group)
        return layout

    def _setup_connections(self):
        """Setup signal connections."""
        self.maze_combo.activated.connect(self._on_maze_selected)
        self.open_btn.clicked.connect(self._on_open_clicked)
        self.generate_btn.clicked.connect(self._on_generate_clicked)
        self.solve_btn.clicked.connect(self._on_solve_clicked)
        self.benchmark_btn.clicked.connect(self._on_benchmark_clicked)
        self.speed_slider.valueChanged.connect(self._on_speed_changed)
        self.skip_check.toggled.connect(self._on_skip_toggled)
        self.costs_check.toggled.connect(self._on_costs_toggled)

        self.controller.maze_changed.connect(self._on_maze_changed)
        self.controller.solver_finished.connect(self._on_solver_finished)
        self.controller.run_finished.connect(self._on_run_finished)
        self.controller.benchmark_finished.connect(self._on_benchmark_finished)
        self.controller.busy_changed.connect(self._update_button_states)
        self.controller.error_occurred.connect(self._on_error)

    def _setup_shortcuts(self):
        """Setup keyboard shortcuts."""
        QShortcut(QKeySequence("Q"), self, self.close)
        QShortcut(QKeySequence(Qt.Key_Return), self, self._on_solve_clicked)

    def _refresh_maze_list(self):
        self.maze_combo.clear()
        for path in self.controller.maze_files():
            self.maze_combo.addItem(path.name, str(path))
        if self.maze_combo.count():
            self._on_maze_selected(0)

    # Event Handlers

    def _current_seed(self):
        value = self.seed_spin.value()
        return None if value < 0 else value

    def _on_maze_selected(self, index: int):
        filepath = self.maze_combo.itemData(index)
        if filepath:
            self.controller.load_maze(filepath)

    def _on_open_clicked(self):
        filepath, _ = QFileDialog.getOpenFileName(
            self, "Open Maze", str(self.controller.data_dir), "Maze files (*.txt *.json)")
        if filepath:
            self.controller.load_maze(filepath)

    def _on_generate_clicked(self):
        size = self.size_spin.value()
        self.controller.generate_maze(size, size, seed=self._current_seed())

    def _on_solve_clicked(self):
        if self.controller.is_busy():
            return
        self.controller.seed = self._current_seed()
        for panel in self.panels:
            panel.view.clear_path()
            panel.stats_label.setText("Solving...")
        if self.controller.solve_all():
            self.status_bar.showMessage("Solving...")

    def _on_benchmark_clicked(self):
        if self.controller.run_benchmark():
            self.benchmark_output.setPlainText(f"Benchmarking {self.controller.data_dir} ...")
            self.status_bar.showMessage("Benchmark running...")

    def _on_speed_changed(self, value: int):
        for panel in self.panels:
            panel.view.set_interval(value)

    def _on_skip_toggled(self, checked: bool):
        if checked:
            for panel in self.panels:
                if panel.view.is_animating():
                    panel.view.skip_animation()

    def _on_costs_toggled(self, checked: bool):
        for panel in self.panels:
            panel.view.set_show_costs(checked)

    def _on_maze_changed(self, problem: MazeProblem):
        for panel in self.panels:
            panel.show_maze(problem)
        grid = problem.grid
        self.status_bar.showMessage(
            f"{problem.name}: {grid.rows}x{grid.cols}, start {problem.start}, goal {problem.goal}")

    def _on_solver_finished(self, index: int, result: SolveResult):
        if 0 <= index < len(self.panels):
            self.panels[index].show_result(result, self.speed_slider.value(), not self.skip_check.isChecked())

    def _on_run_finished(self):
        self.status_bar.showMessage("All solvers finished")

    def _on_benchmark_finished(self, table: str):
        self.benchmark_output.setPlainText(table)
        self.status_bar.showMessage("Benchmark finished")

    def _update_button_states(self, busy: bool):
        """Disable run controls while a background job is active."""
        for widget in (self.solve_btn, self.benchmark_btn, self.generate_btn,
                       self.open_btn, self.maze_combo):
            widget.setEnabled(not busy)

    def _on_error(self, message: str):
        self.status_bar.showMessage(message)
        QMessageBox.warning(self, "Error", message)

    def closeEvent(self, event):
        """Handle window close event."""
        self.controller.shutdown()
        super().closeEvent(event)
