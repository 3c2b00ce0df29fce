"""Application controller connecting the comparison viewer to the solvers."""

import logging
from pathlib import Path
from typing import List, Optional, Sequence

from PySide6.QtCore import QObject, QThread, Signal

from ..domain.types import MazeProblem
from ..utils.grid_factory import generate_maze_problem
from ..utils.maze_loader import MazeFormatError, list_maze_files, load_maze, load_maze_directory
from .benchmark import default_solvers, format_table, run_benchmark

logger = logging.getLogger(__name__)


class SolveWorker(QObject):
    """Worker that runs every solver on one maze off the UI thread."""

    result_ready = Signal(int, object)  # panel index, SolveResult
    finished = Signal()
    error_occurred = Signal(str)

    def __init__(self, problem: MazeProblem, solvers: Sequence):
        super().__init__()
        self.problem = problem
        self.solvers = list(solvers)

    def run(self):
        """Solve with each solver in turn, reporting results as they arrive."""
        try:
            for index, solver in enumerate(self.solvers):
                result = solver.solve(self.problem.grid, self.problem.start, self.problem.goal)
                self.result_ready.emit(index, result)
        except Exception as e:
            logger.exception("Solver run failed on %s", self.problem.name)
            self.error_occurred.emit(f"Solver run failed: {e}")
        finally:
            self.finished.emit()


class BenchmarkWorker(QObject):
    """Worker that benchmarks every maze in a directory."""

    table_ready = Signal(str)
    finished = Signal()
    error_occurred = Signal(str)

    def __init__(self, directory: Path, seed: Optional[int]):
        super().__init__()
        self.directory = directory
        self.seed = seed

    def run(self):
        try:
            problems = [p for _, p in load_maze_directory(self.directory) if p is not None]
            rows = run_benchmark(problems, default_solvers(self.seed))
            self.table_ready.emit(format_table(rows))
        except Exception as e:
            logger.exception("Benchmark failed on %s", self.directory)
            self.error_occurred.emit(f"Benchmark failed: {e}")
        finally:
            self.finished.emit()


class ComparisonController(QObject):
    """
    Controller that owns the current maze and runs the solver variants.

    Signals:
        maze_changed: Emitted with the new MazeProblem
        solver_finished: Emitted per solver with (panel index, SolveResult)
        run_finished: Emitted when every solver has reported
        benchmark_finished: Emitted with the formatted benchmark table
        busy_changed: Emitted when a background job starts or ends
        error_occurred: Emitted when an error occurs
    """

    maze_changed = Signal(object)  # MazeProblem
    solver_finished = Signal(int, object)  # index, SolveResult
    run_finished = Signal()
    benchmark_finished = Signal(str)
    busy_changed = Signal(bool)
    error_occurred = Signal(str)

    def __init__(self, data_dir: Optional[str] = None, seed: Optional[int] = None):
        super().__init__()
        self._data_dir = Path(data_dir) if data_dir else Path("data")
        self._seed = seed
        self._solvers = default_solvers(seed)
        self._problem: Optional[MazeProblem] = None

        self._thread: Optional[QThread] = None
        self._worker: Optional[QObject] = None

    # Properties

    @property
    def problem(self) -> Optional[MazeProblem]:
        """Get the current maze."""
        return self._problem

    @property
    def solver_names(self) -> List[str]:
        return [solver.name for solver in self._solvers]

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    @seed.setter
    def seed(self, seed: Optional[int]):
        """Set the seed used by the genetic solvers."""
        self._seed = seed
        self._solvers = default_solvers(seed)

    def is_busy(self) -> bool:
        return self._thread is not None

    # Maze Management

    def maze_files(self) -> List[Path]:
        """Maze files in the data directory, naturally sorted."""
        return list_maze_files(self._data_dir)

    def load_maze(self, filepath) -> bool:
        """Load a maze file and make it current."""
        try:
            problem = load_maze(filepath)
        except (OSError, MazeFormatError) as e:
            logger.warning("Could not load %s: %s", filepath, e)
            self.error_occurred.emit(f"Failed to load maze: {e}")
            return False
        self._set_problem(problem)
        return True

    def generate_maze(self, rows: int, cols: int, seed: Optional[int] = None) -> bool:
        """Generate a weighted maze and make it current."""
        try:
            problem = generate_maze_problem(rows, cols, seed=seed, name=f"generated_{rows}x{cols}")
        except ValueError as e:
            self.error_occurred.emit(f"Failed to generate maze: {e}")
            return False
        self._set_problem(problem)
        return True

    def _set_problem(self, problem: MazeProblem):
        self._problem = problem
        logger.info("Current maze: %s (%dx%d)", problem.name, problem.grid.rows, problem.grid.cols)
        self.maze_changed.emit(problem)

    # Background Jobs

    def solve_all(self) -> bool:
        """Run every solver on the current maze in a worker thread."""
        if self._problem is None:
            self.error_occurred.emit("Load or generate a maze first")
            return False
        worker = SolveWorker(self._problem, self._solvers)
        worker.result_ready.connect(self.solver_finished)
        worker.finished.connect(self.run_finished)
        return self._start(worker)

    def run_benchmark(self) -> bool:
        """Benchmark every maze in the data directory in a worker thread."""
        worker = BenchmarkWorker(self._data_dir, self._seed)
        worker.table_ready.connect(self.benchmark_finished)
        return self._start(worker)

    def _start(self, worker: QObject) -> bool:
        if self.is_busy():
            self.error_occurred.emit("A run is already in progress")
            return False

        thread = QThread()
        thread.setObjectName("Mazepath-WorkerThread")
        worker.moveToThread(thread)
        worker.error_occurred.connect(self.error_occurred)
        worker.finished.connect(thread.quit)
        thread.started.connect(worker.run)
        thread.finished.connect(self._cleanup_thread)

        self._thread = thread
        self._worker = worker
        self.busy_changed.emit(True)
        thread.start()
        return True

    def _cleanup_thread(self):
        """Release the finished worker and its thread."""
        if self._worker is not None:
            self._worker.deleteLater()
        if self._thread is not None:
            self._thread.deleteLater()
        self._worker = None
        self._thread = None
        self.busy_changed.emit(False)

    def shutdown(self):
        """Wait for a running job before the application exits."""
        if self._thread is not None and self._thread.isRunning():
            self._thread.quit()
            self._thread.wait()
