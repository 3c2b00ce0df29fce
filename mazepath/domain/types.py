"""Core type definitions for the maze pathfinding engine."""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Sequence, Tuple

import numpy as np

# Coordinate type for grid positions, (row, col)
Coord = Tuple[int, int]

# Sentinel cost marking an impassable cell
WALL = -1


class OutOfBoundsError(IndexError):
    """Raised when a cell query falls outside the grid."""


class Grid:
    """
    Immutable rectangular grid of integer cell costs.

    Cells holding ``WALL`` are impassable, every other cell costs >= 0 to enter.
    The backing numpy array is copied on construction and flagged read-only,
    so one grid can be shared by any number of concurrent solves.
    """

    __slots__ = ("_costs", "_flat", "_rows", "_cols")

    def __init__(self, costs):
        array = np.array(costs, dtype=np.int64, copy=True)
        if array.ndim != 2:
            raise ValueError(f"Grid must be 2-dimensional, got {array.ndim} dimensions")
        if array.shape[0] == 0 or array.shape[1] == 0:
            raise ValueError(f"Grid dimensions must be positive, got {array.shape[0]}x{array.shape[1]}")
        if (array < WALL).any():
            raise ValueError(f"Cell costs must be >= 0 or the wall sentinel {WALL}")

        array.setflags(write=False)
        self._costs = array
        self._rows, self._cols = array.shape
        # Plain ints for the hot loops; numpy scalar access is slow per element
        self._flat: Tuple[int, ...] = tuple(array.ravel().tolist())

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> "Grid":
        """Build a grid from nested row lists, rejecting ragged input."""
        if not rows:
            raise ValueError("Grid must contain at least one row")
        width = len(rows[0])
        for i, row in enumerate(rows):
            if len(row) != width:
                raise ValueError(f"Inconsistent row length at row {i}: expected {width}, got {len(row)}")
        return cls(rows)

    @property
    def costs(self) -> np.ndarray:
        """Read-only view of the cost array."""
        return self._costs

    @property
    def rows(self) -> int:
        return self._rows

    @property
    def cols(self) -> int:
        return self._cols

    @property
    def size(self) -> int:
        """Total number of cells."""
        return self._rows * self._cols

    def in_bounds(self, row: int, col: int) -> bool:
        """Check if coordinate is within grid bounds."""
        return 0 <= row < self._rows and 0 <= col < self._cols

    def is_valid(self, row: int, col: int) -> bool:
        """Check if coordinate is in bounds and not a wall."""
        return (0 <= row < self._rows and 0 <= col < self._cols
                and self._flat[row * self._cols + col] != WALL)

    def is_wall(self, row: int, col: int) -> bool:
        return self.cost_of(row, col) == WALL

    def cost_of(self, row: int, col: int) -> int:
        """
        Get the cost of entering a cell.

        Raises:
            OutOfBoundsError: If the coordinate lies outside the grid
        """
        if not (0 <= row < self._rows and 0 <= col < self._cols):
            raise OutOfBoundsError(f"Cell ({row}, {col}) is outside the {self._rows}x{self._cols} grid")
        return self._flat[row * self._cols + col]

    def cost_at(self, index: int) -> int:
        """Cost lookup by flattened index (no bounds check)."""
        return self._flat[index]

    def index_is_valid(self, index: int) -> bool:
        return 0 <= index < len(self._flat) and self._flat[index] != WALL

    def to_index(self, row: int, col: int) -> int:
        """Convert (row, col) to the flattened index row*cols+col."""
        return row * self._cols + col

    def to_coord(self, index: int) -> Coord:
        """Convert a flattened index back to (row, col)."""
        return divmod(index, self._cols)

    def min_step_cost(self, exclude: Iterable[int] = ()) -> int:
        """
        Smallest cost of any passable cell, ignoring the flattened indices in
        exclude (0 if no such cell exists).
        """
        passable = self._costs != WALL
        flat = passable.ravel()
        for index in exclude:
            flat[index] = False
        costs = self._costs[passable]
        if costs.size == 0:
            return 0
        return int(costs.min())

    def wall_count(self) -> int:
        return int(np.count_nonzero(self._costs == WALL))

    def __repr__(self) -> str:
        return f"Grid({self._rows}x{self._cols}, walls={self.wall_count()})"


@dataclass(frozen=True)
class MazeProblem:
    """A grid together with its start and goal, passed by value to solvers."""
    grid: Grid
    start: Coord
    goal: Coord
    name: str = ""

    def __post_init__(self):
        for label, coord in (("Start", self.start), ("Goal", self.goal)):
            row, col = coord
            if not self.grid.in_bounds(row, col):
                raise ValueError(f"{label} position {coord} is out of bounds")
            if not self.grid.is_valid(row, col):
                raise ValueError(f"{label} position {coord} is on a wall")
        # Normalise to plain int tuples
        object.__setattr__(self, "start", (int(self.start[0]), int(self.start[1])))
        object.__setattr__(self, "goal", (int(self.goal[0]), int(self.goal[1])))


class SolveStatus(Enum):
    """Outcome of a single solve call."""
    SUCCESS = "Success"
    FAILED = "Failed"


@dataclass(frozen=True)
class SolveResult:
    """Result of a pathfinding operation."""
    status: SolveStatus
    path: Tuple[Coord, ...] = ()
    cost: int = -1
    elapsed: float = 0.0  # seconds
    nodes_expanded: int = 0
    algorithm: str = ""

    @property
    def success(self) -> bool:
        """Whether pathfinding was successful."""
        return self.status is SolveStatus.SUCCESS

    @property
    def elapsed_ms(self) -> float:
        return self.elapsed * 1000.0

    @classmethod
    def failed(cls, elapsed: float = 0.0, nodes_expanded: int = 0, algorithm: str = "") -> "SolveResult":
        """Failed result: empty path and cost -1."""
        return cls(SolveStatus.FAILED, (), -1, elapsed, nodes_expanded, algorithm)

    @classmethod
    def trivial(cls, start: Coord, algorithm: str = "") -> "SolveResult":
        """Zero-cost success for start == goal."""
        return cls(SolveStatus.SUCCESS, (start,), 0, 0.0, 0, algorithm)


@dataclass
class GeneticConfig:
    """Configuration for the genetic/memetic search engine."""
    population_size: int = 50
    max_generations: int = 100
    elite_fraction: float = 0.2
    mutation_rate: float = 0.1
    max_mutation_rate: float = 0.6
    mutation_boost: float = 1.5  # Multiplier applied on each stagnation response
    tournament_size: int = 5
    stagnation_threshold: int = 15
    convergence_threshold: int = 40  # Stagnant generations before stopping early
    immigrant_fraction: float = 0.2
    seed_attempts_per_individual: int = 20
    min_valid_seeds: int = 2
    goal_bias: float = 0.7  # Probability the seeding walk tries the goal-ward neighbor first
    walk_step_limit: Optional[int] = None  # None -> 4 * grid.size
    mutation_max_expansions: int = 100
    repair_window: int = 50
    repair_max_expansions: int = 200
    elite_repair_interval: int = 10  # 0 disables periodic elite polish
    final_repair: bool = True
    seed: Optional[int] = None

    def __post_init__(self):
        """Validate parameter ranges."""
        if self.population_size < 2:
            raise ValueError(f"population_size must be at least 2, got {self.population_size}")
        if self.max_generations < 1:
            raise ValueError(f"max_generations must be at least 1, got {self.max_generations}")
        for name in ("elite_fraction", "mutation_rate", "max_mutation_rate",
                     "immigrant_fraction", "goal_bias"):
            value = getattr(self, name)
            if not (0.0 <= value <= 1.0):
                raise ValueError(f"{name} must be between 0.0 and 1.0, got {value}")
        if self.max_mutation_rate < self.mutation_rate:
            raise ValueError("max_mutation_rate must not be below mutation_rate")
        if self.mutation_boost < 1.0:
            raise ValueError(f"mutation_boost must be >= 1.0, got {self.mutation_boost}")
        if self.tournament_size < 1:
            raise ValueError(f"tournament_size must be at least 1, got {self.tournament_size}")
        if self.stagnation_threshold < 1:
            raise ValueError(f"stagnation_threshold must be at least 1, got {self.stagnation_threshold}")
        if self.convergence_threshold <= self.stagnation_threshold:
            raise ValueError("convergence_threshold must be larger than stagnation_threshold")
        if self.min_valid_seeds < 1 or self.min_valid_seeds > self.population_size:
            raise ValueError(f"min_valid_seeds must be in [1, population_size], got {self.min_valid_seeds}")
        if self.seed_attempts_per_individual < 1:
            raise ValueError("seed_attempts_per_individual must be at least 1")
        if self.walk_step_limit is not None and self.walk_step_limit < 1:
            raise ValueError(f"walk_step_limit must be positive, got {self.walk_step_limit}")
        if self.repair_window < 2:
            raise ValueError(f"repair_window must be at least 2, got {self.repair_window}")
        for name in ("mutation_max_expansions", "repair_max_expansions"):
            if getattr(self, name) < 1:
                raise ValueError(f"{name} must be at least 1, got {getattr(self, name)}")
        if self.elite_repair_interval < 0:
            raise ValueError("elite_repair_interval must be >= 0")

    @property
    def elite_count(self) -> int:
        """Number of elites carried over verbatim (always at least one)."""
        return max(1, int(self.population_size * self.elite_fraction))

    @property
    def immigrant_count(self) -> int:
        return int(self.population_size * self.immigrant_fraction)

    def step_limit_for(self, grid: Grid) -> int:
        """Step cap for one seeding walk on the given grid."""
        if self.walk_step_limit is not None:
            return self.walk_step_limit
        return 4 * grid.size
