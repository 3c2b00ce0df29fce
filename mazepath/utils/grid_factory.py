"""Grid factory for creating uniform grids and generating weighted mazes."""

from collections import deque
from typing import List, Optional

import numpy as np

from ..domain.types import WALL, Coord, Grid, MazeProblem
from ..domain.neighbors import get_neighbors
from .rng import SeededRNG


def create_uniform_grid(rows: int, cols: int, cost: int = 1) -> Grid:
    """
    Create a wall-free grid where every cell has the same cost.

    Raises:
        ValueError: If rows or cols <= 0, or cost is negative
    """
    if rows <= 0 or cols <= 0:
        raise ValueError(f"Grid dimensions must be positive, got {rows}x{cols}")
    if cost < 0:
        raise ValueError(f"Cell cost must be non-negative, got {cost}")
    return Grid(np.full((rows, cols), cost, dtype=np.int64))


def ensure_path_exists(grid: Grid, start: Coord, goal: Coord) -> bool:
    """
    Check if a path exists between start and goal using flood fill.

    Returns:
        True if path exists, False otherwise
    """
    if not grid.is_valid(*start) or not grid.is_valid(*goal):
        return False

    start = (start[0], start[1])
    goal = (goal[0], goal[1])
    if start == goal:
        return True

    visited = {start}
    queue = deque([start])
    while queue:
        current = queue.popleft()
        if current == goal:
            return True
        for neighbor in get_neighbors(current, grid):
            if neighbor not in visited:
                visited.add(neighbor)
                queue.append(neighbor)

    return False


def _random_costs(shape, max_cost: int, rng: SeededRNG) -> np.ndarray:
    costs = np.empty(shape, dtype=np.int64)
    for row in range(shape[0]):
        for col in range(shape[1]):
            costs[row, col] = rng.randint(1, max_cost)
    return costs


def generate_maze_problem(rows: int, cols: int, seed: Optional[int] = None,
                          max_cost: int = 9, braid: float = 0.1, name: str = "") -> MazeProblem:
    """
    Generate a weighted maze using the recursive backtracking algorithm.

    The carved maze is a spanning tree; `braid` is the fraction of the
    remaining inner walls knocked out afterwards so several routes of
    different cost compete. Open cells get random costs in [1, max_cost].

    Args:
        rows: Grid height (minimum 5, even values lose their last row)
        cols: Grid width (minimum 5, even values lose their last column)
        seed: Random seed for reproducibility
        max_cost: Highest cell cost
        braid: Fraction of inner walls removed after carving (0.0 to 1.0)

    Raises:
        ValueError: If the dimensions are too small or parameters out of range
    """
    if rows < 5 or cols < 5:
        raise ValueError(f"Maze dimensions must be at least 5x5, got {rows}x{cols}")
    if max_cost < 1:
        raise ValueError(f"max_cost must be at least 1, got {max_cost}")
    if not (0.0 <= braid <= 1.0):
        raise ValueError(f"braid must be between 0.0 and 1.0, got {braid}")

    rng = SeededRNG(seed)
    rows = rows if rows % 2 == 1 else rows - 1
    cols = cols if cols % 2 == 1 else cols - 1

    costs = _random_costs((rows, cols), max_cost, rng)
    open_cells = np.zeros((rows, cols), dtype=bool)
    _carve_passages(open_cells, rng)

    # Inner walls that separate two passages horizontally or vertically
    candidates = []
    for row in range(1, rows - 1):
        for col in range(1, cols - 1):
            if open_cells[row, col]:
                continue
            if (open_cells[row - 1, col] and open_cells[row + 1, col]) or \
                    (open_cells[row, col - 1] and open_cells[row, col + 1]):
                candidates.append((row, col))
    rng.shuffle(candidates)
    for row, col in candidates[:int(len(candidates) * braid)]:
        open_cells[row, col] = True

    costs[~open_cells] = WALL
    grid = Grid(costs)
    start, goal = _place_far_apart(grid, rng)
    return MazeProblem(grid, start, goal, name)


def _carve_passages(open_cells: np.ndarray, rng: SeededRNG) -> None:
    """
    Carve a perfect maze into open_cells with an explicit backtracking stack.
    Passages live on odd coordinates so a wall border remains.
    """
    rows, cols = open_cells.shape
    start = (1, 1)
    open_cells[start] = True
    stack = [start]
    visited = {start}
    directions = [(0, 2), (2, 0), (0, -2), (-2, 0)]  # Move by 2 to keep walls between passages

    while stack:
        row, col = stack[-1]
        options = []
        for dr, dc in directions:
            nr, nc = row + dr, col + dc
            if 0 < nr < rows - 1 and 0 < nc < cols - 1 and (nr, nc) not in visited:
                options.append(((nr, nc), (row + dr // 2, col + dc // 2)))

        if options:
            next_cell, wall_between = rng.choice(options)
            open_cells[next_cell] = True
            open_cells[wall_between] = True
            visited.add(next_cell)
            stack.append(next_cell)
        else:
            stack.pop()


def _open_cells(grid: Grid) -> List[Coord]:
    return [(int(r), int(c)) for r, c in zip(*np.nonzero(grid.costs != WALL))]


def _place_far_apart(grid: Grid, rng: SeededRNG):
    """
    Pick start near the top-left corner and goal far away from it.
    """
    cells = _open_cells(grid)
    if len(cells) < 2:
        raise ValueError("Not enough open cells for start and goal")

    corner = [c for c in cells if c[0] < grid.rows // 3 and c[1] < grid.cols // 3]
    start = rng.choice(corner) if corner else rng.choice(cells)

    reach = min(grid.rows, grid.cols) // 2
    far = [c for c in cells if abs(c[0] - start[0]) + abs(c[1] - start[1]) > reach]
    if far:
        goal = rng.choice(far)
    else:
        goal = max((c for c in cells if c != start),
                   key=lambda c: abs(c[0] - start[0]) + abs(c[1] - start[1]))
    return start, goal


def generate_random_problem(rows: int, cols: int, wall_density: float = 0.25,
                            max_cost: int = 9, seed: Optional[int] = None,
                            max_attempts: int = 20, name: str = "") -> MazeProblem:
    """
    Generate a grid of scattered walls and random costs with a guaranteed path.

    Args:
        rows: Grid height
        cols: Grid width
        wall_density: Fraction of cells turned into walls (0.0 to 1.0)
        max_cost: Highest cell cost
        seed: Random seed
        max_attempts: Maximum attempts to generate a solvable grid

    Raises:
        ValueError: If parameters are out of range or no solvable grid was found
    """
    if rows <= 0 or cols <= 0 or rows * cols < 2:
        raise ValueError(f"Grid must hold at least two cells, got {rows}x{cols}")
    if not (0.0 <= wall_density <= 1.0):
        raise ValueError(f"Density must be between 0.0 and 1.0, got {wall_density}")
    if max_cost < 1:
        raise ValueError(f"max_cost must be at least 1, got {max_cost}")

    rng = SeededRNG(seed)
    cells = [(r, c) for r in range(rows) for c in range(cols)]

    for _ in range(max_attempts):
        costs = _random_costs((rows, cols), max_cost, rng)
        start = rng.choice(cells)
        goal = rng.choice([c for c in cells if c != start])

        free = [c for c in cells if c != start and c != goal]
        rng.shuffle(free)
        for cell in free[:int(len(cells) * wall_density)]:
            costs[cell] = WALL

        grid = Grid(costs)
        if ensure_path_exists(grid, start, goal):
            return MazeProblem(grid, start, goal, name)

    raise ValueError(f"No solvable {rows}x{cols} grid at density {wall_density} "
                     f"after {max_attempts} attempts")
