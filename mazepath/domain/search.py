"""Deterministic shortest-path search: uniform-cost (Dijkstra) and A*."""

import logging
import time
from typing import List, Optional, Tuple, Union

import numpy as np

from .types import Coord, Grid, MazeProblem, SolveResult, SolveStatus
from .priority_queue import ArrayBinaryHeap, HeapCapacityError
from .heuristics import Heuristic, HeuristicId, for_grid, get_heuristic
from .neighbors import get_index_neighbors
from .path import reconstruct_path

logger = logging.getLogger(__name__)

# Distance sentinel for cells not reached yet; leaves headroom for additions
UNREACHED = np.iinfo(np.int64).max // 4

_DEFAULT_NAMES = {"zero": "Dijkstra", "manhattan": "A*"}


class ShortestPathSolver:
    """
    Best-first grid search parameterised by a heuristic.

    With the zero heuristic this is uniform-cost search (Dijkstra); with the
    Manhattan heuristic it is A*. Both return true minimum-cost paths and
    differ only in how many nodes they expand.
    """

    def __init__(self, heuristic: Union[HeuristicId, Heuristic] = "manhattan",
                 name: Optional[str] = None):
        self._heuristic = get_heuristic(heuristic)
        if name is None:
            name = _DEFAULT_NAMES.get(heuristic, "Best-first") if isinstance(heuristic, str) else "Best-first"
        self.name = name

    def solve(self, grid: Grid, start: Coord, goal: Coord) -> SolveResult:
        """
        Find a minimum-cost path from start to goal.

        Never raises for an unreachable goal: the result carries
        ``SolveStatus.FAILED``, an empty path and cost -1 instead.
        """
        started = time.perf_counter()
        start = (int(start[0]), int(start[1]))
        goal = (int(goal[0]), int(goal[1]))

        if start == goal:
            return SolveResult.trivial(start, self.name)

        try:
            path, cost, expanded = self._search(grid, start, goal)
        except HeapCapacityError as e:
            logger.warning("%s aborted on %r: %s", self.name, grid, e)
            return SolveResult.failed(time.perf_counter() - started, 0, self.name)

        elapsed = time.perf_counter() - started
        if path is None:
            logger.debug("%s found no path from %s to %s after %d expansions",
                         self.name, start, goal, expanded)
            return SolveResult.failed(elapsed, expanded, self.name)

        return SolveResult(
            status=SolveStatus.SUCCESS,
            path=tuple(path),
            cost=cost,
            elapsed=elapsed,
            nodes_expanded=expanded,
            algorithm=self.name,
        )

    def solve_problem(self, problem: MazeProblem) -> SolveResult:
        """Solve a MazeProblem value."""
        return self.solve(problem.grid, problem.start, problem.goal)

    def _search(self, grid: Grid, start: Coord, goal: Coord) -> Tuple[Optional[List[Coord]], int, int]:
        """Run the search. Returns (path or None, cost, nodes expanded)."""
        cell_count = grid.size
        heuristic = for_grid(self._heuristic, grid, start, goal)

        start_index = grid.to_index(*start)
        goal_index = grid.to_index(*goal)

        dist = np.full(cell_count, UNREACHED, dtype=np.int64)
        parent = np.full(cell_count, -1, dtype=np.int64)
        heap = ArrayBinaryHeap.for_grid(cell_count)

        dist[start_index] = 0
        heap.push(start_index, heuristic(start, goal))
        expanded = 0

        while not heap.is_empty():
            node, priority = heap.pop_min()
            node_dist = int(dist[node])

            # Lazy deletion: a better entry for this node was pushed later
            if priority > node_dist + heuristic(grid.to_coord(node), goal):
                continue

            expanded += 1
            if node == goal_index:
                return reconstruct_path(parent, node, grid), node_dist, expanded

            for neighbor, step_cost in get_index_neighbors(node, grid):
                new_dist = node_dist + step_cost
                if new_dist < dist[neighbor]:
                    dist[neighbor] = new_dist
                    parent[neighbor] = node
                    heap.push(neighbor, new_dist + heuristic(grid.to_coord(neighbor), goal))

        return None, -1, expanded


def dijkstra_solver() -> ShortestPathSolver:
    """Uniform-cost search."""
    return ShortestPathSolver("zero", name="Dijkstra")


def astar_solver() -> ShortestPathSolver:
    """A* with the Manhattan heuristic."""
    return ShortestPathSolver("manhattan", name="A*")


def find_path(grid: Grid, start: Coord, goal: Coord,
              heuristic: Union[HeuristicId, Heuristic] = "manhattan") -> SolveResult:
    """
    Convenience function to run a shortest-path search from start to finish.

    Args:
        grid: Grid to search in
        start: Starting coordinate
        goal: Goal coordinate
        heuristic: "zero" (Dijkstra), "manhattan" (A*) or a callable

    Returns:
        SolveResult with path and statistics
    """
    return ShortestPathSolver(heuristic).solve(grid, start, goal)
