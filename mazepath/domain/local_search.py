"""Bounded local searches and the memetic path-repair pass."""

import logging
from collections import deque
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Sequence, Tuple

from .types import Coord, Grid
from .priority_queue import ArrayBinaryHeap
from .neighbors import get_index_neighbors
from .path import path_cost, prefix_costs, reconstruct_from_map, remove_loops

logger = logging.getLogger(__name__)


def bounded_bfs(grid: Grid, source: Coord, target: Coord, max_expansions: int) -> Optional[List[Coord]]:
    """
    Breadth-first search for a fewest-steps path between two cells.

    Gives up after expanding max_expansions cells and returns None, so a
    call never costs more than a fixed amount of work.
    """
    if tuple(source) == tuple(target):
        return [tuple(source)]

    source_index = grid.to_index(*source)
    target_index = grid.to_index(*target)
    parent: Dict[int, int] = {source_index: -1}
    queue = deque([source_index])
    expansions = 0

    while queue and expansions < max_expansions:
        node = queue.popleft()
        expansions += 1
        for neighbor, _ in get_index_neighbors(node, grid):
            if neighbor in parent:
                continue
            parent[neighbor] = node
            if neighbor == target_index:
                return reconstruct_from_map(parent, target_index, grid)
            queue.append(neighbor)

    return None


@dataclass
class ShortestPathTree:
    """Distances and parent links found by one bounded Dijkstra run."""
    grid: Grid
    source_index: int
    dist: Dict[int, int] = field(default_factory=dict)
    parent: Dict[int, int] = field(default_factory=dict)
    expanded: int = 0

    def cost_to(self, coord: Coord) -> Optional[int]:
        """Cost of the best path found to coord, or None if it was not reached."""
        return self.dist.get(self.grid.to_index(*coord))

    def path_to(self, coord: Coord) -> Optional[List[Coord]]:
        index = self.grid.to_index(*coord)
        if index not in self.dist:
            return None
        return reconstruct_from_map(self.parent, index, self.grid)


def bounded_dijkstra(grid: Grid, source: Coord, max_expansions: int,
                     targets: Optional[Iterable[Coord]] = None) -> ShortestPathTree:
    """
    Uniform-cost search from one source, capped at max_expansions.

    Stops early once every coordinate in targets has been settled. Cells
    reached but not yet settled keep their tentative distance; it is still
    the cost of the real path their parent links describe.
    """
    source_index = grid.to_index(*source)
    tree = ShortestPathTree(grid, source_index)
    tree.dist[source_index] = 0
    tree.parent[source_index] = -1

    pending = None
    if targets is not None:
        pending = {grid.to_index(*coord) for coord in targets}
        pending.discard(source_index)
        if not pending:
            return tree

    heap = ArrayBinaryHeap(4 * max_expansions + 1)
    heap.push(source_index, 0)
    dist = tree.dist
    parent = tree.parent

    while not heap.is_empty() and tree.expanded < max_expansions:
        node, priority = heap.pop_min()
        if priority > dist[node]:
            continue  # stale

        tree.expanded += 1
        if pending is not None:
            pending.discard(node)
            if not pending:
                break

        for neighbor, step_cost in get_index_neighbors(node, grid):
            new_dist = priority + step_cost
            if new_dist < dist.get(neighbor, new_dist + 1):
                dist[neighbor] = new_dist
                parent[neighbor] = node
                heap.push(neighbor, new_dist)

    return tree


def straight_shortcuts(grid: Grid, a: Coord, b: Coord) -> List[List[Coord]]:
    """
    Staircase lines from a to b: rows first then columns, and columns first.
    Only lines that cross no wall are returned.
    """
    candidates = []
    for rows_first in (True, False):
        line = _staircase(a, b, rows_first)
        if line not in candidates and all(grid.is_valid(r, c) for r, c in line):
            candidates.append(line)
    return candidates


def _staircase(a: Coord, b: Coord, rows_first: bool) -> List[Coord]:
    row, col = a
    line = [(row, col)]
    row_step = 1 if b[0] > row else -1
    col_step = 1 if b[1] > col else -1

    def walk_rows():
        nonlocal row
        while row != b[0]:
            row += row_step
            line.append((row, col))

    def walk_cols():
        nonlocal col
        while col != b[1]:
            col += col_step
            line.append((row, col))

    if rows_first:
        walk_rows()
        walk_cols()
    else:
        walk_cols()
        walk_rows()
    return line


class PathRepair:
    """
    Shortcut and loop-removal pass that polishes genetic candidates.

    Scans a path left to right. At each position i it looks up to `window`
    steps ahead for the farthest position j that can be reached from i by a
    strictly cheaper route, found either by straight staircase stepping or
    by a bounded local Dijkstra, and splices that route in. Passes repeat
    until one changes nothing. Every changing pass strictly lowers the
    integer cost, so the loop ends; the output is a fixed point of the pass
    (repairing it again returns it unchanged) and never costs more than the
    input.
    """

    def __init__(self, grid: Grid, window: int = 50, max_expansions: int = 200):
        if window < 2:
            raise ValueError(f"Repair window must be at least 2, got {window}")
        if max_expansions < 1:
            raise ValueError(f"max_expansions must be positive, got {max_expansions}")
        self.grid = grid
        self.window = window
        self.max_expansions = max_expansions

    def repair(self, path: Sequence[Coord]) -> List[Coord]:
        """Return the repaired path (a new list; the input is not modified)."""
        current = remove_loops(path)
        passes = 0
        while True:
            improved, changed = self.improve_once(current)
            if not changed:
                break
            passes += 1
            current = remove_loops(improved)

        if passes:
            logger.debug("Path repair converged after %d improving passes (length %d -> %d)",
                         passes, len(path), len(current))
        return current

    def improve_once(self, path: Sequence[Coord]) -> Tuple[List[Coord], bool]:
        """One left-to-right shortcut pass. Returns (new path, whether anything changed)."""
        n = len(path)
        if n < 3:
            return list(path), False

        prefix = prefix_costs(path, self.grid)
        result = [path[0]]
        changed = False
        i = 0
        while i < n - 1:
            shortcut, j = self._farthest_shortcut(path, prefix, i)
            if shortcut is None:
                result.append(path[i + 1])
                i += 1
            else:
                result.extend(shortcut[1:])
                i = j
                changed = True
        return result, changed

    def _farthest_shortcut(self, path: Sequence[Coord], prefix: List[int],
                           i: int) -> Tuple[Optional[List[Coord]], int]:
        limit = min(len(path) - 1, i + self.window)
        if limit < i + 2:
            return None, i

        tree = bounded_dijkstra(self.grid, path[i], self.max_expansions,
                                targets=path[i + 2:limit + 1])

        for j in range(limit, i + 1, -1):
            best: Optional[List[Coord]] = None
            best_cost = prefix[j] - prefix[i]

            for line in straight_shortcuts(self.grid, path[i], path[j]):
                line_cost = path_cost(line, self.grid)
                if line_cost < best_cost:
                    best, best_cost = line, line_cost

            tree_cost = tree.cost_to(path[j])
            if tree_cost is not None and tree_cost < best_cost:
                best = tree.path_to(path[j])

            if best is not None:
                return best, j

        return None, i
