"""Neighbor generation for 4-connected grid movement."""

from typing import List, Tuple

from .types import Coord, Grid

# Up, down, left, right
DIRECTIONS: Tuple[Tuple[int, int], ...] = ((-1, 0), (1, 0), (0, -1), (0, 1))


def get_neighbors(coord: Coord, grid: Grid) -> List[Coord]:
    """Get the passable orthogonal neighbors of a coordinate."""
    row, col = coord
    neighbors = []
    for dr, dc in DIRECTIONS:
        nr, nc = row + dr, col + dc
        if grid.is_valid(nr, nc):
            neighbors.append((nr, nc))
    return neighbors


def get_index_neighbors(index: int, grid: Grid) -> List[Tuple[int, int]]:
    """
    Get passable neighbors of a flattened index with their entry costs.
    Returns list of (neighbor_index, cost) tuples.
    """
    cols = grid.cols
    row, col = divmod(index, cols)
    neighbors = []
    for dr, dc in DIRECTIONS:
        nr, nc = row + dr, col + dc
        if grid.is_valid(nr, nc):
            neighbor = nr * cols + nc
            neighbors.append((neighbor, grid.cost_at(neighbor)))
    return neighbors

