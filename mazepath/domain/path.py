"""Path cost convention, reconstruction and structural utilities."""

from typing import Dict, List, Optional, Sequence

from .types import Coord, Grid


def path_cost(path: Sequence[Coord], grid: Grid) -> int:
    """
    Calculate the cost of a path.

    Every cell entered after the first one contributes its cost; the first
    (start) cell never does. All solvers report cost this way.
    """
    total = 0
    for row, col in path[1:]:
        total += grid.cost_of(row, col)
    return total


def segment_cost(path: Sequence[Coord], i: int, j: int, grid: Grid) -> int:
    """Cost of walking path[i] -> path[j], i.e. the cells path[i+1..j]."""
    total = 0
    for row, col in path[i + 1:j + 1]:
        total += grid.cost_of(row, col)
    return total


def prefix_costs(path: Sequence[Coord], grid: Grid) -> List[int]:
    """
    Running path costs: prefix[k] is the cost of path[0..k].
    segment_cost(path, i, j) == prefix[j] - prefix[i].
    """
    prefix = [0]
    running = 0
    for row, col in path[1:]:
        running += grid.cost_of(row, col)
        prefix.append(running)
    return prefix


def is_adjacent(a: Coord, b: Coord) -> bool:
    """Whether two coordinates are 4-neighbors."""
    return abs(a[0] - b[0]) + abs(a[1] - b[1]) == 1


def validate_path(path: Sequence[Coord], grid: Grid, start: Coord,
                  goal: Optional[Coord] = None) -> bool:
    """
    Validate that a path is walkable and connected.

    The path must begin at start, visit only in-bounds non-wall cells and
    step between 4-adjacent cells (so no two consecutive cells are equal).
    If goal is given, the path must also end there.
    """
    if not path:
        return False
    if tuple(path[0]) != tuple(start):
        return False
    if goal is not None and tuple(path[-1]) != tuple(goal):
        return False

    for row, col in path:
        if not grid.is_valid(row, col):
            return False

    for i in range(1, len(path)):
        if not is_adjacent(path[i - 1], path[i]):
            return False

    return True


def reconstruct_path(parent: Sequence[int], goal_index: int, grid: Grid) -> List[Coord]:
    """
    Reconstruct the path from goal back to start using parent pointers.
    -1 marks the start. Returns the path from start to goal.
    """
    path = []
    current = int(goal_index)
    while current != -1:
        path.append(grid.to_coord(current))
        current = int(parent[current])
    path.reverse()
    return path


def reconstruct_from_map(parent: Dict[int, int], target_index: int, grid: Grid) -> List[Coord]:
    """Same as reconstruct_path for dict-based parent maps (bounded searches)."""
    path = []
    current = target_index
    while current != -1:
        path.append(grid.to_coord(current))
        current = parent[current]
    path.reverse()
    return path


def remove_loops(path: Sequence[Coord]) -> List[Coord]:
    """
    Cut out every cycle in a path.

    When a cell is revisited, everything walked since its first visit is
    dropped. Endpoints are preserved and, with non-negative costs, the
    result never costs more than the input.
    """
    result: List[Coord] = []
    position: Dict[Coord, int] = {}
    for coord in path:
        coord = (coord[0], coord[1])
        seen_at = position.get(coord)
        if seen_at is not None:
            for dropped in result[seen_at + 1:]:
                del position[dropped]
            del result[seen_at + 1:]
            continue
        position[coord] = len(result)
        result.append(coord)
    return result


def splice(path: Sequence[Coord], i: int, j: int, segment: Sequence[Coord]) -> List[Coord]:
    """
    Replace path[i..j] with segment.
    segment must start at path[i] and end at path[j].
    """
    return list(path[:i]) + list(segment) + list(path[j + 1:])

