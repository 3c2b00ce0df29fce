"""Heuristic functions for the deterministic shortest-path solver."""

from typing import Callable, Dict, Literal, Union

from .types import Coord, Grid

# Heuristic function identifiers
HeuristicId = Literal["zero", "manhattan"]

Heuristic = Callable[[Coord, Coord], int]


def zero_heuristic(start: Coord, target: Coord) -> int:
    """
    Constant zero estimate.
    Turns the solver into uniform-cost search (Dijkstra).
    """
    return 0


def manhattan_distance(start: Coord, target: Coord) -> int:
    """
    Manhattan (L1) distance heuristic.
    Admissible and consistent for 4-directional movement with unit-plus costs.
    """
    return abs(start[0] - target[0]) + abs(start[1] - target[1])


# Mapping from heuristic IDs to functions
HEURISTICS: Dict[str, Heuristic] = {
    "zero": zero_heuristic,
    "manhattan": manhattan_distance,
}


def get_heuristic(heuristic: Union[HeuristicId, Heuristic]) -> Heuristic:
    """Get heuristic function by ID, passing callables through unchanged."""
    if callable(heuristic):
        return heuristic
    try:
        return HEURISTICS[heuristic]
    except KeyError:
        raise ValueError(f"Unknown heuristic: {heuristic!r}") from None


def for_grid(heuristic: Heuristic, grid: Grid, start: Coord, goal: Coord) -> Heuristic:
    """
    Bind a heuristic to one search so it stays a lower bound on its costs.

    Manhattan distance counts steps. Every step but the last enters a cell
    costing at least the cheapest cell other than start and goal; the last
    step enters the goal. Pricing the steps that way keeps the estimate
    admissible and consistent even when cells may cost 0. Other
    heuristics pass through unchanged.
    """
    if heuristic is not manhattan_distance:
        return heuristic

    floor = grid.min_step_cost(exclude=(grid.to_index(*start), grid.to_index(*goal)))
    goal_cost = grid.cost_of(*goal)
    if floor == 0 and goal_cost == 0:
        return zero_heuristic

    def _bounded(coord: Coord, target: Coord) -> int:
        steps = abs(coord[0] - target[0]) + abs(coord[1] - target[1])
        if steps == 0:
            return 0
        return floor * (steps - 1) + goal_cost

    return _bounded
