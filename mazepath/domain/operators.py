"""Genetic operators: seeding walks, selection, crossover and mutation."""

from dataclasses import dataclass
from typing import List, Optional, Sequence

from .types import Coord, Grid
from .heuristics import manhattan_distance
from .individual import Individual
from .local_search import bounded_bfs
from .neighbors import get_neighbors
from .path import path_cost, splice
from ..utils.rng import SeededRNG


@dataclass(frozen=True)
class WalkResult:
    """Outcome of one seeding walk."""
    path: Optional[List[Coord]]
    exhausted: bool = False  # Whole reachable region explored without meeting the goal


def random_walk(grid: Grid, start: Coord, goal: Coord, rng: SeededRNG,
                goal_bias: float = 0.7, max_steps: Optional[int] = None) -> WalkResult:
    """
    Randomized depth-first walk from start that backtracks on dead ends.

    At each step the walk moves to an unvisited neighbor: with probability
    goal_bias the one closest to the goal, otherwise a random one. A cell
    with no unvisited neighbors is popped (backtrack). The walk stack is a
    simple, valid path whenever it reaches the goal.

    Returns:
        WalkResult with the path from start to goal. The path is None when
        max_steps moves (forward and backward) were spent first, or when
        the stack emptied; the latter sets exhausted because every cell
        reachable from start was visited, so no later walk can succeed.
    """
    start = (start[0], start[1])
    goal = (goal[0], goal[1])
    if max_steps is None:
        max_steps = 4 * grid.size

    stack = [start]
    visited = {start}
    steps = 0

    while stack and steps < max_steps:
        current = stack[-1]
        if current == goal:
            return WalkResult(list(stack))

        options = [n for n in get_neighbors(current, grid) if n not in visited]
        steps += 1
        if not options:
            stack.pop()
            continue

        if rng.chance(goal_bias):
            best = min(manhattan_distance(n, goal) for n in options)
            next_cell = rng.choice([n for n in options if manhattan_distance(n, goal) == best])
        else:
            next_cell = rng.choice(options)

        visited.add(next_cell)
        stack.append(next_cell)

    if stack and stack[-1] == goal:
        return WalkResult(list(stack))
    return WalkResult(None, exhausted=not stack)


def random_walk_path(grid: Grid, start: Coord, goal: Coord, rng: SeededRNG,
                     goal_bias: float = 0.7, max_steps: Optional[int] = None) -> Optional[List[Coord]]:
    """Path found by random_walk, or None."""
    return random_walk(grid, start, goal, rng, goal_bias, max_steps).path


def tournament_select(population: Sequence[Individual], tournament_size: int,
                      rng: SeededRNG) -> Individual:
    """Sample tournament_size individuals uniformly (with replacement) and keep the fittest."""
    best = None
    for _ in range(tournament_size):
        contender = population[rng.index(len(population))]
        if best is None or contender.rank > best.rank:
            best = contender
    return best


def shared_cut_points(parent_a: Sequence[Coord], parent_b: Sequence[Coord]) -> List[Coord]:
    """
    Coordinates visited by both parents, excluding each path's endpoints.
    Ordered as they appear in parent_b.
    """
    interior_a = set(parent_a[1:-1])
    seen = set()
    shared = []
    for coord in parent_b[1:-1]:
        if coord in interior_a and coord not in seen:
            seen.add(coord)
            shared.append(coord)
    return shared


def crossover(parent_a: Individual, parent_b: Individual, grid: Grid, goal: Coord,
              rng: SeededRNG) -> Individual:
    """
    Splice two parents at a cell they share.

    The child walks parent_a up to and including the cut cell, then follows
    parent_b from just after it. Both pieces are contiguous and meet at the
    cut cell, so the child is a valid path. Without a shared interior cell
    the child is a copy of the fitter parent.
    """
    shared = shared_cut_points(parent_a.path, parent_b.path)
    if not shared:
        fitter = parent_a if parent_a.rank >= parent_b.rank else parent_b
        return Individual.from_path(fitter.path, grid, goal)

    cut = rng.choice(shared)
    cut_a = parent_a.path.index(cut)
    cut_b = parent_b.path.index(cut)
    child = list(parent_a.path[:cut_a + 1]) + list(parent_b.path[cut_b + 1:])
    return Individual.from_path(child, grid, goal)


def mutate(individual: Individual, grid: Grid, goal: Coord, rng: SeededRNG,
           max_expansions: int = 100) -> Individual:
    """
    Re-route a random stretch of the path through a bounded BFS.

    Picks i < j, searches for another connection between path[i] and
    path[j], and splices it in only if it costs no more than the stretch it
    replaces. The result never costs more than the input.
    """
    path = individual.path
    if len(path) < 3:
        return individual

    i = rng.randint(0, len(path) - 2)
    j = rng.randint(i + 1, len(path) - 1)

    detour = bounded_bfs(grid, path[i], path[j], max_expansions)
    if detour is None:
        return individual

    original = path_cost(path[i:j + 1], grid)
    if path_cost(detour, grid) > original:
        return individual

    return Individual.from_path(splice(path, i, j, detour), grid, goal)
