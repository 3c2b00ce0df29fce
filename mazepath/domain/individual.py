"""Candidate path representation for the genetic engine."""

from dataclasses import dataclass
from typing import Sequence, Tuple

from .types import Coord, Grid
from .heuristics import manhattan_distance
from .path import path_cost

# Complete paths score FITNESS_SCALE / (cost + 1), always > 0
FITNESS_SCALE = 1_000_000.0

# Incomplete paths score -(DISTANCE_WEIGHT * remaining + cost) - 1, always < 0
DISTANCE_WEIGHT = 10.0


def calculate_fitness(cost: int, complete: bool, remaining_distance: int = 0) -> float:
    """
    Fitness of a path.

    Complete paths are rewarded for low cost. Incomplete paths get a
    negative score that shrinks as they approach the goal, so every
    complete path outranks every incomplete one.
    """
    if complete:
        return FITNESS_SCALE / (cost + 1)
    return -(DISTANCE_WEIGHT * remaining_distance + cost) - 1.0


@dataclass(frozen=True)
class Individual:
    """
    One candidate path with its derived cost and fitness.

    Scored once at construction and never mutated; genetic operators
    always build a new Individual.
    """
    path: Tuple[Coord, ...]
    cost: int
    fitness: float
    complete: bool

    @classmethod
    def from_path(cls, path: Sequence[Coord], grid: Grid, goal: Coord) -> "Individual":
        """Score a raw coordinate path."""
        if not path:
            raise ValueError("Individual path must contain at least the start cell")
        cells = tuple((int(r), int(c)) for r, c in path)
        cost = path_cost(cells, grid)
        complete = cells[-1] == (goal[0], goal[1])
        remaining = 0 if complete else manhattan_distance(cells[-1], goal)
        return cls(cells, cost, calculate_fitness(cost, complete, remaining), complete)

    @property
    def rank(self) -> Tuple[float, int]:
        """
        Sort key, higher is better.
        Equal fitness prefers the path with fewer steps.
        """
        return (self.fitness, -len(self.path))

    def __len__(self) -> int:
        return len(self.path)
