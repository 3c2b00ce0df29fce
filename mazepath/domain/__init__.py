"""Grid model, search algorithms and the genetic path engine."""

from .types import (
    WALL,
    Coord,
    GeneticConfig,
    Grid,
    MazeProblem,
    OutOfBoundsError,
    SolveResult,
    SolveStatus,
)
from .search import ShortestPathSolver, astar_solver, dijkstra_solver, find_path
from .genetic import EvolutionReport, GeneticSolver
from .local_search import PathRepair

__all__ = [
    "WALL",
    "Coord",
    "GeneticConfig",
    "Grid",
    "MazeProblem",
    "OutOfBoundsError",
    "SolveResult",
    "SolveStatus",
    "ShortestPathSolver",
    "astar_solver",
    "dijkstra_solver",
    "find_path",
    "EvolutionReport",
    "GeneticSolver",
    "PathRepair",
]
