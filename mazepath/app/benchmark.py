"""Benchmark runner comparing solvers across a set of mazes."""

import csv
import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import asdict, dataclass
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Sequence

from ..domain.types import MazeProblem, SolveResult
from ..domain.search import astar_solver, dijkstra_solver
from ..domain.genetic import genetic_solver, memetic_solver

logger = logging.getLogger(__name__)

CSV_COLUMNS = ["maze", "algorithm", "status", "cost", "elapsed_ms", "nodes_expanded", "path_length"]


@dataclass
class BenchmarkRow:
    """One solver run on one maze."""
    maze: str
    algorithm: str
    status: str
    cost: int
    elapsed_ms: float
    nodes_expanded: int
    path_length: int

    @classmethod
    def from_result(cls, maze: str, result: SolveResult) -> "BenchmarkRow":
        return cls(
            maze=maze,
            algorithm=result.algorithm,
            status=result.status.value,
            cost=result.cost,
            elapsed_ms=round(result.elapsed_ms, 3),
            nodes_expanded=result.nodes_expanded,
            path_length=len(result.path),
        )


def default_solvers(seed: Optional[int] = None) -> list:
    """The four compared variants: A*, Dijkstra, plain genetic and memetic."""
    return [
        astar_solver(),
        dijkstra_solver(),
        genetic_solver(seed),
        memetic_solver(seed),
    ]


def select_solvers(names: Iterable[str], seed: Optional[int] = None) -> list:
    """
    Pick solvers by name (case-insensitive).

    Raises:
        ValueError: for a name that matches no known solver
    """
    available: Dict[str, object] = {s.name.lower(): s for s in default_solvers(seed)}
    chosen = []
    for name in names:
        try:
            chosen.append(available[name.lower()])
        except KeyError:
            raise ValueError(f"Unknown algorithm {name!r}; choose from {', '.join(available)}") from None
    return chosen


def _run_solver(solver, problem: MazeProblem) -> SolveResult:
    return solver.solve(problem.grid, problem.start, problem.goal)


def benchmark_problem(problem: MazeProblem, solvers: Sequence,
                      executor: Optional[ThreadPoolExecutor] = None) -> List[BenchmarkRow]:
    """
    Run every solver on one maze.

    Solvers share only the read-only grid, so they run concurrently when
    an executor is given. Rows keep the order of `solvers`.
    """
    if executor is None:
        results = [_run_solver(solver, problem) for solver in solvers]
    else:
        futures = [executor.submit(_run_solver, solver, problem) for solver in solvers]
        results = []
        for solver, future in zip(solvers, futures):
            try:
                results.append(future.result())
            except Exception:
                logger.exception("%s crashed on %s", solver.name, problem.name)
                results.append(SolveResult.failed(algorithm=solver.name))

    rows = [BenchmarkRow.from_result(problem.name, result) for result in results]
    for row in rows:
        logger.info("%s | %s | %s | cost %d | %.2f ms | %d nodes",
                    row.maze, row.algorithm, row.status, row.cost, row.elapsed_ms, row.nodes_expanded)
    return rows


def run_benchmark(problems: Iterable[MazeProblem], solvers: Optional[Sequence] = None,
                  workers: int = 4) -> List[BenchmarkRow]:
    """
    Benchmark solvers over mazes.

    Args:
        problems: Mazes to solve, in reporting order
        solvers: Solvers to compare (default_solvers() if None)
        workers: Threads used per maze; 1 runs everything sequentially

    Returns:
        One row per (maze, solver), grouped by maze
    """
    if solvers is None:
        solvers = default_solvers()
    if workers < 1:
        raise ValueError(f"workers must be at least 1, got {workers}")

    rows: List[BenchmarkRow] = []
    if workers == 1:
        for problem in problems:
            rows.extend(benchmark_problem(problem, solvers))
        return rows

    with ThreadPoolExecutor(max_workers=workers) as executor:
        for problem in problems:
            rows.extend(benchmark_problem(problem, solvers, executor))
    return rows


def export_csv(rows: Sequence[BenchmarkRow], filepath) -> Path:
    """Write benchmark rows to a CSV file, creating parent directories."""
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", newline="", encoding="utf-8") as f:
        writer = csv.DictWriter(f, fieldnames=CSV_COLUMNS)
        writer.writeheader()
        for row in rows:
            writer.writerow(asdict(row))
    logger.info("Wrote %d benchmark rows to %s", len(rows), path)
    return path


def format_table(rows: Sequence[BenchmarkRow]) -> str:
    """Render rows as the console table: Map | Algorithm | Time(ms) | Nodes | Cost."""
    header = f"{'Map':<20} | {'Algorithm':<10} | {'Time(ms)':>10} | {'Nodes':>8} | {'Cost':>6}"
    lines = [header, "-" * len(header)]
    for row in rows:
        cost = str(row.cost) if row.status == "Success" else "-"
        lines.append(f"{row.maze:<20} | {row.algorithm:<10} | {row.elapsed_ms:>10.2f} | "
                     f"{row.nodes_expanded:>8} | {cost:>6}")
    return "\n".join(lines)
