#!/usr/bin/env python3
"""
Benchmark A*, Dijkstra, genetic and memetic solvers on a directory of mazes.

Usage:
    python run_benchmark.py data --csv results/benchmark.csv --seed 42
"""

import argparse
import logging
import sys

from mazepath.app.benchmark import export_csv, format_table, run_benchmark, select_solvers
from mazepath.utils.maze_loader import load_maze_directory

logger = logging.getLogger("run_benchmark")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Benchmark maze solvers")
    parser.add_argument("data_dir", nargs="?", default="data", help="Directory holding maze files")
    parser.add_argument("--csv", type=str, help="Write results to this CSV file")
    parser.add_argument("--seed", type=int, default=None, help="Seed for the genetic solvers")
    parser.add_argument("--workers", type=int, default=4, help="Solver threads per maze")
    parser.add_argument("--algorithms", nargs="+", default=["A*", "Dijkstra", "Genetic", "Memetic"],
                        help="Solvers to run")
    parser.add_argument("--log-level", default="WARNING", help="Logging level (DEBUG, INFO, ...)")
    args = parser.parse_args(argv)

    logging.basicConfig(level=getattr(logging, args.log_level.upper(), logging.WARNING),
                        format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    try:
        solvers = select_solvers(args.algorithms, seed=args.seed)
    except ValueError as e:
        parser.error(str(e))

    problems = [problem for _, problem in load_maze_directory(args.data_dir) if problem is not None]
    if not problems:
        logger.error("No loadable mazes in %s", args.data_dir)
        return 1

    try:
        rows = run_benchmark(problems, solvers, workers=args.workers)
    except ValueError as e:
        parser.error(str(e))

    print(format_table(rows))
    if args.csv:
        path = export_csv(rows, args.csv)
        print(f"\nResults written to {path}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
