"""Unit tests for grid and maze generation."""

import unittest

from mazepath.domain.types import WALL, Grid
from mazepath.utils.grid_factory import (
    create_uniform_grid, ensure_path_exists, generate_maze_problem, generate_random_problem
)


class TestGridFactory(unittest.TestCase):
    """Test generated grids are well formed and solvable"""

    def test_uniform_grid(self):
        grid = create_uniform_grid(3, 4, cost=2)
        self.assertEqual((grid.rows, grid.cols), (3, 4))
        self.assertEqual(grid.min_step_cost(), 2)
        self.assertEqual(grid.wall_count(), 0)
        with self.assertRaises(ValueError):
            create_uniform_grid(0, 4)

    def test_maze_problem_is_solvable(self):
        for seed in range(5):
            problem = generate_maze_problem(21, 21, seed=seed, max_cost=5)
            with self.subTest(seed=seed):
                self.assertTrue(ensure_path_exists(problem.grid, problem.start, problem.goal))
                self.assertNotEqual(problem.start, problem.goal)
                costs = problem.grid.costs
                self.assertTrue(((costs == WALL) | ((costs >= 1) & (costs <= 5))).all())

    def test_maze_border_is_wall(self):
        problem = generate_maze_problem(11, 11, seed=0)
        costs = problem.grid.costs
        self.assertTrue((costs[0, :] == WALL).all())
        self.assertTrue((costs[:, -1] == WALL).all())

    def test_even_sizes_are_trimmed(self):
        problem = generate_maze_problem(12, 16, seed=1)
        self.assertEqual((problem.grid.rows, problem.grid.cols), (11, 15))

    def test_same_seed_same_maze(self):
        a = generate_maze_problem(15, 15, seed=9)
        b = generate_maze_problem(15, 15, seed=9)
        self.assertEqual(a.grid.costs.tolist(), b.grid.costs.tolist())
        self.assertEqual((a.start, a.goal), (b.start, b.goal))

    def test_invalid_maze_arguments(self):
        with self.assertRaises(ValueError):
            generate_maze_problem(3, 9)
        with self.assertRaises(ValueError):
            generate_maze_problem(9, 9, braid=2.0)

    def test_random_problem(self):
        problem = generate_random_problem(10, 12, wall_density=0.3, seed=4)
        self.assertTrue(ensure_path_exists(problem.grid, problem.start, problem.goal))
        self.assertEqual(problem.grid.wall_count(), int(120 * 0.3))

    def test_random_problem_invalid_arguments(self):
        with self.assertRaises(ValueError):
            generate_random_problem(6, 6, wall_density=1.5)
        with self.assertRaises(ValueError):
            generate_random_problem(1, 1)

    def test_ensure_path_exists(self):
        grid = Grid.from_rows([[1, WALL, 1]])
        self.assertFalse(ensure_path_exists(grid, (0, 0), (0, 2)))
        self.assertTrue(ensure_path_exists(grid, (0, 0), (0, 0)))
        self.assertFalse(ensure_path_exists(grid, (0, 0), (0, 1)))


if __name__ == '__main__':
    unittest.main()
