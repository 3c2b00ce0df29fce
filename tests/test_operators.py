"""Unit tests for the genetic operators."""

import unittest

from mazepath.domain.types import Grid
from mazepath.domain.individual import Individual
from mazepath.domain.operators import (
    crossover, mutate, random_walk, random_walk_path, shared_cut_points, tournament_select
)
from mazepath.domain.path import validate_path
from mazepath.utils.rng import SeededRNG
from mazepath.utils.grid_factory import create_uniform_grid

from tests.maze_fixtures import enclosed_goal_problem, generated_problems


def _walk_population(problem, rng, count=12):
    population = []
    for _ in range(count * 10):
        path = random_walk_path(problem.grid, problem.start, problem.goal, rng)
        if path is not None:
            population.append(Individual.from_path(path, problem.grid, problem.goal))
        if len(population) == count:
            break
    return population


class TestRandomWalk(unittest.TestCase):
    """Test the seeding walk"""

    def test_walk_reaches_goal_with_valid_simple_path(self):
        rng = SeededRNG(11)
        for problem in generated_problems(4):
            with self.subTest(maze=problem.name):
                path = random_walk_path(problem.grid, problem.start, problem.goal, rng)
                self.assertIsNotNone(path)
                self.assertTrue(validate_path(path, problem.grid, problem.start, problem.goal))
                self.assertEqual(len(set(path)), len(path))

    def test_walk_fails_on_enclosed_goal(self):
        problem = enclosed_goal_problem()
        self.assertIsNone(random_walk_path(problem.grid, problem.start, problem.goal, SeededRNG(1)))

    def test_walk_reports_exhausted_region(self):
        """Test an emptied stack is told apart from a spent step budget"""
        problem = enclosed_goal_problem()
        result = random_walk(problem.grid, problem.start, problem.goal, SeededRNG(1))
        self.assertIsNone(result.path)
        self.assertTrue(result.exhausted)

        grid = create_uniform_grid(1, 30)
        capped = random_walk(grid, (0, 0), (0, 29), SeededRNG(0), max_steps=5)
        self.assertIsNone(capped.path)
        self.assertFalse(capped.exhausted)

        found = random_walk(grid, (0, 0), (0, 29), SeededRNG(0))
        self.assertEqual(len(found.path), 30)
        self.assertFalse(found.exhausted)

    def test_step_limit(self):
        grid = create_uniform_grid(1, 30)
        self.assertIsNone(random_walk_path(grid, (0, 0), (0, 29), SeededRNG(0), max_steps=5))
        self.assertIsNotNone(random_walk_path(grid, (0, 0), (0, 29), SeededRNG(0), max_steps=29))

    def test_same_seed_same_walk(self):
        problem = generated_problems(1)[0]
        a = random_walk_path(problem.grid, problem.start, problem.goal, SeededRNG(5), goal_bias=0.3)
        b = random_walk_path(problem.grid, problem.start, problem.goal, SeededRNG(5), goal_bias=0.3)
        self.assertEqual(a, b)


class TestSelection(unittest.TestCase):
    """Test tournament selection"""

    def test_full_tournament_tends_to_best(self):
        grid = create_uniform_grid(1, 6)
        population = [Individual.from_path([(0, c) for c in range(n)], grid, (0, 5)) for n in range(1, 7)]
        best = max(population, key=lambda ind: ind.rank)
        rng = SeededRNG(2)
        winners = [tournament_select(population, 200, rng) for _ in range(20)]
        self.assertTrue(all(w is best for w in winners))

    def test_single_tournament_returns_member(self):
        grid = create_uniform_grid(1, 3)
        population = [Individual.from_path([(0, 0), (0, 1)], grid, (0, 2))]
        self.assertIs(tournament_select(population, 1, SeededRNG(0)), population[0])


class TestCrossover(unittest.TestCase):
    """Test crossover validity"""

    def test_children_are_valid_paths_on_random_grids(self):
        """Test every child of two valid paths is a valid start-to-goal path"""
        rng = SeededRNG(21)
        for problem in generated_problems(6):
            population = _walk_population(problem, rng)
            self.assertGreaterEqual(len(population), 2)
            for _ in range(40):
                a = rng.choice(population)
                b = rng.choice(population)
                child = crossover(a, b, problem.grid, problem.goal, rng)
                with self.subTest(maze=problem.name):
                    self.assertTrue(validate_path(child.path, problem.grid, problem.start, problem.goal))
                    self.assertTrue(child.complete)

    def test_no_shared_cell_copies_fitter_parent(self):
        grid = create_uniform_grid(3, 3)
        top = Individual.from_path([(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)], grid, (2, 2))
        bottom = Individual.from_path([(0, 0), (1, 0), (2, 0), (2, 1), (2, 2)], grid, (2, 2))
        self.assertEqual(shared_cut_points(top.path, bottom.path), [])
        child = crossover(top, bottom, grid, (2, 2), SeededRNG(0))
        self.assertIn(child.path, (top.path, bottom.path))

    def test_splices_at_shared_cell(self):
        grid = create_uniform_grid(3, 3)
        a = Individual.from_path([(0, 0), (0, 1), (1, 1), (1, 2), (2, 2)], grid, (2, 2))
        b = Individual.from_path([(0, 0), (1, 0), (1, 1), (2, 1), (2, 2)], grid, (2, 2))
        self.assertEqual(shared_cut_points(a.path, b.path), [(1, 1)])
        child = crossover(a, b, grid, (2, 2), SeededRNG(0))
        self.assertEqual(child.path, ((0, 0), (0, 1), (1, 1), (2, 1), (2, 2)))


class TestMutation(unittest.TestCase):
    """Test mutation never makes a path worse"""

    def test_mutation_non_regression(self):
        rng = SeededRNG(8)
        for problem in generated_problems(4):
            for ind in _walk_population(problem, rng, count=6):
                for _ in range(10):
                    mutated = mutate(ind, problem.grid, problem.goal, rng, max_expansions=100)
                    with self.subTest(maze=problem.name):
                        self.assertLessEqual(mutated.cost, ind.cost)
                        self.assertTrue(validate_path(mutated.path, problem.grid,
                                                      problem.start, problem.goal))

    def test_short_paths_unchanged(self):
        grid = Grid.from_rows([[1, 1]])
        ind = Individual.from_path([(0, 0), (0, 1)], grid, (0, 1))
        self.assertIs(mutate(ind, grid, (0, 1), SeededRNG(0)), ind)


if __name__ == '__main__':
    unittest.main()
