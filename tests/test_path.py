"""Unit tests for path cost, validation and structural helpers."""

import unittest

import numpy as np

from mazepath.domain.types import WALL, Grid
from mazepath.domain.path import (
    is_adjacent, path_cost, prefix_costs, reconstruct_from_map, reconstruct_path,
    remove_loops, segment_cost, splice, validate_path
)


class TestPathCost(unittest.TestCase):
    """Test the entered-cells cost convention"""

    def setUp(self):
        self.grid = Grid.from_rows([
            [5, 1, 2],
            [3, WALL, 4],
        ])
        self.path = [(0, 0), (0, 1), (0, 2), (1, 2)]

    def test_start_cell_is_free(self):
        self.assertEqual(path_cost(self.path, self.grid), 1 + 2 + 4)
        self.assertEqual(path_cost([(0, 0)], self.grid), 0)

    def test_segment_and_prefix_agree(self):
        prefix = prefix_costs(self.path, self.grid)
        self.assertEqual(prefix, [0, 1, 3, 7])
        for i in range(len(self.path)):
            for j in range(i, len(self.path)):
                self.assertEqual(segment_cost(self.path, i, j, self.grid), prefix[j] - prefix[i])


class TestValidatePath(unittest.TestCase):
    """Test path validation"""

    def setUp(self):
        self.grid = Grid.from_rows([
            [1, 1, 1],
            [1, WALL, 1],
        ])

    def test_valid(self):
        path = [(0, 0), (0, 1), (0, 2), (1, 2)]
        self.assertTrue(validate_path(path, self.grid, (0, 0), (1, 2)))
        self.assertTrue(validate_path(path[:2], self.grid, (0, 0)))

    def test_invalid(self):
        cases = {
            "empty": [],
            "wrong start": [(0, 1), (0, 2)],
            "wall": [(0, 0), (0, 1), (1, 1)],
            "jump": [(0, 0), (0, 2)],
            "repeat": [(0, 0), (0, 0), (0, 1)],
            "outside": [(0, 0), (-1, 0)],
        }
        for label, path in cases.items():
            with self.subTest(case=label):
                self.assertFalse(validate_path(path, self.grid, (0, 0)))

    def test_wrong_goal(self):
        self.assertFalse(validate_path([(0, 0), (0, 1)], self.grid, (0, 0), (1, 2)))

    def test_is_adjacent(self):
        self.assertTrue(is_adjacent((2, 2), (2, 3)))
        self.assertFalse(is_adjacent((2, 2), (3, 3)))
        self.assertFalse(is_adjacent((2, 2), (2, 2)))


class TestPathStructure(unittest.TestCase):
    """Test reconstruction, loop removal and splicing"""

    def setUp(self):
        self.grid = Grid(np.ones((3, 3), dtype=np.int64))

    def test_reconstruct_path(self):
        parent = np.full(9, -1, dtype=np.int64)
        parent[1] = 0
        parent[2] = 1
        parent[5] = 2
        self.assertEqual(reconstruct_path(parent, 5, self.grid), [(0, 0), (0, 1), (0, 2), (1, 2)])

    def test_reconstruct_from_map(self):
        parent = {4: -1, 3: 4, 6: 3}
        self.assertEqual(reconstruct_from_map(parent, 6, self.grid), [(1, 1), (1, 0), (2, 0)])

    def test_remove_loops(self):
        """Test a revisited cell cuts out the cycle between visits"""
        path = [(0, 0), (0, 1), (1, 1), (1, 0), (0, 0), (1, 0), (2, 0)]
        self.assertEqual(remove_loops(path), [(0, 0), (1, 0), (2, 0)])

    def test_remove_nested_loops(self):
        path = [(0, 0), (0, 1), (0, 2), (0, 1), (1, 1), (0, 1), (1, 1), (2, 1)]
        cleaned = remove_loops(path)
        self.assertEqual(cleaned, [(0, 0), (0, 1), (1, 1), (2, 1)])
        self.assertEqual(len(set(cleaned)), len(cleaned))

    def test_remove_loops_keeps_simple_path(self):
        path = [(0, 0), (1, 0), (2, 0)]
        self.assertEqual(remove_loops(path), path)

    def test_splice(self):
        path = [(0, 0), (0, 1), (0, 2), (1, 2), (2, 2)]
        detour = [(0, 1), (1, 1), (1, 2)]
        self.assertEqual(splice(path, 1, 3, detour), [(0, 0), (0, 1), (1, 1), (1, 2), (2, 2)])


if __name__ == '__main__':
    unittest.main()
