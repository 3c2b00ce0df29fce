"""Unit tests for the array-backed binary heap."""

import random
import unittest

from mazepath.domain.priority_queue import ArrayBinaryHeap, HeapCapacityError


class TestArrayBinaryHeap(unittest.TestCase):
    """Test heap ordering, capacity and lazy-deletion friendliness"""

    def test_pops_in_priority_order(self):
        """Test random pushes come back sorted by priority"""
        rng = random.Random(3)
        heap = ArrayBinaryHeap(200)
        priorities = [rng.randint(0, 50) for _ in range(200)]
        for node, priority in enumerate(priorities):
            heap.push(node, priority)

        popped = [heap.pop_min()[1] for _ in range(len(priorities))]
        self.assertEqual(popped, sorted(priorities))
        self.assertTrue(heap.is_empty())

    def test_duplicate_nodes_are_kept(self):
        """Test the same node can be pushed twice with different priorities"""
        heap = ArrayBinaryHeap(4)
        heap.push(7, 10)
        heap.push(7, 3)
        self.assertEqual(len(heap), 2)
        self.assertEqual(heap.pop_min(), (7, 3))
        self.assertEqual(heap.pop_min(), (7, 10))

    def test_peek(self):
        heap = ArrayBinaryHeap(3)
        self.assertIsNone(heap.peek())
        heap.push(1, 5)
        heap.push(2, 4)
        self.assertEqual(heap.peek(), (2, 4))
        self.assertEqual(len(heap), 2)

    def test_pop_empty_raises(self):
        with self.assertRaises(IndexError):
            ArrayBinaryHeap(1).pop_min()

    def test_capacity_exceeded(self):
        """Test pushing onto a full heap raises HeapCapacityError"""
        heap = ArrayBinaryHeap(2)
        heap.push(0, 0)
        heap.push(1, 1)
        with self.assertRaises(HeapCapacityError):
            heap.push(2, 2)
        self.assertTrue(issubclass(HeapCapacityError, OverflowError))

    def test_clear_and_reuse(self):
        heap = ArrayBinaryHeap(2)
        heap.push(0, 9)
        heap.clear()
        self.assertTrue(heap.is_empty())
        heap.push(1, 1)
        heap.push(2, 0)
        self.assertEqual(heap.pop_min(), (2, 0))

    def test_for_grid_capacity(self):
        self.assertEqual(ArrayBinaryHeap.for_grid(10).capacity, 41)

    def test_invalid_capacity(self):
        with self.assertRaises(ValueError):
            ArrayBinaryHeap(0)

    def test_returns_plain_ints(self):
        heap = ArrayBinaryHeap(1)
        heap.push(4, 2)
        node, priority = heap.pop_min()
        self.assertIs(type(node), int)
        self.assertIs(type(priority), int)


if __name__ == '__main__':
    unittest.main()
