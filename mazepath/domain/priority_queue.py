"""Array-backed binary min-heap for grid search with lazy deletion."""

from typing import Optional, Tuple

import numpy as np


class HeapCapacityError(OverflowError):
    """Raised when pushing onto a full heap."""


class ArrayBinaryHeap:
    """
    Min-heap over (node, priority) integer pairs.

    Storage is two parallel fixed-capacity numpy arrays. Entries are never
    removed or re-prioritised in place: a node whose best-known distance
    improves is simply pushed again, and consumers discard the outdated
    entry when it is popped (lazy deletion). For a full search over N cells
    with 4-connectivity, a capacity of 4N + 1 cannot be exceeded.
    """

    def __init__(self, capacity: int):
        if capacity <= 0:
            raise ValueError(f"Heap capacity must be positive, got {capacity}")
        self._nodes = np.empty(capacity, dtype=np.int64)
        self._priorities = np.empty(capacity, dtype=np.int64)
        self._size = 0
        self._capacity = capacity

    @classmethod
    def for_grid(cls, cell_count: int) -> "ArrayBinaryHeap":
        """Heap sized for a full 4-connected search over cell_count cells."""
        return cls(4 * cell_count + 1)

    @property
    def capacity(self) -> int:
        return self._capacity

    def __len__(self) -> int:
        return self._size

    def is_empty(self) -> bool:
        """Check if the heap is empty."""
        return self._size == 0

    def clear(self):
        """Drop all entries (storage is reused)."""
        self._size = 0

    def push(self, node: int, priority: int):
        """
        Insert an entry and sift it up while its parent has a greater priority.

        Raises:
            HeapCapacityError: If the heap is already full
        """
        if self._size >= self._capacity:
            raise HeapCapacityError(f"Heap capacity {self._capacity} exceeded")

        nodes = self._nodes
        priorities = self._priorities
        i = self._size
        self._size += 1

        # Move parents down instead of swapping at every level
        while i > 0:
            parent = (i - 1) >> 1
            if priorities[parent] <= priority:
                break
            nodes[i] = nodes[parent]
            priorities[i] = priorities[parent]
            i = parent

        nodes[i] = node
        priorities[i] = priority

    def pop_min(self) -> Tuple[int, int]:
        """
        Remove and return the (node, priority) entry with the lowest priority.

        Raises:
            IndexError: If the heap is empty
        """
        if self._size == 0:
            raise IndexError("pop from an empty heap")

        nodes = self._nodes
        priorities = self._priorities
        top_node = int(nodes[0])
        top_priority = int(priorities[0])

        self._size -= 1
        size = self._size
        if size == 0:
            return top_node, top_priority

        # Sift the former last entry down from the root
        last_node = nodes[size]
        last_priority = priorities[size]
        i = 0
        while True:
            child = 2 * i + 1
            if child >= size:
                break
            right = child + 1
            if right < size and priorities[right] < priorities[child]:
                child = right
            if priorities[child] >= last_priority:
                break
            nodes[i] = nodes[child]
            priorities[i] = priorities[child]
            i = child

        nodes[i] = last_node
        priorities[i] = last_priority
        return top_node, top_priority

    def peek(self) -> Optional[Tuple[int, int]]:
        """Look at the minimum entry without removing it, or None if empty."""
        if self._size == 0:
            return None
        return int(self._nodes[0]), int(self._priorities[0])
