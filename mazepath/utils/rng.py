"""Per-run random source for the genetic engine and maze generators."""

import random
from typing import MutableSequence, Optional, Sequence, TypeVar

T = TypeVar("T")


class SeededRNG:
    """
    Random source owned by a single run.

    Each solve builds its own instance, so concurrent benchmark runs never
    share state and a fixed seed replays the same run.
    """

    def __init__(self, seed: Optional[int] = None):
        self._seed = seed
        self._rng = random.Random(seed)

    @property
    def seed(self) -> Optional[int]:
        return self._seed

    def random(self) -> float:
        """Float in [0.0, 1.0)."""
        return self._rng.random()

    def chance(self, probability: float) -> bool:
        """True with the given probability."""
        return self._rng.random() < probability

    def randint(self, a: int, b: int) -> int:
        """Integer in [a, b], both ends included."""
        return self._rng.randint(a, b)

    def index(self, length: int) -> int:
        """Random position in a sequence of the given length."""
        if length <= 0:
            raise ValueError(f"Cannot pick an index from length {length}")
        return self._rng.randrange(length)

    def choice(self, seq: Sequence[T]) -> T:
        return self._rng.choice(seq)

    def shuffle(self, seq: MutableSequence) -> None:
        self._rng.shuffle(seq)
