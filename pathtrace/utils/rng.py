"""Seeded random number generator for reproducible problem instances."""

from typing import List, Optional, Sequence, TypeVar

import numpy as np

T = TypeVar("T")


class SeededRNG:
    """Seeded random number generator for reproducible results."""

    def __init__(self, seed: Optional[int] = None):
        self._rng = np.random.default_rng(seed)

    def random(self) -> float:
        """Generate a random float in [0.0, 1.0)."""
        return float(self._rng.random())

    def randint(self, a: int, b: int) -> int:
        """Generate a random integer N such that a <= N <= b."""
        return int(self._rng.integers(a, b, endpoint=True))

    def sample(self, population: Sequence[T], k: int) -> List[T]:
        """Choose k unique random elements from the population."""
        indices = self._rng.choice(len(population), size=k, replace=False)
        return [population[int(i)] for i in indices]


# Global instance for convenience
default_rng = SeededRNG()
