"""Seeded source of uniform random numbers used by the simulations."""

from __future__ import annotations

import random


class RandomSource:
    """Uniform random numbers in [0, 1), reproducible from a seed."""

    def __init__(self, seed=None):
        self.seed = seed
        self._random = random.Random(seed)

    def uniform(self) -> float:
        """Return a uniformly distributed number in [0, 1)."""
        return self._random.random()

    def between(self, low: float, high: float) -> float:
        """Return a uniformly distributed number in [low, high)."""
        return (high - low) * self.uniform() + low