"""
Seeded RNG for replayable fixture draws and match simulations.
"""
from __future__ import annotations

import random


class SeededRNG:
    """Wrapper around random.Random; seed=None draws from system entropy."""

    def __init__(self, seed: int | None = None) -> None:
        self._rng = random.Random(seed)
        self._seed = seed

    @property
    def seed(self) -> int | None:
        return self._seed

    def random(self) -> float:
        return self._rng.random()

    def permutation(self, n: int) -> list[int]:
        """Uniformly random ordering of 0..n-1."""
        order = list(range(n))
        self._rng.shuffle(order)
        return order

