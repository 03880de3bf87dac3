"""Shared utilities and abstractions for the stage battle game.

This module contains the random source abstraction used by every
probabilistic part of the game, so combat can be replayed deterministically
in tests.
"""

from __future__ import annotations

import random
from typing import Optional, Protocol


class RandomProvider(Protocol):
    """Protocol for random number generation (for testability)."""
    def random(self) -> float: ...
    def randint(self, a: int, b: int) -> int: ...


class DefaultRandomProvider:
    """Default implementation bridging to Python's global random module."""
    def random(self) -> float:
        return random.random()

    def randint(self, a: int, b: int) -> int:
        return random.randint(a, b)


class SeededRandomProvider:
    """Random provider backed by a private, seeded ``random.Random``.

    Two providers built with the same seed produce the same sequence of
    draws, which makes whole battles reproducible.
    """

    def __init__(self, seed: Optional[int] = None) -> None:
        self.seed = seed
        self._rng = random.Random(seed)

    def random(self) -> float:
        return self._rng.random()

    def randint(self, a: int, b: int) -> int:
        return self._rng.randint(a, b)


def random_between(random_provider: RandomProvider, low: float, high: float) -> float:
    """Draw a float uniformly from ``[low, high)`` using ``random_provider``."""
    return low + random_provider.random() * (high - low)
