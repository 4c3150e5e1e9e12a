"""
Random source for the simulation
Every draw the engine makes goes through RandomSource.random() so a test
harness can swap in a fixed sequence
"""

import random
from typing import Optional, Sequence, TypeVar

T = TypeVar('T')


class RandomSource:
    """Injectable wrapper around random.Random"""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._random = random.Random(seed)

    def random(self) -> float:
        """Uniform float in [0, 1)"""
        return self._random.random()

    def chance(self, pct: float) -> bool:
        """Coin flip that succeeds with probability pct (0-100)

        pct is not clamped: anything at or above 100 always hits and anything
        at or below 0 never does.
        """
        return self.random() * 100 < pct

    def pick(self, items: Sequence[T]) -> T:
        """Uniform choice over a non-empty sequence"""
        if not items:
            raise ValueError("Cannot pick from an empty sequence")
        idx = min(int(self.random() * len(items)), len(items) - 1)
        return items[idx]


def weighted_choice(items: Sequence[T], weights: Sequence[float], rng: RandomSource) -> T:
    """
    Pick one item with probability proportional to its weight

    One draw r in [0, total) is walked along the cumulative weights and the
    first item whose cumulative weight exceeds r wins, so ties go to the
    earlier item and zero-weight items are skipped.  A non-positive total
    falls back to the first item.
    """
    if not items:
        raise ValueError("weighted_choice needs at least one item")
    if len(items) != len(weights):
        raise ValueError("items and weights must have the same length")

    total = sum(weights)
    if total <= 0:
        return items[0]

    r = rng.random() * total
    cumulative = 0.0
    for item, weight in zip(items, weights):
        cumulative += weight
        if r < cumulative:
            return item

    # Float rounding can leave r == total; hand it to the last weighted item
    for item, weight in zip(reversed(items), reversed(weights)):
        if weight > 0:
            return item
    return items[-1]
