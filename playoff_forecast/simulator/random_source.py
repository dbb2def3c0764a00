"""
Injectable random sources for the simulation engine.

Everything random in a trial (game noise, weekly pairings) is drawn through a
RandomSource so a forecast can be replayed exactly from a seed.
"""

import random
from typing import List, Optional, Protocol, Sequence, TypeVar


T = TypeVar("T")


class RandomSource(Protocol):
    """Anything that yields uniform floats in [0, 1)."""

    def next_float(self) -> float:
        ...


class SeededRandom:
    """RandomSource backed by a private random.Random instance."""

    def __init__(self, seed: Optional[int] = None):
        self.seed = seed
        self._rng = random.Random(seed)

    def next_float(self) -> float:
        return self._rng.random()


def shuffled(items: Sequence[T], rng: RandomSource) -> List[T]:
    """
    Return a shuffled copy of items using only rng.next_float().

    Fisher-Yates, walking from the end of the list.
    """
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = min(i, int(rng.next_float() * (i + 1)))
        result[i], result[j] = result[j], result[i]
    return result
