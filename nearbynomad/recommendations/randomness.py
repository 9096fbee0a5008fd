from __future__ import annotations

import random
from typing import Protocol, Sequence, runtime_checkable


@runtime_checkable
class RandomSource(Protocol):
    def next_float(self) -> float:
        """Return a float uniformly drawn from [0, 1)."""
        ...


class SeededRandomSource:
    """``RandomSource`` backed by ``random.Random``; pass a seed for repeatable runs."""

    def __init__(self, seed: int | None = None):
        self._rng = random.Random(seed)

    def next_float(self) -> float:
        return self._rng.random()


class SystemRandomSource:
    """OS entropy; used by the API so repeated identical requests differ."""

    def __init__(self):
        self._rng = random.SystemRandom()

    def next_float(self) -> float:
        return self._rng.random()


def uniform(source: RandomSource, low: float, high: float) -> float:
    return low + (high - low) * source.next_float()


def choice_index(source: RandomSource, length: int) -> int:
    # Clamped so a source returning 1.0 still maps to the last index.
    return min(int(source.next_float() * length), length - 1)


def shuffled(source: RandomSource, items: Sequence) -> list:
    """Fisher-Yates shuffle into a new list."""
    result = list(items)
    for i in range(len(result) - 1, 0, -1):
        j = choice_index(source, i + 1)
        result[i], result[j] = result[j], result[i]
    return result
