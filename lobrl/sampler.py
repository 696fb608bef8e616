"""Sequential and random samplers over a fixed collection."""

from __future__ import annotations

import random
from typing import Generic, Sequence, TypeVar

T = TypeVar("T")


class Sampler(Generic[T]):
    """Cycles through the source in order."""

    def __init__(self, source: Sequence[T]) -> None:
        self._index = 0
        self._source = list(source)

    def sample(self) -> T:
        if not self._source:
            raise IndexError("cannot sample from an empty source")
        item = self._source[self._index % len(self._source)]
        self._index += 1
        return item


class RandomSampler(Sampler[T]):
    """Draws uniformly from the source with replacement."""

    def __init__(self, source: Sequence[T], seed: int | None = None) -> None:
        super().__init__(source)
        self._rng = random.Random(seed)

    def sample(self) -> T:
        if not self._source:
            raise IndexError("cannot sample from an empty source")
        return self._source[self._rng.randrange(len(self._source))]