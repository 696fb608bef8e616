"""Sparse eligibility traces over tile-coded features."""

from __future__ import annotations

from typing import Iterator

import numpy as np

MAX_NONZERO_TRACES = 100000


class Traces:
    """Replacing eligibility traces that keep only values above a tolerance.

    Non-zero traces are held in a compact list so that decay touches only them.
    """

    def __init__(self, memory_size: int, n_tilings: int, n_actions: int) -> None:
        self.memory_size = memory_size
        self.n_tilings = n_tilings
        self.n_actions = n_actions
        self.max_nonzero = MAX_NONZERO_TRACES

        self.tolerance = np.float32(0.01)
        self.eligibility = np.zeros(memory_size, dtype=np.float32)
        self._inverse = np.zeros(memory_size, dtype=np.int64)
        self._nonzero: list[int] = []

    def decay(self, rate: float) -> None:
        """Scale every trace by ``rate``, dropping those that fall below tolerance."""
        for loc in range(len(self._nonzero) - 1, -1, -1):
            feature = self._nonzero[loc]
            self.eligibility[feature] *= np.float32(rate)
            if self.eligibility[feature] < self.tolerance:
                self.clear_existing(feature, loc)

    def update(self, state, action: int) -> None:
        """Set the traces of ``action``'s features to one and clear other actions'."""
        for a in range(self.n_actions):
            features = state.get_features(a)[: self.n_tilings]
            for feature in features:
                if a != action:
                    self.clear(feature)
                else:
                    self.set(feature, 1.0)

    def __iter__(self) -> Iterator[int]:
        return iter(list(self._nonzero))

    def __len__(self) -> int:
        return len(self._nonzero)

    def get(self, feature: int) -> float:
        return float(self.eligibility[feature])

    def set(self, feature: int, value: float) -> None:
        if self.eligibility[feature] >= self.tolerance:
            self.eligibility[feature] = value
            return

        while len(self._nonzero) >= self.max_nonzero:
            self.increase_tolerance()

        self.eligibility[feature] = value
        self._inverse[feature] = len(self._nonzero)
        self._nonzero.append(feature)

    def clear(self, feature: int) -> None:
        if self.eligibility[feature] != 0.0:
            self.clear_existing(feature, int(self._inverse[feature]))

    def clear_existing(self, feature: int, loc: int) -> None:
        """Zero ``feature``, whose entry sits at position ``loc`` of the list."""
        self.eligibility[feature] = 0.0
        last = self._nonzero.pop()
        if loc < len(self._nonzero):
            self._nonzero[loc] = last
            self._inverse[last] = loc

    def increase_tolerance(self) -> None:
        """Raise the tolerance by 10% and drop traces now below it."""
        self.tolerance = np.float32(float(self.tolerance) * 1.1)
        for loc in range(len(self._nonzero) - 1, -1, -1):
            feature = self._nonzero[loc]
            if self.eligibility[feature] < self.tolerance:
                self.clear_existing(feature, loc)