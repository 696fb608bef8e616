"""Windowed running statistics over the most recent values."""

from __future__ import annotations

import math
from collections import deque

from sortedcontainers import SortedList


class Accumulator:
    """Fixed-size window of the most recent values with a running sum.

    The newest value sits at the front of the window, the oldest at the back.
    """

    def __init__(self, window_size: int) -> None:
        self.window_size = window_size
        self._window: deque[float] = deque()
        self._sum = 0.0

    def push(self, value: float) -> None:
        self._sum += value
        self._window.appendleft(value)
        if len(self._window) > self.window_size:
            self._sum -= self._window.pop()

    def sum(self) -> float:
        return self._sum

    def at(self, index: int) -> float:
        """Return the value ``index`` steps back from the newest, or -1."""
        if 0 <= index < len(self._window):
            return self._window[index]
        return -1

    def front(self) -> float:
        if not self._window:
            raise IndexError("front of an empty accumulator")
        return self._window[0]

    def back(self) -> float:
        if not self._window:
            raise IndexError("back of an empty accumulator")
        return self._window[-1]

    def clear(self) -> None:
        self._window.clear()
        self._sum = 0.0

    def full(self) -> bool:
        return len(self._window) == self.window_size

    def __len__(self) -> int:
        return len(self._window)


class RollingMean(Accumulator):
    """Accumulator that keeps a running mean and variance of its window."""

    def __init__(self, window_size: int) -> None:
        super().__init__(window_size)
        self._mean = 0.0
        self._s = 0.0

    def push(self, value: float) -> None:
        self._sum += value
        self._window.appendleft(value)

        old_mean = self._mean
        self._mean += (value - self._mean) / len(self._window)
        self._s += (value - self._mean) * (value - old_mean)

        if len(self._window) > self.window_size:
            old = self._window.pop()
            self._sum -= old

            old_mean = self._mean
            self._mean -= (old - self._mean) / len(self._window)
            self._s -= (old - self._mean) * (old - old_mean)

    def clear(self) -> None:
        super().clear()
        self._mean = 0.0
        self._s = 0.0

    def mean(self) -> float:
        return self._mean

    def var(self) -> float:
        """Sample variance of the window; NaN with fewer than two values."""
        denominator = len(self._window) - 1
        if denominator <= 0:
            return math.nan
        return self._s / denominator

    def std(self) -> float:
        v = self.var()
        return math.sqrt(v) if v > 0 else 0.0

    def zscore(self, value: float) -> float:
        std = self.std()
        return (value - self.mean()) / std if std > 0 else 0.0

    def last_zscore(self) -> float:
        return self.zscore(self._window[0])


class EWMA(Accumulator):
    """Exponentially weighted moving average with span ``window_size``."""

    def __init__(self, window_size: int) -> None:
        super().__init__(window_size)
        self._alpha = 2.0 / (window_size + 1.0)
        self._mean = 0.0

    def push(self, value: float) -> None:
        self._window.appendleft(value)
        self._window.pop()
        self._mean = self._alpha * value + (1.0 - self._alpha) * self._mean

    def clear(self) -> None:
        super().clear()
        self._mean = 0.0

    def mean(self) -> float:
        return self._mean


class RollingMedian(Accumulator):
    """Accumulator tracking the median and quartiles of its window."""

    def __init__(self, window_size: int) -> None:
        super().__init__(window_size)
        self._lower: SortedList = SortedList()
        self._upper: SortedList = SortedList()

    def push(self, value: float) -> None:
        if len(self._window) == self.window_size:
            old = self._window.pop()
            self._sum -= old

            if self._lower and old <= self._lower[-1]:
                self._lower.remove(old)
            elif self._upper and old >= self._upper[0]:
                self._upper.remove(old)

        self._sum += value
        self._window.appendleft(value)

        if self._upper and value >= self._upper[0]:
            self._upper.add(value)
        else:
            self._lower.add(value)

        while len(self._lower) > len(self._upper):
            self._upper.add(self._lower.pop(-1))
        while len(self._upper) > len(self._lower):
            self._lower.add(self._upper.pop(0))

    def clear(self) -> None:
        super().clear()
        self._lower.clear()
        self._upper.clear()

    def median(self) -> float:
        if len(self._lower) == len(self._upper):
            return (self._lower[-1] + self._upper[0]) / 2.0
        return self._lower[-1]

    def quartile(self, q: float) -> float:
        if len(self._window) < 3:
            return self.median()

        if q <= 0.5:
            half = self._lower
            loc = int(q * len(half))
        else:
            half = self._upper
            loc = int(q * len(half) / 2)

        if loc and loc % 2 == 0:
            return (half[loc] + half[loc - 1]) / 2.0
        return half[loc]

    def iqr(self) -> float:
        return self.quartile(0.75) - self.quartile(0.25)

    def min(self) -> float:
        return self._lower[0]

    def max(self) -> float:
        return self._upper[-1]

    def zscore(self, value: float) -> float:
        iqr = self.iqr()
        return (value - self.median()) / iqr if iqr > 0 else 0.0

    def last_zscore(self) -> float:
        return self.zscore(self._window[0])