"""Reference prices an agent quotes around, computed from the books."""

from __future__ import annotations

import math

from lobrl.accumulators import Accumulator, RollingMean
from lobrl.measures import microprice, midprice


class TargetPrice:
    """Base reference price; not ready until a positive value is set."""

    def __init__(self) -> None:
        self._value = -1.0

    def get(self) -> float:
        return self._value

    def ready(self) -> bool:
        return self._value > 0.0

    def update(self, ask_book, bid_book) -> None:
        """The base price does not follow the books."""

    def clear(self) -> None:
        """The base price keeps no history."""


class MidPrice(TargetPrice):
    """Rolling mean of the midprice."""

    def __init__(self, lookback: int) -> None:
        super().__init__()
        self._window = RollingMean(lookback)

    def ready(self) -> bool:
        return self._window.full()

    def update(self, ask_book, bid_book) -> None:
        self._window.push(midprice(ask_book, bid_book))
        self._value = self._window.mean()

    def clear(self) -> None:
        self._window.clear()


class MicroPrice(TargetPrice):
    """Rolling mean of the microprice."""

    def __init__(self, lookback: int) -> None:
        super().__init__()
        self._window = RollingMean(lookback)

    def ready(self) -> bool:
        return self._window.full()

    def update(self, ask_book, bid_book) -> None:
        self._window.push(microprice(ask_book, bid_book))
        self._value = self._window.mean()

    def clear(self) -> None:
        self._window.clear()


class VWAP(TargetPrice):
    """Volume-weighted average price of observed transactions over a window."""

    def __init__(self, lookback: int) -> None:
        super().__init__()
        self._numerator = Accumulator(lookback)
        self._denominator = Accumulator(lookback)

    def ready(self) -> bool:
        return self._numerator.full() and self._denominator.full()

    def update(self, ask_book, bid_book) -> None:
        self._numerator.push(ask_book.observed_value() + bid_book.observed_value())
        self._denominator.push(ask_book.observed_volume() + bid_book.observed_volume())

        numer = self._numerator.sum()
        denom = self._denominator.sum()
        if denom == 0:
            self._value = math.nan if numer == 0 else math.copysign(math.inf, numer)
        else:
            self._value = numer / denom

    def clear(self) -> None:
        self._numerator.clear()
        self._denominator.clear()