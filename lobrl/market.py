"""Exchange venues: trading hours and price/tick conversion tables."""

from __future__ import annotations

import bisect
from enum import Enum

from lobrl.timeutil import add_hours, add_minutes


class Currency(Enum):
    GBp = 0
    EUR = 1
    SEK = 2
    CHF = 3
    NOK = 4
    DKK = 5


class Market:
    """A trading venue for one symbol with a tiered tick-size table.

    ``price_tick_sizes`` maps the lower price bound of each tier to its tick size.
    """

    def __init__(
        self,
        symbol: str,
        currency: Currency,
        open_time: int,
        close_time: int,
        price_tick_sizes: dict[float, float],
    ) -> None:
        if not price_tick_sizes:
            raise ValueError("[Market] Empty tick size table.")

        self.date = 0
        self.time = 0

        self.symbol = symbol.upper()
        self.currency = currency

        self.open_time = open_time
        self.close_time = close_time

        self._prices = sorted(price_tick_sizes)
        self._price_sizes = [price_tick_sizes[p] for p in self._prices]

        ticks_table: dict[int, float] = {0: self._price_sizes[0]}
        acc_ticks = 0
        for lower, upper, size, next_size in zip(
            self._prices, self._prices[1:], self._price_sizes, self._price_sizes[1:]
        ):
            acc_ticks = int(acc_ticks + (upper - lower) / size)
            ticks_table[acc_ticks] = next_size

        self._ticks = sorted(ticks_table)
        self._tick_sizes = [ticks_table[t] for t in self._ticks]

    def is_open(self) -> bool:
        """True from 30 minutes after the open until 30 minutes before the close."""
        return add_minutes(30, self.open_time) < self.time < add_minutes(-30, self.close_time)

    def tick_size(self, price: float) -> float:
        idx = bisect.bisect_right(self._prices, price) - 1
        if idx < 0:
            raise ValueError(f"[Market] Invalid price {price:.6f} for tick conversion.")
        return self._price_sizes[idx]

    def to_ticks(self, price: float) -> int:
        if price < self._prices[0]:
            raise ValueError(f"[Market] Invalid price {price:.6f} for tick conversion.")

        ticks = 0
        last = len(self._prices) - 1
        for i, (lower, size) in enumerate(zip(self._prices, self._price_sizes)):
            if not price + self.tick_size(lower) / 2.0 > lower:
                break
            if i == last or price < self._prices[i + 1]:
                upper = price + self.tick_size(price) / 2.0
            else:
                upper = self._prices[i + 1]
            ticks = int(ticks + (upper - lower) / size)
        return ticks

    def to_price(self, ticks: int) -> float:
        if ticks < self._ticks[0]:
            raise ValueError(f"[Market] Invalid number of ticks {ticks} for price conversion.")

        price = 0.0
        last = len(self._ticks) - 1
        for i, (lower, size) in enumerate(zip(self._ticks, self._tick_sizes)):
            if not ticks > lower:
                break
            if i == last or ticks < self._ticks[i + 1]:
                upper = ticks
            else:
                upper = self._ticks[i + 1]
            price += (upper - lower) * size
        return price


_EURONEXT_TICKS = {100.0: 0.05, 50.0: 0.01, 10.0: 0.005, 0.0: 0.001}

_NORDIC_TICKS = {
    100000.0: 100.0,
    80000.0: 80.0,
    50000.0: 50.0,
    40000.0: 40.0,
    20000.0: 20.0,
    10000.0: 10.0,
    5000.0: 5.0,
    1000.0: 1.0,
    500.0: 0.5,
    100.0: 0.1,
    50.0: 0.05,
    10.0: 0.01,
    5.0: 0.005,
    2.0: 0.002,
    1.0: 0.001,
    0.5: 0.0005,
    0.0: 0.0001,
}


class Euronext(Market):
    def __init__(self, symbol: str, currency: Currency, open_time: int, close_time: int) -> None:
        super().__init__(symbol, currency, open_time, close_time, dict(_EURONEXT_TICKS))


class NasdaqNordic(Market):
    def __init__(self, symbol: str, currency: Currency, open_time: int, close_time: int) -> None:
        super().__init__(symbol, currency, open_time, close_time, dict(_NORDIC_TICKS))


class AmsterdamStockExchange(Euronext):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.EUR, add_hours(9, 0), add_hours(17, add_minutes(40, 0)))


class BrusselsStockExchange(Euronext):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.EUR, add_hours(9, 0), add_hours(17, add_minutes(40, 0)))


class CopenhagenStockExchange(NasdaqNordic):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.SEK, add_hours(9, 0), add_hours(17, 0))


class DeutscheBorseXetra(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.EUR,
            add_hours(9, 0),
            add_hours(17, add_minutes(30, 0)),
            {100.0: 0.05, 50.0: 0.01, 10.0: 0.005, 0.0: 0.001},
        )


class HelsinkiStockExchange(NasdaqNordic):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.EUR, add_hours(10, 0), add_hours(16, add_minutes(30, 0)))


class IrishStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.EUR,
            add_hours(8, 0),
            add_hours(16, add_minutes(16, 40)),
            {100.0: 0.05, 50.0: 0.01, 10.0: 0.005, 0.0: 0.001},
        )


class LondonStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.GBp,
            add_hours(8, 0),
            add_hours(16, add_minutes(30, 0)),
            LondonStockExchange.price_tick_sizes(symbol),
        )

    @staticmethod
    def price_tick_sizes(symbol: str) -> dict[float, float]:
        """Tick size table for a London-listed symbol."""
        if symbol in ("AAL", "BATS", "GSK", "VOD", "HSBA"):
            return {
                10000.0: 5.0,
                5000.0: 1.0,
                1000.0: 0.5,
                500.0: 0.1,
                100.0: 0.05,
                50.0: 0.01,
                10.0: 0.005,
                5.0: 0.001,
                1.0: 0.0005,
                0.0: 0.0001,
            }
        if symbol in ("BAES", "UU", "LGEN", "LSE", "NXT"):
            return {
                10000.0: 10.0,
                5000.0: 5.0,
                1000.0: 1.0,
                500.0: 0.5,
                100.0: 0.1,
                50.0: 0.05,
                10.0: 0.01,
                5.0: 0.005,
                1.0: 0.001,
                0.5: 0.0005,
                0.0: 0.0001,
            }
        raise ValueError(f'[LondonStockExchange] Unknown symbol "{symbol}".')


class MadridStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.EUR,
            add_hours(9, 0),
            add_hours(17, add_minutes(30, 0)),
            {100.0: 0.05, 50.0: 0.01, 10.0: 0.005, 0.0: 0.001},
        )


class MilanStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.EUR,
            add_hours(9, 0),
            add_hours(17, add_minutes(25, 0)),
            {50.0: 0.01, 5.0: 0.005, 2.0: 0.0025, 1.0: 0.001, 0.25: 0.0005, 0.0: 0.0001},
        )


class OsloStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.NOK,
            add_hours(9, 0),
            add_hours(16, add_minutes(30, 0)),
            dict(_NORDIC_TICKS),
        )


class ParisStockExchange(Euronext):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.EUR, add_hours(9, 0), add_hours(17, add_minutes(30, 0)))


class StockholmStockExchange(NasdaqNordic):
    def __init__(self, symbol: str) -> None:
        super().__init__(symbol, Currency.SEK, add_hours(9, 0), add_hours(17, add_minutes(30, 0)))


class SwissExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.CHF,
            add_hours(9, 0),
            add_hours(17, add_minutes(30, 0)),
            {
                10000.0: 10.0,
                5000.0: 5.0,
                1000.0: 1.0,
                500.0: 0.5,
                100.0: 0.1,
                50.0: 0.05,
                10.0: 0.01,
                5.0: 0.005,
                1.0: 0.001,
                0.5: 0.0005,
                0.0: 0.0001,
            },
        )


class ViennaStockExchange(Market):
    def __init__(self, symbol: str) -> None:
        super().__init__(
            symbol,
            Currency.EUR,
            add_hours(9, 0),
            add_hours(17, add_minutes(30, 0)),
            {100.0: 0.5, 50.0: 0.01, 10.0: 0.005, 0.0: 0.001},
        )


_VENUES: dict[str, type[Market]] = {
    "AS": AmsterdamStockExchange,
    "BR": BrusselsStockExchange,
    "CO": CopenhagenStockExchange,
    "DE": DeutscheBorseXetra,
    "HE": HelsinkiStockExchange,
    "I": IrishStockExchange,
    "L": LondonStockExchange,
    "MC": MadridStockExchange,
    "MI": MilanStockExchange,
    "OL": OsloStockExchange,
    "PA": ParisStockExchange,
    "S": SwissExchange,
    "VX": SwissExchange,
    "ST": StockholmStockExchange,
    "VI": ViennaStockExchange,
}


def make_market(symbol: str, venue: str) -> Market:
    """Build the market for ``symbol`` traded on the venue code ``venue``."""
    venue = venue.upper()
    try:
        cls = _VENUES[venue]
    except KeyError:
        raise ValueError(f'[Market] Unknown exchange venue "{venue}".') from None
    return cls(symbol)