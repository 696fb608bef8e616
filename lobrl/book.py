"""Limit order books tracking market levels and the agent's own orders."""

from __future__ import annotations

from enum import Enum
from typing import Mapping, Sequence

from sortedcontainers import SortedDict

from lobrl.comparison import approx_equal, price_key
from lobrl.measures import last_midprice, midprice, midprice_move, spread
from lobrl.order import Order


class Side(Enum):
    ASK = "ask"
    BID = "bid"


def _sorted_transactions(transactions: Mapping[float, int] | None) -> list[tuple[float, int]]:
    """Transactions as (price, volume) pairs in ascending tolerant price order."""
    merged: dict[int, tuple[float, int]] = {}
    for price, volume in (transactions or {}).items():
        merged.setdefault(price_key(price), (price, volume))
    return [merged[k] for k in sorted(merged)]


class Book:
    """One side of an order book with the agent's open orders.

    Levels and orders are kept best price first: ascending for asks,
    descending for bids.
    """

    _descending = False

    def __init__(self, depth: int = 5) -> None:
        if depth < 1:
            raise ValueError("Book depth must be at least one.")
        self._depth = depth
        self._open_orders: SortedDict = SortedDict()
        self._prices: list[float] = [0.0] * depth
        self._last_prices: list[float] = [0.0] * depth
        self._levels: SortedDict = SortedDict()
        self._last_levels: SortedDict = SortedDict()
        self._total_volume = 0
        self._last_total_volume = 0
        self._n_transacted = 0
        self._observed_value = 0.0
        self._observed_volume = 0
        self.reset()

    def _key(self, price: float) -> int:
        key = price_key(price)
        return -key if self._descending else key

    def stash_state(self) -> None:
        """Keep the current prices and levels as the previous state."""
        self._prices, self._last_prices = self._last_prices, self._prices
        self._levels, self._last_levels = self._last_levels, self._levels

    def has_stash(self) -> bool:
        return not approx_equal(self._last_prices[0], 0.0)

    def apply_changes(
        self,
        new_prices: Sequence[float],
        new_volumes: Sequence[int],
        transactions: Mapping[float, int] | None = None,
    ) -> None:
        """Load a new snapshot of the levels and update the agent's order queues."""
        if len(new_prices) != self._depth or len(new_volumes) != self._depth:
            raise ValueError(f"Expected {self._depth} prices and volumes.")

        self._levels.clear()
        self._last_total_volume = self._total_volume

        for level, (price, volume) in enumerate(zip(new_prices, new_volumes)):
            if price <= 0.0:
                raise ValueError(f"Prices must be non-zero positive: {price:.6f}")
            if volume <= 0:
                raise ValueError(f"Volumes must be non-zero positive: {volume}")
            self._prices[level] = price
            self._levels[self._key(price)] = (price, volume)
            self._total_volume += volume

        self._prices.sort(key=self._key)

        traded = {price_key(p): v for p, v in _sorted_transactions(transactions)}
        for key, order in list(self._open_orders.items()):
            self._update_order(key, order, traded.get(price_key(order.price), 0))

    def _update_order(self, key: int, order: Order, transaction_volume: int) -> None:
        if order.is_executed():
            del self._open_orders[key]
            return

        last = self.last_volume(order.price)
        if last == 0:
            return

        current = self.volume(order.price)
        if current == 0:
            order.clear_queues()
            return

        diff = last - current
        if diff >= 0:
            cancelled = diff - transaction_volume
            if cancelled > 0:
                order.do_cancellation(cancelled)
        else:
            order.add_volume_behind(diff)

    def reset(self) -> None:
        self._n_transacted = 0
        self._observed_value = 0.0
        self._observed_volume = 0
        self._total_volume = 0
        self._last_total_volume = 0
        self._prices = [0.0] * self._depth
        self._last_prices = [0.0] * self._depth
        self._levels.clear()
        self._last_levels.clear()
        self._open_orders.clear()

    def depth(self) -> int:
        return self._depth

    def _lookup(self, prices: list[float], level: int, what: str) -> float:
        if level < 0:
            level += self._depth
        if not 0 <= level < self._depth or prices[level] == 0.0:
            raise IndexError(f"Attempted to access an undefined {what} at level: {level}")
        return prices[level]

    def price(self, level: int) -> float:
        return self._lookup(self._prices, level, "price")

    def last_price(self, level: int) -> float:
        return self._lookup(self._last_prices, level, "last price")

    def price_level(self, price: float) -> int:
        for level in range(self._depth):
            if approx_equal(self.price(level), price):
                return level
        return -1

    def last_price_level(self, price: float) -> int:
        for level in range(self._depth):
            if approx_equal(self.last_price(level), price):
                return level
        return -1

    def volume(self, price: float) -> int:
        entry = self._levels.get(self._key(price))
        return 0 if entry is None else entry[1]

    def last_volume(self, price: float) -> int:
        entry = self._last_levels.get(self._key(price))
        return 0 if entry is None else entry[1]

    def total_volume(self) -> int:
        return self._total_volume

    def last_total_volume(self) -> int:
        return self._last_total_volume

    def n_transacted(self) -> int:
        return self._n_transacted

    def observed_value(self) -> float:
        return self._observed_value

    def observed_volume(self) -> int:
        return self._observed_volume

    def place_order(self, price: float, size: int) -> bool:
        """Place an order; False if one already rests at that price."""
        key = self._key(price)
        if key in self._open_orders:
            return False
        self._open_orders[key] = Order(price, size, self.volume(price))
        return True

    def place_order_at_level(self, level: int, size: int) -> bool:
        return self.place_order(self.price(level), size)

    def _order(self, price: float) -> Order | None:
        return self._open_orders.get(self._key(price))

    def has_open_order(self, price: float) -> bool:
        order = self._order(price)
        return order is not None and not order.is_executed()

    def cancel_order(self, price: float) -> None:
        self._open_orders.pop(self._key(price), None)

    def _require_orders(self) -> None:
        if not self._open_orders:
            raise IndexError("no open orders")

    def cancel_best(self) -> None:
        self._require_orders()
        self._open_orders.popitem(0)

    def cancel_worst(self) -> None:
        self._require_orders()
        self._open_orders.popitem(-1)

    def cancel_all_orders(self) -> None:
        self._open_orders.clear()

    def order_count(self) -> int:
        return len(self._open_orders)

    def best_open_order_price(self) -> float:
        self._require_orders()
        return self._open_orders.peekitem(0)[1].price

    def worst_open_order_price(self) -> float:
        self._require_orders()
        return self._open_orders.peekitem(-1)[1].price

    def order_size(self, price: float) -> int:
        order = self._order(price)
        return -1 if order is None else order.size

    def order_remaining_volume(self, price: float) -> int:
        order = self._order(price)
        return -1 if order is None else order.remaining()

    def queue_ahead(self, price: float) -> int:
        order = self._order(price)
        return -1 if order is None else order.queue_ahead()

    def queue_behind(self, price: float) -> int:
        order = self._order(price)
        return -1 if order is None else order.queue_behind()

    def queue_progress(self) -> int:
        """Queue progress of the best open order, truncated to an integer; -1 if none."""
        if not self._open_orders:
            return -1
        return int(self._open_orders.peekitem(0)[1].queue_progress())

    def format_orders(self) -> str:
        return "\n".join(str(order) for order in self._open_orders.values())


class AskBook(Book):
    """Sell side: best (lowest) price first."""

    _descending = False

    def __init__(self, depth: int = 5) -> None:
        super().__init__(depth)

    def apply_transactions(
        self, transactions: Mapping[float, int], reference_price: float
    ) -> tuple[int, float, float]:
        """Fill open orders from traded volume; return (position change, proxy, value)."""
        self._observed_value = 0.0
        self._observed_volume = 0

        orders = list(self._open_orders.items())
        idx = 0
        volume, proxy, value = 0, 0.0, 0.0

        for price, vol in _sorted_transactions(transactions):
            if price < reference_price:
                continue

            self._observed_value += price * vol
            self._observed_volume += vol

            while idx < len(orders) and orders[idx][1].price <= price:
                key, order = orders[idx]
                before = order.remaining()
                vol = order.do_transaction(vol)
                executed = before - order.remaining()

                volume -= executed
                proxy += (order.price - reference_price) * executed
                value += order.price * executed

                if order.is_executed():
                    del self._open_orders[key]
                    self._n_transacted += 1
                    idx += 1

                if vol <= 0:
                    break

        return volume, proxy, value

    def walk_the_book(self, reference_price: float, size: int) -> tuple[int, float, float]:
        """Buy ``size`` at market through the levels; (0, 0, 0) if too large."""
        abs_size = abs(size)
        if abs_size > self.total_volume():
            return 0, 0.0, 0.0

        executed, proxy, value = 0, 0.0, 0.0
        for price, level_volume in self._levels.values():
            filled = min(level_volume, abs_size - executed)
            executed += filled
            proxy -= filled * abs(price - reference_price)
            value -= filled * price
            if executed >= abs_size:
                self._n_transacted += 1
                break

        return executed, proxy, value


class BidBook(Book):
    """Buy side: best (highest) price first."""

    _descending = True

    def __init__(self, depth: int = 5) -> None:
        super().__init__(depth)

    def apply_transactions(
        self, transactions: Mapping[float, int], reference_price: float
    ) -> tuple[int, float, float]:
        """Fill open orders from traded volume; return (position change, proxy, value)."""
        self._observed_value = 0.0
        self._observed_volume = 0

        orders = list(reversed(self._open_orders.items()))
        idx = 0
        volume, proxy, value = 0, 0.0, 0.0

        for price, vol in reversed(_sorted_transactions(transactions)):
            if price > reference_price:
                continue

            self._observed_value += price * vol
            self._observed_volume += vol

            while idx < len(orders) and orders[idx][1].price >= price:
                key, order = orders[idx]
                before = order.remaining()
                vol = order.do_transaction(vol)
                executed = before - order.remaining()

                volume += executed
                proxy += (reference_price - order.price) * executed
                value -= order.price * executed

                if order.is_executed():
                    del self._open_orders[key]
                    self._n_transacted += 1
                    idx += 1

                if vol <= 0:
                    break

        return volume, proxy, value

    def walk_the_book(self, reference_price: float, size: int) -> tuple[int, float, float]:
        """Sell ``size`` at market through the levels; (0, 0, 0) if too large."""
        abs_size = abs(size)
        if abs_size > self.total_volume():
            return 0, 0.0, 0.0

        executed, proxy, value = 0, 0.0, 0.0
        for price, level_volume in self._levels.values():
            filled = min(level_volume, abs_size - executed)
            executed += filled
            proxy -= filled * abs(price - reference_price)
            value += filled * price
            if executed >= abs_size:
                self._n_transacted += 1
                break

        return -executed, proxy, value


def handle_adverse_selection(ask_book: AskBook, bid_book: BidBook) -> tuple[int, float, float]:
    """Fill every agent order that the opposite best price has crossed."""
    best_ask = ask_book.price(0)
    best_bid = bid_book.price(0)
    reference = last_midprice(ask_book, bid_book)

    volume, proxy, value = 0, 0.0, 0.0

    for key, order in list(ask_book._open_orders.items()):
        if order.price > best_bid:
            break
        rem = order.remaining()
        volume -= rem
        proxy += rem * (order.price - reference)
        value += rem * order.price
        order.do_transaction(rem)
        del ask_book._open_orders[key]
        ask_book._n_transacted += 1

    for key, order in list(bid_book._open_orders.items()):
        if order.price < best_ask:
            break
        rem = order.remaining()
        volume += rem
        proxy += rem * (reference - order.price)
        value -= rem * order.price
        order.do_transaction(rem)
        del bid_book._open_orders[key]
        bid_book._n_transacted += 1

    return volume, proxy, value


def market_order(size: int, ask_book: AskBook, bid_book: BidBook) -> tuple[int, float, float]:
    """Buy (positive size) or sell (negative size) at market."""
    mid = midprice(ask_book, bid_book)
    if size == 0:
        return 0, 0.0, 0.0
    if size > 0:
        return ask_book.walk_the_book(mid, size)
    return bid_book.walk_the_book(mid, size)


def is_valid_state(ask_book: AskBook, bid_book: BidBook) -> bool:
    """Sanity check of the current snapshot against the previous one."""
    mid = midprice(ask_book, bid_book)
    if ask_book.has_stash() and bid_book.has_stash():
        return (
            spread(ask_book, bid_book) >= 0.0
            and mid > 0.0
            and abs(midprice_move(ask_book, bid_book)) < mid
        )
    return True