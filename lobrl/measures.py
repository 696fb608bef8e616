"""Spread, midprice and microprice of a pair of order books."""

from __future__ import annotations


def spread(ask_book, bid_book) -> float:
    return ask_book.price(0) - bid_book.price(0)


def last_spread(ask_book, bid_book) -> float:
    return ask_book.last_price(0) - bid_book.last_price(0)


def spread_move(ask_book, bid_book) -> float:
    return spread(ask_book, bid_book) - last_spread(ask_book, bid_book)


def midprice(ask_book, bid_book) -> float:
    return (ask_book.price(0) + bid_book.price(0)) / 2.0


def last_midprice(ask_book, bid_book) -> float:
    return (ask_book.last_price(0) + bid_book.last_price(0)) / 2.0


def midprice_move(ask_book, bid_book) -> float:
    return midprice(ask_book, bid_book) - last_midprice(ask_book, bid_book)


def _volume_weighted(ask_price: float, bid_price: float, ask_volume: int, bid_volume: int) -> float:
    return (ask_volume * bid_price + ask_price * bid_volume) / float(ask_volume + bid_volume)


def microprice(ask_book, bid_book) -> float:
    """Best prices weighted by the volume on the opposite side."""
    return _volume_weighted(
        ask_book.price(0),
        bid_book.price(0),
        ask_book.total_volume(),
        bid_book.total_volume(),
    )


def last_microprice(ask_book, bid_book) -> float:
    """Current best prices weighted by the previous total volumes."""
    return _volume_weighted(
        ask_book.price(0),
        bid_book.price(0),
        ask_book.last_total_volume(),
        bid_book.last_total_volume(),
    )


def microprice_move(ask_book, bid_book) -> float:
    return microprice(ask_book, bid_book) - last_microprice(ask_book, bid_book)