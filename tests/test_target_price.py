import math

import pytest

from lobrl.book import AskBook, BidBook
from lobrl.measures import microprice, midprice
from lobrl.target_price import VWAP, MicroPrice, MidPrice, TargetPrice


def _books():
    ask = AskBook(5)
    bid = BidBook(5)
    ask.apply_changes([10.0, 10.1, 10.2, 10.3, 10.4], [100] * 5)
    bid.apply_changes([9.9, 9.8, 9.7, 9.6, 9.5], [100] * 5)
    return ask, bid


def test_base_target_price_not_ready():
    tp = TargetPrice()
    ask, bid = _books()
    tp.update(ask, bid)
    assert tp.get() == -1.0
    assert tp.ready() is False


def test_midprice_readiness_and_value():
    ask, bid = _books()
    tp = MidPrice(2)
    tp.update(ask, bid)
    assert tp.ready() is False
    assert tp.get() == pytest.approx(9.95)
    assert tp.get() == pytest.approx(midprice(ask, bid))
    tp.update(ask, bid)
    assert tp.ready() is True


def test_midprice_rolls_over_window():
    ask, bid = _books()
    tp = MidPrice(2)
    tp.update(ask, bid)
    ask.stash_state()
    bid.stash_state()
    ask.apply_changes([10.2, 10.3, 10.4, 10.5, 10.6], [100] * 5)
    bid.apply_changes([10.0, 9.9, 9.8, 9.7, 9.6], [100] * 5)
    tp.update(ask, bid)
    assert tp.get() == pytest.approx(10.025)


def test_midprice_clear_resets_readiness():
    ask, bid = _books()
    tp = MidPrice(1)
    tp.update(ask, bid)
    assert tp.ready() is True
    tp.clear()
    assert tp.ready() is False


def test_microprice_matches_measure():
    ask, bid = _books()
    tp = MicroPrice(1)
    tp.update(ask, bid)
    assert tp.ready() is True
    assert tp.get() == pytest.approx(microprice(ask, bid))
    assert tp.get() == pytest.approx(midprice(ask, bid))


def test_vwap_from_observed_transactions():
    ask, bid = _books()
    ask.apply_transactions({10.0: 100}, 9.95)
    tp = VWAP(1)
    tp.update(ask, bid)
    assert tp.ready() is True
    assert tp.get() == pytest.approx(10.0)


def test_vwap_without_volume_is_nan():
    ask, bid = _books()
    tp = VWAP(2)
    tp.update(ask, bid)
    assert math.isnan(tp.get())
    assert tp.ready() is False