import pytest

from lobrl.comparison import TOLERANCE, approx_equal, price_key, ulb


def test_price_key_scales_by_tolerance():
    assert price_key(2.5) == 25000
    assert price_key(1.0) == TOLERANCE


def test_price_key_ignores_sub_tolerance_noise():
    assert price_key(1.00001) == price_key(1.0)
    assert price_key(0.1 + 0.2) == price_key(0.3)


def test_price_key_preserves_order():
    prices = sorted([10.05, 9.995, 10.0, 100.5, 0.0005])
    keys = [price_key(p) for p in prices]
    assert keys == sorted(keys)
    assert len(set(keys)) == len(keys)


@pytest.mark.parametrize(
    "a, b, expected",
    [(0.1 + 0.2, 0.3, True), (1.0, 1.0001, False), (5.00004, 5.0, True)],
)
def test_approx_equal(a, b, expected):
    assert approx_equal(a, b) is expected
    assert approx_equal(b, a) is expected


@pytest.mark.parametrize(
    "value, lb, ub, expected",
    [(5, 0, 3, 3), (-2, 0, 3, 0), (2, 0, 3, 2), (1.5, 1.0, 2.0, 1.5)],
)
def test_ulb_clamps(value, lb, ub, expected):
    assert ulb(value, lb, ub) == expected