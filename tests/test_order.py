import pytest

from lobrl.order import Order


@pytest.mark.parametrize(
    "price, size, queue",
    [(0.0, 5, 0), (-1.0, 5, 0), (10.0, 0, 0), (10.0, -3, 0), (10.0, 5, -1)],
)
def test_invalid_construction(price, size, queue):
    with pytest.raises(ValueError):
        Order(price, size, queue)


def test_ids_increase():
    a = Order(1.0, 1, 0)
    b = Order(1.0, 1, 0)
    assert b.id == a.id + 1


def test_fresh_order_state():
    order = Order(10.0, 5, 3)
    assert order.remaining() == 5
    assert not order.is_executed()
    assert order.queue_ahead() == 3
    assert order.queue_behind() == 0
    assert order.initial_queue == 3


def test_transaction_only_ahead():
    order = Order(10.0, 5, 3)
    leftover = order.do_transaction(2)
    assert leftover == 0
    assert order.queue_ahead() == 3 - 2
    assert order.remaining() == 5
    assert order.transacted == 2


def test_partial_and_full_execution():
    order = Order(10.0, 5, 3)
    order.do_transaction(4)
    assert order.queue_ahead() == 0
    assert order.total_executed == 4 - 3
    assert order.remaining() + order.total_executed == order.size
    assert not order.is_executed()

    leftover = order.do_transaction(10)
    assert order.is_executed()
    assert order.remaining() == 0
    assert leftover == 10 - (5 - 1)


def test_negative_transaction_rejected():
    order = Order(10.0, 5, 3)
    with pytest.raises(ValueError):
        order.do_transaction(-1)


def test_cancellation_with_empty_tail():
    order = Order(10.0, 5, 10)
    order.do_cancellation(4)
    assert order.queue_ahead() == 10 - 4
    assert order.queue_behind() == 0


def test_over_cancellation_clamps_to_zero():
    order = Order(10.0, 5, 3)
    order.do_cancellation(10)
    assert order.queue_ahead() == 0
    assert order.queue_behind() == 0


def test_cancellation_split_between_queues():
    order = Order(10.0, 5, 10)
    order.add_volume_behind(10)
    before = order.queue_ahead() + order.queue_behind()
    order.do_cancellation(4)
    assert order.queue_ahead() == order.queue_behind()
    assert order.queue_ahead() + order.queue_behind() == before - 4


def test_negative_cancellation_rejected():
    order = Order(10.0, 5, 3)
    with pytest.raises(ValueError):
        order.do_cancellation(-2)


def test_clear_queues():
    order = Order(10.0, 5, 7)
    order.add_volume_behind(4)
    assert order.queue_behind() == 4
    order.clear_queues()
    assert (order.queue_ahead(), order.queue_behind()) == (0, 0)


def test_queue_progress():
    order = Order(10.0, 5, 4)
    assert order.queue_progress() == 1.0
    order.do_transaction(2)
    assert order.queue_progress() == pytest.approx(2 / 4)
    empty = Order(10.0, 5, 0)
    assert empty.queue_progress() == 0.0


def test_str_format():
    order = Order(10.0, 5, 3)
    assert str(order) == "Order(price=10.000000, size=5, rem=5, q_head=3)"