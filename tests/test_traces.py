import pytest

from lobrl.traces import Traces


class _FakeState:
    def __init__(self, features):
        self._features = features

    def get_features(self, action=0):
        return self._features[action]


def test_set_and_get():
    traces = Traces(10, 2, 2)
    traces.set(3, 1.0)
    traces.set(7, 0.5)
    assert traces.get(3) == 1.0
    assert traces.get(7) == 0.5
    assert len(traces) == 2
    assert set(traces) == {3, 7}


def test_set_existing_does_not_duplicate():
    traces = Traces(10, 2, 2)
    traces.set(3, 1.0)
    traces.set(3, 0.25)
    assert len(traces) == 1
    assert traces.get(3) == 0.25


def test_clear_removes_trace():
    traces = Traces(10, 2, 2)
    for f in (1, 2, 3):
        traces.set(f, 1.0)
    traces.clear(1)
    assert traces.get(1) == 0.0
    assert set(traces) == {2, 3}
    traces.clear(3)
    assert set(traces) == {2}
    traces.clear(9)
    assert len(traces) == 1


def test_decay_scales_and_drops():
    traces = Traces(10, 2, 2)
    traces.set(1, 1.0)
    traces.set(2, 0.015)
    traces.decay(0.5)
    assert traces.get(1) == 0.5
    assert traces.get(2) == 0.0
    assert set(traces) == {1}


def test_decay_zero_clears_everything():
    traces = Traces(10, 2, 2)
    for f in range(5):
        traces.set(f, 1.0)
    traces.decay(0.0)
    assert len(traces) == 0
    assert all(traces.get(f) == 0.0 for f in range(5))


def test_update_replaces_action_traces():
    traces = Traces(20, 2, 2)
    state = _FakeState({0: [1, 2, 10, 11], 1: [3, 4, 12, 13]})
    traces.set(3, 0.7)
    traces.update(state, 0)
    assert traces.get(1) == 1.0
    assert traces.get(2) == 1.0
    assert traces.get(3) == 0.0
    assert traces.get(10) == 0.0
    assert set(traces) == {1, 2}


def test_increase_tolerance_drops_small_traces():
    traces = Traces(10, 2, 2)
    traces.set(1, 0.0105)
    traces.set(2, 0.5)
    traces.increase_tolerance()
    assert float(traces.tolerance) == pytest.approx(0.011)
    assert set(traces) == {2}
    assert traces.get(1) == 0.0


def test_limit_raises_tolerance_until_room():
    traces = Traces(10, 1, 1)
    traces.max_nonzero = 2
    traces.set(1, 0.0105)
    traces.set(2, 0.9)
    traces.set(3, 0.9)
    assert set(traces) == {2, 3}
    assert float(traces.tolerance) > 0.01