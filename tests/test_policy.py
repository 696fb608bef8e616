import pytest

from lobrl.policy import Boltzmann, EpsilonGreedy, Greedy, Policy, RandomPolicy


def test_policy_is_abstract():
    with pytest.raises(TypeError):
        Policy(3)


def test_needs_an_action():
    with pytest.raises(ValueError):
        RandomPolicy(0)


def test_random_policy_covers_all_actions():
    policy = RandomPolicy(4, seed=1)
    seen = {policy.sample([0.0] * 4) for _ in range(500)}
    assert seen == {0, 1, 2, 3}
    assert policy.descr() == 0.0


def test_greedy_picks_strict_maximum():
    policy = Greedy(4, seed=1)
    assert policy.sample([0.1, 0.5, 2.0, -1.0]) == 2
    assert policy.sample([3.0, 0.5, 2.0, -1.0]) == 0


def test_greedy_breaks_ties_randomly():
    policy = Greedy(3, seed=5)
    seen = {policy.sample([1.0, 1.0, 0.0]) for _ in range(200)}
    assert seen == {0, 1}


def test_epsilon_zero_is_greedy():
    policy = EpsilonGreedy(3, 0.0, 0.0, 10, seed=1)
    assert all(policy.sample([0.0, 5.0, 1.0]) == 1 for _ in range(100))


def test_epsilon_one_explores():
    policy = EpsilonGreedy(3, 1.0, 0.1, 10, seed=2)
    seen = {policy.sample([0.0, 5.0, 1.0]) for _ in range(300)}
    assert seen == {0, 1, 2}


def test_epsilon_decay_schedule():
    policy = EpsilonGreedy(3, 0.5, 0.01, 100, seed=1)
    assert policy.descr() == 0.5
    policy.handle_terminal(100)
    assert policy.descr() == pytest.approx(0.01)
    policy.handle_terminal(0)
    assert policy.descr() == pytest.approx(0.5)
    policy.handle_terminal(50)
    assert 0.01 < policy.descr() < 0.5


def test_boltzmann_low_temperature_picks_max():
    policy = Boltzmann(3, 0.01, 0.001, 10, seed=3)
    assert all(policy.sample([0.0, 1.0, 0.5]) == 1 for _ in range(100))


def test_boltzmann_uniform_values_cover_actions():
    policy = Boltzmann(3, 1.0, 0.1, 10, seed=4)
    seen = {policy.sample([0.0, 0.0, 0.0]) for _ in range(300)}
    assert seen == {0, 1, 2}


def test_boltzmann_decay_schedule():
    policy = Boltzmann(2, 2.0, 0.2, 10, seed=1)
    assert policy.descr() == 2.0
    policy.handle_terminal(10)
    assert policy.descr() == pytest.approx(0.2)