import pytest

from lobrl.sampler import RandomSampler, Sampler


def test_sampler_cycles_in_order():
    source = ["a", "b", "c"]
    sampler = Sampler(source)
    drawn = [sampler.sample() for _ in range(7)]
    assert drawn == source + source + source[:1]


def test_sampler_empty_raises():
    with pytest.raises(IndexError):
        Sampler([]).sample()


def test_random_sampler_draws_from_source():
    source = [1, 2, 3, 4]
    sampler = RandomSampler(source, seed=11)
    drawn = [sampler.sample() for _ in range(200)]
    assert set(drawn) <= set(source)
    assert set(drawn) == set(source)


def test_random_sampler_is_reproducible():
    source = list(range(10))
    first = RandomSampler(source, seed=5)
    second = RandomSampler(source, seed=5)
    assert [first.sample() for _ in range(20)] == [second.sample() for _ in range(20)]


def test_random_sampler_empty_raises():
    with pytest.raises(IndexError):
        RandomSampler([], seed=1).sample()