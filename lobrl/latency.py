"""Order-routing latency models: constant, normal and lognormal."""

from __future__ import annotations

import random


class Latency:
    """Constant latency equal to ``floor``."""

    def __init__(self, floor: float = 0.0) -> None:
        if floor < 0.0:
            raise ValueError("Latency must be zero or positive.")
        self.floor = floor

    def sample(self) -> float:
        return self.floor


class StochasticLatency(Latency):
    """Latency drawn from a seeded random generator on top of a fixed support."""

    def __init__(self, support: float = 0.0, seed: int | None = None) -> None:
        super().__init__(support)
        self._rng = random.Random(seed)


class NormalLatency(StochasticLatency):
    """Support plus a normally distributed delay, never below zero."""

    def __init__(
        self, mu: float, sigma: float, seed: int | None = None, support: float = 0.0
    ) -> None:
        super().__init__(support, seed)
        self.mu = mu
        self.sigma = sigma

    def sample(self) -> float:
        return max(0.0, super().sample() + self._rng.gauss(self.mu, self.sigma))


class LognormalLatency(StochasticLatency):
    """Support plus a lognormally distributed delay, never below zero."""

    def __init__(
        self, mu: float, beta: float, seed: int | None = None, support: float = 0.0
    ) -> None:
        super().__init__(support, seed)
        self.mu = mu
        self.beta = beta

    def sample(self) -> float:
        return max(0.0, super().sample() + self._rng.lognormvariate(self.mu, self.beta))