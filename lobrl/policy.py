"""Action-selection policies over estimated action values."""

from __future__ import annotations

import math
import random
from abc import ABC, abstractmethod
from typing import Sequence


class Policy(ABC):
    """Chooses an action index from a list of action values."""

    def __init__(self, n_actions: int, seed: int | None = None) -> None:
        if n_actions < 1:
            raise ValueError("A policy needs at least one action.")
        self.n_actions = n_actions
        self._rng = random.Random(seed)

    def _random_action(self) -> int:
        return self._rng.randint(0, self.n_actions - 1)

    @abstractmethod
    def sample(self, qs: Sequence[float]) -> int:
        """Return the chosen action for the action values ``qs``."""

    def descr(self) -> float:
        """The policy's exploration parameter."""
        return 0.0

    def handle_terminal(self, episode: int) -> None:
        """Adjust the policy at the end of an episode."""


class RandomPolicy(Policy):
    """Uniformly random actions."""

    def sample(self, qs: Sequence[float]) -> int:
        return self._random_action()


class Greedy(Policy):
    """Highest-valued action, ties broken at random."""

    def sample(self, qs: Sequence[float]) -> int:
        argmax = 0
        n_ties = 1
        for action, q in enumerate(qs[1:self.n_actions], start=1):
            if q > qs[argmax]:
                argmax = action
            elif q >= qs[argmax]:
                n_ties += 1
                if self._rng.randrange(n_ties) == 0:
                    argmax = action
        return argmax


class EpsilonGreedy(Greedy):
    """Greedy with probability ``1 - eps``; eps decays towards ``floor`` over ``period`` episodes."""

    def __init__(
        self,
        n_actions: int,
        eps: float,
        floor: float,
        period: int,
        seed: int | None = None,
    ) -> None:
        super().__init__(n_actions, seed)
        self.eps = eps
        self.eps_init = eps
        self.eps_floor = floor
        self.eps_period = period

    def sample(self, qs: Sequence[float]) -> int:
        if self._rng.random() < self.eps:
            return self._random_action()
        return super().sample(qs)

    def descr(self) -> float:
        return self.eps

    def handle_terminal(self, episode: int) -> None:
        self.eps = self.eps_init * (self.eps_floor / self.eps_init) ** (episode / self.eps_period)


class Boltzmann(Policy):
    """Softmax over action values with temperature ``tau`` decaying towards ``floor``."""

    def __init__(
        self,
        n_actions: int,
        tau: float,
        floor: float,
        period: int,
        seed: int | None = None,
    ) -> None:
        super().__init__(n_actions, seed)
        self.tau = tau
        self.tau_init = tau
        self.tau_floor = floor
        self.tau_period = period

    def sample(self, qs: Sequence[float]) -> int:
        weights = [math.exp(q / self.tau) for q in qs[:self.n_actions]]
        z = sum(weights)

        r = self._rng.random()
        acc = 0.0
        for action, weight in enumerate(weights):
            acc += weight / z
            if r < acc:
                return action
        return self.n_actions - 1

    def descr(self) -> float:
        return self.tau

    def handle_terminal(self, episode: int) -> None:
        self.tau = self.tau_init * (self.tau_floor / self.tau_init) ** (episode / self.tau_period)