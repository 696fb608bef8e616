"""Linear, tile-coded value-function learners with eligibility traces."""

from __future__ import annotations

import logging
import logging.handlers
import random
from abc import ABC, abstractmethod
from typing import Any, Mapping

import numpy as np

from lobrl.policy import Greedy, Policy
from lobrl.traces import Traces

_MODEL_LOG = "model_log"
_LOG_EVERY = 1000


def _section(config: Mapping[str, Any], name: str) -> Mapping[str, Any]:
    section = config.get(name)
    return section if section is not None else {}


def _register_model_log(config: Mapping[str, Any]) -> None:
    logging_cfg = config.get("logging")
    if not logging_cfg or not logging_cfg.get("log_learning", True):
        return
    logger = logging.getLogger(_MODEL_LOG)
    if logger.handlers:
        return
    handler = logging.handlers.RotatingFileHandler(
        str(config["output_dir"]) + "model_log.csv",
        maxBytes=int(logging_cfg["max_size"]),
        backupCount=1,
    )
    handler.setFormatter(logging.Formatter("%(message)s"))
    logger.addHandler(handler)
    logger.setLevel(logging.INFO)


class Agent(ABC):
    """Base learner over tile-coded features grouped into three tilings.

    ``config`` is a nested mapping with a ``learning`` section and optionally
    ``debug`` and ``logging`` sections. States must provide
    ``get_features(action)`` and ``get_potential()``.
    """

    def __init__(self, policy: Policy, config: Mapping[str, Any]) -> None:
        learning = config["learning"]

        self.memory_size = int(learning["memory_size"])
        self.n_tilings = int(learning["n_tilings"])
        self.n_actions = int(learning["n_actions"])

        self.traces = Traces(self.memory_size, self.n_tilings, self.n_actions)

        self.alpha_start = float(learning.get("alpha_start", 0.2))
        self.alpha_floor = float(learning.get("alpha_floor", 0.001))
        self.omega = float(learning.get("omega", 1.0))
        self.alpha = self.alpha_start

        self.gamma = float(learning["gamma"])
        self.lambda_ = float(learning["lambda"])

        seed = _section(config, "debug").get("random_seed")
        self._rng = random.Random(seed)
        self._random_init = bool(learning.get("random_init", False))

        self.theta = self._initial_weights()

        self.group_weights = (1.0 / 3, 1.0 / 3, 1.0 / 3)
        weights = learning.get("group_weights")
        if weights:
            w0, w1 = float(weights[0]), float(weights[1])
            w2 = float(weights[2]) if len(weights) > 2 else 1.0 - (w0 + w1)
            self.group_weights = (w0, w1, w2)

        self._agg_delta = 0.0
        self._update_counter = 0

        self.policy = policy

        _register_model_log(config)

    def _initial_weights(self) -> np.ndarray:
        if self._random_init:
            return np.array(
                [2.0 * self._rng.random() - 1.0 for _ in range(self.memory_size)],
                dtype=np.float64,
            )
        return np.zeros(self.memory_size, dtype=np.float64)

    # Policies

    def action(self, state) -> int:
        qs = [self.get_q(state, a) for a in range(self.n_actions)]
        return self.policy.sample(qs)

    def go_greedy(self) -> None:
        self.policy = Greedy(self.n_actions)

    def set_policy(self, policy: Policy) -> None:
        self.policy = policy

    # Updating weights

    def handle_transition(self, from_state, action: int, reward: float, to_state) -> None:
        self.update_traces(from_state, action)
        delta = self.update_weights(from_state, action, reward, to_state)

        self._agg_delta += abs(delta)
        self._update_counter += 1
        if self._update_counter % _LOG_EVERY == 0:
            logging.getLogger(_MODEL_LOG).info("%s", self._agg_delta / _LOG_EVERY)
            self._agg_delta = 0.0
            self._update_counter = 0

    def handle_terminal(self, episode: int) -> None:
        """Clear the traces and decay the learning rate and the policy."""
        self.traces.decay(0.0)
        self.alpha = max(self.alpha_floor, self.alpha_start * self.omega ** float(episode))
        self.policy.handle_terminal(episode)

    def update_traces(self, from_state, action: int) -> None:
        self.traces.decay(self.gamma * self.lambda_)
        self.traces.update(from_state, action)

    def _update_traces_off_policy(self, from_state, action: int) -> None:
        if action != self.argmax_q(from_state):
            self.traces.decay(0.0)
        else:
            self.traces.decay(self.gamma * self.lambda_)
        self.traces.update(from_state, action)

    @abstractmethod
    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        """Apply one learning step and return the TD error."""

    # Value estimates

    def _weighted_q(self, weights: np.ndarray, state, action: int) -> float:
        features = state.get_features(action)
        n = self.n_tilings
        w0, w1, w2 = self.group_weights
        q = 0.0
        q += w0 * sum(weights[f] for f in features[0:n])
        q += w1 * sum(weights[f] for f in features[n:2 * n])
        # The third group's weight also covers the second group's features.
        q += w2 * sum(weights[f] for f in features[n:3 * n])
        return float(q)

    def _apply_update(self, weights: np.ndarray, update: float) -> None:
        scaled = update / self.n_tilings
        for feature in self.traces:
            weights[feature] += scaled * self.traces.get(feature)

    def _argmax(self, q_of) -> int:
        index = 0
        n_ties = 1
        current = q_of(0)
        for a in range(1, self.n_actions):
            val = q_of(a)
            if val > current:
                current = val
                index = a
            elif val == current:
                n_ties += 1
                if self._rng.randrange(n_ties) == 0:
                    index = a
        return index

    def update_q(self, update: float) -> None:
        self._apply_update(self.theta, update)

    def get_q(self, state, action: int) -> float:
        return self._weighted_q(self.theta, state, action)

    def argmax_q(self, state) -> int:
        return self._argmax(lambda a: self.get_q(state, a))

    def max_q(self, state) -> float:
        return self.get_q(state, self.argmax_q(state))

    # IO

    def write_theta(self, path: str) -> None:
        """Write the weights as raw native-order doubles."""
        with open(path, "wb") as fh:
            fh.write(self.theta.astype(np.float64).tobytes())


class DoubleAgent(Agent):
    """Agent holding a second, independent set of weights."""

    def __init__(self, policy: Policy, config: Mapping[str, Any]) -> None:
        super().__init__(policy, config)
        self.theta_b = self._initial_weights()

    def action(self, state) -> int:
        qs = [
            (self.get_q(state, a) + self.get_q_b(state, a)) / 2.0
            for a in range(self.n_actions)
        ]
        return self.policy.sample(qs)

    def update_q_b(self, update: float) -> None:
        self._apply_update(self.theta_b, update)

    def get_q_b(self, state, action: int) -> float:
        return self._weighted_q(self.theta_b, state, action)

    def argmax_q_b(self, state) -> int:
        return self._argmax(lambda a: self.get_q_b(state, a))


def _shaping(agent: Agent, from_state, to_state) -> float:
    return agent.gamma * to_state.get_potential() - from_state.get_potential()


class QLearn(Agent):
    """Watkins Q(lambda) with potential-based reward shaping."""

    def update_traces(self, from_state, action: int) -> None:
        self._update_traces_off_policy(from_state, action)

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        q = self.get_q(from_state, action)
        delta = reward + _shaping(self, from_state, to_state) + self.gamma * self.max_q(to_state) - q
        self.update_q(self.alpha * delta)
        return delta


class SARSA(Agent):
    """On-policy SARSA(lambda) with potential-based reward shaping."""

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        q1 = self.get_q(from_state, action)
        q2 = self.get_q(to_state, self.action(to_state))
        delta = reward + _shaping(self, from_state, to_state) + self.gamma * q2 - q1
        self.update_q(self.alpha * delta)
        return delta


class DoubleQLearn(DoubleAgent):
    """Double Q-learning: each step updates one of the two weight sets."""

    def update_traces(self, from_state, action: int) -> None:
        self._update_traces_off_policy(from_state, action)

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        shaping = _shaping(self, from_state, to_state)
        if self._rng.random() > 0.5:
            q = self.get_q(from_state, action)
            target = self.get_q_b(to_state, self.argmax_q(to_state))
            delta = reward + shaping + self.gamma * target - q
            self.update_q(self.alpha * delta)
        else:
            q = self.get_q_b(from_state, action)
            target = self.get_q(to_state, self.argmax_q_b(to_state))
            delta = reward + shaping + self.gamma * target - q
            self.update_q_b(self.alpha * delta)
        return delta


class RLearn(Agent):
    """Average-reward R-learning; ``rho`` estimates the reward rate."""

    def __init__(self, policy: Policy, config: Mapping[str, Any]) -> None:
        super().__init__(policy, config)
        self.beta = float(config["learning"]["beta"])
        self.rho = 0.0

    def update_traces(self, from_state, action: int) -> None:
        self._update_traces_off_policy(from_state, action)

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        q = self.get_q(from_state, action)
        mq = self.max_q(to_state)
        delta = reward - self.rho + mq - q
        update = self.alpha * delta
        self.update_q(update)

        nq = q + update
        if nq - self.max_q(from_state) < 1e-7:
            self.rho += self.beta * (reward - self.rho + mq - nq)
        return delta


class OnlineRLearn(Agent):
    """On-policy R-learning using the policy's next action."""

    def __init__(self, policy: Policy, config: Mapping[str, Any]) -> None:
        super().__init__(policy, config)
        self.beta = float(config["learning"]["beta"])
        self.rho = 0.0

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        q = self.get_q(from_state, action)
        gq = self.get_q(to_state, self.action(to_state))
        delta = reward - self.rho + gq - q
        update = self.alpha * delta
        self.update_q(update)

        nq = q + update
        if nq - self.max_q(from_state) < 1e-7:
            self.rho += self.beta * (reward - self.rho + gq - nq)
        return delta


class DoubleRLearn(DoubleAgent):
    """R-learning with two weight sets updated alternately at random."""

    def __init__(self, policy: Policy, config: Mapping[str, Any]) -> None:
        super().__init__(policy, config)
        self.beta = float(config["learning"]["beta"])
        self.rho = 0.0

    def update_traces(self, from_state, action: int) -> None:
        self._update_traces_off_policy(from_state, action)

    def update_weights(self, from_state, action: int, reward: float, to_state) -> float:
        if self._rng.random() > 0.5:
            q = self.get_q(from_state, action)
            mq = self.get_q_b(to_state, self.argmax_q(to_state))
            delta = reward - self.rho + mq - q
            self.update_q(self.alpha * delta)
        else:
            q = self.get_q_b(from_state, action)
            mq = self.get_q(to_state, self.argmax_q_b(to_state))
            delta = reward - self.rho + mq - q
            self.update_q_b(self.alpha * delta)

        mq = max(
            (self.get_q(from_state, a) + self.get_q_b(from_state, a)) / 2.0
            for a in range(self.n_actions)
        )

        nq = q + self.alpha * delta
        if nq - mq < 1e-7:
            self.rho += self.beta * (reward - self.rho + mq - nq)
        return delta