# lobrl

Building blocks for simulating a market maker against limit order book
snapshots and training it with tile-coded reinforcement learning agents.

## Installation

```
pip install lobrl
```

For running the test suite:

```
pip install "lobrl[test]"
pytest
```

## Modules

- `lobrl.book`: `AskBook` and `BidBook` hold the visible price levels of one
  side of the book (best price first), the previous snapshot
  (`stash_state`), and the agent's own resting orders with their queue
  positions. `apply_changes` loads a new snapshot and updates order queues,
  `apply_transactions` fills orders from traded volume, and
  `walk_the_book` executes a market order through the levels. The module
  functions `handle_adverse_selection`, `market_order` and `is_valid_state`
  work on a pair of books. `Side` names the two sides.
- `lobrl.order`: `Order`, a single resting limit order that tracks the
  volume queued ahead of and behind it through transactions and
  cancellations.
- `lobrl.measures`: `spread`, `midprice` and `microprice` of a book pair,
  their `last_*` counterparts from the stashed snapshot and the `*_move`
  differences.
- `lobrl.market`: `Market` and its venue subclasses, with trading hours,
  `Currency` and tiered tick-size tables; `tick_size`, `to_ticks`,
  `to_price` and `is_open`. `make_market(symbol, venue)` builds a market
  from a venue code such as `"L"`, `"PA"` or `"ST"` and raises
  `ValueError` for an unknown code. London markets only know a fixed list
  of symbols.
- `lobrl.latency`: `Latency` (constant), `NormalLatency` and
  `LognormalLatency`, seeded and never below zero.
- `lobrl.target_price`: `MidPrice`, `MicroPrice` and `VWAP` reference prices
  over a lookback window.
- `lobrl.accumulators`: `Accumulator`, `RollingMean`, `EWMA` and
  `RollingMedian` windowed statistics.
- `lobrl.policy`: `RandomPolicy`, `Greedy`, `EpsilonGreedy` and `Boltzmann`
  action selection, with exploration decaying per episode.
- `lobrl.traces`: `Traces`, sparse replacing eligibility traces.
- `lobrl.agent`: `QLearn`, `SARSA`, `DoubleQLearn`, `RLearn`,
  `OnlineRLearn` and `DoubleRLearn` linear value learners.
- `lobrl.csvreader`: `CSVReader`, a line-by-line comma-separated reader with
  `peek` and `skip`; usable as a context manager.
- `lobrl.files`: `get_file_sample` and `get_sample_window` pair market-depth
  (`md_`) files with time-and-sales (`tas_`) files in per-symbol
  directories.
- `lobrl.sampler`: `Sampler` (cycles in order) and `RandomSampler`.
- `lobrl.timeutil`: times of day as milliseconds since midnight,
  `string_to_time` and `time_to_string`.
- `lobrl.comparison`: `approx_equal` and `price_key` compare prices to four
  decimal places; `ulb` clamps a value.

## Order books

```python
from lobrl.book import AskBook, BidBook
from lobrl import measures

ask = AskBook(5)
bid = BidBook(5)

ask.apply_changes([10.1, 10.2, 10.3, 10.4, 10.5], [100, 200, 300, 400, 500], {})
bid.apply_changes([10.0, 9.9, 9.8, 9.7, 9.6], [150, 250, 350, 450, 550], {})

print(measures.spread(ask, bid))     # about 0.1
print(measures.midprice(ask, bid))   # about 10.05

ask.place_order(10.1, 50)
print(ask.queue_ahead(10.1))         # 100: the volume already at 10.1
```

Between snapshots call `stash_state()` on each book so that the `last_*`
measures and queue updates have a previous state to compare against.

## Markets and times

```python
from lobrl.market import make_market
from lobrl.timeutil import string_to_time, time_to_string

market = make_market("VOD", "L")
print(market.tick_size(150.0))       # 0.05

t = string_to_time("09:30:00.000")
print(t)                             # 34200000
print(time_to_string(t))             # "09:30:00.0": milliseconds are not padded
```

## Agents

Agents take a policy and a nested configuration mapping. The `learning`
section needs `memory_size`, `n_tilings`, `n_actions`, `gamma` and
`lambda`; `alpha_start`, `alpha_floor`, `omega`, `random_init` and
`group_weights` are optional, and `RLearn`, `OnlineRLearn` and
`DoubleRLearn` also need `beta`. `debug.random_seed` seeds the agent. When a
`logging` section is present (with `log_learning` not false), the mean
absolute TD error of every 1000 updates is written to
`<output_dir>model_log.csv`, rotated at `logging.max_size` bytes.

A state is any object with `get_features(action)`, returning
`3 * n_tilings` feature indices below `memory_size`, and `get_potential()`.

```python
from lobrl.agent import QLearn
from lobrl.policy import EpsilonGreedy

class FixedState:
    def __init__(self, features, potential=0.0):
        self.features = features
        self.potential = potential

    def get_features(self, action):
        return self.features[action]

    def get_potential(self):
        return self.potential

config = {"learning": {"memory_size": 64, "n_tilings": 2, "n_actions": 2,
                       "gamma": 0.9, "lambda": 0.5}}
agent = QLearn(EpsilonGreedy(2, 0.1, 0.01, 100, seed=1), config)

s1 = FixedState([[0, 1, 2, 3, 4, 5], [6, 7, 8, 9, 10, 11]])
s2 = FixedState([[12, 13, 14, 15, 16, 17], [18, 19, 20, 21, 22, 23]])

a = agent.action(s1)
agent.handle_transition(s1, a, 1.0, s2)
agent.handle_terminal(episode=1)
agent.write_theta("theta.bin")       # raw native-order doubles
```

## What the package does not do

There is no tile coder and no state representation built from the books:
feature indices must be supplied by the caller. There is no trading
environment that streams recorded data into the books, computes rewards or
runs episodes, no experience replay, and no command-line program. The
pieces here are meant to be assembled into such a loop by the user.