"""A resting limit order with a queue position model."""

from __future__ import annotations

import itertools
import math


class Order:
    """A limit order tracking the volume queued ahead of and behind it."""

    _ids = itertools.count()

    def __init__(self, price: float, size: int, queue_head: int) -> None:
        if price <= 0:
            raise ValueError("Order price must be non-zero and positive.")
        if size <= 0:
            raise ValueError("Order size must be non-zero and positive.")
        if queue_head < 0:
            raise ValueError("Order queue must be positive.")

        self.id = next(Order._ids)
        self.price = price
        self.size = size
        self.initial_queue = queue_head

        self.transacted = 0
        self.total_executed = 0

        self._q_head = queue_head
        self._q_tail = 0

    def remaining(self) -> int:
        return max(self.size - self.total_executed, 0)

    def is_executed(self) -> bool:
        return self.total_executed >= self.size

    def do_transaction(self, volume: int) -> int:
        """Apply traded volume at this price; return the volume left after this order."""
        if volume < 0:
            raise ValueError("Transaction volume must be positive.")

        self.transacted += volume

        remaining_volume = volume - self._q_head
        if remaining_volume > 0:
            self._q_head = 0
            if self.remaining() <= remaining_volume:
                self.total_executed = self.size
                remaining_volume -= self.size
            else:
                self.total_executed += remaining_volume
                remaining_volume = 0
        else:
            self._q_head -= volume

        return max(remaining_volume, 0)

    def do_cancellation(self, volume: int) -> None:
        """Remove cancelled volume from the queues, spread over ahead and behind."""
        if volume < 0:
            raise ValueError("Cancellation volume must be positive.")

        if self._q_tail == 0:
            self._q_head -= volume
        else:
            total = float(self._q_head + self._q_tail)
            head_share = math.ceil(volume * self._q_head / total)
            tail_share = math.floor(volume * self._q_tail / total)
            self._q_head -= head_share
            self._q_tail -= tail_share

        if self._q_head < 0:
            self._q_tail += self._q_head
            self._q_head = 0

        if self._q_tail < 0:
            self._q_tail = 0

    def add_volume_behind(self, volume: int) -> None:
        self._q_tail += volume

    def clear_queues(self) -> None:
        self._q_head = 0
        self._q_tail = 0

    def queue_ahead(self) -> int:
        return self._q_head

    def queue_behind(self) -> int:
        return self._q_tail

    def queue_progress(self) -> float:
        """Fraction of the initial queue that is still ahead of the order."""
        return self._q_head / max(1.0, float(self.initial_queue))

    def __str__(self) -> str:
        return (
            f"Order(price={self.price:.6f}, size={self.size}, "
            f"rem={self.remaining()}, q_head={self._q_head})"
        )