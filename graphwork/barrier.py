"""Reusable thread barrier built on a condition variable."""

from __future__ import annotations

import threading


class CustomBarrier:
    """Blocks callers of :meth:`wait` until ``num_of_workers`` have arrived.

    The barrier resets itself after each release and can be reused.
    """

    def __init__(self, num_of_workers: int) -> None:
        if num_of_workers < 1:
            raise ValueError("a barrier needs at least one worker")
        self.num_of_workers = num_of_workers
        self._waiting = 0
        self._generation = 0
        self._condition = threading.Condition()

    @property
    def generation(self) -> int:
        """Number of times the barrier has released its waiters."""
        with self._condition:
            return self._generation

    def wait(self) -> None:
        """Block until every worker has called ``wait`` for this round."""
        with self._condition:
            generation = self._generation
            self._waiting += 1
            if self._waiting == self.num_of_workers:
                self._waiting = 0
                self._generation += 1
                self._condition.notify_all()
                return
            self._condition.wait_for(lambda: generation != self._generation)