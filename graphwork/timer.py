"""Wall-clock stopwatch with accumulated and weighted totals."""

from __future__ import annotations

import time
from typing import Callable, Optional


def _format_seconds(value: float) -> str:
    return f"{value:.3g}"


class Timer:
    """Stopwatch that accumulates elapsed time across start/stop cycles."""

    def __init__(self, clock: Callable[[], float] = time.time) -> None:
        self._clock = clock
        self.total_time = 0.0
        self.total_weight = 0.0
        self.last_time = 0.0
        self.running = False

    def start(self) -> None:
        """Start (or restart) the current interval."""
        self.running = True
        self.last_time = self._clock()

    def stop(self, weight: Optional[float] = None) -> float:
        """Stop the interval and return its length.

        With a weight, the interval counts ``weight`` times towards the total
        and the weight is added to the accumulated weight.
        """
        self.running = False
        elapsed = self._clock() - self.last_time
        if weight is None:
            self.total_time += elapsed
        else:
            self.total_weight += weight
            self.total_time += weight * elapsed
        return elapsed

    def total(self) -> float:
        """Accumulated time, including the running interval if any."""
        if self.running:
            return self.total_time + self._clock() - self.last_time
        return self.total_time

    def next(self) -> float:
        """Return the time since the last lap and begin a new one."""
        if not self.running:
            return 0.0
        now = self._clock()
        lap = now - self.last_time
        self.total_time += lap
        self.last_time = now
        return lap

    def report_total(self, label: Optional[str] = None) -> float:
        """Print the (weight-averaged) total, reset the totals, return it."""
        if self.total_weight > 0.0:
            value = self.total() / self.total_weight
        else:
            value = self.total()
        prefix = f"{label} : " if label is not None else ""
        print(f"{prefix}{_format_seconds(value)}\n")
        self.total_time = 0.0
        self.total_weight = 0.0
        return value

    def report_next(self, label: Optional[str] = None) -> float:
        """Print and return the current lap time."""
        value = self.next()
        prefix = f"{label} : " if label is not None else ""
        print(f"{prefix}{_format_seconds(value)}\n")
        return value