"""
Pacing for sequential batch runs.

The batch driver never runs two operations at once; pacing only decides how
long it waits between them. ``Pacer`` sleeps a fixed delay after every
operation and a longer one after every day, and can additionally draw from a
``TokenBucket`` before each operation to cap the request rate.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field


class TokenBucket:
    """
    Token bucket rate limiter.

    Holds up to ``capacity`` tokens, refilled continuously at ``rate`` tokens
    per second. ``acquire()`` blocks until a token is available.
    """

    def __init__(
        self,
        rate: float,
        capacity: int = 1,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if rate <= 0:
            msg = f"rate must be positive, got {rate}"
            raise ValueError(msg)
        if capacity < 1:
            msg = f"capacity must be at least 1, got {capacity}"
            raise ValueError(msg)
        self.rate = rate
        self.capacity = capacity
        self._clock = clock
        self._sleep = sleep
        self._tokens = float(capacity)
        self._updated = clock()

    def _refill(self) -> None:
        now = self._clock()
        self._tokens = min(self.capacity, self._tokens + (now - self._updated) * self.rate)
        self._updated = now

    @property
    def tokens(self) -> float:
        self._refill()
        return self._tokens

    def acquire(self) -> float:
        """Take one token, sleeping as needed. Returns seconds waited."""
        waited = 0.0
        self._refill()
        while self._tokens < 1:
            delay = (1 - self._tokens) / self.rate
            self._sleep(delay)
            waited += delay
            self._refill()
        self._tokens -= 1
        return waited


@dataclass
class Pacer:
    """Fixed delays between operations and days, plus an optional rate limit."""

    operation_delay: float = 2.0
    day_delay: float = 3.0
    limiter: TokenBucket | None = None
    sleep: Callable[[float], None] = field(default=time.sleep, repr=False)

    def before_operation(self) -> None:
        if self.limiter is not None:
            self.limiter.acquire()

    def after_operation(self) -> None:
        if self.operation_delay > 0:
            self.sleep(self.operation_delay)

    def after_day(self) -> None:
        if self.day_delay > 0:
            self.sleep(self.day_delay)
