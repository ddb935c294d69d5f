"""Admission throttle shared by every concurrent lookup."""

import asyncio
import time
from collections import deque
from collections.abc import Awaitable, Callable


class AdmissionThrottle:
    """Sliding-window limiter: at most ``rate`` admissions per ``period`` seconds.

    One instance is shared by all concurrent requests. Admission decisions
    are serialized through a single lock, so a waiter holds its place in line
    while it sleeps.
    """

    def __init__(
        self,
        rate: int,
        period: float = 1.0,
        *,
        clock: Callable[[], float] = time.monotonic,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    ):
        if rate < 1:
            raise ValueError(f"rate must be at least 1, got {rate}")
        if period <= 0:
            raise ValueError(f"period must be positive, got {period}")
        self.rate = rate
        self.period = period
        self._clock = clock
        self._sleep = sleep
        self._lock = asyncio.Lock()
        self._admitted: deque[float] = deque()
        self.admissions = 0

    async def acquire(self) -> None:
        """Wait until a new request may start, then record its admission."""
        async with self._lock:
            while True:
                now = self._clock()
                while self._admitted and now - self._admitted[0] >= self.period:
                    self._admitted.popleft()
                if len(self._admitted) < self.rate:
                    self._admitted.append(now)
                    self.admissions += 1
                    return
                await self._sleep(self.period - (now - self._admitted[0]))
