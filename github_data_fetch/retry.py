"""Retry a request across rate-limit rejections."""

import asyncio
import sys
import time
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from typing import TypeVar

from .client import RateLimitError

T = TypeVar("T")


def wait_until_reset(reset_at: float, now: float, attempt: int) -> float:
    """Seconds left until the rate limit resets."""
    return max(0.0, reset_at - now)


@dataclass(frozen=True)
class RetryPolicy:
    """How a rate-limited request is retried.

    The default never gives up: a request keeps waiting out rate limits for
    as long as GitHub keeps sending them. Set ``max_attempts`` to bound that;
    the call then fails with RetryExhaustedError instead of waiting forever.
    """

    max_attempts: int | None = None
    backoff: Callable[[float, float, int], float] = wait_until_reset
    # Reset timestamps have one-second resolution
    padding: float = 1.0

    def __post_init__(self):
        if self.max_attempts is not None and self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")

    def delay(self, error: RateLimitError, now: float, attempt: int) -> float:
        return self.backoff(error.reset_at, now, attempt) + self.padding

    def exhausted(self, attempt: int) -> bool:
        return self.max_attempts is not None and attempt >= self.max_attempts


class RetryExhaustedError(Exception):
    """Still rate limited after the policy's last allowed attempt."""

    def __init__(self, attempts: int, last: RateLimitError):
        super().__init__(f"Still rate limited after {attempts} attempts")
        self.attempts = attempts
        self.last = last


def _log(msg: str):
    sys.stderr.write(f"[retry] {msg}\n")
    sys.stderr.flush()


async def call_with_retry(
    call: Callable[[], Awaitable[T]],
    policy: RetryPolicy | None = None,
    *,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.time,
    label: str | None = None,
) -> T:
    """Await ``call()`` until it stops being rate limited.

    RateLimitError waits until the advertised reset time and re-issues the
    same call. Every other exception propagates on the first occurrence.
    """
    policy = policy or RetryPolicy()
    attempt = 0
    while True:
        attempt += 1
        try:
            return await call()
        except RateLimitError as e:
            if policy.exhausted(attempt):
                raise RetryExhaustedError(attempt, e) from e
            wait = policy.delay(e, clock(), attempt)
            _log(f"{label or 'request'}: rate limited, waiting {wait:.0f}s (attempt {attempt})")
            await sleep(wait)
