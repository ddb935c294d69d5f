"""Fetch one record per key, concurrently, under a shared admission throttle."""

import asyncio
import time
from collections.abc import Awaitable, Callable, Iterable

from .models import DEFAULT_MAX_IN_FLIGHT
from .retry import RetryPolicy, call_with_retry
from .throttle import AdmissionThrottle


class FetchError(Exception):
    """A lookup failed for a reason other than rate limiting."""

    def __init__(self, key):
        super().__init__(f"Failed to fetch {key}")
        self.key = key


async def fetch_all(
    keys: Iterable,
    fetch_one: Callable[..., Awaitable[dict]],
    *,
    throttle: AdmissionThrottle,
    policy: RetryPolicy | None = None,
    max_in_flight: int = DEFAULT_MAX_IN_FLIGHT,
    on_dispatch: Callable | None = None,
    sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
    clock: Callable[[], float] = time.time,
) -> list[dict]:
    """Run ``fetch_one(key)`` for every key and return all results.

    All lookups are scheduled up front. At most ``max_in_flight`` run at
    once, and every outbound attempt, retries included, is admitted by
    ``throttle`` first. Results come back in completion order.

    The batch is all or nothing: the first lookup to fail cancels every
    other pending lookup (including ones waiting on the throttle or a rate
    limit reset) and the failure is raised as FetchError, chained to its
    cause.
    """
    if max_in_flight < 1:
        raise ValueError(f"max_in_flight must be at least 1, got {max_in_flight}")

    keys = list(keys)
    if len(set(keys)) != len(keys):
        raise ValueError("fetch_all keys must be unique")

    semaphore = asyncio.Semaphore(max_in_flight)
    results: list[dict] = []

    async def attempt(key):
        await throttle.acquire()
        return await fetch_one(key)

    async def lookup(key):
        async with semaphore:
            if on_dispatch is not None:
                on_dispatch(key)
            try:
                record = await call_with_retry(
                    lambda: attempt(key), policy, sleep=sleep, clock=clock, label=str(key)
                )
            except Exception as e:
                raise FetchError(key) from e
            results.append(record)

    try:
        async with asyncio.TaskGroup() as tg:
            for key in keys:
                tg.create_task(lookup(key))
    except ExceptionGroup as eg:
        raise eg.exceptions[0]

    return results
