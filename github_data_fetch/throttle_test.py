"""Unit tests for the admission throttle."""

import asyncio

import pytest

from .throttle import AdmissionThrottle


def _admit(throttle: AdmissionThrottle, clock, count: int) -> list[float]:
    """Acquire ``count`` admissions from concurrent tasks, return admission times."""
    times: list[float] = []

    async def one():
        await throttle.acquire()
        times.append(clock())

    async def go():
        await asyncio.gather(*(one() for _ in range(count)))

    asyncio.run(go())
    return times


def describe_AdmissionThrottle():
    @pytest.fixture
    def throttle(clock):
        return AdmissionThrottle(20, 1.0, clock=clock, sleep=clock.sleep)

    def it_admits_a_full_window_without_waiting(throttle, clock):
        times = _admit(throttle, clock, 20)

        assert times == [0.0] * 20
        assert clock.sleeps == []

    def it_never_admits_more_than_rate_in_any_window(throttle, clock):
        times = _admit(throttle, clock, 100)

        assert len(times) == 100
        assert times == sorted(times)
        for i in range(len(times) - 20):
            assert times[i + 20] - times[i] >= 1.0

    def it_spreads_100_admissions_over_at_least_four_windows(throttle, clock):
        times = _admit(throttle, clock, 100)

        assert times[-1] - times[0] >= 4.0
        assert throttle.admissions == 100

    def it_waits_only_for_the_oldest_admission_to_expire(clock):
        throttle = AdmissionThrottle(2, 1.0, clock=clock, sleep=clock.sleep)

        async def go():
            await throttle.acquire()
            clock.now = 0.25
            await throttle.acquire()
            await throttle.acquire()

        asyncio.run(go())

        assert clock.sleeps == [0.75]
        assert clock.now == 1.0

    def it_rejects_invalid_limits():
        with pytest.raises(ValueError):
            AdmissionThrottle(0, 1.0)
        with pytest.raises(ValueError):
            AdmissionThrottle(5, 0)
