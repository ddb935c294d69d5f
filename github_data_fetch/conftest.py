"""Shared fixtures for unit tests."""

import asyncio

import pytest


class FakeClock:
    """Clock whose sleep advances time instantly instead of waiting."""

    def __init__(self, start: float = 0.0):
        self.now = start
        self.sleeps: list[float] = []

    def __call__(self) -> float:
        return self.now

    async def sleep(self, delay: float) -> None:
        self.sleeps.append(delay)
        self.now += delay
        await asyncio.sleep(0)


@pytest.fixture
def clock():
    return FakeClock()
