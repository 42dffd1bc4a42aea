"""
Test utility functions and helpers.

This module provides helpers shared by cache tests: a controllable clock
and a call-counting loader.
"""

from typing import Any


class FakeClock:
    """
    Manually advanced replacement for time.time().

    Example:
        clock = FakeClock(1000.0)
        cache = CategoryCache(configs, clock=clock)
        clock.advance(601)
    """

    def __init__(self, now: float = 1_700_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> float:
        """Move time forward and return new time"""
        self.now += seconds
        return self.now


class CountingLoader:
    """Loader returning a fixed value and remembering how often it was called"""

    def __init__(self, value: Any):
        self.value = value
        self.callCount = 0

    def __call__(self) -> Any:
        self.callCount += 1
        return self.value

    async def asyncCall(self) -> Any:
        return self()
