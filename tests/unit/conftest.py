"""Shared pytest fixtures for unit tests."""

from __future__ import annotations

from datetime import datetime, timedelta, timezone

import pytest

from cache.in_memory_cache import InMemoryCache
from models.config import InMemoryCacheConfig


class FakeClock:
    """Controllable clock returning POSIX timestamps."""

    def __init__(self, now: float = 1_760_000_000.0) -> None:
        """Start the clock at the given instant."""
        self.now = now

    def __call__(self) -> float:
        """Return the current instant."""
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += seconds


class FakeDateTimeClock:
    """Controllable clock returning aware datetimes."""

    def __init__(self, now: datetime | None = None) -> None:
        """Start the clock at the given instant."""
        self.now = now or datetime(2025, 10, 3, 9, 31, 25, tzinfo=timezone.utc)

    def __call__(self) -> datetime:
        """Return the current instant."""
        return self.now

    def advance(self, seconds: float) -> None:
        """Move the clock forward."""
        self.now += timedelta(seconds=seconds)


@pytest.fixture(name="clock")
def clock_fixture() -> FakeClock:
    """Clock used for cache and credential expiry."""
    return FakeClock()


@pytest.fixture(name="datetime_clock")
def datetime_clock_fixture() -> FakeDateTimeClock:
    """Clock used for session timestamps."""
    return FakeDateTimeClock()


@pytest.fixture(name="memory_cache")
async def memory_cache_fixture(clock: FakeClock) -> InMemoryCache:
    """Connected in-memory cache driven by the fake clock."""
    cache = InMemoryCache(InMemoryCacheConfig(max_entries=100), timer=clock)
    await cache.connect()
    return cache
