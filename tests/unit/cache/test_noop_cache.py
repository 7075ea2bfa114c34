"""Unit tests for NoopCache class."""

import pytest

from cache.noop_cache import NoopCache


@pytest.fixture(name="cache_fixture")
def cache() -> NoopCache:
    """Fixture with constructed no-op cache object."""
    return NoopCache()


async def test_connect(cache_fixture: NoopCache) -> None:
    """Test the behavior of connect method."""
    assert await cache_fixture.connect() is False
    assert cache_fixture.connected() is False
    assert await cache_fixture.ping() is False


async def test_write_is_not_stored(cache_fixture: NoopCache) -> None:
    """Nothing is ever stored."""
    assert await cache_fixture.write("key", b"value", 60) is False
    assert await cache_fixture.read("key") is None


async def test_remove_operations(cache_fixture: NoopCache) -> None:
    """Deletions report nothing deleted."""
    assert await cache_fixture.remove("key") is False
    assert await cache_fixture.remove_matching("*") == 0
    assert await cache_fixture.write_if_absent("key", b"value", 60) is False
